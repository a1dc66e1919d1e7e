import unittest
import sys
import os
import shutil
import tempfile
from pathlib import Path

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from pipelint.core.engine import PipelintEngine
from pipelint.core.io import FileSystemManager

VALID = """name: CI
on: push
jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
"""


class EngineTestCase(unittest.TestCase):
    def setUp(self):
        self.work_dir = Path(tempfile.mkdtemp()).resolve()

    def tearDown(self):
        shutil.rmtree(self.work_dir)

    def write(self, relative, content):
        path = self.work_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path


class TestDiscovery(EngineTestCase):
    def test_directory_discovery_order(self):
        self.write(".github/workflows/release.yaml", VALID)
        self.write(".github/workflows/ci.yml", VALID)
        self.write(".github/workflows/notes.md", "x")
        self.write("deploy.yml", VALID)
        self.write("README.md", "x")

        files = FileSystemManager().discover(self.work_dir)
        self.assertEqual([f.name for f in files], ["ci.yml", "release.yaml", "deploy.yml"])

    def test_file_and_missing_targets(self):
        path = self.write("custom.txt", VALID)
        fs = FileSystemManager()
        self.assertEqual(fs.discover(path), [path])
        self.assertEqual(fs.discover(self.work_dir / "nope"), [])
        self.assertEqual(fs.discover(self.work_dir), [])

    def test_workflows_dir_as_target_is_not_duplicated(self):
        self.write(".github/workflows/ci.yml", VALID)
        files = FileSystemManager().discover(self.work_dir / ".github" / "workflows")
        self.assertEqual([f.name for f in files], ["ci.yml"])

    def test_config_ignored_files_are_dropped(self):
        self.write(".pipelint.yaml", "rules:\n  ignore: ['legacy-*']\n")
        self.write(".github/workflows/ci.yml", VALID)
        self.write(".github/workflows/legacy-build.yml", VALID)
        engine = PipelintEngine(self.work_dir)
        self.assertEqual([f.name for f in engine.discover(self.work_dir)], ["ci.yml"])


class TestEngine(EngineTestCase):
    def test_display_path(self):
        path = self.write(".github/workflows/ci.yml", VALID)
        engine = PipelintEngine(self.work_dir)
        self.assertEqual(engine.display_path(path), os.path.join(".github", "workflows", "ci.yml"))

    def test_lint_clean_file(self):
        path = self.write("ci.yml", VALID)
        report = PipelintEngine(self.work_dir).lint_file(path)
        self.assertTrue(report.is_clean)
        self.assertEqual(report.file_path, "ci.yml")

    def test_bom_is_tolerated(self):
        path = self.work_dir / "ci.yml"
        path.write_bytes(b"\xef\xbb\xbf" + VALID.encode("utf-8"))
        report = PipelintEngine(self.work_dir).lint_file(path)
        self.assertTrue(report.is_clean)

    def test_fix_rewrites_file(self):
        path = self.write("ci.yml", VALID.replace("checkout@v4", "checkout@v2"))
        report = PipelintEngine(self.work_dir).lint_file(path, fix=True)
        self.assertTrue(report.fixed)
        self.assertTrue(report.is_clean)
        self.assertEqual(path.read_text(encoding="utf-8"), VALID)
        self.assertFalse((self.work_dir / "ci.yml.pipelint.tmp").exists())

    def test_without_fix_file_is_untouched(self):
        original = VALID.replace("checkout@v4", "checkout@v2")
        path = self.write("ci.yml", original)
        report = PipelintEngine(self.work_dir).lint_file(path)
        self.assertFalse(report.fixed)
        self.assertEqual(report.warnings, 1)
        self.assertEqual(path.read_text(encoding="utf-8"), original)

    def test_fix_without_fixable_issues(self):
        original = VALID + "  extra: 1\n"
        path = self.write("ci.yml", original)
        report = PipelintEngine(self.work_dir).lint_file(path, fix=True)
        self.assertFalse(report.fixed)
        self.assertEqual(path.read_text(encoding="utf-8"), original)

    def test_missing_file_raises(self):
        with self.assertRaises(OSError):
            PipelintEngine(self.work_dir).lint_file(self.work_dir / "missing.yml")

    def test_undecodable_file_raises_oserror(self):
        path = self.work_dir / "bad.yml"
        path.write_bytes(b"on: push\n\xff\xfe bad\n")
        with self.assertRaises(OSError):
            PipelintEngine(self.work_dir).lint_file(path)

    def test_ignored_rules_are_filtered(self):
        self.write(".pipelint.yaml", "rules:\n  ignore: ['actions/unpinned']\n")
        engine = PipelintEngine(self.work_dir)
        report = engine.lint_text(VALID.replace("checkout@v4", "checkout"), "ci.yml")
        self.assertTrue(report.is_clean)

    def test_strict_from_config_and_override(self):
        self.write(".pipelint.yaml", "rules:\n  strict: true\n")
        self.assertTrue(PipelintEngine(self.work_dir).strict)
        self.assertFalse(PipelintEngine(self.work_dir, strict=False).strict)

        text = VALID.replace("name: CI", "name: CI ")
        self.assertEqual(PipelintEngine(self.work_dir).lint_text(text).warnings, 1)
        self.assertEqual(PipelintEngine(self.work_dir, strict=False).lint_text(text).warnings, 0)

    def test_fix_text(self):
        engine = PipelintEngine(self.work_dir, strict=True)
        text = "\ton: push  \njobs:\n"
        self.assertEqual(engine.fix_text(text), "  on: push\njobs:\n")


if __name__ == "__main__":
    unittest.main()
