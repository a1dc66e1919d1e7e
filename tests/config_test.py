import unittest
import sys
import os
import shutil
import tempfile
from pathlib import Path

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from pipelint.core.config import ConfigManager


class TestConfigManager(unittest.TestCase):
    def setUp(self):
        self.work_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.work_dir)

    def write(self, relative, content):
        path = self.work_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def test_defaults(self):
        config = ConfigManager(self.work_dir)
        self.assertFalse(config.strict)
        self.assertIsNone(config.source)
        self.assertFalse(config.is_ignored("ci.yml"))
        self.assertFalse(config.is_ignored("ci.yml", rule_id="actions/unpinned"))

    def test_root_file(self):
        source = self.write(".pipelint.yaml", """rules:
  strict: true
  ignore:
    - "legacy-*.yml"
    - "actions/unpinned"
    - "style/*"
""")
        config = ConfigManager(self.work_dir)
        self.assertEqual(config.source, source)
        self.assertTrue(config.strict)
        self.assertTrue(config.is_ignored("legacy-ci.yml"))
        self.assertTrue(config.is_ignored(".github/workflows/legacy-ci.yml"))
        self.assertFalse(config.is_ignored(".github/workflows/ci.yml"))
        self.assertTrue(config.is_ignored("ci.yml", rule_id="actions/unpinned"))
        self.assertTrue(config.is_ignored("ci.yml", rule_id="style/trailing-whitespace"))
        self.assertFalse(config.is_ignored("ci.yml", rule_id="actions/deprecated"))

    def test_directory_config_wins(self):
        self.write(".pipelint.yaml", "rules:\n  strict: false\n")
        preferred = self.write(".pipelint/config.yaml", "rules:\n  strict: true\n")
        config = ConfigManager(self.work_dir)
        self.assertEqual(config.source, preferred)
        self.assertTrue(config.strict)
        self.assertEqual(config.config["rules"]["ignore"], [])

    def test_invalid_yaml_keeps_defaults(self):
        self.write(".pipelint.yaml", "rules: [strict\n  : {\n")
        config = ConfigManager(self.work_dir)
        self.assertFalse(config.strict)
        self.assertIsNone(config.source)

    def test_defaults_are_not_shared(self):
        self.write(".pipelint.yaml", "rules:\n  ignore: ['x']\n")
        ConfigManager(self.work_dir)
        self.assertEqual(ConfigManager.DEFAULT_CONFIG["rules"]["ignore"], [])


if __name__ == "__main__":
    unittest.main()
