import unittest
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from pipelint.analyzers.line_rules import (
    DoubleColonRule,
    TabIndentationRule,
    TrailingWhitespaceRule,
    expand_leading_tabs,
)
from pipelint.models import ERROR, WARNING


def make_context(line, strict=False):
    return {"lines": [line], "index": 0, "strict": strict, "normalized": line}


class TestTabIndentation(unittest.TestCase):
    def setUp(self):
        self.rule = TabIndentationRule()

    def test_leading_tab_is_error_with_fix(self):
        line = "\t\truns-on: ubuntu-latest"
        found = self.rule.check(line, 4, make_context(line))
        self.assertEqual(len(found), 1)
        diag = found[0]
        self.assertEqual(diag.severity, ERROR)
        self.assertEqual(diag.line, 4)
        self.assertEqual(diag.fix, "    runs-on: ubuntu-latest")
        self.assertEqual(diag.rule_id, "syntax/tab-indentation")

    def test_only_leading_tabs_are_expanded(self):
        self.assertEqual(expand_leading_tabs("\t \tx\ty"), "     x\ty")

    def test_space_indent_is_fine(self):
        self.assertEqual(self.rule.check("  name: x", 1, make_context("  name: x")), [])

    def test_checks_block_bodies(self):
        self.assertTrue(TabIndentationRule.checks_block_body)


class TestTrailingWhitespace(unittest.TestCase):
    def setUp(self):
        self.rule = TrailingWhitespaceRule()

    def test_silent_outside_strict(self):
        self.assertEqual(self.rule.check("name: x  ", 1, make_context("name: x  ")), [])

    def test_strict_warning(self):
        line = "name: x \t"
        found = self.rule.check(line, 2, make_context(line, strict=True))
        self.assertEqual(len(found), 1)
        self.assertEqual(found[0].severity, WARNING)
        self.assertEqual(found[0].message, "Trailing whitespace")
        self.assertEqual(found[0].fix, "name: x")

    def test_fix_composes_with_tab_fix(self):
        line = "\tname: x  "
        context = make_context(line, strict=True)
        tab = TabIndentationRule().check(line, 1, context)
        trailing = self.rule.check(line, 1, context)
        self.assertEqual(tab[0].fix, "  name: x  ")
        self.assertEqual(trailing[0].fix, "  name: x")


class TestDoubleColon(unittest.TestCase):
    def setUp(self):
        self.rule = DoubleColonRule()

    def test_flags_key_double_colon(self):
        found = self.rule.check("  runs-on:: ubuntu-latest", 3, make_context(""))
        self.assertEqual(len(found), 1)
        self.assertEqual(found[0].message, "Double colon detected, likely a typo")
        self.assertIsNone(found[0].fix)

    def test_ignores_other_colons(self):
        for line in ["name: x", "url: http://a::b", "image: a::b:c", "- run: echo"]:
            self.assertEqual(self.rule.check(line, 1, make_context(line)), [], line)


if __name__ == "__main__":
    unittest.main()
