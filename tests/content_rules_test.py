import unittest
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from pipelint.analyzers.content import (
    EmptyRunsOnRule,
    HardcodedSecretRule,
    UnbalancedParenthesesRule,
    UnclosedExpressionRule,
    UnpinnedActionRule,
    extract_uses,
)


def check(rule, lines, index):
    context = {"lines": lines, "index": index, "strict": False, "normalized": lines[index]}
    return rule.check(lines[index], index + 1, context)


class TestExtractUses(unittest.TestCase):
    def test_variants(self):
        self.assertEqual(extract_uses("uses: actions/checkout@v4"), "actions/checkout@v4")
        self.assertEqual(extract_uses("      - uses: 'actions/cache@v3'  # pinned"), "actions/cache@v3")
        self.assertEqual(extract_uses("    uses:"), "")
        self.assertIsNone(extract_uses("    run: uses: x"))


class TestHardcodedSecret(unittest.TestCase):
    def setUp(self):
        self.rule = HardcodedSecretRule()

    def test_literal_is_flagged(self):
        for line in ['  password: "hunter2"', "  API_TOKEN: 'abc123'", '  my_secret="xyz"']:
            found = check(self.rule, [line], 0)
            self.assertEqual(len(found), 1, line)
            self.assertEqual(found[0].rule_id, "security/hardcoded-secret")

    def test_expressions_are_allowed(self):
        for line in ["  token: ${{ secrets.TOKEN }}", "  password: \"${{ secrets.DB }}\"", "  token: plain"]:
            self.assertEqual(check(self.rule, [line], 0), [], line)


class TestUnpinnedAction(unittest.TestCase):
    def setUp(self):
        self.rule = UnpinnedActionRule()

    def test_missing_version(self):
        found = check(self.rule, ["      - uses: actions/checkout"], 0)
        self.assertEqual(len(found), 1)
        self.assertEqual(
            found[0].message,
            'Action "actions/checkout" missing version tag. Pin to a specific version (e.g., @v4 or @sha).',
        )

    def test_exempt_references(self):
        for line in ["- uses: actions/checkout@v4", "- uses: ./.github/actions/build",
                     "- uses: docker://alpine:3.19", "uses:", "run: echo uses: x"]:
            self.assertEqual(check(self.rule, [line], 0), [], line)


class TestExpressions(unittest.TestCase):
    def test_unbalanced_parentheses(self):
        line = "    if: ${{ contains(github.ref, 'main' }}"
        found = check(UnbalancedParenthesesRule(), [line], 0)
        self.assertEqual(len(found), 1)
        self.assertEqual(found[0].message, "Unbalanced parentheses in expression: ${{ contains(github.ref, 'main' }}")

    def test_balanced_parentheses(self):
        line = "    if: ${{ contains(github.ref, 'main') && (true) }}"
        self.assertEqual(check(UnbalancedParenthesesRule(), [line], 0), [])

    def test_unclosed_expression(self):
        lines = ["run: echo ${{ github.sha", "a", "b", "c", "d", "e }}"]
        found = check(UnclosedExpressionRule(), lines, 0)
        self.assertEqual(len(found), 1)
        self.assertEqual(found[0].message, "Unclosed expression: ${{ without matching }}")

    def test_close_within_lookahead(self):
        lines = ["run: echo ${{ github.sha", "a", "b", "c", "  }}"]
        self.assertEqual(check(UnclosedExpressionRule(), lines, 0), [])


class TestEmptyRunsOn(unittest.TestCase):
    def setUp(self):
        self.rule = EmptyRunsOnRule()

    def test_empty_value(self):
        lines = ["  build:", "    runs-on:", "    steps:"]
        found = check(self.rule, lines, 1)
        self.assertEqual(len(found), 1)
        self.assertEqual(found[0].line, 2)

    def test_empty_value_at_end_of_file(self):
        lines = ["  build:", "    runs-on:  # todo"]
        self.assertEqual(len(check(self.rule, lines, 1)), 1)

    def test_label_list_is_a_value(self):
        lines = ["    runs-on:", "      - self-hosted", "      - linux"]
        self.assertEqual(check(self.rule, lines, 0), [])

    def test_non_empty_value(self):
        self.assertEqual(check(self.rule, ["    runs-on: ubuntu-latest"], 0), [])


if __name__ == "__main__":
    unittest.main()
