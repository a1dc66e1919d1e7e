"""
PIPELINT CONTENT RULES
----------------------
Pattern checks that scan every raw line independently of the parsed tree,
so they still fire when the structure could only be partially recovered.

These are heuristics: the secret and expression checks can produce false
positives and negatives, and make no attempt to parse the expression
language.
"""

import re
from typing import Any, Dict, List, Optional

from pipelint.analyzers.base import LineRule
from pipelint.models import Diagnostic, ERROR
from pipelint.parsers.structurer import strip_comment, strip_quotes

USES_LINE = re.compile(r"^\s*(?:-\s+)?uses:(.*)$")
RUNS_ON_EMPTY = re.compile(r"^(?:-\s+)?runs-on:$")
SECRET_LITERAL = re.compile(r"(?:password|token|secret)['\"]?\s*[:=]\s*['\"]\S+['\"]", re.IGNORECASE)
EXPRESSION = re.compile(r"\$\{\{([^}]*)\}\}")

EXPRESSION_OPEN = "${{"
EXPRESSION_CLOSE = "}}"
# Interpolations are assumed not to span further than this
UNCLOSED_LOOKAHEAD = 4


def extract_uses(line: str) -> Optional[str]:
    """
    Returns the action reference of a `uses:` line (quotes and comments
    stripped), '' for an empty value, or None if the line is not a `uses:` line.
    """
    match = USES_LINE.match(line)
    if not match:
        return None
    return strip_quotes(strip_comment(match.group(1).strip()))


class HardcodedSecretRule(LineRule):
    """Literal credentials should come from the secrets context."""

    @property
    def rule_id(self) -> str: return "security/hardcoded-secret"

    @property
    def description(self) -> str: return "Quoted password/token/secret literals"

    def check(self, line: str, line_no: int, context: Dict[str, Any]) -> List[Diagnostic]:
        trimmed = line.strip()
        if not SECRET_LITERAL.search(trimmed):
            return []
        if EXPRESSION_OPEN in trimmed or "secrets." in trimmed:
            return []
        return [Diagnostic(
            severity=ERROR,
            message="Possible hardcoded secret. Use ${{ secrets.YOUR_SECRET }} instead.",
            line=line_no,
            rule_id=self.rule_id,
        )]


class UnpinnedActionRule(LineRule):

    @property
    def rule_id(self) -> str: return "actions/unpinned"

    @property
    def description(self) -> str: return "Action references must pin a version (@tag or @sha)"

    def check(self, line: str, line_no: int, context: Dict[str, Any]) -> List[Diagnostic]:
        value = extract_uses(line)
        if not value:
            return []
        # Local actions and docker images are not versioned with '@'
        if value.startswith(".") or value.startswith("docker://") or "@" in value:
            return []
        return [Diagnostic(
            severity=ERROR,
            message=f'Action "{value}" missing version tag. Pin to a specific version (e.g., @v4 or @sha).',
            line=line_no,
            rule_id=self.rule_id,
        )]


class UnbalancedParenthesesRule(LineRule):

    @property
    def rule_id(self) -> str: return "expressions/unbalanced-parentheses"

    @property
    def description(self) -> str: return "Unbalanced parentheses inside ${{ }} expressions"

    def check(self, line: str, line_no: int, context: Dict[str, Any]) -> List[Diagnostic]:
        results = []
        for match in EXPRESSION.finditer(line):
            expr = match.group(1).strip()
            if expr.count("(") != expr.count(")"):
                results.append(Diagnostic(
                    severity=ERROR,
                    message=f"Unbalanced parentheses in expression: ${{{{ {expr} }}}}",
                    line=line_no,
                    rule_id=self.rule_id,
                ))
        return results


class UnclosedExpressionRule(LineRule):

    @property
    def rule_id(self) -> str: return "expressions/unclosed"

    @property
    def description(self) -> str: return "${{ without a matching }} within the next four lines"

    def check(self, line: str, line_no: int, context: Dict[str, Any]) -> List[Diagnostic]:
        if EXPRESSION_OPEN not in line or EXPRESSION_CLOSE in line:
            return []

        lines = context.get("lines", [])
        index = context.get("index", line_no - 1)
        window = lines[index + 1:index + 1 + UNCLOSED_LOOKAHEAD]
        if any(EXPRESSION_CLOSE in nxt for nxt in window):
            return []

        return [Diagnostic(
            severity=ERROR,
            message="Unclosed expression: ${{ without matching }}",
            line=line_no,
            rule_id=self.rule_id,
        )]


class EmptyRunsOnRule(LineRule):

    @property
    def rule_id(self) -> str: return "jobs/empty-runs-on"

    @property
    def description(self) -> str: return "runs-on must name a runner"

    def check(self, line: str, line_no: int, context: Dict[str, Any]) -> List[Diagnostic]:
        trimmed = strip_comment(line.strip())
        if not RUNS_ON_EMPTY.match(trimmed):
            return []

        # "runs-on:" followed by a deeper block (e.g. a label list) has a value
        indent = len(line) - len(line.lstrip())
        if self._next_content_indent(context, line_no) > indent:
            return []

        return [Diagnostic(
            severity=ERROR,
            message="runs-on has an empty value. Specify a runner (e.g., ubuntu-latest).",
            line=line_no,
            rule_id=self.rule_id,
        )]

    def _next_content_indent(self, context: Dict[str, Any], line_no: int) -> int:
        lines = context.get("lines", [])
        for nxt in lines[context.get("index", line_no - 1) + 1:]:
            stripped = nxt.strip()
            if stripped and not stripped.startswith("#"):
                return len(nxt) - len(nxt.lstrip())
        return -1
