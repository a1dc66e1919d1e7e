"""
PIPELINT PRE-PARSE LINE RULES
-----------------------------
Formatting checks that run over raw lines before the tree is built.
Rules chain through context['normalized'] so that several whole-line fixes
on the same line compose (tab expansion, then right-trim).
"""

import re
from typing import Any, Dict, List

from pipelint.analyzers.base import LineRule, STAGE_PRE_PARSE
from pipelint.models import Diagnostic, ERROR, WARNING

DOUBLE_COLON = re.compile(r"^[\w-]+::")


def expand_leading_tabs(line: str) -> str:
    """Replaces each tab in the leading whitespace with two spaces."""
    body = line.lstrip(" \t")
    indent = line[:len(line) - len(body)]
    return indent.replace("\t", "  ") + body


class TabIndentationRule(LineRule):
    checks_block_body = True

    @property
    def rule_id(self) -> str: return "syntax/tab-indentation"

    @property
    def description(self) -> str: return "YAML indentation must use spaces, not tabs"

    @property
    def stage(self) -> str: return STAGE_PRE_PARSE

    def check(self, line: str, line_no: int, context: Dict[str, Any]) -> List[Diagnostic]:
        if not line.startswith("\t"):
            return []
        fixed = expand_leading_tabs(context.get("normalized", line))
        context["normalized"] = fixed
        return [Diagnostic(
            severity=ERROR,
            message="Tab indentation detected. YAML requires spaces.",
            line=line_no,
            fix=fixed,
            rule_id=self.rule_id,
        )]


class TrailingWhitespaceRule(LineRule):
    """Only meaningful in strict mode."""

    @property
    def rule_id(self) -> str: return "style/trailing-whitespace"

    @property
    def description(self) -> str: return "Trailing whitespace (strict mode only)"

    @property
    def stage(self) -> str: return STAGE_PRE_PARSE

    def check(self, line: str, line_no: int, context: Dict[str, Any]) -> List[Diagnostic]:
        if not context.get("strict") or not line.endswith((" ", "\t")):
            return []
        fixed = context.get("normalized", line).rstrip(" \t")
        context["normalized"] = fixed
        return [Diagnostic(
            severity=WARNING,
            message="Trailing whitespace",
            line=line_no,
            fix=fixed,
            rule_id=self.rule_id,
        )]


class DoubleColonRule(LineRule):

    @property
    def rule_id(self) -> str: return "syntax/double-colon"

    @property
    def description(self) -> str: return "Flags 'key::' typos"

    @property
    def stage(self) -> str: return STAGE_PRE_PARSE

    def check(self, line: str, line_no: int, context: Dict[str, Any]) -> List[Diagnostic]:
        trimmed = line.strip()
        # "key::" and nothing else with a colon in it
        if DOUBLE_COLON.match(trimmed) and trimmed.count(":") == 2:
            return [Diagnostic(
                severity=ERROR,
                message="Double colon detected, likely a typo",
                line=line_no,
                rule_id=self.rule_id,
            )]
        return []
