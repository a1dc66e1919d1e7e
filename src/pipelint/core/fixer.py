#!/usr/bin/env python3
"""
PIPELINT FIXER
--------------
Applies the fix payloads carried by diagnostics to a document's raw text.

Fixes are line replacements only: no line is ever inserted or deleted.
They are applied in descending line order; within one line, detection order
is kept, so the last whole-line fix wins while token substitutions
(deprecated actions) apply to whatever the line has become.

The Fixer never creates or edits diagnostics. Callers re-run the
LintPipeline on the corrected text to get an accurate report.
"""

import logging
from typing import Iterable, List

from pipelint.models import Diagnostic

logger = logging.getLogger("pipelint.fixer")


class Fixer:

    @staticmethod
    def plan(diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
        """The FixPlan: fixable diagnostics, highest line first (stable)."""
        fixable = [d for d in diagnostics if d.is_fixable]
        return sorted(fixable, key=lambda d: d.line, reverse=True)

    def apply(self, text: str, diagnostics: Iterable[Diagnostic]) -> str:
        lines = text.split("\n")
        applied = 0

        for diag in self.plan(diagnostics):
            idx = diag.line - 1
            if idx < 0 or idx >= len(lines):
                logger.debug(f"Fix skipped: line {diag.line} out of range ({diag.rule_id})")
                continue

            if diag.fix_target:
                if diag.fix_target not in lines[idx]:
                    logger.debug(f"Fix skipped: '{diag.fix_target}' not on line {diag.line}")
                    continue
                lines[idx] = lines[idx].replace(diag.fix_target, diag.fix, 1)
            else:
                lines[idx] = diag.fix
            applied += 1

        logger.debug(f"Applied {applied} fix(es)")
        return "\n".join(lines)
