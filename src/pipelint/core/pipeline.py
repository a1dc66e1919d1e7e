#!/usr/bin/env python3
"""
PIPELINT LINT PIPELINE - The Rule Engine
----------------------------------------
Runs every registered rule against one workflow document in a fixed order so
the resulting diagnostic sequence is stable and testable:

    Stage 1: Pre-parse line rules (block-scalar aware)
    Stage 2: Structural rules over the parsed tree and raw text
    Stage 3: Raw-content pattern rules over every line

The pipeline is pure: the same text always yields the same diagnostics in
the same order. Strict mode only gates the trailing-whitespace rule here;
promoting warnings to errors is the caller's decision.

Author: Pipelint Team
"""

import re
import logging
from typing import Any, Dict, List, Optional

from pipelint.analyzers.base import (
    BaseRule,
    STAGE_CONTENT,
    STAGE_PRE_PARSE,
    STAGE_STRUCTURE,
)
from pipelint.analyzers.registry import RuleRegistry
from pipelint.models import Diagnostic, ERROR, Report, WorkflowDocument
from pipelint.parsers.structurer import WorkflowStructurer

logger = logging.getLogger("pipelint.pipeline")

# Trimmed content ending in a block scalar indicator: "run: |", "- >-", ...
BLOCK_OPENER = re.compile(r"(?:^|\s)[|>](?:[+-]?[1-9]?|[1-9][+-])$")


class LintPipeline:
    """
    The Master Orchestrator for a single document: parse once, run all
    stages, return diagnostics in detection order.
    """

    def __init__(self, strict: bool = False, rules: Optional[List[BaseRule]] = None):
        self.strict = strict
        self.structurer = WorkflowStructurer()
        self._explicit_rules = rules

    def _rules(self, stage: str) -> List[BaseRule]:
        if self._explicit_rules is not None:
            return [r for r in self._explicit_rules if r.stage == stage]
        return RuleRegistry.get_rules(stage)

    # -----------------------------------------------------------------------
    # PUBLIC API
    # -----------------------------------------------------------------------

    def load(self, text: str, path: str = "<stdin>") -> WorkflowDocument:
        """Builds a document and its (possibly partial) tree."""
        document = WorkflowDocument(path=path, text=text)
        document.tree = self.structurer.parse(text)
        return document

    def evaluate(self, document: WorkflowDocument) -> List[Diagnostic]:
        """Runs all stages against `document` and returns ordered diagnostics."""
        if not document.text.strip():
            return [Diagnostic(
                severity=ERROR,
                message="Workflow file is empty",
                line=1,
                rule_id="document/empty",
            )]

        diagnostics: List[Diagnostic] = []

        found = self._run_pre_parse(document)
        logger.debug(f"Stage 1: Pre-parse line rules produced {len(found)} finding(s)")
        diagnostics.extend(found)

        found = self._run_structure(document)
        logger.debug(f"Stage 2: Structural rules produced {len(found)} finding(s)")
        diagnostics.extend(found)

        found = self._run_content(document)
        logger.debug(f"Stage 3: Content rules produced {len(found)} finding(s)")
        diagnostics.extend(found)

        return diagnostics

    def run(self, text: str, path: str = "<stdin>", fixed: bool = False) -> Report:
        """Parses, evaluates and tallies one document into a Report."""
        document = self.load(text, path)
        return Report.from_diagnostics(path, self.evaluate(document), fixed=fixed)

    # -----------------------------------------------------------------------
    # STAGES
    # -----------------------------------------------------------------------

    def _run_pre_parse(self, document: WorkflowDocument) -> List[Diagnostic]:
        rules = self._rules(STAGE_PRE_PARSE)
        always = [r for r in rules if getattr(r, "checks_block_body", False)]
        gated = [r for r in rules if not getattr(r, "checks_block_body", False)]

        results: List[Diagnostic] = []
        context: Dict[str, Any] = {
            "lines": document.lines,
            "strict": self.strict,
            "in_block": False,
        }

        for idx, line in enumerate(document.lines):
            trimmed = line.strip()
            if not trimmed or trimmed.startswith("#"):
                continue

            context["index"] = idx
            context["normalized"] = line
            line_no = idx + 1

            for rule in always:
                results.extend(rule.check(line, line_no, context))

            if self._track_block_scalar(line, trimmed, context):
                continue

            for rule in gated:
                results.extend(rule.check(line, line_no, context))

        return results

    def _track_block_scalar(self, line: str, trimmed: str, context: Dict[str, Any]) -> bool:
        """
        Updates the block scalar flag. Returns True when the line belongs to a
        block scalar (its indicator line or its body) and must not be checked.

        Only a zero-indent content line ends a block, so the flag never
        depends on how wide the indicator line's indentation is.
        """
        if context["in_block"]:
            if line[:1] in (" ", "\t"):
                return True
            context["in_block"] = False

        if BLOCK_OPENER.search(trimmed):
            context["in_block"] = True
            return True

        return False

    def _run_structure(self, document: WorkflowDocument) -> List[Diagnostic]:
        results: List[Diagnostic] = []
        for rule in self._rules(STAGE_STRUCTURE):
            results.extend(rule.analyze(document))
        return results

    def _run_content(self, document: WorkflowDocument) -> List[Diagnostic]:
        rules = self._rules(STAGE_CONTENT)
        results: List[Diagnostic] = []
        context: Dict[str, Any] = {"lines": document.lines, "strict": self.strict}

        for idx, line in enumerate(document.lines):
            context["index"] = idx
            context["normalized"] = line
            for rule in rules:
                results.extend(rule.check(line, idx + 1, context))

        return results
