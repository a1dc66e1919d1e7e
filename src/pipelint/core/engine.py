#!/usr/bin/env python3
"""
PIPELINT ENGINE - The High Orchestrator
---------------------------------------
Coordinates the complete lint workflow for workflow files:

    Discovery -> read -> LintPipeline -> (Fixer -> rewrite -> LintPipeline) -> Report

Responsibilities:
- Workspace configuration (.pipelint.yaml ignores, default strict mode)
- File I/O through FileSystemManager
- The fix-and-relint cycle

I/O failures propagate as OSError; content problems are always Diagnostics.

Author: Pipelint Team
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from pipelint.core.config import ConfigManager
from pipelint.core.fixer import Fixer
from pipelint.core.io import FileSystemManager
from pipelint.core.pipeline import LintPipeline
from pipelint.models import Report

logger = logging.getLogger("pipelint.engine")


class PipelintEngine:
    """
    Principal orchestrator: one engine per CLI invocation, documents are
    processed independently and share no mutable state.
    """

    def __init__(self,
                 workspace_path: Union[str, Path] = ".",
                 strict: Optional[bool] = None,
                 config: Optional[ConfigManager] = None):
        """
        Args:
            workspace_path: Root used for config lookup and relative paths.
            strict: Overrides the configured strict mode when not None.
            config: Pre-built configuration (tests); loaded from the workspace otherwise.
        """
        self.workspace = Path(workspace_path).resolve()
        self.fs = FileSystemManager()
        self.config = config or ConfigManager(self.workspace)
        self.strict = self.config.strict if strict is None else strict
        self.pipeline = LintPipeline(strict=self.strict)
        self.fixer = Fixer()
        logger.info(f"Engine initialized (strict={self.strict}, workspace={self.workspace})")

    # =========================================================================
    # DISCOVERY
    # =========================================================================

    def discover(self, target: Union[str, Path]) -> List[Path]:
        """Workflow files under `target`, minus those ignored by config."""
        own_config = self.config.source.resolve() if self.config.source else None
        files = []
        for path in self.fs.discover(Path(target)):
            if own_config is not None and path.resolve() == own_config:
                continue
            if self.config.is_ignored(self.display_path(path)):
                logger.info(f"Ignored by config: {path}")
                continue
            files.append(path)
        return files

    def display_path(self, path: Union[str, Path]) -> str:
        path = Path(path)
        try:
            return str(path.resolve().relative_to(self.workspace))
        except ValueError:
            return str(path)

    # =========================================================================
    # LINTING
    # =========================================================================

    def lint_text(self, text: str, path: str = "<stdin>", fixed: bool = False) -> Report:
        """Lints in-memory text. Diagnostics from ignored rules are dropped."""
        document = self.pipeline.load(text, path)
        diagnostics = [
            d for d in self.pipeline.evaluate(document)
            if not (d.rule_id and self.config.is_ignored(path, rule_id=d.rule_id))
        ]
        return Report.from_diagnostics(path, diagnostics, fixed=fixed)

    def fix_text(self, text: str, path: str = "<stdin>") -> str:
        """Returns `text` with every fixable diagnostic applied (no I/O)."""
        report = self.lint_text(text, path)
        return self.fixer.apply(text, report.diagnostics)

    def lint_file(self, path: Union[str, Path], fix: bool = False) -> Report:
        """
        Lints one file. With `fix`, applies fixes, rewrites the file in place
        and returns a fresh report of the corrected text.

        Raises:
            OSError: the file cannot be read or written.
        """
        path = Path(path)
        display = self.display_path(path)
        text = self.fs.read_text(path)
        report = self.lint_text(text, display)

        if not fix or not report.fixable:
            return report

        fixed_text = self.fixer.apply(text, report.diagnostics)
        if fixed_text == text:
            return report

        self.fs.atomic_write(path, fixed_text)
        logger.info(f"Fixed and saved: {display}")
        return self.lint_text(fixed_text, display, fixed=True)
