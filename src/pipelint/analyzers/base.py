"""
PIPELINT RULE INTERFACE
-----------------------
Abstract base classes for the Rule Engine. Every check (built-in or custom)
must adhere to one of these interfaces to be executable by the LintPipeline.

Stages run in a fixed order:
    1. 'pre-parse' - LineRule over raw lines, block-scalar aware
    2. 'structure' - DocumentRule over the parsed tree and raw text
    3. 'content'   - LineRule over every raw line, tree independent
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from pipelint.models import Diagnostic, WorkflowDocument

STAGE_PRE_PARSE = "pre-parse"
STAGE_STRUCTURE = "structure"
STAGE_CONTENT = "content"

STAGES = (STAGE_PRE_PARSE, STAGE_STRUCTURE, STAGE_CONTENT)


class BaseRule(ABC):
    """Common identity for all rules."""

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """
        Stable identifier, used by config ignores and JSON output.
        Example: "actions/deprecated"
        """
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary of what the rule checks."""
        pass

    @property
    def stage(self) -> str:
        return STAGE_STRUCTURE


class LineRule(BaseRule):
    """
    A check applied to one raw line at a time.

    The pipeline passes a shared `context` dict holding:
        - 'lines':      all raw lines of the document (for lookahead)
        - 'index':      0-based index of the current line
        - 'strict':     strict mode flag
        - 'normalized': the current line as corrected by earlier fixes in this pass
    """

    # Pre-parse rules skip block scalar bodies unless this is set
    checks_block_body: bool = False

    @property
    def stage(self) -> str:
        return STAGE_CONTENT

    @abstractmethod
    def check(self, line: str, line_no: int, context: Dict[str, Any]) -> List[Diagnostic]:
        """
        Args:
            line: The raw line, untouched.
            line_no: 1-indexed line number.
            context: Shared state for this pass.

        Returns:
            Diagnostics found on this line (possibly empty).
        """
        pass


class DocumentRule(BaseRule):
    """A check over the whole parsed document."""

    @abstractmethod
    def analyze(self, document: WorkflowDocument) -> List[Diagnostic]:
        pass
