#!/usr/bin/env python3
"""
PIPELINT CORE MODELS
--------------------
Defines the fundamental data structures shared by the Structurer, the Rule
Engine and the Fixer.

- Node variants (Scalar / Mapping / Sequence) form the parsed workflow tree.
- Diagnostic is a single immutable finding.
- Report aggregates the findings of one lint pass over one document.

Author: Pipelint Team
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

# Severities
ERROR = "error"
WARNING = "warning"


@dataclass(slots=True)
class Scalar:
    """A leaf value: string, integer or boolean."""
    value: Union[str, int, bool]
    line: Optional[int] = None


@dataclass(slots=True)
class Sequence:
    """An ordered list of child nodes."""
    items: List["Node"] = field(default_factory=list)
    line: Optional[int] = None

    def append(self, node: "Node") -> None:
        self.items.append(node)

    def __iter__(self) -> Iterator["Node"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(slots=True)
class Mapping:
    """
    Ordered string keys mapped to child nodes.

    Keys are unique: assigning an existing key replaces its value in place and
    keeps the original position. `key_lines` remembers where each key was seen.
    """
    entries: Dict[str, "Node"] = field(default_factory=dict)
    key_lines: Dict[str, int] = field(default_factory=dict)
    line: Optional[int] = None

    def set(self, key: str, node: "Node", line: Optional[int] = None) -> None:
        self.entries[key] = node
        if line is not None:
            self.key_lines[key] = line

    def get(self, key: str, default: Optional["Node"] = None) -> Optional["Node"]:
        return self.entries.get(key, default)

    def keys(self) -> List[str]:
        return list(self.entries.keys())

    def items(self) -> List[Tuple[str, "Node"]]:
        return list(self.entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def to_python(self) -> Dict[str, Any]:
        return to_python(self)


Node = Union[Scalar, Mapping, Sequence]


def to_python(node: Node) -> Any:
    """Converts a node tree into plain dicts, lists and scalars."""
    if isinstance(node, Mapping):
        return {k: to_python(v) for k, v in node.entries.items()}
    if isinstance(node, Sequence):
        return [to_python(item) for item in node.items]
    return node.value


@dataclass
class WorkflowDocument:
    """One workflow file: its raw text, its lines and its (possibly partial) tree."""
    path: str
    text: str
    tree: Mapping = field(default_factory=Mapping)
    lines: List[str] = field(init=False)

    def __post_init__(self):
        self.lines = self.text.split("\n")

    def find_key_line(self, key: str) -> Optional[int]:
        """Returns the first 1-indexed line whose trimmed content starts with `key:`."""
        prefixes = (f"{key}:", f'"{key}":', f"'{key}':")
        for idx, line in enumerate(self.lines):
            if line.strip().startswith(prefixes):
                return idx + 1
        return None


@dataclass(frozen=True)
class Diagnostic:
    """
    A single finding produced by a rule.

    `fix` is the replacement text for `line`. When `fix_target` is set the fix
    only substitutes that token within the line; otherwise the whole line is
    replaced.
    """
    severity: str
    message: str
    line: Optional[int] = None
    fix: Optional[str] = None
    rule_id: Optional[str] = None
    fix_target: Optional[str] = None

    @property
    def is_fixable(self) -> bool:
        return self.line is not None and self.fix is not None

    def to_dict(self) -> dict:
        """Serialize for JSON export."""
        return {
            "level": self.severity,
            "message": self.message,
            "line": self.line,
            "fix": self.fix,
            "rule_id": self.rule_id,
        }


@dataclass
class Report:
    """Aggregated result of one lint pass over one document."""
    file_path: str
    errors: int = 0
    warnings: int = 0
    diagnostics: List[Diagnostic] = field(default_factory=list)
    fixed: bool = False

    @classmethod
    def from_diagnostics(cls, file_path: str, diagnostics: List[Diagnostic], fixed: bool = False) -> "Report":
        errors = sum(1 for d in diagnostics if d.severity == ERROR)
        warnings = sum(1 for d in diagnostics if d.severity == WARNING)
        return cls(
            file_path=file_path,
            errors=errors,
            warnings=warnings,
            diagnostics=list(diagnostics),
            fixed=fixed,
        )

    @property
    def fixable(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.is_fixable]

    @property
    def is_clean(self) -> bool:
        return self.errors == 0 and self.warnings == 0

    def to_dict(self) -> dict:
        """Serializes the report for CLI reporting and JSON exports."""
        return {
            "file": self.file_path,
            "errors": self.errors,
            "warnings": self.warnings,
            "fixed": self.fixed,
            "messages": [d.to_dict() for d in self.diagnostics],
        }
