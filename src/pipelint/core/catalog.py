#!/usr/bin/env python3
"""
PIPELINT CATALOG
----------------
Static knowledge about GitHub Actions workflows:

- Recognized keys at the workflow, job and step level
- Deprecated action references and their recommended replacements

All tables are immutable and loaded once at import time.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional


# -------------------------------------------------------------------
# Recognized keys
# -------------------------------------------------------------------

VALID_WORKFLOW_KEYS: FrozenSet[str] = frozenset({
    "name", "on", "env", "defaults", "concurrency", "jobs",
    "permissions", "run-name",
})

VALID_JOB_KEYS: FrozenSet[str] = frozenset({
    "name", "needs", "runs-on", "permissions", "environment",
    "concurrency", "outputs", "env", "defaults", "if",
    "steps", "timeout-minutes", "strategy", "continue-on-error",
    "container", "services", "uses", "with", "secrets",
})

VALID_STEP_KEYS: FrozenSet[str] = frozenset({
    "name", "id", "if", "uses", "run", "with", "env",
    "continue-on-error", "timeout-minutes", "shell", "working-directory",
})

# The key that declares what starts a workflow
TRIGGER_KEY = "on"
JOBS_KEY = "jobs"


# -------------------------------------------------------------------
# Deprecated actions
# -------------------------------------------------------------------

@dataclass(frozen=True)
class DeprecationInfo:
    deprecated: str
    replacement: str


def _build_deprecations() -> Dict[str, DeprecationInfo]:
    # action -> (outdated major versions, current major version)
    majors = {
        "actions/checkout": (("v1", "v2", "v3"), "v4"),
        "actions/setup-node": (("v1", "v2", "v3"), "v4"),
        "actions/setup-python": (("v1", "v2", "v3", "v4"), "v5"),
        "actions/setup-java": (("v1", "v2", "v3"), "v4"),
        "actions/upload-artifact": (("v1", "v2", "v3"), "v4"),
        "actions/download-artifact": (("v1", "v2", "v3"), "v4"),
        "actions/cache": (("v1", "v2", "v3"), "v4"),
    }
    table = {}
    for action, (outdated, current) in majors.items():
        for version in outdated:
            ref = f"{action}@{version}"
            table[ref] = DeprecationInfo(ref, f"{action}@{current}")
    return table


DEPRECATED_ACTIONS: Mapping[str, DeprecationInfo] = MappingProxyType(_build_deprecations())


def get_deprecation(action_ref: str) -> Optional[DeprecationInfo]:
    """Looks up an exact `owner/repo@ref` reference."""
    return DEPRECATED_ACTIONS.get(action_ref)
