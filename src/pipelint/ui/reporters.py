"""
PIPELINT REPORTERS
------------------
Structured output generators for CI/CD integration.
"""
import json
import time
from typing import List, Optional, Tuple

from pipelint import __version__
from pipelint.models import Report


class JSONReporter:
    """Generates a standard JSON report of the execution."""

    def generate(self,
                 reports: List[Report],
                 total_errors: int,
                 total_warnings: int,
                 duration: float,
                 strict: bool = False,
                 failures: Optional[List[Tuple[str, str]]] = None) -> str:
        failures = failures or []
        report = {
            "metadata": {
                "tool": "pipelint",
                "version": __version__,
                "timestamp": time.time(),
                "duration_seconds": duration,
            },
            "summary": {
                "total_files": len(reports),
                "fixed_files": sum(1 for r in reports if r.fixed),
                "total_errors": total_errors,
                "total_warnings": total_warnings,
                "strict": strict,
            },
            "results": [r.to_dict() for r in reports],
        }
        if failures:
            report["failures"] = [{"file": path, "error": error} for path, error in failures]
        return json.dumps(report, indent=2)

    def generate_no_files(self, target: str) -> str:
        return json.dumps({"error": "No workflow files found", "path": target})
