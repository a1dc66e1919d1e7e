"""
PIPELINT STRUCTURAL RULES
-------------------------
Checks that run once parsing completes, over the tree and the raw text
together: required sections, recognized keys and deprecated actions.
"""

from typing import Iterator, List, Tuple

from pipelint.analyzers.base import DocumentRule
from pipelint.analyzers.content import extract_uses
from pipelint.core.catalog import (
    JOBS_KEY,
    TRIGGER_KEY,
    VALID_JOB_KEYS,
    VALID_STEP_KEYS,
    VALID_WORKFLOW_KEYS,
    get_deprecation,
)
from pipelint.models import Diagnostic, ERROR, Mapping, Sequence, WARNING, WorkflowDocument


def iter_jobs(document: WorkflowDocument) -> Iterator[Tuple[str, Mapping, Mapping]]:
    """Yields (job_name, job, jobs) for every job that parsed as a mapping."""
    jobs = document.tree.get(JOBS_KEY)
    if not isinstance(jobs, Mapping):
        return
    for name, job in jobs.items():
        if isinstance(job, Mapping):
            yield name, job, jobs


class MissingTriggerRule(DocumentRule):

    @property
    def rule_id(self) -> str: return "structure/missing-on"

    @property
    def description(self) -> str: return "Workflows must declare an 'on' trigger"

    def analyze(self, document: WorkflowDocument) -> List[Diagnostic]:
        # Keys are never coerced, so 'on' cannot turn into a boolean here
        if TRIGGER_KEY in document.tree:
            return []
        return [Diagnostic(
            severity=ERROR,
            message="Missing required 'on' trigger",
            rule_id=self.rule_id,
        )]


class MissingJobsRule(DocumentRule):

    @property
    def rule_id(self) -> str: return "structure/missing-jobs"

    @property
    def description(self) -> str: return "Workflows must declare a 'jobs' section"

    def analyze(self, document: WorkflowDocument) -> List[Diagnostic]:
        if JOBS_KEY in document.tree:
            return []
        return [Diagnostic(
            severity=ERROR,
            message="Missing required 'jobs' section",
            rule_id=self.rule_id,
        )]


class UnknownTopLevelKeyRule(DocumentRule):

    @property
    def rule_id(self) -> str: return "structure/unknown-top-level-key"

    @property
    def description(self) -> str: return "Top-level keys outside the workflow schema"

    def analyze(self, document: WorkflowDocument) -> List[Diagnostic]:
        results = []
        for key in document.tree.keys():
            if key in VALID_WORKFLOW_KEYS:
                continue
            results.append(Diagnostic(
                severity=WARNING,
                message=f'Unknown top-level key: "{key}"',
                line=document.find_key_line(key),
                rule_id=self.rule_id,
            ))
        return results


class DeprecatedActionRule(DocumentRule):
    """
    Works on the raw lines so every occurrence is reported with its own line.
    The fix swaps only the outdated reference within the line.
    """

    @property
    def rule_id(self) -> str: return "actions/deprecated"

    @property
    def description(self) -> str: return "Outdated major versions of official actions"

    def analyze(self, document: WorkflowDocument) -> List[Diagnostic]:
        results = []
        for idx, line in enumerate(document.lines):
            ref = extract_uses(line)
            if not ref:
                continue
            info = get_deprecation(ref)
            if info is None:
                continue
            results.append(Diagnostic(
                severity=WARNING,
                message=f"Deprecated action: {info.deprecated}. Use {info.replacement} instead.",
                line=idx + 1,
                fix=info.replacement,
                rule_id=self.rule_id,
                fix_target=info.deprecated,
            ))
        return results


class UnknownJobKeyRule(DocumentRule):

    @property
    def rule_id(self) -> str: return "structure/unknown-job-key"

    @property
    def description(self) -> str: return "Job keys outside the job schema"

    def analyze(self, document: WorkflowDocument) -> List[Diagnostic]:
        results = []
        for job_name, job, _ in iter_jobs(document):
            for key in job.keys():
                if key not in VALID_JOB_KEYS:
                    results.append(Diagnostic(
                        severity=WARNING,
                        message=f'Unknown key "{key}" in job "{job_name}"',
                        line=job.key_lines.get(key),
                        rule_id=self.rule_id,
                    ))
        return results


class MissingRunsOnRule(DocumentRule):
    """Reusable workflow calls (`uses:` at job level) need no runner."""

    @property
    def rule_id(self) -> str: return "structure/missing-runs-on"

    @property
    def description(self) -> str: return "Jobs must declare 'runs-on' (or call a reusable workflow)"

    def analyze(self, document: WorkflowDocument) -> List[Diagnostic]:
        results = []
        for job_name, job, jobs in iter_jobs(document):
            if "runs-on" in job or "uses" in job:
                continue
            results.append(Diagnostic(
                severity=ERROR,
                message=f"Job \"{job_name}\" is missing required 'runs-on'",
                line=jobs.key_lines.get(job_name),
                rule_id=self.rule_id,
            ))
        return results


class UnknownStepKeyRule(DocumentRule):

    @property
    def rule_id(self) -> str: return "structure/unknown-step-key"

    @property
    def description(self) -> str: return "Step keys outside the step schema"

    def analyze(self, document: WorkflowDocument) -> List[Diagnostic]:
        results = []
        for job_name, job, _ in iter_jobs(document):
            steps = job.get("steps")
            if not isinstance(steps, Sequence):
                continue
            for number, step in enumerate(steps, start=1):
                if not isinstance(step, Mapping):
                    continue
                for key in step.keys():
                    if key not in VALID_STEP_KEYS:
                        results.append(Diagnostic(
                            severity=WARNING,
                            message=f'Unknown key "{key}" in step {number} of job "{job_name}"',
                            line=step.key_lines.get(key),
                            rule_id=self.rule_id,
                        ))
        return results
