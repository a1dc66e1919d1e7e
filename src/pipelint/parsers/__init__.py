"""Structural parsing of workflow text."""

from .structurer import WorkflowStructurer
