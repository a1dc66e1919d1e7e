#!/usr/bin/env python3
"""
Lint rules and the registry that orders them.

Rules are grouped by stage:
- line_rules: pre-parse formatting checks
- structure: checks over the parsed tree
- content: raw-line pattern heuristics
"""

from .base import BaseRule, LineRule, DocumentRule
from .registry import RuleRegistry, register_rule
