"""
PIPELINT RULE REGISTRY
----------------------
Implements the Registry pattern for managing lint rules. It provides a
central point to register, discover and retrieve all active checks.

Registration order is execution order within a stage, which keeps the
diagnostic sequence deterministic.
"""

import logging
from typing import Dict, List, Optional, Type

from pipelint.analyzers.base import BaseRule

logger = logging.getLogger("pipelint.analyzers.registry")


class RuleRegistry:
    """
    Class-level registry of rule classes and their lazily created instances.
    """

    _rules: Dict[str, Type[BaseRule]] = {}
    _instances: Dict[str, BaseRule] = {}

    @classmethod
    def register(cls, rule_cls: Type[BaseRule]):
        """
        Decorator to register a new rule class.

        Usage:
            @RuleRegistry.register
            class MyRule(LineRule):
                ...
        """
        cls._rules[rule_cls.__name__] = rule_cls
        logger.debug(f"Registered rule: {rule_cls.__name__}")
        return rule_cls

    @classmethod
    def register_defaults(cls):
        """Registers the built-in rules in their canonical order."""
        from pipelint.analyzers.line_rules import (
            TabIndentationRule,
            TrailingWhitespaceRule,
            DoubleColonRule,
        )
        from pipelint.analyzers.structure import (
            MissingTriggerRule,
            MissingJobsRule,
            UnknownTopLevelKeyRule,
            DeprecatedActionRule,
            UnknownJobKeyRule,
            MissingRunsOnRule,
            UnknownStepKeyRule,
        )
        from pipelint.analyzers.content import (
            HardcodedSecretRule,
            UnpinnedActionRule,
            UnbalancedParenthesesRule,
            UnclosedExpressionRule,
            EmptyRunsOnRule,
        )

        for rule_cls in (
            TabIndentationRule,
            TrailingWhitespaceRule,
            DoubleColonRule,
            MissingTriggerRule,
            MissingJobsRule,
            UnknownTopLevelKeyRule,
            DeprecatedActionRule,
            UnknownJobKeyRule,
            MissingRunsOnRule,
            UnknownStepKeyRule,
            HardcodedSecretRule,
            UnpinnedActionRule,
            UnbalancedParenthesesRule,
            UnclosedExpressionRule,
            EmptyRunsOnRule,
        ):
            cls.register(rule_cls)

        logger.debug(f"Registered {len(cls._rules)} default rules")

    @classmethod
    def get_rules(cls, stage: Optional[str] = None) -> List[BaseRule]:
        """
        Returns instantiated rules, optionally filtered by stage.
        Auto-discovers the default rules if the registry is empty.
        """
        if not cls._rules:
            cls.register_defaults()

        active = []
        for class_name, rule_cls in cls._rules.items():
            if class_name not in cls._instances:
                cls._instances[class_name] = rule_cls()
            rule = cls._instances[class_name]
            if stage is None or rule.stage == stage:
                active.append(rule)
        return active

    @classmethod
    def clear(cls):
        """Resets the registry (useful for tests)."""
        cls._rules = {}
        cls._instances = {}


register_rule = RuleRegistry.register
