"""Built-in field rules and the rule-kind registry.

Each rule checks one aspect of a field value.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, ClassVar

from .framework import RuleConfigurationError, RuleValidator, ValidationRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NonEmptyRule(ValidationRule[str, None]):
    """Validate that a text value is not empty. Whitespace counts as content."""
    error_message: str
    priority: int = 0

    value_type: ClassVar[type] = str

    @property
    def name(self) -> str:
        return "non_empty"

    def is_valid(self, value: str, rule_data: None = None) -> bool:
        return len(value) > 0


@dataclass(frozen=True)
class PatternMatchRule(ValidationRule[str, str | re.Pattern]):
    """Validate that a text value contains a match for a regular expression.

    The pattern is searched anywhere in the value; anchor it with ``^``/``$``
    to require a full match.
    """
    error_message: str
    priority: int = 0

    value_type: ClassVar[type] = str

    @property
    def name(self) -> str:
        return "pattern_match"

    def bind(self, rule_data: str | re.Pattern) -> re.Pattern:
        if isinstance(rule_data, re.Pattern):
            return rule_data
        if not isinstance(rule_data, str):
            raise RuleConfigurationError(
                f"Pattern must be a string, got {type(rule_data).__name__}",
                rule=self.name,
            )
        try:
            return re.compile(rule_data)
        except re.error as e:
            raise RuleConfigurationError(
                f"Invalid regular expression {rule_data!r}: {e}",
                rule=self.name,
            ) from e

    def is_valid(self, value: str, rule_data: str | re.Pattern) -> bool:
        return re.search(rule_data, value) is not None


RULE_TYPES: dict[str, type[ValidationRule]] = {
    "non_empty": NonEmptyRule,
    "pattern_match": PatternMatchRule,
}


def register_rule_type(kind: str, rule_cls: type[ValidationRule]) -> None:
    """Register a rule class under a kind name.

    Raises:
        RuleConfigurationError: If the kind is already registered
    """
    if kind in RULE_TYPES:
        raise RuleConfigurationError(f"Rule kind already registered: {kind}", rule=kind)
    RULE_TYPES[kind] = rule_cls
    logger.debug(f"Registered rule kind {kind} -> {rule_cls.__name__}")


def create_rule_validator(
    kind: str,
    *,
    priority: int = 0,
    error_message: str,
    rule_data: Any = None,
) -> RuleValidator:
    """Build an erased rule from its kind name.

    Raises:
        RuleConfigurationError: If the kind is unknown or the rule data is invalid
    """
    rule_cls = RULE_TYPES.get(kind)
    if rule_cls is None:
        raise RuleConfigurationError(
            f"Unknown rule kind: {kind}. Allowed: {', '.join(sorted(RULE_TYPES))}",
            rule=kind,
        )
    rule = rule_cls(error_message=error_message, priority=priority)
    return RuleValidator(rule, rule_data)


def build_rule_set(config) -> list[RuleValidator]:
    """Create erased rules for every rule in a ``FieldcheckConfig``."""
    validators = [
        create_rule_validator(
            rule_config.kind,
            priority=rule_config.priority,
            error_message=rule_config.error_message,
            rule_data=rule_config.pattern,
        )
        for rule_config in config.rules
    ]
    logger.info(f"Built rule set with {len(validators)} rules")
    return validators
