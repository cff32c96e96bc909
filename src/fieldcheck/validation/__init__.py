"""Rule-based field validation.

Typed rules are wrapped in ``RuleValidator`` so rules over different value
and rule-data types share one rule set; ``validate_field`` evaluates a set in
priority order and stops at the first failure.
"""

from .framework import (
    ErasedRule,
    FieldValidator,
    Outcome,
    OutcomeStatus,
    RuleConfigurationError,
    RuleValidator,
    ValidationRule,
    sort_rules,
    submit_validation,
    validate_field,
)
from .rules import (
    RULE_TYPES,
    NonEmptyRule,
    PatternMatchRule,
    build_rule_set,
    create_rule_validator,
    register_rule_type,
)

__all__ = [
    "ErasedRule",
    "FieldValidator",
    "Outcome",
    "OutcomeStatus",
    "RuleConfigurationError",
    "RuleValidator",
    "ValidationRule",
    "sort_rules",
    "submit_validation",
    "validate_field",
    "RULE_TYPES",
    "NonEmptyRule",
    "PatternMatchRule",
    "build_rule_set",
    "create_rule_validator",
    "register_rule_type"
]
