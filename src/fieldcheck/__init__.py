"""fieldcheck - Priority-ordered field validation rules.

fieldcheck evaluates a value against a set of typed rules in priority order
and reports success or the message of the first rule that fails.
"""

__version__ = "0.1.0"
__author__ = "rpapub"
__email__ = "contact@rpapub.dev"
__description__ = "Priority-ordered field validation rules"

from fieldcheck.config import FieldcheckConfig
from fieldcheck.validation import (
    FieldValidator,
    NonEmptyRule,
    Outcome,
    PatternMatchRule,
    RuleValidator,
    submit_validation,
    validate_field,
)

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "__description__",
    "FieldcheckConfig",
    "FieldValidator",
    "NonEmptyRule",
    "Outcome",
    "PatternMatchRule",
    "RuleValidator",
    "submit_validation",
    "validate_field",
]
