"""Core validation framework for fieldcheck.

Rules are typed predicates; ``RuleValidator`` erases their types so a
heterogeneous rule set can be evaluated against an untyped value. The
pipeline sorts by priority and stops at the first failure.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")
R = TypeVar("R")


class RuleConfigurationError(ValueError):
    """Raised when a rule cannot be built from its configuration."""

    def __init__(self, message: str, rule: str = ""):
        self.rule = rule
        super().__init__(message)


class OutcomeStatus(str, Enum):
    """Outcome variants."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Outcome:
    """Result of validating a value: success, or failure with an optional message."""
    status: OutcomeStatus
    message: str | None = None

    @classmethod
    def success(cls) -> "Outcome":
        return cls(OutcomeStatus.SUCCESS)

    @classmethod
    def failure(cls, message: str | None = None) -> "Outcome":
        return cls(OutcomeStatus.FAILURE, message)

    @property
    def is_success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = success, 1 = failure."""
        return 0 if self.is_success else 1

    def describe(self, valid_text: str = "valid", default_message: str = "Unknown error") -> str:
        """Render the outcome for display.

        Args:
            valid_text: Text shown for a success
            default_message: Text shown for a failure that carries no message
        """
        if self.is_success:
            return valid_text
        return self.message if self.message is not None else default_message

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "status": self.status.value,
            "exit_code": self.exit_code,
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"[{self.status.value.upper()}] {self.describe()}"


class ValidationRule(ABC, Generic[V, R]):
    """Base class for typed validation rules.

    Subclasses declare the Python type of the values they accept in
    ``value_type`` and provide ``priority`` and ``error_message`` fields.
    ``R`` is the type of the rule data bound to the rule (``None`` when the
    rule takes no parameter).
    """

    value_type: ClassVar[type] = object

    priority: int
    error_message: str

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    def bind(self, rule_data: R) -> R:
        """Prepare rule data once, before any value is evaluated.

        Raises:
            RuleConfigurationError: If the rule data is unusable
        """
        return rule_data

    @abstractmethod
    def is_valid(self, value: V, rule_data: R) -> bool:
        """Check ``value`` against this rule.

        Args:
            value: Value of type ``value_type``
            rule_data: Bound rule data
        """
        pass


class ErasedRule(Protocol):
    """Uniform interface over rules of any value and rule-data type."""

    @property
    def priority(self) -> int: ...

    @property
    def error_message(self) -> str: ...

    def validate(self, value: Any) -> Outcome: ...


class RuleValidator(Generic[V, R]):
    """Pairs a rule with its bound rule data behind the ``ErasedRule`` interface."""

    def __init__(self, rule: ValidationRule[V, R], rule_data: R = None):
        self._rule = rule
        self._rule_data = rule.bind(rule_data)
        self._priority = rule.priority
        self._error_message = rule.error_message

    @property
    def name(self) -> str:
        return self._rule.name

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def rule(self) -> ValidationRule[V, R]:
        return self._rule

    @property
    def rule_data(self) -> R:
        return self._rule_data

    def validate(self, value: Any) -> Outcome:
        if not isinstance(value, self._rule.value_type):
            logger.debug(
                f"Rule {self.name}: expected {self._rule.value_type.__name__}, "
                f"got {type(value).__name__}"
            )
            return Outcome.failure(self._error_message)

        if self._rule.is_valid(value, self._rule_data):
            return Outcome.success()
        return Outcome.failure(self._error_message)

    def __repr__(self) -> str:
        return f"RuleValidator({self._rule!r}, rule_data={self._rule_data!r})"


def sort_rules(rules: Iterable[ErasedRule]) -> list[ErasedRule]:
    """Order rules for evaluation: ascending priority, ties keep input order."""
    return sorted(rules, key=lambda rule: rule.priority)


def validate_field(value: Any, rules: Iterable[ErasedRule]) -> Outcome:
    """Validate ``value`` against ``rules`` in priority order.

    Evaluation stops at the first failing rule; its outcome is returned and
    no later rule is evaluated. An empty rule set yields success.

    Args:
        value: Value to validate, of any type
        rules: Erased rules; input order only breaks priority ties

    Returns:
        Outcome: The first failure, or a single success
    """
    sorted_rules = sort_rules(rules)
    logger.debug(f"Validating value against {len(sorted_rules)} rules")

    for rule in sorted_rules:
        outcome = rule.validate(value)
        if not outcome.is_success:
            logger.debug(f"Rule with priority {rule.priority} failed: {outcome.message}")
            return outcome

    return Outcome.success()


def submit_validation(
    value: Any,
    rules: Sequence[ErasedRule],
    completion: Callable[[Outcome], None] | None = None,
    executor: Executor | None = None,
) -> "Future[Outcome]":
    """Run ``validate_field`` and deliver its outcome asynchronously.

    The completion callback, if given, is called exactly once with the final
    outcome, on the executor's worker. Without an executor the validation runs
    inline and the returned future is already done.

    Args:
        value: Value to validate
        rules: Erased rules
        completion: Optional callback receiving the outcome
        executor: Executor to run on; a single-worker executor delivers
            outcomes in submission order

    Returns:
        Future resolving to the outcome
    """
    snapshot = tuple(rules)

    def run() -> Outcome:
        outcome = validate_field(value, snapshot)
        if completion is not None:
            completion(outcome)
        return outcome

    if executor is not None:
        return executor.submit(run)

    future: Future[Outcome] = Future()
    try:
        future.set_result(run())
    except Exception as e:
        future.set_exception(e)
    return future


class FieldValidator:
    """Rule set for a single field."""

    def __init__(self, rules: Iterable[ErasedRule] = ()):
        self._rules: list[ErasedRule] = list(rules)

    @property
    def rules(self) -> list[ErasedRule]:
        """Rules in evaluation order."""
        return sort_rules(self._rules)

    def add_rule(self, rule: ErasedRule) -> None:
        """Add a rule to the set."""
        self._rules.append(rule)

    def validate(self, value: Any) -> Outcome:
        """Validate a value against the rule set."""
        return validate_field(value, self._rules)

    def submit(
        self,
        value: Any,
        completion: Callable[[Outcome], None] | None = None,
        executor: Executor | None = None,
    ) -> "Future[Outcome]":
        """Validate a value and deliver the outcome through a future."""
        return submit_validation(value, self._rules, completion, executor)

    @classmethod
    def from_config(cls, config) -> "FieldValidator":
        """Create a validator from a ``FieldcheckConfig``."""
        from .rules import build_rule_set

        return cls(build_rule_set(config))

    def __len__(self) -> int:
        return len(self._rules)
