"""formgate/validations/types.py

Lightweight dataclasses for form validation passes.
Design goals:
- explicit three-way outcome (not submitted / invalid / valid)
- errors are data, keyed by field, at most one per field
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from formgate.core.errors import field_not_submitted


class ValidationStatus(str, Enum):
    NOT_SUBMITTED = "NOT_SUBMITTED"
    INVALID = "INVALID"
    VALID = "VALID"


@dataclass(frozen=True)
class RuleEntry:
    field: str
    label: str
    rules: tuple[str, ...]


@dataclass(frozen=True)
class FieldError:
    rule: str
    message: str


@dataclass(frozen=True)
class RuleResult:
    error: str | None = None  # None when the rule passed
    value: Any = None         # value to store back (filters may rewrite it)

    @property
    def passed(self) -> bool:
        return self.error is None


# (value, param, label) -> RuleResult
RuleFunc = Callable[[Any, str, str], RuleResult]


@dataclass(frozen=True)
class ValidationReport:
    status: ValidationStatus
    errors: dict[str, FieldError] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)
    unrecognized_rules: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == ValidationStatus.VALID

    def __bool__(self) -> bool:
        # NOT_SUBMITTED and INVALID both collapse to False
        return self.ok

    def get_error(self, field_name: str) -> str:
        err = self.errors.get(field_name)
        return err.message if err else ""

    def get_value(self, field_name: str) -> Any:
        if field_name not in self.values:
            raise field_not_submitted(field_name)
        return self.values[field_name]

    @classmethod
    def not_submitted(cls) -> "ValidationReport":
        return cls(status=ValidationStatus.NOT_SUBMITTED)
