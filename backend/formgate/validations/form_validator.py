"""
form_validator.py
- Purpose: Declarative, rule-based validation of submitted form fields.
- Design: Entries are evaluated in registration order; each entry's rules run
  left to right and stop at the first failure. Errors are returned as data.

Rules
-----
required            : the field is present and not empty
max_length[number]  : the value's length does not exceed number, e.g. max_length[10]
min_length[number]  : the value's length is at least number, e.g. min_length[3]

Unknown rule names are ignored, but recorded in ``unrecognized_rules`` and
logged so typos like ``requried`` do not pass unnoticed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from formgate.core.errors import field_not_submitted
from formgate.validations.rule_spec import parse_rule, to_int
from formgate.validations.types import (
    FieldError,
    RuleEntry,
    RuleFunc,
    RuleResult,
    ValidationReport,
    ValidationStatus,
)

logger = logging.getLogger("formgate.forms")


def is_empty(value: Any) -> bool:
    """
    Emptiness as the form layer understands it:
    absent, None, falsy ("", 0, False, empty collections) or the string "0".
    Whitespace-only strings are NOT empty.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == "" or value == "0"
    return not value


def value_length(value: Any) -> int:
    # Byte length of the string form; absent values count as 0.
    if value is None:
        return 0
    if isinstance(value, bytes):
        return len(value)
    return len(str(value).encode("utf-8"))


def required(value: Any, param: str, label: str) -> RuleResult:
    if is_empty(value):
        return RuleResult(error=f"{label} Required", value=value)
    return RuleResult(value=value)


def max_length(value: Any, param: str, label: str) -> RuleResult:
    if value_length(value) > to_int(param):
        return RuleResult(error=f"{label} exceed maximum length", value=value)
    return RuleResult(value=value)


def min_length(value: Any, param: str, label: str) -> RuleResult:
    if value_length(value) < to_int(param):
        return RuleResult(error=f"{label} is less than minimum length", value=value)
    return RuleResult(value=value)


BUILTIN_RULES: dict[str, RuleFunc] = {
    "required": required,
    "max_length": max_length,
    "min_length": min_length,
}


class FormValidator:
    """
    One instance per submission's validation pass.

    Usage:
        v = FormValidator()
        v.add_rule("username", "Username", ["required", "max_length[20]"])
        if v.validate(form_data):
            ...
        else:
            v.get_errors()
    """

    def __init__(self) -> None:
        self._entries: list[RuleEntry] = []
        self._rules: dict[str, RuleFunc] = dict(BUILTIN_RULES)
        self._errors: dict[str, FieldError] = {}
        self._values: dict[str, Any] = {}
        self.unrecognized_rules: list[tuple[str, str]] = []

    def add_rule(self, field: str, label: str, rules: Sequence[str]) -> None:
        self._entries.append(RuleEntry(field=field, label=label, rules=tuple(rules)))

    def register_rule(self, name: str, fn: RuleFunc) -> None:
        """Add or override a rule (check or filter) for this validator only."""
        self._rules[name] = fn

    def validate(self, submitted_fields: Mapping[str, Any] | None) -> ValidationReport:
        """
        Validate a submission. ``None`` means nothing was submitted (a render,
        not a post); the report is then NOT_SUBMITTED and falsy.
        """
        self._errors = {}
        self.unrecognized_rules = []

        if submitted_fields is None:
            self._values = {}
            logger.info("forms.not_submitted", extra={"entries": len(self._entries)})
            return ValidationReport.not_submitted()

        self._values = dict(submitted_fields)

        for entry in self._entries:
            self._process_entry(entry)

        status = ValidationStatus.VALID if not self._errors else ValidationStatus.INVALID
        logger.info(
            "forms.validated",
            extra={
                "status": status.value,
                "entries": len(self._entries),
                "failed_fields": sorted(self._errors),
            },
        )
        return ValidationReport(
            status=status,
            errors=dict(self._errors),
            values=dict(self._values),
            unrecognized_rules=list(self.unrecognized_rules),
        )

    def get_error(self, field: str) -> str:
        err = self._errors.get(field)
        return err.message if err else ""

    def get_errors(self) -> dict[str, FieldError]:
        return dict(self._errors)

    def get_value(self, field: str) -> Any:
        """Stored value after filters ran. Raises AppError if never submitted."""
        if field not in self._values:
            raise field_not_submitted(field)
        return self._values[field]

    def _process_entry(self, entry: RuleEntry) -> None:
        present = entry.field in self._values
        value = self._values.get(entry.field)

        for token in entry.rules:
            spec = parse_rule(token)
            fn = self._rules.get(spec.name)
            if fn is None:
                self.unrecognized_rules.append((entry.field, spec.name))
                logger.warning(
                    "forms.unrecognized_rule",
                    extra={"field": entry.field, "rule": spec.name},
                )
                continue

            result = fn(value, spec.param, entry.label)
            if not result.passed:
                # last failing entry for a field wins
                self._errors[entry.field] = FieldError(rule=spec.name, message=result.error)
                return

            value = result.value
            if present:
                self._values[entry.field] = value
