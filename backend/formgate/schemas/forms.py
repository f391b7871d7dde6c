"""
forms.py (schemas)
- Purpose: Request/response DTOs for the form validation endpoint.
- Design: Keep API DTOs stable; include helper constructors for DRY mapping.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from formgate.validations.types import ValidationReport


class FieldRuleIn(BaseModel):
    field: str
    label: str
    rules: list[str] = Field(default_factory=list)


class FormValidateRequest(BaseModel):
    rules: list[FieldRuleIn] = Field(default_factory=list)
    fields: dict[str, Any] = Field(default_factory=dict)


class FieldErrorOut(BaseModel):
    rule: str
    message: str


class UnrecognizedRuleOut(BaseModel):
    field: str
    rule: str


class FormValidateResponse(BaseModel):
    status: Literal["NOT_SUBMITTED", "INVALID", "VALID"]
    valid: bool
    errors: dict[str, FieldErrorOut] = Field(default_factory=dict)
    values: dict[str, Any] = Field(default_factory=dict)
    unrecognized_rules: list[UnrecognizedRuleOut] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: ValidationReport) -> "FormValidateResponse":
        return cls(
            status=report.status.value,
            valid=report.ok,
            errors={
                name: FieldErrorOut(rule=err.rule, message=err.message)
                for name, err in report.errors.items()
            },
            values=report.values,
            unrecognized_rules=[
                UnrecognizedRuleOut(field=f, rule=r) for f, r in report.unrecognized_rules
            ],
        )
