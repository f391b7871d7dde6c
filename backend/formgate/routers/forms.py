"""
forms.py
- Purpose: API routes for validating submitted form fields.
- Design: Keep router thin. A POST is a submission, a GET is a render;
  field errors are returned as data with 200.
"""

from fastapi import APIRouter, Depends

from formgate.api.deps import get_form_validator
from formgate.schemas.forms import FormValidateRequest, FormValidateResponse
from formgate.validations.form_validator import FormValidator

router = APIRouter(prefix="/api/forms", tags=["Forms"])


@router.get("/validate", response_model=FormValidateResponse)
def render_form(validator: FormValidator = Depends(get_form_validator)):
    return FormValidateResponse.from_report(validator.validate(None))


@router.post("/validate", response_model=FormValidateResponse)
def validate_form(
    body: FormValidateRequest,
    validator: FormValidator = Depends(get_form_validator),
):
    for entry in body.rules:
        validator.add_rule(entry.field, entry.label, entry.rules)
    return FormValidateResponse.from_report(validator.validate(body.fields))
