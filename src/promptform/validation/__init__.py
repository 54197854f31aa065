"""
Deterministic validation for promptform.

- validate_form_schema: candidate schema -> SchemaValidationResult
- validate_responses: field list + responses -> {fieldId: message}
"""

from promptform.validation.responses import validate_field_response, validate_responses
from promptform.validation.rules import FIELD_RULES, FieldRule, ValueShape, get_rule
from promptform.validation.schema import validate_form_schema

__all__ = [
    "FIELD_RULES",
    "FieldRule",
    "ValueShape",
    "get_rule",
    "validate_field_response",
    "validate_form_schema",
    "validate_responses",
]
