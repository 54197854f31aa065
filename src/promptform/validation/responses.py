"""
Response validation.

Checks a submitted response set against a form's field list before the
submission is accepted. Every field is checked; the result maps each failing
field id to one message.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from promptform.models.field_schema import FieldDefinition
from promptform.validation.rules import compile_pattern, get_rule, is_empty, normalize_value


def _check_custom_rules(field: FieldDefinition, value: str) -> str | None:
    """Apply minLength, maxLength and pattern in order; report the first failure."""
    rules = field.validation
    if rules.min_length is not None and len(value) < rules.min_length:
        return f"{field.display_name} must be at least {rules.min_length} characters"
    if rules.max_length is not None and len(value) > rules.max_length:
        return f"{field.display_name} must be at most {rules.max_length} characters"
    if rules.pattern and not compile_pattern(rules.pattern).search(value):
        return f"{field.display_name} has an invalid format"
    return None


def validate_field_response(field: FieldDefinition, value: Any) -> str | None:
    """Validate one value against one field. Returns an error message or None."""
    value = normalize_value(field, value)
    if is_empty(value):
        return f"{field.display_name} is required" if field.mandatory else None

    message = get_rule(field.type).check(field, value)
    if message is None and isinstance(value, str):
        message = _check_custom_rules(field, value)
    return message


def validate_responses(
    fields: Iterable[FieldDefinition | Mapping[str, Any]],
    responses: Mapping[str, Any],
) -> dict[str, str]:
    """
    Validate a response set against a field list.

    Args:
        fields: The form's field definitions (models or their wire dicts).
        responses: Mapping of field id to submitted value. Keys that match
            no field are ignored.

    Returns:
        Mapping of field id to error message. Empty means the responses
        are acceptable for submission.

    Example:
        >>> field = FieldDefinition(field_id="email", type="EMAIL",
        ...                         display_name="Email", mandatory=True)
        >>> validate_responses([field], {})
        {'email': 'Email is required'}
    """
    errors: dict[str, str] = {}
    for raw in fields:
        field = raw if isinstance(raw, FieldDefinition) else FieldDefinition.model_validate(raw)
        message = validate_field_response(field, responses.get(field.field_id))
        if message:
            errors[field.field_id] = message
    return errors
