"""
Per-field-type rule table.

Each FieldType maps to exactly one FieldRule describing how the field is
rendered and what a valid response looks like. The renderer and the response
validator both read this table, so adding a type means adding one entry here.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from promptform.models.field_schema import FieldDefinition, FieldType
from promptform.models.form import FileDescriptor

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d \-\+\(\)]+$")
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
DATE_FORMAT = "%Y-%m-%d"
RATING_SCALE = (1, 5)


class ValueShape(str, Enum):
    """Representation a response value must take."""

    TEXT = "text"
    DATE = "date"
    CHOICE = "choice"
    CHOICE_SET = "choice_set"
    FLAG = "flag"
    FLAG_OR_CHOICE_SET = "flag_or_choice_set"
    RATING = "rating"
    FILE = "file"
    GRID = "grid"


Check = Callable[[FieldDefinition, Any], str | None]
SchemaFragment = Callable[[FieldDefinition], dict[str, Any]]


@dataclass(frozen=True)
class FieldRule:
    """How one field type is rendered and how its responses are checked."""

    widget: str
    value_shape: ValueShape
    check: Check
    json_schema: SchemaFragment
    input_type: str | None = None
    default_placeholder: str | None = None
    rows: int | None = None


# --- Value checks -----------------------------------------------------------
# Each returns None when the value is acceptable, else a message naming the
# violation. Values reaching a check are never empty.


def _check_text(field: FieldDefinition, value: Any) -> str | None:
    if not isinstance(value, str):
        return f"{field.display_name} must be text"
    return None


def _check_email(field: FieldDefinition, value: Any) -> str | None:
    return _check_text(field, value) or (
        None if EMAIL_PATTERN.fullmatch(value) else f"{field.display_name} must be a valid email address"
    )


def _check_phone(field: FieldDefinition, value: Any) -> str | None:
    return _check_text(field, value) or (
        None if PHONE_PATTERN.fullmatch(value) else f"{field.display_name} must be a valid phone number"
    )


def _check_date(field: FieldDefinition, value: Any) -> str | None:
    message = f"{field.display_name} must be a valid date (YYYY-MM-DD)"
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return message
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return message
    return None


def _check_choice(field: FieldDefinition, value: Any) -> str | None:
    if not isinstance(value, str) or value not in field.choices:
        return f"{field.display_name} must be one of: {', '.join(field.choices)}"
    return None


def _check_choice_set(field: FieldDefinition, value: Any) -> str | None:
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        return f"{field.display_name} must be a list of options"
    invalid = [v for v in value if v not in field.choices]
    if invalid:
        return f"{field.display_name} contains invalid options: {', '.join(invalid)}"
    if len(set(value)) != len(value):
        return f"{field.display_name} contains duplicate options"
    return None


def _check_checkbox(field: FieldDefinition, value: Any) -> str | None:
    if field.choices:
        return _check_choice_set(field, value)
    if isinstance(value, bool):
        return None
    return f"{field.display_name} must be checked or unchecked"


def _check_rating(field: FieldDefinition, value: Any) -> str | None:
    low, high = RATING_SCALE
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        return f"{field.display_name} must be a whole number from {low} to {high}"
    return None


def _check_file(field: FieldDefinition, value: Any) -> str | None:
    if not isinstance(value, Mapping):
        return f"{field.display_name} must be an uploaded file"
    try:
        FileDescriptor.model_validate(value)
    except ValidationError:
        return f"{field.display_name} must be an uploaded file"
    return None


def _check_grid(field: FieldDefinition, value: Any) -> str | None:
    if not isinstance(value, Mapping):
        return f"{field.display_name} must have one selection per row"
    if field.choices:
        unknown = [str(row) for row in value if row not in field.choices]
        if unknown:
            return f"{field.display_name} has unknown rows: {', '.join(unknown)}"
    invalid = [str(row) for row, selected in value.items() if selected not in field.grid_options]
    if invalid:
        return (
            f"{field.display_name} rows {', '.join(invalid)} must be one of: "
            f"{', '.join(field.grid_options)}"
        )
    return None


# --- JSON Schema fragments --------------------------------------------------


def _string_schema(field_format: str | None = None) -> SchemaFragment:
    def build(field: FieldDefinition) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "string"}
        if field_format:
            schema["format"] = field_format
        if field.validation.min_length is not None:
            schema["minLength"] = field.validation.min_length
        if field.validation.max_length is not None:
            schema["maxLength"] = field.validation.max_length
        if field.validation.pattern:
            schema["pattern"] = field.validation.pattern
        return schema

    return build


def _phone_schema(field: FieldDefinition) -> dict[str, Any]:
    schema = _string_schema()(field)
    schema.setdefault("pattern", PHONE_PATTERN.pattern)
    return schema


def _choice_schema(field: FieldDefinition) -> dict[str, Any]:
    return {"type": "string", "enum": list(field.choices)}


def _choice_set_schema(field: FieldDefinition) -> dict[str, Any]:
    return {
        "type": "array",
        "items": {"type": "string", "enum": list(field.choices)},
        "uniqueItems": True,
    }


def _checkbox_schema(field: FieldDefinition) -> dict[str, Any]:
    if field.choices:
        return _choice_set_schema(field)
    return {"type": "boolean"}


def _rating_schema(field: FieldDefinition) -> dict[str, Any]:
    low, high = RATING_SCALE
    return {"type": "integer", "minimum": low, "maximum": high}


def _file_schema(field: FieldDefinition) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "storageId": {"type": "string"},
            "url": {"type": "string", "format": "uri"},
            "fileName": {"type": "string"},
            "fileSize": {"type": "integer"},
            "fileType": {"type": "string"},
        },
        "required": ["storageId", "url"],
    }


def _grid_schema(field: FieldDefinition) -> dict[str, Any]:
    cell = {"type": "string", "enum": list(field.grid_options)}
    if field.choices:
        return {
            "type": "object",
            "properties": {row: dict(cell) for row in field.choices},
            "additionalProperties": False,
        }
    return {"type": "object", "additionalProperties": cell}


FIELD_RULES: dict[FieldType, FieldRule] = {
    FieldType.NAME: FieldRule("text", ValueShape.TEXT, _check_text, _string_schema(), input_type="text"),
    FieldType.SINGLE_LINE: FieldRule("text", ValueShape.TEXT, _check_text, _string_schema(), input_type="text"),
    FieldType.EMAIL: FieldRule(
        "email", ValueShape.TEXT, _check_email, _string_schema("email"),
        input_type="email", default_placeholder="example@email.com",
    ),
    FieldType.PHONE: FieldRule(
        "tel", ValueShape.TEXT, _check_phone, _phone_schema,
        input_type="tel", default_placeholder="+1 (555) 000-0000",
    ),
    FieldType.MULTI_LINE: FieldRule("textarea", ValueShape.TEXT, _check_text, _string_schema(), rows=4),
    FieldType.ADDRESS: FieldRule(
        "textarea", ValueShape.TEXT, _check_text, _string_schema(),
        default_placeholder="Enter your full address", rows=3,
    ),
    FieldType.SIGNATURE: FieldRule("signature", ValueShape.TEXT, _check_text, _string_schema()),
    FieldType.DATE: FieldRule("date", ValueShape.DATE, _check_date, _string_schema("date"), input_type="date"),
    FieldType.DROPDOWN: FieldRule("select", ValueShape.CHOICE, _check_choice, _choice_schema),
    FieldType.RADIO: FieldRule("radio", ValueShape.CHOICE, _check_choice, _choice_schema),
    FieldType.CHECKBOX: FieldRule("checkboxes", ValueShape.FLAG_OR_CHOICE_SET, _check_checkbox, _checkbox_schema),
    FieldType.MULTIPLE_CHOICE: FieldRule("checkboxes", ValueShape.CHOICE_SET, _check_choice_set, _choice_set_schema),
    FieldType.RATING: FieldRule("rating", ValueShape.RATING, _check_rating, _rating_schema),
    FieldType.FILE_UPLOAD: FieldRule("file", ValueShape.FILE, _check_file, _file_schema, input_type="file"),
    FieldType.GRID: FieldRule("grid", ValueShape.GRID, _check_grid, _grid_schema),
}


def get_rule(field_type: FieldType) -> FieldRule:
    return FIELD_RULES[FieldType(field_type)]


def normalize_value(field: FieldDefinition, value: Any) -> Any:
    """Map "true"/"false" to booleans for choiceless checkboxes."""
    if field.type is FieldType.CHECKBOX and not field.choices and value in ("true", "false"):
        return value == "true"
    return value


def is_empty(value: Any) -> bool:
    """True for values that do not count as an answer."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, Mapping)):
        return len(value) == 0
    return False


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)
