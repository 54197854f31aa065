"""
Schema validation.

Validates an untrusted candidate form schema, either proposed by the
generator or sent as an owner edit, before it is persisted. All violations
are collected so the caller can report every problem in one pass.
"""

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from promptform.models.field_schema import (
    CHOICE_TYPES,
    FieldDefinition,
    FieldType,
    FieldValidation,
    FormCategory,
)
from promptform.models.validation_result import (
    SchemaValidationResult,
    SchemaViolation,
    ValidatedForm,
)


def _as_mapping(candidate: Any) -> Mapping[str, Any] | None:
    if isinstance(candidate, BaseModel):
        return candidate.model_dump(by_alias=True)
    if isinstance(candidate, Mapping):
        return candidate
    return None


def _get(data: Mapping[str, Any], wire_name: str, attr_name: str, default: Any = None) -> Any:
    if wire_name in data:
        return data[wire_name]
    return data.get(attr_name, default)


def _is_length(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


class _FieldChecker:
    """Validates field entries one at a time, tracking ids across the list."""

    def __init__(self, errors: list[SchemaViolation]):
        self.errors = errors
        self.seen_ids: set[str] = set()
        self.reported_duplicates: set[str] = set()

    def _add(self, field_id: str | None, rule: str, message: str) -> None:
        self.errors.append(SchemaViolation(field_id=field_id, rule=rule, message=message))

    def check(self, index: int, raw: Any) -> FieldDefinition | None:
        position = f"#{index + 1}"
        if not isinstance(raw, Mapping):
            self._add(None, "field_not_an_object", f"Field {position} must be an object")
            return None

        errors_before = len(self.errors)

        field_id = _get(raw, "fieldId", "field_id")
        if not isinstance(field_id, str) or not field_id.strip():
            self._add(None, "field_id_required", f"Field {position} is missing a fieldId")
            field_id = None
            ref = position
        else:
            ref = f"'{field_id}'"
            if field_id in self.seen_ids:
                if field_id not in self.reported_duplicates:
                    self._add(field_id, "duplicate_field_id", f"Duplicate fieldId {ref}")
                    self.reported_duplicates.add(field_id)
            else:
                self.seen_ids.add(field_id)

        raw_type = raw.get("type")
        try:
            field_type = FieldType(raw_type)
        except ValueError:
            self._add(field_id, "unknown_type", f"Field {ref} has unknown type {raw_type!r}")
            field_type = None

        display_name = _get(raw, "displayName", "display_name")
        if not isinstance(display_name, str) or not display_name.strip():
            self._add(field_id, "display_name_required", f"Field {ref} is missing a displayName")

        mandatory = raw.get("mandatory", raw.get("mand", False))
        if mandatory is None:
            mandatory = False
        if not isinstance(mandatory, bool):
            self._add(field_id, "mandatory_not_bool", f"Field {ref} mandatory flag must be true or false")

        choices = raw.get("choices")
        if choices is not None and not _is_string_list(choices):
            self._add(field_id, "choices_not_a_list", f"Field {ref} choices must be a list of strings")
        elif field_type in CHOICE_TYPES and not choices:
            self._add(
                field_id,
                "choices_required",
                f"Field {ref} of type {field_type.value} needs at least one choice",
            )

        grid_options = _get(raw, "gridOptions", "grid_options")
        if grid_options is not None and not _is_string_list(grid_options):
            self._add(field_id, "grid_options_not_a_list", f"Field {ref} gridOptions must be a list of strings")
        elif field_type is FieldType.GRID and not grid_options:
            self._add(field_id, "grid_options_required", f"Field {ref} of type GRID needs gridOptions")

        placeholder = raw.get("placeholder")
        if placeholder is not None and not isinstance(placeholder, str):
            self._add(field_id, "placeholder_not_text", f"Field {ref} placeholder must be text")

        self._check_validation(field_id, ref, raw.get("validation"))

        if len(self.errors) > errors_before:
            return None
        return FieldDefinition(
            field_id=field_id,
            type=field_type,
            display_name=display_name,
            mandatory=mandatory,
            choices=choices or [],
            grid_options=grid_options or [],
            validation=FieldValidation.model_validate(raw.get("validation") or {}),
            placeholder=placeholder,
        )

    def _check_validation(self, field_id: str | None, ref: str, rules: Any) -> None:
        if rules is None:
            return
        if not isinstance(rules, Mapping):
            self._add(field_id, "validation_not_an_object", f"Field {ref} validation must be an object")
            return

        min_length = _get(rules, "minLength", "min_length")
        max_length = _get(rules, "maxLength", "max_length")
        for name, value in (("minLength", min_length), ("maxLength", max_length)):
            if value is not None and not _is_length(value):
                self._add(field_id, "invalid_length", f"Field {ref} {name} must be a non-negative integer")

        if _is_length(min_length) and _is_length(max_length) and min_length > max_length:
            self._add(
                field_id,
                "length_range",
                f"Field {ref} minLength ({min_length}) is greater than maxLength ({max_length})",
            )

        pattern = rules.get("pattern")
        if pattern is None:
            return
        if not isinstance(pattern, str):
            self._add(field_id, "invalid_pattern", f"Field {ref} pattern must be text")
            return
        try:
            re.compile(pattern)
        except re.error as exc:
            self._add(field_id, "invalid_pattern", f"Field {ref} has an invalid pattern: {exc}")


def validate_form_schema(candidate: Any) -> SchemaValidationResult:
    """
    Validate a candidate form schema.

    Args:
        candidate: A mapping (wire names or attribute names) or a pydantic
            model such as CandidateForm.

    Returns:
        SchemaValidationResult. When `is_valid` is True, `form` holds the
        validated schema; otherwise `errors` lists every violation found.
    """
    data = _as_mapping(candidate)
    if data is None:
        return SchemaValidationResult(
            is_valid=False,
            errors=[SchemaViolation(rule="not_an_object", message="Form schema must be an object")],
        )

    errors: list[SchemaViolation] = []

    form_name = _get(data, "formName", "form_name")
    if not isinstance(form_name, str) or not form_name.strip():
        errors.append(SchemaViolation(rule="form_name_required", message="Form name is required"))

    description = data.get("description")
    if description is not None and not isinstance(description, str):
        errors.append(SchemaViolation(rule="description_not_text", message="Description must be text"))

    raw_category = data.get("category")
    category = FormCategory.CUSTOM
    if raw_category is not None:
        try:
            category = FormCategory(raw_category)
        except ValueError:
            allowed = ", ".join(c.value for c in FormCategory)
            errors.append(SchemaViolation(
                rule="unknown_category",
                message=f"Unknown category {raw_category!r}; expected one of: {allowed}",
            ))

    fields: list[FieldDefinition] = []
    raw_fields = data.get("fields")
    if raw_fields is None or (isinstance(raw_fields, list) and not raw_fields):
        errors.append(SchemaViolation(rule="fields_required", message="Form must have at least one field"))
    elif not isinstance(raw_fields, list):
        errors.append(SchemaViolation(rule="fields_not_a_list", message="Fields must be a list"))
    else:
        checker = _FieldChecker(errors)
        for index, raw in enumerate(raw_fields):
            field = checker.check(index, raw)
            if field is not None:
                fields.append(field)

    if errors:
        return SchemaValidationResult(is_valid=False, errors=errors)

    return SchemaValidationResult(
        is_valid=True,
        form=ValidatedForm(
            form_name=form_name.strip(),
            description=description,
            category=category,
            fields=fields,
        ),
    )
