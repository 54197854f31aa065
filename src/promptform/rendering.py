"""
Dynamic form rendering.

Turns a persisted field list into render descriptors for form clients. The
descriptors, JSON Schema and UI Schema are all derived from the same per-type
rule table the response validator uses.
"""

from typing import Any

from pydantic import BaseModel, Field

from promptform.models.field_schema import FieldDefinition, FieldType
from promptform.models.form import Form
from promptform.validation.rules import RATING_SCALE, ValueShape, get_rule


class RenderedField(BaseModel):
    """Everything a client needs to draw one input."""

    field_id: str
    label: str
    field_type: FieldType
    widget: str
    value_shape: ValueShape
    required: bool = False
    input_type: str | None = None
    placeholder: str | None = None
    options: list[str] = Field(default_factory=list, description="Choices, or GRID rows")
    columns: list[str] = Field(default_factory=list, description="GRID column options")
    scale: list[int] = Field(default_factory=list, description="RATING values")
    rows: int | None = None
    json_schema: dict[str, Any] = Field(default_factory=dict)


class RenderedForm(BaseModel):
    """A form ready for display."""

    form_id: str | None = None
    title: str
    description: str | None = None
    fields: list[RenderedField]
    submit_button_text: str = "Submit"

    def to_json_schema(self) -> dict[str, Any]:
        """Export as JSON Schema dict."""
        properties: dict[str, Any] = {}
        required: list[str] = []

        for field in self.fields:
            prop = {"title": field.label, **field.json_schema}
            properties[field.field_id] = prop
            if field.required:
                required.append(field.field_id)

        return {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "type": "object",
            "title": self.title,
            "description": self.description,
            "properties": properties,
            "required": required,
        }

    def to_ui_schema(self) -> dict[str, Any]:
        """Export as UI Schema dict, in field order."""
        ui_schema: dict[str, Any] = {"ui:order": [f.field_id for f in self.fields]}

        for field in self.fields:
            field_ui: dict[str, Any] = {"ui:widget": field.widget}
            if field.placeholder:
                field_ui["ui:placeholder"] = field.placeholder
            if field.input_type:
                field_ui["ui:options"] = {"inputType": field.input_type}
            if field.rows:
                field_ui.setdefault("ui:options", {})["rows"] = field.rows
            ui_schema[field.field_id] = field_ui

        return ui_schema

    def to_form_config(self) -> dict[str, Any]:
        """Export complete form configuration for client libraries."""
        return {
            "formId": self.form_id,
            "schema": self.to_json_schema(),
            "uiSchema": self.to_ui_schema(),
            "submitButtonText": self.submit_button_text,
        }


def render_field(field: FieldDefinition) -> RenderedField:
    """Build the render descriptor for one field."""
    rule = get_rule(field.type)

    value_shape = rule.value_shape
    if value_shape is ValueShape.FLAG_OR_CHOICE_SET:
        value_shape = ValueShape.CHOICE_SET if field.choices else ValueShape.FLAG

    placeholder = field.placeholder or rule.default_placeholder
    if placeholder is None and value_shape is ValueShape.TEXT:
        placeholder = field.display_name
    elif placeholder is None and value_shape is ValueShape.CHOICE:
        placeholder = f"Select {field.display_name}"

    widget = rule.widget
    if value_shape is ValueShape.FLAG:
        widget = "checkbox"

    return RenderedField(
        field_id=field.field_id,
        label=field.display_name,
        field_type=field.type,
        widget=widget,
        value_shape=value_shape,
        required=field.mandatory,
        input_type=rule.input_type,
        placeholder=placeholder,
        options=list(field.choices),
        columns=list(field.grid_options),
        scale=list(range(RATING_SCALE[0], RATING_SCALE[1] + 1)) if value_shape is ValueShape.RATING else [],
        rows=rule.rows,
        json_schema=rule.json_schema(field),
    )


def render_fields(fields: list[FieldDefinition]) -> list[RenderedField]:
    return [render_field(f) for f in fields]


def render_form(form: Form) -> RenderedForm:
    """Build the render descriptor for a whole form."""
    return RenderedForm(
        form_id=form.id,
        title=form.form_name,
        description=form.description,
        fields=render_fields(form.fields),
    )
