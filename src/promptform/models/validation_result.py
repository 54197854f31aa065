"""
Validation result models.

These models represent the outcome of validating a candidate form schema.
"""

from pydantic import BaseModel, ConfigDict, Field

from promptform.models.field_schema import FieldDefinition, FormCategory


class SchemaViolation(BaseModel):
    """A single rule a candidate schema broke."""

    model_config = ConfigDict(populate_by_name=True)

    field_id: str | None = Field(
        default=None,
        alias="fieldId",
        description="Offending field, or None for form-level violations",
    )
    rule: str = Field(..., description="Machine-readable rule name")
    message: str = Field(..., description="Human-readable explanation")


class ValidatedForm(BaseModel):
    """A candidate schema that passed validation. Safe to render and persist."""

    form_name: str
    description: str | None = None
    category: FormCategory = FormCategory.CUSTOM
    fields: list[FieldDefinition]


class SchemaValidationResult(BaseModel):
    """Result of schema validation."""

    is_valid: bool = Field(..., description="Whether the candidate is acceptable")
    errors: list[SchemaViolation] = Field(default_factory=list)
    form: ValidatedForm | None = Field(default=None, description="Validated schema when is_valid")

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def get_field_errors(self, field_id: str) -> list[SchemaViolation]:
        """Get all violations for a specific field."""
        return [e for e in self.errors if e.field_id == field_id]

    def to_error_dict(self) -> dict[str, list[str]]:
        """Group messages by field id; form-level violations go under '_form'."""
        result: dict[str, list[str]] = {}
        for error in self.errors:
            result.setdefault(error.field_id or "_form", []).append(error.message)
        return result
