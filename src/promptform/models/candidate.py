"""
Candidate form schema models.

These models describe the shape the generative model is asked to produce.
They are deliberately loose about values (a field type is any string here)
and strict about structure: the Schema Validator decides whether the values
are acceptable, the parser only decides whether the shape is.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from promptform.models.field_schema import FieldType, FormCategory

_FIELD_TYPES = ", ".join(t.value for t in FieldType)
_CATEGORIES = ", ".join(c.value for c in FormCategory)


class CandidateValidation(BaseModel):
    """Validation rules proposed for a field."""

    model_config = ConfigDict(populate_by_name=True)

    min_length: int | None = Field(default=None, alias="minLength", description="Minimum string length")
    max_length: int | None = Field(default=None, alias="maxLength", description="Maximum string length")
    pattern: str | None = Field(default=None, description="Regular expression the answer must match")


class CandidateField(BaseModel):
    """A proposed form field."""

    model_config = ConfigDict(populate_by_name=True)

    field_id: str | None = Field(default=None, alias="fieldId", description="Unique field identifier")
    type: str | None = Field(default=None, description=f"Field type, one of: {_FIELD_TYPES}")
    display_name: str | None = Field(default=None, alias="displayName", description="Label shown to the user")
    mandatory: bool = Field(
        default=False,
        validation_alias=AliasChoices("mandatory", "mand"),
        description="Is field mandatory",
    )
    choices: list[str] | None = Field(
        default=None,
        description="Options for DROPDOWN/RADIO/CHECKBOX/MULTIPLE_CHOICE, rows for GRID",
    )
    grid_options: list[str] | None = Field(
        default=None,
        alias="gridOptions",
        description="Column options for GRID fields",
    )
    validation: CandidateValidation | None = Field(default=None)
    placeholder: str | None = Field(default=None, description="Placeholder text")


class CandidateForm(BaseModel):
    """
    Complete proposed form.

    `formName` and `fields` are required keys: output missing either one is
    malformed rather than merely invalid.
    """

    model_config = ConfigDict(populate_by_name=True)

    form_name: str = Field(..., alias="formName", description="Name of the form")
    description: str | None = Field(default=None, description="Form description")
    category: str | None = Field(default=None, description=f"Form category, one of: {_CATEGORIES}")
    fields: list[CandidateField] = Field(..., description="Array of form fields")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
