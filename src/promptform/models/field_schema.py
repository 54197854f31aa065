"""
Field schema models.

The closed vocabulary of form field kinds, plus the definition of a single
field as it is stored on a form. Wire names are camelCase so stored schemas
match what form clients send and receive.
"""

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class FieldType(str, Enum):
    """Closed set of field kinds a form may contain."""

    NAME = "NAME"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    ADDRESS = "ADDRESS"
    DROPDOWN = "DROPDOWN"
    RADIO = "RADIO"
    CHECKBOX = "CHECKBOX"
    DATE = "DATE"
    SIGNATURE = "SIGNATURE"
    SINGLE_LINE = "SINGLE_LINE"
    MULTI_LINE = "MULTI_LINE"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    GRID = "GRID"
    FILE_UPLOAD = "FILE_UPLOAD"
    RATING = "RATING"


class FormCategory(str, Enum):
    """Closed set of form categories."""

    APPOINTMENT = "appointment"
    REGISTRATION = "registration"
    ORDER = "order"
    APPLICATION = "application"
    FEEDBACK = "feedback"
    SURVEY = "survey"
    CUSTOM = "custom"


CHOICE_TYPES = frozenset({
    FieldType.DROPDOWN,
    FieldType.RADIO,
    FieldType.CHECKBOX,
    FieldType.MULTIPLE_CHOICE,
})


def is_choice_type(field_type: FieldType | str) -> bool:
    """Return True for field types whose definition must carry choices."""
    try:
        return FieldType(field_type) in CHOICE_TYPES
    except ValueError:
        return False


class FieldValidation(BaseModel):
    """Optional validation rules for string-valued fields."""

    model_config = ConfigDict(populate_by_name=True)

    min_length: int | None = Field(default=None, alias="minLength", description="Minimum string length")
    max_length: int | None = Field(default=None, alias="maxLength", description="Maximum string length")
    pattern: str | None = Field(default=None, description="Regular expression the value must match")

    def is_empty(self) -> bool:
        return self.min_length is None and self.max_length is None and not self.pattern


class FieldDefinition(BaseModel):
    """A single field of a form schema."""

    model_config = ConfigDict(populate_by_name=True)

    field_id: str = Field(..., alias="fieldId", description="Unique identifier within the form")
    type: FieldType = Field(..., description="Field kind")
    display_name: str = Field(..., alias="displayName", description="Label shown to the respondent")
    mandatory: bool = Field(
        default=False,
        validation_alias=AliasChoices("mandatory", "mand"),
        description="Whether a response is required",
    )
    choices: list[str] = Field(
        default_factory=list,
        description="Options for DROPDOWN/RADIO/CHECKBOX/MULTIPLE_CHOICE; rows for GRID",
    )
    grid_options: list[str] = Field(
        default_factory=list,
        alias="gridOptions",
        description="Column options for GRID fields",
    )
    validation: FieldValidation = Field(default_factory=FieldValidation)
    placeholder: str | None = Field(default=None, description="Placeholder text")

    @property
    def is_choice(self) -> bool:
        return is_choice_type(self.type)

    def to_wire(self) -> dict:
        """Serialize using camelCase wire names."""
        return self.model_dump(by_alias=True, mode="json")
