"""
Data models for promptform.

This module contains Pydantic models for:
- The field schema vocabulary (field types, categories, field definitions)
- Candidate schemas proposed by the generator or by an owner edit
- Persisted forms and submissions
- Schema validation results
"""

from promptform.models.field_schema import (
    CHOICE_TYPES,
    FieldDefinition,
    FieldType,
    FieldValidation,
    FormCategory,
    is_choice_type,
)
from promptform.models.candidate import (
    CandidateField,
    CandidateForm,
    CandidateValidation,
)
from promptform.models.form import (
    FileDescriptor,
    Form,
    Sharing,
    Submission,
    SubmissionMetadata,
    SubmissionRequest,
    SubmissionStats,
    UploadedFile,
)
from promptform.models.validation_result import (
    SchemaValidationResult,
    SchemaViolation,
    ValidatedForm,
)

__all__ = [
    # Field schema
    "CHOICE_TYPES",
    "FieldDefinition",
    "FieldType",
    "FieldValidation",
    "FormCategory",
    "is_choice_type",
    # Candidates
    "CandidateField",
    "CandidateForm",
    "CandidateValidation",
    # Records
    "FileDescriptor",
    "Form",
    "Sharing",
    "Submission",
    "SubmissionMetadata",
    "SubmissionRequest",
    "SubmissionStats",
    "UploadedFile",
    # Validation
    "SchemaValidationResult",
    "SchemaViolation",
    "ValidatedForm",
]
