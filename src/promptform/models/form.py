"""
Persisted form and submission records.

A Form is owned by exactly one user; a Submission belongs to exactly one
Form and is removed with it.
"""

import secrets
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from promptform.models.field_schema import FieldDefinition, FormCategory


def new_id() -> str:
    return uuid.uuid4().hex


def new_share_token() -> str:
    return secrets.token_urlsafe(16)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Serialize using camelCase wire names."""
        return self.model_dump(by_alias=True, mode="json")


class SubmissionStats(_WireModel):
    count: int = 0
    last_submitted_at: datetime | None = Field(default=None, alias="lastSubmittedAt")


class Sharing(_WireModel):
    is_public: bool = Field(default=False, alias="isPublic")
    share_token: str | None = Field(default=None, alias="shareToken")


class Form(_WireModel):
    """A persisted form schema plus ownership and sharing metadata."""

    id: str = Field(default_factory=new_id)
    owner_id: str = Field(..., alias="ownerId")
    form_name: str = Field(..., alias="formName")
    slug: str
    description: str | None = None
    category: FormCategory = FormCategory.CUSTOM
    fields: list[FieldDefinition] = Field(default_factory=list)
    generated_prompt: str | None = Field(default=None, alias="generatedPrompt")
    submission_stats: SubmissionStats = Field(default_factory=SubmissionStats, alias="submissionStats")
    sharing: Sharing = Field(default_factory=Sharing)
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=utcnow, alias="updatedAt")

    def field_map(self) -> dict[str, FieldDefinition]:
        return {f.field_id: f for f in self.fields}

    def to_summary(self) -> dict[str, Any]:
        """Listing view: everything except the field definitions."""
        summary = self.to_wire()
        summary.pop("fields", None)
        summary["fieldCount"] = len(self.fields)
        return summary


class FileDescriptor(_WireModel):
    """Value of a FILE_UPLOAD response, as produced by the upload collaborator."""

    storage_id: str = Field(..., alias="storageId")
    url: str
    file_name: str | None = Field(default=None, alias="fileName")
    file_size: int | None = Field(default=None, alias="fileSize")
    file_type: str | None = Field(default=None, alias="fileType")


class UploadedFile(_WireModel):
    field_id: str = Field(..., alias="fieldId")
    storage_id: str = Field(..., alias="storageId")
    url: str
    uploaded_at: datetime = Field(default_factory=utcnow, alias="uploadedAt")


class SubmissionMetadata(_WireModel):
    ip_address: str | None = Field(default=None, alias="ipAddress")
    user_agent: str | None = Field(default=None, alias="userAgent")
    time_spent: float | None = Field(default=None, alias="timeSpent")


class Submission(_WireModel):
    """One respondent's answers to a form. Immutable once stored."""

    id: str = Field(default_factory=new_id)
    form_id: str = Field(..., alias="formId")
    submitter_email: str | None = Field(default=None, alias="submitterEmail")
    responses: dict[str, Any] = Field(default_factory=dict)
    uploaded_files: list[UploadedFile] = Field(default_factory=list, alias="uploadedFiles")
    metadata: SubmissionMetadata = Field(default_factory=SubmissionMetadata)
    submitted_at: datetime = Field(default_factory=utcnow, alias="submittedAt")


class SubmissionRequest(_WireModel):
    """Payload of a public submission."""

    responses: dict[str, Any] = Field(default_factory=dict)
    submitter_email: str | None = Field(default=None, alias="submitterEmail")
    uploaded_files: list[UploadedFile] | None = Field(default=None, alias="uploadedFiles")
    time_spent: float | None = Field(default=None, alias="timeSpent")
