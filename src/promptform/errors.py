"""
Error taxonomy for promptform.

Every error carries an HTTP status and a machine-readable code so the API
layer can turn it into a structured response without knowing its details.
"""

from enum import Enum
from typing import Any


class PromptFormError(Exception):
    """Base class for all promptform errors."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": False,
            "error": self.message,
            "errorCode": self.error_code,
        }


class GenerationErrorKind(str, Enum):
    """Why a form generation request failed."""

    PROVIDER_UNAVAILABLE = "ProviderUnavailable"
    MALFORMED_OUTPUT = "MalformedOutput"
    INVALID_SCHEMA = "InvalidSchema"
    INVALID_QUERY = "InvalidQuery"


_GENERATION_STATUS = {
    GenerationErrorKind.PROVIDER_UNAVAILABLE: 503,
    GenerationErrorKind.MALFORMED_OUTPUT: 502,
    GenerationErrorKind.INVALID_SCHEMA: 422,
    GenerationErrorKind.INVALID_QUERY: 400,
}


class GenerationError(PromptFormError):
    """
    Form generation failed.

    Never retried automatically: the caller decides whether to resubmit.
    For INVALID_SCHEMA, `violations` holds every schema violation found.
    """

    error_code = "generation_error"

    def __init__(
        self,
        kind: GenerationErrorKind,
        message: str,
        violations: list | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.violations = violations or []
        self.status_code = _GENERATION_STATUS[kind]

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["kind"] = self.kind.value
        if self.violations:
            payload["violations"] = [v.model_dump(by_alias=True) for v in self.violations]
        return payload


class SchemaValidationError(PromptFormError):
    """A candidate form schema (usually an owner edit) was rejected."""

    status_code = 422
    error_code = "invalid_schema"

    def __init__(self, violations: list, message: str = "Form schema is invalid"):
        super().__init__(message)
        self.violations = violations

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["violations"] = [v.model_dump(by_alias=True) for v in self.violations]
        return payload


class ResponseValidationError(PromptFormError):
    """A submission's responses do not satisfy the form schema."""

    status_code = 422
    error_code = "invalid_responses"

    def __init__(self, errors: dict[str, str], message: str = "Please fix the errors before submitting"):
        super().__init__(message)
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["errors"] = dict(self.errors)
        return payload


class ConflictError(PromptFormError):
    """A write collided with concurrent state. Safe to retry."""

    status_code = 409
    error_code = "conflict"
    retryable = True


class SlugConflictError(ConflictError):
    """The slug uniqueness constraint rejected an insert."""

    error_code = "slug_conflict"

    def __init__(self, slug: str):
        super().__init__(f"Slug '{slug}' is already taken")
        self.slug = slug


class AuthorizationError(PromptFormError):
    """The caller does not own the resource it tried to read or change."""

    status_code = 403
    error_code = "unauthorized"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class FormNotPublicError(PromptFormError):
    status_code = 403
    error_code = "form_not_public"

    def __init__(self, message: str = "Form is not publicly available"):
        super().__init__(message)


class NotFoundError(PromptFormError):
    status_code = 404
    error_code = "not_found"


class AuthenticationError(PromptFormError):
    """The request did not identify a user."""

    status_code = 401
    error_code = "unauthenticated"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class InvalidRequestError(PromptFormError):
    """The request body or parameters could not be understood."""

    status_code = 400
    error_code = "invalid_request"
