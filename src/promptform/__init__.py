"""
promptform - AI-generated forms from plain-language requests.

Describe a form, get back a validated, stored, shareable form schema.

Usage:
    from promptform import FormGenerationOrchestrator, InMemoryFormStore, render_form

    store = InMemoryFormStore()
    orchestrator = FormGenerationOrchestrator(store)

    form = await orchestrator.generate_form(
        "Registration form for a weekend coding workshop",
        owner_id="user-123",
    )

    rendered = render_form(form)
    print(rendered.to_json_schema())
"""

from promptform.config import PromptFormConfig, get_config, update_config
from promptform.errors import (
    AuthorizationError,
    ConflictError,
    FormNotPublicError,
    GenerationError,
    GenerationErrorKind,
    NotFoundError,
    PromptFormError,
    ResponseValidationError,
    SchemaValidationError,
    SlugConflictError,
)
from promptform.models import (
    FieldDefinition,
    FieldType,
    Form,
    FormCategory,
    Submission,
    SubmissionRequest,
    is_choice_type,
)
from promptform.orchestrator import FormGenerationOrchestrator, GenerationResult, generate_form
from promptform.management import FormManager, PublishResult
from promptform.submissions import SubmissionService
from promptform.analytics import submissions_over_time
from promptform.rendering import RenderedForm, render_form
from promptform.slugs import allocate_slug, slugify
from promptform.store import FormStore, InMemoryFormStore
from promptform.tracing import FileTracingProcessor, LoggingTracingProcessor, setup_tracing
from promptform.validation import validate_form_schema, validate_responses

__version__ = "0.1.0"

__all__ = [
    # Main API
    "FormGenerationOrchestrator",
    "GenerationResult",
    "generate_form",
    "FormManager",
    "PublishResult",
    "SubmissionService",
    "submissions_over_time",
    # Models
    "FieldDefinition",
    "FieldType",
    "Form",
    "FormCategory",
    "Submission",
    "SubmissionRequest",
    "is_choice_type",
    # Validation and rendering
    "validate_form_schema",
    "validate_responses",
    "RenderedForm",
    "render_form",
    "allocate_slug",
    "slugify",
    # Storage
    "FormStore",
    "InMemoryFormStore",
    # Errors
    "AuthorizationError",
    "ConflictError",
    "FormNotPublicError",
    "GenerationError",
    "GenerationErrorKind",
    "NotFoundError",
    "PromptFormError",
    "ResponseValidationError",
    "SchemaValidationError",
    "SlugConflictError",
    # Config
    "PromptFormConfig",
    "get_config",
    "update_config",
    # Tracing
    "setup_tracing",
    "LoggingTracingProcessor",
    "FileTracingProcessor",
]
