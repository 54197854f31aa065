"""
Starlette application exposing forms, submissions and analytics.

Owner-scoped routes read the caller from the `X-User-Id` header, which an
upstream authentication layer is expected to set.
"""

import logging
from typing import Any

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from promptform.analytics import submissions_over_time
from promptform.config import PromptFormConfig, get_config
from promptform.errors import AuthenticationError, InvalidRequestError, PromptFormError
from promptform.management import FormManager
from promptform.models.form import SubmissionRequest
from promptform.orchestrator import FormGenerationOrchestrator
from promptform.rendering import render_form
from promptform.store.base import FormStore
from promptform.store.memory import InMemoryFormStore
from promptform.submissions import SubmissionService

logger = logging.getLogger("promptform.api")

USER_HEADER = "x-user-id"


def _owner(request: Request) -> str:
    owner_id = request.headers.get(USER_HEADER, "").strip()
    if not owner_id:
        raise AuthenticationError()
    return owner_id


async def _json_body(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidRequestError("Request body must be valid JSON") from e
    if not isinstance(body, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return body


def _ok(data: Any = None, status_code: int = 200, **extra: Any) -> JSONResponse:
    payload: dict[str, Any] = {"success": True}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return JSONResponse(payload, status_code=status_code)


# --- Handlers ----------------------------------------------------------------


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "healthy", "service": "promptform"})


async def generate(request: Request) -> JSONResponse:
    owner_id = _owner(request)
    body = await _json_body(request)
    query = body.get("query")
    if not isinstance(query, str):
        raise InvalidRequestError("Query is required")

    result = await request.app.state.orchestrator.generate(query, owner_id)
    return _ok(
        result.proposal.to_wire(),
        message="Form generated successfully",
        formId=result.form.id,
        form=result.form.to_wire(),
    )


async def list_forms(request: Request) -> JSONResponse:
    forms = await request.app.state.manager.list_forms(_owner(request))
    return _ok([f.to_summary() for f in forms])


async def get_public_form(request: Request) -> JSONResponse:
    form = await request.app.state.manager.get_public_form(request.path_params["slug"])
    return _ok(form.to_wire(), formConfig=render_form(form).to_form_config())


async def get_form(request: Request) -> JSONResponse:
    form = await request.app.state.manager.get_form(request.path_params["form_id"], _owner(request))
    return _ok(form.to_wire())


async def update_form(request: Request) -> JSONResponse:
    owner_id = _owner(request)
    body = await _json_body(request)
    fields = body.get("fields")
    if fields is not None and not isinstance(fields, list):
        raise InvalidRequestError("Fields must be a list")

    form = await request.app.state.manager.update_form(
        request.path_params["form_id"],
        owner_id,
        form_name=body.get("formName") or None,
        description=body.get("description") or None,
        fields=fields,
    )
    return _ok(form.to_wire(), message="Form updated successfully")


async def delete_form(request: Request) -> JSONResponse:
    removed = await request.app.state.manager.delete_form(request.path_params["form_id"], _owner(request))
    return _ok(message="Form deleted successfully", deletedSubmissions=removed)


async def toggle_publish(request: Request) -> JSONResponse:
    result = await request.app.state.manager.toggle_public(request.path_params["form_id"], _owner(request))
    return _ok(
        message="Form published" if result.is_public else "Form unpublished",
        isPublic=result.is_public,
        publicLink=result.public_link,
    )


async def list_submissions(request: Request) -> JSONResponse:
    submissions = await request.app.state.submissions.list_submissions(
        request.path_params["form_id"], _owner(request)
    )
    return _ok([s.to_wire() for s in submissions])


async def create_submission(request: Request) -> JSONResponse:
    body = await _json_body(request)
    try:
        submission_request = SubmissionRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestError(f"Invalid submission: {e.errors()[0]['msg']}") from e

    submission = await request.app.state.submissions.submit(
        request.path_params["form_id"],
        submission_request,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return _ok(
        {"submissionId": submission.id},
        status_code=201,
        message="Submission created successfully",
    )


async def get_submission(request: Request) -> JSONResponse:
    submission = await request.app.state.submissions.get_submission(
        request.path_params["submission_id"], _owner(request)
    )
    return _ok(submission.to_wire())


async def analytics_over_time(request: Request) -> JSONResponse:
    owner_id = _owner(request)
    try:
        days = int(request.query_params.get("days", "30"))
    except ValueError as e:
        raise InvalidRequestError("days must be an integer") from e
    if days < 1:
        raise InvalidRequestError("days must be at least 1")

    report = await submissions_over_time(request.app.state.store, owner_id, days=days)
    return _ok(report.to_wire())


# --- Error handling ----------------------------------------------------------


async def promptform_error_handler(request: Request, exc: PromptFormError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.error_code, exc.message)
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


def create_app(
    store: FormStore | None = None,
    orchestrator: FormGenerationOrchestrator | None = None,
    config: PromptFormConfig | None = None,
) -> Starlette:
    """
    Build the API application.

    Args:
        store: Backing store. Defaults to a fresh in-memory store.
        orchestrator: Form generator. Defaults to one using the agent provider.
        config: Settings to use. Defaults to the global configuration.
    """
    config = config or get_config()
    store = store or (orchestrator.store if orchestrator else InMemoryFormStore())

    app = Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Route("/api/forms/generate", generate, methods=["POST"]),
            Route("/api/forms", list_forms, methods=["GET"]),
            Route("/api/forms/public/{slug}", get_public_form, methods=["GET"]),
            Route("/api/forms/{form_id}", get_form, methods=["GET"]),
            Route("/api/forms/{form_id}", update_form, methods=["POST"]),
            Route("/api/forms/{form_id}", delete_form, methods=["DELETE"]),
            Route("/api/forms/{form_id}/publish", toggle_publish, methods=["PATCH"]),
            Route("/api/forms/{form_id}/submissions", list_submissions, methods=["GET"]),
            Route("/api/submissions/analytics/submissions-over-time", analytics_over_time, methods=["GET"]),
            Route("/api/submissions/{form_id}", create_submission, methods=["POST"]),
            Route("/api/submissions/{submission_id}", get_submission, methods=["GET"]),
        ],
        exception_handlers={PromptFormError: promptform_error_handler},
    )

    app.state.config = config
    app.state.store = store
    app.state.orchestrator = orchestrator or FormGenerationOrchestrator(store, config=config)
    app.state.manager = FormManager(store, public_base_url=config.public_base_url)
    app.state.submissions = SubmissionService(store)
    return app
