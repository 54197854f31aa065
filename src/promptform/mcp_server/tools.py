"""
MCP Tool definitions for promptform.

`generate_form` forwards to a running promptform API; `validate_responses`
runs locally against a field list supplied by the caller.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from promptform.config import get_config
from promptform.mcp_server.session_store import get_session_owner_id
from promptform.models.field_schema import FieldDefinition
from promptform.validation.responses import validate_responses

logger = logging.getLogger("promptform-mcp")


async def mcp_generate_form(
    query: str,
    owner_id: str | None = None,
    api_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """
    Generate a form through the promptform API.

    Args:
        query: Natural-language description of the form.
        owner_id: User the form is created for. Required over stdio; over
            SSE it defaults to, and must match, the id sent on connect.
        api_url: Base URL of the API. Defaults to config.api_url.
        transport: Optional httpx transport, e.g. to call an in-process app.

    Returns:
        On success: formId, slug, formName and the field list.
        On failure: a dict with `error` (and `kind` for generation errors).
    """
    config = get_config()
    api_url = (api_url or config.api_url).rstrip("/")
    session_owner_id = get_session_owner_id()
    if session_owner_id and owner_id and owner_id != session_owner_id:
        return {"error": "owner_id does not match the connected user"}
    owner_id = session_owner_id or owner_id
    if not owner_id:
        return {"error": "owner_id is required"}

    logger.info("POST to promptform API: %s/api/forms/generate", api_url)
    try:
        timeout = config.generation_timeout_seconds + 10.0
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.post(
                f"{api_url}/api/forms/generate",
                json={"query": query},
                headers={"X-User-Id": owner_id},
            )
    except httpx.HTTPError as e:
        logger.error("Failed to reach promptform API: %s: %s", type(e).__name__, e)
        return {"error": f"promptform API unreachable: {e}"}

    try:
        result = response.json()
    except ValueError:
        return {"error": f"promptform API returned HTTP {response.status_code}"}

    if response.status_code != 200:
        error = {"error": result.get("error", f"HTTP {response.status_code}")}
        for key in ("kind", "violations"):
            if key in result:
                error[key] = result[key]
        return error

    form = result.get("form", {})
    return {
        "message": result.get("message"),
        "formId": result.get("formId"),
        "slug": form.get("slug"),
        "formName": form.get("formName"),
        "isPublic": form.get("sharing", {}).get("isPublic", False),
        "fields": form.get("fields", []),
    }


def mcp_validate_responses(
    fields: list[dict[str, Any]],
    responses: dict[str, Any],
) -> dict[str, Any]:
    """
    Check responses against a field list without submitting them.

    Returns:
        {"valid": bool, "errors": {fieldId: message}}
    """
    try:
        definitions = [FieldDefinition.model_validate(f) for f in fields]
    except ValidationError as e:
        return {"error": f"Invalid field definition: {e.errors()[0]['msg']}"}

    errors = validate_responses(definitions, responses)
    return {"valid": not errors, "errors": errors}


def get_mcp_tools() -> list[dict]:
    """
    Get MCP tool definitions for registration with MCP server.

    Returns list of tool schemas compatible with MCP protocol.
    """
    return [
        {
            "name": "generate_form",
            "description": """
Generate a form from a plain-language description.

WHEN TO USE:
- When the user asks for a survey, registration, feedback or other form
- When an existing form should be recreated from a new description

HOW TO USE:
- Describe the purpose of the form and any fields that must be present
- One call creates one private form; the owner publishes it separately

RETURNS:
- formId and slug of the stored form
- formName and the generated field list
- error and kind (ProviderUnavailable, MalformedOutput, InvalidSchema,
  InvalidQuery) when generation failed. Nothing is stored in that case.
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "What the form is for, e.g. 'Customer feedback for a coffee shop'",
                    },
                    "owner_id": {
                        "type": "string",
                        "description": "User the form is created for (defaults to the connection's user)",
                    },
                },
                "required": ["query"],
            },
        },
        {
            "name": "validate_responses",
            "description": """
Check answers against a form's fields before submitting them.

Returns {"valid": true, "errors": {}} when every answer is acceptable,
otherwise errors maps each offending fieldId to one message.
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "fields": {
                        "type": "array",
                        "items": {"type": "object"},
                        "description": "Field definitions (fieldId, type, displayName, mandatory, ...)",
                    },
                    "responses": {
                        "type": "object",
                        "description": "Answers keyed by fieldId",
                    },
                },
                "required": ["fields", "responses"],
            },
        },
    ]
