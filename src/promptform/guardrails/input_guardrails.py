"""
Input guardrails for promptform.

These guardrails screen generation requests before the model sees them.
"""

import re
from typing import Any

from agents import (
    Agent,
    GuardrailFunctionOutput,
    RunContextWrapper,
    TResponseInputItem,
    input_guardrail,
)
from pydantic import BaseModel, Field

from promptform.guardrails.constants import MAX_QUERY_LENGTH, SUSPICIOUS_PATTERNS

_USER_REQUEST = re.compile(r"User Request:\s*\n(.*?)\n\s*\nThe output must be", re.DOTALL)


class SafetyCheckResult(BaseModel):
    """Result of input safety check."""

    is_safe: bool = Field(..., description="Whether the input is safe")
    issues: list[str] = Field(default_factory=list, description="Any issues found")


def _check_for_injection(text: str) -> bool:
    """Check for potential injection patterns."""
    for pattern in SUSPICIOUS_PATTERNS:
        if re.search(pattern, text, re.IGNORECASE):
            return False
    return True


def _extract_query(text: str) -> str:
    """Pull the user's request out of a generation prompt."""
    match = _USER_REQUEST.search(text)
    return match.group(1).strip() if match else text


def check_query(query: str) -> SafetyCheckResult:
    """
    Screen a raw generation request.

    Checks for:
    1. Length within MAX_QUERY_LENGTH
    2. No injection patterns
    """
    issues = []

    if len(query) > MAX_QUERY_LENGTH:
        issues.append(f"Request is longer than {MAX_QUERY_LENGTH} characters")

    if not _check_for_injection(query):
        issues.append("Potentially unsafe content detected")

    return SafetyCheckResult(is_safe=not issues, issues=issues)


@input_guardrail
async def query_safety_guardrail(
    ctx: RunContextWrapper[Any],
    agent: Agent[Any],
    input: str | list[TResponseInputItem],
) -> GuardrailFunctionOutput:
    """Trip on requests that look like script or template injection."""
    if isinstance(input, list):
        text = " ".join(
            str(item.get("content", "")) if isinstance(item, dict) else str(item)
            for item in input
        )
    else:
        text = str(input)

    # The prompt template itself contains braces, so only the request is screened.
    result = check_query(_extract_query(text))

    return GuardrailFunctionOutput(
        output_info=result.model_dump(),
        tripwire_triggered=not result.is_safe,
    )
