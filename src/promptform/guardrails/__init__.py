"""
Guardrails for promptform.

Basic safety checks for generation requests.
"""

from promptform.guardrails.input_guardrails import check_query, query_safety_guardrail

__all__ = [
    "check_query",
    "query_safety_guardrail",
]
