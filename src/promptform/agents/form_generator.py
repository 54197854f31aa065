"""
Form Generator Agent.

Produces a candidate form definition, as JSON text, from a user request.
Parsing and validation of the text happen outside the agent.
"""

from agents import Agent

from promptform.agents.instructions import FORM_GENERATOR_INSTRUCTIONS
from promptform.guardrails.input_guardrails import query_safety_guardrail
from promptform.config import get_config


def create_form_generator_agent(
    model: str | None = None,
    enable_guardrails: bool = True,
) -> Agent[None]:
    """
    Create the Form Generator agent.

    Args:
        model: The OpenAI model to use. If None, uses config.default_model.
        enable_guardrails: Whether to screen requests with the input guardrail.

    Returns:
        Configured Agent instance.
    """
    config = get_config()
    model = model or config.default_model

    input_guardrails = [query_safety_guardrail] if enable_guardrails else []

    return Agent[None](
        name="Form Generator",
        instructions=FORM_GENERATOR_INSTRUCTIONS,
        model=model,
        model_settings=config.get_model_settings(),
        input_guardrails=input_guardrails,
    )
