"""
Schema providers.

A provider turns a prompt into raw text. The orchestrator only depends on
`complete()`, so tests and alternative backends can stand in for the agent.
"""

import logging
from typing import Protocol

import openai
from agents import (
    Agent,
    AgentsException,
    InputGuardrailTripwireTriggered,
    MaxTurnsExceeded,
    ModelBehaviorError,
    Runner,
)

from promptform.agents.form_generator import create_form_generator_agent
from promptform.errors import GenerationError, GenerationErrorKind

logger = logging.getLogger("promptform.provider")


class SchemaProvider(Protocol):
    """Anything that can complete a generation prompt."""

    async def complete(self, prompt: str) -> str: ...


class AgentSchemaProvider:
    """SchemaProvider backed by the Form Generator agent."""

    def __init__(
        self,
        model: str | None = None,
        enable_guardrails: bool = True,
        agent: Agent[None] | None = None,
    ):
        self._agent = agent or create_form_generator_agent(
            model=model,
            enable_guardrails=enable_guardrails,
        )

    async def complete(self, prompt: str) -> str:
        try:
            result = await Runner.run(self._agent, prompt, max_turns=1)
        except InputGuardrailTripwireTriggered as e:
            info = e.guardrail_result.output.output_info
            logger.warning("Generation request rejected by guardrail: %s", info)
            raise GenerationError(
                GenerationErrorKind.INVALID_QUERY,
                "Request contains potentially unsafe content",
            ) from e
        except (ModelBehaviorError, MaxTurnsExceeded) as e:
            raise GenerationError(
                GenerationErrorKind.MALFORMED_OUTPUT,
                f"Model produced unusable output: {e}",
            ) from e
        except openai.APIError as e:
            logger.error("Model provider failed: %s: %s", type(e).__name__, e)
            raise GenerationError(
                GenerationErrorKind.PROVIDER_UNAVAILABLE,
                f"Model provider failed: {e}",
            ) from e
        except AgentsException as e:
            logger.error("Agent run failed: %s: %s", type(e).__name__, e)
            raise GenerationError(
                GenerationErrorKind.PROVIDER_UNAVAILABLE,
                f"Agent run failed: {e}",
            ) from e

        output = result.final_output
        if not isinstance(output, str):
            raise GenerationError(
                GenerationErrorKind.MALFORMED_OUTPUT,
                f"Unexpected output type: {type(output).__name__}",
            )
        return output
