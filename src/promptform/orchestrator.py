"""
Form Generation Orchestrator.

This is the main entry point for generation: give it a natural-language
request and an owner, get back a persisted, validated, private form.
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass

from agents import trace
from pydantic import ValidationError

from promptform.agents.instructions import FORM_GENERATION_PROMPT_TEMPLATE
from promptform.agents.provider import AgentSchemaProvider, SchemaProvider
from promptform.config import PromptFormConfig, get_config
from promptform.errors import GenerationError, GenerationErrorKind, SlugConflictError
from promptform.models.candidate import CandidateForm
from promptform.models.field_schema import FormCategory
from promptform.models.form import Form, Sharing, new_share_token
from promptform.models.validation_result import ValidatedForm
from promptform.slugs import SlugLocks, allocate_slug, slugify
from promptform.store.base import FormStore
from promptform.tracing import setup_tracing
from promptform.validation.schema import validate_form_schema

logger = logging.getLogger("promptform.orchestrator")

_CODE_FENCE = re.compile(r"^```[\w-]*\s*\n(.*)\n\s*```$", re.DOTALL)


@dataclass
class GenerationResult:
    """A stored form plus the raw proposal it was built from."""

    form: Form
    proposal: CandidateForm


class FormGenerationOrchestrator:
    """
    Generates forms from natural-language requests.

    Usage:
        orchestrator = FormGenerationOrchestrator(store)

        form = await orchestrator.generate_form(
            "Customer feedback survey for a coffee shop",
            owner_id="user-123",
        )

        print(form.slug, [f.field_id for f in form.fields])
    """

    def __init__(
        self,
        store: FormStore,
        provider: SchemaProvider | None = None,
        config: PromptFormConfig | None = None,
        slug_locks: SlugLocks | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            store: Where generated forms are persisted.
            provider: Source of candidate schemas. Defaults to the agent provider.
            config: Settings to use. Defaults to the global configuration.
            slug_locks: Lock registry shared with other writers of the same store.
        """
        self.store = store
        self.config = config or get_config()
        self.provider = provider or AgentSchemaProvider(
            enable_guardrails=self.config.enable_guardrails,
        )
        self.slug_locks = slug_locks if slug_locks is not None else SlugLocks()

        setup_tracing(
            enabled=self.config.enable_tracing,
            console=self.config.trace_console,
            verbose=self.config.trace_verbose,
            file_path=self.config.trace_file,
        )

    def build_prompt(self, query: str) -> str:
        """Build the generation prompt for a request."""
        return FORM_GENERATION_PROMPT_TEMPLATE.format(
            query=query.strip(),
            output_schema=json.dumps(CandidateForm.model_json_schema(by_alias=True), indent=2),
            categories=", ".join(c.value for c in FormCategory),
        )

    def parse_output(self, text: str) -> CandidateForm:
        """
        Parse raw model output into a candidate form.

        One surrounding Markdown code fence is stripped. Nothing else is
        repaired: invalid JSON or missing `formName`/`fields` is malformed.
        """
        text = text.strip()
        match = _CODE_FENCE.match(text)
        if match:
            text = match.group(1).strip()

        try:
            return CandidateForm.model_validate_json(text)
        except ValidationError as e:
            raise GenerationError(
                GenerationErrorKind.MALFORMED_OUTPUT,
                f"Failed to parse AI response: {e.error_count()} problem(s), first: {e.errors()[0]['msg']}",
            ) from e

    async def generate(self, query: str, owner_id: str) -> GenerationResult:
        """
        Generate, validate and persist a form.

        Args:
            query: What the form is for, in plain language.
            owner_id: User who will own the form.

        Returns:
            GenerationResult with the stored form and the parsed proposal.

        Raises:
            GenerationError: INVALID_QUERY, PROVIDER_UNAVAILABLE,
                MALFORMED_OUTPUT or INVALID_SCHEMA. Nothing is stored.
            ConflictError: The slug collided twice with concurrent writers.
        """
        if not query or not query.strip():
            raise GenerationError(GenerationErrorKind.INVALID_QUERY, "Query is required")

        with trace("form_generation", metadata={"owner_id": owner_id}):
            raw = await self._complete(self.build_prompt(query))
            proposal = self.parse_output(raw)

            result = validate_form_schema(proposal)
            if not result.is_valid:
                logger.info(
                    "Rejected generated schema for owner %s: %d violation(s)",
                    owner_id,
                    result.error_count,
                )
                raise GenerationError(
                    GenerationErrorKind.INVALID_SCHEMA,
                    "Generated form schema is invalid",
                    violations=result.errors,
                )

            form = await self._persist(result.form, query, owner_id)

        logger.info("Generated form %s (%s) for owner %s", form.id, form.slug, owner_id)
        return GenerationResult(form=form, proposal=proposal)

    async def generate_form(self, query: str, owner_id: str) -> Form:
        """Generate a form and return only the stored record."""
        result = await self.generate(query, owner_id)
        return result.form

    async def _complete(self, prompt: str) -> str:
        timeout = self.config.generation_timeout_seconds
        try:
            return await asyncio.wait_for(self.provider.complete(prompt), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise GenerationError(
                GenerationErrorKind.PROVIDER_UNAVAILABLE,
                f"Model provider did not answer within {timeout:g}s",
            ) from e
        except ConnectionError as e:
            raise GenerationError(
                GenerationErrorKind.PROVIDER_UNAVAILABLE,
                f"Model provider unreachable: {e}",
            ) from e

    async def _persist(self, validated: ValidatedForm, query: str, owner_id: str) -> Form:
        base = slugify(validated.form_name, self.config.slug_max_length)

        async with self.slug_locks.hold(base):
            try:
                return await self._insert(validated, query, owner_id)
            except SlugConflictError as e:
                # Another writer outside this lock registry took the slug.
                logger.warning("Slug %s taken during insert, allocating again", e.slug)
            return await self._insert(validated, query, owner_id)

    async def _insert(self, validated: ValidatedForm, query: str, owner_id: str) -> Form:
        slug = await allocate_slug(
            validated.form_name,
            self.store.slug_exists,
            self.config.slug_max_length,
        )
        form = Form(
            owner_id=owner_id,
            form_name=validated.form_name,
            slug=slug,
            description=validated.description,
            category=validated.category,
            fields=validated.fields,
            generated_prompt=query,
            sharing=Sharing(is_public=False, share_token=new_share_token()),
        )
        return await self.store.insert_form(form)


async def generate_form(
    query: str,
    owner_id: str,
    store: FormStore,
    provider: SchemaProvider | None = None,
    config: PromptFormConfig | None = None,
) -> Form:
    """
    Convenience function to generate and store a form.

    Example:
        >>> from promptform import InMemoryFormStore, generate_form
        >>> store = InMemoryFormStore()
        >>> form = await generate_form("Event RSVP", owner_id="u1", store=store)
    """
    orchestrator = FormGenerationOrchestrator(store, provider=provider, config=config)
    return await orchestrator.generate_form(query, owner_id)
