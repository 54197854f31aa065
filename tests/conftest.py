"""Shared fixtures for promptform tests."""

import asyncio
import json

import pytest

from promptform.config import PromptFormConfig
from promptform.models.field_schema import FieldDefinition
from promptform.models.form import Form, Sharing, new_share_token
from promptform.store.memory import InMemoryFormStore


FEEDBACK_FORM = {
    "formName": "Coffee Shop Feedback",
    "description": "Tell us about your visit",
    "category": "feedback",
    "fields": [
        {"fieldId": "name", "type": "NAME", "displayName": "Your Name", "mandatory": True},
        {"fieldId": "email", "type": "EMAIL", "displayName": "Email", "mandatory": True},
        {
            "fieldId": "visit_type",
            "type": "RADIO",
            "displayName": "How did you order?",
            "mandatory": False,
            "choices": ["In store", "Takeaway", "Delivery"],
        },
        {"fieldId": "rating", "type": "RATING", "displayName": "Overall rating", "mandatory": True},
        {
            "fieldId": "comments",
            "type": "MULTI_LINE",
            "displayName": "Comments",
            "validation": {"maxLength": 200},
        },
    ],
}


class FakeProvider:
    """SchemaProvider returning canned output."""

    def __init__(self, output: str = "", delay: float = 0.0, error: Exception | None = None):
        self.output = output
        self.delay = delay
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def config():
    return PromptFormConfig(
        enable_tracing=False,
        enable_guardrails=False,
        generation_timeout_seconds=0.5,
        public_base_url="https://forms.example.com",
    )


@pytest.fixture
def store():
    return InMemoryFormStore()


@pytest.fixture
def feedback_json():
    return json.dumps(FEEDBACK_FORM)


@pytest.fixture
def provider(feedback_json):
    return FakeProvider(feedback_json)


def make_fields() -> list[FieldDefinition]:
    return [FieldDefinition.model_validate(f) for f in FEEDBACK_FORM["fields"]]


async def make_form(
    store: InMemoryFormStore,
    owner_id: str = "owner-1",
    slug: str = "coffee-shop-feedback",
    is_public: bool = False,
) -> Form:
    """Insert a form directly, bypassing generation."""
    form = Form(
        owner_id=owner_id,
        form_name=FEEDBACK_FORM["formName"],
        slug=slug,
        description=FEEDBACK_FORM["description"],
        fields=make_fields(),
        sharing=Sharing(is_public=is_public, share_token=new_share_token()),
    )
    return await store.insert_form(form)


VALID_RESPONSES = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "visit_type": "Takeaway",
    "rating": 5,
    "comments": "Great flat white",
}


