"""
Owner-side form management.

Every mutation is checked against the form's owner and fails closed: a form
that does not exist is reported the same way as one owned by someone else.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from promptform.config import get_config
from promptform.errors import (
    AuthorizationError,
    FormNotPublicError,
    NotFoundError,
    SchemaValidationError,
)
from promptform.models.field_schema import FieldDefinition
from promptform.models.form import Form, utcnow
from promptform.store.base import FormStore
from promptform.validation.schema import validate_form_schema

logger = logging.getLogger("promptform.management")

FieldInput = FieldDefinition | Mapping[str, Any]


class PublishResult(BaseModel):
    """Outcome of a publish toggle."""

    model_config = ConfigDict(populate_by_name=True)

    is_public: bool = Field(..., alias="isPublic")
    public_link: str = Field(..., alias="publicLink")


def _field_wire(field: FieldInput) -> dict[str, Any]:
    if isinstance(field, FieldDefinition):
        return field.to_wire()
    return dict(field)


class FormManager:
    """
    Reads and edits forms on behalf of their owners.

    Usage:
        manager = FormManager(store)
        forms = await manager.list_forms("user-123")
        result = await manager.toggle_public(forms[0].id, "user-123")
    """

    def __init__(self, store: FormStore, public_base_url: str | None = None):
        self.store = store
        self.public_base_url = (public_base_url or get_config().public_base_url).rstrip("/")

    def public_link(self, form: Form) -> str:
        return f"{self.public_base_url}/form/{form.slug}"

    async def list_forms(self, owner_id: str) -> list[Form]:
        """All forms of an owner, newest first."""
        return await self.store.list_forms(owner_id)

    async def get_form(self, form_id: str, owner_id: str) -> Form:
        form = await self.store.get_form(form_id)
        if form is None:
            raise NotFoundError("Form not found")
        if form.owner_id != owner_id:
            raise AuthorizationError()
        return form

    async def get_public_form(self, slug: str) -> Form:
        """Resolve a public link. Anyone may call this."""
        form = await self.store.get_form_by_slug(slug)
        if form is None:
            raise NotFoundError("Form not found")
        if not form.sharing.is_public:
            raise FormNotPublicError()
        return form

    async def _owned(self, form_id: str, owner_id: str) -> Form:
        form = await self.store.get_form(form_id)
        if form is None or form.owner_id != owner_id:
            raise AuthorizationError()
        return form

    async def update_form(
        self,
        form_id: str,
        owner_id: str,
        form_name: str | None = None,
        description: str | None = None,
        fields: Sequence[FieldInput] | None = None,
    ) -> Form:
        """
        Edit a form's name, description or field list.

        Omitted values keep their current content. The merged schema must
        pass validation again. The slug and sharing settings never change.

        Raises:
            AuthorizationError: Form missing or not owned by `owner_id`.
            SchemaValidationError: The edited schema is invalid.
        """
        form = await self._owned(form_id, owner_id)

        candidate = {
            "formName": form_name if form_name is not None else form.form_name,
            "description": description if description is not None else form.description,
            "category": form.category.value,
            "fields": (
                [_field_wire(f) for f in fields]
                if fields is not None
                else [f.to_wire() for f in form.fields]
            ),
        }
        result = validate_form_schema(candidate)
        if not result.is_valid:
            raise SchemaValidationError(result.errors)

        validated = result.form
        updated = form.model_copy(update={
            "form_name": validated.form_name,
            "description": validated.description,
            "fields": validated.fields,
            "updated_at": utcnow(),
        })
        stored = await self.store.replace_form(updated)
        logger.info("Updated form %s", form_id)
        return stored

    async def add_field(
        self,
        form_id: str,
        owner_id: str,
        field: FieldInput,
        position: int | None = None,
    ) -> Form:
        """Insert a field at `position` (end of the list by default)."""
        form = await self._owned(form_id, owner_id)
        fields = [f.to_wire() for f in form.fields]
        if position is None:
            fields.append(_field_wire(field))
        else:
            fields.insert(position, _field_wire(field))
        return await self.update_form(form_id, owner_id, fields=fields)

    async def remove_field(self, form_id: str, owner_id: str, field_id: str) -> Form:
        form = await self._owned(form_id, owner_id)
        if field_id not in form.field_map():
            raise NotFoundError(f"Field '{field_id}' not found")
        fields = [f for f in form.fields if f.field_id != field_id]
        return await self.update_form(form_id, owner_id, fields=fields)

    async def reorder_fields(self, form_id: str, owner_id: str, field_ids: Sequence[str]) -> Form:
        """Reorder fields. `field_ids` must name every field exactly once."""
        form = await self._owned(form_id, owner_id)
        by_id = form.field_map()
        if sorted(field_ids) != sorted(by_id):
            raise SchemaValidationError(
                [],
                message="Field order must list every field of the form exactly once",
            )
        return await self.update_form(form_id, owner_id, fields=[by_id[f] for f in field_ids])

    async def set_public(self, form_id: str, owner_id: str, is_public: bool) -> PublishResult:
        """
        Set a form's public visibility.

        The share token is left untouched, so a form that is unpublished and
        published again keeps the same token and link.
        """
        form = await self._owned(form_id, owner_id)
        form.sharing.is_public = is_public
        form.updated_at = utcnow()
        stored = await self.store.replace_form(form)
        logger.info("Form %s is now %s", form_id, "public" if is_public else "private")
        return PublishResult(is_public=stored.sharing.is_public, public_link=self.public_link(stored))

    async def toggle_public(self, form_id: str, owner_id: str) -> PublishResult:
        form = await self._owned(form_id, owner_id)
        return await self.set_public(form_id, owner_id, not form.sharing.is_public)

    async def delete_form(self, form_id: str, owner_id: str) -> int:
        """Delete a form and all its submissions. Returns the number of submissions removed."""
        await self._owned(form_id, owner_id)
        removed = await self.store.delete_form(form_id)
        logger.info("Deleted form %s and %d submission(s)", form_id, removed)
        return removed
