"""
In-memory form store.

Keeps documents in dicts behind a single asyncio.Lock. Suitable for tests,
local development and single-process deployments.
"""

import asyncio
from collections.abc import Iterable
from datetime import datetime

from promptform.errors import NotFoundError, SlugConflictError
from promptform.models.form import Form, Submission, utcnow
from promptform.store.base import FormStore


class InMemoryFormStore(FormStore):
    """FormStore backed by process memory."""

    def __init__(self):
        self._lock = asyncio.Lock()
        self._forms: dict[str, Form] = {}
        self._slugs: dict[str, str] = {}  # slug -> form id
        self._submissions: dict[str, Submission] = {}

    # Copies go in and out so callers cannot mutate stored documents.

    async def insert_form(self, form: Form) -> Form:
        async with self._lock:
            if form.slug in self._slugs:
                raise SlugConflictError(form.slug)
            stored = form.model_copy(deep=True)
            self._forms[stored.id] = stored
            self._slugs[stored.slug] = stored.id
            return stored.model_copy(deep=True)

    async def get_form(self, form_id: str) -> Form | None:
        form = self._forms.get(form_id)
        return form.model_copy(deep=True) if form else None

    async def get_form_by_slug(self, slug: str) -> Form | None:
        form_id = self._slugs.get(slug)
        return await self.get_form(form_id) if form_id else None

    async def slug_exists(self, slug: str) -> bool:
        return slug in self._slugs

    async def list_forms(self, owner_id: str) -> list[Form]:
        # Ties resolve to the newest insert.
        forms = [f for f in reversed(self._forms.values()) if f.owner_id == owner_id]
        forms.sort(key=lambda f: f.created_at, reverse=True)
        return [f.model_copy(deep=True) for f in forms]

    async def replace_form(self, form: Form) -> Form:
        async with self._lock:
            current = self._forms.get(form.id)
            if current is None:
                raise NotFoundError(f"Form '{form.id}' not found")
            if form.slug != current.slug:
                if form.slug in self._slugs:
                    raise SlugConflictError(form.slug)
                del self._slugs[current.slug]
                self._slugs[form.slug] = form.id
            stored = form.model_copy(deep=True)
            # Stats belong to insert_submission and the share token never changes.
            stored.submission_stats = current.submission_stats
            stored.sharing.share_token = current.sharing.share_token
            self._forms[form.id] = stored
            return stored.model_copy(deep=True)

    async def delete_form(self, form_id: str) -> int:
        async with self._lock:
            form = self._forms.pop(form_id, None)
            if form is None:
                return 0
            self._slugs.pop(form.slug, None)
            doomed = [s.id for s in self._submissions.values() if s.form_id == form_id]
            for submission_id in doomed:
                del self._submissions[submission_id]
            return len(doomed)

    async def insert_submission(self, submission: Submission) -> Form:
        async with self._lock:
            form = self._forms.get(submission.form_id)
            if form is None:
                raise NotFoundError(f"Form '{submission.form_id}' not found")
            self._submissions[submission.id] = submission.model_copy(deep=True)
            form.submission_stats.count += 1
            form.submission_stats.last_submitted_at = submission.submitted_at or utcnow()
            return form.model_copy(deep=True)

    async def get_submission(self, submission_id: str) -> Submission | None:
        submission = self._submissions.get(submission_id)
        return submission.model_copy(deep=True) if submission else None

    async def list_submissions(self, form_id: str) -> list[Submission]:
        submissions = [s for s in reversed(self._submissions.values()) if s.form_id == form_id]
        submissions.sort(key=lambda s: s.submitted_at, reverse=True)
        return [s.model_copy(deep=True) for s in submissions]

    async def list_submissions_since(self, form_ids: Iterable[str], since: datetime) -> list[Submission]:
        wanted = set(form_ids)
        submissions = [
            s for s in self._submissions.values()
            if s.form_id in wanted and s.submitted_at >= since
        ]
        submissions.sort(key=lambda s: s.submitted_at)
        return [s.model_copy(deep=True) for s in submissions]
