"""
Persistence interface for forms and submissions.

Implementations must enforce three invariants of the document store the
service runs against:
- `Form.slug` is unique (insert raises SlugConflictError);
- inserting a submission increments its form's submission count atomically;
- deleting a form deletes its submissions, and no submission may reference
  a missing form.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime

from promptform.models.form import Form, Submission


class FormStore(ABC):
    """Async storage handle, passed explicitly to every operation."""

    # --- Forms ---

    @abstractmethod
    async def insert_form(self, form: Form) -> Form:
        """Persist a new form. Raises SlugConflictError if the slug is taken."""

    @abstractmethod
    async def get_form(self, form_id: str) -> Form | None: ...

    @abstractmethod
    async def get_form_by_slug(self, slug: str) -> Form | None: ...

    @abstractmethod
    async def slug_exists(self, slug: str) -> bool: ...

    @abstractmethod
    async def list_forms(self, owner_id: str) -> list[Form]:
        """Forms owned by `owner_id`, newest first."""

    @abstractmethod
    async def replace_form(self, form: Form) -> Form:
        """Overwrite an existing form. Raises NotFoundError if it is gone."""

    @abstractmethod
    async def delete_form(self, form_id: str) -> int:
        """Delete a form and its submissions. Returns the number of submissions removed."""

    # --- Submissions ---

    @abstractmethod
    async def insert_submission(self, submission: Submission) -> Form:
        """
        Persist a submission and bump its form's stats in one step.

        Returns the form with updated stats. Raises NotFoundError if the
        form does not exist.
        """

    @abstractmethod
    async def get_submission(self, submission_id: str) -> Submission | None: ...

    @abstractmethod
    async def list_submissions(self, form_id: str) -> list[Submission]:
        """Submissions of one form, newest first."""

    @abstractmethod
    async def list_submissions_since(self, form_ids: Iterable[str], since: datetime) -> list[Submission]:
        """Submissions of any of `form_ids` at or after `since`, oldest first."""
