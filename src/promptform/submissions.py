"""
Public submissions.

Respondents submit to a public form; owners read the results back.
"""

import logging

from pydantic import ValidationError

from promptform.errors import (
    AuthorizationError,
    FormNotPublicError,
    NotFoundError,
    ResponseValidationError,
)
from promptform.models.field_schema import FieldType
from promptform.models.form import (
    FileDescriptor,
    Form,
    Submission,
    SubmissionMetadata,
    SubmissionRequest,
    UploadedFile,
)
from promptform.store.base import FormStore
from promptform.validation.responses import validate_responses

logger = logging.getLogger("promptform.submissions")


def _collect_uploads(form: Form, responses: dict) -> list[UploadedFile]:
    """Build upload records from FILE_UPLOAD answers."""
    uploads = []
    for field in form.fields:
        if field.type is not FieldType.FILE_UPLOAD or field.field_id not in responses:
            continue
        try:
            descriptor = FileDescriptor.model_validate(responses[field.field_id])
        except ValidationError:
            continue
        uploads.append(UploadedFile(
            field_id=field.field_id,
            storage_id=descriptor.storage_id,
            url=descriptor.url,
        ))
    return uploads


class SubmissionService:
    """Accepts submissions and serves them to form owners."""

    def __init__(self, store: FormStore):
        self.store = store

    async def submit(
        self,
        form_id: str,
        request: SubmissionRequest,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Submission:
        """
        Validate and store a submission.

        Answers to unknown field ids are dropped, as are uploads that do not
        belong to one of the form's FILE_UPLOAD fields. The form's submission count
        is incremented in the same store operation that saves the submission.

        Raises:
            NotFoundError: No such form.
            FormNotPublicError: The form is not accepting public submissions.
            ResponseValidationError: At least one answer is invalid; `errors`
                maps each offending field id to its message.
        """
        form = await self.store.get_form(form_id)
        if form is None:
            raise NotFoundError("Form not found")
        if not form.sharing.is_public:
            raise FormNotPublicError()

        errors = validate_responses(form.fields, request.responses)
        if errors:
            raise ResponseValidationError(errors)

        known = form.field_map()
        responses = {k: v for k, v in request.responses.items() if k in known}

        if request.uploaded_files is None:
            uploads = _collect_uploads(form, responses)
        else:
            upload_fields = {f.field_id for f in form.fields if f.type is FieldType.FILE_UPLOAD}
            uploads = [u for u in request.uploaded_files if u.field_id in upload_fields]
            if len(uploads) != len(request.uploaded_files):
                logger.info("Dropped uploads for unknown fields on form %s", form.id)

        submission = Submission(
            form_id=form.id,
            submitter_email=request.submitter_email,
            responses=responses,
            uploaded_files=uploads,
            metadata=SubmissionMetadata(
                ip_address=ip_address,
                user_agent=user_agent,
                time_spent=request.time_spent,
            ),
        )
        await self.store.insert_submission(submission)
        logger.info("Stored submission %s for form %s", submission.id, form.id)
        return submission

    async def _owned_form(self, form_id: str, owner_id: str) -> Form:
        form = await self.store.get_form(form_id)
        if form is None or form.owner_id != owner_id:
            raise AuthorizationError()
        return form

    async def list_submissions(self, form_id: str, owner_id: str) -> list[Submission]:
        """Submissions of an owned form, newest first."""
        await self._owned_form(form_id, owner_id)
        return await self.store.list_submissions(form_id)

    async def get_submission(self, submission_id: str, owner_id: str) -> Submission:
        submission = await self.store.get_submission(submission_id)
        if submission is None:
            raise NotFoundError("Submission not found")
        await self._owned_form(submission.form_id, owner_id)
        return submission
