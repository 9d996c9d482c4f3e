"""
State machine behind the application form.

``FormStateMachine`` owns the draft, the per-field errors, the wizard step and
the submission status. Renderers read its state and call its operations;
every operation either applies fully or is ignored and reports ``False``.
Validation failures are recorded as error messages, never raised.
"""

import asyncio
import logging
from typing import Dict, Optional, Union

from models.draft import ApplicationDraft, BinaryFileRef, FileValue, TextValue, coerce_field_value
from models.status import STEP_FIELDS, FormField, SubmissionStatus, WizardStep
from utils.notifications import (
    Notification,
    NotificationLog,
    NotificationSink,
    submission_failed_notification,
    submission_succeeded_notification,
    validation_failed_notification,
)
from utils.transport import SimulatedSubmissionTransport, SubmissionReceipt, SubmissionTransport
from utils.validation import (
    COVER_LETTER_WORD_LIMIT,
    DEFAULT_RESUME_POLICY,
    FieldErrorSet,
    ResumePolicy,
    count_words,
    cover_letter_warning,
    has_errors,
    is_form_valid,
    validate_field,
    validate_form,
)
from utils.wizard_policy import (
    DIRECTION_BACK,
    DIRECTION_NEXT,
    StepTransitionResult,
    resolve_step_transition,
)

logger = logging.getLogger(__name__)


class FormStateMachine:
    """
    Draft, errors, wizard step and submission lifecycle of one application.

    Edits and navigation are accepted only while the status is ``idle``;
    during ``submitting`` the in-flight draft must stay equal to the retained
    one, and a ``submitted`` form only accepts ``reset_after_submission``.
    """

    def __init__(
        self,
        transport: Optional[SubmissionTransport] = None,
        notifier: Optional[NotificationSink] = None,
        resume_policy: ResumePolicy = DEFAULT_RESUME_POLICY,
        cover_letter_word_limit: int = COVER_LETTER_WORD_LIMIT,
        require_valid_step: bool = False,
    ):
        self._transport = transport or SimulatedSubmissionTransport()
        self._notify = notifier if notifier is not None else NotificationLog()
        self.resume_policy = resume_policy
        self.cover_letter_word_limit = cover_letter_word_limit
        self.require_valid_step = require_valid_step

        self._draft = ApplicationDraft()
        self._errors: FieldErrorSet = {}
        self._step = WizardStep.STEP_1
        self._status = SubmissionStatus.IDLE
        self._receipt: Optional[SubmissionReceipt] = None
        self._last_transition: Optional[StepTransitionResult] = None

    # -- observable state ---------------------------------------------------

    @property
    def draft(self) -> ApplicationDraft:
        return self._draft

    @property
    def errors(self) -> FieldErrorSet:
        return dict(self._errors)

    @property
    def step(self) -> WizardStep:
        return self._step

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def receipt(self) -> Optional[SubmissionReceipt]:
        return self._receipt

    @property
    def notifier(self) -> NotificationSink:
        return self._notify

    @property
    def last_transition(self) -> Optional[StepTransitionResult]:
        return self._last_transition

    @property
    def is_submitting(self) -> bool:
        return self._status is SubmissionStatus.SUBMITTING

    @property
    def has_errors(self) -> bool:
        return has_errors(self._errors)

    @property
    def is_valid(self) -> bool:
        """Whether every required field of the current draft passes validation."""
        return is_form_valid(self._draft, self.resume_policy)

    @property
    def cover_letter_word_count(self) -> int:
        return count_words(self._draft.cover_letter)

    @property
    def cover_letter_warning(self) -> Optional[str]:
        return cover_letter_warning(self._draft.cover_letter, self.cover_letter_word_limit)

    def error_for(self, field: FormField) -> Optional[str]:
        return self._errors.get(field)

    def errors_by_name(self) -> Dict[str, Optional[str]]:
        """Return errors keyed by the fields' camelCase names."""
        return {field.value: message for field, message in self._errors.items()}

    # -- edits --------------------------------------------------------------

    def _accepts_edits(self, action: str) -> bool:
        if self._status is not SubmissionStatus.IDLE:
            logger.info("Ignoring %s while submission status is %s", action, self._status.value)
            return False
        return True

    def set_field(
        self,
        field: FormField,
        value: Union[TextValue, FileValue, BinaryFileRef, str, None],
    ) -> bool:
        """
        Replace one field of the draft and re-validate that field only.

        Args:
            field: The field to update
            value: Tagged value, or a raw str / BinaryFileRef / None

        Returns:
            True if the edit was applied, False if the form is not editable

        Raises:
            ToolError: If the value kind does not match the field
        """
        field = FormField(field)
        tagged = coerce_field_value(field, value)
        if not self._accepts_edits(f"edit of {field.value}"):
            return False

        self._draft = self._draft.with_value(field, tagged)
        self._errors[field] = validate_field(field, tagged, self.resume_policy)
        return True

    def select_file(self, file: Optional[BinaryFileRef]) -> bool:
        """Replace the resume wholesale (None clears it) and re-validate it."""
        return self.set_field(FormField.RESUME, FileValue(file=file))

    def remove_file(self) -> bool:
        """Clear the resume; the field then reports 'Resume is required'."""
        return self.select_file(None)

    # -- wizard -------------------------------------------------------------

    def _navigate(self, direction: str) -> bool:
        if not self._accepts_edits(f"wizard {direction}"):
            return False

        errors = self._errors
        if self.require_valid_step and direction == DIRECTION_NEXT:
            # Gate on a fresh check of the current step's fields
            errors = dict(self._errors)
            errors.update(
                (field, validate_field(field, self._draft.value_of(field), self.resume_policy))
                for field in STEP_FIELDS[self._step]
            )

        result = resolve_step_transition(
            self._step, direction, errors=errors, require_valid_step=self.require_valid_step
        )
        self._last_transition = result
        self._errors = errors

        if not result.allowed:
            return False

        self._step = result.target_step
        return not result.is_noop

    def go_next(self) -> bool:
        """Advance step1 -> step2. Returns True if the step changed."""
        return self._navigate(DIRECTION_NEXT)

    def go_back(self) -> bool:
        """Retreat step2 -> step1. Returns True if the step changed."""
        return self._navigate(DIRECTION_BACK)

    # -- submission ---------------------------------------------------------

    async def submit(self) -> bool:
        """
        Validate the whole form and, if valid, deliver it through the transport.

        Lifecycle:
        1. Ignored unless the status is idle (no second concurrent submission)
        2. Replaces the full error set with a fresh check of required fields
        3. Invalid: stays idle and emits a validation notification
        4. Valid: idle -> submitting, awaits the transport
        5. Success: submitting -> submitted, success notification
        6. Failure: submitting -> idle, failure notification; draft untouched

        Returns:
            True if the application was submitted
        """
        if self._status is not SubmissionStatus.IDLE:
            logger.info("Ignoring submit while submission status is %s", self._status.value)
            return False

        self._errors = validate_form(self._draft, self.resume_policy)
        if has_errors(self._errors):
            failing = [field.value for field, message in self._errors.items() if message]
            logger.info("Submission blocked by invalid fields: %s", ", ".join(failing))
            self._emit(validation_failed_notification())
            return False

        self._status = SubmissionStatus.SUBMITTING
        draft = self._draft
        logger.info("Submitting application")

        try:
            receipt = await self._transport.submit_application(draft)
        except asyncio.CancelledError:
            self._status = SubmissionStatus.IDLE
            raise
        except Exception as e:
            self._status = SubmissionStatus.IDLE
            logger.warning("Application submission failed: %s", e, exc_info=True)
            self._emit(submission_failed_notification())
            return False

        self._status = SubmissionStatus.SUBMITTED
        self._receipt = receipt
        logger.info("Application submitted (reference=%s)", receipt.reference)
        self._emit(submission_succeeded_notification())
        return True

    def reset_after_submission(self) -> bool:
        """
        Start a new application after a successful submission.

        Returns:
            True if the form was reset, False when not in the submitted state
        """
        if self._status is not SubmissionStatus.SUBMITTED:
            logger.info("Ignoring reset while submission status is %s", self._status.value)
            return False

        self._draft = ApplicationDraft()
        self._errors = {}
        self._step = WizardStep.STEP_1
        self._status = SubmissionStatus.IDLE
        self._receipt = None
        self._last_transition = None
        return True

    def _emit(self, notification: Notification) -> None:
        self._notify(notification)
