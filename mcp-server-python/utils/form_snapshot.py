"""
Snapshot rendering of a form's observable state.

Maps a ``FormStateMachine`` onto the ``FormStateSnapshot`` schema returned by
every form tool.
"""

from typing import Any, Dict, List, Optional

from models.status import STEP_FIELDS, SubmissionStatus, WizardStep
from schemas.application_form import (
    DraftView,
    FormStateSnapshot,
    NotificationView,
    ReceiptView,
    ResumeView,
)
from utils.form_state_machine import FormStateMachine
from utils.notifications import Notification, NotificationLog
from utils.validation import format_file_size
from utils.wizard_policy import STEP_ORDER, step_errors, step_number


def drain_notifications(form: FormStateMachine) -> List[Notification]:
    """Take pending notifications from the form's in-memory sink, if it has one."""
    sink = form.notifier
    if isinstance(sink, NotificationLog):
        return sink.drain()
    return []


def not_idle_reason(form: FormStateMachine) -> Optional[str]:
    """Explain why an edit is refused, or None when the form is editable."""
    if form.status is SubmissionStatus.SUBMITTING:
        return "Application is being submitted"
    if form.status is SubmissionStatus.SUBMITTED:
        return "Application was already submitted; reset it to start another"
    return None


def _draft_view(form: FormStateMachine) -> DraftView:
    draft = form.draft
    resume = None
    if draft.resume is not None:
        resume = ResumeView(
            name=draft.resume.name,
            size_bytes=draft.resume.size_bytes,
            size_label=format_file_size(draft.resume.size_bytes),
            mime_type=draft.resume.mime_type,
        )
    return DraftView(
        full_name=draft.full_name,
        email=draft.email,
        phone_number=draft.phone_number,
        resume=resume,
        cover_letter=draft.cover_letter,
    )


def _notification_view(notification: Notification) -> NotificationView:
    return NotificationView(
        kind=notification.kind.value,
        title=notification.title,
        description=notification.description,
        destructive=notification.destructive,
    )


def build_snapshot(
    session_id: str,
    form: FormStateMachine,
    notifications: Optional[List[Notification]] = None,
    applied: Optional[bool] = None,
    blocked_reason: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the snapshot payload for a form.

    Args:
        session_id: Session the form belongs to
        form: The form state machine
        notifications: Notifications to hand to the renderer
        applied: Whether the tool's operation changed the form
        blocked_reason: Why the operation was refused, if it was

    Returns:
        Dictionary with the FormStateSnapshot structure
    """
    errors = form.errors
    receipt = form.receipt

    return FormStateSnapshot(
        session_id=session_id,
        step=form.step.value,
        step_number=step_number(form.step),
        total_steps=len(STEP_ORDER),
        status=form.status.value,
        draft=_draft_view(form),
        errors=form.errors_by_name(),
        step_has_errors={
            step.value: bool(step_errors(step, errors)) for step in STEP_FIELDS
        },
        is_valid=form.is_valid,
        can_submit=(
            form.status is SubmissionStatus.IDLE and form.step is WizardStep.STEP_2
        ),
        cover_letter_word_count=form.cover_letter_word_count,
        cover_letter_word_limit=form.cover_letter_word_limit,
        cover_letter_warning=form.cover_letter_warning,
        receipt=(
            ReceiptView(reference=receipt.reference, submitted_at=receipt.submitted_at)
            if receipt is not None
            else None
        ),
        notifications=[_notification_view(n) for n in notifications or []],
        applied=applied,
        blocked_reason=blocked_reason,
    ).model_dump()
