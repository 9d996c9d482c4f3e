"""
Notification events emitted by the form state machine.

The state machine never talks to a toast widget. It hands ``Notification``
events to a sink (any callable); renderers decide how to show them.
"""

from __future__ import annotations

from typing import Callable, List

from pydantic import BaseModel, ConfigDict

from models.status import NotificationKind


class Notification(BaseModel):
    """A transient, human-readable message for the presentation layer."""

    model_config = ConfigDict(frozen=True)

    kind: NotificationKind
    title: str
    description: str
    destructive: bool = False


NotificationSink = Callable[[Notification], None]


def validation_failed_notification() -> Notification:
    return Notification(
        kind=NotificationKind.VALIDATION_ERROR,
        title="Validation Error",
        description="Please fix the errors before submitting.",
        destructive=True,
    )


def submission_succeeded_notification() -> Notification:
    return Notification(
        kind=NotificationKind.SUBMISSION_SUCCEEDED,
        title="Application Submitted! 🎉",
        description=(
            "Thank you for applying! Our team will review your application "
            "and contact you soon."
        ),
    )


def submission_failed_notification() -> Notification:
    return Notification(
        kind=NotificationKind.SUBMISSION_FAILED,
        title="Submission Failed",
        description="Something went wrong. Please try again.",
        destructive=True,
    )


class NotificationLog:
    """In-memory sink that keeps notifications until a renderer drains them."""

    def __init__(self):
        self._pending: List[Notification] = []

    def __call__(self, notification: Notification) -> None:
        self._pending.append(notification)

    @property
    def pending(self) -> List[Notification]:
        return list(self._pending)

    def drain(self) -> List[Notification]:
        """Return and clear all pending notifications, oldest first."""
        drained, self._pending = self._pending, []
        return drained
