"""Unit tests for notification events and the in-memory notification log."""

from models.status import NotificationKind
from utils.notifications import (
    NotificationLog,
    submission_failed_notification,
    submission_succeeded_notification,
    validation_failed_notification,
)


class TestNotificationCopy:
    def test_validation_failed(self):
        notification = validation_failed_notification()
        assert notification.kind == NotificationKind.VALIDATION_ERROR
        assert notification.title == "Validation Error"
        assert notification.description == "Please fix the errors before submitting."
        assert notification.destructive is True

    def test_submission_succeeded(self):
        notification = submission_succeeded_notification()
        assert notification.kind == NotificationKind.SUBMISSION_SUCCEEDED
        assert notification.title.startswith("Application Submitted!")
        assert "Thank you for applying!" in notification.description
        assert notification.destructive is False

    def test_submission_failed(self):
        notification = submission_failed_notification()
        assert notification.kind == NotificationKind.SUBMISSION_FAILED
        assert notification.title == "Submission Failed"
        assert notification.description == "Something went wrong. Please try again."
        assert notification.destructive is True


class TestNotificationLog:
    def test_collects_in_order(self):
        log = NotificationLog()
        log(validation_failed_notification())
        log(submission_succeeded_notification())

        kinds = [n.kind for n in log.pending]
        assert kinds == [NotificationKind.VALIDATION_ERROR, NotificationKind.SUBMISSION_SUCCEEDED]

    def test_drain_clears(self):
        log = NotificationLog()
        log(submission_failed_notification())

        drained = log.drain()

        assert len(drained) == 1
        assert log.pending == []
        assert log.drain() == []

    def test_pending_is_a_copy(self):
        log = NotificationLog()
        log(submission_failed_notification())
        log.pending.clear()
        assert len(log.pending) == 1
