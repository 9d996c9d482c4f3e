"""
Centralized, type-safe enumerations for the application form.

This module is the single source of truth for the closed sets used across
the form core and the MCP tools:

- ``FormField``: The five form fields, valued by their camelCase wire names.
- ``WizardStep``: The two wizard panes.
- ``SubmissionStatus``: The submission lifecycle.
- ``NotificationKind``: The discrete events emitted to the notification sink.

All Enums inherit from ``(str, Enum)`` so that members are directly
comparable to plain strings and serialize naturally to JSON at API
boundaries.
"""

from enum import Enum


class FormField(str, Enum):
    """Identifiers for every field of the application draft."""

    FULL_NAME = "fullName"
    EMAIL = "email"
    PHONE_NUMBER = "phoneNumber"
    RESUME = "resume"
    COVER_LETTER = "coverLetter"


# Fields that must be valid before a submission may start
REQUIRED_FIELDS = (
    FormField.FULL_NAME,
    FormField.EMAIL,
    FormField.PHONE_NUMBER,
    FormField.RESUME,
)

# Fields that carry a file; every other field carries text
FILE_FIELDS = frozenset({FormField.RESUME})


class WizardStep(str, Enum):
    """Enum for the wizard panes.

    Transitions:
        step1  ->  step2  (next)
        step2  ->  step1  (back)
    """

    STEP_1 = "step1"
    STEP_2 = "step2"


# Fields rendered on each wizard pane, in display order
STEP_FIELDS = {
    WizardStep.STEP_1: (FormField.FULL_NAME, FormField.EMAIL, FormField.PHONE_NUMBER),
    WizardStep.STEP_2: (FormField.RESUME, FormField.COVER_LETTER),
}


class SubmissionStatus(str, Enum):
    """Enum for the submission lifecycle.

    Canonical transitions:
        idle  ->  submitting      (valid form, submit requested)
        submitting  ->  submitted (transport succeeded)
        submitting  ->  idle      (transport failed; draft retained)
        submitted  ->  idle       (reset for another application)
    """

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


class NotificationKind(str, Enum):
    """Enum for events delivered to the notification sink."""

    VALIDATION_ERROR = "validation_error"
    SUBMISSION_SUCCEEDED = "submission_succeeded"
    SUBMISSION_FAILED = "submission_failed"
