"""Pydantic schemas for the application form MCP tools."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator

from schemas.common import (
    SessionIdMixin,
    StrictIgnoreRequest,
    StrictResponse,
    validate_optional_non_empty_str,
)

TextFieldName = Literal["fullName", "email", "phoneNumber", "coverLetter"]
WizardDirection = Literal["next", "back"]


class StartApplicationRequest(StrictIgnoreRequest):
    """Request schema for start_application."""


class SessionRequest(SessionIdMixin, StrictIgnoreRequest):
    """Request schema for tools that only address a session."""


class GetApplicationStateRequest(SessionIdMixin, StrictIgnoreRequest):
    """Request schema for get_application_state."""

    drain_notifications: bool = True


class UpdateApplicationFieldRequest(SessionIdMixin, StrictIgnoreRequest):
    """Request schema for update_application_field."""

    field: TextFieldName
    value: str


class AttachResumeRequest(SessionIdMixin, StrictIgnoreRequest):
    """
    Request schema for attach_resume.

    Either ``file_path`` (read from disk) or ``file_name`` + ``size_bytes``
    (declared metadata only) must be provided. ``mime_type`` only applies to
    declared metadata; a loaded file is typed by its extension.
    """

    file_path: Optional[str] = None
    file_name: Optional[str] = None
    size_bytes: Optional[int] = Field(default=None, ge=0)
    mime_type: Optional[str] = None

    @field_validator("file_path", "file_name", "mime_type")
    @classmethod
    def validate_non_empty(cls, value: Optional[str]) -> Optional[str]:
        return validate_optional_non_empty_str(value)

    @model_validator(mode="after")
    def validate_source(self) -> "AttachResumeRequest":
        if self.file_path is None and (self.file_name is None or self.size_bytes is None):
            raise ValueError("provide file_path, or file_name and size_bytes")
        if self.file_path is not None and self.mime_type is not None:
            raise ValueError("mime_type cannot be combined with file_path")
        return self


class NavigateWizardRequest(SessionIdMixin, StrictIgnoreRequest):
    """Request schema for navigate_wizard."""

    direction: WizardDirection


class ResumeView(StrictResponse):
    """Resume metadata as shown to renderers; content bytes are never exposed."""

    name: str
    size_bytes: int
    size_label: str
    mime_type: str


class DraftView(StrictResponse):
    """Current draft values."""

    full_name: str
    email: str
    phone_number: str
    resume: Optional[ResumeView] = None
    cover_letter: str


class NotificationView(StrictResponse):
    """Notification event for display as a toast."""

    kind: str
    title: str
    description: str
    destructive: bool


class ReceiptView(StrictResponse):
    """Acknowledgement of a successful submission."""

    reference: str
    submitted_at: str


class FormStateSnapshot(StrictResponse):
    """Everything a renderer needs to draw the form."""

    session_id: str
    step: str
    step_number: int
    total_steps: int
    status: str
    draft: DraftView
    errors: dict[str, Optional[str]]
    step_has_errors: dict[str, bool]
    is_valid: bool
    can_submit: bool
    cover_letter_word_count: int
    cover_letter_word_limit: int
    cover_letter_warning: Optional[str] = None
    receipt: Optional[ReceiptView] = None
    notifications: list[NotificationView] = Field(default_factory=list)
    applied: Optional[bool] = None
    blocked_reason: Optional[str] = None
