"""
Unit tests for application form request schemas and the validation error mapper.
"""

import pytest
from pydantic import ValidationError

from models.errors import ErrorCode
from schemas.application_form import (
    AttachResumeRequest,
    FormStateSnapshot,
    GetApplicationStateRequest,
    NavigateWizardRequest,
    SessionRequest,
    UpdateApplicationFieldRequest,
)
from utils.pydantic_error_mapper import map_pydantic_validation_error


class TestSessionRequest:
    def test_valid(self):
        assert SessionRequest.model_validate({"session_id": "app_1"}).session_id == "app_1"

    def test_unknown_fields_are_ignored(self):
        request = SessionRequest.model_validate({"session_id": "app_1", "extra": 1})
        assert not hasattr(request, "extra")

    def test_blank_session_id_is_rejected(self):
        with pytest.raises(ValidationError):
            SessionRequest.model_validate({"session_id": "  "})

    def test_missing_session_id_is_rejected(self):
        with pytest.raises(ValidationError):
            SessionRequest.model_validate({})

    def test_strict_types(self):
        with pytest.raises(ValidationError):
            SessionRequest.model_validate({"session_id": 123})

    def test_drain_notifications_defaults_true(self):
        request = GetApplicationStateRequest.model_validate({"session_id": "app_1"})
        assert request.drain_notifications is True


class TestUpdateApplicationFieldRequest:
    @pytest.mark.parametrize("field", ["fullName", "email", "phoneNumber", "coverLetter"])
    def test_text_fields_accepted(self, field):
        request = UpdateApplicationFieldRequest.model_validate(
            {"session_id": "app_1", "field": field, "value": ""}
        )
        assert request.field == field

    def test_resume_is_not_a_text_field(self):
        with pytest.raises(ValidationError):
            UpdateApplicationFieldRequest.model_validate(
                {"session_id": "app_1", "field": "resume", "value": "cv.pdf"}
            )

    def test_value_must_be_string(self):
        with pytest.raises(ValidationError):
            UpdateApplicationFieldRequest.model_validate(
                {"session_id": "app_1", "field": "email", "value": None}
            )


class TestAttachResumeRequest:
    def test_path_mode(self):
        request = AttachResumeRequest.model_validate(
            {"session_id": "app_1", "file_path": "resumes/cv.pdf"}
        )
        assert request.file_path == "resumes/cv.pdf"

    def test_metadata_mode(self):
        request = AttachResumeRequest.model_validate(
            {"session_id": "app_1", "file_name": "cv.pdf", "size_bytes": 100}
        )
        assert request.size_bytes == 100

    def test_requires_a_source(self):
        with pytest.raises(ValidationError) as exc_info:
            AttachResumeRequest.model_validate({"session_id": "app_1", "file_name": "cv.pdf"})
        assert "provide file_path" in str(exc_info.value)

    def test_declared_type_only_with_metadata(self):
        request = AttachResumeRequest.model_validate(
            {"session_id": "app_1", "file_name": "cv", "size_bytes": 1, "mime_type": "application/pdf"}
        )
        assert request.mime_type == "application/pdf"

        with pytest.raises(ValidationError) as exc_info:
            AttachResumeRequest.model_validate(
                {"session_id": "app_1", "file_path": "cv.txt", "mime_type": "application/pdf"}
            )
        assert "mime_type cannot be combined with file_path" in str(exc_info.value)

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            AttachResumeRequest.model_validate(
                {"session_id": "app_1", "file_name": "cv.pdf", "size_bytes": -1}
            )

    def test_blank_path_rejected(self):
        with pytest.raises(ValidationError):
            AttachResumeRequest.model_validate({"session_id": "app_1", "file_path": " "})


class TestNavigateWizardRequest:
    def test_directions(self):
        for direction in ("next", "back"):
            request = NavigateWizardRequest.model_validate(
                {"session_id": "app_1", "direction": direction}
            )
            assert request.direction == direction

    def test_unknown_direction_rejected(self):
        with pytest.raises(ValidationError):
            NavigateWizardRequest.model_validate({"session_id": "app_1", "direction": "up"})


class TestFormStateSnapshot:
    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            FormStateSnapshot.model_validate({"session_id": "x", "surprise": True})


class TestPydanticErrorMapper:
    """Tests for ValidationError -> ToolError mapping."""

    def test_maps_to_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            SessionRequest.model_validate({"session_id": "  "})

        error = map_pydantic_validation_error(exc_info.value)

        assert error.code == ErrorCode.VALIDATION_ERROR
        assert error.message == "Invalid session_id: cannot be empty"
        assert error.retryable is False

    def test_reports_every_failing_field(self):
        with pytest.raises(ValidationError) as exc_info:
            NavigateWizardRequest.model_validate({"session_id": " ", "direction": "up"})

        message = map_pydantic_validation_error(exc_info.value).message

        assert "Invalid session_id" in message
        assert "Invalid direction" in message
        assert "; " in message

    def test_model_level_error_has_no_field_prefix(self):
        with pytest.raises(ValidationError) as exc_info:
            AttachResumeRequest.model_validate({"session_id": "app_1"})

        message = map_pydantic_validation_error(exc_info.value).message
        assert message == "provide file_path, or file_name and size_bytes"
