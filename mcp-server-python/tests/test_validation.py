"""
Unit tests for form field validators.

Tests each field rule, the field-dispatch table, and form aggregation.
"""

import pytest
from models.draft import ApplicationDraft, BinaryFileRef, FileValue, TextValue
from models.status import REQUIRED_FIELDS, FormField
from utils.validation import (
    EMAIL_INVALID_MESSAGE,
    EMAIL_REQUIRED_MESSAGE,
    FIELD_VALIDATORS,
    FULL_NAME_MESSAGE,
    MIME_DOC,
    MIME_DOCX,
    MIME_PDF,
    PHONE_INVALID_MESSAGE,
    PHONE_REQUIRED_MESSAGE,
    RESUME_REQUIRED_MESSAGE,
    RESUME_SIZE_MESSAGE,
    RESUME_TYPE_MESSAGE,
    ResumePolicy,
    count_words,
    cover_letter_warning,
    format_file_size,
    has_errors,
    is_form_valid,
    validate_email,
    validate_field,
    validate_form,
    validate_full_name,
    validate_phone_number,
    validate_resume,
)

MIB = 1024 * 1024


def make_file(size_bytes=MIB, mime_type=MIME_PDF, name="resume.pdf"):
    return BinaryFileRef(name=name, size_bytes=size_bytes, mime_type=mime_type)


def valid_draft(**overrides):
    values = {
        "full_name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone_number": "+44 20 7946 0958",
        "resume": make_file(),
    }
    values.update(overrides)
    return ApplicationDraft(**values)


class TestValidateFullName:
    """Tests for the full name rule."""

    def test_empty_is_invalid(self):
        assert validate_full_name("") == FULL_NAME_MESSAGE

    def test_single_character_is_invalid(self):
        assert validate_full_name("A") == FULL_NAME_MESSAGE

    def test_two_characters_is_valid(self):
        assert validate_full_name("Al") is None

    def test_length_is_measured_after_trimming(self):
        assert validate_full_name("  Al  ") is None
        assert validate_full_name("   A   ") == FULL_NAME_MESSAGE

    def test_whitespace_only_is_invalid(self):
        assert validate_full_name("     ") == FULL_NAME_MESSAGE

    def test_none_is_invalid(self):
        assert validate_full_name(None) == FULL_NAME_MESSAGE

    def test_message_text(self):
        assert FULL_NAME_MESSAGE == "Full name must be at least 2 characters"


class TestValidateEmail:
    """Tests for the email rule."""

    def test_empty_is_required(self):
        assert validate_email("") == "Email is required"
        assert validate_email(None) == EMAIL_REQUIRED_MESSAGE

    def test_missing_dot_in_domain_is_malformed(self):
        assert validate_email("a@b") == "Please enter a valid email address"

    def test_valid_address(self):
        assert validate_email("a@b.com") is None
        assert validate_email("first.last+tag@sub.example.co.uk") is None

    @pytest.mark.parametrize(
        "value",
        ["plainaddress", "@example.com", "user@", "user@.com", "us er@example.com",
         "user@@example.com", "user@example.com ", "user@example."],
    )
    def test_malformed_addresses(self, value):
        assert validate_email(value) == EMAIL_INVALID_MESSAGE

    def test_trailing_newline_is_malformed(self):
        assert validate_email("a@b.com\n") == EMAIL_INVALID_MESSAGE


class TestValidatePhoneNumber:
    """Tests for the phone number rule."""

    def test_empty_is_required(self):
        assert validate_phone_number("") == PHONE_REQUIRED_MESSAGE

    def test_too_short_is_malformed(self):
        assert validate_phone_number("12345") == PHONE_INVALID_MESSAGE

    def test_formatted_international_number_is_valid(self):
        assert validate_phone_number("+1 (555) 123-4567") is None

    def test_ten_plain_digits_is_valid(self):
        assert validate_phone_number("5551234567") is None

    def test_nine_digits_is_malformed(self):
        assert validate_phone_number("555123456") == PHONE_INVALID_MESSAGE

    def test_letters_are_malformed(self):
        assert validate_phone_number("+1 555 CALL NOW") == PHONE_INVALID_MESSAGE

    def test_plus_only_allowed_at_start(self):
        assert validate_phone_number("1555+1234567") == PHONE_INVALID_MESSAGE
        assert validate_phone_number("++15551234567") == PHONE_INVALID_MESSAGE

    def test_plus_does_not_count_towards_length(self):
        assert validate_phone_number("+123456789") == PHONE_INVALID_MESSAGE


class TestValidateResume:
    """Tests for the resume rule."""

    def test_absent_is_required(self):
        assert validate_resume(None) == "Resume is required"

    def test_oversized_pdf_reports_size(self):
        assert validate_resume(make_file(size_bytes=11 * MIB)) == RESUME_SIZE_MESSAGE

    def test_exactly_ten_mib_is_allowed(self):
        assert validate_resume(make_file(size_bytes=10 * MIB)) is None

    def test_wrong_type_reports_type(self):
        png = make_file(mime_type="image/png", name="photo.png")
        assert validate_resume(png) == RESUME_TYPE_MESSAGE

    def test_size_is_checked_before_type(self):
        big_png = make_file(size_bytes=20 * MIB, mime_type="image/png")
        assert validate_resume(big_png) == RESUME_SIZE_MESSAGE

    @pytest.mark.parametrize("mime_type", [MIME_PDF, MIME_DOCX, MIME_DOC])
    def test_allowed_types(self, mime_type):
        assert validate_resume(make_file(mime_type=mime_type)) is None

    def test_custom_policy(self):
        policy = ResumePolicy(max_bytes=1024, allowed_types=frozenset({"text/plain"}))

        assert validate_resume(make_file(size_bytes=512, mime_type="text/plain"), policy) is None
        assert validate_resume(make_file(size_bytes=512), policy) == RESUME_TYPE_MESSAGE
        assert validate_resume(make_file(size_bytes=2048, mime_type="text/plain"), policy) == (
            "File size must be less than 1.0KB"
        )

    def test_non_file_value_is_required(self):
        assert validate_resume("resume.pdf") == RESUME_REQUIRED_MESSAGE


class TestWordCount:
    """Tests for cover letter word counting and soft warning."""

    def test_empty_is_zero(self):
        assert count_words("") == 0
        assert count_words(None) == 0

    def test_repeated_spaces_collapse(self):
        assert count_words("one two  three") == 3

    def test_leading_trailing_and_mixed_whitespace(self):
        assert count_words("  one\ttwo\n\nthree  ") == 3

    def test_no_warning_at_limit(self):
        assert cover_letter_warning("word " * 500) is None

    def test_warning_above_limit(self):
        warning = cover_letter_warning("word " * 501)
        assert warning is not None
        assert "501" in warning
        assert "500" in warning

    def test_custom_limit(self):
        assert cover_letter_warning("a b c", word_limit=2) is not None


class TestFormatFileSize:
    """Tests for upload size labels."""

    def test_labels(self):
        assert format_file_size(10 * MIB) == "10MB"
        assert format_file_size(int(2.5 * MIB)) == "2.50MB"
        assert format_file_size(2048) == "2.0KB"
        assert format_file_size(12) == "12B"


class TestFieldDispatch:
    """Tests for the field -> validator table."""

    def test_every_field_has_a_validator(self):
        assert set(FIELD_VALIDATORS) == set(FormField)

    def test_text_field_dispatch(self):
        assert validate_field(FormField.EMAIL, TextValue(text="a@b")) == EMAIL_INVALID_MESSAGE
        assert validate_field(FormField.FULL_NAME, TextValue(text="Al")) is None

    def test_file_field_dispatch(self):
        assert validate_field(FormField.RESUME, FileValue(file=None)) == RESUME_REQUIRED_MESSAGE
        assert validate_field(FormField.RESUME, FileValue(file=make_file())) is None

    def test_cover_letter_never_errors(self):
        long_text = TextValue(text="word " * 2000)
        assert validate_field(FormField.COVER_LETTER, long_text) is None

    def test_mismatched_variant_counts_as_empty(self):
        assert validate_field(FormField.EMAIL, FileValue(file=make_file())) == EMAIL_REQUIRED_MESSAGE
        assert validate_field(FormField.RESUME, TextValue(text="cv.pdf")) == RESUME_REQUIRED_MESSAGE


class TestValidateForm:
    """Tests for whole-form aggregation."""

    def test_empty_draft_reports_every_required_field(self):
        errors = validate_form(ApplicationDraft())

        assert set(errors) == set(REQUIRED_FIELDS)
        assert errors[FormField.FULL_NAME] == FULL_NAME_MESSAGE
        assert errors[FormField.EMAIL] == EMAIL_REQUIRED_MESSAGE
        assert errors[FormField.PHONE_NUMBER] == PHONE_REQUIRED_MESSAGE
        assert errors[FormField.RESUME] == RESUME_REQUIRED_MESSAGE
        assert has_errors(errors)
        assert not is_form_valid(ApplicationDraft())

    def test_valid_draft(self):
        errors = validate_form(valid_draft())

        assert all(message is None for message in errors.values())
        assert not has_errors(errors)
        assert is_form_valid(valid_draft())

    def test_cover_letter_is_not_checked(self):
        errors = validate_form(valid_draft(cover_letter="word " * 900))
        assert FormField.COVER_LETTER not in errors
        assert not has_errors(errors)

    def test_single_invalid_field(self):
        errors = validate_form(valid_draft(email="nope"))
        assert errors[FormField.EMAIL] == EMAIL_INVALID_MESSAGE
        assert [f for f, m in errors.items() if m] == [FormField.EMAIL]

    def test_has_errors_ignores_none_entries(self):
        assert not has_errors({})
        assert not has_errors({FormField.EMAIL: None})
        assert has_errors({FormField.EMAIL: None, FormField.RESUME: RESUME_REQUIRED_MESSAGE})
