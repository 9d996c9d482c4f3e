"""
Field validators for the application form.

Each validator is a pure, total function of a single field value (plus, for the
resume, a fixed ``ResumePolicy``). Validators return ``None`` for a valid value
or a human-readable message; they never raise.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Optional, Union

from models.draft import ApplicationDraft, BinaryFileRef, FileValue, TextValue
from models.status import REQUIRED_FIELDS, FormField

# Constants for validation
FULL_NAME_MIN_LENGTH = 2
MAX_RESUME_BYTES = 10 * 1024 * 1024
COVER_LETTER_WORD_LIMIT = 500

MIME_PDF = "application/pdf"
MIME_DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MIME_DOC = "application/msword"
ALLOWED_RESUME_TYPES = frozenset({MIME_PDF, MIME_DOCX, MIME_DOC})

# local-part@domain.tld, no whitespace and a single @ in each run
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# Optional leading '+', then 10+ digits, spaces, hyphens or parentheses
PHONE_PATTERN = re.compile(r"\+?[0-9\s\-()]{10,}")

FULL_NAME_MESSAGE = f"Full name must be at least {FULL_NAME_MIN_LENGTH} characters"
EMAIL_REQUIRED_MESSAGE = "Email is required"
EMAIL_INVALID_MESSAGE = "Please enter a valid email address"
PHONE_REQUIRED_MESSAGE = "Phone number is required"
PHONE_INVALID_MESSAGE = "Please enter a valid phone number with country code"
RESUME_REQUIRED_MESSAGE = "Resume is required"
RESUME_SIZE_MESSAGE = "File size must be less than 10MB"
RESUME_TYPE_MESSAGE = "Only PDF and DOCX files are allowed"

FieldErrorSet = Dict[FormField, Optional[str]]


@dataclass(frozen=True)
class ResumePolicy:
    """Size limit and allowed MIME types applied to the resume."""

    max_bytes: int = MAX_RESUME_BYTES
    allowed_types: FrozenSet[str] = field(default_factory=lambda: ALLOWED_RESUME_TYPES)

    @property
    def size_message(self) -> str:
        if self.max_bytes == MAX_RESUME_BYTES:
            return RESUME_SIZE_MESSAGE
        return f"File size must be less than {format_file_size(self.max_bytes)}"


DEFAULT_RESUME_POLICY = ResumePolicy()


def validate_full_name(value: Optional[str]) -> Optional[str]:
    """Full name must contain at least two characters once trimmed."""
    if not value or not isinstance(value, str) or len(value.strip()) < FULL_NAME_MIN_LENGTH:
        return FULL_NAME_MESSAGE
    return None


def validate_email(value: Optional[str]) -> Optional[str]:
    """
    Validate an email address.

    Returns:
        None if valid, "Email is required" if empty, otherwise the malformed message

    Examples:
        >>> validate_email("") == EMAIL_REQUIRED_MESSAGE
        True
        >>> validate_email("a@b") == EMAIL_INVALID_MESSAGE
        True
        >>> validate_email("a@b.com") is None
        True
    """
    if not value or not isinstance(value, str):
        return EMAIL_REQUIRED_MESSAGE
    if not EMAIL_PATTERN.fullmatch(value):
        return EMAIL_INVALID_MESSAGE
    return None


def validate_phone_number(value: Optional[str]) -> Optional[str]:
    """
    Validate a phone number.

    Accepts an optional leading '+' followed by at least ten characters drawn
    from digits, spaces, hyphens and parentheses.

    Examples:
        >>> validate_phone_number("12345") == PHONE_INVALID_MESSAGE
        True
        >>> validate_phone_number("+1 (555) 123-4567") is None
        True
    """
    if not value or not isinstance(value, str):
        return PHONE_REQUIRED_MESSAGE
    if not PHONE_PATTERN.fullmatch(value):
        return PHONE_INVALID_MESSAGE
    return None


def validate_resume(
    file: Optional[BinaryFileRef], policy: ResumePolicy = DEFAULT_RESUME_POLICY
) -> Optional[str]:
    """
    Validate the resume against the size limit and allowed MIME types.

    The size check runs before the type check, so an oversized file of a
    disallowed type reports the size error.

    Args:
        file: The selected resume, or None when absent
        policy: Size limit and allowed MIME types

    Returns:
        None if valid, otherwise the first failing rule's message
    """
    if file is None or not isinstance(file, BinaryFileRef):
        return RESUME_REQUIRED_MESSAGE
    if file.size_bytes > policy.max_bytes:
        return policy.size_message
    if file.mime_type not in policy.allowed_types:
        return RESUME_TYPE_MESSAGE
    return None


def validate_cover_letter(value: Optional[str]) -> Optional[str]:
    """Cover letter has no hard rule; length is a soft warning only."""
    return None


def count_words(text: Optional[str]) -> int:
    """
    Count whitespace-separated words, ignoring empty tokens.

    Examples:
        >>> count_words("")
        0
        >>> count_words("one two  three")
        3
    """
    if not text or not isinstance(text, str):
        return 0
    return len(text.split())


def cover_letter_warning(
    text: Optional[str], word_limit: int = COVER_LETTER_WORD_LIMIT
) -> Optional[str]:
    """Return a soft warning when the cover letter exceeds ``word_limit`` words."""
    words = count_words(text)
    if words > word_limit:
        return (
            f"Cover letter is {words} words; "
            f"consider keeping it under {word_limit} words"
        )
    return None


def format_file_size(size_bytes: int) -> str:
    """Render a byte count the way the upload widget labels it (e.g. '2.50MB')."""
    if size_bytes >= 1024 * 1024:
        megabytes = size_bytes / (1024 * 1024)
        if megabytes.is_integer():
            return f"{int(megabytes)}MB"
        return f"{megabytes:.2f}MB"
    if size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f}KB"
    return f"{size_bytes}B"


def _text_validator(check: Callable[[Optional[str]], Optional[str]]):
    def run(value: Union[TextValue, FileValue], policy: ResumePolicy) -> Optional[str]:
        # A file value in a text field counts as an empty entry
        text = value.text if isinstance(value, TextValue) else None
        return check(text)

    return run


def _file_validator(value: Union[TextValue, FileValue], policy: ResumePolicy) -> Optional[str]:
    file = value.file if isinstance(value, FileValue) else None
    return validate_resume(file, policy)


FIELD_VALIDATORS = {
    FormField.FULL_NAME: _text_validator(validate_full_name),
    FormField.EMAIL: _text_validator(validate_email),
    FormField.PHONE_NUMBER: _text_validator(validate_phone_number),
    FormField.RESUME: _file_validator,
    FormField.COVER_LETTER: _text_validator(validate_cover_letter),
}


def validate_field(
    field_name: FormField,
    value: Union[TextValue, FileValue],
    policy: ResumePolicy = DEFAULT_RESUME_POLICY,
) -> Optional[str]:
    """
    Validate one field value with the validator registered for that field.

    Args:
        field_name: The field being validated
        value: The tagged value to check
        policy: Resume policy (used only by the resume field)

    Returns:
        None if valid, otherwise the error message
    """
    return FIELD_VALIDATORS[field_name](value, policy)


def validate_form(
    draft: ApplicationDraft, policy: ResumePolicy = DEFAULT_RESUME_POLICY
) -> FieldErrorSet:
    """
    Validate every required field of ``draft``.

    Returns:
        FieldErrorSet with one entry per required field (None when valid)
    """
    return {
        field_name: validate_field(field_name, draft.value_of(field_name), policy)
        for field_name in REQUIRED_FIELDS
    }


def has_errors(errors: FieldErrorSet) -> bool:
    """Return True when any entry in ``errors`` holds a message."""
    return any(message for message in errors.values())


def is_form_valid(draft: ApplicationDraft, policy: ResumePolicy = DEFAULT_RESUME_POLICY) -> bool:
    """Return True when every required field of ``draft`` is valid."""
    return not has_errors(validate_form(draft, policy))
