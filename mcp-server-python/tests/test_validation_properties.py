"""
Property-based tests for form field validators.

Tests universal properties that should hold for all inputs.
"""

from hypothesis import given, strategies as st

from models.draft import ApplicationDraft, BinaryFileRef
from models.status import REQUIRED_FIELDS
from utils.validation import (
    count_words,
    validate_email,
    validate_form,
    validate_full_name,
    validate_phone_number,
    validate_resume,
)

text_or_none = st.one_of(st.none(), st.text())

files = st.builds(
    BinaryFileRef,
    name=st.text(min_size=1, max_size=20),
    size_bytes=st.integers(min_value=0, max_value=50 * 1024 * 1024),
    mime_type=st.sampled_from(
        [
            "application/pdf",
            "application/msword",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "image/png",
            "text/plain",
        ]
    ),
)


class TestValidatorDeterminism:
    """Validators are pure: same input, same result, no exceptions."""

    @given(value=text_or_none)
    def test_text_validators_are_deterministic(self, value):
        """
        **Property: Validator purity**

        Calling each text validator twice with the same input yields the same
        result, and never raises.
        """
        for validator in (validate_full_name, validate_email, validate_phone_number):
            first = validator(value)
            second = validator(value)
            assert first == second
            assert first is None or isinstance(first, str)

    @given(file=st.one_of(st.none(), files))
    def test_resume_validator_is_deterministic(self, file):
        assert validate_resume(file) == validate_resume(file)

    @given(
        full_name=st.text(),
        email=st.text(),
        phone_number=st.text(),
        resume=st.one_of(st.none(), files),
    )
    def test_form_validation_covers_required_fields(self, full_name, email, phone_number, resume):
        draft = ApplicationDraft(
            full_name=full_name, email=email, phone_number=phone_number, resume=resume
        )
        errors = validate_form(draft)

        assert set(errors) == set(REQUIRED_FIELDS)
        assert errors == validate_form(draft)


class TestWordCountProperties:
    """Word count never counts empty tokens."""

    @given(words=st.lists(st.text(alphabet="abcxyz", min_size=1), max_size=30),
           gap=st.sampled_from([" ", "  ", "\t", "\n", " \n "]))
    def test_word_count_matches_joined_words(self, words, gap):
        assert count_words(gap.join(words)) == len(words)

    @given(text=st.text(alphabet=" \t\n"))
    def test_whitespace_only_has_no_words(self, text):
        assert count_words(text) == 0
