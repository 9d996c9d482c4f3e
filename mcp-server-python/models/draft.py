"""
Draft model for the application form.

Holds the in-progress application values and the tagged field values used to
update them. Text fields and the resume file field are distinct variants of
``FieldValue`` so a file can never be written into a text field (or the
reverse) without an explicit error.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models.errors import create_validation_error
from models.status import FILE_FIELDS, FormField


class BinaryFileRef(BaseModel):
    """Declared metadata of an uploaded file plus its opaque content."""

    model_config = ConfigDict(frozen=True)

    name: str
    size_bytes: int = Field(ge=0)
    mime_type: str
    # Content is forwarded to the transport untouched and never serialized
    content: Optional[bytes] = Field(default=None, repr=False, exclude=True)


class TextValue(BaseModel):
    """Value variant for text fields."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str = ""


class FileValue(BaseModel):
    """Value variant for file fields; ``file=None`` clears the field."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    file: Optional[BinaryFileRef] = None


FieldValue = Annotated[Union[TextValue, FileValue], Field(discriminator="kind")]

# Draft attribute backing each form field
FIELD_ATTRIBUTES = {
    FormField.FULL_NAME: "full_name",
    FormField.EMAIL: "email",
    FormField.PHONE_NUMBER: "phone_number",
    FormField.RESUME: "resume",
    FormField.COVER_LETTER: "cover_letter",
}


class ApplicationDraft(BaseModel):
    """
    The in-progress, unsubmitted application.

    Drafts are immutable; every edit produces a new draft through
    ``with_value`` so a draft handed to the submission transport can never
    change underneath it.
    """

    model_config = ConfigDict(frozen=True)

    full_name: str = ""
    email: str = ""
    phone_number: str = ""
    resume: Optional[BinaryFileRef] = None
    cover_letter: str = ""

    def value_of(self, field: FormField) -> Union[TextValue, FileValue]:
        """Return the current value of ``field`` as its tagged variant."""
        current = getattr(self, FIELD_ATTRIBUTES[field])
        if field in FILE_FIELDS:
            return FileValue(file=current)
        return TextValue(text=current)

    def with_value(self, field: FormField, value: Union[TextValue, FileValue]) -> "ApplicationDraft":
        """
        Return a copy of this draft with ``field`` replaced.

        Raises:
            ToolError: If the value variant does not match the field kind
        """
        expects_file = field in FILE_FIELDS
        if expects_file and not isinstance(value, FileValue):
            raise create_validation_error(f"Invalid value for {field.value}: expected a file")
        if not expects_file and not isinstance(value, TextValue):
            raise create_validation_error(f"Invalid value for {field.value}: expected text")

        new_value = value.file if expects_file else value.text
        return self.model_copy(update={FIELD_ATTRIBUTES[field]: new_value})


def coerce_field_value(
    field: FormField, raw: Union[TextValue, FileValue, BinaryFileRef, str, None]
) -> Union[TextValue, FileValue]:
    """
    Wrap a raw input value in the variant that ``field`` expects.

    Tagged values pass through unchanged; plain strings become ``TextValue``,
    and ``BinaryFileRef``/``None`` become ``FileValue``.
    """
    if isinstance(raw, (TextValue, FileValue)):
        return raw
    if isinstance(raw, BinaryFileRef) or raw is None:
        if field in FILE_FIELDS:
            return FileValue(file=raw)
        if raw is None:
            return TextValue(text="")
        raise create_validation_error(f"Invalid value for {field.value}: expected text")
    if isinstance(raw, str):
        if field in FILE_FIELDS:
            raise create_validation_error(f"Invalid value for {field.value}: expected a file")
        return TextValue(text=raw)
    raise create_validation_error(
        f"Invalid value type for {field.value}: {type(raw).__name__}"
    )
