"""
Resume file loading for the attach_resume tool.

Turns a path on disk into a ``BinaryFileRef``: name, size, MIME type guessed
from the extension, and the raw bytes. Files larger than the resume limit are
described but not read; the resume validator rejects them anyway.
"""

import mimetypes
from pathlib import Path
from typing import Optional, Union

from models.draft import BinaryFileRef
from models.errors import create_file_not_found_error, create_validation_error
from utils.path_resolution import resolve_repo_relative_path
from utils.validation import MAX_RESUME_BYTES, MIME_DOC, MIME_DOCX, MIME_PDF

# Explicit mapping for the document types the form cares about; the
# platform mimetypes table does not always know .docx
EXTENSION_MIME_TYPES = {
    ".pdf": MIME_PDF,
    ".docx": MIME_DOCX,
    ".doc": MIME_DOC,
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def guess_mime_type(file_name: str) -> str:
    """
    Guess the declared MIME type of a file from its extension.

    Examples:
        >>> guess_mime_type("resume.PDF")
        'application/pdf'
        >>> guess_mime_type("photo.png")
        'image/png'
        >>> guess_mime_type("notes")
        'application/octet-stream'
    """
    suffix = Path(file_name).suffix.lower()
    if suffix in EXTENSION_MIME_TYPES:
        return EXTENSION_MIME_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or DEFAULT_MIME_TYPE


def load_resume_file(
    file_path: Union[str, Path],
    max_bytes: int = MAX_RESUME_BYTES,
    root: Optional[Path] = None,
) -> BinaryFileRef:
    """
    Load a resume from disk.

    The MIME type always comes from the file extension, so the declared type
    of a loaded file cannot disagree with its name.

    Args:
        file_path: Absolute path, or path relative to the repository root
        max_bytes: Files above this size are described without reading content
        root: When given, the resolved path must lie inside this directory

    Returns:
        BinaryFileRef describing the file

    Raises:
        ToolError: VALIDATION_ERROR if the path escapes ``root`` or is not a
            regular file, FILE_NOT_FOUND if the file does not exist
    """
    path = resolve_repo_relative_path(file_path)

    if root is not None:
        resolved = path.resolve()
        if not resolved.is_relative_to(Path(root).resolve()):
            raise create_validation_error(
                "Invalid file_path: must be inside the application root directory"
            )
        path = resolved

    if not path.exists():
        raise create_file_not_found_error(str(file_path), file_type="Resume file")
    if not path.is_file():
        raise create_validation_error(f"Invalid file_path: not a regular file: {path.name}")

    size_bytes = path.stat().st_size
    content = path.read_bytes() if size_bytes <= max_bytes else None

    return BinaryFileRef(
        name=path.name,
        size_bytes=size_bytes,
        mime_type=guess_mime_type(path.name),
        content=content,
    )
