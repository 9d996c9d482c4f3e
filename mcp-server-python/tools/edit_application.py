"""
MCP tool handlers for editing an application draft.

Every edit re-validates the changed field immediately, so the returned
snapshot already carries that field's error (or its absence).
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from models.draft import BinaryFileRef
from models.errors import ToolError, create_internal_error
from models.status import FormField
from schemas.application_form import AttachResumeRequest, SessionRequest, UpdateApplicationFieldRequest
from utils.form_snapshot import build_snapshot, drain_notifications, not_idle_reason
from utils.path_resolution import get_repo_root
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.resume_loader import guess_mime_type, load_resume_file
from utils.session_registry import ApplicationSessionRegistry, get_session_registry


def _edit_response(session_id: str, form, applied: bool) -> Dict[str, Any]:
    return build_snapshot(
        session_id,
        form,
        notifications=drain_notifications(form),
        applied=applied,
        blocked_reason=None if applied else not_idle_reason(form),
    )


def update_application_field(
    args: Dict[str, Any], registry: Optional[ApplicationSessionRegistry] = None
) -> Dict[str, Any]:
    """
    Set one text field of the draft.

    Args:
        args: Dictionary containing parameters:
            - session_id (str): Session returned by start_application
            - field (str): fullName, email, phoneNumber or coverLetter
            - value (str): New field value (may be empty)
        registry: Session registry (default: global registry)

    Returns:
        FormStateSnapshot dictionary with "applied" set. Edits are refused
        (applied=false, blocked_reason set) while the application is being
        submitted or after it was submitted.

        On error, returns the structured error dictionary
        (VALIDATION_ERROR, SESSION_NOT_FOUND, INTERNAL_ERROR).

    Examples:
        update_application_field({"session_id": sid, "field": "email", "value": "a@b"})
        # -> errors["email"] == "Please enter a valid email address"
    """
    if registry is None:
        registry = get_session_registry()
    try:
        request = UpdateApplicationFieldRequest.model_validate(args)
        form = registry.get(request.session_id)

        applied = form.set_field(FormField(request.field), request.value)
        return _edit_response(request.session_id, form, applied)

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()


def attach_resume(
    args: Dict[str, Any], registry: Optional[ApplicationSessionRegistry] = None
) -> Dict[str, Any]:
    """
    Select a resume file, replacing any previous one.

    Args:
        args: Dictionary containing parameters:
            - session_id (str): Session returned by start_application
            - file_path (str, optional): File to read; relative paths resolve
              from the repository root, and the file must lie inside it
            - file_name (str, optional): Declared name when no file_path
            - size_bytes (int, optional): Declared size when no file_path
            - mime_type (str, optional): Declared MIME type with file_name
              (default: guessed from the extension). Not accepted with
              file_path; a loaded file is typed by its extension
        registry: Session registry (default: global registry)

    Returns:
        FormStateSnapshot dictionary with "applied" set and errors["resume"]
        reflecting the size/type checks.

        On error, returns the structured error dictionary
        (VALIDATION_ERROR, FILE_NOT_FOUND, SESSION_NOT_FOUND, INTERNAL_ERROR).

    Behavior:
        - An oversized or wrongly typed file is still attached; the field
          error reports the problem and blocks submission
        - Declared metadata without a file_path attaches no content, which
          the simulated transport accepts and the HTTP transport rejects
    """
    if registry is None:
        registry = get_session_registry()
    try:
        request = AttachResumeRequest.model_validate(args)
        form = registry.get(request.session_id)

        if request.file_path is not None:
            resume = load_resume_file(
                request.file_path,
                max_bytes=form.resume_policy.max_bytes,
                root=get_repo_root(),
            )
        else:
            resume = BinaryFileRef(
                name=request.file_name,
                size_bytes=request.size_bytes,
                mime_type=request.mime_type or guess_mime_type(request.file_name),
            )

        applied = form.select_file(resume)
        return _edit_response(request.session_id, form, applied)

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()


def remove_resume(
    args: Dict[str, Any], registry: Optional[ApplicationSessionRegistry] = None
) -> Dict[str, Any]:
    """
    Remove the selected resume. The resume field then reports
    "Resume is required".

    Returns:
        FormStateSnapshot dictionary with "applied" set.
        On error, returns the structured error dictionary.
    """
    if registry is None:
        registry = get_session_registry()
    try:
        request = SessionRequest.model_validate(args)
        form = registry.get(request.session_id)

        applied = form.remove_file()
        return _edit_response(request.session_id, form, applied)

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()
