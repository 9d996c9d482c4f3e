"""
MCP tool handlers for submit_application and reset_application.

submit_application is the only asynchronous tool: it awaits the configured
submission transport. Transport failures never surface as tool errors; they
return the form to idle and show up as a "Submission Failed" notification.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from models.errors import ToolError, create_internal_error
from models.status import SubmissionStatus
from schemas.application_form import SessionRequest
from utils.form_snapshot import build_snapshot, drain_notifications
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.session_registry import ApplicationSessionRegistry, get_session_registry


async def submit_application(
    args: Dict[str, Any], registry: Optional[ApplicationSessionRegistry] = None
) -> Dict[str, Any]:
    """
    Validate the whole form and submit it.

    Args:
        args: Dictionary containing parameters:
            - session_id (str): Session returned by start_application
        registry: Session registry (default: global registry)

    Returns:
        FormStateSnapshot dictionary with "applied" true when the application
        was submitted. Outcomes:
        - invalid form: status "idle", all required-field errors filled in,
          "Validation Error" notification
        - transport success: status "submitted", receipt set,
          "Application Submitted! 🎉" notification
        - transport failure: status "idle", draft unchanged,
          "Submission Failed" notification
        - already submitting/submitted: ignored, blocked_reason set

        On error, returns the structured error dictionary
        (VALIDATION_ERROR, SESSION_NOT_FOUND, INTERNAL_ERROR).
    """
    if registry is None:
        registry = get_session_registry()
    try:
        request = SessionRequest.model_validate(args)
        form = registry.get(request.session_id)

        status_before = form.status
        applied = await form.submit()

        blocked_reason = None
        if status_before is SubmissionStatus.SUBMITTING:
            blocked_reason = "Application is already being submitted"
        elif status_before is SubmissionStatus.SUBMITTED:
            blocked_reason = "Application was already submitted; reset it to start another"

        return build_snapshot(
            request.session_id,
            form,
            notifications=drain_notifications(form),
            applied=applied,
            blocked_reason=blocked_reason,
        )

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()


def reset_application(
    args: Dict[str, Any], registry: Optional[ApplicationSessionRegistry] = None
) -> Dict[str, Any]:
    """
    Start another application after a successful submission.

    Clears the draft and errors and returns the wizard to step1. Only
    applies when the status is "submitted".

    Returns:
        FormStateSnapshot dictionary with "applied" set.
        On error, returns the structured error dictionary.
    """
    if registry is None:
        registry = get_session_registry()
    try:
        request = SessionRequest.model_validate(args)
        form = registry.get(request.session_id)

        applied = form.reset_after_submission()
        return build_snapshot(
            request.session_id,
            form,
            notifications=drain_notifications(form),
            applied=applied,
            blocked_reason=None if applied else "Only a submitted application can be reset",
        )

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()
