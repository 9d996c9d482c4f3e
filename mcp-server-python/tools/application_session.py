"""
MCP tool handlers for application session lifecycle.

start_application opens an empty form, get_application_state renders it and
hands over pending notifications, discard_application drops it.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from models.errors import ToolError, create_internal_error
from schemas.application_form import (
    GetApplicationStateRequest,
    SessionRequest,
    StartApplicationRequest,
)
from utils.form_snapshot import build_snapshot, drain_notifications
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.session_registry import ApplicationSessionRegistry, get_session_registry


def start_application(
    args: Dict[str, Any], registry: Optional[ApplicationSessionRegistry] = None
) -> Dict[str, Any]:
    """
    Open a new, empty application form.

    Args:
        args: Dictionary of parameters (none required)
        registry: Session registry (default: global registry)

    Returns:
        FormStateSnapshot dictionary for the new session: step1, idle,
        empty draft, no errors.

        On error, returns:
        {
            "error": {
                "code": str,            # VALIDATION_ERROR, INTERNAL_ERROR
                "message": str,
                "retryable": bool
            }
        }
    """
    if registry is None:
        registry = get_session_registry()
    try:
        StartApplicationRequest.model_validate(args)
        session_id = registry.create()
        return build_snapshot(session_id, registry.get(session_id))

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()


def get_application_state(
    args: Dict[str, Any], registry: Optional[ApplicationSessionRegistry] = None
) -> Dict[str, Any]:
    """
    Render the current state of an application form.

    Args:
        args: Dictionary containing parameters:
            - session_id (str): Session returned by start_application
            - drain_notifications (bool, optional): Clear notifications once
              returned (default: True)
        registry: Session registry (default: global registry)

    Returns:
        FormStateSnapshot dictionary including pending notifications.
        On error, returns the structured error dictionary
        (VALIDATION_ERROR, SESSION_NOT_FOUND, INTERNAL_ERROR).
    """
    if registry is None:
        registry = get_session_registry()
    try:
        request = GetApplicationStateRequest.model_validate(args)
        form = registry.get(request.session_id)

        if request.drain_notifications:
            notifications = drain_notifications(form)
        else:
            notifications = getattr(form.notifier, "pending", [])

        return build_snapshot(request.session_id, form, notifications=notifications)

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()


def discard_application(
    args: Dict[str, Any], registry: Optional[ApplicationSessionRegistry] = None
) -> Dict[str, Any]:
    """
    Drop an application session and everything in its draft.

    Returns:
        {"session_id": str, "discarded": bool}
        On error, returns the structured error dictionary.
    """
    if registry is None:
        registry = get_session_registry()
    try:
        request = SessionRequest.model_validate(args)
        # Raises SESSION_NOT_FOUND for unknown ids
        registry.get(request.session_id)
        return {"session_id": request.session_id, "discarded": registry.discard(request.session_id)}

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()
