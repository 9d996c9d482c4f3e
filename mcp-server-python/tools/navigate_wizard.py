"""
MCP tool handler for navigate_wizard.

Moves the two-step wizard forward or back. The draft is never touched by
navigation.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from models.errors import ToolError, create_internal_error
from schemas.application_form import NavigateWizardRequest
from utils.form_snapshot import build_snapshot, drain_notifications, not_idle_reason
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.session_registry import ApplicationSessionRegistry, get_session_registry


def navigate_wizard(
    args: Dict[str, Any], registry: Optional[ApplicationSessionRegistry] = None
) -> Dict[str, Any]:
    """
    Go to the next or previous wizard step.

    Args:
        args: Dictionary containing parameters:
            - session_id (str): Session returned by start_application
            - direction (str): "next" (step1 -> step2) or "back" (step2 -> step1)
        registry: Session registry (default: global registry)

    Returns:
        FormStateSnapshot dictionary. "applied" is true only when the step
        changed; next on step2 and back on step1 are noops.

        When APPLYFORM_REQUIRE_VALID_STEP is enabled, next is refused while a
        step1 field is invalid and "blocked_reason" explains why.

        On error, returns the structured error dictionary
        (VALIDATION_ERROR, SESSION_NOT_FOUND, INTERNAL_ERROR).
    """
    if registry is None:
        registry = get_session_registry()
    try:
        request = NavigateWizardRequest.model_validate(args)
        form = registry.get(request.session_id)

        if request.direction == "next":
            applied = form.go_next()
        else:
            applied = form.go_back()

        blocked_reason = not_idle_reason(form)
        transition = form.last_transition
        if blocked_reason is None and transition is not None and not transition.allowed:
            blocked_reason = transition.error_message

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
