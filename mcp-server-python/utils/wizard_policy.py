"""
Step transition policy for the two-step application wizard.

This module enforces wizard navigation rules:
- next moves step1 -> step2, back moves step2 -> step1
- next on the last step and back on the first step are noops
- an optional gate keeps the user on a step whose fields are invalid
"""

from typing import Any, Dict, List, Optional

from models.status import STEP_FIELDS, FormField, WizardStep
from utils.validation import FieldErrorSet

STEP_ORDER = (WizardStep.STEP_1, WizardStep.STEP_2)

DIRECTION_NEXT = "next"
DIRECTION_BACK = "back"
DIRECTIONS = (DIRECTION_NEXT, DIRECTION_BACK)


class StepTransitionResult:
    """Result of a wizard step transition check."""

    def __init__(
        self,
        allowed: bool,
        target_step: WizardStep,
        is_noop: bool = False,
        error_message: Optional[str] = None,
        blocking_fields: Optional[List[FormField]] = None,
    ):
        """
        Initialize a step transition result.

        Args:
            allowed: Whether the transition is allowed
            target_step: Step the wizard ends up on
            is_noop: Whether the wizard stays on its current step
            error_message: Reason the transition was blocked
            blocking_fields: Fields whose errors blocked the transition
        """
        self.allowed = allowed
        self.target_step = target_step
        self.is_noop = is_noop
        self.error_message = error_message
        self.blocking_fields = blocking_fields or []

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary format."""
        result = {
            "allowed": self.allowed,
            "target_step": self.target_step.value,
            "is_noop": self.is_noop,
        }
        if self.error_message:
            result["error_message"] = self.error_message
        if self.blocking_fields:
            result["blocking_fields"] = [field.value for field in self.blocking_fields]
        return result


def step_number(step: WizardStep) -> int:
    """Return the 1-based position of ``step`` in the wizard."""
    return STEP_ORDER.index(step) + 1


def step_errors(step: WizardStep, errors: FieldErrorSet) -> Dict[FormField, str]:
    """Return the present error messages for the fields shown on ``step``."""
    return {
        field: errors[field]
        for field in STEP_FIELDS[step]
        if errors.get(field)
    }


def resolve_step_transition(
    current_step: WizardStep,
    direction: str,
    errors: Optional[FieldErrorSet] = None,
    require_valid_step: bool = False,
) -> StepTransitionResult:
    """
    Decide where a next/back action takes the wizard.

    Policy rules:
    1. back is always allowed; on the first step it is a noop
    2. next on the last step is a noop
    3. next is allowed without any validation unless ``require_valid_step``
       is set, in which case present errors on the current step block it

    Args:
        current_step: Step the wizard is on
        direction: "next" or "back"
        errors: Field errors of the current step (only read when gating)
        require_valid_step: Whether invalid fields block advancing

    Returns:
        StepTransitionResult with the target step

    Raises:
        ValueError: If direction is not "next" or "back"

    Examples:
        >>> resolve_step_transition(WizardStep.STEP_1, "next").target_step
        <WizardStep.STEP_2: 'step2'>
        >>> resolve_step_transition(WizardStep.STEP_1, "back").is_noop
        True
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"Unknown wizard direction: {direction!r}")

    index = STEP_ORDER.index(current_step)

    if direction == DIRECTION_BACK:
        if index == 0:
            return StepTransitionResult(allowed=True, target_step=current_step, is_noop=True)
        return StepTransitionResult(allowed=True, target_step=STEP_ORDER[index - 1])

    if index == len(STEP_ORDER) - 1:
        return StepTransitionResult(allowed=True, target_step=current_step, is_noop=True)

    if require_valid_step:
        blocking = step_errors(current_step, errors or {})
        if blocking:
            return StepTransitionResult(
                allowed=False,
                target_step=current_step,
                is_noop=True,
                error_message="Please fix the errors on this step before continuing.",
                blocking_fields=list(blocking),
            )

    return StepTransitionResult(allowed=True, target_step=STEP_ORDER[index + 1])
