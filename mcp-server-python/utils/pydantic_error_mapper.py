"""Convert Pydantic validation errors to the tool error contract."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from models.errors import ToolError, create_validation_error


def _loc_to_field(loc: tuple[Any, ...]) -> str:
    parts = [str(part) for part in loc if part != "__root__"]
    return ".".join(parts)


def _clean_pydantic_message(message: str) -> str:
    if message.startswith("Value error, "):
        return message[len("Value error, ") :]
    return message


def _describe_issue(issue: dict) -> str:
    field = _loc_to_field(issue.get("loc", ()))
    message = _clean_pydantic_message(issue.get("msg", "Invalid input"))
    if field:
        return f"Invalid {field}: {message}"
    return message


def map_pydantic_validation_error(error: ValidationError) -> ToolError:
    """
    Map a Pydantic ValidationError to a VALIDATION_ERROR ToolError.

    Every failing field is reported, in the order Pydantic found them,
    joined with "; ".
    """
    issues = error.errors()
    if not issues:
        return create_validation_error("Invalid input")

    return create_validation_error("; ".join(_describe_issue(issue) for issue in issues))
