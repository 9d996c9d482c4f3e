#!/usr/bin/env python3
"""
MCP Server entry point for the ApplyForm job-application tools.

This server exposes a two-step job-application form to LLM agents and UIs via
the Model Context Protocol: open a session, fill in identity fields, attach a
resume and cover letter, then submit. Every tool returns a full snapshot of
the form so the caller can render it without extra round trips.

Usage:
    python server.py

The server runs in stdio mode by default, which is the standard transport
for MCP servers that are invoked by LLM agents.
"""

import logging
from mcp.server.fastmcp import FastMCP
from tools.application_session import (
    discard_application,
    get_application_state,
    start_application,
)
from tools.edit_application import attach_resume, remove_resume, update_application_field
from tools.navigate_wizard import navigate_wizard
from tools.submit_application import reset_application, submit_application
from config import get_config

# Create FastMCP server instance
config = get_config()
mcp = FastMCP(
    name=config.server_name,
    instructions=(
        "This server provides a job-application form for ApplyForm. "
        "\n\n"
        "SESSION:\n"
        "Use start_application to open an empty form and keep the returned session_id. "
        "Use get_application_state to re-read the form and collect pending notifications. "
        "Use discard_application to drop a form you no longer need."
        "\n\n"
        "FORM FLOW:\n"
        "Step 1 holds fullName, email and phoneNumber; set them with update_application_field. "
        "Use navigate_wizard with direction='next' to reach step 2 and 'back' to return; "
        "values are kept across steps. "
        "Step 2 holds the resume (attach_resume / remove_resume) and the optional coverLetter. "
        "Every edit is validated immediately and reported in the snapshot's errors map. "
        "Use submit_application to validate all required fields and submit; it does nothing while "
        "a submission is in flight. After a successful submission use reset_application to start "
        "another application."
    ),
)


@mcp.tool(
    name="start_application",
    description=(
        "Open a new, empty job-application form. "
        "Returns the session_id and a snapshot of the form on step1 with status 'idle'."
    ),
)
def start_application_tool() -> dict:
    """
    Open a new, empty job-application form.

    Returns:
        Form snapshot dictionary:
        {
            "session_id": str,
            "step": str,                  # "step1" | "step2"
            "step_number": int,
            "total_steps": int,
            "status": str,                # "idle" | "submitting" | "submitted"
            "draft": {...},               # full_name, email, phone_number, resume, cover_letter
            "errors": {field: str|None},  # camelCase field names
            "step_has_errors": {step: bool},
            "is_valid": bool,
            "can_submit": bool,
            "cover_letter_word_count": int,
            "cover_letter_word_limit": int,
            "cover_letter_warning": str|None,
            "receipt": {...}|None,
            "notifications": [...],
            "applied": bool|None,
            "blocked_reason": str|None
        }
    """
    return start_application({})


@mcp.tool(
    name="get_application_state",
    description=(
        "Return the current snapshot of an application form, including pending "
        "notifications (validation errors, submission outcome)."
    ),
)
def get_application_state_tool(session_id: str, drain_notifications: bool | None = None) -> dict:
    """
    Return the current snapshot of an application form.

    Args:
        session_id: Session returned by start_application.
        drain_notifications: Clear notifications once returned (default: true).

    Returns:
        Form snapshot dictionary (see start_application), or
        {"error": {"code", "message", "retryable"}}.
    """
    args = {"session_id": session_id}
    if drain_notifications is not None:
        args["drain_notifications"] = drain_notifications
    return get_application_state(args)


@mcp.tool(
    name="update_application_field",
    description=(
        "Set a text field (fullName, email, phoneNumber, coverLetter) and validate it immediately."
    ),
)
def update_application_field_tool(session_id: str, field: str, value: str) -> dict:
    """
    Set a text field of the draft.

    Args:
        session_id: Session returned by start_application.
        field: One of fullName, email, phoneNumber, coverLetter.
        value: New value; an empty string clears the field.

    Validation Rules:
        - fullName: at least 2 characters after trimming
        - email: local-part@domain.tld
        - phoneNumber: optional '+', then 10+ digits, spaces, hyphens or parentheses
        - coverLetter: no hard rule; a warning appears above the word limit

    Returns:
        Form snapshot dictionary, or {"error": {...}}.
    """
    return update_application_field({"session_id": session_id, "field": field, "value": value})


@mcp.tool(
    name="attach_resume",
    description=(
        "Attach a resume (PDF, DOCX or DOC, at most 10MB) from a file path or from declared "
        "file metadata, replacing any previous resume."
    ),
)
def attach_resume_tool(
    session_id: str,
    file_path: str | None = None,
    file_name: str | None = None,
    size_bytes: int | None = None,
    mime_type: str | None = None,
) -> dict:
    """
    Attach a resume to the draft.

    Args:
        session_id: Session returned by start_application.
        file_path: File to read; relative paths resolve from the repository root,
            which must contain the file.
        file_name: Declared file name (used when file_path is omitted).
        size_bytes: Declared size in bytes (used when file_path is omitted).
        mime_type: Declared MIME type for file_name (default: guessed from the
            extension). Not accepted together with file_path.

    Returns:
        Form snapshot dictionary, or {"error": {...}}.
    """
    args = {"session_id": session_id}
    if file_path is not None:
        args["file_path"] = file_path
    if file_name is not None:
        args["file_name"] = file_name
    if size_bytes is not None:
        args["size_bytes"] = size_bytes
    if mime_type is not None:
        args["mime_type"] = mime_type
    return attach_resume(args)


@mcp.tool(
    name="remove_resume",
    description="Remove the attached resume from the draft.",
)
def remove_resume_tool(session_id: str) -> dict:
    """Remove the attached resume. Returns the form snapshot or {"error": {...}}."""
    return remove_resume({"session_id": session_id})


@mcp.tool(
    name="navigate_wizard",
    description=(
        "Move the two-step wizard: direction='next' goes step1 -> step2, "
        "direction='back' goes step2 -> step1. Field values are preserved."
    ),
)
def navigate_wizard_tool(session_id: str, direction: str) -> dict:
    """
    Move between wizard steps.

    Args:
        session_id: Session returned by start_application.
        direction: "next" or "back".

    Returns:
        Form snapshot dictionary, or {"error": {...}}.
    """
    return navigate_wizard({"session_id": session_id, "direction": direction})


@mcp.tool(
    name="submit_application",
    description=(
        "Validate all required fields (fullName, email, phoneNumber, resume) and submit the "
        "application. Returns the snapshot with status 'submitted' on success; on validation or "
        "transport failure the form stays editable and a notification explains why."
    ),
)
async def submit_application_tool(session_id: str) -> dict:
    """
    Submit the application.

    Args:
        session_id: Session returned by start_application.

    Behavior:
        - Ignored while a submission is already in flight
        - Invalid form: stays idle, errors filled in, "Validation Error" notification
        - Transport failure: back to idle with the draft intact, "Submission Failed"
          notification; the caller may retry
        - Success: status "submitted" with a receipt

    Returns:
        Form snapshot dictionary, or {"error": {...}}.
    """
    return await submit_application({"session_id": session_id})


@mcp.tool(
    name="reset_application",
    description=(
        "After a successful submission, clear the form and return to step1 to submit "
        "another application."
    ),
)
def reset_application_tool(session_id: str) -> dict:
    """Reset a submitted application. Returns the form snapshot or {"error": {...}}."""
    return reset_application({"session_id": session_id})


@mcp.tool(
    name="discard_application",
    description="Drop an application session and its draft.",
)
def discard_application_tool(session_id: str) -> dict:
    """Discard a session. Returns {"session_id", "discarded"} or {"error": {...}}."""
    return discard_application({"session_id": session_id})


def main():
    """
    Main entry point for the MCP server.

    Runs the server in stdio mode, which is the standard transport
    for MCP servers that are invoked by LLM agents.
    """
    # Load and setup configuration
    config.setup_logging()

    # Log startup information
    logger = logging.getLogger(__name__)
    logger.info("Starting ApplyForm MCP Server")
    logger.info(f"Server name: {config.server_name}")

    # Validate configuration and log warnings
    warnings = config.validate()
    for warning in warnings:
        logger.warning(warning)

    # Start the server
    logger.info("Server starting in stdio mode")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
