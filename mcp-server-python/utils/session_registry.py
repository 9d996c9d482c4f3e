"""
In-memory registry of open application sessions.

Each MCP client works on its own form, addressed by ``session_id``. Sessions
live only as long as the server process.
"""

import logging
import uuid
from typing import Callable, Dict, Optional

from config import get_config
from models.errors import create_session_not_found_error, create_validation_error
from utils.form_state_machine import FormStateMachine
from utils.notifications import NotificationLog
from utils.transport import build_transport

logger = logging.getLogger(__name__)


def build_form_from_config(config=None) -> FormStateMachine:
    """Create a FormStateMachine wired with configured policy and transport."""
    config = config or get_config()
    return FormStateMachine(
        transport=build_transport(config),
        notifier=NotificationLog(),
        resume_policy=config.resume_policy(),
        cover_letter_word_limit=config.cover_letter_word_limit,
        require_valid_step=config.require_valid_step,
    )


def generate_session_id() -> str:
    """Generate a session id of the form ``app_<12 hex chars>``."""
    return f"app_{uuid.uuid4().hex[:12]}"


class ApplicationSessionRegistry:
    """
    Maps session ids to the forms they own.

    At most ``max_sessions`` forms are kept; opening another one evicts the
    oldest sessions first. A form that is mid-submission is never evicted.
    """

    def __init__(
        self,
        form_factory: Optional[Callable[[], FormStateMachine]] = None,
        max_sessions: Optional[int] = None,
    ):
        self._form_factory = form_factory or build_form_from_config
        if max_sessions is None:
            max_sessions = get_config().max_sessions
        self.max_sessions = max(1, max_sessions)
        self._sessions: Dict[str, FormStateMachine] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self) -> str:
        """Open a new empty application and return its session id."""
        session_id = generate_session_id()
        self._sessions[session_id] = self._form_factory()
        logger.info("Opened application session %s", session_id)
        self._evict_oldest(keep=session_id)
        return session_id

    def _evict_oldest(self, keep: str) -> None:
        # Dicts keep insertion order, so iteration runs oldest first
        candidates = [
            session_id
            for session_id, form in self._sessions.items()
            if session_id != keep and not form.is_submitting
        ]
        excess = len(self._sessions) - self.max_sessions
        for session_id in candidates[: max(0, excess)]:
            del self._sessions[session_id]
            logger.info("Evicted application session %s (limit %d)", session_id, self.max_sessions)

    def get(self, session_id: str) -> FormStateMachine:
        """
        Look up a session's form.

        Raises:
            ToolError: VALIDATION_ERROR for a blank id, SESSION_NOT_FOUND otherwise
        """
        if not session_id or not session_id.strip():
            raise create_validation_error("Invalid session_id: cannot be empty")
        form = self._sessions.get(session_id)
        if form is None:
            raise create_session_not_found_error(session_id)
        return form

    def discard(self, session_id: str) -> bool:
        """Drop a session. Returns True if it existed."""
        existed = self._sessions.pop(session_id, None) is not None
        if existed:
            logger.info("Discarded application session %s", session_id)
        return existed


# Global registry used by the MCP tools
registry = ApplicationSessionRegistry()


def get_session_registry() -> ApplicationSessionRegistry:
    """
    Get the global session registry.

    Returns:
        Global ApplicationSessionRegistry instance
    """
    return registry
