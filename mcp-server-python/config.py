"""
Configuration module for the ApplyForm MCP Server.

Provides centralized configuration management with support for:
- Environment variables
- Default values
- Path resolution
- Logging configuration
- Resume policy and submission transport settings
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file at project root
# config.py is in mcp-server-python/, so .env is in parent directory
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)

DEFAULT_RESUME_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_RESUME_ALLOWED_TYPES = [
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/msword",
]


def _parse_str_list(env_var: str, default: List[str]) -> List[str]:
    """Parse a comma-separated string from env into a list of strings."""
    value = os.getenv(env_var)
    if value is None or not value.strip():
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_bool(env_var: str, default: bool) -> bool:
    """Parse a boolean value from an environment variable."""
    value = os.getenv(env_var)
    if value is None:
        return default
    return value.lower() in ("true", "1", "t", "y", "yes")


class Config:
    """
    Configuration class for MCP server settings.

    Supports configuration via environment variables (and .env file) with sensible defaults.
    All paths are resolved relative to the repository root.
    """

    def __init__(self):
        """Initialize configuration from environment variables and defaults."""
        # Repository root detection
        self._repo_root = self._find_repo_root()

        # Logging configuration
        self.log_level = os.getenv("APPLYFORM_LOG_LEVEL", "INFO").upper()
        self.log_file = self._resolve_log_path()

        # Server configuration
        self.server_name = os.getenv("APPLYFORM_SERVER_NAME", "applyform-mcp-server")

        # Resume policy
        self.resume_max_bytes = int(
            os.getenv("APPLYFORM_RESUME_MAX_BYTES", str(DEFAULT_RESUME_MAX_BYTES))
        )
        self.resume_allowed_types = _parse_str_list(
            "APPLYFORM_RESUME_ALLOWED_TYPES", list(DEFAULT_RESUME_ALLOWED_TYPES)
        )

        # Cover letter soft limit
        self.cover_letter_word_limit = int(os.getenv("APPLYFORM_COVER_LETTER_WORD_LIMIT", "500"))

        # Wizard behaviour
        self.require_valid_step = _parse_bool("APPLYFORM_REQUIRE_VALID_STEP", False)

        # Submission transport
        self.submit_delay_seconds = float(os.getenv("APPLYFORM_SUBMIT_DELAY_SECONDS", "2.0"))
        self.submit_url = os.getenv("APPLYFORM_SUBMIT_URL") or None
        self.submit_timeout_seconds = float(os.getenv("APPLYFORM_SUBMIT_TIMEOUT_SECONDS", "30"))

        # Open sessions kept in memory before the oldest are evicted
        self.max_sessions = int(os.getenv("APPLYFORM_MAX_SESSIONS", "100"))

    def _find_repo_root(self) -> Path:
        """
        Find the repository root directory.

        Looks for the parent directory containing the mcp-server-python folder.

        Returns:
            Path to repository root
        """
        current_file = Path(__file__).resolve()
        # config.py is in mcp-server-python/, so parent is repo root
        return current_file.parent.parent

    def _resolve_log_path(self) -> Optional[Path]:
        """
        Resolve the log file path from environment.

        If APPLYFORM_LOG_FILE is set, logs will be written to that file.
        Otherwise, logs go to stderr only.

        Returns:
            Path to log file, or None for stderr-only logging
        """
        log_env = os.getenv("APPLYFORM_LOG_FILE")
        if not log_env:
            return None

        log_path = Path(log_env)
        if log_path.is_absolute():
            return log_path
        else:
            # Relative to repo root
            return self._repo_root / log_path

    def setup_logging(self):
        """
        Configure logging based on configuration settings.

        Sets up logging to stderr and optionally to a file.
        Log level is controlled by APPLYFORM_LOG_LEVEL.
        """
        # Parse log level
        numeric_level = getattr(logging, self.log_level, logging.INFO)

        # Create formatter
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

        # Configure root logger
        root_logger = logging.getLogger()
        root_logger.setLevel(numeric_level)

        # Remove existing handlers to avoid duplicates
        root_logger.handlers.clear()

        # Always add stderr handler
        stderr_handler = logging.StreamHandler()
        stderr_handler.setLevel(numeric_level)
        stderr_handler.setFormatter(formatter)
        root_logger.addHandler(stderr_handler)

        # Add file handler if log file is configured
        if self.log_file:
            # Ensure log directory exists
            self.log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(self.log_file)
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

            logging.info(f"Logging to file: {self.log_file}")

        logging.info(f"Log level set to: {self.log_level}")
        logging.info(f"Repository root: {self._repo_root}")
        logging.info(f"Submission transport: {'http' if self.submit_url else 'simulated'}")

    def resume_policy(self):
        """
        Build the resume validation policy from configured limits.

        Returns:
            ResumePolicy used by the resume validator
        """
        from utils.validation import ResumePolicy

        return ResumePolicy(
            max_bytes=self.resume_max_bytes,
            allowed_types=frozenset(self.resume_allowed_types),
        )

    def validate(self) -> list[str]:
        """
        Validate configuration and return any warnings.

        Returns:
            List of warning messages (empty if all valid)
        """
        warnings = []

        if self.resume_max_bytes <= 0:
            warnings.append(
                f"APPLYFORM_RESUME_MAX_BYTES must be positive, got {self.resume_max_bytes}. "
                "Every resume will be rejected."
            )

        if not self.resume_allowed_types:
            warnings.append("No resume MIME types are allowed. Every resume will be rejected.")

        if self.cover_letter_word_limit <= 0:
            warnings.append(
                f"APPLYFORM_COVER_LETTER_WORD_LIMIT must be positive, got {self.cover_letter_word_limit}"
            )

        if self.submit_delay_seconds < 0:
            warnings.append(
                f"APPLYFORM_SUBMIT_DELAY_SECONDS is negative ({self.submit_delay_seconds}); using 0"
            )

        if self.max_sessions <= 0:
            warnings.append(
                f"APPLYFORM_MAX_SESSIONS must be positive, got {self.max_sessions}; "
                "only the newest session is kept"
            )

        if self.submit_url and not self.submit_url.startswith(("http://", "https://")):
            warnings.append(f"APPLYFORM_SUBMIT_URL is not an http(s) URL: {self.submit_url}")

        # Check if log file directory is writable (if configured)
        if self.log_file:
            log_dir = self.log_file.parent
            if not log_dir.exists():
                try:
                    log_dir.mkdir(parents=True, exist_ok=True)
                except Exception as e:
                    warnings.append(f"Cannot create log directory {log_dir}: {e}")
            elif not os.access(log_dir, os.W_OK):
                warnings.append(f"Log directory not writable: {log_dir}")

        return warnings


# Global configuration instance
config = Config()


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Global Config instance
    """
    return config
