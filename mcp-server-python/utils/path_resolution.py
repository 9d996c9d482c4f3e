"""
Path resolution helpers for repository-root anchored behavior.

These helpers ensure relative resume paths are interpreted from the
repository root (or APPLYFORM_ROOT override), not process cwd.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union


def get_repo_root() -> Path:
    """
    Resolve the repository root.

    Resolution order:
    1. APPLYFORM_ROOT environment variable
    2. Parent of mcp-server-python directory
    """
    root_env = os.getenv("APPLYFORM_ROOT")
    if root_env:
        return Path(root_env).expanduser().resolve()

    # path_resolution.py is under mcp-server-python/utils/
    return Path(__file__).resolve().parents[2]


def resolve_repo_relative_path(path: Union[str, Path]) -> Path:
    """
    Resolve absolute path directly; resolve relative path from repo root.
    """
    path_obj = Path(path).expanduser()
    if path_obj.is_absolute():
        return path_obj
    return get_repo_root() / path_obj
