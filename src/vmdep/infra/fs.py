from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation and filesystem probes used by
the configuration layer and the dependency scanner. Acts as an abstraction
over the 'os' module to keep path handling uniform across Windows and
Unix-like systems.
"""

import os
from typing import List, Optional

from vmdep.domain.constants import APP_DIR_NAME, UNIX_APP_DIR_NAME

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/vmdep
    - Linux/Mac: ~/.vmdep

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def normalize_paths(paths: List[str]) -> List[str]:
    """Normalize a list of paths, dropping empty entries and duplicates."""
    out: List[str] = []
    for raw in paths:
        if not (raw or "").strip():
            continue
        p = normalize_path(raw, fallback=os.getcwd())
        if p not in out:
            out.append(p)
    return out

# -----------------------------------------------------------------------------
# FILESYSTEM PROBES
# -----------------------------------------------------------------------------

def has_extension(path: str, extension: str) -> bool:
    """Check whether a path carries the given extension (case-sensitive)."""
    return os.path.splitext(path)[1] == extension


def missing_directories(paths: List[str]) -> List[str]:
    """
    Identify entries that are not existing directories.

    Args:
        paths: Directories to check.

    Returns:
        List[str]: Paths that do not exist or are not directories.
    """
    return [p for p in paths if not os.path.isdir(p)]
