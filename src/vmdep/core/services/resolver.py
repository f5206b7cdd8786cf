from __future__ import annotations

"""
Path Resolution Service.

Maps include arguments and absolute file paths onto the configured,
priority-ordered root directories. Resolution never fails: when no root
matches, the first root is used so the graph stays connected.
"""

import logging
import os
import re
from typing import List, Optional

from vmdep.domain.constants import VARIABLE_PATTERN

logger = logging.getLogger(__name__)

_VARIABLE_RX = re.compile(VARIABLE_PATTERN)
_QUOTES = ("'", '"')


# ==============================================================================
# PUBLIC API
# ==============================================================================

def find_root(
        roots: List[str],
        full_path: Optional[str] = None,
        rel_path: Optional[str] = None,
) -> str:
    """
    Select the root directory a path belongs to.

    Exactly one of `full_path` and `rel_path` is expected.

    Args:
        roots: Priority-ordered absolute root directories.
        full_path: Absolute file path; matched by root prefix.
        rel_path: Unquoted include path; matched by existence under a root.

    Returns:
        str: The first matching root, or the first root as a fallback.
    """
    for root in roots:
        if full_path is not None:
            if is_under_root(root, full_path):
                return root
        elif os.path.exists(join_root(root, rel_path or "")):
            return root

    logger.debug(f"Cannot find root for path <{full_path or rel_path}>.")
    return roots[0]


def join_root(root: str, rel_path: str) -> str:
    """
    Join an include path onto a root.

    Include paths are root-relative even when they start with a separator,
    so '/a.vm' under '/site' is '/site/a.vm'.
    """
    return os.path.normpath(os.path.join(root, rel_path.lstrip("/\\")))


def is_under_root(root: str, full_path: str) -> bool:
    """Check whether `full_path` lies inside `root`, by whole path components."""
    base = root.rstrip("/\\")
    return full_path == base or full_path.startswith(base + os.sep)


def clean_rel_path(raw: str) -> str:
    """
    Strip one layer of surrounding quotes from an include argument.

        'path' -> path
        "path" -> path
        $path  -> $path
    """
    if len(raw) >= 2 and raw[0] in _QUOTES and raw[-1] == raw[0]:
        return raw[1:-1]
    return raw


def has_variable(raw: str) -> bool:
    """
    Detect include arguments that reference a template variable.

    Single quotes suppress interpolation, so they never count.

        '$path' -> False
        "path"  -> False
        "$path" -> True
        $path   -> True
        path    -> False
    """
    if raw.startswith("'"):
        return False
    return _VARIABLE_RX.search(raw) is not None


def normalize_rel_path(rel_path: str) -> str:
    """Make a concrete relative path start with '/' using forward slashes."""
    p = rel_path.replace(os.sep, "/")
    return p if p.startswith("/") else "/" + p
