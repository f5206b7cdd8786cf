from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures that build template trees under a temporary directory.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Return an empty template root directory."""
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def write_template(site_root: Path) -> Callable[..., str]:
    """
    Return a helper writing a file under a root and returning its absolute path.

    Usage: write_template("layout/a.vm", "#parse('b.vm')", root=other_root)
    """
    def _write(rel_path: str, content: str = "", root: Path | None = None) -> str:
        target = (root or site_root) / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return str(target)

    return _write


@pytest.fixture
def mock_config_dict(site_root: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'vmdep.domain.config'.
    """
    return {
        "roots": [str(site_root)],
        "file": "",
        "directives": ["parse", "include"],
        "encoding": "utf-8",
        "extension": ".vm",
        "reverse": False,
        "recursive": False,
        "variable": False,
    }
