from __future__ import annotations

"""
vmdep: dependency graph discovery for Velocity-style template trees.
"""

from vmdep.core.pipeline.engine import run_scan
from vmdep.domain.models import FileNode, FileStatus, ScanConfig

__version__ = "0.1.0"

__all__ = [
    "FileNode",
    "FileStatus",
    "ScanConfig",
    "run_scan",
    "__version__",
]
