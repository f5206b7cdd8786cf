from __future__ import annotations

"""
File Registry Service.

Keeps the two partitions of a traversal: files discovered but not yet
scanned (pending) and files already scanned (resolved). A path lives in
exactly one partition, and node creation is idempotent.
"""

import os
from typing import Dict, List, Optional

from vmdep.core.services.resolver import (
    clean_rel_path,
    find_root,
    has_variable,
    join_root,
    normalize_rel_path,
)
from vmdep.domain.models import FileNode, FileStatus


class FileRegistry:
    """
    Pending/resolved bookkeeping for one traversal session.

    Args:
        roots: Priority-ordered absolute root directories.
    """

    def __init__(self, roots: List[str]) -> None:
        self.roots = [os.path.abspath(r) for r in roots]
        self.pending: Dict[str, FileNode] = {}
        self.resolved: Dict[str, FileNode] = {}

    def __contains__(self, full_path: str) -> bool:
        return full_path in self.pending or full_path in self.resolved

    def __len__(self) -> int:
        return len(self.pending) + len(self.resolved)

    def get(self, full_path: str) -> Optional[FileNode]:
        return self.pending.get(full_path) or self.resolved.get(full_path)

    def add_item(
            self,
            full_path: Optional[str] = None,
            rel_path: Optional[str] = None,
    ) -> FileNode:
        """
        Return the node for a path, registering it as pending if unseen.

        Exactly one of the two arguments is expected. A relative path is
        the raw include argument, possibly quoted.

        Args:
            full_path: Absolute file path (root traversal, target file).
            rel_path: Raw directive argument.

        Returns:
            FileNode: The existing or newly created node.
        """
        if full_path is not None:
            full_path = os.path.abspath(full_path)
            root = find_root(self.roots, full_path=full_path)
            rel = os.path.relpath(full_path, root)
            status = FileStatus.NORMAL if os.path.exists(full_path) else FileStatus.MISSING
        else:
            raw = rel_path or ""
            rel = clean_rel_path(raw)
            root = find_root(self.roots, rel_path=rel)
            full_path = join_root(root, rel)
            if has_variable(raw):
                status = FileStatus.HAS_VARIABLE
            else:
                status = FileStatus.NORMAL if os.path.exists(full_path) else FileStatus.MISSING

        existing = self.get(full_path)
        if existing is not None:
            return existing

        if status is not FileStatus.HAS_VARIABLE:
            rel = normalize_rel_path(rel)

        node = FileNode(root=root, rel_path=rel, status=status)
        self.pending[full_path] = node
        return node

    def resolve(self, full_path: str) -> FileNode:
        """
        Move a pending node to the resolved partition.

        Raises:
            KeyError: If the path is not pending.
        """
        node = self.pending.pop(full_path)
        self.resolved[full_path] = node
        return node

    def pending_paths(self) -> List[str]:
        """Snapshot of the pending keys, in discovery order."""
        return list(self.pending)
