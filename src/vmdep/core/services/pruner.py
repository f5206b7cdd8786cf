from __future__ import annotations

"""
Ancestor Pruning Service.

Restricts a dependency graph to a target file and the files that depend
on it, either directly or transitively. Parent links may form cycles, so
the transitive walk tracks visited paths.
"""

import logging
from typing import Dict, List, Set

from vmdep.domain.models import FileNode

logger = logging.getLogger(__name__)


def prune_to_ancestors(
        graph: Dict[str, FileNode],
        target: str,
        recursive: bool,
) -> Dict[str, FileNode]:
    """
    Keep only the target node and its ancestors.

    Args:
        graph: Resolved nodes keyed by absolute path.
        target: Absolute path of the file whose ancestors are wanted.
        recursive: Follow parents transitively instead of one level.

    Returns:
        Dict[str, FileNode]: The pruned graph (target first), or an empty
                             mapping if the target is not in the graph.
    """
    if target not in graph:
        logger.warning(f"Target file <{target}> is not part of the dependency graph.")
        return {}

    if not recursive:
        direct = {target: graph[target]}
        for parent in graph[target].parents:
            if parent in graph:
                direct[parent] = graph[parent]
        return direct

    cleaned: Dict[str, FileNode] = {}
    visited: Set[str] = set()
    stack: List[str] = [target]

    while stack:
        path = stack.pop()
        if path in visited:
            continue
        visited.add(path)

        node = graph.get(path)
        if node is None:
            continue
        cleaned[path] = node
        # Reverse keeps parents visited in declaration order
        stack.extend(p for p in reversed(list(node.parents)) if p not in visited)

    return cleaned
