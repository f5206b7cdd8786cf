from __future__ import annotations

"""
Unit tests for the Ancestor Pruning Service.

Verifies direct and transitive ancestor selection, and termination on
cyclic parent links.
"""

from typing import Dict

from vmdep.core.services.pruner import prune_to_ancestors
from vmdep.domain.models import FileNode


def _graph(edges: Dict[str, list]) -> Dict[str, FileNode]:
    """Build a graph from child -> [parents] lists."""
    graph = {name: FileNode(root="/site", rel_path=name) for name in edges}
    for child, parents in edges.items():
        for parent in parents:
            graph[child].parents[parent] = "parse"
            graph[parent].add_child(child, (1, 0))
    return graph


def test_non_recursive_keeps_direct_parents_only() -> None:
    graph = _graph({
        "/leaf.vm": ["/mid.vm", "/other.vm"],
        "/mid.vm": ["/top.vm"],
        "/other.vm": [],
        "/top.vm": [],
        "/unrelated.vm": [],
    })

    pruned = prune_to_ancestors(graph, "/leaf.vm", recursive=False)

    assert set(pruned) == {"/leaf.vm", "/mid.vm", "/other.vm"}
    assert pruned["/mid.vm"] is graph["/mid.vm"]


def test_recursive_collects_transitive_ancestors() -> None:
    graph = _graph({
        "/leaf.vm": ["/mid.vm"],
        "/mid.vm": ["/top.vm"],
        "/top.vm": [],
        "/sibling.vm": ["/top.vm"],
    })

    pruned = prune_to_ancestors(graph, "/leaf.vm", recursive=True)

    assert list(pruned) == ["/leaf.vm", "/mid.vm", "/top.vm"]


def test_recursive_terminates_on_cycles() -> None:
    graph = _graph({
        "/a.vm": ["/b.vm"],
        "/b.vm": ["/c.vm"],
        "/c.vm": ["/a.vm"],
    })

    pruned = prune_to_ancestors(graph, "/a.vm", recursive=True)

    assert set(pruned) == {"/a.vm", "/b.vm", "/c.vm"}


def test_self_include_is_harmless() -> None:
    graph = _graph({"/a.vm": ["/a.vm"]})
    assert set(prune_to_ancestors(graph, "/a.vm", recursive=True)) == {"/a.vm"}
    assert set(prune_to_ancestors(graph, "/a.vm", recursive=False)) == {"/a.vm"}


def test_unknown_target_returns_empty_graph(caplog) -> None:
    graph = _graph({"/a.vm": []})
    assert prune_to_ancestors(graph, "/missing.vm", recursive=True) == {}
    assert "not part of the dependency graph" in caplog.text
