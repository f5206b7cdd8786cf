from __future__ import annotations

"""
Dependency Graph Renderer.

Converts a resolved dependency graph into visual ASCII blocks for terminal
output, a variable-include report, and JSON-compatible payloads.
"""

from typing import Any, Dict, List

from vmdep.domain.models import FileNode, FileStatus, Position

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_graph(graph: Dict[str, FileNode]) -> List[str]:
    """
    Render one block per node, sorted by absolute path.

    Each block lists outgoing edges (->, with positions) then incoming
    edges (<-, with the directive), using standard ASCII connectors.

    Args:
        graph: Nodes keyed by absolute path.

    Returns:
        List[str]: Visual lines of the rendered graph.
    """
    lines: List[str] = []
    for path in sorted(graph):
        node = graph[path]
        lines.append(f"{node.rel_path} [{_status_label(node.status)}] @ {node.root}")

        entries: List[str] = []
        for child in sorted(node.children):
            entries.append(f"-> {child}  {_format_positions(node.children[child])}")
        for parent in sorted(node.parents):
            entries.append(f"<- {parent}  #{node.parents[parent]}")

        _append_entries(lines, entries)
    return lines


def render_variable_report(graph: Dict[str, FileNode]) -> List[str]:
    """
    List the files that include paths built from template variables.

    Args:
        graph: Nodes keyed by absolute path.

    Returns:
        List[str]: One block per file with variable includes.
    """
    lines: List[str] = []
    for path in sorted(graph):
        node = graph[path]
        if not node.variables:
            continue
        lines.append(f"{path}  {_format_positions(node.variables)}")

        marked = set(node.variables)
        entries = [
            f"{child}  {_format_positions([p for p in positions if p in marked])}"
            for child, positions in sorted(node.children.items())
            if marked.intersection(positions)
        ]
        _append_entries(lines, entries)
    return lines


def graph_to_payload(graph: Dict[str, FileNode]) -> Dict[str, Any]:
    """Convert the graph into JSON-compatible primitives."""
    return {path: node.to_dict() for path, node in graph.items()}


def summarize_graph(graph: Dict[str, FileNode]) -> Dict[str, int]:
    """Count nodes per status and the total number of edges."""
    summary = {status.name.lower(): 0 for status in FileStatus}
    edges = 0
    for node in graph.values():
        summary[node.status.name.lower()] += 1
        edges += len(node.children)
    summary["files"] = len(graph)
    summary["edges"] = edges
    return summary

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _append_entries(lines: List[str], entries: List[str]) -> None:
    total = len(entries)
    for i, entry in enumerate(entries):
        connector = "└── " if i == total - 1 else "├── "
        lines.append(f"{connector}{entry}")


def _format_positions(positions: List[Position]) -> str:
    return ", ".join(f"{line}:{col}" for line, col in positions)


def _status_label(status: FileStatus) -> str:
    return status.name.lower().replace("_", "-")

