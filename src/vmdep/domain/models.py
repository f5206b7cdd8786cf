from __future__ import annotations

"""
Dependency Graph Domain Models.

Defines the per-file node of the template dependency graph, the lexer
match record emitted by the directive extractor, and the immutable run
configuration consumed by the traversal engine.
"""

import os
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple

from vmdep.domain.constants import (
    DEFAULT_DIRECTIVES,
    DEFAULT_ENCODING,
    DEFAULT_EXTENSION,
)

# (line, column): 1-based line, 0-based column
Position = Tuple[int, int]


class ConfigurationError(ValueError):
    """Raised when a scan configuration cannot drive a traversal."""


# -----------------------------------------------------------------------------
# GRAPH COMPONENTS
# -----------------------------------------------------------------------------

class FileStatus(IntEnum):
    """Existence state of a file referenced in the graph."""
    NORMAL = 0
    MISSING = 1
    HAS_VARIABLE = 2


@dataclass
class FileNode:
    """
    One file of the dependency graph, keyed externally by absolute path.

    Attributes:
        root: Configured root directory the file was resolved under.
        rel_path: Path relative to root. Starts with '/' unless the
                  status is HAS_VARIABLE.
        status: Existence state of the file.
        variables: Positions in this file of includes whose target
                   contains an unresolved variable.
        parents: Absolute path of each parent -> directive name used.
        children: Absolute path of each child -> positions referencing it.
    """
    root: str
    rel_path: str
    status: FileStatus = FileStatus.NORMAL
    variables: List[Position] = field(default_factory=list)
    parents: Dict[str, str] = field(default_factory=dict)
    children: Dict[str, List[Position]] = field(default_factory=dict)

    @property
    def is_scannable(self) -> bool:
        return self.status is FileStatus.NORMAL

    def add_child(self, child_path: str, position: Position) -> None:
        self.children.setdefault(child_path, []).append(position)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into JSON-compatible primitives."""
        return {
            "root": self.root,
            "rel_path": self.rel_path,
            "status": self.status.name.lower(),
            "variables": [list(p) for p in self.variables],
            "parents": dict(self.parents),
            "children": {k: [list(p) for p in v] for k, v in self.children.items()},
        }


@dataclass(frozen=True)
class DirectiveMatch:
    """
    A directive invocation found by the extractor.

    Attributes:
        directive: Directive name without sigil or braces.
        arguments: Whitespace-split raw arguments (quotes preserved).
        line: 1-based physical line number.
        column: 0-based offset of the directive sigil in the physical line.
            After a block comment closes on the same line, the offset still
            counts from the start of the line, not from the closing marker.
    """
    directive: str
    arguments: List[str]
    line: int
    column: int

    @property
    def position(self) -> Position:
        return self.line, self.column


# -----------------------------------------------------------------------------
# RUN CONFIGURATION
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanConfig:
    """
    Immutable input of a single traversal.

    Attributes:
        roots: Priority-ordered absolute root directories.
        file: Absolute path of the starting file, or None for a full scan.
        directives: Directive names recognized by the extractor.
        encoding: Text encoding used to read template files.
        extension: Template file extension (with leading dot).
        reverse: Build the ancestor graph of `file` instead of its children.
        recursive: Follow dependencies (or ancestors) transitively.
        variable: Answer only whether `file` has variable includes.
    """
    roots: List[str]
    file: Optional[str] = None
    directives: List[str] = field(default_factory=lambda: list(DEFAULT_DIRECTIVES))
    encoding: str = DEFAULT_ENCODING
    extension: str = DEFAULT_EXTENSION
    reverse: bool = False
    recursive: bool = False
    variable: bool = False

    def __post_init__(self) -> None:
        if not self.roots:
            raise ConfigurationError("At least one root directory is required.")
        if not self.directives:
            raise ConfigurationError("At least one directive name is required.")

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "ScanConfig":
        """Build from a validated configuration dictionary."""
        target = cfg.get("file") or None
        return cls(
            roots=[os.path.abspath(r) for r in cfg.get("roots", [])],
            file=os.path.abspath(target) if target else None,
            directives=list(cfg.get("directives") or DEFAULT_DIRECTIVES),
            encoding=cfg.get("encoding") or DEFAULT_ENCODING,
            extension=cfg.get("extension") or DEFAULT_EXTENSION,
            reverse=bool(cfg.get("reverse", False)),
            recursive=bool(cfg.get("recursive", False)),
            variable=bool(cfg.get("variable", False)),
        )
