from __future__ import annotations

"""
Core traversal orchestration.

This module drives one dependency discovery run:
1. Validates the configuration and opens a fresh session (registry + lexer).
2. Seeds the registry from the roots or from the target file.
3. Scans pending nodes according to the traversal mode.
4. Optionally prunes the graph to the target's ancestors.

Traversal modes:
- Full scan: no target file, or reverse lookup. Every template under every
  root is scanned, then every node those scans pulled in.
- Forward, non-recursive: the target is scanned, then the nodes pending
  after that scan are drained once.
- Forward, recursive: pending nodes are drained until none remain.
- Variable check: a target with the variable flag and no recursion is
  scanned alone.
"""

import json
import logging
import os
from typing import Any, Dict, Union

from vmdep.core.pipeline.validator import validate_config
from vmdep.core.services.extractor import DirectiveExtractor
from vmdep.core.services.pruner import prune_to_ancestors
from vmdep.core.services.registry import FileRegistry
from vmdep.core.services.scanner import scan_file, seed_registry
from vmdep.domain.models import FileNode, ScanConfig

logger = logging.getLogger(__name__)


class ScanSession:
    """
    State of a single traversal: configuration, registry and compiled lexer.

    Sessions are independent; nothing is shared between two of them.

    Args:
        config: Run configuration.
    """

    def __init__(self, config: ScanConfig) -> None:
        self.config = config
        self.registry = FileRegistry(config.roots)
        self.extractor = DirectiveExtractor(config.directives)

    def scan(self, full_path: str) -> FileNode:
        """Scan one pending node."""
        return scan_file(
            self.registry,
            self.extractor,
            full_path,
            encoding=self.config.encoding,
            extension=self.config.extension,
        )

    def drain_once(self) -> int:
        """
        Scan the nodes pending right now; nodes they add stay pending.

        Returns:
            int: Number of nodes scanned.
        """
        snapshot = self.registry.pending_paths()
        for path in snapshot:
            self.scan(path)
        return len(snapshot)

    def drain(self) -> int:
        """
        Scan pending nodes until none remain.

        Terminates on cyclic graphs because a node is scanned at most once.

        Returns:
            int: Number of nodes scanned.
        """
        total = 0
        while self.registry.pending:
            total += self.drain_once()
        return total

    def run(self) -> Dict[str, FileNode]:
        """
        Execute the traversal mode selected by the configuration.

        Returns:
            Dict[str, FileNode]: Resolved nodes keyed by absolute path.
        """
        cfg = self.config
        target = os.path.abspath(cfg.file) if cfg.file else None

        if target and cfg.variable and not cfg.recursive:
            logger.debug(f"Variable check of <{target}>.")
            self.registry.add_item(full_path=target)
            self.scan(target)
            return self.registry.resolved

        if cfg.reverse or not target:
            logger.debug("Full scan of configured roots.")
            seed_registry(self.registry, cfg.roots, cfg.extension)
            self.drain()
            if target:
                return prune_to_ancestors(self.registry.resolved, target, cfg.recursive)
            return self.registry.resolved

        self.registry.add_item(full_path=target)
        if cfg.recursive:
            logger.debug(f"Recursive forward scan from <{target}>.")
            self.drain()
        else:
            logger.debug(f"Forward scan of <{target}>.")
            self.scan(target)
            self.drain_once()
        return self.registry.resolved


# ==============================================================================
# PUBLIC API
# ==============================================================================

def run_scan(config: Union[ScanConfig, Dict[str, Any]]) -> Dict[str, FileNode]:
    """
    Build the dependency graph described by a configuration.

    Missing files, unresolvable roots and variable include paths are
    reported through node status, never raised.

    Args:
        config: A ScanConfig, or a raw configuration dictionary.

    Returns:
        Dict[str, FileNode]: Absolute path -> node, for the whole graph or
                             the pruned ancestor subset.

    Raises:
        ConfigurationError: If the configuration has no roots.
        OSError: If a template cannot be read.
    """
    if not isinstance(config, ScanConfig):
        cfg, warnings = validate_config(config, strict=False)
        for warning in warnings:
            logger.warning(f"Configuration Warning: {warning}")
        config = ScanConfig.from_dict(cfg)

    session = ScanSession(config)
    graph = session.run()

    logger.info(
        f"Dependency scan finished: {len(graph)} file(s) in result, "
        f"{len(session.registry.pending)} left pending."
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(json.dumps({k: v.to_dict() for k, v in graph.items()}, indent=2))
    return graph
