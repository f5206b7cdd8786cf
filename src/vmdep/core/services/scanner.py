from __future__ import annotations

"""
Template Scanning and Discovery Service.

Scans one registered template for directives, turning each argument into
a dependency node and recording the edge on both sides. Also walks the
configured roots to seed a registry with every template file.
"""

import logging
import os
from typing import Iterator, List

from vmdep.core.services.extractor import DirectiveExtractor
from vmdep.core.services.registry import FileRegistry
from vmdep.core.services.resolver import join_root
from vmdep.domain.models import FileNode, FileStatus
from vmdep.infra.fs import has_extension

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def scan_file(
        registry: FileRegistry,
        extractor: DirectiveExtractor,
        full_path: str,
        *,
        encoding: str,
        extension: str,
) -> FileNode:
    """
    Resolve a pending node and record the dependencies it declares.

    The node is moved to the resolved partition first, so a file is never
    scanned twice in one session. Nodes that are not NORMAL, or that do not
    carry the template extension, are resolved without reading content.

    Args:
        registry: Session registry holding the pending node.
        extractor: Session directive lexer.
        full_path: Absolute path of a pending node.
        encoding: Text encoding of template files.
        extension: Template extension; other files are not parsed.

    Returns:
        FileNode: The resolved node.

    Raises:
        KeyError: If `full_path` is not pending.
        OSError: If the file cannot be read.
    """
    item = registry.resolve(full_path)

    if not item.is_scannable or not has_extension(full_path, extension):
        return item

    with open(full_path, "r", encoding=encoding, errors="replace") as f:
        content = f.read()

    for match in extractor.iter_matches(content):
        for raw_arg in match.arguments:
            child = registry.add_item(rel_path=raw_arg)
            child.parents[full_path] = match.directive

            child_path = join_root(child.root, child.rel_path)
            item.add_child(child_path, match.position)

            if child.status is FileStatus.HAS_VARIABLE:
                item.variables.append(match.position)

    logger.debug(f"Scanned {full_path}: {len(item.children)} dependencies.")
    return item


def discover_templates(roots: List[str], extension: str) -> Iterator[str]:
    """
    Recursively yield every template file under the given roots.

    Directories and files are visited in sorted order so results are
    deterministic across platforms.

    Args:
        roots: Absolute root directories.
        extension: Template extension to select.

    Yields:
        str: Absolute path of each template file.
    """
    for root in roots:
        if os.path.isfile(root):
            if has_extension(root, extension):
                yield os.path.abspath(root)
            continue

        for dir_path, dirs, files in os.walk(os.path.abspath(root)):
            dirs.sort()
            files.sort()
            for file_name in files:
                if has_extension(file_name, extension):
                    yield os.path.join(dir_path, file_name)


def seed_registry(registry: FileRegistry, roots: List[str], extension: str) -> int:
    """
    Register every template under the roots as a pending node.

    Returns:
        int: Number of template files discovered.
    """
    count = 0
    for path in discover_templates(roots, extension):
        registry.add_item(full_path=path)
        count += 1
    logger.debug(f"Discovered {count} template files under {len(roots)} root(s).")
    return count
