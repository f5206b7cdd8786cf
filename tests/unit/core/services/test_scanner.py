from __future__ import annotations

"""
Unit tests for the Template Scanning and Discovery Service.

Verifies edge recording on both sides of a dependency, positions,
variable occurrence tracking, skipping of non-scannable nodes and
deterministic root traversal.
"""

import os

import pytest

from vmdep.core.services.extractor import DirectiveExtractor
from vmdep.core.services.registry import FileRegistry
from vmdep.core.services.scanner import discover_templates, scan_file, seed_registry
from vmdep.domain.models import FileStatus


@pytest.fixture
def registry(site_root) -> FileRegistry:
    return FileRegistry([str(site_root)])


def _scan(registry: FileRegistry, path: str, directives=("parse", "include")):
    return scan_file(
        registry,
        DirectiveExtractor(directives),
        path,
        encoding="utf-8",
        extension=".vm",
    )


def test_scan_records_symmetric_edges(registry, write_template) -> None:
    a = write_template("a.vm", "<div>\n  #include(\"b.vm\")\n</div>\n")
    b = write_template("b.vm", "plain text")
    registry.add_item(full_path=a)

    node = _scan(registry, a)

    assert a in registry.resolved and a not in registry.pending
    assert node.children == {b: [(2, 2)]}
    assert registry.get(b).parents == {a: "include"}
    assert b in registry.pending


def test_repeated_references_append_positions(registry, write_template) -> None:
    a = write_template("a.vm", "#parse('b.vm')\n#parse('b.vm') #parse('b.vm')")
    b = write_template("b.vm")
    registry.add_item(full_path=a)

    node = _scan(registry, a)

    assert node.children[b] == [(1, 0), (2, 0), (2, 15)]


def test_last_directive_wins_on_parent_edge(registry, write_template) -> None:
    a = write_template("a.vm", "#include('b.vm')\n#parse('b.vm')")
    b = write_template("b.vm")
    registry.add_item(full_path=a)

    _scan(registry, a)

    assert registry.get(b).parents[a] == "parse"


def test_file_without_directives_has_no_children(registry, write_template) -> None:
    a = write_template("a.vm", "## #parse('x.vm')\n#* #parse('y.vm') *#\nhello")
    registry.add_item(full_path=a)

    assert _scan(registry, a).children == {}


def test_variable_includes_are_tracked(registry, write_template) -> None:
    a = write_template("a.vm", "#parse(\"$skin/head.vm\")\n#parse('$literal.vm')")
    registry.add_item(full_path=a)

    node = _scan(registry, a)

    assert node.variables == [(1, 0)]
    statuses = {registry.get(p).status for p in node.children}
    assert statuses == {FileStatus.HAS_VARIABLE, FileStatus.MISSING}


def test_missing_node_is_resolved_without_reading(registry, site_root) -> None:
    ghost = os.path.join(str(site_root), "ghost.vm")
    registry.add_item(full_path=ghost)

    node = _scan(registry, ghost)

    assert node.status is FileStatus.MISSING
    assert ghost in registry.resolved


def test_non_template_target_is_not_parsed(registry, write_template) -> None:
    css = write_template("style.css", "#parse('a.vm')")
    registry.add_item(full_path=css)

    node = _scan(registry, css)

    assert node.children == {}
    assert len(registry) == 1


def test_scan_requires_pending_node(registry, write_template) -> None:
    a = write_template("a.vm")
    registry.add_item(full_path=a)
    _scan(registry, a)

    with pytest.raises(KeyError):
        _scan(registry, a)


def test_undecodable_bytes_are_replaced(registry, site_root, write_template) -> None:
    a = write_template("a.vm")
    legacy = site_root / "legacy.vm"
    legacy.write_bytes(b"caf\xe9 #parse('a.vm')")
    registry.add_item(full_path=str(legacy))

    node = _scan(registry, str(legacy))

    assert node.children == {a: [(1, 5)]}


def test_discover_templates_is_sorted_and_filtered(site_root, write_template) -> None:
    write_template("z.vm")
    write_template("b/inner.vm")
    write_template("a.vm")
    write_template("notes.txt")

    found = list(discover_templates([str(site_root)], ".vm"))

    rel = [os.path.relpath(p, str(site_root)) for p in found]
    assert rel == ["a.vm", "z.vm", os.path.join("b", "inner.vm")]


def test_seed_registry_registers_pending_nodes(registry, site_root, write_template) -> None:
    write_template("a.vm")
    write_template("sub/b.vm")

    assert seed_registry(registry, [str(site_root)], ".vm") == 2
    assert all(n.status is FileStatus.NORMAL for n in registry.pending.values())
    assert registry.resolved == {}
