from __future__ import annotations

"""
Unit tests for the 'part of' Correction Pass.

Mirrors the generated-file scenarios: a part file follows the fate of its
parent library, orphans are never reported, and only the first
'part of' declaration counts.
"""

import logging
from pathlib import Path

import pytest

from dartsweep.core.analysis.catalog import SourceCatalog
from dartsweep.core.analysis.partitions import apply_partition_correction, find_parent_file
from dartsweep.core.analysis.resolver import ImportResolver
from dartsweep.domain.config import RunConfig
from dartsweep.domain.models import Directive, DirectiveKind
from dartsweep.infra.fs import canonical_path


def _write(root: Path, rel: str, content: str) -> str:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return canonical_path(str(path))


def _resolver(root: Path) -> ImportResolver:
    return ImportResolver(RunConfig(
        project_root=canonical_path(str(root)),
        source_root=canonical_path(str(root / "lib")),
        project_name="test_project",
    ))


# -----------------------------------------------------------------------------
# PARENT LOOKUP
# -----------------------------------------------------------------------------

def test_parent_by_relative_uri(tmp_path: Path) -> None:
    """TC-01: The URI is resolved against the part file's directory."""
    parent = _write(tmp_path, "lib/src/parent.dart", "")
    part = _write(tmp_path, "lib/src/gen/test.g.dart", "")

    directive = Directive(kind=DirectiveKind.PART_OF, uri="../parent.dart")

    assert find_parent_file(part, directive, _resolver(tmp_path)) == parent


def test_parent_by_library_name(tmp_path: Path) -> None:
    """TC-02: The name-based form is looked up in the library index."""
    parent = _write(tmp_path, "shop.dart", "library shop;\n")
    part = _write(tmp_path, "cart.dart", "part of shop;\n")
    directive = Directive(kind=DirectiveKind.PART_OF, library_name="shop")

    assert find_parent_file(part, directive, _resolver(tmp_path), {"shop": parent}) == parent
    assert find_parent_file(part, directive, _resolver(tmp_path), {}) is None


def test_missing_parent_is_none(tmp_path: Path) -> None:
    """TC-03: A parent that does not exist on disk is not found."""
    part = _write(tmp_path, "env.g.dart", "part of 'env.dart';\n")
    directive = Directive(kind=DirectiveKind.PART_OF, uri="env.dart")

    assert find_parent_file(part, directive, _resolver(tmp_path)) is None

# -----------------------------------------------------------------------------
# CORRECTION
# -----------------------------------------------------------------------------

def test_correction_matrix(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """TC-04: Live parent drops the part; dead parent keeps it; orphans are dropped."""
    caplog.set_level(logging.WARNING)

    file1 = _write(tmp_path, "file1.dart", "class File1 {}")
    live_parent = _write(tmp_path, "env.dart", "part 'env.g.dart';\n")
    live_part = _write(tmp_path, "env.g.dart", "part of 'env.dart';\n")
    dead_parent = _write(tmp_path, "unused_parent.dart", "part 'unused_parent.g.dart';\n")
    dead_part = _write(tmp_path, "unused_parent.g.dart", "part of 'unused_parent.dart';\n")
    orphan = _write(tmp_path, "orphan.g.dart", "part of 'nowhere.dart';\n")

    candidates = {file1, live_part, dead_parent, dead_part, orphan}
    catalog = SourceCatalog(candidates | {live_parent})

    final = apply_partition_correction(candidates, catalog, _resolver(tmp_path))

    assert final == frozenset({file1, dead_parent, dead_part})
    assert "no resolvable parent" in caplog.text


def test_first_part_of_decides(tmp_path: Path) -> None:
    """TC-05: With several 'part of' lines, only the first parent counts."""
    first = _write(tmp_path, "first.dart", "class First {}")
    second = _write(tmp_path, "second.dart", "class Second {}")
    part = _write(tmp_path, "test.g.dart", "part of 'first.dart';\npart of 'second.dart';\n")
    catalog = SourceCatalog([first, second, part])
    resolver = _resolver(tmp_path)

    # first.dart is live, second.dart is dead: the part follows first.dart.
    assert apply_partition_correction({second, part}, catalog, resolver) == frozenset({second})
    # first.dart is dead: the part stays with it.
    assert apply_partition_correction({first, part}, catalog, resolver) == frozenset({first, part})


def test_named_part_of_with_dead_family(tmp_path: Path) -> None:
    """TC-06: Name-based 'part of' participates in the correction."""
    parent = _write(tmp_path, "shop.dart", "library shop;\npart 'cart.dart';\n")
    part = _write(tmp_path, "cart.dart", "part of shop;\n")
    catalog = SourceCatalog([parent, part])
    index = catalog.library_index([parent, part])
    resolver = _resolver(tmp_path)

    assert apply_partition_correction({parent, part}, catalog, resolver, index) == frozenset({parent, part})
    assert apply_partition_correction({part}, catalog, resolver, index) == frozenset()


def test_parent_by_package_uri(tmp_path: Path) -> None:
    """TC-07: 'part of package:<own>/...' resolves under the source root."""
    parent = _write(tmp_path, "lib/old/model.dart", "part 'model.g.dart';\n")
    part = _write(tmp_path, "lib/old/model.g.dart", "part of 'package:test_project/old/model.dart';\n")
    resolver = _resolver(tmp_path)
    directive = Directive(kind=DirectiveKind.PART_OF, uri="package:test_project/old/model.dart")
    catalog = SourceCatalog([parent, part])

    assert find_parent_file(part, directive, resolver) == parent
    assert apply_partition_correction({parent, part}, catalog, resolver) == frozenset({parent, part})
    assert apply_partition_correction({part}, catalog, resolver) == frozenset()


def test_parent_in_foreign_package_is_orphan(tmp_path: Path) -> None:
    """TC-08: A parent in another package cannot be resolved, so the part is not reported."""
    part = _write(tmp_path, "lib/model.g.dart", "part of 'package:other/model.dart';\n")
    catalog = SourceCatalog([part])

    assert apply_partition_correction({part}, catalog, _resolver(tmp_path)) == frozenset()
