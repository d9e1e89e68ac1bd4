from __future__ import annotations

"""
Unit tests for Entry-Point Selection.
"""

from pathlib import Path

from dartsweep.core.analysis.entry_points import select_entry_points
from dartsweep.domain.config import RunConfig
from dartsweep.infra.fs import canonical_path


def _config(root: Path, **kwargs) -> RunConfig:
    return RunConfig(
        project_root=canonical_path(str(root)),
        source_root=canonical_path(str(root / "lib")),
        project_name="app",
        **kwargs,
    )


def test_every_main_file_is_an_entry_point(tmp_path: Path) -> None:
    """TC-01: All files named 'main.dart' are roots, sorted."""
    universe = [
        canonical_path(str(tmp_path / "lib" / "main.dart")),
        canonical_path(str(tmp_path / "lib" / "tools" / "main.dart")),
        canonical_path(str(tmp_path / "lib" / "widgets.dart")),
    ]

    result = select_entry_points(universe, _config(tmp_path))

    assert result == sorted(universe[:2])


def test_no_entry_point_without_framework(tmp_path: Path) -> None:
    """TC-02: Nothing is synthesised for a plain Dart package."""
    universe = [canonical_path(str(tmp_path / "lib" / "a.dart"))]
    assert select_entry_points(universe, _config(tmp_path)) == []


def test_framework_default_entry_point(tmp_path: Path) -> None:
    """TC-03: Flutter projects fall back to '<source root>/<entry name>' when it exists."""
    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "app.dart").write_text("", encoding="utf-8")
    config = _config(tmp_path, uses_framework=True, entry_file_name="app.dart")

    # Empty universe: only the fallback can find the file.
    assert select_entry_points([], config) == [canonical_path(str(lib / "app.dart"))]


def test_framework_default_requires_existing_file(tmp_path: Path) -> None:
    """TC-04: The fallback is skipped when the conventional file is absent."""
    (tmp_path / "lib").mkdir()
    config = _config(tmp_path, uses_framework=True)
    assert select_entry_points([], config) == []
