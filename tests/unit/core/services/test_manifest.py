from __future__ import annotations

"""
Unit tests for the Project Manifest Reader.

Verifies name extraction, Flutter detection and the text-scan fallback
for malformed pubspec files.
"""

from pathlib import Path
from unittest.mock import patch

from dartsweep.core.services.manifest import load_manifest, parse_manifest


def test_valid_manifest() -> None:
    """TC-01: Name is read from a well-formed document."""
    manifest = parse_manifest("name: shop_app\nversion: 1.0.0\ndependencies:\n  http: ^1.0.0\n")

    assert manifest.name == "shop_app"
    assert manifest.uses_framework is False


def test_quoted_name_is_unquoted() -> None:
    """TC-02: Quotes around the name are stripped."""
    assert parse_manifest("name: 'quoted_app'\n").name == "quoted_app"


def test_flutter_detection() -> None:
    """TC-03: Flutter is detected as a dependency or as a top-level section."""
    as_dependency = "name: a\ndependencies:\n  flutter:\n    sdk: flutter\n"
    as_section = "name: b\nflutter:\n  uses-material-design: true\n"

    assert parse_manifest(as_dependency).uses_framework is True
    assert parse_manifest(as_section).uses_framework is True


def test_malformed_manifest_still_yields_name() -> None:
    """TC-04: Broken YAML falls back to a line scan for the name."""
    content = "name: broken_app\ndependencies: [unclosed\n  flutter:\n"
    manifest = parse_manifest(content)

    assert manifest.name == "broken_app"
    assert manifest.uses_framework is True


def test_missing_name() -> None:
    """TC-05: A manifest without a name yields None."""
    assert parse_manifest("version: 1.0.0\n").name is None
    assert parse_manifest("").name is None
    assert parse_manifest("- just\n- a list\n").name is None


def test_load_missing_manifest(tmp_path: Path) -> None:
    """TC-06: A project without pubspec.yaml has no name."""
    manifest = load_manifest(str(tmp_path))

    assert manifest.name is None
    assert manifest.path.endswith("pubspec.yaml")


def test_load_unreadable_manifest(tmp_path: Path) -> None:
    """TC-07: Read errors are tolerated and leave the name empty."""
    (tmp_path / "pubspec.yaml").write_text("name: app\n", encoding="utf-8")

    with patch("builtins.open", side_effect=PermissionError("denied")):
        manifest = load_manifest(str(tmp_path))

    assert manifest.name is None


def test_load_valid_manifest(tmp_path: Path) -> None:
    """TC-08: The file at the project root is read."""
    (tmp_path / "pubspec.yaml").write_text("name: on_disk\n", encoding="utf-8")
    assert load_manifest(str(tmp_path)).name == "on_disk"
