from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A factory fixture that lays out throwaway Dart projects on disk.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


DEFAULT_PUBSPEC = "name: test_project\n"

# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """
    Return a factory building a Dart project below ``tmp_path``.

    The factory takes a mapping of project-relative paths to file contents
    and an optional pubspec text (None skips writing the manifest).

    Returns:
        Callable[..., Path]: factory(files, pubspec=DEFAULT_PUBSPEC) -> project root.
    """
    counter = {"n": 0}

    def _factory(files: Dict[str, str], pubspec: Optional[str] = DEFAULT_PUBSPEC) -> Path:
        counter["n"] += 1
        root = tmp_path / f"project_{counter['n']}"
        (root / "lib").mkdir(parents=True)
        if pubspec is not None:
            (root / "pubspec.yaml").write_text(pubspec, encoding="utf-8")
        for rel_path, content in files.items():
            target = root / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _factory
