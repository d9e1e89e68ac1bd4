from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path canonicalisation, presentation helpers and guarded filesystem
mutations shared by the analysis engine and the cleanup service. Every
module identity in dartsweep is a canonical path produced here.
"""

import os
from typing import Iterable, List, Optional, Tuple

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def canonical_path(path: str) -> str:
    """
    Return the absolute, normalised form of a path.

    Two paths denote the same module iff their canonical forms are equal.
    Symlinks are not resolved.

    Args:
        path: Relative or absolute path.

    Returns:
        str: Canonical absolute path.
    """
    return os.path.normpath(os.path.abspath(path))


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a user-supplied path string into a canonical path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return canonical_path(p)


def join_uri_path(base_dir: str, uri_path: str) -> str:
    """
    Join a '/'-separated URI path onto a native directory and canonicalise it.

    Args:
        base_dir: Native directory path.
        uri_path: Relative path using forward slashes.

    Returns:
        str: Canonical path of the joined location.
    """
    parts = [segment for segment in uri_path.split("/") if segment]
    return canonical_path(os.path.join(base_dir, *parts))


def is_existing_file(path: str) -> bool:
    """Check that a path points to a regular file."""
    return os.path.isfile(path)


def format_relative_paths(paths: Iterable[str], project_root: str) -> List[str]:
    """
    Render paths relative to the project root, sorted for deterministic output.

    Separators are normalised to '/' so reports look the same on every OS.

    Args:
        paths: Absolute paths to render.
        project_root: Directory the output is made relative to.

    Returns:
        List[str]: Sorted project-relative paths.
    """
    rendered = [
        os.path.relpath(p, project_root).replace(os.sep, "/")
        for p in paths
    ]
    return sorted(rendered)


# -----------------------------------------------------------------------------
# FILESYSTEM MUTATION API
# -----------------------------------------------------------------------------

def safe_remove(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to delete a single file.

    Args:
        path: Target file path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.remove(path)
        return True, None
    except OSError as e:
        return False, str(e)
