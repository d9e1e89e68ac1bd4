from __future__ import annotations

"""
Project Manifest Reader.

Reads the package name and the Flutter marker from ``pubspec.yaml``.
Parsing is two-staged: a proper YAML load first, then a line-oriented
scan of the raw text when the document is malformed, so that a broken
manifest only loses the fields that genuinely cannot be recovered.
"""

import logging
import os
import re
from typing import Any, Optional

import yaml

from dartsweep.domain import constants as const
from dartsweep.domain.models import ProjectManifest

logger = logging.getLogger(__name__)

_NAME_LINE_RX = re.compile(r"^name:\s*(\S+)", re.MULTILINE)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_manifest(project_root: str) -> ProjectManifest:
    """
    Read the project manifest located at the project root.

    Args:
        project_root: Directory expected to contain ``pubspec.yaml``.

    Returns:
        ProjectManifest: Parsed fields. ``name`` is None when the manifest is
        missing, unreadable or does not declare a name.
    """
    manifest_path = os.path.join(project_root, const.MANIFEST_FILE_NAME)

    if not os.path.isfile(manifest_path):
        logger.debug(f"No manifest found at {manifest_path}")
        return ProjectManifest(path=manifest_path)

    try:
        with open(manifest_path, "r", encoding="utf-8", errors="replace") as f:
            content = f.read()
    except OSError as e:
        logger.warning(f"Could not read manifest '{manifest_path}': {e}")
        return ProjectManifest(path=manifest_path)

    return parse_manifest(content, manifest_path)


def parse_manifest(content: str, manifest_path: str = const.MANIFEST_FILE_NAME) -> ProjectManifest:
    """
    Extract the manifest fields from raw ``pubspec.yaml`` text.

    Args:
        content: Manifest text.
        manifest_path: Path used for diagnostics and carried on the result.

    Returns:
        ProjectManifest: Parsed fields.
    """
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.warning(f"Malformed manifest '{manifest_path}', falling back to text scan: {e}")
        document = None

    if isinstance(document, dict):
        name = _clean_name(document.get("name"))
        if name is None:
            name = _scan_name(content)
        return ProjectManifest(
            path=manifest_path,
            name=name,
            uses_framework=_declares_framework(document),
        )

    return ProjectManifest(
        path=manifest_path,
        name=_scan_name(content),
        uses_framework=f"{const.FRAMEWORK_MARKER}:" in content,
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _clean_name(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    name = value.strip().strip("'\"")
    return name or None


def _scan_name(content: str) -> Optional[str]:
    match = _NAME_LINE_RX.search(content)
    if not match:
        return None
    return _clean_name(match.group(1))


def _declares_framework(document: dict) -> bool:
    """True if Flutter is a top-level section or a direct dependency."""
    if const.FRAMEWORK_MARKER in document:
        return True
    dependencies = document.get("dependencies")
    return isinstance(dependencies, dict) and const.FRAMEWORK_MARKER in dependencies
