from __future__ import annotations

"""
Source Inventory.

Enumerates every Dart source file below the source root. The walk is
unrestricted (hidden and generated directories included); directories
that cannot be listed are skipped with a warning.
"""

import logging
import os
from typing import FrozenSet, Set

from dartsweep.domain import constants as const
from dartsweep.domain.errors import SourceRootNotFoundError
from dartsweep.infra.fs import canonical_path

logger = logging.getLogger(__name__)


def collect_source_files(source_root: str, suffix: str = const.SOURCE_SUFFIX) -> FrozenSet[str]:
    """
    Build the universe of candidate modules.

    Args:
        source_root: Directory to walk.
        suffix: File name suffix identifying source files.

    Returns:
        FrozenSet[str]: Canonical paths of all source files found.

    Raises:
        SourceRootNotFoundError: If the source root is missing or not a directory.
    """
    root = canonical_path(source_root)
    if not os.path.isdir(root):
        raise SourceRootNotFoundError(root)

    found: Set[str] = set()
    for dir_path, _dirs, files in os.walk(root, onerror=_report_walk_error):
        for file_name in files:
            if file_name.endswith(suffix):
                found.add(canonical_path(os.path.join(dir_path, file_name)))

    logger.debug(f"Inventory of {root}: {len(found)} source file(s)")
    return frozenset(found)


def _report_walk_error(error: OSError) -> None:
    logger.warning(f"Could not read directory {error.filename}: {error.strerror or error}")
