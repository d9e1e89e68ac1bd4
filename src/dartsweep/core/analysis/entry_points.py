from __future__ import annotations

"""
Entry-Point Selection.

Chooses the traversal roots: every file named like the program entry
point, or the framework's conventional entry file when none is found.
"""

import logging
import os
from typing import Iterable, List

from dartsweep.domain.config import RunConfig
from dartsweep.infra.fs import canonical_path, is_existing_file

logger = logging.getLogger(__name__)


def select_entry_points(universe: Iterable[str], config: RunConfig) -> List[str]:
    """
    Determine the root set of the reachability traversal.

    Args:
        universe: Canonical paths of all source files.
        config: Run configuration (entry name, framework marker, source root).

    Returns:
        List[str]: Sorted canonical entry points; empty when none exist.
    """
    entry_points = sorted(
        path for path in universe
        if os.path.basename(path) == config.entry_file_name
    )
    if entry_points:
        return entry_points

    if config.uses_framework:
        default_entry = canonical_path(os.path.join(config.source_root, config.entry_file_name))
        if is_existing_file(default_entry):
            logger.info(f"Using framework default entry point {default_entry}")
            return [default_entry]

    return []
