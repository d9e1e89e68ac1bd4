from __future__ import annotations

"""
Unused File Cleanup Service.

Deletes the files of a final unused set one by one. A failure on one
file is recorded and logged, and the batch carries on; there is no
rollback.
"""

import logging
import os
from typing import Iterable, List, Tuple

from dartsweep.domain.models import DeletionReport
from dartsweep.infra.fs import safe_remove

logger = logging.getLogger(__name__)


def delete_files(paths: Iterable[str], project_root: str) -> DeletionReport:
    """
    Delete each file, isolating per-file failures.

    Args:
        paths: Absolute paths to delete.
        project_root: Directory used to render paths in the report.

    Returns:
        DeletionReport: Deleted and failed files (project-relative).
    """
    deleted: List[str] = []
    failed: List[Tuple[str, str]] = []

    for path in sorted(paths):
        rel_path = os.path.relpath(path, project_root).replace(os.sep, "/")
        ok, error = safe_remove(path)
        if ok:
            logger.info(f"Deleted: {rel_path}")
            deleted.append(rel_path)
        else:
            logger.warning(f"Failed to delete {rel_path}: {error}")
            failed.append((rel_path, error or "unknown error"))

    logger.info(f"Unused files deleted: {len(deleted)}")
    return DeletionReport(deleted=deleted, failed=failed)
