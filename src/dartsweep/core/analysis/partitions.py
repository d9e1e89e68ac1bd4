from __future__ import annotations

"""
Partition (``part of``) Correction.

Part files are stitched into their parent library by the compiler and are
never imported, so pure import closure always reports them as unused.
This pass re-examines every unused candidate that declares ``part of``
and keeps it only when its parent is unused as well.
"""

import logging
from typing import AbstractSet, FrozenSet, Mapping, Optional, Set

from dartsweep.core.analysis.catalog import SourceCatalog
from dartsweep.core.analysis.resolver import ImportResolver
from dartsweep.domain.models import Directive
from dartsweep.infra.fs import is_existing_file

logger = logging.getLogger(__name__)


def find_parent_file(
        part_path: str,
        directive: Directive,
        resolver: ImportResolver,
        library_index: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """
    Locate the parent library named by a ``part of`` directive.

    Args:
        part_path: Canonical path of the part file.
        directive: Its ``part of`` directive.
        resolver: Resolves the URI form, relative or ``package:``.
        library_index: Library name -> path map for the name-based form.

    Returns:
        Optional[str]: Canonical path of the parent if it exists on disk.
    """
    if directive.uri is not None:
        parent = resolver.resolve(directive.uri, part_path)
    elif directive.library_name is not None:
        parent = (library_index or {}).get(directive.library_name)
    else:
        parent = None

    if parent is None or not is_existing_file(parent):
        return None
    return parent


def apply_partition_correction(
        candidates: AbstractSet[str],
        catalog: SourceCatalog,
        resolver: ImportResolver,
        library_index: Optional[Mapping[str, str]] = None,
) -> FrozenSet[str]:
    """
    Derive the final unused set from the unused candidates.

    For each candidate with a ``part of`` directive (first one only):

    - parent missing: the part is dropped (orphan, warning);
    - parent also a candidate: the part stays (the whole family is dead);
    - parent reachable or outside the candidates: the part is dropped.

    Args:
        candidates: Unused candidate set (universe minus reachable set).
        catalog: Run-scoped source cache.
        resolver: Import resolver of the run.
        library_index: Library name -> path map for name-based ``part of``.

    Returns:
        FrozenSet[str]: The final unused set.
    """
    final: Set[str] = set()

    for path in candidates:
        part_of = catalog.get(path).first_part_of()
        if part_of is None:
            final.add(path)
            continue

        parent = find_parent_file(path, part_of, resolver, library_index)
        if parent is None:
            target = part_of.uri or part_of.library_name
            logger.warning(f"Part file {path} has no resolvable parent ({target}); not reported")
        elif parent in candidates:
            final.add(path)
        else:
            logger.debug(f"Part file {path} is live through its parent {parent}")

    return frozenset(final)
