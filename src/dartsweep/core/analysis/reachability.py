from __future__ import annotations

"""
Reachability Traversal.

Computes the transitive closure of import/export edges starting at the
entry points, using an explicit worklist so that arbitrarily deep or
cyclic import graphs neither recurse nor loop.
"""

import logging
from typing import FrozenSet, Iterable, List, Set

from dartsweep.core.analysis.catalog import SourceCatalog
from dartsweep.core.analysis.resolver import ImportResolver
from dartsweep.infra.fs import canonical_path

logger = logging.getLogger(__name__)


def compute_reachable(
        entry_points: Iterable[str],
        catalog: SourceCatalog,
        resolver: ImportResolver,
) -> FrozenSet[str]:
    """
    Collect every file transitively imported or exported from the entry points.

    ``part`` and ``part of`` directives are not edges here; partition files
    are handled by the correction pass.

    Args:
        entry_points: Traversal roots.
        catalog: Run-scoped source cache providing each file's directives.
        resolver: Resolver mapping directive URIs to canonical paths.

    Returns:
        FrozenSet[str]: Canonical paths of every visited file, entry points
        included. Files outside the source root appear here too when a
        relative import reaches them.
    """
    visited: Set[str] = set()
    worklist: List[str] = [canonical_path(p) for p in entry_points]

    while worklist:
        path = worklist.pop()
        if path in visited:
            continue
        visited.add(path)

        for directive in catalog.get(path).edges():
            target = resolver.resolve(directive.uri or "", path)
            if target is not None and target not in visited:
                worklist.append(target)

    logger.debug(f"Traversal visited {len(visited)} file(s)")
    return frozenset(visited)
