from __future__ import annotations

"""
Source File Catalog.

Owns one ``SourceFile`` per canonical path for the duration of a run, so
that every file is read and parsed at most once no matter how many times
traversal or the partition pass asks for it.
"""

import logging
from typing import Dict, Iterable, Optional, Tuple

from dartsweep.core.analysis.directives import extract_directives
from dartsweep.domain.models import Directive, DirectiveKind
from dartsweep.infra.fs import canonical_path

logger = logging.getLogger(__name__)

_UNSET = object()


class SourceFile:
    """
    A module identified by its canonical path, read lazily.

    An unreadable file keeps its identity but reports no content and no
    directives, i.e. it becomes a leaf.
    """

    def __init__(self, path: str) -> None:
        self.path = canonical_path(path)
        self._content: object = _UNSET
        self._directives: Optional[Tuple[Directive, ...]] = None

    def __repr__(self) -> str:
        return f"SourceFile({self.path!r})"

    @property
    def content(self) -> Optional[str]:
        """Raw text of the file, or None when it could not be read."""
        if self._content is _UNSET:
            self._content = self._read()
        return self._content  # type: ignore[return-value]

    @property
    def directives(self) -> Tuple[Directive, ...]:
        """Ordered directives of the file (extracted once)."""
        if self._directives is None:
            self._directives = extract_directives(self.content, origin=self.path)
        return self._directives

    def edges(self) -> Tuple[Directive, ...]:
        """Directives that are edges of the import graph (imports and exports)."""
        return tuple(d for d in self.directives if d.is_edge)

    def first_part_of(self) -> Optional[Directive]:
        """The first ``part of`` declaration, if any."""
        for directive in self.directives:
            if directive.kind is DirectiveKind.PART_OF:
                return directive
        return None

    def library_name(self) -> Optional[str]:
        """The name given by a ``library`` directive, if any."""
        for directive in self.directives:
            if directive.kind is DirectiveKind.LIBRARY and directive.library_name:
                return directive.library_name
        return None

    def _read(self) -> Optional[str]:
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            logger.warning(f"Could not read '{self.path}', treating it as a leaf: {e}")
            return None


class SourceCatalog:
    """Run-scoped cache of ``SourceFile`` objects keyed by canonical path."""

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._files: Dict[str, SourceFile] = {}
        for path in paths:
            self.get(path)

    def __contains__(self, path: str) -> bool:
        return canonical_path(path) in self._files

    def __len__(self) -> int:
        return len(self._files)

    def get(self, path: str) -> SourceFile:
        """Return the cached ``SourceFile`` for a path, creating it on first use."""
        key = canonical_path(path)
        source = self._files.get(key)
        if source is None:
            source = SourceFile(key)
            self._files[key] = source
        return source

    def library_index(self, paths: Iterable[str]) -> Dict[str, str]:
        """
        Map declared library names to the file declaring them.

        When several files declare the same name, the first in sorted path
        order wins.

        Args:
            paths: Files to index (usually the universe).

        Returns:
            Dict[str, str]: Library name -> canonical path.
        """
        index: Dict[str, str] = {}
        for path in sorted(paths):
            name = self.get(path).library_name()
            if name and name not in index:
                index[name] = self.get(path).path
        return index
