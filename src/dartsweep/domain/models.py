from __future__ import annotations

"""
Analysis Domain Data Models.

Defines the directive vocabulary extracted from Dart sources and the
immutable result objects handed from the engine to the presentation and
cleanup layers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

# -----------------------------------------------------------------------------
# DIRECTIVES
# -----------------------------------------------------------------------------

class DirectiveKind(Enum):
    """Kinds of top-level Dart directives the engine understands."""
    LIBRARY = "library"
    IMPORT = "import"
    EXPORT = "export"
    PART = "part"
    PART_OF = "part of"


@dataclass(frozen=True)
class Directive:
    """
    A single directive recovered from a source file.

    Attributes:
        kind: Directive keyword.
        uri: String URI of the directive, if it has one.
        library_name: Dotted library name for ``library x.y;`` and the
            name-based ``part of x.y;`` form.
    """
    kind: DirectiveKind
    uri: Optional[str] = None
    library_name: Optional[str] = None

    @property
    def is_edge(self) -> bool:
        """Whether this directive contributes an edge to the import graph."""
        return self.kind in (DirectiveKind.IMPORT, DirectiveKind.EXPORT) and self.uri is not None


# -----------------------------------------------------------------------------
# MANIFEST
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectManifest:
    """
    Fields read from ``pubspec.yaml``.

    Attributes:
        path: Location of the manifest file (may not exist).
        name: Declared package name, None when undeterminable.
        uses_framework: True when the manifest declares Flutter.
    """
    path: str
    name: Optional[str] = None
    uses_framework: bool = False


# -----------------------------------------------------------------------------
# RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class UnusedFilesReport:
    """
    Outcome of a completed unused-file analysis.

    Attributes:
        project_root: Canonical project directory.
        source_root: Canonical source directory that was inventoried.
        project_name: Package name used for ``package:`` resolution.
        entry_points: Sorted project-relative entry points.
        universe_size: Number of source files discovered.
        reachable_count: Number of source files reachable from the entry points.
        candidate_count: Size of the unused set before partition correction.
        unused_files: Sorted canonical paths of the final unused set.
        relative_unused: ``unused_files`` rendered relative to the project.
    """
    project_root: str
    source_root: str
    project_name: str
    entry_points: List[str] = field(default_factory=list)
    universe_size: int = 0
    reachable_count: int = 0
    candidate_count: int = 0
    unused_files: List[str] = field(default_factory=list)
    relative_unused: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.unused_files


@dataclass(frozen=True)
class DeletionReport:
    """
    Per-file outcome of the cleanup step.

    Attributes:
        deleted: Project-relative paths removed from disk.
        failed: (project-relative path, error message) pairs.
    """
    deleted: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    @property
    def ok(self) -> bool:
        return not self.failed
