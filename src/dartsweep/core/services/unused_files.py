from __future__ import annotations

"""
Unused File Analysis Service.

Orchestrates the reachability engine for one project:

1. Validates the fatal preconditions (source root, package name).
2. Builds the universe of Dart sources under the source root.
3. Selects entry points (fatal when none exist).
4. Computes the import closure from the entry points.
5. Corrects the unused candidates for ``part of`` files.
6. Packages the final unused set into an immutable report.

Nothing is printed or deleted here; presentation and cleanup consume the
returned report.
"""

import logging
import os
from typing import Optional

from dartsweep.core.analysis.catalog import SourceCatalog
from dartsweep.core.analysis.entry_points import select_entry_points
from dartsweep.core.analysis.inventory import collect_source_files
from dartsweep.core.analysis.partitions import apply_partition_correction
from dartsweep.core.analysis.reachability import compute_reachable
from dartsweep.core.analysis.resolver import ImportResolver
from dartsweep.core.analyzers.base import BaseAnalyzer
from dartsweep.core.services.manifest import load_manifest
from dartsweep.domain import constants as const
from dartsweep.domain.config import RunConfig, build_run_config
from dartsweep.domain.errors import NoEntryPointError, ProjectNameError, SourceRootNotFoundError
from dartsweep.domain.models import UnusedFilesReport
from dartsweep.infra.fs import canonical_path, format_relative_paths

logger = logging.getLogger(__name__)


class UnusedFileFinder(BaseAnalyzer):
    """
    Find Dart files under ``lib/`` that no entry point can reach.
    """

    def __init__(
            self,
            *,
            source_dir: str = const.DEFAULT_SOURCE_DIR,
            entry_file_name: str = const.DEFAULT_ENTRY_FILE_NAME,
    ) -> None:
        self.source_dir = source_dir
        self.entry_file_name = entry_file_name

    @property
    def name(self) -> str:
        return const.UNUSED_FILES_ANALYZER

    @property
    def description(self) -> str:
        return "Find and optionally delete unused Dart files in your project"

    def can_analyze(self, project_path: str) -> bool:
        return os.path.isdir(os.path.join(project_path, self.source_dir))

    def build_config(self, project_path: str) -> RunConfig:
        """Read the manifest and create the run configuration with this finder's settings."""
        manifest = load_manifest(canonical_path(project_path))
        return build_run_config(
            project_path,
            manifest,
            source_dir=self.source_dir,
            entry_file_name=self.entry_file_name,
        )

    def analyze(self, project_path: str) -> UnusedFilesReport:
        return self.find(self.build_config(project_path))

    def find(self, config: RunConfig) -> UnusedFilesReport:
        """
        Run the complete analysis described by a run configuration.

        Args:
            config: Immutable run configuration.

        Returns:
            UnusedFilesReport: The final unused set and run statistics.

        Raises:
            SourceRootNotFoundError: The source root does not exist.
            ProjectNameError: The manifest does not yield a package name.
            NoEntryPointError: No entry point could be determined.
        """
        if not os.path.isdir(config.source_root):
            raise SourceRootNotFoundError(config.source_root)
        if not config.project_name:
            raise ProjectNameError(config.manifest_path)

        universe = collect_source_files(config.source_root, config.source_suffix)

        entry_points = select_entry_points(universe, config)
        if not entry_points:
            raise NoEntryPointError(config.source_root, config.entry_file_name)

        logger.info(
            f"Analyzing {len(universe)} file(s) of package '{config.project_name}' "
            f"from {len(entry_points)} entry point(s)"
        )

        catalog = SourceCatalog(universe)
        resolver = ImportResolver(config)

        visited = compute_reachable(entry_points, catalog, resolver)
        reachable = visited & universe
        candidates = universe - reachable

        final_unused = apply_partition_correction(
            candidates,
            catalog,
            resolver,
            catalog.library_index(universe),
        )

        logger.info(
            f"{len(reachable)} reachable, {len(candidates)} candidate(s), "
            f"{len(final_unused)} unused after part-file correction"
        )

        unused_sorted = sorted(final_unused)
        return UnusedFilesReport(
            project_root=config.project_root,
            source_root=config.source_root,
            project_name=config.project_name,
            entry_points=format_relative_paths(entry_points, config.project_root),
            universe_size=len(universe),
            reachable_count=len(reachable),
            candidate_count=len(candidates),
            unused_files=unused_sorted,
            relative_unused=format_relative_paths(unused_sorted, config.project_root),
        )


def find_unused_files(
        project_path: str,
        *,
        source_dir: Optional[str] = None,
        entry_file_name: Optional[str] = None,
) -> UnusedFilesReport:
    """
    Convenience facade: analyze a project with default or given settings.

    Args:
        project_path: Path to the project root.
        source_dir: Source directory relative to the project root.
        entry_file_name: Base name identifying entry points.

    Returns:
        UnusedFilesReport: Analysis result.
    """
    finder = UnusedFileFinder(
        source_dir=source_dir or const.DEFAULT_SOURCE_DIR,
        entry_file_name=entry_file_name or const.DEFAULT_ENTRY_FILE_NAME,
    )
    return finder.analyze(project_path)
