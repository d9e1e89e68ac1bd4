from __future__ import annotations

"""
Run Configuration.

A single immutable object describing one analysis run. It is built once
from the command-line options and the already parsed project manifest,
then passed to every component instead of relying on the working directory or module
level defaults.
"""

import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from dartsweep.domain import constants as const
from dartsweep.domain.models import ProjectManifest
from dartsweep.infra.fs import canonical_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfig:
    """
    Immutable description of an analysis run.

    Attributes:
        project_root: Canonical project directory (holds the manifest).
        source_root: Canonical directory whose sources form the universe.
        project_name: Package name from the manifest, None if undeterminable.
        uses_framework: True when the manifest declares Flutter.
        manifest_path: Location of ``pubspec.yaml``.
        source_suffix: Suffix identifying source files.
        entry_file_name: Base name of program entry points.
        builtin_schemes: URI schemes of platform libraries (never traversed).
        package_scheme: URI scheme of package imports.
    """
    project_root: str
    source_root: str
    project_name: Optional[str] = None
    uses_framework: bool = False
    manifest_path: str = ""
    source_suffix: str = const.SOURCE_SUFFIX
    entry_file_name: str = const.DEFAULT_ENTRY_FILE_NAME
    builtin_schemes: Tuple[str, ...] = const.BUILTIN_SCHEMES
    package_scheme: str = const.PACKAGE_SCHEME

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the configuration for diagnostics (``--dump-config``)."""
        data = asdict(self)
        data["builtin_schemes"] = list(self.builtin_schemes)
        return data


def build_run_config(
        project_path: str,
        manifest: Optional[ProjectManifest] = None,
        *,
        source_dir: str = const.DEFAULT_SOURCE_DIR,
        entry_file_name: str = const.DEFAULT_ENTRY_FILE_NAME,
) -> RunConfig:
    """
    Assemble the run configuration for a project directory.

    A missing manifest, or one without a name, only leaves the affected
    fields empty. Precondition checks happen later, in the analyzer.

    Args:
        project_path: Path to the project root.
        manifest: Parsed ``pubspec.yaml`` of the project, if any.
        source_dir: Source directory relative to the project root.
        entry_file_name: Base name identifying entry points.

    Returns:
        RunConfig: The frozen configuration.
    """
    project_root = canonical_path(project_path)
    source_root = canonical_path(os.path.join(project_root, source_dir or const.DEFAULT_SOURCE_DIR))
    if manifest is None:
        manifest = ProjectManifest(path=os.path.join(project_root, const.MANIFEST_FILE_NAME))

    logger.debug(
        f"Run configuration: root={project_root} source={source_root} "
        f"package={manifest.name} flutter={manifest.uses_framework}"
    )

    return RunConfig(
        project_root=project_root,
        source_root=source_root,
        project_name=manifest.name,
        uses_framework=manifest.uses_framework,
        manifest_path=manifest.path,
        entry_file_name=(entry_file_name or const.DEFAULT_ENTRY_FILE_NAME).strip(),
    )
