from __future__ import annotations

"""
Fatal Precondition Errors.

Raised before any traversal starts when the run cannot define what
"used" means. Recoverable per-file problems are logged instead.
"""


class AnalysisError(Exception):
    """Base class for conditions that abort an analysis run."""


class SourceRootNotFoundError(AnalysisError):
    """The project's source root is missing or not a directory."""

    def __init__(self, source_root: str) -> None:
        super().__init__(f"Source root does not exist: {source_root}")
        self.source_root = source_root


class ProjectNameError(AnalysisError):
    """The package name could not be read from the project manifest."""

    def __init__(self, manifest_path: str) -> None:
        super().__init__(f"Could not determine package name from {manifest_path}")
        self.manifest_path = manifest_path


class NoEntryPointError(AnalysisError):
    """No entry point file was found or could be synthesized."""

    def __init__(self, source_root: str, entry_file_name: str) -> None:
        super().__init__(f"No entry point '{entry_file_name}' found under {source_root}")
        self.source_root = source_root
        self.entry_file_name = entry_file_name
