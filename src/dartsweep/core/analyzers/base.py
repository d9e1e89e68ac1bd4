from __future__ import annotations

"""
Base Definitions for Project Analyzers.

Every analysis offered by the command line implements this interface so
the CLI can list, select and run analyzers uniformly.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseAnalyzer(ABC):
    """
    Abstract base class for project analyzers.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable identifier used on the command line."""

    @property
    @abstractmethod
    def description(self) -> str:
        """One-line human readable summary."""

    @abstractmethod
    def can_analyze(self, project_path: str) -> bool:
        """
        Check whether the project has the layout this analyzer needs.

        Args:
            project_path: Path to the project root.

        Returns:
            bool: True if ``analyze`` can run on the project.
        """

    @abstractmethod
    def analyze(self, project_path: str) -> Any:
        """
        Run the analysis and return its report object.

        Args:
            project_path: Path to the project root.
        """
