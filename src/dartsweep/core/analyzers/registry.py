from __future__ import annotations

"""
Analyzer Registry.

Central catalogue of the analyzers exposed by the command line.
"""

from typing import Iterable, List, Optional

from dartsweep.core.analyzers.base import BaseAnalyzer
from dartsweep.core.services.unused_files import UnusedFileFinder


class AnalyzerRegistry:
    """
    Ordered, read-only collection of analyzer instances.
    """

    def __init__(self, analyzers: Optional[Iterable[BaseAnalyzer]] = None) -> None:
        if analyzers is None:
            analyzers = [UnusedFileFinder()]
        self._analyzers: List[BaseAnalyzer] = list(analyzers)

    def analyzers(self) -> List[BaseAnalyzer]:
        return list(self._analyzers)

    def get(self, index: int) -> Optional[BaseAnalyzer]:
        """Return the analyzer at a position, or None when out of range."""
        if 0 <= index < len(self._analyzers):
            return self._analyzers[index]
        return None

    def get_by_name(self, name: str) -> Optional[BaseAnalyzer]:
        for analyzer in self._analyzers:
            if analyzer.name == name:
                return analyzer
        return None

    def names(self) -> List[str]:
        return [a.name for a in self._analyzers]

    def descriptions(self) -> List[str]:
        return [a.description for a in self._analyzers]

    def can_analyze_results(self, project_path: str) -> List[bool]:
        """Evaluate ``can_analyze`` of every analyzer against one project."""
        return [a.can_analyze(project_path) for a in self._analyzers]
