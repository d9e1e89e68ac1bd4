from __future__ import annotations

"""
Import URI Resolution.

Maps a raw directive URI to the canonical path of a file inside the
analysed project, or to None when the target is external, built in or
missing. An unresolved URI simply ends expansion along that edge.
"""

import logging
import os
import re
from typing import Optional

from dartsweep.domain.config import RunConfig
from dartsweep.infra.fs import is_existing_file, join_uri_path

logger = logging.getLogger(__name__)

_SCHEME_RX = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
_PACKAGE_PATH_RX = re.compile(r"^([^/]+)/(.+)$")


class ImportResolver:
    """
    Resolve directive URIs of one project.

    Policy, in order:

    1. Built-in schemes (``dart:``) never resolve.
    2. ``package:<name>/<path>`` resolves to ``<source root>/<path>`` only
       when ``<name>`` is this project's own package name.
    3. Other schemes never resolve.
    4. Scheme-less URIs resolve relative to the importing file's directory.

    Resolved targets must exist as regular files.
    """

    def __init__(self, config: RunConfig) -> None:
        self.config = config

    def resolve(self, raw_uri: str, source_path: str) -> Optional[str]:
        """
        Resolve a directive URI found in ``source_path``.

        Args:
            raw_uri: URI string exactly as written in the directive.
            source_path: Canonical path of the importing file.

        Returns:
            Optional[str]: Canonical path of the target, or None if unresolved.
        """
        uri = raw_uri.strip()
        if not uri:
            logger.warning(f"Empty directive URI in {source_path}")
            return None

        scheme_match = _SCHEME_RX.match(uri)
        if scheme_match is None:
            return self._resolve_relative(uri, source_path)

        scheme = scheme_match.group(1)
        rest = uri[scheme_match.end():]

        if scheme in self.config.builtin_schemes:
            logger.debug(f"Built-in library {uri} is not traversed")
            return None

        if scheme == self.config.package_scheme:
            return self._resolve_package(uri, rest, source_path)

        logger.debug(f"Unsupported URI scheme in {source_path}: {uri}")
        return None

    def _resolve_package(self, uri: str, rest: str, source_path: str) -> Optional[str]:
        match = _PACKAGE_PATH_RX.match(rest)
        if match is None:
            logger.debug(f"Malformed package URI in {source_path}: {uri}")
            return None

        package_name, relative_path = match.group(1), match.group(2)
        if package_name != self.config.project_name:
            logger.debug(f"External package {package_name} referenced from {source_path}")
            return None

        target = join_uri_path(self.config.source_root, relative_path)
        if not is_existing_file(target):
            logger.warning(f"Broken import in {source_path}: {uri} (missing {target})")
            return None
        return target

    def _resolve_relative(self, uri: str, source_path: str) -> Optional[str]:
        target = join_uri_path(os.path.dirname(source_path), uri)
        if not is_existing_file(target):
            logger.warning(f"Broken import in {source_path}: {uri} (missing {target})")
            return None
        return target