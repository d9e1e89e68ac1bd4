from __future__ import annotations

"""
Domain Constants.

Conventions of the Dart/pub ecosystem that the analysis engine relies on.
"""

from typing import Tuple

APP_NAME = "dartsweep"

# -----------------------------------------------------------------------------
# PROJECT LAYOUT
# -----------------------------------------------------------------------------
MANIFEST_FILE_NAME = "pubspec.yaml"
DEFAULT_SOURCE_DIR = "lib"
SOURCE_SUFFIX = ".dart"
DEFAULT_ENTRY_FILE_NAME = "main.dart"

# Top-level pubspec key / dependency name marking a Flutter application
FRAMEWORK_MARKER = "flutter"

# -----------------------------------------------------------------------------
# URI SCHEMES
# -----------------------------------------------------------------------------
BUILTIN_SCHEMES: Tuple[str, ...] = ("dart",)
PACKAGE_SCHEME = "package"

# -----------------------------------------------------------------------------
# ANALYZERS
# -----------------------------------------------------------------------------
UNUSED_FILES_ANALYZER = "unused-files"
