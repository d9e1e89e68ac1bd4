from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
keyword options for the selected analyzer.
"""

import argparse
from typing import Any, Dict

from dartsweep.domain import constants as const

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the dartsweep CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=const.APP_NAME,
        description="Find Dart files that are never reachable from an entry point.",
    )

    # --- Project Location ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Path to the Dart/Flutter project (default: current directory).",
    )
    p.add_argument(
        "--source-dir",
        dest="source_dir",
        default=None,
        help=f"Source directory relative to the project (default: {const.DEFAULT_SOURCE_DIR}).",
    )
    p.add_argument(
        "--entry",
        dest="entry_file_name",
        default=None,
        help=f"File name of program entry points (default: {const.DEFAULT_ENTRY_FILE_NAME}).",
    )

    # --- Analyzer Selection ---
    p.add_argument(
        "--analyzer",
        default=const.UNUSED_FILES_ANALYZER,
        help="Analyzer to run (see --list-analyzers).",
    )
    p.add_argument(
        "--list-analyzers",
        action="store_true",
        help="List available analyzers and exit.",
    )

    # --- Cleanup ---
    p.add_argument(
        "--delete",
        action="store_true",
        help="Offer to delete the unused files after the report.",
    )
    p.add_argument(
        "-y", "--yes",
        dest="assume_yes",
        action="store_true",
        help="Do not ask for confirmation before deleting.",
    )

    # --- Output and Diagnostics ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the report as JSON.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved run configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file (rotated).",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_options(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into analyzer keyword options.

    Only values explicitly given on the command line are included, so the
    analyzer keeps its own defaults for the rest.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Keyword options for the analyzer constructor.
    """
    options: Dict[str, Any] = {}
    if args.source_dir:
        options["source_dir"] = args.source_dir.strip()
    if args.entry_file_name:
        options["entry_file_name"] = args.entry_file_name.strip()
    return options
