from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, analyzer selection,
execution, report rendering and the optional confirmed cleanup. Fatal
analysis preconditions are mapped to process exit codes here.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from dartsweep.core.analyzers.registry import AnalyzerRegistry
from dartsweep.core.services.cleanup import delete_files
from dartsweep.core.services.unused_files import UnusedFileFinder
from dartsweep.domain.errors import AnalysisError, SourceRootNotFoundError
from dartsweep.domain.models import DeletionReport, UnusedFilesReport
from dartsweep.infra.fs import normalize_path
from dartsweep.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from dartsweep.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file), force=True)

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: Any) -> int:
    registry = AnalyzerRegistry([UnusedFileFinder(**cli_args.args_to_options(args))])

    if args.list_analyzers:
        for name, description in zip(registry.names(), registry.descriptions()):
            print(f"{name}: {description}")
        return EXIT_OK

    project_path = normalize_path(args.input_path, os.getcwd())
    if not os.path.isdir(project_path):
        msg = f"Project path does not exist: {project_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_BAD_INPUT

    analyzer = registry.get_by_name(args.analyzer)
    if analyzer is None:
        msg = f"Unknown analyzer '{args.analyzer}'. Available: {', '.join(registry.names())}"
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.dump_config:
        if isinstance(analyzer, UnusedFileFinder):
            config = analyzer.build_config(project_path)
            print(json.dumps(config.to_dict(), ensure_ascii=False, indent=2))
        return EXIT_OK

    logger.debug(f"Running analyzer '{analyzer.name}' on {project_path}")
    try:
        report = analyzer.analyze(project_path)
    except SourceRootNotFoundError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except AnalysisError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Analysis failed: {e}", exc_info=True)
        print(f"ERROR: Analysis failed: {e}", file=sys.stderr)
        return EXIT_FAILURE

    deletion: Optional[DeletionReport] = None
    if args.delete and report.unused_files:
        if not args.json_output:
            _print_human_summary(report)
        if args.assume_yes or _confirm(f"Delete {len(report.unused_files)} unused file(s)?"):
            deletion = delete_files(report.unused_files, report.project_root)
        elif not args.json_output:
            print("No files were deleted.")
    elif not args.json_output:
        _print_human_summary(report)

    if args.json_output:
        payload: Dict[str, Any] = asdict(report)
        payload["deletion"] = asdict(deletion) if deletion else None
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    elif deletion is not None:
        _print_deletion_summary(deletion)

    if deletion is not None and not deletion.ok:
        return EXIT_FAILURE
    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIRMATION PROMPT
# -----------------------------------------------------------------------------

def _confirm(prompt: str) -> bool:
    """Ask a yes/no question on stderr; anything but yes (or EOF) means no."""
    print(f"{prompt} [y/N] ", end="", file=sys.stderr, flush=True)
    try:
        answer = input()
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(report: UnusedFilesReport) -> None:
    print(f"Package: {report.project_name}")
    print(f"Entry points: {', '.join(report.entry_points)}")
    print(
        f"Files: {report.universe_size} scanned, "
        f"{report.reachable_count} reachable, {len(report.unused_files)} unused"
    )

    if report.is_clean:
        print("No unused files found.")
        return

    print("Unused files:")
    for rel_path in report.relative_unused:
        print(f"  {rel_path}")


def _print_deletion_summary(deletion: DeletionReport) -> None:
    for rel_path in deletion.deleted:
        print(f"Deleted: {rel_path}")
    for rel_path, error in deletion.failed:
        print(f"Failed to delete: {rel_path} ({error})", file=sys.stderr)
    print(f"Unused files deleted: {deletion.deleted_count}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
