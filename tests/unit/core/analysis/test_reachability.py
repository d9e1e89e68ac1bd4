from __future__ import annotations

"""
Unit tests for Reachability Traversal.

Verifies closure over imports and exports, termination on cycles,
independence from recursion depth and resilience to broken edges.
"""

import logging
import sys
from pathlib import Path
from typing import Dict

import pytest

from dartsweep.core.analysis.catalog import SourceCatalog
from dartsweep.core.analysis.reachability import compute_reachable
from dartsweep.core.analysis.resolver import ImportResolver
from dartsweep.domain.config import RunConfig
from dartsweep.infra.fs import canonical_path


def _setup(root: Path, files: Dict[str, str]):
    lib = root / "lib"
    lib.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = lib / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    config = RunConfig(
        project_root=canonical_path(str(root)),
        source_root=canonical_path(str(lib)),
        project_name="app",
    )
    paths = [canonical_path(str(lib / rel)) for rel in files]
    return SourceCatalog(paths), ImportResolver(config), lib


def _names(paths, lib: Path):
    return {Path(p).relative_to(lib).as_posix() for p in paths}


def test_closure_over_imports_and_exports(tmp_path: Path) -> None:
    """TC-01: Imports and exports are followed transitively."""
    catalog, resolver, lib = _setup(tmp_path, {
        "main.dart": "import 'package:app/a.dart';\n",
        "a.dart": "export 'b.dart';\n",
        "b.dart": "import 'dart:math';\n",
        "orphan.dart": "",
    })

    visited = compute_reachable([str(lib / "main.dart")], catalog, resolver)

    assert _names(visited, lib) == {"main.dart", "a.dart", "b.dart"}


def test_cycles_terminate(tmp_path: Path) -> None:
    """TC-02: A -> B -> A does not loop."""
    catalog, resolver, lib = _setup(tmp_path, {
        "main.dart": "import 'a.dart';\n",
        "a.dart": "import 'b.dart';\n",
        "b.dart": "import 'a.dart';\nimport 'main.dart';\n",
    })

    visited = compute_reachable([str(lib / "main.dart")], catalog, resolver)

    assert _names(visited, lib) == {"main.dart", "a.dart", "b.dart"}


def test_deep_chain_exceeds_recursion_limit(tmp_path: Path) -> None:
    """TC-03: Chains longer than the interpreter recursion limit are fine."""
    depth = sys.getrecursionlimit() + 50
    files = {f"f{i}.dart": f"import 'f{i + 1}.dart';\n" for i in range(depth)}
    files[f"f{depth}.dart"] = ""
    catalog, resolver, lib = _setup(tmp_path, files)

    visited = compute_reachable([str(lib / "f0.dart")], catalog, resolver)

    assert len(visited) == depth + 1


def test_part_directives_are_not_edges(tmp_path: Path) -> None:
    """TC-04: 'part' does not make the part file reachable."""
    catalog, resolver, lib = _setup(tmp_path, {
        "main.dart": "part 'main.g.dart';\n",
        "main.g.dart": "part of 'main.dart';\n",
    })

    visited = compute_reachable([str(lib / "main.dart")], catalog, resolver)

    assert _names(visited, lib) == {"main.dart"}


def test_broken_import_does_not_stop_traversal(
        tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """TC-05: A missing target ends only its own edge."""
    caplog.set_level(logging.WARNING)
    catalog, resolver, lib = _setup(tmp_path, {
        "main.dart": "import 'missing.dart';\nimport 'a.dart';\n",
        "a.dart": "",
    })

    visited = compute_reachable([str(lib / "main.dart")], catalog, resolver)

    assert _names(visited, lib) == {"main.dart", "a.dart"}
    assert "Broken import" in caplog.text


def test_conditional_alternatives_are_reachable(tmp_path: Path) -> None:
    """TC-06: Every conditional import alternative is traversed."""
    catalog, resolver, lib = _setup(tmp_path, {
        "main.dart": "import 'stub.dart' if (dart.library.io) 'io.dart' if (dart.library.html) 'web.dart';\n",
        "stub.dart": "",
        "io.dart": "",
        "web.dart": "",
    })

    visited = compute_reachable([str(lib / "main.dart")], catalog, resolver)

    assert _names(visited, lib) == {"main.dart", "stub.dart", "io.dart", "web.dart"}
