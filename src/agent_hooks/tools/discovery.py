"""Locate the tests that belong to a source file."""
from __future__ import annotations

import re
from pathlib import Path

TEST_DIRS = ("tests", "test")

_TEST_MODULE_RE = re.compile(r"^test_|_test$")


def is_test_module(path: Path) -> bool:
    """``test_*.py`` and ``*_test.py`` are test modules."""
    return path.suffix == ".py" and _TEST_MODULE_RE.search(path.stem) is not None


def candidate_test_paths(path: Path, root: Path) -> list[Path]:
    """Return the locations probed for *path*'s test module, in priority order.

    Candidates are relative to *root*.  The last one mirrors the source
    path under ``tests/`` with its first directory dropped, so
    ``src/pkg/mod.py`` maps to ``tests/pkg/test_mod.py``.
    """
    name = path.stem
    candidates = [
        Path("tests") / f"test_{name}.py",
        Path("tests") / name / f"test_{name}.py",
        Path("test") / f"test_{name}.py",
        Path(f"test_{name}.py"),
    ]

    try:
        relative = path.resolve().relative_to(root.resolve())
    except ValueError:
        relative = None
    if relative is not None and len(relative.parts) > 2:
        mirrored = Path("tests").joinpath(*relative.parts[1:-1]) / f"test_{name}.py"
        if mirrored not in candidates:
            candidates.append(mirrored)
    return candidates


def find_test_file(path: Path, root: Path) -> Path | None:
    """Return the test module to run after *path* was written, if any.

    A test module maps to itself.  Otherwise the first existing entry of
    :func:`candidate_test_paths` wins.
    """
    if not path.is_absolute():
        path = root / path
    if is_test_module(path):
        return path
    for candidate in candidate_test_paths(path, root):
        if (root / candidate).is_file():
            return candidate
    return None


def has_test_suite(root: Path) -> bool:
    """Return ``True`` if *root* has a ``tests/`` or ``test/`` directory."""
    return any((root / name).is_dir() for name in TEST_DIRS)
