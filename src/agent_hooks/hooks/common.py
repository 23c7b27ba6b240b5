"""Helpers shared by the post-write and subagent-stop hooks."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from agent_hooks.hooks.payload import extract_file_path

# pytest: "no tests were collected"
PYTEST_NO_TESTS_COLLECTED = 5


def truncate_output(text: str, limit: int) -> str:
    """Keep the last *limit* characters of *text*, where summaries live."""
    if len(text) <= limit:
        return text
    dropped = len(text) - limit
    return f"[... {dropped} characters truncated ...]\n{text[-limit:]}"


def written_python_file(payload: dict[str, Any], root: Path) -> Path | None:
    """Return the written file if it is an existing ``.py`` file, else ``None``."""
    path = extract_file_path(payload)
    if path is None or path.suffix != ".py":
        return None
    resolved = path if path.is_absolute() else root / path
    if not resolved.is_file():
        return None
    return path


def pytest_failed(exit_code: int) -> bool:
    return exit_code not in (0, PYTEST_NO_TESTS_COLLECTED)
