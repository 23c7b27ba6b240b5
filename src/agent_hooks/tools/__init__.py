"""External developer tools used by the sibling hooks.

* **ToolRunner** -- runs pytest/ruff/pyright with a timeout and reports
  missing tools as :class:`~agent_hooks.core.errors.ToolUnavailable`.
* **find_test_file** / **has_test_suite** -- test discovery.
* **parse_ruff_report** / **parse_pyright_report** -- linter JSON parsing.
"""
from __future__ import annotations

from agent_hooks.tools.discovery import (
    candidate_test_paths,
    find_test_file,
    has_test_suite,
    is_test_module,
)
from agent_hooks.tools.lint import (
    PYRIGHT_ARGS,
    RUFF_ARGS,
    parse_pyright_report,
    parse_ruff_report,
)
from agent_hooks.tools.runner import ToolRunner

__all__ = [
    "PYRIGHT_ARGS",
    "RUFF_ARGS",
    "ToolRunner",
    "candidate_test_paths",
    "find_test_file",
    "has_test_suite",
    "is_test_module",
    "parse_pyright_report",
    "parse_ruff_report",
]
