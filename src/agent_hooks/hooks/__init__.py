"""Lifecycle hooks invoked by the assistant runtime.

Each hook takes the decoded stdin payload and returns a
:class:`~agent_hooks.core.types.HookResponse`:

* **run_pre_command** -- command guard before a shell command runs.
* **run_post_write** -- related pytest module after a Python file is written.
* **run_post_write_lint** -- ruff and pyright after a Python file is written.
* **run_subagent_stop** -- full test suite after a sub-agent finishes.
"""
from __future__ import annotations

from agent_hooks.hooks.payload import (
    extract_command,
    extract_file_path,
    parse_payload,
    read_payload,
)
from agent_hooks.hooks.post_write import run_post_write
from agent_hooks.hooks.post_write_lint import run_post_write_lint
from agent_hooks.hooks.pre_command import run_pre_command
from agent_hooks.hooks.subagent_stop import run_subagent_stop

__all__ = [
    "extract_command",
    "extract_file_path",
    "parse_payload",
    "read_payload",
    "run_post_write",
    "run_post_write_lint",
    "run_pre_command",
    "run_subagent_stop",
]
