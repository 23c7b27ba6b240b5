"""Post-write hook: run the related tests after a Python file is written.

Blocks on test failure so the agent sees the output and self-corrects.
Skips silently when there is no related test module or pytest is not
installed.
"""
from __future__ import annotations

import logging
from typing import Any

from agent_hooks.core.config import HooksConfig
from agent_hooks.core.errors import ToolTimeout, ToolUnavailable
from agent_hooks.core.types import HookResponse
from agent_hooks.hooks.common import pytest_failed, truncate_output, written_python_file
from agent_hooks.tools.discovery import find_test_file
from agent_hooks.tools.runner import ToolRunner

logger = logging.getLogger(__name__)


def run_post_write(
    payload: dict[str, Any],
    runner: ToolRunner,
    config: HooksConfig,
) -> HookResponse:
    root = runner.cwd
    written = written_python_file(payload, root)
    if written is None:
        return HookResponse.ok()

    test_file = find_test_file(written, root)
    if test_file is None:
        logger.debug("No test module found for %s", written)
        return HookResponse.ok()

    try:
        result = runner.run_sync(
            ["pytest", str(test_file), "--tb=short", "-q"],
            timeout=config.pytest_timeout_s,
        )
    except ToolUnavailable:
        logger.debug("pytest is not installed; skipping")
        return HookResponse.ok()
    except ToolTimeout as exc:
        return HookResponse.block(
            f"pytest timed out for {test_file} after writing {written}: {exc.message}"
        )

    if pytest_failed(result.exit_code):
        output = truncate_output(result.output, config.max_output_chars)
        return HookResponse.block(
            f"pytest failed for {test_file} after writing {written}:\n{output}"
        )
    return HookResponse.ok()
