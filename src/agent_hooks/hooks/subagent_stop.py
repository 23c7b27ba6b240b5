"""Subagent-stop hook: run the full test suite after any agent finishes.

Blocks on failure so the result surfaces in the main conversation.
"""
from __future__ import annotations

import logging
from typing import Any

from agent_hooks.core.config import HooksConfig
from agent_hooks.core.errors import ToolTimeout, ToolUnavailable
from agent_hooks.core.types import HookResponse
from agent_hooks.hooks.common import pytest_failed, truncate_output
from agent_hooks.tools.discovery import has_test_suite
from agent_hooks.tools.runner import ToolRunner

logger = logging.getLogger(__name__)

ALL_PASSED = "All tests passed."


def run_subagent_stop(
    payload: dict[str, Any],
    runner: ToolRunner,
    config: HooksConfig,
) -> HookResponse:
    """*payload* is accepted for symmetry with the other hooks and unused."""
    if not runner.is_available("pytest"):
        logger.debug("pytest is not installed; skipping")
        return HookResponse.ok()
    if not has_test_suite(runner.cwd):
        logger.debug("No tests/ or test/ directory in %s; skipping", runner.cwd)
        return HookResponse.ok()

    try:
        result = runner.run_sync(
            ["pytest", "--tb=short", "-q"],
            timeout=config.pytest_timeout_s,
        )
    except ToolUnavailable:
        return HookResponse.ok()
    except ToolTimeout as exc:
        return HookResponse.block(
            f"Test suite timed out after agent completed: {exc.message}"
        )

    if pytest_failed(result.exit_code):
        output = truncate_output(result.output, config.max_output_chars)
        return HookResponse.block(f"Test suite failed after agent completed:\n{output}")
    return HookResponse.ok(ALL_PASSED)
