"""Post-write hook: lint and type-check a Python file after it is written.

Runs ruff and pyright on the written file, reads their JSON reports and
blocks with a per-tool error count when either reports errors.  A tool
that is missing, disabled, times out or produces an unreadable report is
skipped; this hook never blocks because of its own tooling.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from agent_hooks.core.config import HooksConfig
from agent_hooks.core.errors import ToolError, ToolUnavailable
from agent_hooks.core.types import HookResponse, LintReport
from agent_hooks.hooks.common import truncate_output, written_python_file
from agent_hooks.tools.lint import (
    PYRIGHT_ARGS,
    RUFF_ARGS,
    parse_pyright_report,
    parse_ruff_report,
)
from agent_hooks.tools.runner import ToolRunner

logger = logging.getLogger(__name__)

_Linter = tuple[tuple[str, ...], Callable[[str], LintReport]]


def _enabled_linters(config: HooksConfig) -> list[_Linter]:
    linters: list[_Linter] = []
    if config.enable_ruff:
        linters.append((RUFF_ARGS, parse_ruff_report))
    if config.enable_pyright:
        linters.append((PYRIGHT_ARGS, parse_pyright_report))
    return linters


def lint_file(path: Path, runner: ToolRunner, config: HooksConfig) -> list[LintReport]:
    """Run every enabled linter on *path* and return the usable reports."""
    reports: list[LintReport] = []
    for args, parse in _enabled_linters(config):
        tool = args[0]
        try:
            result = runner.run_sync([*args, str(path)], timeout=config.lint_timeout_s)
            reports.append(parse(result.stdout))
        except ToolUnavailable:
            logger.debug("%s is not installed; skipping", tool)
        except ToolError as exc:
            logger.warning("Skipping %s: %s", tool, exc.message)
    return reports


def format_lint_failure(path: Path, reports: list[LintReport]) -> str:
    failing = [report for report in reports if report.has_errors]
    counts = ", ".join(f"{r.tool}: {r.error_count} error(s)" for r in failing)
    lines = [f"Lint errors in {path} ({counts}):"]
    for report in failing:
        lines.extend(report.diagnostics)
    return "\n".join(lines)


def run_post_write_lint(
    payload: dict[str, Any],
    runner: ToolRunner,
    config: HooksConfig,
) -> HookResponse:
    written = written_python_file(payload, runner.cwd)
    if written is None:
        return HookResponse.ok()

    reports = lint_file(written, runner, config)
    if not any(report.has_errors for report in reports):
        return HookResponse.ok()
    message = format_lint_failure(written, reports)
    return HookResponse.block(truncate_output(message, config.max_output_chars))
