"""Parse linter JSON reports into :class:`LintReport` summaries.

Only the error count and a one-line rendering of each error are kept;
what the diagnostics mean is the linter's business.
"""
from __future__ import annotations

import json
from typing import Any

from agent_hooks.core.errors import ToolOutputError
from agent_hooks.core.types import LintReport

RUFF_ARGS = ("ruff", "check", "--output-format", "json", "--no-fix")
PYRIGHT_ARGS = ("pyright", "--outputjson")


def _load_json(tool: str, stdout: str) -> Any:
    try:
        return json.loads(stdout)
    except json.JSONDecodeError as exc:
        raise ToolOutputError(
            f"{tool} did not produce a JSON report: {exc}",
            details={"tool": tool, "output": stdout[:500]},
        ) from exc


def parse_ruff_report(stdout: str) -> LintReport:
    """Parse ``ruff check --output-format json`` output.

    Every reported violation counts as an error.
    """
    if not stdout.strip():
        return LintReport(tool="ruff")
    data = _load_json("ruff", stdout)
    if not isinstance(data, list):
        raise ToolOutputError(
            "ruff report is not a JSON array",
            details={"tool": "ruff"},
        )

    diagnostics: list[str] = []
    for item in data:
        if not isinstance(item, dict):
            raise ToolOutputError(
                "ruff report entry is not a JSON object",
                details={"tool": "ruff"},
            )
        location = item.get("location") or {}
        diagnostics.append(
            f"{item.get('filename', '?')}:{location.get('row', '?')}:"
            f"{location.get('column', '?')}: {item.get('code') or 'ruff'} "
            f"{item.get('message', '').strip()}"
        )
    return LintReport(tool="ruff", error_count=len(diagnostics), diagnostics=diagnostics)


def parse_pyright_report(stdout: str) -> LintReport:
    """Parse ``pyright --outputjson`` output.

    The error count comes from ``summary.errorCount``; warnings and
    informational diagnostics are ignored.
    """
    data = _load_json("pyright", stdout)
    if not isinstance(data, dict) or not isinstance(data.get("summary"), dict):
        raise ToolOutputError(
            "pyright report has no summary",
            details={"tool": "pyright"},
        )

    diagnostics: list[str] = []
    for item in data.get("generalDiagnostics", []):
        if not isinstance(item, dict):
            raise ToolOutputError(
                "pyright diagnostic is not a JSON object",
                details={"tool": "pyright"},
            )
        if item.get("severity") != "error":
            continue
        start = (item.get("range") or {}).get("start") or {}
        # pyright positions are zero-based
        line = start.get("line", -1) + 1
        column = start.get("character", -1) + 1
        rule = f" ({item['rule']})" if item.get("rule") else ""
        diagnostics.append(
            f"{item.get('file', '?')}:{line}:{column}: "
            f"{item.get('message', '').strip()}{rule}"
        )

    error_count = int(data["summary"].get("errorCount", len(diagnostics)))
    return LintReport(tool="pyright", error_count=error_count, diagnostics=diagnostics)
