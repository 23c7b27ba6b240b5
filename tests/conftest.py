"""Shared fixtures for the agent-hooks test suite."""
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from agent_hooks.core.config import HooksConfig
from agent_hooks.core.errors import ToolTimeout, ToolUnavailable
from agent_hooks.core.types import ToolResult
from agent_hooks.guard import CommandGuard, PatternEngine
from agent_hooks.tools.runner import ToolRunner


class FakeRunner(ToolRunner):
    """A ToolRunner that never spawns processes.

    ``results`` maps a tool name to the :class:`ToolResult` (or exception)
    returned for it; tools not in ``installed`` raise ToolUnavailable.
    """

    def __init__(
        self,
        cwd: Path,
        *,
        installed: Sequence[str] = ("pytest", "ruff", "pyright"),
        results: dict[str, ToolResult | Exception] | None = None,
    ) -> None:
        super().__init__(cwd=cwd)
        self.installed = set(installed)
        self.results = results or {}
        self.calls: list[list[str]] = []

    def which(self, tool: str) -> str:
        if tool not in self.installed:
            raise ToolUnavailable(f"{tool} is not installed", details={"tool": tool})
        return f"/usr/bin/{tool}"

    async def run(self, argv: Sequence[str], *, timeout: float = 300.0) -> ToolResult:
        tool = argv[0]
        self.which(tool)
        self.calls.append(list(argv))
        outcome = self.results.get(tool, ToolResult(tool=tool, argv=list(argv), exit_code=0))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def tool_result(tool: str, exit_code: int = 0, stdout: str = "", stderr: str = "") -> ToolResult:
    return ToolResult(tool=tool, argv=[tool], exit_code=exit_code, stdout=stdout, stderr=stderr)


def tool_timeout(tool: str) -> ToolTimeout:
    return ToolTimeout(f"{tool} exceeded timeout of 1s", details={"tool": tool})


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def guard() -> CommandGuard:
    """A CommandGuard with the standard rules."""
    return CommandGuard()


@pytest.fixture()
def pattern_engine() -> PatternEngine:
    return PatternEngine()


@pytest.fixture()
def config() -> HooksConfig:
    return HooksConfig()


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """A project directory with a source module and its test module."""
    (tmp_path / "src" / "pkg").mkdir(parents=True)
    (tmp_path / "src" / "pkg" / "mod.py").write_text("X = 1\n")
    (tmp_path / "tests").mkdir()
    (tmp_path / "tests" / "test_mod.py").write_text("def test_x():\n    assert True\n")
    return tmp_path


@pytest.fixture()
def make_runner(project: Path):
    """Factory for :class:`FakeRunner` instances rooted at ``project``."""

    def _make(**kwargs) -> FakeRunner:
        kwargs.setdefault("cwd", project)
        cwd = kwargs.pop("cwd")
        return FakeRunner(cwd, **kwargs)

    return _make


@pytest.fixture()
def result_for():
    """Factory for canned :class:`ToolResult` values."""
    return tool_result


@pytest.fixture()
def timeout_for():
    """Factory for :class:`ToolTimeout` errors."""
    return tool_timeout
