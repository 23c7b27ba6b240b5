"""External tool execution.

:class:`ToolRunner` runs pytest, ruff and pyright as child processes for
the post-write and subagent-stop hooks.

Key guarantees:
1. A tool that is not on ``PATH`` raises :class:`ToolUnavailable` before
   anything is spawned, so hooks can degrade to a no-op.
2. Commands are executed from an argument list; no shell is involved.
3. Timeouts are enforced; processes exceeding the timeout are
   terminated, then killed after a grace period.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import shutil
from collections.abc import Mapping, Sequence
from pathlib import Path

from agent_hooks.core.errors import ToolTimeout, ToolUnavailable
from agent_hooks.core.types import ToolResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 300.0

# Grace period before SIGKILL after SIGTERM.
GRACEFUL_SHUTDOWN_S = 5


class ToolRunner:
    """Run external developer tools from a project directory.

    Usage::

        runner = ToolRunner(cwd=Path.cwd())
        result = runner.run_sync(["pytest", "-q"], timeout=120)
        # result.exit_code, result.stdout, result.stderr

    Parameters
    ----------
    cwd:
        Working directory for every child process.  Defaults to the
        current directory at call time.
    env:
        Environment for the child processes.  Defaults to the parent's.
    """

    def __init__(
        self,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._cwd = cwd
        self._env = dict(env) if env is not None else None

    @property
    def cwd(self) -> Path:
        return self._cwd if self._cwd is not None else Path.cwd()

    def which(self, tool: str) -> str:
        """Return the absolute path of *tool*.

        Raises
        ------
        ToolUnavailable
            If *tool* is not on ``PATH``.
        """
        path_var = (self._env or os.environ).get("PATH")
        found = shutil.which(tool, path=path_var)
        if found is None:
            raise ToolUnavailable(
                f"{tool} is not installed",
                details={"tool": tool},
            )
        return found

    def is_available(self, tool: str) -> bool:
        try:
            self.which(tool)
        except ToolUnavailable:
            return False
        return True

    async def run(
        self,
        argv: Sequence[str],
        *,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> ToolResult:
        """Run *argv* and capture its output.

        Parameters
        ----------
        argv:
            Tool name followed by its arguments.  The tool name is
            resolved on ``PATH``.
        timeout:
            Maximum execution time in seconds.

        Returns
        -------
        ToolResult
            Contains ``exit_code``, ``stdout`` and ``stderr``.

        Raises
        ------
        ToolUnavailable
            If the tool is not installed or fails to spawn.
        ToolTimeout
            If the process exceeds *timeout*.
        """
        if not argv:
            raise ValueError("argv must name a tool")
        tool = argv[0]
        executable = self.which(tool)

        logger.debug("Running %s in %s", " ".join(argv), self.cwd)
        try:
            proc = await asyncio.create_subprocess_exec(
                executable,
                *argv[1:],
                cwd=str(self.cwd),
                env=self._env,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ToolUnavailable(
                f"Failed to start {tool}: {exc}",
                details={"tool": tool, "original_error": str(exc)},
            ) from exc

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                proc.communicate(),
                timeout=timeout,
            )
        except TimeoutError as exc:
            await self._terminate_process(proc)
            raise ToolTimeout(
                f"{tool} exceeded timeout of {timeout:g}s",
                details={"tool": tool, "timeout_s": timeout},
            ) from exc

        exit_code = proc.returncode if proc.returncode is not None else -1
        return ToolResult(
            tool=tool,
            argv=list(argv),
            exit_code=exit_code,
            stdout=stdout_bytes.decode("utf-8", errors="replace"),
            stderr=stderr_bytes.decode("utf-8", errors="replace"),
        )

    def run_sync(
        self,
        argv: Sequence[str],
        *,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> ToolResult:
        """Blocking wrapper around :meth:`run` for one-shot hook processes."""
        return asyncio.run(self.run(argv, timeout=timeout))

    @staticmethod
    async def _terminate_process(proc: asyncio.subprocess.Process) -> None:
        """Terminate *proc*: SIGTERM, wait the grace period, then SIGKILL."""
        try:
            proc.terminate()
        except ProcessLookupError:
            return

        try:
            await asyncio.wait_for(proc.wait(), timeout=GRACEFUL_SHUTDOWN_S)
        except TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(proc.wait(), timeout=1.0)
