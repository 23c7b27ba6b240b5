"""Command-line entry point: ``agent-hooks <hook>``.

The runtime invokes one subcommand per lifecycle point and pipes the
hook payload to stdin::

    agent-hooks pre-command     # before a shell command runs
    agent-hooks post-write      # after a file is written: related tests
    agent-hooks lint            # after a file is written: ruff + pyright
    agent-hooks subagent-stop   # after a sub-agent finishes: full suite

Exit status 0 lets the action proceed; 2 blocks it and stderr carries
the reason.  ``agent-hooks check <command>`` and ``agent-hooks rules``
are for humans.
"""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, TextIO

from pydantic import ValidationError

from agent_hooks import __version__
from agent_hooks.core.config import HooksConfig
from agent_hooks.core.errors import RuleSetError
from agent_hooks.core.types import ExitCode, HookResponse
from agent_hooks.guard.engine import CommandGuard
from agent_hooks.guard.pattern_engine import PatternEngine
from agent_hooks.hooks.payload import read_payload
from agent_hooks.hooks.post_write import run_post_write
from agent_hooks.hooks.post_write_lint import run_post_write_lint
from agent_hooks.hooks.pre_command import run_pre_command
from agent_hooks.hooks.subagent_stop import run_subagent_stop
from agent_hooks.tools.runner import ToolRunner

logger = logging.getLogger(__name__)

_LOG_FORMAT = "agent-hooks: %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str, stream: TextIO) -> None:
    """Send ``agent_hooks`` log records to *stream* (never stdout)."""
    package_logger = logging.getLogger("agent_hooks")
    for handler in list(package_logger.handlers):
        if getattr(handler, "_agent_hooks", False):
            package_logger.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler._agent_hooks = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def build_guard(config: HooksConfig) -> CommandGuard:
    engine = PatternEngine(
        timeout_ms=config.pattern_timeout_ms,
        prefer_re2=config.prefer_re2,
    )
    return CommandGuard(pattern_engine=engine, preview_chars=config.max_command_preview)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agent-hooks",
        description="Lifecycle hooks for AI coding assistants.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--cwd",
        type=Path,
        default=None,
        help="Project directory for tests and linters (default: current directory).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=None,
        help="Logging level for stderr (default: AGENT_HOOKS_LOG_LEVEL or WARNING).",
    )

    sub = parser.add_subparsers(dest="hook", required=True)
    sub.add_parser("pre-command", help="Block destructive shell commands (payload on stdin).")
    sub.add_parser("post-write", help="Run the related tests for a written file.")
    sub.add_parser("lint", help="Run ruff and pyright on a written file.")
    sub.add_parser("subagent-stop", help="Run the full test suite.")

    check = sub.add_parser("check", help="Evaluate a command and print the verdict.")
    check.add_argument("command", nargs="+", help="The command to evaluate.")

    sub.add_parser("rules", help="List the destructive-command rules.")
    return parser


def _emit(response: HookResponse, stdout: TextIO, stderr: TextIO) -> int:
    if response.stdout:
        print(response.stdout, file=stdout)
    if response.stderr:
        print(response.stderr, file=stderr)
    return int(response.exit_code)


def _list_rules(guard: CommandGuard, stdout: TextIO) -> int:
    for rule in guard.rules:
        print(f"{rule.rule_id}  {rule.label}", file=stdout)
    return int(ExitCode.OK)


def _check(guard: CommandGuard, command: str, stdout: TextIO) -> int:
    verdict = guard.evaluate(command)
    if verdict.allowed:
        print("allow", file=stdout)
        return int(ExitCode.OK)
    print(f"deny\n{verdict.reason}", file=stdout)
    return int(ExitCode.BLOCK)


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run one hook and return the process exit status."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser().parse_args(argv)

    try:
        config = HooksConfig.from_env(environ, log_level=args.log_level)
    except ValidationError as exc:
        print(f"agent-hooks: invalid configuration:\n{exc}", file=stderr)
        return int(ExitCode.BLOCK)
    configure_logging(config.log_level, stderr)

    if args.hook in ("pre-command", "check", "rules"):
        try:
            guard = build_guard(config)
        except RuleSetError as exc:
            # fail closed
            logger.error("Guard rule set is invalid: %s", exc.message)
            print(f"agent-hooks: command guard unavailable: {exc.message}", file=stderr)
            return int(ExitCode.BLOCK)
        if args.hook == "rules":
            return _list_rules(guard, stdout)
        if args.hook == "check":
            return _check(guard, " ".join(args.command), stdout)
        return _emit(run_pre_command(read_payload(stdin), guard), stdout, stderr)

    runner = ToolRunner(cwd=args.cwd)
    payload: dict[str, Any] = read_payload(stdin)
    if args.hook == "post-write":
        response = run_post_write(payload, runner, config)
    elif args.hook == "lint":
        response = run_post_write_lint(payload, runner, config)
    else:
        response = run_subagent_stop(payload, runner, config)
    return _emit(response, stdout, stderr)


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())
