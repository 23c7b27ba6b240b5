"""agent-hooks -- lifecycle hooks for AI coding assistants.

Components
----------
1. Command guard (:mod:`agent_hooks.guard`)
2. External tools (:mod:`agent_hooks.tools`)
3. Hooks (:mod:`agent_hooks.hooks`)
4. Command line (:mod:`agent_hooks.cli`)
"""
from __future__ import annotations

__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Core types, errors, config
# ---------------------------------------------------------------------------
from agent_hooks.core.config import HooksConfig
from agent_hooks.core.errors import (
    AgentHooksError,
    CommandBlocked,
    GuardError,
    MalformedPayload,
    PayloadError,
    RuleSetError,
    ToolError,
    ToolOutputError,
    ToolTimeout,
    ToolUnavailable,
)
from agent_hooks.core.types import (
    CommandRequest,
    Decision,
    ExitCode,
    HookResponse,
    LintReport,
    ToolResult,
    Verdict,
)

# ---------------------------------------------------------------------------
# Command guard
# ---------------------------------------------------------------------------
from agent_hooks.guard import STANDARD_RULES, CommandGuard, GuardRule, PatternEngine

# ---------------------------------------------------------------------------
# Tools and hooks
# ---------------------------------------------------------------------------
from agent_hooks.hooks import (
    run_post_write,
    run_post_write_lint,
    run_pre_command,
    run_subagent_stop,
)
from agent_hooks.tools import ToolRunner

__all__ = [
    "STANDARD_RULES",
    "AgentHooksError",
    "CommandBlocked",
    "CommandGuard",
    "CommandRequest",
    "Decision",
    "ExitCode",
    "GuardError",
    "GuardRule",
    "HookResponse",
    "HooksConfig",
    "LintReport",
    "MalformedPayload",
    "PatternEngine",
    "PayloadError",
    "RuleSetError",
    "ToolError",
    "ToolOutputError",
    "ToolResult",
    "ToolRunner",
    "ToolTimeout",
    "ToolUnavailable",
    "Verdict",
    "__version__",
    "run_post_write",
    "run_post_write_lint",
    "run_pre_command",
    "run_subagent_stop",
]
