"""Command guard.

This subpackage decides whether a proposed shell command is destructive
enough to need a human's confirmation.  It provides:

* **CommandGuard** -- evaluates a command against an ordered rule set
  and returns an Allow/Deny :class:`~agent_hooks.core.types.Verdict`.
* **GuardRule** / **STANDARD_RULES** -- the rule data structure and the
  built-in destructive-command catalogue.
* **PatternEngine** -- RE2-compatible pattern matching with timeout
  support and compilation caching.
"""
from __future__ import annotations

from agent_hooks.guard.engine import CommandGuard, command_preview, format_reason
from agent_hooks.guard.pattern_engine import TIMED_OUT, PatternEngine
from agent_hooks.guard.rules import STANDARD_RULES, GuardRule

__all__ = [
    "STANDARD_RULES",
    "TIMED_OUT",
    "CommandGuard",
    "GuardRule",
    "PatternEngine",
    "command_preview",
    "format_reason",
]
