"""agent-hooks error-code hierarchy.

Hierarchy
---------
::

    AgentHooksError
    +-- GuardError        (HK-E1xx)
    +-- PayloadError      (HK-E2xx)
    +-- ToolError         (HK-E3xx)

A matched guard rule is a normal outcome and is reported through a
:class:`~agent_hooks.core.types.Verdict`.  :class:`CommandBlocked` only
exists for callers that use the raising
:meth:`~agent_hooks.guard.engine.CommandGuard.check` API.

Usage
-----
Catch by category::

    try:
        runner.run_sync(["pytest", "-q"], timeout=60)
    except ToolUnavailable:
        # pytest is not installed -- nothing to do
        ...
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class AgentHooksError(Exception):
    """Base exception for all agent-hooks errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"HK-E100"``.
    message : str
        Human-readable description.
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for the caller.
    """

    code: str = "HK-E000"
    message: str = "Unknown agent-hooks error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error to a JSON-compatible mapping."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return {"error": payload}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ===================================================================
# Category base classes
# ===================================================================

class GuardError(AgentHooksError):
    """HK-E1xx -- Command guard errors."""

    code = "HK-E1XX"


class PayloadError(AgentHooksError):
    """HK-E2xx -- Hook payload errors."""

    code = "HK-E2XX"


class ToolError(AgentHooksError):
    """HK-E3xx -- External tool errors (pytest, ruff, pyright)."""

    code = "HK-E3XX"


# ===================================================================
# HK-E1xx  Command Guard
# ===================================================================

class RuleSetError(GuardError):
    """HK-E100 -- The guard rule set could not be built.

    Raised at construction time.  Never swallowed: an unusable rule would
    silently disable the protection it exists to provide.
    """

    code = "HK-E100"
    message = "Guard rule set is invalid"
    resolution = "Fix the offending rule definition; the guard cannot start without it."


class CommandBlocked(GuardError):
    """HK-E101 -- A command matched a guard rule."""

    code = "HK-E101"
    message = "Command blocked by guard rule"
    resolution = (
        "Ask the user for explicit confirmation before retrying, "
        "or choose a non-destructive alternative."
    )


# ===================================================================
# HK-E2xx  Payload
# ===================================================================

class MalformedPayload(PayloadError):
    """HK-E200 -- The hook payload is not a JSON object."""

    code = "HK-E200"
    message = "Hook payload is not a valid JSON object"


# ===================================================================
# HK-E3xx  External tools
# ===================================================================

class ToolUnavailable(ToolError):
    """HK-E300 -- The external tool is not installed or cannot be spawned."""

    code = "HK-E300"
    message = "External tool is not available"
    resolution = "Install the tool or ignore: the hook degrades to a no-op."


class ToolTimeout(ToolError):
    """HK-E301 -- The external tool exceeded its timeout."""

    code = "HK-E301"
    message = "External tool exceeded its timeout"


class ToolOutputError(ToolError):
    """HK-E302 -- The external tool produced output that cannot be parsed."""

    code = "HK-E302"
    message = "External tool output could not be parsed"
