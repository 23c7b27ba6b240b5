"""agent-hooks shared types.

Value types and Pydantic models passed between the guard, the tool
runner, the hooks and the CLI.

Key design decisions:
* Models are frozen; a verdict or a tool result never changes after it
  is produced.
* Enums use *string* (or *int*) values so they serialise cleanly to JSON
  and map directly onto process exit statuses.
"""
from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Decision(enum.StrEnum):
    """Outcome of a guard evaluation."""

    ALLOW = "allow"
    DENY = "deny"


class ExitCode(enum.IntEnum):
    """Process exit statuses understood by the assistant runtime.

    * **OK** -- proceed unmodified (also used when a supporting tool is
      unavailable).
    * **BLOCK** -- do not proceed; stderr carries the reason.
    """

    OK = 0
    BLOCK = 2


# ---------------------------------------------------------------------------
# Guard models
# ---------------------------------------------------------------------------

class CommandRequest(BaseModel):
    """The literal shell command the caller is about to execute."""

    model_config = ConfigDict(strict=True, frozen=True)

    command: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.command.strip()


class Verdict(BaseModel):
    """The guard's decision for one :class:`CommandRequest`.

    ``reason``, ``rule_id`` and ``rule_label`` are only set on deny.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    decision: Decision
    reason: str = ""
    rule_id: str | None = None
    rule_label: str | None = None

    @classmethod
    def allow(cls) -> Verdict:
        return cls(decision=Decision.ALLOW)

    @classmethod
    def deny(
        cls,
        reason: str,
        *,
        rule_id: str | None = None,
        rule_label: str | None = None,
    ) -> Verdict:
        return cls(
            decision=Decision.DENY,
            reason=reason,
            rule_id=rule_id,
            rule_label=rule_label,
        )

    @property
    def allowed(self) -> bool:
        return self.decision is Decision.ALLOW

    @property
    def denied(self) -> bool:
        return self.decision is Decision.DENY


# ---------------------------------------------------------------------------
# Hook and tool models
# ---------------------------------------------------------------------------

class HookResponse(BaseModel):
    """What a hook hands back to the CLI: exit status plus text channels."""

    model_config = ConfigDict(strict=True, frozen=True)

    exit_code: ExitCode = ExitCode.OK
    stdout: str = ""
    stderr: str = ""

    @classmethod
    def ok(cls, stdout: str = "") -> HookResponse:
        return cls(exit_code=ExitCode.OK, stdout=stdout)

    @classmethod
    def block(cls, stderr: str) -> HookResponse:
        return cls(exit_code=ExitCode.BLOCK, stderr=stderr)

    @property
    def blocked(self) -> bool:
        return self.exit_code is ExitCode.BLOCK


class ToolResult(BaseModel):
    """The captured result of one external tool run."""

    model_config = ConfigDict(strict=True, frozen=True)

    tool: str
    argv: list[str] = Field(default_factory=list)
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        """stdout and stderr joined, the way a terminal would show them."""
        parts = [part.rstrip("\n") for part in (self.stdout, self.stderr) if part.strip()]
        return "\n".join(parts)


class LintReport(BaseModel):
    """Error summary parsed from a linter's JSON report."""

    model_config = ConfigDict(strict=True, frozen=True)

    tool: str
    error_count: int = Field(default=0, ge=0)
    diagnostics: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0
