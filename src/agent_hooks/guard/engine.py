"""Command guard -- Rule evaluation engine.

:class:`CommandGuard` decides whether a proposed shell command should be
blocked before it runs.  Evaluation is a pure function of the command
and the (immutable) rule set, so one guard instance can be shared by any
number of threads.

Fail-closed behaviour:
* Rule-set construction compiles every pattern and raises
  :class:`~agent_hooks.core.errors.RuleSetError` on any defect.
* A pattern evaluation that times out counts as a match.
* Any other error while evaluating a rule yields a deny verdict.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from agent_hooks.core.errors import CommandBlocked, RuleSetError
from agent_hooks.core.types import CommandRequest, Verdict
from agent_hooks.guard.pattern_engine import TIMED_OUT, PatternEngine
from agent_hooks.guard.rules import STANDARD_RULES, GuardRule

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_CHARS = 200

CONFIRMATION_NOTICE = (
    "This action requires explicit confirmation from the user. "
    "Ask the user before retrying."
)

# Shell operators that end a command segment.
_SEGMENT_END = re.compile(r"[;&|\n]")


def command_preview(command: str, limit: int = DEFAULT_PREVIEW_CHARS) -> str:
    """Return the first non-blank line of *command*, truncated to *limit*."""
    stripped = command.strip()
    first_line = stripped.splitlines()[0] if stripped else ""
    if len(first_line) > limit:
        return first_line[: limit - 3] + "..."
    return first_line


def format_reason(rule: GuardRule, command: str, limit: int = DEFAULT_PREVIEW_CHARS) -> str:
    """Build the deny reason shown to the agent for *rule* matching *command*."""
    lines = [
        f"Blocked potentially destructive command ({rule.label}, {rule.rule_id}):",
        f"  {command_preview(command, limit)}",
        CONFIRMATION_NOTICE,
    ]
    if rule.alternative:
        lines.append(f"Safer alternative: {rule.alternative}")
    return "\n".join(lines)


class CommandGuard:
    """Destructive-command guard.

    Parameters
    ----------
    rules:
        Rules in evaluation order.  Defaults to :data:`STANDARD_RULES`.
    pattern_engine:
        Optional :class:`PatternEngine`.  Defaults to a new engine with
        the default timeout.
    preview_chars:
        Maximum length of the command excerpt quoted in deny reasons.

    Raises
    ------
    RuleSetError
        If a rule has an empty or invalid pattern, or two rules share an id.
    """

    def __init__(
        self,
        rules: Iterable[GuardRule] | None = None,
        pattern_engine: PatternEngine | None = None,
        *,
        preview_chars: int = DEFAULT_PREVIEW_CHARS,
    ) -> None:
        self._engine = pattern_engine or PatternEngine()
        self._rules: tuple[GuardRule, ...] = tuple(STANDARD_RULES if rules is None else rules)
        self._preview_chars = preview_chars
        self._validate_rules()

    # -- evaluation ---------------------------------------------------------

    def evaluate(self, command: str | CommandRequest | None) -> Verdict:
        """Return the verdict for *command*.

        Empty or missing input is allowed: there is nothing to evaluate.
        The first matching rule, in declaration order, decides the reason.
        """
        text = _command_text(command)
        if not text.strip():
            return Verdict.allow()

        for rule in self._rules:
            try:
                matched = self._rule_matches(rule, text)
            except Exception as exc:
                logger.error(
                    "Rule %s could not be evaluated; blocking: %s", rule.rule_id, exc
                )
                return Verdict.deny(
                    f"Guard rule {rule.rule_id} ({rule.label}) could not be evaluated "
                    f"for: {command_preview(text, self._preview_chars)}\n"
                    f"{CONFIRMATION_NOTICE}",
                    rule_id=rule.rule_id,
                    rule_label=rule.label,
                )
            if matched:
                logger.info("Command denied by %s (%s)", rule.rule_id, rule.label)
                return Verdict.deny(
                    format_reason(rule, text, self._preview_chars),
                    rule_id=rule.rule_id,
                    rule_label=rule.label,
                )

        logger.debug("Command allowed: %s", command_preview(text, self._preview_chars))
        return Verdict.allow()

    def check(self, command: str | CommandRequest | None) -> None:
        """Evaluate *command* and raise :class:`CommandBlocked` on deny."""
        verdict = self.evaluate(command)
        if verdict.allowed:
            return
        text = _command_text(command)
        raise CommandBlocked(
            verdict.reason,
            details={
                "rule_id": verdict.rule_id,
                "label": verdict.rule_label,
                "blocked_command": command_preview(text, self._preview_chars),
            },
        )

    def matching_rules(self, command: str | CommandRequest | None) -> list[GuardRule]:
        """Return every rule that matches *command*, in order (diagnostics mode).

        Unlike :meth:`evaluate`, this does not stop at the first match.
        """
        text = _command_text(command)
        if not text.strip():
            return []
        return [rule for rule in self._rules if self._rule_matches(rule, text)]

    # -- introspection ------------------------------------------------------

    @property
    def rules(self) -> tuple[GuardRule, ...]:
        """Return the rule set in evaluation order."""
        return self._rules

    @property
    def pattern_engine(self) -> PatternEngine:
        return self._engine

    # -- internal helpers ---------------------------------------------------

    def _rule_matches(self, rule: GuardRule, text: str) -> bool:
        span = self._engine.span(rule.pattern, text)
        if span is None:
            return False
        if span == TIMED_OUT or rule.exclude is None:
            return True

        # The exclusion only applies to the command segment holding the match.
        start, end = span
        boundary = _SEGMENT_END.search(text, end)
        segment = text[start : boundary.start() if boundary else len(text)]
        excluded = self._engine.span(rule.exclude, segment)
        return excluded is None or excluded == TIMED_OUT

    def _validate_rules(self) -> None:
        """Compile every pattern up front so a broken rule never fails open."""
        if not self._rules:
            raise RuleSetError("Guard rule set is empty")

        seen: set[str] = set()
        for rule in self._rules:
            if rule.rule_id in seen:
                raise RuleSetError(
                    f"Duplicate guard rule id: {rule.rule_id}",
                    details={"rule_id": rule.rule_id},
                )
            seen.add(rule.rule_id)

            for field_name, pattern in (("pattern", rule.pattern), ("exclude", rule.exclude)):
                if pattern is None:
                    continue
                if not pattern.strip():
                    raise RuleSetError(
                        f"Guard rule {rule.rule_id} has an empty {field_name}",
                        details={"rule_id": rule.rule_id, "field": field_name},
                    )
                try:
                    self._engine.compile(pattern)
                except Exception as exc:
                    raise RuleSetError(
                        f"Guard rule {rule.rule_id} has an invalid {field_name}: {exc}",
                        details={
                            "rule_id": rule.rule_id,
                            "field": field_name,
                            "pattern": pattern,
                        },
                    ) from exc


def _command_text(command: str | CommandRequest | None) -> str:
    if command is None:
        return ""
    if isinstance(command, CommandRequest):
        return command.command
    return command
