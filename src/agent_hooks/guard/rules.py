"""Command guard -- Destructive command rules.

The standard rule set is an ordered, immutable tuple of
:class:`GuardRule` values.  Order matters only for reporting: when a
command matches several rules, the first one in this tuple is the one
named in the deny reason.

Every pattern is RE2-compatible (no look-around, no back-references).
Where a rule must not fire for a safer variant of the same command, the
variant is expressed as a separate ``exclude`` pattern rather than a
negative look-ahead.
"""
from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Rule data structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GuardRule:
    """A single destructive-command rule.

    Attributes
    ----------
    rule_id:
        Unique identifier (``GUARD-XXX`` for standard rules).
    label:
        Short human-readable intent, e.g. ``"recursive force delete"``.
    pattern:
        RE2-compatible regex searched (case-insensitively) in the command.
    alternative:
        A safer way to reach the same goal, shown with the deny reason.
    exclude:
        Optional pattern; when it is found in the same command segment
        as the match, the rule does not fire.
    """

    rule_id: str
    label: str
    pattern: str
    alternative: str = ""
    exclude: str | None = None


# ---------------------------------------------------------------------------
# Pattern building blocks
# ---------------------------------------------------------------------------

# A command word must start the string or follow whitespace, a shell
# operator, a subshell paren, a backtick, a quote (sh -c '...'), a path
# separator (/bin/rm) or an alias-bypassing backslash (\rm).
_CMD_START = r"(?:^|[\s;&|(/`\"'\\])"

# End of a flag token, including the closing quote of a quoted command.
_END = r"(?:\s|[;&|)`\"']|$)"

# Zero or more whole arguments, never crossing a shell operator.
_ARGS = r"(?:[^\s;&|]+\s+)*?"

# ``git`` plus optional global options (``-C dir``, ``-c k=v``, ``--no-pager``).
_GIT = r"\bgit\s+(?:-c\s+[^\s;&|]+\s+|--[a-z][a-z-]*(?:=[^\s;&|]+)?\s+)*"

_BLOCK_DEVICE = (
    r"/dev/(?:sd[a-z]|hd[a-z]|vd[a-z]|xvd[a-z]|nvme\d|mmcblk\d"
    r"|r?disk\d|loop\d|md\d|dm-\d)"
)

_RECURSIVE = r"(?:-[a-z]*r[a-z]*|--recursive)"
_FORCE = r"(?:-[a-z]*f[a-z]*|--force)"
_RF_BUNDLE = r"-[a-z]*(?:r[a-z]*f|f[a-z]*r)[a-z]*"

# A table name, optionally schema-qualified.  Quoted parts ("t", `t`,
# [t]) are matched whole so their closing quote never ends the statement.
_SQL_NAME = r"(?:\"[^\"]+\"|`[^`]+`|\[[^\]]+\]|\w+)"
_SQL_IDENTIFIER = rf"{_SQL_NAME}(?:\.{_SQL_NAME})*"



# ---------------------------------------------------------------------------
# Standard rules
# ---------------------------------------------------------------------------


def _build_standard_rules() -> tuple[GuardRule, ...]:
    return (
        # -- Filesystem ------------------------------------------------------
        GuardRule(
            rule_id="GUARD-001",
            label="recursive force delete",
            pattern=(
                rf"{_CMD_START}rm\s+{_ARGS}"
                rf"(?:{_RF_BUNDLE}"
                rf"|{_RECURSIVE}\s+{_ARGS}{_FORCE}"
                rf"|{_FORCE}\s+{_ARGS}{_RECURSIVE}){_END}"
            ),
            alternative="List the target first and delete specific paths without -f.",
        ),
        GuardRule(
            rule_id="GUARD-002",
            label="overwrite of a raw block device",
            pattern=rf"(?:>|\btee\s+(?:-[a-z-]+\s+)*)\s*{_BLOCK_DEVICE}",
            alternative="Write to a regular file instead of a device node.",
        ),
        GuardRule(
            rule_id="GUARD-003",
            label="filesystem format",
            pattern=rf"{_CMD_START}mkfs(?:\.[a-z0-9]+)?{_END}",
            alternative="Formatting a filesystem must be done by a human.",
        ),
        GuardRule(
            rule_id="GUARD-004",
            label="raw device write via dd",
            pattern=rf"{_CMD_START}dd\s+{_ARGS}of={_BLOCK_DEVICE}",
            alternative="Point dd's of= at a regular file.",
        ),
        GuardRule(
            rule_id="GUARD-005",
            label="fork bomb",
            pattern=r":\s*\(\s*\)\s*\{\s*:\s*\|\s*:\s*&\s*\}\s*;\s*:",
        ),
        # -- Version control -------------------------------------------------
        GuardRule(
            rule_id="GUARD-006",
            label="hard reset of the working tree",
            pattern=rf"{_GIT}reset\s+{_ARGS}--hard{_END}",
            alternative="Use 'git stash' to keep the changes, or 'git diff' to review them.",
        ),
        GuardRule(
            rule_id="GUARD-007",
            label="forced clean of untracked files",
            pattern=rf"{_GIT}clean\s+{_ARGS}(?:-[a-z]*f[a-z]*|--force){_END}",
            alternative="Run 'git clean -n' to see what would be removed.",
            exclude=rf"{_GIT}clean\s+{_ARGS}(?:-[a-z]*n[a-z]*|--dry-run){_END}",
        ),
        GuardRule(
            rule_id="GUARD-008",
            label="force push",
            pattern=rf"{_GIT}push\s+{_ARGS}(?:--force|-[a-z]*f[a-z]*){_END}",
            alternative="Use 'git push --force-with-lease'.",
        ),
        # -- SQL -------------------------------------------------------------
        GuardRule(
            rule_id="GUARD-009",
            label="drop table or database",
            pattern=r"\bdrop\s+(?:table|database)\b",
            alternative="Back up the data and have a human run the drop.",
        ),
        GuardRule(
            rule_id="GUARD-010",
            label="truncate table",
            pattern=r"\btruncate\s+table\b",
            alternative="Delete the specific rows with a WHERE clause.",
        ),
        GuardRule(
            rule_id="GUARD-011",
            label="delete without a WHERE clause",
            pattern=rf"\bdelete\s+from\s+{_SQL_IDENTIFIER}\s*(?:;|[\"']|$)",
            alternative="Add a WHERE clause that selects the rows to delete.",
        ),
    )


STANDARD_RULES: tuple[GuardRule, ...] = _build_standard_rules()
