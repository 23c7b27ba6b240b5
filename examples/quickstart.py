#!/usr/bin/env python3
"""agent-hooks quickstart -- using the command guard from Python.

Demonstrates:

1. Build a guard with the standard rules.
2. Evaluate safe and destructive commands.
3. Use the raising ``check`` API.
4. Add a project-specific rule.

Run:
    python examples/quickstart.py
"""
from __future__ import annotations

from agent_hooks import STANDARD_RULES, CommandBlocked, CommandGuard, GuardRule


def main() -> None:
    # -- Step 1: Build the guard ---------------------------------------------
    guard = CommandGuard()
    print(f"[1] Guard ready with {len(guard.rules)} rules "
          f"({guard.pattern_engine.engine_name})")

    # -- Step 2: Evaluate commands -------------------------------------------
    for command in (
        "git push --force-with-lease",
        "git push --force",
        "DELETE FROM users WHERE id = 5;",
        "DELETE FROM users;",
    ):
        verdict = guard.evaluate(command)
        print(f"[2] {verdict.decision.value:5}  {command}")

    # -- Step 3: Raising API -------------------------------------------------
    try:
        guard.check("rm -rf build/")
    except CommandBlocked as exc:
        print(f"[3] {exc.code}: blocked by {exc.details['rule_id']}")

    # -- Step 4: Project-specific rules --------------------------------------
    custom = CommandGuard(
        rules=[
            *STANDARD_RULES,
            GuardRule(
                rule_id="LOCAL-001",
                label="terraform destroy",
                pattern=r"\bterraform\s+destroy\b",
                alternative="Run 'terraform plan -destroy' and review it first.",
            ),
        ]
    )
    print("[4]", custom.evaluate("terraform destroy -auto-approve").reason)


if __name__ == "__main__":
    main()
