"""Pre-command hook: block destructive shell commands before they run."""
from __future__ import annotations

import logging
from typing import Any

from agent_hooks.core.types import HookResponse
from agent_hooks.guard.engine import CommandGuard
from agent_hooks.hooks.payload import extract_command

logger = logging.getLogger(__name__)


def run_pre_command(payload: dict[str, Any], guard: CommandGuard) -> HookResponse:
    """Evaluate the payload's command; block with the deny reason on stderr."""
    request = extract_command(payload)
    if request.is_empty:
        logger.debug("No command in payload; nothing to check")
        return HookResponse.ok()

    verdict = guard.evaluate(request)
    if verdict.denied:
        return HookResponse.block(verdict.reason)
    return HookResponse.ok()
