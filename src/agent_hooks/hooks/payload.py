"""Hook payload parsing.

The runtime sends one JSON object on stdin.  Two shapes are accepted::

    {"command": "git status"}
    {"tool_name": "Bash", "tool_input": {"command": "git status"}}

and likewise ``file_path`` at the top level or under ``tool_input``.
A payload that cannot be parsed means there is nothing to check.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TextIO

from agent_hooks.core.errors import MalformedPayload
from agent_hooks.core.types import CommandRequest

logger = logging.getLogger(__name__)


def parse_payload(raw: str) -> dict[str, Any]:
    """Decode *raw* into a payload mapping.

    Raises
    ------
    MalformedPayload
        If *raw* is not a JSON object.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedPayload(details={"error": str(exc)}) from exc
    if not isinstance(data, dict):
        raise MalformedPayload(
            f"Hook payload is a JSON {type(data).__name__}, not an object",
        )
    return data


def read_payload(stream: TextIO) -> dict[str, Any]:
    """Read and decode the payload from *stream*; ``{}`` if it is unusable."""
    try:
        raw = stream.read()
    except UnicodeDecodeError as exc:
        logger.debug("Ignoring undecodable hook payload: %s", exc)
        return {}
    if not raw.strip():
        return {}
    try:
        return parse_payload(raw)
    except MalformedPayload as exc:
        logger.debug("Ignoring malformed hook payload: %s", exc.message)
        return {}


def _field(payload: dict[str, Any], name: str) -> Any:
    tool_input = payload.get("tool_input")
    if isinstance(tool_input, dict) and tool_input.get(name):
        return tool_input[name]
    return payload.get(name)


def extract_command(payload: dict[str, Any]) -> CommandRequest:
    """Return the command carried by *payload* (empty when absent)."""
    command = _field(payload, "command")
    if not isinstance(command, str):
        return CommandRequest()
    return CommandRequest(command=command)


def extract_file_path(payload: dict[str, Any]) -> Path | None:
    """Return the written file's path carried by *payload*, if any."""
    for name in ("file_path", "path"):
        value = _field(payload, name)
        if isinstance(value, str) and value:
            return Path(value)
    return None
