"""agent-hooks configuration.

Defines the validated configuration model shared by the guard, the
tool runner and the hooks.  Every field has a default so that hooks run
without any configuration; deployments override values through
``AGENT_HOOKS_<FIELD>`` environment variables.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "AGENT_HOOKS_"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class HooksConfig(BaseModel):
    """Configuration for the agent-hooks entry points."""

    model_config = ConfigDict(strict=True, frozen=True)

    pattern_timeout_ms: float = Field(
        default=100.0,
        gt=0.0,
        description=(
            "Maximum wall-clock time in milliseconds for a single guard "
            "pattern evaluation.  A timeout counts as a match."
        ),
    )
    prefer_re2: bool = Field(
        default=True,
        description="Use google-re2 for pattern matching when it is installed.",
    )
    pytest_timeout_s: float = Field(
        default=300.0,
        gt=0.0,
        description="Timeout in seconds for a pytest run.",
    )
    lint_timeout_s: float = Field(
        default=120.0,
        gt=0.0,
        description="Timeout in seconds for a single ruff or pyright run.",
    )
    enable_ruff: bool = Field(
        default=True,
        description="Run ruff in the post-write lint hook.",
    )
    enable_pyright: bool = Field(
        default=True,
        description="Run pyright in the post-write lint hook.",
    )
    max_output_chars: int = Field(
        default=20_000,
        ge=256,
        description="Hook output longer than this is truncated.",
    )
    max_command_preview: int = Field(
        default=200,
        ge=16,
        description="Blocked commands are truncated to this length in reasons.",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Level for the stderr logging handler.",
    )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> HooksConfig:
        """Build a config from ``AGENT_HOOKS_*`` variables.

        Environment values are strings, so they are validated in lax mode
        (``"0"``/``"false"`` become ``False``, ``"30"`` becomes ``30.0``).
        Keyword *overrides* win over the environment.
        """
        environ = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw != "":
                data[name] = raw.upper() if name == "log_level" else raw
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(data, strict=False)
