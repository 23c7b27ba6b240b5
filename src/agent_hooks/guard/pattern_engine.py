"""Command guard -- Pattern matching engine.

Provides RE2-compatible pattern matching with graceful fallback to the
standard library ``re`` module when ``google-re2`` is not installed.

Guarantees:
* Patterns are matched case-insensitively, anywhere in the text.
* Each evaluation is bounded by a wall-clock timeout.  A timeout is
  treated as a match (fail-closed).
* Compiled patterns are cached per process.
"""
from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable
from functools import lru_cache
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_MS = 100.0

_NO_MATCH: tuple[int, int] = (-1, 0)
TIMED_OUT: tuple[int, int] = (-1, -1)
"""Span returned by :meth:`PatternEngine.span` when evaluation timed out."""

# ---------------------------------------------------------------------------
# Attempt to import google-re2; fall back to ``re`` if unavailable
# ---------------------------------------------------------------------------

_RE2_AVAILABLE = False
_re2_module: Any = None

try:
    import re2 as _re2_module  # type: ignore[no-redef]

    _RE2_AVAILABLE = True
except ImportError:
    pass


# ---------------------------------------------------------------------------
# Compiled pattern cache (module-level)
# ---------------------------------------------------------------------------

@lru_cache(maxsize=512)
def _compile_pattern(pattern: str, use_re2: bool) -> Any:
    """Compile and cache a case-insensitive regex pattern.

    Raises
    ------
    re.error
        If the pattern is syntactically invalid (``re2.error`` under RE2).
    """
    if use_re2 and _RE2_AVAILABLE:
        return _re2_module.compile(f"(?i){pattern}")
    return re.compile(pattern, re.IGNORECASE)


# ---------------------------------------------------------------------------
# PatternEngine
# ---------------------------------------------------------------------------

class PatternEngine:
    """RE2-compatible pattern matching engine with timeout support.

    Parameters
    ----------
    timeout_ms:
        Maximum wall-clock time in milliseconds for a single pattern
        evaluation.
    prefer_re2:
        If ``True`` (the default), use ``google-re2`` when available.
    """

    def __init__(
        self,
        timeout_ms: float = DEFAULT_TIMEOUT_MS,
        prefer_re2: bool = True,
    ) -> None:
        self._timeout_s = timeout_ms / 1000.0
        self._use_re2 = prefer_re2 and _RE2_AVAILABLE

    # -- public properties --------------------------------------------------

    @property
    def engine_name(self) -> str:
        """Return the name of the active regex engine."""
        return "google-re2" if self._use_re2 else "re (stdlib)"

    @property
    def timeout_ms(self) -> float:
        """Return the configured timeout in milliseconds."""
        return self._timeout_s * 1000.0

    # -- compilation --------------------------------------------------------

    def compile(self, pattern: str) -> Any:
        """Compile *pattern* with the active engine.

        Raises ``re.error`` (or ``re2.error``) if the pattern is invalid.
        """
        return _compile_pattern(pattern, self._use_re2)

    # -- matching -----------------------------------------------------------

    def search(self, pattern: str, text: str) -> bool:
        """Return ``True`` if *pattern* matches anywhere in *text*.

        On timeout, returns ``True`` (fail-closed).
        """
        return self.span(pattern, text) is not None

    def span(self, pattern: str, text: str) -> tuple[int, int] | None:
        """Return the ``(start, end)`` offsets of the first match of *pattern*.

        Returns ``None`` when nothing matches and :data:`TIMED_OUT` when the
        evaluation exceeded the timeout.
        """
        compiled = self.compile(pattern)

        def _first() -> tuple[int, int]:
            m = compiled.search(text)
            return (m.start(), m.end()) if m is not None else _NO_MATCH

        result = self._run_with_timeout(_first)
        if result is None:
            logger.warning(
                "Pattern evaluation exceeded %.1f ms; treating as match: %s",
                self.timeout_ms, pattern,
            )
            return TIMED_OUT
        if result == _NO_MATCH:
            return None
        return result

    def find_all(self, pattern: str, text: str) -> list[str]:
        """Return the full text of every non-overlapping match of *pattern*.

        On timeout, returns ``["<TIMEOUT>"]`` to signal a fail-closed match.
        """
        compiled = self.compile(pattern)
        result = self._run_with_timeout(
            lambda: [m.group(0) for m in compiled.finditer(text)]
        )
        if result is None:
            return ["<TIMEOUT>"]
        return result

    # -- internal timeout helper --------------------------------------------

    def _run_with_timeout(self, fn: Callable[[], T]) -> T | None:
        """Execute *fn* with a wall-clock timeout, returning ``None`` on timeout.

        Exceptions raised by *fn* are re-raised in the caller's thread.
        """
        result_box: list[T | None] = [None]
        exception_box: list[BaseException | None] = [None]

        def _worker() -> None:
            try:
                result_box[0] = fn()
            except Exception as exc:
                exception_box[0] = exc

        thread = threading.Thread(target=_worker, daemon=True)
        thread.start()
        thread.join(timeout=self._timeout_s)

        if thread.is_alive():
            return None

        if exception_box[0] is not None:
            raise exception_box[0]

        return result_box[0]

    # -- cache management ---------------------------------------------------

    @staticmethod
    def clear_cache() -> None:
        """Clear the compiled pattern cache."""
        _compile_pattern.cache_clear()

    @staticmethod
    def cache_info() -> Any:
        """Return cache statistics."""
        return _compile_pattern.cache_info()
