"""Structured run logging utilities.

Responsibilities:
- Emit concise, deterministic phase-level logs for CLI commands.
- Route decoder diagnostics (anomaly warnings, debug traces) to the same sink.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


_PACKAGE_NAME = "plainyaml"
_SAFE_PUNCTUATION = frozenset("-_.:/")


def _context_token(value: object) -> str:
    """Render one context value as a single whitespace-free token."""

    text = str(value).strip() or "none"
    return "".join(
        char if char.isalnum() or char in _SAFE_PUNCTUATION else "_" for char in text
    )


def _format_context(context: dict[str, object]) -> str:
    """Render `key=value` pairs sorted by key, each preceded by a space."""

    return "".join(f" {key}={_context_token(context[key])}" for key in sorted(context))


class RunLogger:
    """Emit deterministic phase logs for CLI-observable command activity.

    Non-verbose loggers only surface warnings and failures; verbose loggers also
    emit stage start/complete events and decoder debug traces.
    """

    def __init__(self, sink: TextIO | None = None, verbose: bool = False) -> None:
        """Initialize logger sink and configure deterministic formatting."""

        self._sink = sink or sys.stderr
        self.verbose = verbose
        _loguru_logger.remove()
        _loguru_logger.add(
            self._sink,
            format="{message}",
            level="DEBUG" if verbose else "WARNING",
            colorize=False,
        )
        _loguru_logger.enable(_PACKAGE_NAME)

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured runtime log line."""

        line = f"[phase] level={level} stage={stage} event={event}{_format_context(context)}"
        _loguru_logger.log(level, line)

    def log_stage_start(self, stage: str, **context: object) -> None:
        """Emit a stage-start runtime event."""

        self._emit("INFO", "start", stage, **context)

    def log_stage_complete(self, stage: str, **context: object) -> None:
        """Emit a stage-complete runtime event."""

        self._emit("INFO", "complete", stage, **context)

    def log_stage_failure(self, stage: str, error_type: str) -> None:
        """Emit a stage-failure runtime event without sensitive payload details."""

        self._emit("ERROR", "failure", stage, error_type=error_type)
