"""Stage execution helpers for CLI commands.

Responsibilities:
- Wrap command stages with start/complete/failure telemetry events.
- Translate codec and I/O failures into stage-aware `CommandStageError`s.
"""

from __future__ import annotations

from collections.abc import Callable
import json
from typing import TypeVar

from .errors import (
    CommandStageError,
    MultiDocumentError,
    NestingDepthError,
    YamlDecodeError,
    YamlEncodeError,
    YamlIndentationError,
)
from .telemetry.logger import RunLogger

_StageResult = TypeVar("_StageResult")

_DECODE_HINTS: dict[type[YamlDecodeError], str] = {
    YamlIndentationError: "Indent with spaces; tab characters are not allowed.",
    MultiDocumentError: "Split the stream so that each file holds a single document.",
    NestingDepthError: "Raise `max_depth` via `--config` or `PLAINYAML_MAX_DEPTH`.",
}


class CommandStages:
    """Run named command stages and emit telemetry events around them."""

    def __init__(self, run_logger: RunLogger) -> None:
        """Initialize stage execution with a run logger."""

        self._run_logger = run_logger

    def run(
        self,
        stage_name: str,
        action: Callable[[], _StageResult],
        **context: object,
    ) -> _StageResult:
        """Run one named stage and emit start/complete/failure telemetry events."""

        self._run_logger.log_stage_start(stage_name, **context)
        try:
            result = action()
        except Exception as exc:
            self._run_logger.log_stage_failure(stage_name, type(exc).__name__)
            mapped = stage_error(stage_name, exc)
            if mapped is exc:
                raise
            raise mapped from exc
        self._run_logger.log_stage_complete(stage_name, **context)
        return result


def stage_error(stage_name: str, exc: Exception) -> Exception:
    """Map a stage failure to a `CommandStageError` with an actionable hint."""

    if isinstance(exc, CommandStageError):
        return exc
    if isinstance(exc, FileNotFoundError):
        return CommandStageError(
            stage=stage_name,
            detail=f"File not found: `{exc.filename}`.",
            hint="Check the path and rerun.",
        )
    if isinstance(exc, YamlDecodeError):
        return CommandStageError(
            stage=stage_name,
            detail=str(exc),
            hint=_DECODE_HINTS.get(type(exc)),
        )
    if isinstance(exc, YamlEncodeError):
        return CommandStageError(
            stage=stage_name,
            detail=str(exc),
            hint="Remove line breaks from keys and carriage returns from strings.",
        )
    if isinstance(exc, json.JSONDecodeError):
        return CommandStageError(
            stage=stage_name,
            detail=f"Invalid JSON input: {exc}",
            hint="Provide a well-formed JSON document.",
        )
    if isinstance(exc, (ValueError, OSError)):
        return CommandStageError(stage=stage_name, detail=str(exc))
    return exc
