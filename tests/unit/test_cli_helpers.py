"""Unit tests for CLI rendering and stage-runtime helpers."""

from __future__ import annotations

import json
from io import StringIO

import pytest
import typer

from plainyaml.cli_rendering import exit_with_command_error
from plainyaml.cli_runtime import CommandStages, stage_error
from plainyaml.errors import (
    CommandStageError,
    MultiDocumentError,
    NestingDepthError,
    YamlEncodeError,
)
from plainyaml.telemetry.logger import RunLogger


def test_exit_with_command_error_renders_stage_error_with_hint(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print stage diagnostics and hint before exiting with code 1."""

    error = CommandStageError(
        stage="decode",
        detail="line 3: tabs must not be used for indentation",
        hint="Indent with spaces; tab characters are not allowed.",
    )

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("decode", error)

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "decode failed at stage `decode`: line 3: tabs" in captured.err
    assert "Hint: Indent with spaces; tab characters are not allowed." in captured.err


def test_exit_with_command_error_renders_non_stage_fallback(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print fallback exception text for non-stage failures."""

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("check", RuntimeError("unexpected failure"))

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "check failed: unexpected failure" in captured.err


def test_stage_error_maps_decode_failures_with_hints() -> None:
    """Decode errors should keep their message and gain a type-specific hint."""

    mapped = stage_error("decode", MultiDocumentError("multiple documents", line_number=4))

    assert isinstance(mapped, CommandStageError)
    assert mapped.stage == "decode"
    assert mapped.detail == "line 4: multiple documents"
    assert mapped.hint == "Split the stream so that each file holds a single document."

    depth = stage_error("decode", NestingDepthError("too deep"))
    assert isinstance(depth, CommandStageError)
    assert "max_depth" in (depth.hint or "")


def test_stage_error_maps_encode_failures_with_hint() -> None:
    """Unencodable keys or strings should map to an encode-stage error with a hint."""

    mapped = stage_error("encode", YamlEncodeError("mapping keys cannot contain line breaks: 'a\\nb'"))

    assert isinstance(mapped, CommandStageError)
    assert mapped.stage == "encode"
    assert mapped.detail.startswith("mapping keys cannot contain line breaks")
    assert mapped.hint == "Remove line breaks from keys and carriage returns from strings."


def test_stage_error_maps_io_and_json_failures() -> None:
    """Missing files and malformed JSON should map to readable stage errors."""

    missing = stage_error("read", FileNotFoundError(2, "No such file", "doc.yaml"))
    try:
        json.loads("{broken")
    except json.JSONDecodeError as exc:
        invalid = stage_error("read", exc)

    assert isinstance(missing, CommandStageError)
    assert missing.detail == "File not found: `doc.yaml`."
    assert isinstance(invalid, CommandStageError)
    assert invalid.detail.startswith("Invalid JSON input:")


def test_stage_error_passes_through_unexpected_errors() -> None:
    """Errors without a mapping should be returned unchanged."""

    error = RuntimeError("boom")

    assert stage_error("write", error) is error


def test_command_stages_logs_and_maps_failures() -> None:
    """Stage runner should log the failure event and raise the mapped error."""

    sink = StringIO()
    stages = CommandStages(RunLogger(sink=sink))

    def _fail() -> None:
        raise MultiDocumentError("multiple documents", line_number=2)

    with pytest.raises(CommandStageError) as exc_info:
        stages.run("decode", _fail, path="doc.yaml")

    assert exc_info.value.stage == "decode"
    assert isinstance(exc_info.value.__cause__, MultiDocumentError)
    assert "event=failure error_type=MultiDocumentError" in sink.getvalue()


def test_command_stages_returns_action_result() -> None:
    """Successful stages should return the action result and log completion."""

    sink = StringIO()
    stages = CommandStages(RunLogger(sink=sink, verbose=True))

    assert stages.run("encode", lambda: "a: 1\n") == "a: 1\n"
    assert "stage=encode event=complete" in sink.getvalue()
