"""Shared pytest fixtures for the full plainyaml test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

from loguru import logger
import pytest


FILES_DIR = Path(__file__).resolve().parent / "files"


@pytest.fixture
def fixture_path() -> Callable[[str], Path]:
    """Resolve YAML fixture documents stored under `tests/files`."""

    def _resolve(name: str) -> Path:
        return FILES_DIR / name

    return _resolve


@pytest.fixture
def decoder_warnings() -> Iterator[list[str]]:
    """Capture warnings emitted by the plainyaml package during one test."""

    messages: list[str] = []
    logger.enable("plainyaml")
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Drop sinks installed by a test and restore the library default of silence."""

    yield
    logger.remove()
    logger.disable("plainyaml")
