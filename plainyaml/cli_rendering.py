"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and command results.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from .errors import CommandStageError


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, CommandStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_document(text: str) -> None:
    """Print a rendered document exactly as produced."""

    typer.echo(text, nl=False)


def echo_written(path: Path) -> None:
    """Print the destination of a written document."""

    typer.echo(f"Wrote: {path}")


def echo_check_passed(path: Path) -> None:
    """Print the round-trip check success line."""

    typer.echo(f"OK: {path}")
