"""Command-line interface for plainyaml.

Responsibilities:
- Expose decode, encode and round-trip check commands over files.
- Resolve codec configuration from `--config`, environment and defaults.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import (
    echo_check_passed,
    echo_document,
    echo_written,
    exit_with_command_error,
)
from .cli_runtime import CommandStages
from .config import ConfigLoader, PlainYamlConfig
from .errors import CommandStageError
from .io.storage import DocumentStore, dump_json
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="plainyaml",
    no_args_is_help=True,
    help="Decode and encode a practical subset of YAML.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="YAML file with `indent_step`, `max_depth`, `verbose`."),
]
VerboseOption = Annotated[
    bool | None,
    typer.Option("--verbose/--quiet", help="Emit phase logs and decoder debug traces."),
]


def _load_config(config_path: Path | None, verbose: bool | None) -> PlainYamlConfig:
    """Resolve command config and map failures to stage errors."""

    try:
        return ConfigLoader.resolve(config_path=config_path, verbose=verbose)
    except FileNotFoundError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Invalid configuration: {exc}",
            hint="Fix config keys/values or `PLAINYAML_*` environment variables and rerun.",
        ) from exc


def _command_context(
    config_path: Path | None, verbose: bool | None
) -> tuple[PlainYamlConfig, CommandStages, DocumentStore]:
    """Build config, stage runner and document store for one command invocation."""

    config = _load_config(config_path, verbose)
    stages = CommandStages(RunLogger(verbose=config.verbose))
    store = DocumentStore(Path("."), config)
    return config, stages, store


@app.command("decode")
def decode_command(
    source: Annotated[Path, typer.Argument(help="YAML document to decode.")],
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Write JSON to this path instead of stdout."),
    ] = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = None,
) -> None:
    """Decode a YAML document and print it as JSON."""

    try:
        config, stages, store = _command_context(config_file, verbose)
        text = stages.run("read", lambda: store.load_text(source), path=source)
        tree = stages.run("decode", lambda: config.decoder().parse(text), path=source)
        if out is not None:
            stages.run("write", lambda: store.save_json(out, tree), path=out)
    except Exception as exc:
        exit_with_command_error("decode", exc)

    if out is None:
        echo_document(dump_json(tree))
    else:
        echo_written(out)


@app.command("encode")
def encode_command(
    source: Annotated[Path, typer.Argument(help="JSON document to encode.")],
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Write YAML to this path instead of stdout."),
    ] = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = None,
) -> None:
    """Encode a JSON document as YAML text."""

    try:
        config, stages, store = _command_context(config_file, verbose)
        tree = stages.run("read", lambda: store.load_json(source), path=source)
        if out is not None:
            stages.run("write", lambda: store.save_yaml(out, tree), path=out)
        else:
            rendered = stages.run("encode", lambda: config.encoder().dump(tree))
    except Exception as exc:
        exit_with_command_error("encode", exc)

    if out is None:
        echo_document(rendered)
    else:
        echo_written(out)


@app.command("check")
def check_command(
    source: Annotated[Path, typer.Argument(help="YAML document to round-trip.")],
    config_file: ConfigOption = None,
    verbose: VerboseOption = None,
) -> None:
    """Decode, re-encode and decode again; fail when the trees differ."""

    try:
        config, stages, store = _command_context(config_file, verbose)
        tree = stages.run("decode", lambda: store.load_yaml(source), path=source)
        text = stages.run("encode", lambda: config.encoder().dump(tree))
        again = stages.run("check", lambda: config.decoder().parse(text))
        if again != tree:
            raise CommandStageError(
                stage="check",
                detail=f"Round trip changed the document decoded from `{source}`.",
                hint="Run `plainyaml decode` on the file to inspect lossy constructs.",
            )
    except Exception as exc:
        exit_with_command_error("check", exc)

    echo_check_passed(source)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
