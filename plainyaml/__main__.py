"""Module entrypoint for running plainyaml as ``python -m plainyaml``."""

from __future__ import annotations

from plainyaml.cli import main


if __name__ == "__main__":
    main()
