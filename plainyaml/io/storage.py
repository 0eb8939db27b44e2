"""Document storage helpers.

Responsibilities:
- Read and write text, JSON and YAML documents relative to a root directory.
- Keep file I/O out of the decoder and encoder, which only handle strings.
"""

from __future__ import annotations

import json
from pathlib import Path

from ..config import PlainYamlConfig
from ..types import Value


class DocumentStore:
    """Filesystem-backed document store."""

    def __init__(self, root: Path, config: PlainYamlConfig | None = None) -> None:
        """Initialize the store with a root directory and codec options."""

        self.root = root
        self.config = config or PlainYamlConfig()

    def save_text(self, relative_path: Path, content: str) -> Path:
        """Save text content and return final path."""

        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def load_text(self, relative_path: Path) -> str:
        """Load text content from the store."""

        path = self.root / relative_path
        return path.read_text(encoding="utf-8")

    def save_json(self, relative_path: Path, payload: Value) -> Path:
        """Save a value tree as JSON and return final path."""

        return self.save_text(relative_path, dump_json(payload))

    def load_json(self, relative_path: Path) -> Value:
        """Load a value tree from a JSON document."""

        return json.loads(self.load_text(relative_path))

    def save_yaml(self, relative_path: Path, payload: Value) -> Path:
        """Encode a value tree as YAML text and return final path."""

        return self.save_text(relative_path, self.config.encoder().dump(payload))

    def load_yaml(self, relative_path: Path) -> Value:
        """Decode a YAML document into a value tree."""

        return self.config.decoder().parse(self.load_text(relative_path))


def dump_json(payload: Value) -> str:
    """Serialize a value tree as deterministic, human-readable JSON."""

    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
