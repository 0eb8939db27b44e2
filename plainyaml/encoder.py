"""Depth-first encoder emitting indented, round-trippable text.

Responsibilities:
- Lay out mappings and sequences as indented lines.
- Render multiline strings as literal block scalars.
- Quote keys and scalars that would otherwise decode differently.
"""

from __future__ import annotations

from collections.abc import Iterator

from .errors import YamlEncodeError
from .syntax.lines import LineKind, classify, split_entry
from .syntax.scalars import encode_scalar
from .types import Value, is_collection


DEFAULT_INDENT_STEP = 2

_SEQUENCE_MARKER = "- "


class Encoder:
    """Encode value trees into indentation-structured text."""

    def __init__(self, indent_step: int = DEFAULT_INDENT_STEP) -> None:
        """Initialize the encoder with the indentation step for nested mappings."""

        self.indent_step = indent_step

    def dump(self, value: Value, indent: int = 0, in_sequence: bool = False) -> str:
        """Render a value as text starting at column `indent`.

        Args:
            value: Tree to render.
            indent: Column of the outermost emitted lines.
            in_sequence: Prefix the first emitted line with a `- ` marker, nesting the
                remaining lines of the value under it.

        Returns:
            Newline-terminated text.
        """

        if in_sequence:
            lines = list(self._dash_first(value, indent))
        else:
            lines = list(self._dump_lines(value, indent))
        return "\n".join(lines) + "\n"

    def _dump_lines(self, value: Value, indent: int) -> Iterator[str]:
        """Yield the lines of one value laid out at column `indent`."""

        pad = " " * indent
        if isinstance(value, dict) and value:
            for key, item in value.items():
                label = encode_key(str(key))
                if is_collection(item) and item:
                    yield f"{pad}{label}:"
                    yield from self._dump_lines(item, indent + self.indent_step)
                elif _is_multiline(item):
                    yield f"{pad}{label}: |"
                    yield from _block_lines(item, indent + self.indent_step)
                else:
                    yield f"{pad}{label}: {encode_scalar(item)}"
        elif isinstance(value, list) and value:
            for item in value:
                yield from self._dash_first(item, indent)
        elif _is_multiline(value):
            yield f"{pad}|"
            yield from _block_lines(value, indent + self.indent_step)
        else:
            yield f"{pad}{encode_scalar(value)}"

    def _dash_first(self, item: Value, indent: int) -> Iterator[str]:
        """Yield one sequence element with the `- ` marker on its first line."""

        pad = " " * indent
        if is_collection(item) and item:
            nested_indent = indent + len(_SEQUENCE_MARKER)
            nested = self._dump_lines(item, nested_indent)
            first = next(nested)
            yield f"{pad}{_SEQUENCE_MARKER}{first[nested_indent:]}"
            yield from nested
        elif _is_multiline(item):
            yield f"{pad}{_SEQUENCE_MARKER}|"
            yield from _block_lines(item, indent + self.indent_step)
        else:
            yield f"{pad}{_SEQUENCE_MARKER}{encode_scalar(item)}"


def encode(value: Value, *, indent_step: int = DEFAULT_INDENT_STEP) -> str:
    """Encode a value tree as text.

    Raises:
        YamlEncodeError: If a key contains a line break or a string contains a
            carriage return.
    """

    return Encoder(indent_step=indent_step).dump(value)


def encode_key(key: str) -> str:
    """Render a mapping key, double-quoting it when it would not split back intact."""

    if "\n" in key or "\r" in key:
        raise YamlEncodeError(f"mapping keys cannot contain line breaks: {key!r}")
    probe = f"{key}: x"
    if (
        key
        and key == key.strip()
        and key[0] not in ("'", '"')
        and classify(probe) is LineKind.MAPPING_ENTRY
        and split_entry(probe) == (key, "x")
    ):
        return key
    return f'"{key}"'


def _is_multiline(value: Value) -> bool:
    """Return whether a value is a string that needs a literal block."""

    return isinstance(value, str) and "\n" in value


def _block_lines(text: str, indent: int) -> Iterator[str]:
    """Yield literal block body lines; empty lines stay empty."""

    if "\r" in text:
        raise YamlEncodeError(f"block scalars cannot contain carriage returns: {text!r}")
    pad = " " * indent
    for part in text.split("\n"):
        yield f"{pad}{part}" if part else ""
