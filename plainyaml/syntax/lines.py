"""Line classification and logical line-buffer construction.

Responsibilities:
- Provide total, stateless predicates over single source lines.
- Build the immutable line buffer consumed by the decoder.

Key types:
- `LineKind`: classification of one logical line.
- `Line`: frozen record of one logical line (source number, raw text,
  indentation column, stripped content, kind).

Key public functions:
- `classify`, `split_entry`, `indentation` and the `is_*` predicates.
- `build_lines`: split source text into a decoder-ready line buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re

from ..errors import MultiDocumentError, YamlIndentationError


_NEWLINE_PATTERN = re.compile(r"\r\n|\n|\r")
_QUOTE_CHARACTERS = ("'", '"')
_LITERAL_MARKER = "|"
_FOLDED_MARKER = ">"


class LineKind(Enum):
    """Classification of one logical source line."""

    BLANK = "blank"
    COMMENT = "comment"
    DIRECTIVE = "directive"
    DOCUMENT_MARKER = "document_marker"
    DOCUMENT_END = "document_end"
    SEQUENCE_ITEM = "sequence_item"
    BLOCK_SCALAR_HEADER = "block_scalar_header"
    MAPPING_ENTRY = "mapping_entry"
    SCOPE_HEADER = "scope_header"
    BLOCK_SCALAR_BODY = "block_scalar_body"
    # Lossy fallback: unmarked prose folded into a single string value.
    PLAIN_CONTINUATION = "plain_continuation"


_SKIPPED_KINDS = frozenset(
    {LineKind.BLANK, LineKind.COMMENT, LineKind.DIRECTIVE, LineKind.DOCUMENT_MARKER}
)
_STRUCTURAL_PAYLOAD_KINDS = frozenset(
    {
        LineKind.SEQUENCE_ITEM,
        LineKind.BLOCK_SCALAR_HEADER,
        LineKind.MAPPING_ENTRY,
        LineKind.SCOPE_HEADER,
    }
)


@dataclass(frozen=True, slots=True)
class Line:
    """One logical line of the decoder buffer.

    Attributes:
        number: 1-based line number in the source text.
        text: Raw line text without its terminator.
        indent: Column of the first non-space character.
        content: Line text with surrounding whitespace removed.
        kind: Line classification.
    """

    number: int
    text: str
    indent: int
    content: str
    kind: LineKind

    @property
    def block_style(self) -> str | None:
        """Return `|` or `>` when this line opens a block scalar, else `None`."""

        if self.kind is LineKind.BLOCK_SCALAR_HEADER:
            parts = split_entry(self.content)
            return parts[1] if parts is not None else None
        if self.kind is LineKind.SEQUENCE_ITEM:
            payload = sequence_payload(self.content)
            if payload in (_LITERAL_MARKER, _FOLDED_MARKER):
                return payload
        return None


def indentation(line: str) -> int:
    """Return the column of the first non-space character."""

    return len(line) - len(line.lstrip(" "))


def split_entry(text: str) -> tuple[str, str] | None:
    """Split a mapping line into `(key, rest)`, or return `None` for non-entries.

    A key wrapped in quotes may itself contain `": "`; its closing quote must be
    directly followed by the `:` separator. Unquoted keys end at the first `": "`.
    """

    stripped = text.strip()
    if stripped[:1] in _QUOTE_CHARACTERS:
        separator = stripped[0] + ":"
        closing = stripped.find(separator, 1)
        while closing != -1:
            rest = stripped[closing + 2 :]
            if not rest or rest.startswith(" "):
                return stripped[: closing + 1], rest.strip()
            closing = stripped.find(separator, closing + 1)
        return None
    if ": " in stripped:
        key, _, rest = stripped.partition(": ")
        return key.strip(), rest.strip()
    if stripped.endswith(":"):
        return stripped[:-1].strip(), ""
    return None


def sequence_payload(text: str) -> str:
    """Return the text following a leading `-` sequence marker."""

    return text.strip()[1:].strip()


def is_sequence_item(line: str) -> bool:
    """Return whether the line is a `- value` item or a bare `-` marker."""

    stripped = line.strip()
    return stripped == "-" or stripped.startswith("- ")


def is_mapping_entry(line: str) -> bool:
    """Return whether the line carries a `key: value` pair on one line."""

    parts = split_entry(line)
    return parts is not None and bool(parts[1])


def is_scope_header(line: str) -> bool:
    """Return whether the line is a bare `key:` opening a nested scope."""

    parts = split_entry(line)
    return parts is not None and not parts[1]


def is_literal_block_header(line: str) -> bool:
    """Return whether the line ends with `: |`."""

    parts = split_entry(line)
    return parts is not None and parts[1] == _LITERAL_MARKER


def is_folded_block_header(line: str) -> bool:
    """Return whether the line ends with `: >`."""

    parts = split_entry(line)
    return parts is not None and parts[1] == _FOLDED_MARKER


def classify(line: str) -> LineKind:
    """Classify one raw source line; total over any input."""

    stripped = line.strip()
    if not stripped:
        return LineKind.BLANK
    if stripped.startswith("#"):
        return LineKind.COMMENT
    if line.startswith("%YAML"):
        return LineKind.DIRECTIVE
    if line.rstrip() == "...":
        return LineKind.DOCUMENT_END
    if line.startswith("---"):
        return LineKind.DOCUMENT_MARKER
    if is_sequence_item(stripped):
        return LineKind.SEQUENCE_ITEM
    if is_literal_block_header(stripped) or is_folded_block_header(stripped):
        return LineKind.BLOCK_SCALAR_HEADER
    if is_mapping_entry(stripped):
        return LineKind.MAPPING_ENTRY
    if is_scope_header(stripped):
        return LineKind.SCOPE_HEADER
    return LineKind.PLAIN_CONTINUATION


def build_lines(text: str) -> list[Line]:
    """Split source text into the decoder's logical line buffer.

    Blank lines, comments, the `---` marker and `%YAML` directives are dropped.
    Block-scalar bodies are captured verbatim, and `- key: value` items are
    expanded into a bare `-` marker followed by the payload at its own column.

    Raises:
        YamlIndentationError: If a line starts with a tab character.
        MultiDocumentError: If a `...` end-of-document marker is present.
    """

    raw_lines = _NEWLINE_PATTERN.split(text)
    lines: list[Line] = []
    index = 0
    while index < len(raw_lines):
        raw = raw_lines[index]
        number = index + 1
        index += 1
        kind = classify(raw)
        if kind in _SKIPPED_KINDS:
            continue
        if raw.startswith("\t"):
            raise YamlIndentationError(
                "tabs must not be used for indentation", line_number=number
            )
        if kind is LineKind.DOCUMENT_END:
            raise MultiDocumentError(
                "multiple document streams are not supported", line_number=number
            )

        line = Line(number, raw, indentation(raw), raw.strip(), kind)
        expanded = _expand_sequence_item(line) if kind is LineKind.SEQUENCE_ITEM else [line]
        lines.extend(expanded)
        head = expanded[-1]
        if head.block_style is not None:
            index = _collect_block_body(raw_lines, index, head.indent, lines)
    return lines


def _expand_sequence_item(line: Line) -> list[Line]:
    """Split `- <structural payload>` into a bare marker and a payload line."""

    payload_text = line.text[line.indent + 1 :]
    payload = payload_text.strip()
    if not payload:
        return [line]

    nested_text = " " * (line.indent + 1) + payload_text
    payload_kind = classify(nested_text)
    if payload_kind not in _STRUCTURAL_PAYLOAD_KINDS:
        return [line]

    marker = Line(line.number, line.text[: line.indent + 1], line.indent, "-", LineKind.SEQUENCE_ITEM)
    nested = Line(line.number, nested_text, indentation(nested_text), payload, payload_kind)
    if payload_kind is LineKind.SEQUENCE_ITEM:
        return [marker, *_expand_sequence_item(nested)]
    return [marker, nested]


def _collect_block_body(
    raw_lines: list[str], start_index: int, anchor_indent: int, lines: list[Line]
) -> int:
    """Append block-scalar body lines deeper than `anchor_indent`; return next index."""

    body: list[tuple[int, str]] = []
    minimum: int | None = None
    index = start_index
    while index < len(raw_lines):
        raw = raw_lines[index]
        if raw.strip():
            column = indentation(raw)
            if raw.startswith("\t") or column <= anchor_indent:
                break
            if minimum is None:
                minimum = column
            elif column < minimum:
                break
        body.append((index + 1, raw))
        index += 1

    while body and not body[-1][1].strip():
        body.pop()
    if minimum is None:
        return index

    for number, raw in body:
        content = raw.strip()
        column = indentation(raw) if content else minimum
        lines.append(Line(number, raw, column, content, LineKind.BLOCK_SCALAR_BODY))
    return index
