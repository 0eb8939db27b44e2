"""Indentation-driven recursive decoder.

Responsibilities:
- Turn source text into a tree of mappings, sequences and scalars.
- Resolve nested scopes purely from relative indentation columns.
- Degrade malformed-but-recoverable input into plain text instead of failing.

Key types:
- `Decoder`: recursive-descent parser over one shared line buffer.

Key public functions:
- `decode`: parse text with default options.

Every scope parser receives `(lines, start, end)` index bounds into the buffer
built once per `parse` call and returns `(value, next_index)`, where
`next_index` is the first line it did not consume.
"""

from __future__ import annotations

from loguru import logger

from .errors import NestingDepthError
from .syntax.lines import Line, LineKind, build_lines, split_entry
from .syntax.scalars import decode_scalar, unquote
from .types import Value, is_collection


DEFAULT_MAX_DEPTH = 64

_MAPPING_KINDS = frozenset(
    {LineKind.MAPPING_ENTRY, LineKind.SCOPE_HEADER, LineKind.BLOCK_SCALAR_HEADER}
)
_EMPTY_COLLECTION_TOKENS = frozenset({"[]", "{}"})


class Decoder:
    """Decode indentation-structured text into a value tree."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        """Initialize the decoder with a maximum nesting depth."""

        self.max_depth = max_depth

    def parse(self, text: str) -> Value:
        """Decode a whole document into a top-level mapping or sequence.

        Raises:
            YamlIndentationError: If a line is indented with a tab.
            MultiDocumentError: If the input contains a `...` marker.
            NestingDepthError: If nesting exceeds `max_depth`.
        """

        lines = build_lines(text)
        logger.debug("Decoding {} logical line(s).", len(lines))
        if not lines:
            return {}
        if len(lines) == 1 and lines[0].content in _EMPTY_COLLECTION_TOKENS:
            return decode_scalar(lines[0].content)

        value = self._parse_segment(lines, 0, len(lines), depth=0)
        if not is_collection(value):
            return [value]
        return value

    def parse_scope(
        self,
        lines: list[Line],
        start: int,
        end: int | None = None,
        depth: int = 0,
    ) -> tuple[Value, int]:
        """Decode one scope whose column is fixed by `lines[start]`.

        Args:
            lines: Shared line buffer produced by `build_lines`.
            start: Index of the first line of the scope.
            end: Exclusive upper bound of the range available to the scope.
            depth: Current nesting depth.

        Returns:
            Decoded value and the index of the first unconsumed line.
        """

        stop = len(lines) if end is None else end
        first = lines[start]
        if depth > self.max_depth:
            raise NestingDepthError(
                f"nesting exceeds the maximum depth of {self.max_depth}",
                line_number=first.number,
            )
        if first.kind is LineKind.SEQUENCE_ITEM:
            return self._parse_sequence(lines, start, stop, first.indent, depth)
        if first.kind in _MAPPING_KINDS:
            return self._parse_mapping(lines, start, stop, first.indent, depth)
        return self._parse_plain_scope(lines, start, stop, first.indent)

    def _parse_segment(self, lines: list[Line], start: int, end: int, depth: int) -> Value:
        """Decode a line range completely, merging any fragments left after the first scope."""

        value, index = self.parse_scope(lines, start, end, depth)
        while index < end:
            logger.warning(
                "Line {}: content outside the enclosing scope; merging it as a fragment.",
                lines[index].number,
            )
            fragment, index = self.parse_scope(lines, index, end, depth)
            value = _merge_fragment(value, fragment, lines[start].number)
        return value

    def _parse_mapping(
        self, lines: list[Line], start: int, end: int, column: int, depth: int
    ) -> tuple[dict[str, Value], int]:
        """Decode `key: value`, `key:` and `key: |` lines sharing one column."""

        mapping: dict[str, Value] = {}
        # Key whose scalar text may still grow through plain continuation lines.
        open_key: str | None = None
        open_text = ""
        index = start
        while index < end:
            line = lines[index]
            if line.indent < column:
                break

            if line.indent > column or line.kind in (
                LineKind.PLAIN_CONTINUATION,
                LineKind.BLOCK_SCALAR_BODY,
            ):
                text, index = _collect_continuation(lines, index, end, column)
                if open_key is None:
                    logger.warning(
                        "Line {}: dropping text that follows a nested collection: {!r}",
                        line.number,
                        text,
                    )
                    continue
                open_text = f"{open_text} {text}" if open_text else text
                mapping[open_key] = open_text
                continue

            if line.kind is LineKind.SEQUENCE_ITEM:
                break

            key, rest = _entry_parts(line)
            open_key = None
            if line.kind is LineKind.MAPPING_ENTRY:
                mapping[key] = decode_scalar(rest)
                open_key, open_text = key, rest
                index += 1
            elif line.kind is LineKind.BLOCK_SCALAR_HEADER:
                mapping[key], index = _parse_block_scalar(lines, index, end, rest)
            else:
                value, index = self._parse_scope_header(lines, index, end, column, depth)
                mapping[key] = value
                if isinstance(value, str):
                    open_key, open_text = key, value
        return mapping, index

    def _parse_scope_header(
        self, lines: list[Line], index: int, end: int, column: int, depth: int
    ) -> tuple[Value, int]:
        """Decode the value opened by a bare `key:` line at `lines[index]`."""

        following = index + 1
        if following >= end:
            return None, following
        next_line = lines[following]
        if next_line.indent > column:
            return self.parse_scope(lines, following, end, depth + 1)
        if next_line.indent == column and next_line.kind is LineKind.SEQUENCE_ITEM:
            return self._parse_sequence(lines, following, end, column, depth + 1)
        return None, following

    def _parse_sequence(
        self, lines: list[Line], start: int, end: int, column: int, depth: int
    ) -> tuple[list[Value], int]:
        """Decode `- item` lines sharing one column, including record sets."""

        items: list[Value] = []
        # Scalar text of the last item while it may still grow through continuations.
        open_text: str | None = None
        index = start
        while index < end:
            line = lines[index]
            if line.indent < column:
                break

            if line.indent > column:
                text, index = _collect_continuation(lines, index, end, column)
                if open_text is None:
                    logger.warning(
                        "Line {}: dropping text that follows a nested collection: {!r}",
                        line.number,
                        text,
                    )
                    continue
                open_text = f"{open_text} {text}"
                items[-1] = open_text
                continue

            if line.kind is not LineKind.SEQUENCE_ITEM:
                break

            open_text = None
            style = line.block_style
            payload = line.content[1:].strip()
            if style is not None:
                value, index = _parse_block_scalar(lines, index, end, style)
                items.append(value)
            elif not payload:
                record_end = _record_end(lines, index, end, column)
                if record_end == index + 1:
                    items.append(None)
                else:
                    items.append(self._parse_segment(lines, index + 1, record_end, depth + 1))
                index = record_end
            else:
                items.append(decode_scalar(payload))
                open_text = payload
                index += 1
        return items, index

    def _parse_plain_scope(
        self, lines: list[Line], start: int, end: int, column: int
    ) -> tuple[str, int]:
        """Decode a scope of unmarked prose lines into one space-joined string."""

        text, index = _collect_continuation(lines, start, end, column)
        logger.debug("Line {}: folded plain continuation text.", lines[start].number)
        return text, index


def decode(text: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """Decode text into a mapping or sequence tree."""

    return Decoder(max_depth=max_depth).parse(text)


def _entry_parts(line: Line) -> tuple[str, str]:
    """Return the unquoted key and the remaining token of a mapping line."""

    parts = split_entry(line.content)
    if parts is None:
        return line.content, ""
    key, rest = parts
    return unquote(key), rest


def _record_end(lines: list[Line], marker: int, end: int, column: int) -> int:
    """Return the exclusive end of the record opened by a bare `-` at `lines[marker]`.

    The record runs until the next line at or left of the marker's column, which
    is either the next `-` of the same sequence or the end of the sequence.
    """

    index = marker + 1
    while index < end and lines[index].indent > column:
        index += 1
    return index


def _parse_block_scalar(
    lines: list[Line], header: int, end: int, style: str
) -> tuple[str, int]:
    """Join the body lines following a `|` or `>` header into one string."""

    index = header + 1
    body: list[Line] = []
    while index < end and lines[index].kind is LineKind.BLOCK_SCALAR_BODY:
        body.append(lines[index])
        index += 1
    if not body:
        return "", index

    minimum = next(line.indent for line in body if line.content)
    segments = [line.text[minimum:] if line.content else "" for line in body]
    if style == "|":
        return "\n".join(segments), index
    return _fold(segments), index


def _fold(segments: list[str]) -> str:
    """Join folded block lines with single spaces, skipping blank lines."""

    return " ".join(segment for segment in segments if segment)


def _collect_continuation(
    lines: list[Line], start: int, end: int, column: int
) -> tuple[str, int]:
    """Join a run of prose lines into one space-separated string.

    The run starts at `lines[start]` and extends over deeper lines and over
    unmarked lines at `column`; it stops at any structural line at `column`.
    """

    parts = [lines[start].content]
    index = start + 1
    while index < end:
        line = lines[index]
        if line.indent < column:
            break
        if line.indent == column and line.kind is not LineKind.PLAIN_CONTINUATION:
            break
        if line.content:
            parts.append(line.content)
        index += 1
    return " ".join(part for part in parts if part), index


def _merge_fragment(value: Value, fragment: Value, line_number: int) -> Value:
    """Merge a stray fragment into the value decoded for the same range."""

    if isinstance(value, dict) and isinstance(fragment, dict):
        value.update(fragment)
        return value
    if isinstance(value, dict):
        logger.warning(
            "Line {}: dropping a fragment that cannot be merged into a mapping.", line_number
        )
        return value
    merged = value if isinstance(value, list) else [value]
    if isinstance(fragment, list):
        merged.extend(fragment)
    else:
        merged.append(fragment)
    return merged
