"""Bidirectional mapping between raw scalar tokens and typed values.

Responsibilities:
- Coerce decoded tokens into `None`, `bool`, `int`, `float` or `str`.
- Render scalar values back into tokens that decode to the same value.
"""

from __future__ import annotations

import math
import re

from ..errors import YamlEncodeError
from ..types import Value
from .lines import LineKind, classify


_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")
_FLOAT_PATTERN = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")
_SPECIAL_FLOATS = {
    ".inf": math.inf,
    "+.inf": math.inf,
    "-.inf": -math.inf,
    ".nan": math.nan,
}
_TRUE_TOKEN = "true"
_FALSE_TOKEN = "false"
_NULL_TOKENS = frozenset({"null", "~", ""})
_BLOCK_MARKERS = frozenset({"|", ">"})
_QUOTE_CHARACTERS = ("'", '"')
_LINE_BREAKS = ("\r", "\n")


def unquote(text: str) -> str:
    """Strip one matching pair of enclosing single or double quotes."""

    if len(text) >= 2 and text[0] in _QUOTE_CHARACTERS and text[-1] == text[0]:
        return text[1:-1]
    return text


def decode_scalar(token: str) -> Value:
    """Coerce one raw token into a typed scalar value.

    Args:
        token: Token text as it appears after a `key: ` or `- ` marker.

    Returns:
        `bool` for `true`/`false`, `None` for `null`/`~`/empty, `int` for
        integer-only tokens, `float` for other numeric tokens, an empty `list`
        or `dict` for `[]`/`{}`, and `str` otherwise (quotes removed).
    """

    text = token.strip()
    lowered = text.lower()
    if lowered == _TRUE_TOKEN:
        return True
    if lowered == _FALSE_TOKEN:
        return False
    if lowered in _NULL_TOKENS:
        return None
    if _INTEGER_PATTERN.match(text):
        return int(text)
    if _FLOAT_PATTERN.match(text):
        return float(text)
    if lowered in _SPECIAL_FLOATS:
        return _SPECIAL_FLOATS[lowered]
    if text == "[]":
        return []
    if text == "{}":
        return {}
    if text == '""':
        return ""
    return unquote(text)


def encode_scalar(value: Value) -> str:
    """Render a scalar or empty collection as a single-line token.

    Non-empty collections and multiline strings are laid out by the encoder.
    """

    if value is None:
        return "null"
    if isinstance(value, bool):
        return _TRUE_TOKEN if value else _FALSE_TOKEN
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _encode_float(value)
    if isinstance(value, list) and not value:
        return "[]"
    if isinstance(value, dict) and not value:
        return "{}"
    return encode_string(str(value))


def encode_string(text: str) -> str:
    """Render a string plainly when it survives decoding, otherwise double-quoted.

    Raises:
        YamlEncodeError: If the text contains a line break; multiline strings
            are laid out as block scalars by the encoder instead.
    """

    if any(mark in text for mark in _LINE_BREAKS):
        raise YamlEncodeError(f"line breaks cannot appear in a single-line token: {text!r}")
    if not text:
        return '""'
    if is_plain_safe(text):
        return text
    return f'"{text}"'


def is_plain_safe(text: str) -> bool:
    """Return whether text decodes back to itself and reads as plain prose."""

    if text != text.strip() or text in _BLOCK_MARKERS:
        return False
    decoded = decode_scalar(text)
    if not isinstance(decoded, str) or decoded != text:
        return False
    return classify(text) is LineKind.PLAIN_CONTINUATION


def _encode_float(value: float) -> str:
    """Render floats so that integral values keep a fractional part."""

    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    return repr(value)
