"""Value tree type aliases shared by the decoder and encoder.

A decoded document is a tree of native Python objects:

- `None`, `bool`, `int`, `float`, `str` for scalars,
- `list` for ordered sequences,
- `dict` with `str` keys for ordered mappings (insertion order preserved).
"""

from __future__ import annotations

from typing import Union

Scalar = Union[None, bool, int, float, str]
Value = Union[Scalar, list["Value"], dict[str, "Value"]]


def is_collection(value: object) -> bool:
    """Return whether a value is a sequence or mapping node."""

    return isinstance(value, (list, dict))
