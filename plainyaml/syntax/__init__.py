"""Line classification and scalar coercion shared by the decoder and encoder."""

from .lines import Line, LineKind, build_lines, classify, indentation, split_entry
from .scalars import decode_scalar, encode_scalar, unquote

__all__ = [
    "Line",
    "LineKind",
    "build_lines",
    "classify",
    "indentation",
    "split_entry",
    "decode_scalar",
    "encode_scalar",
    "unquote",
]
