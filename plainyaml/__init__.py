"""Top-level package for plainyaml.

This package converts between a practical, indentation-based subset of YAML
and trees of native Python values. The main entry points are `decode` and
`encode`; `Decoder` and `Encoder` expose the configurable codec objects.

Library logging goes through loguru and stays disabled until an application
enables it (for example via `RunLogger` or `logger.enable("plainyaml")`).
"""

from loguru import logger

from .decoder import Decoder, decode
from .encoder import Encoder, encode
from .errors import (
    MultiDocumentError,
    NestingDepthError,
    YamlDecodeError,
    YamlEncodeError,
    YamlError,
    YamlIndentationError,
)
from .types import Value

logger.disable(__name__)

__all__ = [
    "Decoder",
    "Encoder",
    "MultiDocumentError",
    "NestingDepthError",
    "Value",
    "YamlDecodeError",
    "YamlEncodeError",
    "YamlError",
    "YamlIndentationError",
    "decode",
    "encode",
    "__version__",
]

__version__ = "0.1.0"
