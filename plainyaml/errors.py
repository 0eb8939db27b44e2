"""Domain exceptions for decoding and CLI diagnostics."""

from __future__ import annotations


class YamlError(ValueError):
    """Base class for all plainyaml errors."""


class YamlDecodeError(YamlError):
    """Raised when input text cannot be decoded at all.

    Attributes:
        detail: Human-readable description of the problem.
        line_number: 1-based source line that triggered the failure, if known.
    """

    def __init__(self, detail: str, *, line_number: int | None = None) -> None:
        """Initialize a decode error bound to an optional source line."""

        message = detail if line_number is None else f"line {line_number}: {detail}"
        super().__init__(message)
        self.detail = detail
        self.line_number = line_number


class YamlIndentationError(YamlDecodeError):
    """Raised when a tab character is used for indentation."""


class MultiDocumentError(YamlDecodeError):
    """Raised when an end-of-document marker (`...`) is encountered."""


class NestingDepthError(YamlDecodeError):
    """Raised when nesting exceeds the decoder's configured maximum depth."""


class YamlEncodeError(YamlError):
    """Raised when a key or string cannot be encoded so that it decodes back unchanged.

    Keys may not contain line breaks, and no string may contain a carriage
    return: both would be split into separate lines when decoding.
    """


class CommandStageError(RuntimeError):
    """Raised when a specific CLI command stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped command error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
