from __future__ import annotations


class ToolkitError(Exception):
    """Base class for errors raised inside the toolkit."""


class ParseError(ToolkitError):
    """Strict JSON decoding failed."""


class EvaluationError(ToolkitError):
    """Text could not be read as a JavaScript literal."""

    def __init__(self, message: str, position: int | None = None):
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)
        self.position = position


class MalformedURL(ToolkitError, ValueError):
    """A URL could not be interpreted for query encoding."""
