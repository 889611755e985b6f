from __future__ import annotations


class JsonSiftError(ValueError):
    """Base class for every error raised by jsonsift."""


class ParseError(JsonSiftError):
    """A single strategy could not decode its candidate. Always recoverable."""


class NoCandidateError(JsonSiftError):
    """The brace scanner reached the end of the text without a parseable span."""


class NoJsonFoundError(JsonSiftError):
    def __init__(self, message: str = "No valid JSON found in response") -> None:
        super().__init__(message)


class ConfigError(JsonSiftError):
    pass
