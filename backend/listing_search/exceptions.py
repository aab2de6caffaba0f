"""
Error types raised by the search pipeline.

Every error is converted into an ``{"type": "error"}`` response at the
workflow boundary; components raise them and never retry.
"""


class SearchError(Exception):
    """Base class for all pipeline errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(SearchError):
    """Caller input is empty or not text."""


class ParseError(SearchError):
    """Model output does not contain the expected JSON object."""


class UpstreamError(SearchError):
    """A provider returned an unusable or empty result."""


class RetrievalError(SearchError):
    """The listing store reported an error."""


class AssistantTimeoutError(SearchError, TimeoutError):
    """The hosted assistant run did not complete within the poll budget."""
