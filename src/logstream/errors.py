"""
Exceptions raised by log streams.
"""


class StreamError(Exception):
    """Base class for all log stream errors."""


class InvalidArgument(StreamError, TypeError):
    """A constructor was given something it cannot use, such as a non-callable generator."""


class MissingArgument(StreamError, ValueError):
    """A required argument, such as the file list of a source, was not given."""


class EmptyArgument(StreamError, ValueError):
    """A required argument was given but is empty."""


class NoBookmark(StreamError, RuntimeError):
    """A bookmark operation was attempted on a stream with no active bookmark."""

    def __init__(self, message: str = "No bookmark set in stream"):
        super().__init__(message)


class IOFailure(StreamError, OSError):
    """Reading from an underlying source failed."""
