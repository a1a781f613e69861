"""
Custom exceptions for livehls operations.

Policy rejections (appending to a closed playlist, duplicate variant names)
are reported through return values, not exceptions. The classes here cover
caller errors and malformed configuration.
"""


class LiveHLSError(Exception):
    """Base exception for all livehls errors."""

    pass


class InvalidArgumentError(LiveHLSError, ValueError):
    """Raised when a required argument is missing or empty."""

    pass


class HandleReleasedError(LiveHLSError, RuntimeError):
    """Raised when a shared file handle is released more times than acquired."""

    pass


class StreamConfigError(LiveHLSError):
    """Raised when a stream description cannot be loaded."""

    pass
