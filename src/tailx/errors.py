"""Exception types raised while tailing sources"""


class TailError(Exception):
    """Base class for all tailx errors."""


class ConfigurationError(TailError, ValueError):
    """Invalid invocation: malformed offset token or conflicting units.

    Raised before any source is opened.
    """

    def __init__(self, message: str, token: str | None = None):
        super().__init__(message)
        self.token = token


class SourceOpenError(TailError, OSError):
    """A source could not be opened (missing, permission denied, directory)."""

    def __init__(self, path: str, reason: str):
        super().__init__(f'{path}: {reason}')
        self.path = path
        self.reason = reason


class SourceReadError(TailError, OSError):
    """A read or seek on an already opened source failed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f'{path}: {reason}')
        self.path = path
        self.reason = reason
