"""Error types raised by the configuration mutation engine."""

from __future__ import annotations


class HostConfError(Exception):
    """Base class; ``str(exc)`` is the message shown to the user."""


class NotFoundError(HostConfError):
    pass


class InvalidFormatError(HostConfError):
    pass


class ElevationFailedError(HostConfError):
    """The privilege elevation helper exited non-zero or was declined."""


class IOFailureError(HostConfError):
    pass


class UnsupportedOperationError(HostConfError):
    pass
