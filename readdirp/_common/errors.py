"""Exception hierarchy for readdirp.

Configuration errors are raised synchronously from ``readdirp()`` before any
I/O happens. ``CircularSymlinkError`` is the only error the traversal engine
creates itself; every other runtime error is an ``OSError`` from the host.
"""

from typing import Optional

# Error code carried by CircularSymlinkError, listed among the normal-flow codes.
RECURSIVE_ERROR_CODE = 'READDIRP_RECURSIVE_ERROR'


class ReaddirpError(Exception):
    """Base class for all errors raised by readdirp itself."""

    code: Optional[str] = None


class InvalidArgumentError(ReaddirpError, ValueError):
    """Raised when ``readdirp()`` is called with a missing or invalid argument."""


class InvalidTypeError(InvalidArgumentError):
    """Raised when the ``type`` option is not one of the recognized values."""


class InvalidFilterError(InvalidArgumentError, TypeError):
    """Raised when a filter is not a callable, a glob string or a list of globs."""


class StreamConsumedError(ReaddirpError, RuntimeError):
    """Raised when a traversal stream is consumed a second time."""


class CircularSymlinkError(ReaddirpError):
    """A symlink resolves to a directory that contains the symlink itself.

    Attributes:
        path: Absolute path of the symlink
        real_path: Resolved target of the symlink (an ancestor of ``path``)
    """

    code = RECURSIVE_ERROR_CODE

    def __init__(self, path: str, real_path: str):
        super().__init__(f'Circular symlink detected: "{path}" points to "{real_path}"')
        self.path = path
        self.real_path = real_path
