"""Common components with no I/O.

This internal package holds configuration, the exception hierarchy and the
filter compiler. It should NOT be imported directly by users, and it must
NEVER import from ``aio`` to avoid circular dependencies.
"""

from .config import (
    ALL_TYPES,
    DEFAULT_DEPTH,
    DEFAULT_HIGH_WATER_MARK,
    EntryType,
    FilterEntryKey,
    FilterSpec,
    ReaddirpOptions,
)
from .errors import (
    RECURSIVE_ERROR_CODE,
    CircularSymlinkError,
    InvalidArgumentError,
    InvalidFilterError,
    InvalidTypeError,
    ReaddirpError,
    StreamConsumedError,
)
from .filters import compile_filter, compile_glob

__all__ = [
    # Configuration
    'ALL_TYPES',
    'DEFAULT_DEPTH',
    'DEFAULT_HIGH_WATER_MARK',
    'EntryType',
    'FilterEntryKey',
    'FilterSpec',
    'ReaddirpOptions',
    # Errors
    'RECURSIVE_ERROR_CODE',
    'CircularSymlinkError',
    'InvalidArgumentError',
    'InvalidFilterError',
    'InvalidTypeError',
    'ReaddirpError',
    'StreamConsumedError',
    # Filters
    'compile_filter',
    'compile_glob',
]
