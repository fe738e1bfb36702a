"""readdirp - Lazy recursive directory listing for asyncio.

Walks a directory tree on demand, yielding files and/or directories with
depth limits, glob or callable filters and symlink cycle detection.

    from readdirp import readdirp

    entries = await readdirp('src', file_filter=['*.py', '!test_*'])

    async for entry in readdirp('src', type='all', depth=2):
        print(entry.path)
"""

__version__ = "0.3.1"

from . import aio

from ._common import (
    ALL_TYPES,
    DEFAULT_DEPTH,
    EntryType,
    FilterEntryKey,
    ReaddirpOptions,
    RECURSIVE_ERROR_CODE,
    CircularSymlinkError,
    InvalidArgumentError,
    InvalidFilterError,
    InvalidTypeError,
    ReaddirpError,
    StreamConsumedError,
    compile_filter,
)
from .aio import (
    Entry,
    InfoKind,
    ReaddirpStream,
    readdirp,
    collect_entries,
    collect_paths,
    ErrorPolicy,
    FailFastPolicy,
    SuppressNormalFlowPolicy,
)

__all__ = [
    "__version__",
    "aio",
    # Entry point
    "readdirp",
    "collect_entries",
    "collect_paths",
    "ReaddirpStream",
    "Entry",
    "InfoKind",
    # Configuration
    "ALL_TYPES",
    "DEFAULT_DEPTH",
    "EntryType",
    "FilterEntryKey",
    "ReaddirpOptions",
    "compile_filter",
    # Error handling
    "ErrorPolicy",
    "FailFastPolicy",
    "SuppressNormalFlowPolicy",
    # Errors
    "RECURSIVE_ERROR_CODE",
    "CircularSymlinkError",
    "InvalidArgumentError",
    "InvalidFilterError",
    "InvalidTypeError",
    "ReaddirpError",
    "StreamConsumedError",
]
