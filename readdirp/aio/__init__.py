"""Asynchronous implementation of readdirp.

Directory listings, stat calls and symlink resolution run in worker threads
so a traversal never blocks the event loop.
"""

# Core abstractions
from .core import (
    Entry,
    EntryKind,
    InfoKind,
    PendingDirectory,
    EntryTypeResolver,
    TraversalEngine,
)

# Error handling
from .error_policies import (
    NORMAL_FLOW_ERRORS,
    ErrorAction,
    ErrorPolicy,
    FailFastPolicy,
    SuppressNormalFlowPolicy,
    create_error_policy,
    error_code,
    is_normal_flow_error,
)

# Output
from .stream import ReaddirpStream

# High-level API
from .api import (
    readdirp,
    collect_entries,
    collect_paths,
)

__all__ = [
    # Core
    'Entry',
    'EntryKind',
    'InfoKind',
    'PendingDirectory',
    'EntryTypeResolver',
    'TraversalEngine',
    # Error handling
    'NORMAL_FLOW_ERRORS',
    'ErrorAction',
    'ErrorPolicy',
    'FailFastPolicy',
    'SuppressNormalFlowPolicy',
    'create_error_policy',
    'error_code',
    'is_normal_flow_error',
    # Output
    'ReaddirpStream',
    # High-level API
    'readdirp',
    'collect_entries',
    'collect_paths',
]
