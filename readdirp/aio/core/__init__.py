"""Core traversal machinery.

Entry records, type resolution and the pull-driven engine. All I/O goes
through the awaitable primitives in ``fsio``.
"""

from .entry import Entry, EntryKind, InfoKind, PendingDirectory
from .resolver import EntryTypeResolver, is_descendant
from .engine import TraversalEngine

__all__ = [
    # Records
    'Entry',
    'EntryKind',
    'InfoKind',
    'PendingDirectory',
    # Resolution
    'EntryTypeResolver',
    'is_descendant',
    # Engine
    'TraversalEngine',
]
