"""Awaitable filesystem primitives.

Each blocking call runs in a worker thread through ``asyncio.to_thread`` so
the event loop stays free while the disk is busy. These are the only
suspension points of a traversal.
"""

import asyncio
import os
from typing import List


def _scan_directory_sync(path: str) -> List[os.DirEntry]:
    """List a directory, closing the scandir iterator before returning."""
    with os.scandir(path) as iterator:
        return list(iterator)


async def scandir(path: str) -> List[os.DirEntry]:
    """List a directory.

    Args:
        path: Directory to list

    Returns:
        DirEntry records in the order the platform returns them
    """
    return await asyncio.to_thread(_scan_directory_sync, path)


async def stat(path: str) -> os.stat_result:
    """stat() a path, following symlinks."""
    return await asyncio.to_thread(os.stat, path)


async def lstat(path: str) -> os.stat_result:
    """stat() a path without following a final symlink."""
    return await asyncio.to_thread(os.lstat, path)


async def realpath(path: str) -> str:
    """Resolve every symlink in a path.

    Raises OSError for broken links and link loops instead of returning a
    best-effort path.
    """
    return await asyncio.to_thread(os.path.realpath, path, strict=True)
