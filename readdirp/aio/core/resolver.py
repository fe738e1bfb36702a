"""Entry type resolution.

Decides whether an entry is a file, a directory or something else, following
symlinks to their targets and refusing links that lead back into their own
ancestry.
"""

import logging
import os
import stat as stat_module  # To avoid name collision with stat results
from typing import Callable, Optional

from ..._common.errors import CircularSymlinkError
from . import fsio
from .entry import Entry, EntryKind, InfoKind

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[BaseException, Optional[str]], None]


def is_descendant(path: str, ancestor: str) -> bool:
    """Check if ``path`` equals ``ancestor`` or lies inside it.

    Compares whole path segments, so ``/a/bb`` is not inside ``/a/b``.
    """
    try:
        return os.path.commonpath([path, ancestor]) == os.path.normpath(ancestor)
    except ValueError:
        # Different drives, or a mix of absolute and relative paths
        return False


class EntryTypeResolver:
    """Classifies formatted entries for one traversal.

    Errors met while resolving symlinks are reported through ``on_error`` and
    the entry is classified as EntryKind.NONE.
    """

    def __init__(self, on_error: ErrorCallback, is_cancelled: Callable[[], bool] = lambda: False):
        """Initialize resolver.

        Args:
            on_error: Called with (error, path) for every resolution failure
            is_cancelled: Checked before each suspension point
        """
        self._on_error = on_error
        self._is_cancelled = is_cancelled

    async def classify(self, entry: Optional[Entry], record: Optional[os.DirEntry] = None) -> EntryKind:
        """Resolve the type of an entry.

        Args:
            entry: Formatted entry, or None if formatting failed
            record: Raw listing record the entry was built from. Used to spot
                    symlinks when the entry's stats already followed them.

        Returns:
            EntryKind of the entry (NONE if it cannot be used)
        """
        if entry is None or entry.info is None:
            return EntryKind.NONE

        try:
            if self._is_symlink(entry):
                return await self._resolve_symlink(entry)
            if self._is_file(entry):
                return EntryKind.FILE
            if self._is_dir(entry):
                if entry.info_kind is InfoKind.STATS and record is not None and record.is_symlink():
                    return await self._resolve_symlink(entry)
                return EntryKind.DIRECTORY
        except OSError as err:
            self._on_error(err, entry.full_path)
            return EntryKind.NONE

        return EntryKind.OTHER

    async def _resolve_symlink(self, entry: Entry) -> EntryKind:
        """Classify a symlink by its final target."""
        full_path = entry.full_path
        try:
            real_path = await fsio.realpath(full_path)
            if self._is_cancelled():
                return EntryKind.NONE
            # realpath() resolved every link, so lstat() describes the target
            target = await fsio.lstat(real_path)
            if self._is_cancelled():
                return EntryKind.NONE

            if stat_module.S_ISREG(target.st_mode):
                return EntryKind.FILE
            if not stat_module.S_ISDIR(target.st_mode):
                return EntryKind.OTHER

            # Where the link really lives, with symlinked parents resolved
            link_parent = await fsio.realpath(os.path.dirname(full_path))
            if self._is_cancelled():
                return EntryKind.NONE
        except OSError as err:
            self._on_error(err, full_path)
            return EntryKind.NONE

        link_location = os.path.join(link_parent, entry.basename)
        if not is_descendant(link_location, real_path):
            return EntryKind.DIRECTORY

        logger.debug("Circular symlink %s -> %s", full_path, real_path)
        self._on_error(CircularSymlinkError(full_path, real_path), full_path)
        return EntryKind.NONE

    @staticmethod
    def _is_symlink(entry: Entry) -> bool:
        if entry.info_kind is InfoKind.DIRENT:
            return entry.info.is_symlink()
        return stat_module.S_ISLNK(entry.info.st_mode)

    @staticmethod
    def _is_file(entry: Entry) -> bool:
        if entry.info_kind is InfoKind.DIRENT:
            return entry.info.is_file(follow_symlinks=False)
        return stat_module.S_ISREG(entry.info.st_mode)

    @staticmethod
    def _is_dir(entry: Entry) -> bool:
        if entry.info_kind is InfoKind.DIRENT:
            return entry.info.is_dir(follow_symlinks=False)
        return stat_module.S_ISDIR(entry.info.st_mode)
