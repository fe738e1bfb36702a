"""Pull-driven traversal engine.

The engine owns the frontier of directories still to expand and produces
entries only when asked for them. Each call to ``request_next(n)`` lists at
most the directories needed to find ``n`` accepted entries; nothing is read
ahead. The frontier is an explicit stack, so a traversal can suspend at any
I/O call and peak memory is bounded by one directory listing at a time plus
the pending placeholders.
"""

import asyncio
import logging
import os
from dataclasses import replace
from typing import Callable, List, Optional

from ..._common.config import ReaddirpOptions
from ..._common.filters import compile_filter
from ..error_policies import ErrorAction, ErrorPolicy, create_error_policy
from . import fsio
from .entry import Entry, EntryKind, InfoKind, PendingDirectory
from .resolver import EntryTypeResolver

logger = logging.getLogger(__name__)

WarningCallback = Callable[[BaseException], None]


class TraversalEngine:
    """Lazily walks a directory tree for one traversal.

    The engine is single-use and not thread-safe. All state (frontier,
    current listing, filters, error policy) belongs to the instance, so
    several engines can run side by side in one event loop.
    """

    def __init__(
        self,
        root: str,
        options: Optional[ReaddirpOptions] = None,
        on_warning: Optional[WarningCallback] = None,
        error_policy: Optional[ErrorPolicy] = None
    ):
        """Initialize engine.

        Args:
            root: Directory to walk
            options: Traversal configuration (defaults if None)
            on_warning: Called with each recovered error
            error_policy: Overrides the policy implied by
                          ``options.suppress_normal_flow_error``
        """
        # Validate a copy; the caller's options object is left as given
        options = replace(options) if options is not None else ReaddirpOptions()
        options.validate()
        self.options = options

        self._file_filter = compile_filter(options.file_filter, options.filter_entry_key)
        self._directory_filter = compile_filter(options.directory_filter, options.filter_entry_key)
        self._max_depth = options.depth
        self._wants_file = options.type.wants_files
        self._wants_dir = options.type.wants_directories
        self._wants_everything = options.type.wants_everything
        self._lstat = options.lstat
        self._info_kind = InfoKind.STATS if options.always_stat else InfoKind.DIRENT

        self._policy = error_policy or create_error_policy(options.suppress_normal_flow_error)
        self._on_warning = on_warning
        self._resolver = EntryTypeResolver(self._on_error, lambda: self._destroyed)

        self.root = os.path.abspath(root)
        # Start with one parent, the root dir
        self._parents: List[PendingDirectory] = [PendingDirectory(self.root, '', 1)]
        self._parent: Optional[PendingDirectory] = None

        self._reading = False
        self._finished = False
        self._destroyed = False
        self._error: Optional[BaseException] = None
        self._error_raised = False

    @property
    def finished(self) -> bool:
        """True once every directory has been drained."""
        return self._finished

    @property
    def destroyed(self) -> bool:
        """True after a fatal error or a call to destroy()."""
        return self._destroyed

    @property
    def error(self) -> Optional[BaseException]:
        """The fatal error that stopped the traversal, if any."""
        return self._error

    @property
    def error_policy(self) -> ErrorPolicy:
        return self._policy

    @property
    def pending_directories(self) -> int:
        """Number of discovered directories not yet listed."""
        return len(self._parents)

    async def request_next(self, batch_size: int) -> List[Entry]:
        """Produce up to ``batch_size`` more accepted entries.

        A call made while another one is still running returns an empty list
        without doing any work.

        Args:
            batch_size: Maximum number of entries to return

        Returns:
            Entries in discovery order. Fewer than ``batch_size`` only when
            the traversal finished or was destroyed during this call.

        Raises:
            Exception: The fatal error that aborted the traversal. Entries
                accepted before the failure are returned first; the error is
                raised by the following call, and only once.
        """
        if self._error is not None:
            return self._raise_error()
        if self._reading or self._finished or self._destroyed:
            return []

        self._reading = True
        emitted: List[Entry] = []
        budget = batch_size
        try:
            while not self._destroyed and budget > 0:
                parent = self._parent
                if parent is None or parent.exhausted:
                    if not self._parents:
                        self._finish()
                        break
                    pending = self._parents.pop()
                    await self._explore_dir(pending)
                    if not self._destroyed:
                        self._parent = pending
                    continue

                records = parent.records[:budget]
                del parent.records[:budget]
                entries = await asyncio.gather(
                    *(self._format_entry(record, parent) for record in records)
                )

                for record, entry in zip(records, entries):
                    if self._destroyed:
                        break

                    kind = await self._resolver.classify(entry, record)
                    if kind is EntryKind.DIRECTORY and self._directory_filter(entry):
                        if parent.depth <= self._max_depth:
                            logger.debug("Queued %s", entry.full_path)
                            self._parents.append(
                                PendingDirectory(entry.full_path, entry.path, parent.depth + 1)
                            )
                        if self._wants_dir:
                            emitted.append(entry)
                            budget -= 1
                        continue

                    if self._includes_as_file(kind) and self._file_filter(entry):
                        if self._wants_file:
                            emitted.append(entry)
                            budget -= 1
        except Exception as err:
            self._fail(err)
        finally:
            self._reading = False

        if self._error is not None and not emitted:
            return self._raise_error()
        return emitted

    def destroy(self, error: Optional[BaseException] = None) -> None:
        """Stop the traversal.

        Work already in flight finishes but its results are discarded. If
        ``error`` is given it is raised by the next ``request_next`` call.
        """
        if error is not None:
            self._fail(error)
            return
        if not self._destroyed:
            logger.debug("Traversal of %s destroyed", self.root)
        self._destroyed = True
        self._release()

    def _includes_as_file(self, kind: EntryKind) -> bool:
        if kind is EntryKind.FILE:
            return True
        return kind is EntryKind.OTHER and self._wants_everything

    async def _explore_dir(self, pending: PendingDirectory) -> None:
        """List a pending directory into its record buffer."""
        if self._destroyed:
            return
        logger.debug("Listing %s (depth %d)", pending.full_path, pending.depth)
        try:
            records = await fsio.scandir(pending.full_path)
        except OSError as err:
            self._on_error(err, pending.full_path)
            records = []
        if self._destroyed:
            return
        pending.records = records

    async def _format_entry(self, record: os.DirEntry, parent: PendingDirectory) -> Optional[Entry]:
        """Pair a listing record with its parent path."""
        basename = record.name
        full_path = os.path.join(parent.full_path, basename)
        path = os.path.join(parent.path, basename)

        if self._info_kind is InfoKind.DIRENT:
            return Entry(basename, path, full_path, record, InfoKind.DIRENT)

        if self._destroyed:
            return None
        try:
            if self._lstat:
                stats = await fsio.lstat(full_path)
            else:
                stats = await fsio.stat(full_path)
        except OSError as err:
            self._on_error(err, full_path)
            return None
        return Entry(basename, path, full_path, stats, InfoKind.STATS)

    def _on_error(self, error: BaseException, path: Optional[str] = None) -> None:
        """Route a filesystem error through the error policy."""
        if self._destroyed:
            return
        if self._policy.classify(error, path) is ErrorAction.WARN:
            if self._on_warning is not None:
                self._on_warning(error)
        else:
            self._fail(error)

    def _fail(self, error: BaseException) -> None:
        if self._error is None:
            logger.debug("Traversal of %s aborted: %r", self.root, error)
            self._error = error
        self._destroyed = True
        self._release()

    def _raise_error(self) -> List[Entry]:
        if self._error_raised:
            return []
        self._error_raised = True
        raise self._error

    def _finish(self) -> None:
        logger.debug("Traversal of %s finished", self.root)
        self._finished = True
        self._release()

    def _release(self) -> None:
        self._parents.clear()
        self._parent = None
