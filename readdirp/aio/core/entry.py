"""Entry records produced by a traversal.

An Entry pairs a raw directory-listing record with its parent path. It carries
exactly one kind of metadata, chosen once per traversal: the ``os.DirEntry``
from the listing, or an ``os.stat_result``.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class InfoKind(Enum):
    """Discriminant for the metadata attached to an Entry."""
    DIRENT = "dirent"   # os.DirEntry from os.scandir
    STATS = "stats"     # os.stat_result from os.stat / os.lstat


class EntryKind(Enum):
    """Resolved type of an entry."""
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"     # Socket, fifo, device, or a link to one
    NONE = "none"       # Could not be resolved; never emitted nor expanded


@dataclass(frozen=True)
class Entry:
    """A single filesystem entry emitted by a traversal.

    Attributes:
        basename: Name of the entry within its parent
        path: Path relative to the traversal root
        full_path: Absolute path of the entry
        info: os.DirEntry or os.stat_result, depending on ``info_kind``
        info_kind: Which metadata variant ``info`` holds
    """

    basename: str
    path: str
    full_path: str
    info: Union[os.DirEntry, os.stat_result] = field(repr=False, compare=False)
    info_kind: InfoKind = InfoKind.DIRENT

    @property
    def dirent(self) -> Optional[os.DirEntry]:
        """The listing record, or None when the traversal attaches stats."""
        return self.info if self.info_kind is InfoKind.DIRENT else None

    @property
    def stats(self) -> Optional[os.stat_result]:
        """The stat result, or None when the traversal attaches dirents."""
        return self.info if self.info_kind is InfoKind.STATS else None


@dataclass
class PendingDirectory:
    """A directory discovered but not yet fully processed.

    ``records`` stays None until the directory has been listed; the engine
    then consumes it from the front until it is empty.
    """

    full_path: str
    path: str
    depth: int
    records: Optional[List[os.DirEntry]] = None

    @property
    def exhausted(self) -> bool:
        return self.records is not None and not self.records
