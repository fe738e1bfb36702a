"""Configuration system for readdirp.

This module defines how callers describe a traversal: which entry types they
want, how entries are filtered, how deep to recurse and how filesystem errors
are treated.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Union

from .errors import InvalidArgumentError, InvalidTypeError

# Effectively unbounded recursion depth.
DEFAULT_DEPTH = 2 ** 31

# Batch size used by the push and iteration modes unless overridden.
DEFAULT_HIGH_WATER_MARK = 4096

FilterSpec = Union[None, str, Sequence[str], Callable[[Any], bool]]


class EntryType(str, Enum):
    """Which kinds of entries a traversal emits."""
    FILES = "files"                           # Regular files (and links to files)
    DIRECTORIES = "directories"               # Directories only
    FILES_DIRECTORIES = "files_directories"   # Both of the above
    ALL = "all"                               # Also sockets, fifos, devices, ...

    @property
    def wants_files(self) -> bool:
        return self is not EntryType.DIRECTORIES

    @property
    def wants_directories(self) -> bool:
        return self is not EntryType.FILES

    @property
    def wants_everything(self) -> bool:
        return self is EntryType.ALL


class FilterEntryKey(str, Enum):
    """Entry attribute that glob filters are matched against."""
    BASENAME = "basename"   # Last portion of the path
    PATH = "path"           # Path relative to the root


ALL_TYPES = tuple(t.value for t in EntryType)


@dataclass
class ReaddirpOptions:
    """Complete configuration for one traversal.

    Plain strings are accepted for ``type`` and ``filter_entry_key``;
    ``validate()`` normalizes them to their enum members.
    """

    # Filtering
    file_filter: FilterSpec = None
    directory_filter: FilterSpec = None  # Rejected directories are not recursed into
    filter_entry_key: Union[str, FilterEntryKey] = FilterEntryKey.BASENAME

    # What to emit
    type: Union[str, EntryType] = EntryType.FILES

    # Metadata
    lstat: bool = False        # Use lstat() so symlinks are reported as links
    always_stat: bool = False  # Attach os.stat_result instead of os.DirEntry

    # Depth control
    depth: int = DEFAULT_DEPTH

    # Error handling
    suppress_normal_flow_error: bool = True

    # Backpressure
    high_water_mark: int = DEFAULT_HIGH_WATER_MARK

    @classmethod
    def from_kwargs(cls, options: Optional['ReaddirpOptions'] = None, **kwargs: Any) -> 'ReaddirpOptions':
        """Build options from an optional base object plus keyword overrides.

        Args:
            options: Base options (defaults are used if None)
            **kwargs: Field overrides

        Returns:
            A new, validated ReaddirpOptions

        Raises:
            InvalidArgumentError: On unknown keys or invalid values
        """
        if options is not None and not isinstance(options, cls):
            raise InvalidArgumentError(
                f"options must be a {cls.__name__} instance, got {type(options).__name__}"
            )
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown option(s): {', '.join(unknown)}")

        merged = replace(options, **kwargs) if options is not None else cls(**kwargs)
        merged.validate()
        return merged

    def validate(self) -> None:
        """Validate and normalize the configuration in place.

        Raises:
            InvalidTypeError: If ``type`` is not a recognized value
            InvalidArgumentError: For any other invalid field
        """
        try:
            self.type = EntryType(self.type)
        except ValueError:
            raise InvalidTypeError(
                f"Invalid type passed: {self.type!r}. Use one of {', '.join(ALL_TYPES)}"
            ) from None

        try:
            self.filter_entry_key = FilterEntryKey(self.filter_entry_key)
        except ValueError:
            raise InvalidArgumentError(
                f"filter_entry_key must be 'basename' or 'path', got {self.filter_entry_key!r}"
            ) from None

        errors = []
        if isinstance(self.depth, bool) or not isinstance(self.depth, int):
            errors.append("depth must be an integer")
        elif self.depth < 0:
            errors.append("depth cannot be negative")

        if isinstance(self.high_water_mark, bool) or not isinstance(self.high_water_mark, int):
            errors.append("high_water_mark must be an integer")
        elif self.high_water_mark <= 0:
            errors.append("high_water_mark must be positive")

        if errors:
            raise InvalidArgumentError(f"Invalid configuration: {', '.join(errors)}")
