"""High-level async API for readdirp.

This module provides the ``readdirp()`` entry point and a few user-friendly
coroutines for common one-shot uses.
"""

import os
from collections.abc import Mapping
from typing import Any, List, Optional, Union

from .._common.config import ReaddirpOptions
from .._common.errors import InvalidArgumentError
from .core.entry import Entry
from .error_policies import ErrorPolicy
from .stream import ReaddirpStream

USAGE = "Usage: readdirp(root, options)"

PathArg = Union[str, os.PathLike]


def _check_root(root: Any) -> str:
    """Validate the root argument and return it as a str path."""
    if isinstance(root, Mapping):
        raise InvalidArgumentError(
            f"readdirp: root must be passed as the first argument, not inside options. {USAGE}"
        )
    if root is None:
        raise InvalidArgumentError(f"readdirp: root argument is required. {USAGE}")
    if not isinstance(root, (str, os.PathLike)):
        raise InvalidArgumentError(f"readdirp: root argument must be a string. {USAGE}")

    root = os.fspath(root)
    if not isinstance(root, str):
        raise InvalidArgumentError(f"readdirp: root argument must be a string. {USAGE}")
    if not root:
        raise InvalidArgumentError(f"readdirp: root argument is required. {USAGE}")
    return root


def readdirp(
    root: PathArg,
    options: Optional[ReaddirpOptions] = None,
    *,
    error_policy: Optional[ErrorPolicy] = None,
    **kwargs: Any
) -> ReaddirpStream:
    """Start a lazy recursive listing of ``root``.

    Nothing is read until the returned stream is consumed. All argument
    checks happen here, before any I/O.

    Args:
        root: Directory to walk
        options: Base configuration; keyword arguments override its fields
        error_policy: Explicit error policy instead of the one implied by
                      ``suppress_normal_flow_error``
        **kwargs: ReaddirpOptions fields (file_filter, directory_filter,
                  filter_entry_key, type, lstat, depth, always_stat,
                  suppress_normal_flow_error, high_water_mark)

    Returns:
        ReaddirpStream over the traversal

    Raises:
        InvalidArgumentError: Missing/invalid root or option
        InvalidTypeError: Unknown ``type``
        InvalidFilterError: Filter of an unsupported shape

    Example:
        >>> async for entry in readdirp('src', file_filter='*.py'):
        ...     print(entry.path)
    """
    root = _check_root(root)
    merged = ReaddirpOptions.from_kwargs(options, **kwargs)
    return ReaddirpStream(root, merged, error_policy=error_policy)


async def collect_entries(root: PathArg, **kwargs: Any) -> List[Entry]:
    """Walk ``root`` and return every entry.

    Args:
        root: Directory to walk
        **kwargs: Options, as for readdirp()

    Returns:
        List of entries in emission order
    """
    return await readdirp(root, **kwargs)


async def collect_paths(root: PathArg, **kwargs: Any) -> List[str]:
    """Walk ``root`` and return the root-relative path of every entry."""
    entries = await readdirp(root, **kwargs)
    return [entry.path for entry in entries]
