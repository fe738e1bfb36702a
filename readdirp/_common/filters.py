"""Filter compilation for readdirp.

A filter spec (callable, glob string or list of glob strings) is compiled once
into a single predicate over an entry. Compiled predicates hold no state and
can be shared between traversals.
"""

import os
import re
from fnmatch import fnmatchcase
from typing import Any, Callable, List, Union

from .config import FilterEntryKey, FilterSpec
from .errors import InvalidFilterError

Predicate = Callable[[Any], bool]
Matcher = Callable[[str], bool]

BANG = '!'

_SEPARATORS = re.compile(r'[\\/]' if os.altsep or os.sep == '\\' else r'/')
_WILDCARD_START = ('*', '?', '[')


def _accept_all(entry: Any) -> bool:
    return True


def compile_glob(pattern: str) -> Matcher:
    """Compile one glob pattern into a single-string matcher.

    Matching is case-sensitive and segment-wise: a wildcard never crosses a
    path separator and the value must have as many segments as the pattern.
    Wildcards do not match a leading dot unless the pattern segment starts
    with one. There is no globstar; ``**`` behaves like ``*``.

    Args:
        pattern: Glob pattern such as ``*.py`` or ``src/*.txt``

    Returns:
        Callable taking a string and returning whether it matches
    """
    segments = _SEPARATORS.split(pattern)

    def match(value: str) -> bool:
        parts = _SEPARATORS.split(value)
        if len(parts) != len(segments):
            return False
        for part, segment in zip(parts, segments):
            if part.startswith('.') and segment.startswith(_WILDCARD_START):
                return False
            if not fnmatchcase(part, segment):
                return False
        return True

    return match


def _key_predicate(matchers: List[Matcher], key: str) -> Predicate:
    def predicate(entry: Any) -> bool:
        value = getattr(entry, key)
        return any(m(value) for m in matchers)
    return predicate


def compile_filter(spec: FilterSpec, key: Union[str, FilterEntryKey] = FilterEntryKey.BASENAME) -> Predicate:
    """Compile a filter spec into a predicate over entries.

    Args:
        spec: None (accept everything), a callable taking the entry, a glob
              string, or a list/tuple of glob strings. Patterns starting
              with ``!`` are negated.
        key: Entry attribute globs are matched against (``basename`` or ``path``)

    Returns:
        Predicate taking an entry and returning True to keep it

    Raises:
        InvalidFilterError: If spec has any other shape
    """
    key = FilterEntryKey(key).value

    if spec is None:
        return _accept_all

    if callable(spec):
        return spec

    if isinstance(spec, str):
        trimmed = spec.strip()
        if not trimmed.startswith(BANG):
            glob = compile_glob(trimmed)
            return lambda entry: glob(getattr(entry, key))
        spec = [trimmed]

    if not isinstance(spec, (list, tuple)) or not all(isinstance(item, str) for item in spec):
        raise InvalidFilterError(
            "Filter only supports a callable, a glob string and a list of glob strings"
        )

    positive: List[Matcher] = []
    negative: List[Matcher] = []
    for item in spec:
        trimmed = item.strip()
        if trimmed.startswith(BANG):
            negative.append(compile_glob(trimmed[1:]))
        else:
            positive.append(compile_glob(trimmed))

    matches_positive = _key_predicate(positive, key)
    matches_negative = _key_predicate(negative, key)

    if negative:
        if positive:
            return lambda entry: matches_positive(entry) and not matches_negative(entry)
        return lambda entry: not matches_negative(entry)
    return matches_positive
