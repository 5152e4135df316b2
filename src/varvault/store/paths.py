# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Dotted path utilities.

A path is a string such as ``'db.host'``. Whitespace and dots at both ends
are ignored, so ``' .db.host. '`` addresses the same node as ``'db.host'``.
Inner segments are kept verbatim but must not be empty: 'a..b' is invalid.

Example:
    >>> normalize_path(' db.host. ')
    ('db', 'host')
    >>> is_locked_by('db.host', ['db'])
    'db'
    >>> is_locked_by('dbx', ['db']) is None
    True
"""

from __future__ import annotations

from typing import Any, Iterable

from ..exceptions import InvalidPathError

SEPARATOR = '.'
STRIP_CHARS = ' \n\r\t' + SEPARATOR


def trim_path(path: Any) -> str:
    """Return the path with whitespace and separators stripped from both ends.

    Raises:
        InvalidPathError: If path is not a string, is empty once trimmed,
            or has an empty inner segment.
    """
    if not isinstance(path, str):
        raise InvalidPathError(
            f"path must be str, not {type(path).__name__}"
        )
    trimmed = path.strip(STRIP_CHARS)
    if not trimmed:
        raise InvalidPathError(f"Empty path: {path!r}")
    if SEPARATOR * 2 in trimmed:
        raise InvalidPathError(f"Empty segment in path: {path!r}")
    return trimmed


def normalize_path(path: Any) -> tuple[str, ...]:
    """Split a path into its segments.

    Args:
        path: Dotted path string.

    Returns:
        Tuple of one or more segments.

    Raises:
        InvalidPathError: If the path is empty after trimming or has an
            empty segment.
    """
    return tuple(trim_path(path).split(SEPARATOR))


def join_path(*parts: Any) -> str:
    """Join path parts with the separator."""
    return SEPARATOR.join(str(p) for p in parts)


def is_locked_by(path: str, locks: Iterable[str]) -> str | None:
    """Return the first lock entry protecting path, or None.

    The test is segment exact: 'a' protects 'a' and 'a.b' but not 'ab'.

    Args:
        path: A trimmed path string.
        locks: Trimmed lock entries.
    """
    candidate = path + SEPARATOR
    for lock in locks:
        if candidate.startswith(lock + SEPARATOR):
            return lock
    return None
