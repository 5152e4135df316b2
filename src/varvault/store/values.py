# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Copying of stored values.

Plain containers (dict, list, tuple, set, frozenset) are rebuilt level by
level. Any other value is deep copied, and a value that cannot be copied
(locks, sockets, open files, generators) is kept as the same object.

Example:
    >>> lock = threading.Lock()
    >>> copied = copy_value({'lock': lock, 'hosts': ['a']})
    >>> copied['lock'] is lock
    True
"""

from __future__ import annotations

import copy
from typing import Any


def copy_value(value: Any, memo: dict[int, Any] | None = None) -> Any:
    """Return a copy of value, sharing only the leaves that cannot be copied.

    Args:
        value: Any value.
        memo: Copies already made, keyed by id(). Keeps shared and
            recursive references shared in the copy.
    """
    if memo is None:
        memo = {}
    ident = id(value)
    if ident in memo:
        return memo[ident]

    kind = type(value)
    if kind is dict:
        result: Any = {}
        memo[ident] = result
        for key, item in value.items():
            result[key] = copy_value(item, memo)
        return result
    if kind is list:
        result = []
        memo[ident] = result
        result.extend(copy_value(item, memo) for item in value)
        return result
    if kind is tuple:
        return tuple(copy_value(item, memo) for item in value)
    if kind is set or kind is frozenset:
        return kind(copy_value(item, memo) for item in value)

    try:
        result = copy.deepcopy(value, memo)
    except (TypeError, copy.Error):
        # Not copyable: share it.
        result = value
    memo[ident] = result
    return result
