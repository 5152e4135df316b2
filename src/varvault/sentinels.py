# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Markers for missing paths."""

from __future__ import annotations


class _AbsentType:
    """Type of ABSENT. Falsy, and never equal to a stored value."""

    __slots__ = ()
    _instance: _AbsentType | None = None

    def __new__(cls) -> _AbsentType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "ABSENT"


#: Returned by read operations when a path does not exist.
ABSENT = _AbsentType()

# Walk result for a missing path. Never leaves the store package.
_NOT_FOUND = object()
