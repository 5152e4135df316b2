# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""VarVault - Hierarchical variable store with dotted paths and locking.

A lightweight, zero-dependency library providing a shared registry of
values addressed by paths such as ``'db.host'``.
"""

__version__ = "0.1.0"

from .dump import DEFAULT_REDACTED, dump, redact, render
from .exceptions import (
    InvalidPathError,
    LockedPathError,
    PartialWriteError,
    StaleRefError,
    VaultError,
)
from .sentinels import ABSENT
from .store import VarVault, VaultRef, normalize_path

__all__ = [
    # Core classes
    "VarVault",
    "VaultRef",
    "ABSENT",
    "normalize_path",
    # Dump
    "DEFAULT_REDACTED",
    "dump",
    "redact",
    "render",
    # Exceptions
    "VaultError",
    "InvalidPathError",
    "LockedPathError",
    "PartialWriteError",
    "StaleRefError",
]
