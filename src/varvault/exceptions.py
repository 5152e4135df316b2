# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""VarVault exceptions."""

from __future__ import annotations


class VaultError(Exception):
    """Base exception for VarVault errors."""

    pass


class InvalidPathError(VaultError, ValueError):
    """Raised when a path is empty after trimming whitespace and dots."""

    pass


class LockedPathError(VaultError):
    """Raised when a write or delete targets a locked path.

    Attributes:
        path: The normalized path that was rejected.
        lock: The lock-set entry that protects it.
    """

    def __init__(self, path: str, lock: str, message: str | None = None) -> None:
        self.path = path
        self.lock = lock
        super().__init__(message or f"Path '{path}' is locked by '{lock}'")


class StaleRefError(VaultError):
    """Raised when a VaultRef is used after release or after the vault changed."""

    pass


class PartialWriteError(VaultError):
    """Raised when some values of a composite write were rejected.

    The accepted values stay written: composite writes are best-effort,
    not transactional.

    Attributes:
        path: The path of the composite write.
        errors: The errors of the rejected child writes.
    """

    def __init__(self, path: str, errors: list[VaultError]) -> None:
        self.path = path
        self.errors = errors
        rejected = ', '.join(
            f"'{getattr(e, 'path', '?')}'" for e in errors
        )
        super().__init__(
            f"Composite write to '{path}' rejected {len(errors)} value(s): {rejected}"
        )
