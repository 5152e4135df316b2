# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""VaultRef - a bounded aliasing handle into a VarVault.

A VaultRef gives direct access to a stored object, so callers can mutate
nested structures without another ``set_item`` round-trip. It is an escape
hatch, not a normal read:

- ``ref.value`` is the stored object itself, not a copy.
- ``ref.value = x`` rebinds the slot in the tree, without copying ``x``.
- The handle dies on the next mutating vault operation or on ``release()``.
  Any later use raises StaleRefError.

Example:
    >>> vault.set_item('db', {'hosts': ['a']})
    >>> with vault.borrow('db.hosts') as ref:
    ...     ref.value.append('b')
    >>> vault.get_item('db.hosts')
    ['a', 'b']
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from ..exceptions import StaleRefError

if TYPE_CHECKING:
    from .core import VarVault


class VaultRef:
    """Live handle on one slot of a VarVault tree.

    Attributes:
        path: Normalized path of the slot.
    """

    __slots__ = ('path', '_vault', '_container', '_key', '_generation')

    def __init__(
        self,
        vault: VarVault,
        path: str,
        container: dict[str, Any],
        key: str,
    ) -> None:
        self.path = path
        self._vault = vault
        self._container = container
        self._key = key
        self._generation: int | None = vault._generation

    def __repr__(self) -> str:
        state = 'live' if self.alive else 'stale'
        return f"VaultRef({self.path!r}, {state})"

    @property
    def alive(self) -> bool:
        """True while the handle may still be used."""
        return self._generation == self._vault._generation

    def _check(self) -> None:
        if self._generation is None:
            raise StaleRefError(f"Reference to '{self.path}' was released")
        if not self.alive:
            raise StaleRefError(
                f"Reference to '{self.path}' is stale: the vault changed after it was taken"
            )

    @property
    def value(self) -> Any:
        """The stored object, shared with the tree."""
        self._check()
        return self._container[self._key]

    @value.setter
    def value(self, new_value: Any) -> None:
        self._check()
        self._vault._check_lock(self.path, 'override')
        self._container[self._key] = new_value
        # Invalidate other handles, this one stays usable.
        self._generation = self._vault._touch()

    def release(self) -> None:
        """End the handle's lifetime."""
        self._generation = None
