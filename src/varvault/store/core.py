# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""VarVault - a hierarchical variable store with path locking.

This module provides the VarVault class, a registry of values addressed by
dotted paths. It is meant to be created once and handed to the code that
needs it, so unrelated call sites can share configuration and state without
a module-level singleton.

Key Features:
    - **Dotted paths**: 'db.host' walks a tree of nested dicts
    - **Autocreate**: writes create missing levels and turn leaves into branches
    - **Locking**: a locked path rejects writes and deletes on its whole subtree
    - **Copy semantics**: set_item stores copies, get_item returns copies
    - **Aliasing**: set_by_ref and get_ref share objects with the caller

Path Syntax:
    - Segments are separated by '.'
    - Whitespace and dots at both ends are ignored: ' .db.host. ' == 'db.host'
    - A path that is empty once trimmed is invalid

Errors:
    Rejected writes return False and log a warning on the module logger.
    With ``raise_on_error=True`` they raise InvalidPathError, LockedPathError
    or PartialWriteError instead.

Example:
    Basic usage::

        vault = VarVault()
        vault.set_item('db.host', 'localhost')
        vault.set_item('db', {'port': 5432, 'name': 'app'})

        print(vault.get_item('db.host'))  # 'localhost'
        print(vault.has('db.user'))       # False

        # Locking
        vault.set_item('db.host', 'remote', locked=True)
        vault.set_item('db.host', 'other')  # False, value unchanged
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, MutableMapping

from ..exceptions import (
    InvalidPathError,
    LockedPathError,
    PartialWriteError,
    VaultError,
)
from ..sentinels import ABSENT, _NOT_FOUND
from .paths import SEPARATOR, STRIP_CHARS, is_locked_by, join_path, trim_path
from .ref import VaultRef
from .values import copy_value

logger = logging.getLogger(__name__)


class VarVault:
    """A hierarchical variable store with locking.

    VarVault provides:
    - set_item(path, value, locked): Write with autocreate, merge for mappings
    - get_item(path) / vault[path]: Read a copy of a value
    - has(path) / path in vault: Key presence test
    - del_item(path): Remove a value and its subtree
    - set_by_ref(path, value) / get_ref(path): Aliasing access

    Attributes:
        raise_on_error: If True, rejected writes raise instead of returning False.

    Example:
        >>> vault = VarVault({'app': {'name': 'demo'}})
        >>> vault['app.name']
        'demo'
        >>> vault.set_item('app', 'x', locked=True)
        True
        >>> vault.set_item('app.name', 'other')
        False
    """

    __slots__ = ('_vars', '_locked', '_generation', 'raise_on_error')

    def __init__(
        self,
        source: Mapping[str, Any] | None = None,
        raise_on_error: bool = False,
    ) -> None:
        """Initialize a VarVault.

        Args:
            source: Optional initial data, written with set_item so nested
                mappings become branches.
            raise_on_error: If True, set_item, set_by_ref and del_item raise
                VaultError subclasses on failure. If False (default), they
                log a warning and return False.

        Example:
            >>> VarVault({'a': 1, 'b': {'c': 2}})
            >>> VarVault(raise_on_error=True)  # strict mode
        """
        self._vars: dict[str, Any] = {}
        self._locked: list[str] = []
        self._generation = 0
        self.raise_on_error = raise_on_error

        if source is not None:
            self._load_source(source)

    def _load_source(self, source: Mapping[str, Any]) -> None:
        """Load a mapping into this vault.

        Raises:
            TypeError: If source is not a mapping.
        """
        if not isinstance(source, Mapping):
            raise TypeError(
                f"source must be a mapping, not {type(source).__name__}"
            )
        for key, value in source.items():
            self.set_item(str(key), value)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        """Return string representation showing top-level keys."""
        return f"VarVault({list(self._vars.keys())})"

    def __len__(self) -> int:
        """Return the number of top-level keys."""
        return len(self._vars)

    def __iter__(self) -> Iterator[str]:
        """Iterate over top-level keys in insertion order."""
        return iter(list(self._vars))

    def __contains__(self, path: object) -> bool:
        """Check if a path exists. Same as has()."""
        return self.has(path)

    def __getitem__(self, path: str) -> Any:
        """Get a copy of the value at path.

        Raises:
            KeyError: If path is invalid or not found.
        """
        container, key = self._find_slot(path)
        return copy_value(container[key])

    def __setitem__(self, path: str, value: Any) -> None:
        """Set a value at path, raising on failure whatever raise_on_error says.

        Example:
            >>> vault['db.host'] = 'localhost'
        """
        self._set(path, value, locked=False)

    def __delitem__(self, path: str) -> None:
        """Delete the value at path, raising on failure."""
        self._del(path)

    # ==================== Internals ====================

    def _touch(self) -> int:
        """Advance the mutation generation, invalidating outstanding refs."""
        self._generation += 1
        return self._generation

    def _lock(self, path: str) -> None:
        if path not in self._locked:
            self._locked.append(path)
            logger.debug("Locked path '%s'", path)

    def _check_lock(self, path: str, action: str = 'override') -> None:
        """Raise LockedPathError if path is protected by the lock-set.

        Args:
            path: Trimmed path.
            action: 'override' or 'delete', selects the message.
        """
        lock = is_locked_by(path, self._locked)
        if lock is None:
            return
        if action == 'delete':
            message = f"Path '{path}' is locked and cannot be deleted"
        else:
            message = f"Cannot override locked path '{path}'"
        raise LockedPathError(path, lock, message)

    def _fail(self, exc: VaultError) -> bool:
        if self.raise_on_error:
            raise exc
        logger.warning("%s", exc)
        return False

    def _htraverse(
        self, path: str, autocreate: bool = False
    ) -> tuple[Mapping[str, Any] | None, str]:
        """Walk a trimmed path down to the container of its last segment.

        Args:
            path: Trimmed dotted path.
            autocreate: If True, missing levels and non-dict values met on
                the way are replaced by empty dicts.

        Returns:
            Tuple of (container, final_key). container is None when a level
            is missing and autocreate is False.
        """
        parts = path.split(SEPARATOR)
        current: Mapping[str, Any] = self._vars

        for part in parts[:-1]:
            child = current.get(part, _NOT_FOUND)
            if autocreate:
                if not isinstance(child, MutableMapping):
                    # Promote leaf to branch
                    child = {}
                    current[part] = child  # type: ignore[index]
            elif not isinstance(child, Mapping):
                return None, parts[-1]
            current = child

        return current, parts[-1]

    def _find_slot(self, path: Any) -> tuple[Mapping[str, Any], str]:
        """Return (container, key) of an existing path.

        Raises:
            KeyError: If path is invalid or not found.
        """
        try:
            trimmed = trim_path(path)
        except InvalidPathError as exc:
            raise KeyError(str(exc)) from None
        container, key = self._htraverse(trimmed)
        if container is None or key not in container:
            raise KeyError(f"Path '{trimmed}' not found")
        return container, key

    def _set(self, path: Any, value: Any, locked: bool) -> None:
        trimmed = trim_path(path)
        self._check_lock(trimmed, 'override')
        self._touch()

        if isinstance(value, Mapping):
            self._set_mapping(trimmed, value, locked)
            return

        if locked:
            self._lock(trimmed)
        container, key = self._htraverse(trimmed, autocreate=True)
        container[key] = copy_value(value)  # type: ignore[index]

    def _set_mapping(
        self, path: str, value: Mapping[Any, Any], locked: bool
    ) -> None:
        """Merge a mapping into the branch at path, key by key.

        Every child is attempted even after a rejection, so accepted values
        stay written when PartialWriteError is raised.
        """
        container, key = self._htraverse(path, autocreate=True)
        if not isinstance(container.get(key), MutableMapping):  # type: ignore[union-attr]
            container[key] = {}  # type: ignore[index]

        errors: list[VaultError] = []
        for child_key, child_value in value.items():
            if not str(child_key).strip(STRIP_CHARS):
                errors.append(InvalidPathError(f"Empty key under '{path}'"))
                continue
            try:
                self._set(join_path(path, child_key), child_value, locked=False)
            except PartialWriteError as exc:
                errors.extend(exc.errors)
            except VaultError as exc:
                errors.append(exc)

        if locked:
            self._lock(path)
        if errors:
            raise PartialWriteError(path, errors)

    def _set_by_ref(self, path: Any, value: Any, locked: bool) -> None:
        trimmed = trim_path(path)
        self._check_lock(trimmed, 'override')
        self._touch()
        if locked:
            self._lock(trimmed)
        container, key = self._htraverse(trimmed, autocreate=True)
        container[key] = value  # type: ignore[index]

    def _del(self, path: Any) -> None:
        trimmed = trim_path(path)
        self._check_lock(trimmed, 'delete')
        container, key = self._htraverse(trimmed)
        if isinstance(container, MutableMapping) and key in container:
            self._touch()
            del container[key]

    # ==================== Core API ====================

    def set_item(self, path: str, value: Any, locked: bool = False) -> bool:
        """Set a value at the given path, creating intermediate levels.

        A mapping value is merged: each of its keys is written with its own
        set_item call under path, and keys already stored under path are
        kept. Any other value is copied and replaces whatever is at
        path, scalar or subtree.

        Composite writes are best-effort. When some child paths are locked,
        the other children are still written and the call fails.

        Args:
            path: Dotted path (e.g., 'db.host').
            value: The value to store.
            locked: If True, lock path so later writes and deletes on it
                and below it are rejected. For a scalar the lock is taken
                before the write; for a mapping, after its children are written.

        Returns:
            True on success, False if the path was empty or locked (when
            raise_on_error is False).

        Example:
            >>> vault.set_item('db', {'host': 'localhost', 'port': 5432})
            True
            >>> vault.set_item('db.host', 'remote', locked=True)
            True
            >>> vault.set_item('db.host.name', 'x')
            False
        """
        try:
            self._set(path, value, locked)
        except VaultError as exc:
            return self._fail(exc)
        return True

    def get_item(self, path: str, default: Any = ABSENT) -> Any:
        """Get a copy of the value at the given path.

        Args:
            path: Dotted path.
            default: Returned when the path is invalid or not found.
                Defaults to ABSENT, which no stored value can equal.

        Returns:
            A copy of the stored value, or default. Values that cannot
                be copied, such as locks or open files, are returned as is.

        Example:
            >>> vault.set_item('debug', False)
            True
            >>> vault.get_item('debug')
            False
            >>> vault.get_item('missing')
            ABSENT
        """
        try:
            container, key = self._find_slot(path)
        except KeyError:
            return default
        return copy_value(container[key])

    def has(self, path: Any) -> bool:
        """Return True if the path exists, whatever its value.

        Never raises: an invalid path is simply not found.
        """
        try:
            self._find_slot(path)
        except KeyError:
            return False
        return True

    def del_item(self, path: str) -> bool:
        """Delete the value at path together with its subtree.

        Deleting a path that does not exist succeeds and changes nothing.

        Returns:
            True on success, False if the path was empty or locked (when
            raise_on_error is False).
        """
        try:
            self._del(path)
        except VaultError as exc:
            return self._fail(exc)
        return True

    def set_by_ref(self, path: str, value: Any, locked: bool = True) -> bool:
        """Store value itself at path, without copying or decomposing it.

        The vault and the caller then share the object: mutations made
        through either side are visible to the other. Unlike set_item,
        the path is locked by default, because a later set_item on a
        sub-path would write into the caller's object. Pass locked=False
        to allow that on purpose.

        Args:
            path: Dotted path.
            value: Object to share.
            locked: Lock path after storing. Default True.

        Returns:
            True on success, False if the path was empty or locked (when
            raise_on_error is False).

        Example:
            >>> servers = ['a']
            >>> vault.set_by_ref('servers', servers)
            True
            >>> servers.append('b')
            >>> vault.get_item('servers')
            ['a', 'b']
        """
        try:
            self._set_by_ref(path, value, locked)
        except VaultError as exc:
            return self._fail(exc)
        return True

    def get_ref(self, path: str) -> VaultRef | Any:
        """Get a live handle on the value at path.

        The handle is valid until the next set_item, set_by_ref or
        del_item on this vault, or until released. See VaultRef.

        Returns:
            A VaultRef, or ABSENT if the path is invalid or not found.
        """
        try:
            container, key = self._find_slot(path)
        except KeyError:
            return ABSENT
        return VaultRef(self, trim_path(path), container, key)  # type: ignore[arg-type]

    @contextmanager
    def borrow(self, path: str) -> Iterator[VaultRef]:
        """Context manager yielding a VaultRef released on exit.

        Raises:
            KeyError: If path is invalid or not found.

        Example:
            >>> with vault.borrow('servers') as ref:
            ...     ref.value.append('c')
        """
        ref = self.get_ref(path)
        if ref is ABSENT:
            raise KeyError(f"Path '{path}' not found")
        try:
            yield ref
        finally:
            ref.release()

    # ==================== Locks ====================

    def is_locked(self, path: Any) -> bool:
        """Return True if path or one of its ancestors is locked.

        Matching is segment exact: locking 'a' does not lock 'ab'.
        An invalid path is never locked.
        """
        try:
            trimmed = trim_path(path)
        except InvalidPathError:
            return False
        return is_locked_by(trimmed, self._locked) is not None

    @property
    def locked_paths(self) -> tuple[str, ...]:
        """Locked paths in the order they were locked."""
        return tuple(self._locked)

    # ==================== Reading the whole tree ====================

    def snapshot(self) -> dict[str, Any]:
        """Return a copy of the whole tree as nested dicts.

        Leaves that cannot be copied are shared with the vault.
        """
        return copy_value(self._vars)

    def walk(self) -> Iterator[tuple[str, Any]]:
        """Yield (path, value) for every node, depth first in insertion order.

        Branches are yielded before their children. Values come from a
        snapshot, so mutating them does not touch the vault.

        Example:
            >>> for path, value in vault.walk():
            ...     print(path, value)
        """
        def _walk_gen(tree: Mapping[str, Any], prefix: str) -> Iterator[tuple[str, Any]]:
            for key, value in tree.items():
                path = join_path(prefix, key) if prefix else str(key)
                yield path, value
                if isinstance(value, Mapping):
                    yield from _walk_gen(value, path)

        return _walk_gen(self.snapshot(), '')
