# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Dump a VarVault for display, with secrets removed.

Redaction is a display policy and works on snapshots only; the vault itself
never hides anything.

Example:
    >>> vault = VarVault({'config': {'db_user': 'root', 'debug': True}})
    >>> print(dump(vault))
    VarVault:
      config:
        debug: True
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, MutableMapping, TYPE_CHECKING

from .store.paths import normalize_path
from .store.values import copy_value

if TYPE_CHECKING:
    from .store import VarVault

#: Paths removed by default before display.
DEFAULT_REDACTED: tuple[str, ...] = (
    'config.db_user',
    'config.db_passwd',
    'config.db_host',
)


def redact(
    tree: Mapping[str, Any], paths: Iterable[str] = DEFAULT_REDACTED
) -> dict[str, Any]:
    """Return a deep copy of tree without the given paths.

    Paths that do not exist are ignored.

    Args:
        tree: Nested mapping, usually VarVault.snapshot().
        paths: Dotted paths to remove.
    """
    result = copy_value(dict(tree))
    for path in paths:
        *parents, last = normalize_path(path)
        node: Any = result
        for segment in parents:
            node = node.get(segment) if isinstance(node, Mapping) else None
        if isinstance(node, MutableMapping):
            node.pop(last, None)
    return result


def render(tree: Mapping[str, Any], title: str = 'VarVault', indent: int = 2) -> str:
    """Render a nested mapping as indented text.

    Leaves are rendered as ``key: repr(value)``, branches as ``key:``
    followed by their children one level deeper.
    """
    lines = [f"{title}:"]

    def _render(node: Mapping[str, Any], depth: int) -> None:
        pad = ' ' * (indent * depth)
        if not node:
            lines.append(f"{pad}(empty)")
            return
        for key, value in node.items():
            if isinstance(value, Mapping):
                lines.append(f"{pad}{key}:")
                _render(value, depth + 1)
            else:
                lines.append(f"{pad}{key}: {value!r}")

    _render(tree, 1)
    return '\n'.join(lines)


def dump(
    vault: VarVault,
    redact_secrets: bool = True,
    as_text: bool = True,
    paths: Iterable[str] = DEFAULT_REDACTED,
    title: str = 'VarVault',
    indent: int = 2,
) -> str | dict[str, Any]:
    """Take a snapshot of vault, optionally redacted.

    Args:
        vault: The vault to dump.
        redact_secrets: If True (default), remove paths before output.
        as_text: If True (default), return rendered text, else the dict.
        paths: Paths to remove when redacting.
        title: First line of the rendered text.
        indent: Spaces per nesting level in the rendered text.
    """
    tree = vault.snapshot()
    if redact_secrets:
        tree = redact(tree, paths)
    if as_text:
        return render(tree, title=title, indent=indent)
    return tree
