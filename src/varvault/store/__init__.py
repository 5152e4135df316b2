# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store package - the VarVault container.

The package is organized into:
- core: VarVault class with path traversal, locking and access
- paths: Path trimming, splitting and lock-prefix matching
- ref: VaultRef aliasing handle
- values: Copying of stored values

Example:
    >>> from varvault import VarVault
    >>> vault = VarVault()
    >>> vault.set_item('config.name', 'MyApp')
    True
    >>> vault['config.name']
    'MyApp'
"""

from .core import VarVault
from .paths import normalize_path
from .ref import VaultRef

__all__ = ["VarVault", "VaultRef", "normalize_path"]
