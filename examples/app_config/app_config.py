# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""AppConfig - Example of a VarVault shared by unrelated components.

A didactic example: one vault is created at startup and passed to the
components that need it, instead of living in a module global.
"""

from __future__ import annotations

import logging

from varvault import VarVault, dump


class Database:
    """Reads its settings from the vault it is given."""

    def __init__(self, vault: VarVault) -> None:
        self.vault = vault

    def dsn(self) -> str:
        host = self.vault.get_item('config.db_host', 'localhost')
        user = self.vault.get_item('config.db_user', 'guest')
        return f"postgresql://{user}@{host}/{self.vault.get_item('config.db_name', 'app')}"


class Plugins:
    """Keeps its registry in the vault by reference, so it can append later."""

    def __init__(self, vault: VarVault) -> None:
        self.loaded: list[str] = []
        vault.set_by_ref('runtime.plugins', self.loaded)

    def load(self, name: str) -> None:
        self.loaded.append(name)


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    vault = VarVault({
        'config': {
            'db_host': 'db.internal',
            'db_user': 'app',
            'db_passwd': 'secret',
            'db_name': 'orders',
        },
    })
    # Settings fixed at startup
    vault.set_item('config', {'debug': False}, locked=True)

    db = Database(vault)
    plugins = Plugins(vault)
    plugins.load('audit')

    print(db.dsn())
    print(vault.set_item('config.debug', True))  # False, a warning is logged
    print(dump(vault))


if __name__ == '__main__':
    main()
