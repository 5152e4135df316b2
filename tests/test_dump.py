# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for varvault.dump."""

import threading

import pytest

from varvault import DEFAULT_REDACTED, InvalidPathError, VarVault, dump, redact, render


@pytest.fixture
def vault():
    return VarVault({
        'config': {
            'db_user': 'root',
            'db_passwd': 'secret',
            'db_host': 'db.local',
            'debug': True,
        },
        'app': {'name': 'demo'},
    })


class TestRedact:
    """Tests for redact()."""

    def test_default_paths(self, vault):
        """Test the database credentials are removed by default."""
        tree = redact(vault.snapshot())
        assert tree == {'config': {'debug': True}, 'app': {'name': 'demo'}}
        assert DEFAULT_REDACTED == (
            'config.db_user', 'config.db_passwd', 'config.db_host',
        )

    def test_source_untouched(self, vault):
        """Test redact works on a copy."""
        snap = vault.snapshot()
        redact(snap)
        assert snap['config']['db_passwd'] == 'secret'
        assert vault.get_item('config.db_passwd') == 'secret'

    def test_missing_paths_ignored(self):
        """Test missing or unreachable paths are skipped."""
        assert redact({'config': 'flat'}) == {'config': 'flat'}
        assert redact({}) == {}

    def test_custom_paths(self, vault):
        """Test custom paths, including whole branches."""
        tree = redact(vault.snapshot(), paths=['app', 'config.debug'])
        assert 'app' not in tree
        assert 'debug' not in tree['config']
        assert tree['config']['db_user'] == 'root'

    def test_invalid_path_raises(self):
        """Test an empty redaction path is rejected."""
        with pytest.raises(InvalidPathError):
            redact({}, paths=[''])


class TestRender:
    """Tests for render()."""

    def test_render_nested(self):
        """Test branches and leaves are indented."""
        text = render({'a': {'b': 1, 'c': 'x'}, 'd': [1, 2]})
        assert text == (
            "VarVault:\n"
            "  a:\n"
            "    b: 1\n"
            "    c: 'x'\n"
            "  d: [1, 2]"
        )

    def test_render_empty(self):
        """Test empty trees and branches."""
        assert render({}) == "VarVault:\n  (empty)"
        assert render({'a': {}}, title='T', indent=1) == "T:\n a:\n  (empty)"


class TestDump:
    """Tests for dump()."""

    def test_dump_text_redacted(self, vault):
        """Test the default dump is redacted text."""
        text = dump(vault)
        assert 'secret' not in text
        assert 'db_user' not in text
        assert 'debug: True' in text
        assert text.startswith('VarVault:')

    def test_dump_dict(self, vault):
        """Test as_text=False returns the redacted tree."""
        tree = dump(vault, as_text=False)
        assert tree == {'config': {'debug': True}, 'app': {'name': 'demo'}}

    def test_dump_unredacted(self, vault):
        """Test redact_secrets=False keeps every value."""
        tree = dump(vault, redact_secrets=False, as_text=False)
        assert tree == vault.snapshot()

    def test_dump_does_not_change_vault(self, vault):
        """Test the vault keeps its secrets after a dump."""
        dump(vault)
        assert vault.has('config.db_passwd')

    def test_dump_indent(self, vault):
        """Test indent is forwarded to the renderer."""
        text = dump(vault, indent=4)
        assert "\n    config:\n        debug: True" in text

    def test_dump_with_uncopyable_ref(self, vault):
        """Test a live object stored by reference does not break dump."""
        lock = threading.Lock()
        vault.set_by_ref('runtime.lock', lock)
        text = dump(vault)
        assert '  runtime:\n    lock: <' in text
        assert '_thread.lock' in text
        tree = dump(vault, as_text=False)
        assert tree['runtime']['lock'] is lock
