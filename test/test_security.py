"""
Tests for action nonces and file path validation
"""

import time
from pathlib import Path

import pytest

from meta_auditor.utils.security import NonceManager, validate_file_path


@pytest.fixture
def nonces() -> NonceManager:
    return NonceManager("test-secret")


class TestNonceManager:
    def test_valid_nonce(self, nonces):
        token = nonces.create("install_importer", 1)
        assert nonces.verify(token, "install_importer", 1) is True

    def test_nonce_is_consumed(self, nonces):
        token = nonces.create("install_importer", 1)
        assert nonces.verify(token, "install_importer", 1) is True
        assert nonces.verify(token, "install_importer", 1) is False

    def test_tokens_are_unique(self, nonces):
        assert nonces.create("install_importer", 1) != nonces.create("install_importer", 1)

    def test_wrong_action(self, nonces):
        token = nonces.create("install_importer", 1)
        assert nonces.verify(token, "other_action", 1) is False

    def test_failed_check_does_not_consume(self, nonces):
        token = nonces.create("install_importer", 1)
        assert nonces.verify(token, "install_importer", 2) is False
        assert nonces.verify(token, "install_importer", 1) is True

    def test_wrong_secret(self, nonces):
        token = NonceManager("another-secret").create("install_importer", 1)
        assert nonces.verify(token, "install_importer", 1) is False

    @pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
    def test_malformed_tokens(self, nonces, token):
        assert nonces.verify(token, "install_importer", 1) is False

    def test_expired(self):
        nonces = NonceManager("test-secret", lifetime=-1)
        token = nonces.create("install_importer", 1)
        assert nonces.verify(token, "install_importer", 1) is False

    def test_consumed_tokens_are_dropped_after_lifetime(self, monkeypatch):
        nonces = NonceManager("test-secret", lifetime=60)
        token = nonces.create("install_importer", 1)
        assert nonces.verify(token, "install_importer", 1) is True
        assert token in nonces._consumed

        later = time.time() + 120
        monkeypatch.setattr(time, "time", lambda: later)

        assert nonces.verify(token, "install_importer", 1) is False
        assert token not in nonces._consumed


class TestValidateFilePath:
    def test_relative_path_inside_base(self, tmp_path: Path):
        assert validate_file_path("plugin/readme.txt", tmp_path) == (tmp_path / "plugin" / "readme.txt").resolve()

    def test_parent_traversal(self, tmp_path: Path):
        with pytest.raises(ValueError):
            validate_file_path("../../etc/passwd", tmp_path)

    def test_absolute_path_outside(self, tmp_path: Path):
        with pytest.raises(ValueError):
            validate_file_path("/etc/passwd", tmp_path)
