"""Tests for syncfile.utils.hashing module.

Validates descriptor hashing used by content comparison.
"""

import hashlib
import os

import pytest

from syncfile.utils import hashing
from syncfile.utils.hashing import contents_equal, hash_fd


@pytest.fixture
def open_fd():
    """Open files read-only and close them after the test."""
    fds = []

    def _open(path):
        fd = os.open(path, os.O_RDONLY)
        fds.append(fd)
        return fd

    yield _open
    for fd in fds:
        os.close(fd)


class TestHashFd:
    """Test hashing of open descriptors."""

    @pytest.mark.parametrize("algorithm,factory", [
        ("md5", hashlib.md5),
        ("sha256", hashlib.sha256),
    ])
    def test_matches_hashlib_digest(self, tmp_path, open_fd, algorithm, factory):
        payload = os.urandom(300 * 1024)
        f = tmp_path / "data.bin"
        f.write_bytes(payload)
        assert hash_fd(open_fd(f), algorithm) == factory(payload).hexdigest()

    def test_auto_without_xxhash_is_md5(self, tmp_path, open_fd, monkeypatch):
        f = tmp_path / "data.bin"
        f.write_bytes(b"fallback")
        monkeypatch.setattr(hashing, "XXHASH_AVAILABLE", False)
        assert hash_fd(open_fd(f)) == hashlib.md5(b"fallback").hexdigest()

    @pytest.mark.skipif(not hashing.XXHASH_AVAILABLE, reason="xxhash not installed")
    def test_auto_prefers_xxhash(self, tmp_path, open_fd):
        f = tmp_path / "data.bin"
        f.write_bytes(b"xx")
        assert hash_fd(open_fd(f)) == hashing.xxhash.xxh64(b"xx").hexdigest()

    def test_xxhash_missing_raises(self, tmp_path, open_fd, monkeypatch):
        f = tmp_path / "data.bin"
        f.write_bytes(b"xx")
        monkeypatch.setattr(hashing, "XXHASH_AVAILABLE", False)
        with pytest.raises(ImportError):
            hash_fd(open_fd(f), "xxhash")

    def test_unknown_algorithm_raises(self, tmp_path, open_fd):
        f = tmp_path / "data.bin"
        f.write_bytes(b"x")
        with pytest.raises(ValueError, match="Unknown algorithm"):
            hash_fd(open_fd(f), "bogus")

    def test_empty_file(self, tmp_path, open_fd):
        f = tmp_path / "empty"
        f.write_bytes(b"")
        assert hash_fd(open_fd(f), "sha256") == hashlib.sha256(b"").hexdigest()

    def test_ignores_current_position(self, tmp_path, open_fd):
        f = tmp_path / "data.bin"
        f.write_bytes(b"0123456789")
        fd = open_fd(f)
        first = hash_fd(fd)
        # Position is now at EOF; hashing again must still see everything
        assert hash_fd(fd) == first


class TestContentsEqual:

    def test_same_and_different(self, tmp_path, open_fd):
        a, b, c = tmp_path / "a", tmp_path / "b", tmp_path / "c"
        a.write_bytes(b"same")
        b.write_bytes(b"same")
        c.write_bytes(b"diff")
        assert contents_equal(open_fd(a), open_fd(b)) is True
        assert contents_equal(open_fd(a), open_fd(c)) is False
