"""Tests for syncfile.inspector module.

Validates descriptor-based metadata, missing/inaccessible classification,
and descriptor ownership.
"""

import errno
import os
import stat

import pytest

from syncfile import inspector
from syncfile.inspector import FileState, inspect

from conftest import OLD_TIME, make_file


class TestFileState:
    """Test FileState construction and derived properties."""

    def test_missing_is_zeroed(self):
        s = FileState.missing()
        assert s.exists is False
        assert s.accessible is True
        assert (s.mode, s.size, s.mtime_ns, s.uid, s.gid) == (0, 0, 0, 0, 0)

    def test_inaccessible(self):
        s = FileState.inaccessible()
        assert s.exists is False
        assert s.accessible is False

    def test_from_stat(self, tmp_path):
        f = make_file(tmp_path / "f", b"abc", mode=0o640, mtime=OLD_TIME)
        s = FileState.from_stat(os.stat(f))
        assert s.exists is True
        assert s.is_regular is True
        assert s.size == 3
        assert s.permissions == 0o640
        assert s.mtime == OLD_TIME

    def test_second_granularity(self):
        s = FileState(exists=True, mtime_ns=OLD_TIME * 1_000_000_000 + 999_999_999)
        assert s.mtime == OLD_TIME


class TestInspect:
    """Test inspect() against real filesystem objects."""

    def test_existing_file(self, tmp_path):
        f = make_file(tmp_path / "f", b"hello", mode=0o600)
        with inspect(f) as result:
            assert result.state.exists is True
            assert result.state.is_regular is True
            assert result.state.size == 5
            assert result.state.permissions == 0o600
            assert result.fd is not None
            # The handle is the inspected file
            assert os.fstat(result.fd).st_ino == os.stat(f).st_ino

    def test_missing_file(self, tmp_path):
        result = inspect(tmp_path / "nope")
        assert result.state.exists is False
        assert result.state.accessible is True
        assert result.fd is None

    def test_missing_parent_directory(self, tmp_path):
        result = inspect(tmp_path / "no" / "such" / "file")
        assert result.state.exists is False
        assert result.fd is None

    def test_path_under_regular_file(self, tmp_path):
        f = make_file(tmp_path / "f")
        result = inspect(f / "child")
        assert result.state.exists is False

    def test_directory_is_not_regular(self, tmp_path):
        d = tmp_path / "d"
        d.mkdir()
        with inspect(d) as result:
            assert result.state.exists is True
            assert result.state.is_regular is False
            assert result.writable is False

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs mkfifo")
    def test_fifo_does_not_block(self, tmp_path):
        fifo = tmp_path / "fifo"
        os.mkfifo(fifo)
        with inspect(fifo) as result:
            assert result.state.exists is True
            assert result.state.is_regular is False
            assert stat.S_ISFIFO(result.state.mode)

    def test_close_releases_descriptor(self, tmp_path):
        f = make_file(tmp_path / "f", b"x")
        result = inspect(f)
        fd = result.fd
        result.close()
        assert result.fd is None
        with pytest.raises(OSError):
            os.fstat(fd)
        # Closing twice is harmless
        result.close()

    def test_opened_read_write(self, tmp_path):
        f = make_file(tmp_path / "f", b"x", mode=0o644)
        with inspect(f) as result:
            assert result.writable is True

    @pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root ignores mode bits")
    def test_read_only_file_falls_back(self, tmp_path):
        f = make_file(tmp_path / "f", b"x", mode=0o444)
        with inspect(f) as result:
            assert result.state.exists is True
            assert result.writable is False


class TestInspectFailures:
    """Fault-injected open/fstat failures."""

    def test_permission_denied_is_inaccessible(self, tmp_path, monkeypatch):
        f = make_file(tmp_path / "f", b"secret")
        real_open = os.open

        def denying_open(path, flags, *args, **kwargs):
            if os.fspath(path) == os.fspath(f):
                raise PermissionError(errno.EACCES, "Permission denied", os.fspath(path))
            return real_open(path, flags, *args, **kwargs)

        monkeypatch.setattr(inspector.os, "open", denying_open)
        result = inspect(f)
        assert result.state.exists is False
        assert result.state.accessible is False
        assert result.fd is None

    def test_error_on_vanished_path_is_missing(self, tmp_path, monkeypatch):
        gone = tmp_path / "gone"

        def failing_open(path, flags, *args, **kwargs):
            raise OSError(errno.EIO, "I/O error", os.fspath(path))

        monkeypatch.setattr(inspector.os, "open", failing_open)
        result = inspect(gone)
        assert result.state.exists is False
        assert result.state.accessible is True

    def test_fstat_failure_degrades_to_missing(self, tmp_path, monkeypatch):
        f = make_file(tmp_path / "f", b"x")
        closed = []
        real_close = os.close

        def failing_fstat(fd):
            raise OSError(errno.EIO, "I/O error")

        def tracking_close(fd):
            closed.append(fd)
            real_close(fd)

        monkeypatch.setattr(inspector.os, "fstat", failing_fstat)
        monkeypatch.setattr(inspector.os, "close", tracking_close)
        result = inspect(f)
        assert result.state.exists is False
        assert result.fd is None
        assert len(closed) == 1
