import os
import sys
import socket
import stat
from types import SimpleNamespace
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest
from dirview.entry import EntryType
from dirview.exceptions import DirectoryReadError, MetadataError
from dirview.lister import list_directory, read_entry

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX only tests")


@pytest.fixture
def populated(tmp_path):
    (tmp_path / "docs").mkdir()
    (tmp_path / "notes.txt").write_text("hello")
    (tmp_path / ".hidden").write_text("")
    return tmp_path


def by_name(entries):
    return {entry.name: entry for entry in entries}


def test_lists_immediate_children(populated):
    (populated / "docs" / "nested.txt").write_text("not listed")

    entries = by_name(list_directory(str(populated)))

    assert set(entries) == {"docs", "notes.txt", ".hidden"}
    assert entries["docs"].type is EntryType.DIRECTORY
    assert entries["notes.txt"].type is EntryType.FILE
    assert entries["notes.txt"].size == 5
    assert entries["notes.txt"].path == os.path.join(str(populated), "notes.txt")


def test_uses_given_thread_pool(populated):
    with ThreadPoolExecutor(max_workers=2) as pool:
        entries = list_directory(str(populated), thread_pool=pool)
    assert len(entries) == 3


def test_empty_directory(tmp_path):
    assert list_directory(str(tmp_path)) == []


def test_missing_directory(tmp_path):
    missing = str(tmp_path / "nope")
    with pytest.raises(DirectoryReadError) as excinfo:
        list_directory(missing)
    assert excinfo.value.path == missing
    assert isinstance(excinfo.value.cause, FileNotFoundError)


def test_not_a_directory(populated):
    target = str(populated / "notes.txt")
    with pytest.raises(DirectoryReadError) as excinfo:
        list_directory(target)
    assert excinfo.value.path == target


@posix_only
def test_broken_symlink_fails_whole_listing(tmp_path):
    (tmp_path / "regular.txt").write_text("data")
    link = tmp_path / "dangling"
    os.symlink(str(tmp_path / "missing-target"), str(link))

    with pytest.raises(MetadataError) as excinfo:
        list_directory(str(tmp_path))
    assert excinfo.value.path == str(link)


@posix_only
def test_symlink_reported_as_symlink(populated):
    os.symlink(str(populated / "notes.txt"), str(populated / "shortcut"))
    entry = read_entry(str(populated), "shortcut")
    assert entry.type is EntryType.SYMLINK


@posix_only
def test_symlink_resolved_when_requested(populated):
    os.symlink(str(populated / "docs"), str(populated / "docs-link"))
    entries = by_name(list_directory(str(populated), resolve_symlinks=True))
    assert entries["docs-link"].type is EntryType.DIRECTORY


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="mkfifo not available")
def test_fifo(tmp_path):
    os.mkfifo(str(tmp_path / "pipe"))
    entries = by_name(list_directory(str(tmp_path)))
    assert entries["pipe"].type is EntryType.FIFO


@pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="AF_UNIX not available")
def test_socket(tmp_path):
    path = str(tmp_path / "s.sock")
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.bind(path)
        entries = by_name(list_directory(str(tmp_path)))
    finally:
        sock.close()
    assert entries["s.sock"].type is EntryType.SOCKET


def test_entry_removed_mid_scan(populated):
    real_lstat = os.lstat

    def flaky_lstat(path, *args, **kwargs):
        if path.endswith("notes.txt"):
            raise FileNotFoundError(2, "No such file or directory", path)
        return real_lstat(path, *args, **kwargs)

    with patch("dirview.lister.os.lstat", side_effect=flaky_lstat):
        with pytest.raises(MetadataError) as excinfo:
            list_directory(str(populated))
    assert excinfo.value.path == os.path.join(str(populated), "notes.txt")
    assert excinfo.value.code == 2


def fake_lstat_with_mtime(target, mtime):
    real_lstat = os.lstat

    def fake(path, *args, **kwargs):
        if path.endswith(target):
            return SimpleNamespace(st_mode=stat.S_IFREG | 0o644, st_size=1, st_mtime=mtime)
        return real_lstat(path, *args, **kwargs)

    return fake


def test_out_of_range_mtime_is_metadata_error(populated):
    with patch(
        "dirview.lister.os.lstat", side_effect=fake_lstat_with_mtime("notes.txt", 1e20)
    ):
        with pytest.raises(MetadataError) as excinfo:
            list_directory(str(populated))
    assert excinfo.value.path == os.path.join(str(populated), "notes.txt")
    assert isinstance(excinfo.value.cause, (OverflowError, ValueError))


def test_every_stat_is_joined_before_failing(populated):
    finished = []
    real_read_entry = read_entry

    def unexpected_failure(dirpath, name, resolve_symlinks=False):
        if name == "docs":
            raise RuntimeError("boom")
        entry = real_read_entry(dirpath, name, resolve_symlinks)
        finished.append(name)
        return entry

    with ThreadPoolExecutor(max_workers=1) as pool:
        with patch("dirview.lister.read_entry", side_effect=unexpected_failure):
            with pytest.raises(RuntimeError):
                list_directory(str(populated), thread_pool=pool)
        # Checked before the pool shuts down
        assert sorted(finished) == [".hidden", "notes.txt"]
