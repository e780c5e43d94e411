import os

import pytest

from kindutil.kubeconfig.lock import lock_file, lock_name, locked, unlock_file


def _names(directory):
    return sorted(p.name for p in directory.iterdir())


def test_lock_name_appends_suffix():
    assert lock_name("/tmp/config") == "/tmp/config.lock"


def test_lock_creates_and_unlock_removes(tmp_path):
    target = str(tmp_path / "config")
    lock_file(target)
    assert os.path.isfile(lock_name(target))
    assert _names(tmp_path) == ["config.lock"]
    unlock_file(target)
    assert os.path.exists(lock_name(target)) is False
    assert _names(tmp_path) == []


def test_double_lock_fails(tmp_path):
    target = str(tmp_path / "config")
    lock_file(target)
    with pytest.raises(FileExistsError):
        lock_file(target)
    unlock_file(target)
    lock_file(target)
    assert os.path.exists(lock_name(target))


def test_lock_creates_missing_directory(tmp_path):
    target = str(tmp_path / "a" / "b" / "config")
    lock_file(target)
    assert os.path.isfile(lock_name(target))
    assert os.path.dirname(lock_name(target)) == str(tmp_path / "a" / "b")


def test_unlock_without_lock_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        unlock_file(str(tmp_path / "config"))


def test_locked_context_releases(tmp_path):
    target = str(tmp_path / "config")
    with locked(target):
        assert os.path.isfile(lock_name(target))
    assert os.path.exists(lock_name(target)) is False


def test_locked_context_releases_on_error(tmp_path):
    target = str(tmp_path / "config")
    with pytest.raises(RuntimeError, match="boom"):
        with locked(target):
            assert os.path.isfile(lock_name(target))
            raise RuntimeError("boom")
    assert os.path.exists(lock_name(target)) is False