import os
from pathlib import Path

from nite.paths import file_exists, get_absolute_path, normalize_path


def test_absolute_path_joins_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = get_absolute_path("child.txt")
    assert os.path.isabs(result)
    assert Path(result) == Path.cwd() / "child.txt"


def test_absolute_path_leaves_absolute_unchanged(tmp_path):
    assert get_absolute_path(tmp_path) == str(tmp_path)


def test_normalize_removes_dot_segments():
    assert normalize_path(os.path.join("a", ".", "b", "..", "c")) == os.path.join("a", "c")


def test_normalize_keeps_trailing_separator():
    assert normalize_path("a" + os.sep + "b" + os.sep) == os.path.join("a", "b") + os.sep


def test_normalize_empty_stays_empty():
    assert normalize_path("") == ""


def test_normalize_is_idempotent():
    once = normalize_path(os.path.join("x", "..", "y", "z"))
    assert normalize_path(once) == once


def test_file_exists(tmp_path):
    present = tmp_path / "here.txt"
    present.write_text("data")
    assert file_exists(present) is True
    assert file_exists(str(present)) is True
    assert file_exists(tmp_path / "gone.txt") is False


def test_file_exists_for_directory(tmp_path):
    assert file_exists(tmp_path) is True