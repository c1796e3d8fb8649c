from __future__ import annotations

from pathlib import Path

import pytest

from styled_markdown.constants import MAX_FILE_SIZE_ENV_VAR
from styled_markdown.exceptions import FilesystemError, NotADirectory, ReadFailure
from styled_markdown.filesystem import (
    get_max_file_size,
    list_markdown_files,
    list_subdirectories,
    load_markdown_file,
)


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_text("# x\n", encoding="utf-8")


def test_list_markdown_files_filters_and_sorts(tmp_path: Path):
    _touch(tmp_path, "b.md", "a.MD", "notes.txt")

    assert list_markdown_files(tmp_path) == ["a.MD", "b.md"]


def test_list_markdown_files_accepts_markdown_extension(tmp_path: Path):
    _touch(tmp_path, "guide.markdown", "README.Markdown", "archive.md.bak", ".md")

    assert list_markdown_files(tmp_path) == ["README.Markdown", "guide.markdown"]


def test_list_markdown_files_skips_directories(tmp_path: Path):
    (tmp_path / "folder.md").mkdir()
    _touch(tmp_path, "real.md")

    assert list_markdown_files(tmp_path) == ["real.md"]


def test_list_subdirectories_sorted(tmp_path: Path):
    for name in ("zeta", "Alpha", "beta"):
        (tmp_path / name).mkdir()
    _touch(tmp_path, "file.md")

    assert list_subdirectories(tmp_path) == ["Alpha", "beta", "zeta"]


def test_empty_directory(tmp_path: Path):
    assert list_markdown_files(tmp_path) == []
    assert list_subdirectories(tmp_path) == []


@pytest.mark.parametrize("lister", [list_markdown_files, list_subdirectories])
def test_listing_a_file_raises_not_a_directory(tmp_path: Path, lister):
    path = tmp_path / "file.md"
    _touch(tmp_path, "file.md")

    with pytest.raises(NotADirectory, match="is not a directory"):
        lister(path)


@pytest.mark.parametrize("lister", [list_markdown_files, list_subdirectories])
def test_listing_missing_path_raises_not_a_directory(tmp_path: Path, lister):
    with pytest.raises(NotADirectory):
        lister(tmp_path / "missing")


@pytest.mark.parametrize("lister", [list_markdown_files, list_subdirectories])
def test_enumeration_failure_raises_read_failure(tmp_path: Path, monkeypatch, lister):
    def refuse(self):
        raise PermissionError("permission denied")

    monkeypatch.setattr(Path, "iterdir", refuse)

    with pytest.raises(ReadFailure, match="permission denied"):
        lister(tmp_path)


def test_load_markdown_file(tmp_path: Path):
    path = tmp_path / "doc.md"
    path.write_text("# Title\n\nbody ✓\n", encoding="utf-8")

    assert load_markdown_file(path) == "# Title\n\nbody ✓\n"


def test_load_missing_file_raises_read_failure(tmp_path: Path):
    path = tmp_path / "missing.md"

    with pytest.raises(ReadFailure) as excinfo:
        load_markdown_file(path)

    assert str(path) in str(excinfo.value)
    assert "No such file" in str(excinfo.value)
    assert isinstance(excinfo.value, FilesystemError)
    assert isinstance(excinfo.value, OSError)


def test_load_directory_raises_read_failure(tmp_path: Path):
    with pytest.raises(ReadFailure):
        load_markdown_file(tmp_path)


def test_load_invalid_utf8_raises_read_failure(tmp_path: Path):
    path = tmp_path / "binary.md"
    path.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(ReadFailure, match="invalid UTF-8"):
        load_markdown_file(path)


def test_load_enforces_size_limit(tmp_path: Path):
    path = tmp_path / "big.md"
    path.write_text("0123456789", encoding="utf-8")

    with pytest.raises(ReadFailure, match="maximum allowed size of 4 bytes"):
        load_markdown_file(path, max_file_size=4)


def test_environment_overrides_size_limit(tmp_path: Path, monkeypatch):
    path = tmp_path / "big.md"
    path.write_text("0123456789", encoding="utf-8")
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "2")

    with pytest.raises(ReadFailure, match="maximum allowed size of 2 bytes"):
        load_markdown_file(path, max_file_size=1000)


def test_invalid_environment_size_raises_read_failure(tmp_path: Path, monkeypatch):
    path = tmp_path / "doc.md"
    path.write_text("x", encoding="utf-8")
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "lots")

    with pytest.raises(ReadFailure, match="expected positive integer"):
        load_markdown_file(path)


def test_get_max_file_size(monkeypatch):
    monkeypatch.delenv(MAX_FILE_SIZE_ENV_VAR, raising=False)
    assert get_max_file_size(default=123) == 123

    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "456")
    assert get_max_file_size(default=123) == 456

    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "0")
    with pytest.raises(ValueError, match="must be a positive integer"):
        get_max_file_size()
