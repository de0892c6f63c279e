from __future__ import annotations

from pathlib import Path

import pytest

from photogames.backend.models.photo import Photo, PhotoLibrary


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_bytes(b"\x89PNG fake")


def test_builtin_set() -> None:
    library = PhotoLibrary.builtin()
    assert len(library) == 9
    assert library.ids == list(range(9))
    assert library.get(0).label == "Beach"
    assert all(photo.src is None for photo in library)


def test_from_directory_sorts_and_filters(tmp_path: Path) -> None:
    _touch(tmp_path, "b_beach_day.PNG", "a-garden.jpg", "notes.txt")
    (tmp_path / "nested.png").mkdir()

    library = PhotoLibrary.from_directory(tmp_path)
    assert [p.label for p in library] == ["a garden", "b beach day"]
    assert library[0].glyph == "A"
    assert library[0].src == tmp_path / "a-garden.jpg"
    assert library.ids == [0, 1]


def test_from_directory_errors(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="not found"):
        PhotoLibrary.from_directory(tmp_path / "missing")
    _touch(tmp_path, "readme.md")
    with pytest.raises(ValueError, match="No images"):
        PhotoLibrary.from_directory(tmp_path)


def test_from_files_validates_each_path(tmp_path: Path) -> None:
    _touch(tmp_path, "cat.gif")
    assert len(PhotoLibrary.from_files([tmp_path / "cat.gif"])) == 1
    with pytest.raises(ValueError):
        PhotoLibrary.from_files([tmp_path / "dog.gif"])
    with pytest.raises(ValueError):
        PhotoLibrary.from_files([tmp_path / "cat.txt"])
    with pytest.raises(ValueError):
        PhotoLibrary.from_files([])


def test_lookup_and_requirements() -> None:
    library = PhotoLibrary.builtin()
    with pytest.raises(ValueError):
        library.get(99)
    library.require(9, "Test")
    with pytest.raises(ValueError, match="at least 10"):
        library.require(10, "Test")


def test_duplicate_ids_rejected() -> None:
    with pytest.raises(ValueError):
        PhotoLibrary([Photo(1, "One", "1"), Photo(1, "Uno", "1")])
