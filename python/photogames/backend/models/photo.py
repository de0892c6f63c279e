"""Photo sources consumed by the games."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

IMAGE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp"})


@dataclass(frozen=True)
class Photo:
    """A single photo: stable id, display label and optional image file."""

    id: int
    label: str
    glyph: str
    src: Path | None = None


# Stand-ins used when no photo directory is configured.  Terminal
# frontends show the glyph; the GUI draws a coloured tile with the label.
_BUILTIN: list[tuple[str, str]] = [
    ("Beach", "\U0001f3d6"),
    ("Birthday", "\U0001f382"),
    ("Garden", "\U0001f33b"),
    ("Puppy", "\U0001f436"),
    ("Snowman", "⛄"),
    ("Balloons", "\U0001f388"),
    ("Camping", "⛺"),
    ("Picnic", "\U0001f9fa"),
    ("Fishing", "\U0001f3a3"),
]


class PhotoLibrary:
    """An ordered, read-only collection of photos."""

    def __init__(self, photos: Iterable[Photo]) -> None:
        self._photos: list[Photo] = list(photos)
        self._by_id: dict[int, Photo] = {}
        for photo in self._photos:
            if photo.id in self._by_id:
                raise ValueError(f"Duplicate photo id {photo.id}.")
            self._by_id[photo.id] = photo

    # -- construction ---------------------------------------------------------

    @classmethod
    def builtin(cls) -> PhotoLibrary:
        return cls(
            Photo(id=i, label=label, glyph=glyph)
            for i, (label, glyph) in enumerate(_BUILTIN)
        )

    @classmethod
    def from_files(cls, paths: Iterable[Path]) -> PhotoLibrary:
        """Build a library from user-picked image files, in the given order."""
        photos: list[Photo] = []
        for path in paths:
            path = Path(path)
            if path.suffix.lower() not in IMAGE_SUFFIXES:
                raise ValueError(f"Not an image file: {path}")
            if not path.is_file():
                raise ValueError(f"Image file not found: {path}")
            label = path.stem.replace("_", " ").replace("-", " ").strip() or path.name
            photos.append(
                Photo(id=len(photos), label=label, glyph=label[0].upper(), src=path)
            )
        if not photos:
            raise ValueError("No image files supplied.")
        return cls(photos)

    @classmethod
    def from_directory(cls, directory: Path) -> PhotoLibrary:
        """Load every image file in *directory*, sorted by name."""
        directory = Path(directory)
        if not directory.is_dir():
            raise ValueError(f"Photo directory not found: {directory}")
        files = sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES
        )
        if not files:
            raise ValueError(f"No images found in {directory}")
        return cls.from_files(files)

    # -- queries --------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._photos)

    def __iter__(self) -> Iterator[Photo]:
        return iter(self._photos)

    def __getitem__(self, index: int) -> Photo:
        return self._photos[index]

    @property
    def ids(self) -> list[int]:
        return [p.id for p in self._photos]

    def get(self, photo_id: int) -> Photo:
        try:
            return self._by_id[photo_id]
        except KeyError:
            raise ValueError(f"Unknown photo id {photo_id}.") from None

    def require(self, minimum: int, purpose: str) -> None:
        """Raise ``ValueError`` unless at least *minimum* photos are present."""
        if len(self._photos) < minimum:
            raise ValueError(
                f"{purpose} needs at least {minimum} photos, "
                f"library has {len(self._photos)}."
            )
