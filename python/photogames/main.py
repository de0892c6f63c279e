"""Photo Games.

Usage::

    photogames                        # interactive menu
    photogames -f rich -g memory      # Rich terminal, straight into Memory Match
    photogames -f pygame --photos ~/Pictures/family
    photogames --list-photos          # show the photos that would be used
"""

import importlib
import logging
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from photogames.backend.engine.gamegenerator import MAX_PAIRS, MIN_PAIRS
from photogames.backend.engine.gameplay import DESCRIPTIONS, GameKind, title_of
from photogames.backend.models.photo import PhotoLibrary
from photogames.config import GameConfig

logger = logging.getLogger("photogames")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.vanilla: "photogames.frontend.cli.vanilla.app",
    Frontend.rich: "photogames.frontend.cli.rich.app",
    Frontend.pygame: "photogames.frontend.gui.pygame.app",
}


# -- helpers ------------------------------------------------------------------


def configure_logging(verbose: bool = False) -> None:
    """Route log records through Rich; DEBUG with ``-v``, otherwise WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


def load_library(photos_dir: Optional[Path]) -> PhotoLibrary:
    """Photos from *photos_dir*, or the built-in set when none is given."""
    if photos_dir is None:
        return PhotoLibrary.builtin()
    library = PhotoLibrary.from_directory(photos_dir)
    logger.info("Loaded %d photos from %s", len(library), photos_dir)
    return library


def _check_library(library: PhotoLibrary, config: GameConfig, game: Optional[GameKind]) -> None:
    if game is GameKind.memory:
        library.require(config.memory_pairs, title_of(game))
    elif game is GameKind.reveal:
        library.require(config.reveal_choices, title_of(game))


def _print_photos(library: PhotoLibrary) -> None:
    print("\n  === PHOTOS ===")
    for photo in library:
        source = photo.src if photo.src is not None else "built-in"
        print(f"  {photo.id + 1:>2}. {photo.label:<20} ({source})")
    print()


def _menu_loop(library: PhotoLibrary, config: GameConfig) -> None:
    kinds = list(GameKind)
    while True:
        print()
        print("  ====================================")
        print("         P H O T O   G A M E S        ")
        print("  ====================================")
        print()
        for i, kind in enumerate(kinds, 1):
            print(f"  {i}.  {title_of(kind):<16} {DESCRIPTIONS[kind]}")
        print()
        print("  Frontends:  v = Vanilla Terminal   r = Rich Terminal   p = Pygame GUI")
        print("  0.  Quit")
        print()

        choice = input("  Select (e.g. 1r, 3p): ").strip().lower()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        number, letter = choice[:1], choice[1:] or "v"
        frontend = {"v": Frontend.vanilla, "r": Frontend.rich, "p": Frontend.pygame}.get(letter)
        if not number.isdigit() or not 1 <= int(number) <= len(kinds) or frontend is None:
            print("  Unknown option.")
            continue

        mod = importlib.import_module(_RUNNERS[frontend])
        mod.run(library, config, kinds[int(number) - 1])


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    game: Optional[GameKind] = typer.Option(
        None, "-g", "--game",
        help="Start this game directly instead of the frontend's menu.",
    ),
    photos: Optional[Path] = typer.Option(
        None, "--photos",
        envvar="PHOTOGAMES_PHOTOS",
        file_okay=False,
        help="Directory of photos to play with (built-in set if omitted).",
    ),
    pairs: int = typer.Option(
        8, "--pairs",
        min=MIN_PAIRS, max=MAX_PAIRS,
        help=f"Memory Match pairs ({MIN_PAIRS}-{MAX_PAIRS}).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        envvar="PHOTOGAMES_SEED",
        help="Seed the shuffles for a reproducible session.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log engine events at DEBUG level.",
    ),
    list_photos: bool = typer.Option(
        False, "--list-photos",
        help="Show the photos that would be used and exit.",
    ),
) -> None:
    """Photo Games: Memory Match, Sliding Puzzle, Puzzle Swap and Photo Reveal."""
    configure_logging(verbose)

    try:
        library = load_library(photos)
        config = GameConfig(memory_pairs=pairs, seed=seed, photos_dir=photos)
        _check_library(library, config, game)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if list_photos:
        _print_photos(library)
        return

    if frontend is None:
        _menu_loop(library, config)
        return

    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(library, config, game)


if __name__ == "__main__":
    app()
