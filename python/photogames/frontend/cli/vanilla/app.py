"""Plain ANSI terminal frontend for the photo games.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
Includes a built-in menu for choosing a game and a photo.
"""

from __future__ import annotations

import sys

from photogames.backend.engine.gameplay import (
    DESCRIPTIONS,
    GameKind,
    MemoryGame,
    RevealGame,
    SlidingGame,
    SwapGame,
    title_of,
)
from photogames.backend.engine.gamestate import MAX_STARS, format_time
from photogames.backend.models.photo import PhotoLibrary
from photogames.config import GameConfig
from photogames.frontend.cli.controller import HELP, GameController, pick_photo, play_loop
from photogames.frontend.cli.input_handler import get_key

# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_M = "\033[35;1m"    # bold magenta
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_REV = "\033[7m"     # reverse video (cursor)
_R = "\033[0m"       # reset
_BG_SEL = "\033[42;30m"  # green bg, black fg (selected entry)

# Background colours for reveal cover blocks.
_BLOCKS = [41, 42, 43, 44, 45, 46, 101, 102, 103, 104, 105, 106]

_MENU = list(GameKind)


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _stars(count: int) -> str:
    return f"{_Y}{'★' * count}{_R}{_DIM}{'☆' * (MAX_STARS - count)}{_R}"


def _stats_line(ctrl: GameController) -> str:
    """Return the formatted stats string (no newline)."""
    game = ctrl.game
    snap = ctrl.snapshot
    if isinstance(game, RevealGame):
        return (
            f"  Round: {_Y}{game.round_number}{_R}  |  "
            f"Score: {_Y}{game.total_score}{_R}  |  "
            f"{_Y}{game.revealed_percent}%{_R} revealed"
        )
    if isinstance(game, MemoryGame):
        dots = "●" * snap.correct + "○" * (game.pairs - snap.correct)
        progress = f"Pairs: {_Y}{dots}{_R}"
    else:
        progress = f"Correct: {_Y}{snap.correct}/{len(snap.slots)}{_R}"
    return (
        f"  Moves: {_Y}{snap.moves}{_R}  |  "
        f"Time: {_Y}{format_time(snap.elapsed)}{_R}  |  {progress}"
    )


# -- board rendering ----------------------------------------------------------


def _cell(ctrl: GameController, slot: int) -> str:
    """Return one 5-column cell (ANSI codes excluded from the width)."""
    game = ctrl.game
    snap = ctrl.snapshot

    if isinstance(game, MemoryGame):
        if slot in snap.matched:
            body = f"{_G}{game.photo_at(slot).label[:3].upper():^5}{_R}"
        elif slot in snap.revealed:
            body = f"{_Y}{game.photo_at(slot).label[:3].upper():^5}{_R}"
        else:
            body = f"{_DIM}{'?':^5}{_R}"
    elif isinstance(game, RevealGame):
        if slot in snap.revealed or snap.finished:
            body = f"{_BOLD}{ctrl.label_at(slot):^5}{_R}"
        else:
            colour = _BLOCKS[slot % len(_BLOCKS)]
            body = f"\033[{colour}m{'':5}{_R}"
    else:
        value = snap.slots[slot]
        if isinstance(game, SlidingGame) and value == game.blank:
            body = f"{_DIM}{'·':^5}{_R}"
        elif slot in snap.selection:
            body = f"{_M}{'[' + ctrl.label_at(slot) + ']':^5}{_R}"
        elif value == slot:
            body = f"{_G}{ctrl.label_at(slot):^5}{_R}"
        else:
            body = f"{ctrl.label_at(slot):^5}"

    if slot == ctrl.cursor.slot and not isinstance(game, SlidingGame) and not snap.finished:
        return f"{_REV}{body}{_R}"
    return body


def _render_board(ctrl: GameController) -> str:
    """Return an ANSI-coloured text representation of the board."""
    snap = ctrl.snapshot
    sep = "+" + ("-----+" * snap.columns)
    lines: list[str] = [sep]
    for r in range(snap.rows):
        cells = [_cell(ctrl, r * snap.columns + c) for c in range(snap.columns)]
        lines.append("|" + "|".join(cells) + "|")
        lines.append(sep)
    return "\n".join(lines)


def _render_reference(size: int) -> str:
    rows = []
    for r in range(size):
        rows.append(" ".join(f"{r * size + c + 1:>2}" for c in range(size)))
    return "\n".join(f"  {_DIM}{row}{_R}" for row in rows)


# -- menu screens -------------------------------------------------------------


def _show_menu(sel: int, notice: str = "") -> None:
    _clear()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}        P H O T O   G A M E S         {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()
    for i, kind in enumerate(_MENU):
        name = f"{i + 1}  {title_of(kind):<16}"
        if i == sel:
            print(f"    {_BG_SEL} {name} {_R}  {DESCRIPTIONS[kind]}")
        else:
            print(f"     {name}   {_DIM}{DESCRIPTIONS[kind]}{_R}")
    print()
    print(f"    {_DIM}↑ ↓ choose   Enter play   Q quit{_R}")
    print()
    if notice:
        print(f"    {_Y}{notice}{_R}")


def _show_picker(library: PhotoLibrary, index: int) -> None:
    _clear()
    print()
    print(f"  {_C}=== Choose a photo ==={_R}")
    print()
    for i, photo in enumerate(library):
        key = f"{i + 1}" if i < 9 else " "
        if i == index:
            print(f"    {_BG_SEL} {key}  {photo.label:<20} {_R}")
        else:
            print(f"     {key}  {photo.label}")
    print()
    print(f"    {_DIM}↑ ↓ choose   Enter start   Q back{_R}")


# -- game screen --------------------------------------------------------------


def _show_game(ctrl: GameController) -> None:
    """Draw the full game screen.

    The stats line is printed last, with no trailing newline, so
    ``_update_time`` can cheaply overwrite it in-place using ``\\r\\033[K``.
    """
    _clear()
    game = ctrl.game
    snap = ctrl.snapshot
    colour = _G if snap.won else _C
    print(f"  {colour}=== {game.title} ==={_R}")
    if isinstance(game, (SwapGame, SlidingGame)):
        print(f"  Photo: {_BOLD}{game.photo.label}{_R}")
    print()
    print(_render_board(ctrl))
    print()

    if isinstance(game, SwapGame) and ctrl.show_reference:
        print(f"  {_DIM}Reference:{_R}")
        print(_render_reference(game.size))
        print()

    if isinstance(game, RevealGame) and not snap.finished:
        options = "   ".join(
            f"{_C}{i + 1}{_R} {game.library.get(pid).label}"
            for i, pid in enumerate(snap.choices)
        )
        print(f"  Which photo is it?  {options}")
        print()

    if snap.finished:
        outcome = snap.outcome
        if isinstance(game, RevealGame):
            print(f"  Press {_C}R{_R} for the next round, {_C}Q{_R} to go back.")
        else:
            print(f"  {_G}★ You won! ★{_R}  {_stars(outcome.stars)}")
            print(f"  Press {_C}R{_R} to play again, {_C}Q{_R} to go back.")
    else:
        print(f"  {_DIM}{HELP[ctrl.kind]}{_R}")

    if ctrl.status:
        print(f"  {_Y}{ctrl.status}{_R}")
    # Stats at the very bottom, no trailing newline.
    sys.stdout.write(f"\n{_stats_line(ctrl)}")
    sys.stdout.flush()


def _update_time(ctrl: GameController) -> None:
    """Overwrite just the stats (last) line in-place."""
    sys.stdout.write(f"\r\033[K{_stats_line(ctrl)}")
    sys.stdout.flush()


# -- menu loop ----------------------------------------------------------------


def _menu_loop(library: PhotoLibrary, config: GameConfig, start: GameKind | None) -> None:
    sel = 0
    pending = start
    notice = ""

    while True:
        if pending is None:
            _show_menu(sel, notice)
            notice = ""
            key = get_key()
            if key == "quit":
                _clear()
                print("  Goodbye!\n")
                return
            if key == "up":
                sel = (sel - 1) % len(_MENU)
            elif key == "down":
                sel = (sel + 1) % len(_MENU)
            elif key in ("enter", "select"):
                pending = _MENU[sel]
            elif key.isdigit() and 1 <= int(key) <= len(_MENU):
                pending = _MENU[int(key) - 1]
            continue

        kind, pending = pending, None
        photo_id = None
        if kind.needs_photo:
            photo_id = pick_photo(library, _show_picker)
            if photo_id is None:
                continue
        try:
            controller = GameController(kind, library, config, photo_id)
        except ValueError as exc:
            notice = str(exc)
            continue
        play_loop(controller, _show_game, _update_time)


# -- public entry point -------------------------------------------------------


def run(library: PhotoLibrary, config: GameConfig, game: GameKind | None = None) -> None:
    """Launch the vanilla CLI with interactive menu."""
    _menu_loop(library, config, game)
