"""Terminal frontend drawn with rich tables and panels.

Uses the ``rich`` library for styled output while sharing the same
input handler and game controller as the vanilla CLI.
"""

from __future__ import annotations

import random
import sys

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

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

console = Console()

_MENU = list(GameKind)

# Cover block colours for Photo Reveal, reshuffled once per launch.
_BLOCK_COLORS = [
    "#FF6B6B", "#4ECDC4", "#FFE66D", "#A78BFA", "#FF8E8E",
    "#6FE8DF", "#FFEF99", "#C4B5FD", "#F87171", "#34D399",
    "#FBBF24", "#818CF8", "#FB923C", "#2DD4BF", "#F472B6",
    "#A3E635", "#60A5FA", "#E879F9", "#FACC15", "#22D3EE",
    "#FB7185", "#4ADE80", "#FCD34D", "#C084FC", "#38BDF8",
]
random.shuffle(_BLOCK_COLORS)


# -- helpers ------------------------------------------------------------------


def _stars(count: int) -> Text:
    text = Text()
    text.append("★" * count, style="bold yellow")
    text.append("☆" * (MAX_STARS - count), style="dim")
    return text


def _stats(ctrl: GameController) -> Text:
    game = ctrl.game
    snap = ctrl.snapshot
    stats = Text()
    if isinstance(game, RevealGame):
        stats.append("  Round: ", style="dim")
        stats.append(str(game.round_number), style="bold yellow")
        stats.append("    Score: ", style="dim")
        stats.append(str(game.total_score), style="bold yellow")
        stats.append("    Revealed: ", style="dim")
        stats.append(f"{game.revealed_percent}%", style="bold yellow")
        return stats

    stats.append("  Moves: ", style="dim")
    stats.append(str(snap.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(format_time(snap.elapsed), style="bold yellow")
    if isinstance(game, MemoryGame):
        stats.append("    Pairs: ", style="dim")
        stats.append("●" * snap.correct, style="bold green")
        stats.append("○" * (game.pairs - snap.correct), style="dim")
    else:
        stats.append("    Correct: ", style="dim")
        stats.append(f"{snap.correct}/{len(snap.slots)}", style="bold yellow")
    return stats


# -- board rendering ----------------------------------------------------------


def _cell(ctrl: GameController, slot: int) -> Text:
    game = ctrl.game
    snap = ctrl.snapshot
    cursor = slot == ctrl.cursor.slot and not isinstance(game, SlidingGame) and not snap.finished
    under = " on #313244" if cursor else ""

    if isinstance(game, MemoryGame):
        if slot in snap.matched:
            return Text(f"{game.photo_at(slot).glyph}✓", style=f"bold green{under}")
        if slot in snap.revealed:
            return Text(game.photo_at(slot).glyph, style=f"bold{under}")
        return Text("?", style=f"bold cyan{under}")

    if isinstance(game, RevealGame):
        if slot in snap.revealed or snap.finished:
            return Text(ctrl.label_at(slot), style=f"bold white{under}")
        colour = _BLOCK_COLORS[slot % len(_BLOCK_COLORS)]
        mark = "◆" if cursor else " "
        return Text(f" {mark} ", style=f"black on {colour}")

    value = snap.slots[slot]
    if isinstance(game, SlidingGame) and value == game.blank:
        return Text("·", style="dim")
    if slot in snap.selection:
        return Text(f"[{ctrl.label_at(slot)}]", style=f"bold magenta{under}")
    if value == slot:
        return Text(ctrl.label_at(slot), style=f"bold green{under}")
    return Text(ctrl.label_at(slot), style=f"bold white{under}")


def _render_board(ctrl: GameController) -> Table:
    """Return a Rich Table representing the game grid."""
    snap = ctrl.snapshot
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(snap.columns):
        table.add_column(width=4, justify="center")

    for r in range(snap.rows):
        table.add_row(*(_cell(ctrl, r * snap.columns + c) for c in range(snap.columns)))
    return table


def _render_reference(game: SwapGame) -> Table:
    table = Table(show_header=False, box=rich.box.SIMPLE, padding=(0, 1))
    for _ in range(game.size):
        table.add_column(justify="center", style="dim")
    for r in range(game.size):
        table.add_row(*(str(r * game.size + c + 1) for c in range(game.size)))
    return table


# -- menu screens -------------------------------------------------------------


def _draw_menu(sel: int, notice: str = "") -> None:
    """Draw the main menu."""
    console.clear()

    rows = Table.grid(padding=(0, 2))
    rows.add_column(justify="right")
    rows.add_column()
    rows.add_column(style="dim")
    for i, kind in enumerate(_MENU):
        style = "bold green on #313244" if i == sel else ""
        rows.add_row(
            Text(str(i + 1), style="bold cyan"),
            Text(f" {title_of(kind)} ", style=style),
            DESCRIPTIONS[kind],
        )

    nav = Text("  ↑ ↓  choose    Enter  play    Q  quit", style="dim")
    body = Group(Text(""), Align.center(rows), Text(""), Align.center(nav), Text(""))
    if notice:
        body = Group(body, Align.center(Text(notice, style="bold red")))

    panel = Panel(
        body,
        title="[bold]P H O T O   G A M E S[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


def _draw_picker(library: PhotoLibrary, index: int) -> None:
    console.clear()
    rows = Table.grid(padding=(0, 2))
    rows.add_column(justify="right", style="bold cyan")
    rows.add_column()
    rows.add_column()
    for i, photo in enumerate(library):
        style = "bold green on #313244" if i == index else ""
        rows.add_row(str(i + 1) if i < 9 else "", photo.glyph, Text(f" {photo.label} ", style=style))

    panel = Panel(
        Group(Align.center(rows), Text(""), Align.center(
            Text("↑ ↓  choose    Enter  start    Q  back", style="dim")
        )),
        title="[bold cyan]Choose a photo[/bold cyan]",
        border_style="cyan",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


# -- game screen --------------------------------------------------------------


def _draw_game(ctrl: GameController) -> None:
    console.clear()
    game = ctrl.game
    snap = ctrl.snapshot

    parts: list = [Align.center(_render_board(ctrl))]
    if isinstance(game, (SwapGame, SlidingGame)):
        parts.insert(0, Align.center(Text(f"{game.photo.glyph}  {game.photo.label}", style="bold")))
    if isinstance(game, SwapGame) and ctrl.show_reference:
        parts.append(Align.center(Text("Reference", style="dim")))
        parts.append(Align.center(_render_reference(game)))
    if isinstance(game, RevealGame) and not snap.finished:
        options = Text("Which photo is it?  ")
        for i, pid in enumerate(snap.choices):
            photo = game.library.get(pid)
            options.append(f"{i + 1}", style="bold cyan")
            options.append(f" {photo.glyph} {photo.label}   ")
        parts.append(Text(""))
        parts.append(Align.center(options))

    border = "bold green" if snap.won else "bright_blue"
    if snap.finished and isinstance(game, RevealGame):
        border = "bold green" if snap.won else "red"
    panel = Panel(
        Group(*parts),
        title=f"[bold cyan]{game.title}[/bold cyan]",
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))

    if snap.finished:
        congrats = Text()
        if isinstance(game, RevealGame):
            congrats.append("  Press R for the next round, Q to go back.", style="dim")
        else:
            congrats.append("\n  ★ ", style="bold yellow")
            congrats.append("YOU WON!", style="bold green")
            congrats.append("  ")
            congrats.append_text(_stars(snap.outcome.stars))
            congrats.append("\n  Press R to play again, Q to go back.", style="dim")
        console.print(Align.center(congrats))
    else:
        console.print(Align.center(Text(HELP[ctrl.kind], style="dim")))
    if ctrl.status:
        console.print(Align.center(Text(ctrl.status, style="yellow")))

    # Save cursor position right before the stats line so _update_time()
    # can later restore to this exact spot and overwrite only this line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats(ctrl)))


def _update_time(ctrl: GameController) -> None:
    """Overwrite just the stats line using the saved cursor position."""
    stats = _stats(ctrl)
    pad = max(0, (console.width - stats.cell_len) // 2)
    sys.stdout.write("\033[u\033[K")
    sys.stdout.flush()
    console.print(Text(" " * pad) + stats, end="")


# -- menu loop ----------------------------------------------------------------


def _menu_loop(library: PhotoLibrary, config: GameConfig, start: GameKind | None) -> None:
    sel = 0
    pending = start
    notice = ""

    while True:
        if pending is None:
            _draw_menu(sel, notice)
            notice = ""
            key = get_key()
            if key == "quit":
                console.clear()
                console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
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
            photo_id = pick_photo(library, _draw_picker)
            if photo_id is None:
                continue
        try:
            controller = GameController(kind, library, config, photo_id)
        except ValueError as exc:
            notice = str(exc)
            continue
        play_loop(controller, _draw_game, _update_time)


# -- public entry point -------------------------------------------------------


def run(library: PhotoLibrary, config: GameConfig, game: GameKind | None = None) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(library, config, game)
