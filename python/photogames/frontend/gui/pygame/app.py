"""Pygame window for the photo games.

Includes the game menu, photo picker, all four games and the win
screen.  Photos with an image file are sliced into real pieces; the
built-in stand-ins are drawn as coloured, labelled tiles.
"""

from __future__ import annotations

import enum
import logging

import pygame

from photogames.backend.engine.gameplay import (
    DESCRIPTIONS,
    GameKind,
    GamePlay,
    MemoryGame,
    RevealGame,
    SlidingGame,
    Snapshot,
    SwapGame,
    create_game,
    title_of,
)
from photogames.backend.engine.gamestate import MAX_STARS, format_time
from photogames.backend.models.board import Direction
from photogames.backend.models.photo import Photo, PhotoLibrary
from photogames.config import GameConfig
from photogames.frontend.cli.controller import reveal_fragment

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)
COL_RED = (243, 139, 168)
COL_PEACH = (250, 179, 135)
COL_TEAL = (148, 226, 213)
COL_MAUVE = (203, 166, 247)
COL_SKY = (137, 220, 235)

# Tile colours for photos that have no image file, indexed by photo id.
_PHOTO_COLS = [COL_PEACH, COL_TEAL, COL_MAUVE, COL_YELLOW, COL_SKY, COL_PINK, COL_GREEN, COL_BLUE, COL_RED]

# Reveal cover blocks cycle through these.
_COVER_COLS = [COL_RED, COL_PEACH, COL_YELLOW, COL_GREEN, COL_TEAL, COL_SKY, COL_BLUE, COL_MAUVE]

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 520, 700
TILE_GAP = 4
MARGIN = 20
BOARD_TOP = 80
BOARD_MAX = WIN_W - 2 * MARGIN  # max board width/height in px

_DIRS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}

_DIGITS = {pygame.K_1: 1, pygame.K_2: 2, pygame.K_3: 3, pygame.K_4: 4,
           pygame.K_5: 5, pygame.K_6: 6, pygame.K_7: 7, pygame.K_8: 8, pygame.K_9: 9}


# ---------------------------------------------------------------------------
# Screen enum
# ---------------------------------------------------------------------------
class _Screen(enum.Enum):
    MENU = "menu"
    PICK = "pick"
    PLAYING = "playing"
    WIN = "win"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
        radius: int = 8,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Centring helpers
# ---------------------------------------------------------------------------
def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


def _blit_in(surf: pygame.Surface, rendered: pygame.Surface, rect: pygame.Rect) -> None:
    surf.blit(
        rendered,
        (rect.centerx - rendered.get_width() // 2, rect.centery - rendered.get_height() // 2),
    )


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, library: PhotoLibrary, config: GameConfig, game: GameKind | None = None) -> None:
        self._library = library
        self._config = config
        self._kind = game or GameKind.memory
        self._photo_id: int | None = None

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Photo Games")
        self._clock = pygame.time.Clock()

        # Fonts
        self._f_big = pygame.font.SysFont("Helvetica", 38, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._screen = _Screen.MENU
        self._game: GamePlay | None = None
        self._status_msg = ""
        self._show_ref = False

        # Loaded photo images by id; None marks a photo without a usable file.
        self._images: dict[int, pygame.Surface | None] = {}
        self._pieces: dict[int, pygame.Surface] = {}
        self._faces: dict[int, pygame.Surface] = {}
        self._cover_img: pygame.Surface | None = None
        self._ref_image: pygame.Surface | None = None

        self._build_menu_btns()
        self._build_pick_btns()
        self._build_win_btns()
        self._game_action_btns: list[_Btn] = []
        self._choice_btns: list[tuple[_Btn, int]] = []

        if game is not None:
            self._choose(game)

    # ── menu buttons ────────────────────────────────────────────────────────

    def _build_menu_btns(self) -> None:
        bw, bh, gap = 300, 56, 14
        self._game_btns: dict[GameKind, _Btn] = {}
        for i, kind in enumerate(GameKind):
            self._game_btns[kind] = _Btn(
                (_cx(bw), 190 + i * (bh + gap), bw, bh),
                title_of(kind).upper(),
                self._f_btn,
                bg=COL_SURFACE0,
                hover=COL_SURFACE1,
            )
        self._quit_btn = _Btn(
            (_cx(220), 190 + 4 * (bh + gap) + 20, 220, 42),
            "Q U I T",
            self._f_btn_sm,
            bg=COL_RED,
            hover=(255, 170, 185),
            fg=COL_BASE,
        )
        self._menu_all: list[_Btn] = [*self._game_btns.values(), self._quit_btn]

    def _build_pick_btns(self) -> None:
        bw, bh, gap = 220, 40, 10
        self._photo_btns: list[tuple[_Btn, int]] = []
        for i, photo in enumerate(self._library):
            col, row = divmod(i, 10)
            x = MARGIN + col * (bw + gap) if len(self._library) > 10 else _cx(bw)
            self._photo_btns.append(
                (_Btn((x, 110 + row * (bh + gap), bw, bh), photo.label[:24], self._f_btn_sm), photo.id)
            )
        self._pick_back = _Btn((_cx(180), WIN_H - 64, 180, 46), "B A C K", self._f_btn_sm)

    def _build_win_btns(self) -> None:
        bw = 220
        self._win_again = _Btn(
            (_cx(bw), 420, bw, 50),
            "PLAY AGAIN",
            self._f_btn,
            bg=COL_GREEN,
            hover=(190, 240, 190),
            fg=COL_BASE,
        )
        self._win_menu = _Btn((_cx(bw), 488, bw, 46), "M E N U", self._f_btn_sm)

    def _build_game_btns(self) -> None:
        """Build in-game action buttons (placed below the board)."""
        bw, gap = 120, 10
        restart = "NEXT (R)" if self._kind is GameKind.reveal else "RESTART (R)"
        btns = [
            _Btn((0, 0, bw, 36), restart, self._f_btn_sm,
                 bg=COL_PINK, hover=(245, 210, 227), fg=COL_BASE),
        ]
        if self._kind is GameKind.sliding:
            btns.append(_Btn((0, 0, bw, 36), "HINT (N)", self._f_btn_sm,
                             bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE))
        if self._kind is GameKind.swap:
            btns.append(_Btn((0, 0, bw, 36), "PHOTO (T)", self._f_btn_sm,
                             bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE))
        btns.append(_Btn((0, 0, bw, 36), "MENU (M)", self._f_btn_sm))

        sx = _cx(len(btns) * bw + (len(btns) - 1) * gap)
        for i, btn in enumerate(btns):
            btn.rect.x = sx + i * (bw + gap)
        self._restart_btn = btns[0]
        self._hint_btn = btns[1] if self._kind is GameKind.sliding else None
        self._ref_btn = btns[1] if self._kind is GameKind.swap else None
        self._menu_btn = btns[-1]
        self._game_action_btns = btns

    def _build_choice_btns(self) -> None:
        self._choice_btns = []
        game = self._game
        if not isinstance(game, RevealGame):
            return
        n = len(game.choices)
        gap = 8
        bw = (BOARD_MAX - (n - 1) * gap) // n
        for i, pid in enumerate(game.choices):
            label = f"{i + 1}. {self._library.get(pid).label}"[:16]
            self._choice_btns.append(
                (_Btn((MARGIN + i * (bw + gap), 0, bw, 40), label, self._f_btn_sm,
                      bg=COL_BLUE, hover=COL_LAVENDER, fg=COL_BASE), pid)
            )

    # ── image preparation ───────────────────────────────────────────────────

    _REF_SIZE = 64  # reference thumbnail side length in px

    def _image(self, photo: Photo) -> pygame.Surface | None:
        """Load (once) the image file behind *photo*."""
        if photo.id not in self._images:
            surface = None
            if photo.src is not None:
                try:
                    surface = pygame.image.load(str(photo.src)).convert()
                except (pygame.error, FileNotFoundError) as exc:
                    logger.warning("Could not load %s: %s", photo.src, exc)
            self._images[photo.id] = surface
        return self._images[photo.id]

    def _prepare_images(self) -> None:
        """Slice or scale the photos the current round needs."""
        self._pieces = {}
        self._faces = {}
        self._cover_img = None
        self._ref_image = None
        game = self._game
        assert game is not None
        tpx, _, _, total_w, total_h = self._layout()

        if isinstance(game, MemoryGame):
            for pid in game.policy.pair_photos:
                img = self._image(self._library.get(pid))
                if img is not None:
                    self._faces[pid] = pygame.transform.smoothscale(img, (tpx, tpx))
            return

        if isinstance(game, RevealGame):
            img = self._image(game.target_photo)
            if img is not None:
                self._cover_img = pygame.transform.smoothscale(img, (total_w, total_h))
            return

        assert isinstance(game, (SwapGame, SlidingGame))
        img = self._image(game.photo)
        if img is None:
            return
        self._ref_image = pygame.transform.smoothscale(img, (self._REF_SIZE, self._REF_SIZE))
        sz = game.size
        full = pygame.transform.smoothscale(img, (sz * tpx, sz * tpx))
        for home in range(sz * sz):
            # Piece `home` belongs at grid position (home // sz, home % sz).
            r, c = divmod(home, sz)
            self._pieces[home] = full.subsurface(pygame.Rect(c * tpx, r * tpx, tpx, tpx)).copy()

    # ── geometry ────────────────────────────────────────────────────────────

    def _layout(self) -> tuple[int, int, int, int, int]:
        """Return (tile_px, origin_x, origin_y, total_w, total_h) for the board."""
        snap = self._snapshot()
        cols, rows = snap.columns, snap.rows
        tile_px = min(
            (BOARD_MAX - (cols + 1) * TILE_GAP) // cols,
            (BOARD_MAX - (rows + 1) * TILE_GAP) // rows,
        )
        total_w = cols * tile_px + (cols + 1) * TILE_GAP
        total_h = rows * tile_px + (rows + 1) * TILE_GAP
        return tile_px, _cx(total_w) + TILE_GAP, BOARD_TOP + TILE_GAP, total_w, total_h

    def _slot_rect(self, slot: int, columns: int, tpx: int, ox: int, oy: int) -> pygame.Rect:
        r, c = divmod(slot, columns)
        return pygame.Rect(ox + c * (tpx + TILE_GAP), oy + r * (tpx + TILE_GAP), tpx, tpx)

    def _slot_at(self, pos: tuple[int, int]) -> int | None:
        snap = self._snapshot()
        tpx, ox, oy, _, _ = self._layout()
        for slot in range(len(snap.slots)):
            if self._slot_rect(slot, snap.columns, tpx, ox, oy).collidepoint(pos):
                return slot
        return None

    def _snapshot(self) -> Snapshot:
        assert self._game is not None
        return self._game.snapshot()

    # ── drawing ─────────────────────────────────────────────────────────────

    def _label_tile(self, rect: pygame.Rect, colour: tuple, text: str, size: int) -> None:
        pygame.draw.rect(self._surf, colour, rect, border_radius=6)
        font = pygame.font.SysFont("Helvetica", max(12, size), bold=True)
        _blit_in(self._surf, font.render(text, True, COL_BASE), rect)

    def _draw_menu(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(self._surf, self._f_big.render("PHOTO  GAMES", True, COL_TEXT), 70)
        _blit_center(self._surf, self._f_body.render("Pick a game", True, COL_SUBTEXT), 140)
        for kind, btn in self._game_btns.items():
            btn.draw(self._surf)
            if btn._hot:
                _blit_center(
                    self._surf,
                    self._f_small.render(DESCRIPTIONS[kind], True, COL_SUBTEXT),
                    WIN_H - 60,
                )
        self._quit_btn.draw(self._surf)
        if self._status_msg:
            _blit_center(self._surf, self._f_small.render(self._status_msg, True, COL_RED), WIN_H - 36)

    def _draw_pick(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(self._surf, self._f_title.render(title_of(self._kind), True, COL_TEXT), 30)
        _blit_center(self._surf, self._f_body.render("Choose a photo", True, COL_SUBTEXT), 66)
        for btn, _ in self._photo_btns:
            btn.draw(self._surf)
        self._pick_back.draw(self._surf)

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None
        snap = game.snapshot()
        tpx, ox, oy, total_w, total_h = self._layout()

        # header
        _blit_center(self._surf, self._f_title.render(game.title, True, COL_TEXT), 14)
        if isinstance(game, RevealGame):
            stats = (
                f"Round: {game.round_number}    Score: {game.total_score}    "
                f"Revealed: {game.revealed_percent}%"
            )
        elif isinstance(game, MemoryGame):
            stats = f"Moves: {snap.moves}    Time: {format_time(snap.elapsed)}    Pairs: {snap.correct}/{game.pairs}"
        else:
            stats = (
                f"Moves: {snap.moves}    Time: {format_time(snap.elapsed)}    "
                f"Correct: {snap.correct}/{len(snap.slots)}"
            )
        _blit_center(self._surf, self._f_body.render(stats, True, COL_PINK), 46)

        # board bg
        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(_cx(total_w), BOARD_TOP, total_w, total_h),
            border_radius=10,
        )

        if isinstance(game, RevealGame) and self._cover_img is not None:
            self._surf.blit(self._cover_img, (_cx(total_w), BOARD_TOP))

        for slot in range(len(snap.slots)):
            rect = self._slot_rect(slot, snap.columns, tpx, ox, oy)
            if isinstance(game, MemoryGame):
                self._draw_card(game, snap, slot, rect, tpx)
            elif isinstance(game, RevealGame):
                self._draw_cover(game, snap, slot, rect, tpx)
            else:
                self._draw_piece(game, snap, slot, rect, tpx)

        # reference image thumbnail (top-right)
        if isinstance(game, (SwapGame, SlidingGame)):
            self._draw_reference(game)

        y = BOARD_TOP + total_h + 12

        # reveal guesses
        if isinstance(game, RevealGame) and not snap.finished:
            for btn, _ in self._choice_btns:
                btn.rect.y = y
                btn.draw(self._surf)
            y += 52

        # action buttons row
        for btn in self._game_action_btns:
            btn.rect.y = y
            btn.draw(self._surf)
        y += 44

        if self._status_msg:
            _blit_center(self._surf, self._f_small.render(self._status_msg, True, COL_YELLOW), y)
            y += 20

        _blit_center(self._surf, self._f_small.render(self._footer(), True, COL_OVERLAY0), y)

    def _draw_card(self, game: MemoryGame, snap: Snapshot, slot: int, rect: pygame.Rect, tpx: int) -> None:
        if slot not in snap.revealed:
            pygame.draw.rect(self._surf, COL_SURFACE1, rect, border_radius=6)
            _blit_in(self._surf, self._f_title.render("?", True, COL_OVERLAY0), rect)
            return
        photo = game.photo_at(slot)
        face = self._faces.get(photo.id)
        if face is not None:
            self._surf.blit(face, rect.topleft)
        else:
            colour = _PHOTO_COLS[photo.id % len(_PHOTO_COLS)]
            self._label_tile(rect, colour, photo.label, tpx // 6)
        if slot in snap.matched:
            pygame.draw.rect(self._surf, COL_GREEN, rect, width=3, border_radius=6)

    def _draw_cover(self, game: RevealGame, snap: Snapshot, slot: int, rect: pygame.Rect, tpx: int) -> None:
        if slot in snap.revealed or snap.finished:
            if self._cover_img is None:
                # No image: uncover one letter of the hidden label.
                letter = reveal_fragment(game.target_photo.label, slot)
                colour = _PHOTO_COLS[game.target_photo.id % len(_PHOTO_COLS)]
                self._label_tile(rect, colour, letter, tpx // 2)
            return
        pygame.draw.rect(self._surf, _COVER_COLS[slot % len(_COVER_COLS)], rect, border_radius=4)

    def _draw_piece(self, game: SwapGame | SlidingGame, snap: Snapshot, slot: int, rect: pygame.Rect, tpx: int) -> None:
        home = snap.slots[slot]
        if isinstance(game, SlidingGame) and home == game.blank and not snap.finished:
            return
        correct = home == slot
        piece = self._pieces.get(home)
        if piece is not None:
            self._surf.blit(piece, rect.topleft)
            if correct:
                pygame.draw.rect(self._surf, COL_GREEN, rect, width=3, border_radius=4)
        else:
            colour = COL_GREEN if correct else COL_BLUE
            self._label_tile(rect, colour, str(home + 1), tpx // 3)
        if slot in snap.selection:
            pygame.draw.rect(self._surf, COL_MAUVE, rect, width=5, border_radius=4)

    def _draw_reference(self, game: SwapGame | SlidingGame) -> None:
        if isinstance(game, SwapGame) and not self._show_ref:
            return
        rs = self._REF_SIZE
        rx, ry = WIN_W - rs - MARGIN, 8
        pygame.draw.rect(
            self._surf, COL_SURFACE1,
            pygame.Rect(rx - 2, ry - 2, rs + 4, rs + 4),
            border_radius=6,
        )
        if self._ref_image is not None:
            self._surf.blit(self._ref_image, (rx, ry))
        else:
            colour = _PHOTO_COLS[game.photo.id % len(_PHOTO_COLS)]
            self._label_tile(pygame.Rect(rx, ry, rs, rs), colour, game.photo.label[:6], 12)
        ref_lbl = self._f_small.render("Ref", True, COL_SUBTEXT)
        self._surf.blit(ref_lbl, (rx + (rs - ref_lbl.get_width()) // 2, ry + rs + 4))

    def _footer(self) -> str:
        if self._kind is GameKind.sliding:
            return "Arrows / WASD  slide     Click  move tile     N  hint     M  menu"
        if self._kind is GameKind.reveal:
            return "Click  remove block     1-4  guess     R  next round     M  menu"
        return "Click  select     R  restart     M  menu     Esc  quit"

    def _draw_win(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None
        snap = game.snapshot()
        assert snap.outcome is not None

        _blit_center(
            self._surf,
            self._f_big.render("★  W E L L   D O N E  ★", True, COL_GREEN),
            100,
        )
        stars = snap.outcome.stars
        _blit_center(
            self._surf,
            self._f_big.render("★" * stars + "☆" * (MAX_STARS - stars), True, COL_YELLOW),
            160,
        )

        info = [
            (game.title, COL_SUBTEXT),
            (f"Moves:  {snap.moves}", COL_YELLOW),
            (f"Time:   {format_time(snap.elapsed)}", COL_YELLOW),
        ]
        y = 240
        for txt, col in info:
            _blit_center(self._surf, self._f_title.render(txt, True, col), y)
            y += 44

        self._win_again.draw(self._surf)
        self._win_menu.draw(self._surf)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_menu(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for b in self._menu_all:
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for kind, b in self._game_btns.items():
                if b.hit(ev.pos):
                    self._choose(kind)
                    return True
            if self._quit_btn.hit(ev.pos):
                return False
        elif ev.type == pygame.KEYDOWN:
            kinds = list(GameKind)
            if ev.key in _DIGITS and _DIGITS[ev.key] <= len(kinds):
                self._choose(kinds[_DIGITS[ev.key] - 1])
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    def _ev_pick(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for b, _ in self._photo_btns:
                b.motion(ev.pos)
            self._pick_back.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for b, pid in self._photo_btns:
                if b.hit(ev.pos):
                    self._photo_id = pid
                    self._start_game()
                    return True
            if self._pick_back.hit(ev.pos):
                self._screen = _Screen.MENU
        elif ev.type == pygame.KEYDOWN:
            if ev.key in _DIGITS and _DIGITS[ev.key] <= len(self._photo_btns):
                self._photo_id = self._photo_btns[_DIGITS[ev.key] - 1][1]
                self._start_game()
            elif ev.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE, pygame.K_m):
                self._screen = _Screen.MENU
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        game = self._game
        assert game is not None
        if ev.type == pygame.MOUSEMOTION:
            for btn in self._game_action_btns:
                btn.motion(ev.pos)
            for btn, _ in self._choice_btns:
                btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            # Check action buttons first
            if self._restart_btn.hit(ev.pos):
                self._restart()
                return True
            if self._hint_btn is not None and self._hint_btn.hit(ev.pos):
                self._do_hint()
                return True
            if self._ref_btn is not None and self._ref_btn.hit(ev.pos):
                self._show_ref = not self._show_ref
                return True
            if self._menu_btn.hit(ev.pos):
                self._leave()
                return True
            if isinstance(game, RevealGame):
                for btn, pid in self._choice_btns:
                    if btn.hit(ev.pos):
                        self._do_guess(pid)
                        return True
            # Then check the board
            slot = self._slot_at(ev.pos)
            if slot is not None:
                game.click(slot)
                self._status_msg = ""
        elif ev.type == pygame.KEYDOWN:
            if ev.key in _DIRS and isinstance(game, SlidingGame):
                game.move(_DIRS[ev.key])
                self._status_msg = ""
            elif ev.key == pygame.K_n and isinstance(game, SlidingGame):
                self._do_hint()
            elif ev.key == pygame.K_t and isinstance(game, SwapGame):
                self._show_ref = not self._show_ref
            elif ev.key in _DIGITS and isinstance(game, RevealGame):
                number = _DIGITS[ev.key]
                if number <= len(game.choices):
                    self._do_guess(game.choices[number - 1])
            elif ev.key == pygame.K_r:
                self._restart()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                self._leave()
        return True

    def _ev_win(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._win_again.motion(ev.pos)
            self._win_menu.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._win_again.hit(ev.pos):
                self._restart()
            elif self._win_menu.hit(ev.pos):
                self._leave()
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_r, pygame.K_RETURN):
                self._restart()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                self._leave()
        return True

    # ── game actions ────────────────────────────────────────────────────────

    def _do_hint(self) -> None:
        game = self._game
        assert isinstance(game, SlidingGame)
        hint = game.hint()
        if hint is None:
            self._status_msg = "Already solved!" if game.finished else "No hint available."
        else:
            game.move(hint)
            self._status_msg = f"Hint: {hint.value}"

    def _do_guess(self, photo_id: int) -> None:
        game = self._game
        assert isinstance(game, RevealGame)
        snap = game.guess(photo_id)
        if not snap.finished:
            return
        assert snap.outcome is not None
        if snap.won:
            self._status_msg = f"Correct! +{snap.outcome.score} points"
        else:
            self._status_msg = f"Not quite! It was {game.target_photo.label}."

    def _restart(self) -> None:
        game = self._game
        assert game is not None
        if isinstance(game, RevealGame) and not game.finished:
            self._status_msg = "Make a guess first!"
            return
        game.new_round()
        self._status_msg = ""
        self._show_ref = False
        self._build_choice_btns()
        self._prepare_images()
        self._screen = _Screen.PLAYING

    def _leave(self) -> None:
        if self._game is not None:
            self._game.close()
        self._game = None
        self._status_msg = ""
        self._screen = _Screen.MENU

    # ── game state ──────────────────────────────────────────────────────────

    def _choose(self, kind: GameKind) -> None:
        self._kind = kind
        if kind.needs_photo:
            self._screen = _Screen.PICK
        else:
            self._photo_id = None
            self._start_game()

    def _start_game(self) -> None:
        try:
            self._game = create_game(self._kind, self._library, self._config, photo_id=self._photo_id)
        except ValueError as exc:
            logger.warning("%s", exc)
            self._status_msg = str(exc)
            self._screen = _Screen.MENU
            return
        self._status_msg = ""
        self._show_ref = False
        self._build_game_btns()
        self._build_choice_btns()
        self._prepare_images()
        self._screen = _Screen.PLAYING

    def _check_win(self) -> None:
        game = self._game
        if game is None or isinstance(game, RevealGame) or not game.is_won:
            return
        self._screen = _Screen.WIN

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.MENU: self._ev_menu,
            _Screen.PICK: self._ev_pick,
            _Screen.PLAYING: self._ev_game,
            _Screen.WIN: self._ev_win,
        }
        _draw = {
            _Screen.MENU: self._draw_menu,
            _Screen.PICK: self._draw_pick,
            _Screen.PLAYING: self._draw_game,
            _Screen.WIN: self._draw_win,
        }

        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                handler = _dispatch.get(self._screen)
                if handler and not handler(ev):
                    running = False
                    break

            dt = self._clock.tick(30) / 1000.0
            if self._screen == _Screen.PLAYING and self._game is not None:
                self._game.advance(dt)
                self._check_win()

            drawer = _draw.get(self._screen)
            if drawer:
                drawer()
            pygame.display.flip()

        if self._game is not None:
            self._game.close()
        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(library: PhotoLibrary, config: GameConfig, game: GameKind | None = None) -> None:
    """Launch the Pygame GUI (opens to the menu, or straight into *game*)."""
    app = PygameApp(library, config, game)
    app.run_loop()
