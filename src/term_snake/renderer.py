"""Curses renderer: draws a Snapshot as board, HUD and menu overlays."""

from __future__ import annotations

import curses

from .food import FoodKind
from .game import SessionStatus, Snapshot


CELL_WIDTH: int = 2  # terminal columns per grid cell
HUD_ROWS: int = 2

BLOCK = "█" * CELL_WIDTH
# used when the terminal has no colours
MONO_GLYPHS = {
    "head": "@@",
    "body": "[]",
    "tail": "::",
    "food": "<>",
    "bonus": "$$",
}

# name -> (pair id, foreground, background)
PALETTE: dict[str, tuple[int, int, int]] = {
    "head": (1, curses.COLOR_WHITE, -1),
    "body": (2, curses.COLOR_GREEN, -1),
    "tail": (3, curses.COLOR_CYAN, -1),
    "food": (4, curses.COLOR_RED, -1),
    "bonus": (5, curses.COLOR_YELLOW, -1),
    "border": (6, curses.COLOR_BLUE, -1),
    "text": (7, curses.COLOR_WHITE, -1),
    "accent": (8, curses.COLOR_GREEN, -1),
    "muted": (9, curses.COLOR_BLUE, -1),
}


def format_game_length(elapsed_ms: int) -> str:
    total_secs = max(0, elapsed_ms) // 1000
    return f"{total_secs // 60:02}:{total_secs % 60:02}"


def foods_per_minute(score: int, elapsed_ms: int) -> float:
    if elapsed_ms <= 0:
        return 0.0
    return score / (elapsed_ms / 1000.0) * 60.0


def hud_line(snapshot: Snapshot, wsl: bool = False) -> tuple[str, str, str]:
    """Left, centre and right sections of the score row."""
    pad = "[PAD]" if snapshot.controller_enabled else "[NOPAD]"
    right = f"Hi: {snapshot.high_score} {pad}" + (" [WSL]" if wsl else "")
    return (
        f"Score: {snapshot.score.score}",
        f"Speed: {snapshot.score.speed_level}",
        right,
    )


def status_label(snapshot: Snapshot, wsl: bool = False) -> str:
    if snapshot.status in (SessionStatus.MENU, SessionStatus.PLAYING):
        return "snake (wsl)" if wsl else "snake"
    return {
        SessionStatus.PAUSED: "paused",
        SessionStatus.GAME_OVER: "game over",
        SessionStatus.VICTORY: "victory",
    }[snapshot.status]


def table_row(label: str, value: object) -> str:
    return f"{label:<14} {value}"


def overlay_lines(snapshot: Snapshot) -> list[str]:
    """Text of the popup shown over the board, empty while playing."""
    status = snapshot.status
    if status == SessionStatus.MENU:
        return [
            "TERMINAL SNAKE",
            "",
            table_row("High score", snapshot.high_score),
            "",
            "ENTER / A  start",
            "P / Start  pause",
            "Q / Back   quit",
            "",
            "Arrows/WASD or D-pad/stick to move",
        ]
    if status == SessionStatus.PAUSED:
        return ["PAUSED", "", "P to resume", "Q to quit"]
    if status.is_finished:
        score = snapshot.score.score
        is_new_high = score > snapshot.high_score
        cause = snapshot.death_reason.label if snapshot.death_reason else "-"
        lines = [
            "GAME OVER" if status == SessionStatus.GAME_OVER else "VICTORY",
            "",
            table_row("Score", score),
            table_row("High score", max(score, snapshot.high_score)),
            table_row("Cause", cause),
            table_row("Game length", format_game_length(snapshot.elapsed_ms)),
            table_row("Food/min", f"{foods_per_minute(score, snapshot.elapsed_ms):.1f}"),
            "",
        ]
        if is_new_high:
            lines.extend(["New high score!", ""])
        lines.extend(["ENTER for menu", "Q to quit"])
        return lines
    return []


def required_size(snapshot: Snapshot) -> tuple[int, int]:
    """Terminal rows and columns needed for the board plus HUD."""
    grid = snapshot.grid
    return grid.height + 2 + HUD_ROWS, grid.width * CELL_WIDTH + 2


class CursesRenderer:
    """Draws snapshots onto a curses window; never touches game state."""

    def __init__(self, window, *, wsl: bool = False) -> None:
        self.window = window
        self.wsl = wsl
        self.colors = False
        self._init_screen()

    def _init_screen(self) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # some terminals cannot hide the cursor
        if not curses.has_colors():
            return
        curses.start_color()
        curses.use_default_colors()
        for pair, fg, bg in PALETTE.values():
            curses.init_pair(pair, fg, bg)
        self.colors = True

    def _attr(self, name: str) -> int:
        if not self.colors:
            return curses.A_NORMAL
        return curses.color_pair(PALETTE[name][0])

    def _put(self, y: int, x: int, text: str, attr: int = curses.A_NORMAL) -> None:
        max_y, max_x = self.window.getmaxyx()
        if y < 0 or y >= max_y or x >= max_x:
            return
        try:
            self.window.addstr(y, max(0, x), text[: max(0, max_x - x)], attr)
        except curses.error:
            # writing the bottom-right cell moves the cursor off screen
            pass

    def _cell(self, name: str) -> tuple[str, int]:
        if self.colors:
            return BLOCK, self._attr(name)
        return MONO_GLYPHS[name], curses.A_NORMAL

    def draw(self, snapshot: Snapshot) -> None:
        """Render the current frame (border, food, snake, HUD, overlay)."""
        self.window.erase()
        rows, cols = required_size(snapshot)
        max_y, max_x = self.window.getmaxyx()
        if max_y < rows or max_x < cols:
            self._put(0, 0, f"Terminal too small: need {cols}x{rows}, have {max_x}x{max_y}")
            self.window.refresh()
            return

        self._draw_border(snapshot)
        self._draw_food(snapshot)
        self._draw_snake(snapshot)
        self._draw_hud(snapshot)
        lines = overlay_lines(snapshot)
        if lines:
            self._draw_overlay(snapshot, lines)
        self.window.refresh()

    def _draw_border(self, snapshot: Snapshot) -> None:
        width = snapshot.grid.width * CELL_WIDTH
        attr = self._attr("border")
        self._put(0, 0, "+" + "-" * width + "+", attr)
        for y in range(1, snapshot.grid.height + 1):
            self._put(y, 0, "|", attr)
            self._put(y, width + 1, "|", attr)
        self._put(snapshot.grid.height + 1, 0, "+" + "-" * width + "+", attr)

    def _draw_at(self, pos: tuple[int, int], name: str) -> None:
        glyph, attr = self._cell(name)
        self._put(pos[1] + 1, pos[0] * CELL_WIDTH + 1, glyph, attr)

    def _draw_food(self, snapshot: Snapshot) -> None:
        food = snapshot.food
        if food is None:
            return
        self._draw_at(food.position, "bonus" if food.kind is FoodKind.BONUS else "food")

    def _draw_snake(self, snapshot: Snapshot) -> None:
        last = len(snapshot.snake) - 1
        for idx, pos in enumerate(snapshot.snake):
            if idx == 0:
                name = "head"
            elif idx == last:
                name = "tail"
            else:
                name = "body"
            self._draw_at(pos, name)

    def _draw_hud(self, snapshot: Snapshot) -> None:
        top = snapshot.grid.height + 2
        width = snapshot.grid.width * CELL_WIDTH + 2
        left, center, right = hud_line(snapshot, self.wsl)
        self._put(top, 0, left, self._attr("text") | curses.A_BOLD)
        self._put(top, (width - len(center)) // 2, center)
        self._put(top, width - len(right), right)

        label = status_label(snapshot, self.wsl)
        dims = f"{snapshot.grid.width}x{snapshot.grid.height}"
        if snapshot.food is not None and snapshot.food.ticks_remaining:
            label += f"  bonus {snapshot.food.ticks_remaining}"
        self._put(top + 1, (width - len(label)) // 2, label, self._attr("muted"))
        self._put(top + 1, width - len(dims), dims, self._attr("muted"))

    def _draw_overlay(self, snapshot: Snapshot, lines: list[str]) -> None:
        inner_width = max(len(line) for line in lines) + 4
        board_width = snapshot.grid.width * CELL_WIDTH + 2
        board_height = snapshot.grid.height + 2
        left = max(0, (board_width - inner_width) // 2)
        top = max(0, (board_height - len(lines)) // 2)
        text_attr = self._attr("text")
        for idx, line in enumerate(lines):
            attr = text_attr
            if idx == 0:
                attr = self._attr("accent") | curses.A_BOLD
            self._put(top + idx, left, f"  {line:<{inner_width - 4}}  ", attr | curses.A_REVERSE)
