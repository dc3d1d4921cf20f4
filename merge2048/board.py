"""The 4x4 sliding-tile board, its colours and its save-file format."""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

SIZE = 4
WIN_TILE = 2048
EMPTY_COLOR = "#cdc1b4"
DARK_TEXT = "#776e65"
LIGHT_TEXT = "#f9f6f2"

_TILE_COLORS = {
    2: "#eee4da",
    4: "#ede0c8",
    8: "#f2b179",
    16: "#f59563",
    32: "#f67c5f",
    64: "#f65e3b",
    128: "#edcf72",
    256: "#edcc61",
    512: "#edc850",
    1024: "#edc53f",
    2048: "#edc22e",
}
_DEFAULT_TILE_COLOR = "#3c3a32"


class Direction(enum.Enum):
    """A direction in which all tiles are pushed."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


_KEYS = {
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
}


def direction_for_key(key: str) -> Optional[Direction]:
    """Map an arrow-key name or a WASD letter to a direction, or None."""
    return _KEYS.get(key.strip().lower())


def color_for_number(number: int) -> str:
    """Background colour of a tile holding ``number``."""
    return _TILE_COLORS.get(number, _DEFAULT_TILE_COLOR)


def text_color_for_number(number: int) -> str:
    """Text colour of a tile holding ``number``."""
    return DARK_TEXT if number <= 4 else LIGHT_TEXT


def format_elapsed(seconds: int) -> str:
    """Format a duration as zero-padded ``MM:SS``."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def parse_elapsed(text: str) -> Optional[int]:
    """Turn ``MM:SS`` back into seconds; None unless there are two parts.

    A part that is not a number counts as zero.
    """
    parts = text.split(":")
    if len(parts) != 2:
        return None
    minutes, secs = (_to_int(part) for part in parts)
    return minutes * 60 + secs


def _line_coords(direction: Direction) -> list[list[tuple[int, int]]]:
    """Cell coordinates of each line, ordered towards ``direction``."""
    forward = list(range(SIZE))
    backward = forward[::-1]
    if direction is Direction.LEFT:
        return [[(r, c) for c in forward] for r in forward]
    if direction is Direction.RIGHT:
        return [[(r, c) for c in backward] for r in forward]
    if direction is Direction.UP:
        return [[(r, c) for r in forward] for c in forward]
    return [[(r, c) for r in backward] for c in forward]


def _merge_line(values: Sequence[int]) -> tuple[list[int], int]:
    """Merge directly adjacent equal tiles, leading end first."""
    cells = list(values)
    gained = 0
    for k in range(len(cells) - 1):
        if cells[k] and cells[k] == cells[k + 1]:
            cells[k] *= 2
            gained += cells[k]
            cells[k + 1] = 0
    return cells, gained


def _compact_line(values: Sequence[int]) -> tuple[list[int], bool]:
    """Slide tiles to the leading end; report whether any tile moved."""
    tiles = [v for v in values if v]
    packed = tiles + [0] * (len(values) - len(tiles))
    return packed, packed != list(values)


class Board:
    """Tile grid with score and step counter."""

    def __init__(
        self,
        grid: Optional[Sequence[Sequence[int]]] = None,
        score: int = 0,
        steps: int = 0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        if grid is None:
            self.reset()
            return
        rows = [list(row) for row in grid]
        if len(rows) != SIZE or any(len(row) != SIZE for row in rows):
            raise ValueError(f"grid must be {SIZE}x{SIZE}")
        self.grid = rows
        self.score = score
        self.steps = steps

    def reset(self) -> None:
        """Clear the board, zero the counters and place two tiles."""
        self.grid = [[0] * SIZE for _ in range(SIZE)]
        self.score = 0
        self.steps = 0
        self.spawn_tile()
        self.spawn_tile()

    def spawn_tile(self) -> Optional[tuple[int, int]]:
        """Put a 2 (90%) or a 4 (10%) on a random empty cell.

        Returns the cell used, or None when the board is full.
        """
        empty = [
            (r, c)
            for r, row in enumerate(self.grid)
            for c, value in enumerate(row)
            if value == 0
        ]
        if not empty:
            return None
        row, col = empty[self.rng.randrange(len(empty))]
        self.grid[row][col] = 2 if self.rng.randrange(10) < 9 else 4
        return row, col

    def move(self, direction: Direction) -> bool:
        """Merge, then slide, every line towards ``direction``.

        Merges add to the score even when nothing slides. Only when a tile
        slides does the turn count: the step counter goes up and a new tile
        is placed. Returns whether a tile slid.
        """
        moved = False
        for coords in _line_coords(direction):
            values = [self.grid[r][c] for r, c in coords]
            merged, gained = _merge_line(values)
            self.score += gained
            packed, slid = _compact_line(merged)
            moved = moved or slid
            for (r, c), value in zip(coords, packed):
                self.grid[r][c] = value
        if moved:
            self.steps += 1
            self.spawn_tile()
        return moved

    def can_move(self) -> bool:
        """True while there is an empty cell or two equal neighbours."""
        if any(0 in row for row in self.grid):
            return True
        for row in self.grid:
            if any(a == b for a, b in zip(row, row[1:])):
                return True
        for col in zip(*self.grid):
            if any(a == b for a, b in zip(col, col[1:])):
                return True
        return False

    def has_won(self) -> bool:
        """True once any tile reaches the winning value."""
        return any(value >= WIN_TILE for row in self.grid for value in row)


@dataclass
class LoadedGame:
    """A board read from a save file, with the elapsed time as stored."""

    board: Board
    elapsed_text: str

    @property
    def elapsed_seconds(self) -> Optional[int]:
        return parse_elapsed(self.elapsed_text)


def save_game(path: str | Path, board: Board, elapsed: int | str) -> None:
    """Write score, steps, elapsed time and the grid to ``path``."""
    elapsed_text = elapsed if isinstance(elapsed, str) else format_elapsed(elapsed)
    lines = [str(board.score), str(board.steps), elapsed_text]
    lines.extend("".join(f"{value} " for value in row) for row in board.grid)
    Path(path).write_text("\n".join(lines) + "\n", encoding="utf-8")


def load_game(path: str | Path, rng: Optional[random.Random] = None) -> LoadedGame:
    """Read a game written by :func:`save_game`.

    Fields that are missing or not numbers read as zero.
    """
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    lines += [""] * (3 + SIZE - len(lines))
    score = _to_int(lines[0])
    steps = _to_int(lines[1])
    elapsed_text = lines[2]
    grid = [[0] * SIZE for _ in range(SIZE)]
    for row, line in zip(grid, lines[3 : 3 + SIZE]):
        for c, part in enumerate(line.split(" ")[:SIZE]):
            row[c] = _to_int(part)
    board = Board(grid, score=score, steps=steps, rng=rng)
    return LoadedGame(board=board, elapsed_text=elapsed_text)