"""The terminal 2048 game: rotate, merge and undo on a square grid."""

from __future__ import annotations

import argparse
import copy
import random
import sys
from typing import Optional

DEFAULT_SIZE = 4

# How many quarter turns clockwise bring each direction onto "left".
_ROTATIONS = {
    "w": 3,
    "s": 1,
    "a": 0,
    "d": 2,
}

PROMPT = "Enter command (w/a/s/d to move, u to undo, q to quit): "


class InvalidMoveError(ValueError):
    """Raised for a key that is not one of w, a, s, d."""


class UndoError(RuntimeError):
    """Raised when there is no step to take back."""


def _merge_pass(tiles: list[int]) -> int:
    """Merge equal neighbours in place, in one sweep; return points gained.

    After a merge the sweep resumes one place past the merged tile, so a
    freshly merged tile is not compared with the one that follows it.
    """
    gained = 0
    i = 1
    while i < len(tiles):
        if tiles[i] == tiles[i - 1]:
            tiles[i] *= 2
            gained += tiles[i]
            del tiles[i - 1]
        i += 1
    return gained


class ClassicGame:
    """A 2048 board with score, step count and one level of undo."""

    def __init__(self, size: int = DEFAULT_SIZE, rng: Optional[random.Random] = None) -> None:
        if size < 1:
            raise ValueError("size must be positive")
        self.size = size
        self.rng = rng if rng is not None else random.Random()
        self.board: list[list[int]] = [[0] * size for _ in range(size)]
        self.score = 0
        self.step = 0
        self.game_over = False
        self._previous_board: list[list[int]] = copy.deepcopy(self.board)
        self._previous_score = 0
        self.generate_random_tile()
        self.generate_random_tile()

    def generate_random_tile(self) -> Optional[tuple[int, int]]:
        """Place a 2 or a 4, equally likely, on a random empty cell.

        When no cell is empty the game is over and None is returned.
        """
        empty = [
            (r, c)
            for r, row in enumerate(self.board)
            for c, value in enumerate(row)
            if value == 0
        ]
        if not empty:
            self.game_over = True
            return None
        row, col = empty[self.rng.randrange(len(empty))]
        self.board[row][col] = (self.rng.randrange(2) + 1) * 2
        return row, col

    def rotate_board(self, times: int) -> None:
        """Turn the board a quarter turn clockwise ``times`` times."""
        for _ in range(times):
            self.board = [list(row) for row in zip(*reversed(self.board))]

    def move(self, key: str) -> None:
        """Push every tile in the direction named by a w/a/s/d key."""
        rotations = _ROTATIONS.get(key.lower())
        if rotations is None:
            raise InvalidMoveError("Invalid move!")
        self.step += 1
        self._previous_board = copy.deepcopy(self.board)
        self._previous_score = self.score
        self.rotate_board(rotations)
        new_rows = []
        for row in self.board:
            tiles = [value for value in row if value != 0]
            self.score += _merge_pass(tiles)
            self.score += _merge_pass(tiles)
            new_rows.append(tiles + [0] * (self.size - len(tiles)))
        self.board = new_rows
        self.rotate_board((4 - rotations) % 4)
        self.generate_random_tile()

    def undo(self) -> None:
        """Restore the board and score from before the last move."""
        if self.step == 0:
            raise UndoError("No previous step to undo!")
        self.board = copy.deepcopy(self._previous_board)
        self.score = self._previous_score
        self.step -= 1
        self.game_over = False

    def render(self) -> str:
        """The board as text, one row per line, then the score."""
        rows = ["".join(f"{value} " for value in row) for row in self.board]
        return "\n".join(rows) + f"\nScore: {self.score}\n"

    def is_game_over(self) -> bool:
        return self.game_over


def main(argv: Optional[list[str]] = None) -> int:
    """Play in the terminal, one command per line."""
    parser = argparse.ArgumentParser(
        prog="merge2048-classic",
        description="Play 2048 in the terminal.",
    )
    parser.parse_args(argv)

    game = ClassicGame(DEFAULT_SIZE)
    while True:
        print(game.render(), end="")
        print(PROMPT, end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            print()
            break
        command = line.strip()[:1]
        if command in ("q", "Q"):
            break
        try:
            if command in ("u", "U"):
                game.undo()
            else:
                game.move(command)
        except (InvalidMoveError, UndoError) as exc:
            print(exc)
        if game.is_game_over():
            print("Game Over!")
            break
        print()
    return 0