"""Text front end: log in, pick from the main menu, play on the 4x4 board."""

from __future__ import annotations

import argparse
import enum
import random
import sys
import time
from pathlib import Path
from typing import Callable, Optional, TextIO

from .accounts import DEFAULT_USERS_FILE, AccountError, UserStore, login, register
from .board import (
    Board,
    direction_for_key,
    format_elapsed,
    load_game,
    save_game,
)

INSTRUCTIONS = (
    "Game instructions\n\n"
    "2048 is a number puzzle: merge tiles holding the same number until a "
    "tile reaches 2048.\n\n"
    "Rules:\n"
    "1. Use the arrow keys (up, down, left, right) or WASD to move every tile.\n"
    "2. When two tiles with the same number meet, they merge into their sum.\n"
    "3. After each move a new 2 or 4 appears on a random empty cell.\n"
    "4. The game ends when no move is possible.\n\n"
    "Tips:\n"
    "1. Grow in one direction, for example keep the largest tile in a corner.\n"
    "2. Merge the larger numbers first.\n"
    "3. Keep some empty cells to stay flexible.\n\n"
    "Good luck!\n"
)

KEY_BINDINGS = (
    "Key bindings\n\n"
    "Arrow keys:\n"
    "up    - move tiles up\n"
    "down  - move tiles down\n"
    "left  - move tiles left\n"
    "right - move tiles right\n\n"
    "WASD keys:\n"
    "w - move tiles up\n"
    "s - move tiles down\n"
    "a - move tiles left\n"
    "d - move tiles right\n\n"
    "Game control:\n"
    "new         - start a new game\n"
    "save <file> - save the current game\n"
    "load <file> - load a saved game\n"
    "back        - return to the main menu\n"
)

LOGIN_MENU = "User login\n  1) Log in\n  2) Register\n  q) Quit\n"
MAIN_MENU = (
    "2048\n  1) Start game\n  2) Instructions\n  3) Key bindings\n  4) Exit\n"
)

Clock = Callable[[], float]


class Outcome(enum.Enum):
    """What a key press did to the game."""

    IGNORED = "ignored"
    UNCHANGED = "unchanged"
    MOVED = "moved"
    WON = "won"
    LOST = "lost"


class GameSession:
    """One game on the board with its timer."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock if clock is not None else time.monotonic
        self.new_game()

    def new_game(self) -> None:
        """Start over with a fresh board and a restarted timer."""
        self.board = Board(rng=self.rng)
        self._start = self.clock()
        self._stopped_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._stopped_at is None

    def _stop(self) -> None:
        if self._stopped_at is None:
            self._stopped_at = self.clock()

    def handle_key(self, key: str) -> Outcome:
        """Apply a direction key and report the result."""
        direction = direction_for_key(key)
        if direction is None:
            return Outcome.IGNORED
        if not self.board.move(direction):
            return Outcome.UNCHANGED
        if self.board.has_won():
            self._stop()
            return Outcome.WON
        if not self.board.can_move():
            self._stop()
            return Outcome.LOST
        return Outcome.MOVED

    def elapsed(self) -> int:
        """Whole seconds played; frozen once the game has ended."""
        now = self._stopped_at if self._stopped_at is not None else self.clock()
        return int(now - self._start)

    def save(self, path: str | Path) -> None:
        save_game(path, self.board, self.elapsed())

    def load(self, path: str | Path) -> None:
        """Replace the board with a saved one and resume its timer."""
        loaded = load_game(path, rng=self.rng)
        self.board = loaded.board
        seconds = loaded.elapsed_seconds
        if seconds is not None:
            self._start = self.clock() - seconds
            self._stopped_at = None


def _render(session: GameSession) -> str:
    board = session.board
    header = (
        f"Score: {board.score}  Steps: {board.steps}  "
        f"Time: {format_elapsed(session.elapsed())}"
    )
    rows = [
        "".join(f"{value if value else '.':>6}" for value in row)
        for row in board.grid
    ]
    return header + "\n" + "\n".join(rows) + "\n"


class App:
    """The login screen, main menu and game loop over text streams."""

    def __init__(
        self,
        store: UserStore,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.store = store
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock if clock is not None else time.monotonic

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _ask(self, prompt: str) -> Optional[str]:
        self._write(prompt)
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def _ask_fields(self, *labels: str) -> Optional[list[str]]:
        """Ask for each labelled field in turn; None once input runs out."""
        answers = []
        for label in labels:
            answer = self._ask(f"{label}: ")
            if answer is None:
                return None
            answers.append(answer)
        return answers

    def run(self) -> int:
        """Log in, then show the main menu until the user leaves."""
        if self.login_screen() is None:
            return 0
        self.menu()
        return 0

    def login_screen(self) -> Optional[str]:
        """Log in or register; return the username, or None on quit."""
        while True:
            self._write(LOGIN_MENU)
            choice = self._ask("> ")
            if choice is None:
                return None
            choice = choice.strip().lower()
            if choice in ("q", "quit"):
                return None
            if choice in ("1", "login"):
                fields = self._ask_fields("Username", "Password")
                if fields is None:
                    return None
                username, entered = fields
                try:
                    name = login(self.store, username, entered)
                except AccountError as exc:
                    self._write(f"Login failed: {exc}\n")
                    continue
                self._write(f"Welcome, {name}!\n")
                return name
            if choice in ("2", "register"):
                fields = self._ask_fields("Username", "Password", "Confirm password")
                if fields is None:
                    return None
                username, entered, repeated = fields
                try:
                    register(self.store, username, entered, repeated)
                except AccountError as exc:
                    self._write(f"Registration failed: {exc}\n")
                    continue
                self._write("Account created, please log in!\n")
                continue
            self._write("Unknown choice.\n")

    def menu(self) -> None:
        """Main menu: play, read the help screens, or exit."""
        while True:
            self._write(MAIN_MENU)
            choice = self._ask("> ")
            if choice is None:
                return
            choice = choice.strip().lower()
            if choice in ("1", "start"):
                if not self.play():
                    return
            elif choice in ("2", "instructions"):
                self._write(INSTRUCTIONS)
            elif choice in ("3", "keys"):
                self._write(KEY_BINDINGS)
            elif choice in ("4", "q", "exit", "quit"):
                return
            else:
                self._write("Unknown choice.\n")

    def _play_again(self, question: str) -> Optional[bool]:
        answer = self._ask(question + " (y/n) ")
        if answer is None:
            return None
        return answer.strip().lower() in ("y", "yes")

    def play(self) -> bool:
        """Run one game; False when input ran out, True on return to menu."""
        session = GameSession(self.rng, self.clock)
        while True:
            self._write(_render(session))
            line = self._ask("Move: ")
            if line is None:
                return False
            command = line.strip()
            word, _, argument = command.partition(" ")
            word = word.lower()
            argument = argument.strip()
            if not command:
                continue
            if word in ("back", "esc", "b"):
                return True
            if word in ("new", "n"):
                session.new_game()
                continue
            if word in ("save", "load"):
                if not argument:
                    self._write(f"Usage: {word} <file>\n")
                    continue
                try:
                    if word == "save":
                        session.save(argument)
                        self._write("Game saved.\n")
                    else:
                        session.load(argument)
                        self._write("Game loaded.\n")
                except OSError:
                    self._write(f"Cannot {word} game file!\n")
                continue
            outcome = session.handle_key(command)
            if outcome is Outcome.IGNORED:
                self._write("Unknown command.\n")
                continue
            if outcome is Outcome.WON:
                self._write(_render(session))
                again = self._play_again("You won! Play again?")
            elif outcome is Outcome.LOST:
                self._write(_render(session))
                again = self._play_again(
                    f"Game over. Your score: {session.board.score}. Play again?"
                )
            else:
                continue
            if again is None:
                return False
            if not again:
                return True
            session.new_game()


def main(argv: Optional[list[str]] = None) -> int:
    """Start the game with login and main menu in the terminal."""
    parser = argparse.ArgumentParser(prog="merge2048", description="Play 2048.")
    parser.add_argument(
        "--users",
        default=str(DEFAULT_USERS_FILE),
        help="file holding the user accounts",
    )
    args = parser.parse_args(argv)
    return App(UserStore(args.users)).run()