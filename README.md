# merge2048

The 2048 sliding-tile puzzle for the terminal.

You slide the tiles on a 4×4 board. In each line, tiles that sit directly next to each other and hold the same number merge into one tile that holds their sum. The sum is added to your score. After that, the tiles slide to the edge you chose. If at least one tile slid, the move counts as a step and a new tile appears on a free square. The new tile is a 2 nine times out of ten and a 4 otherwise. You win when a tile reaches 2048. The game is lost when the board is full and no two neighbouring tiles are equal.

Merging happens before sliding, so two equal tiles with an empty square between them do not merge on that move.

## Installation

```
pip install .
```

You need Python 3.10 or later. The package has no other dependencies.

## Playing

```
merge2048 [--users FILE]
```

All input is typed as lines. Press Enter after each command.

### Accounts

Before the main menu you log in or register:

- `1` logs in
- `2` registers
- `q` quits

Accounts are stored in a plain text file, one `username password` pair per line. By default this is `users.txt` in the current directory. Use `--users` to choose another file. Passwords are stored as plain text.

### Main menu

| Choice | Action                 |
|--------|------------------------|
| `1`    | start a game           |
| `2`    | show the instructions  |
| `3`    | show the key bindings  |
| `4`    | exit                   |

### Game commands

| Command          | Action                           |
|------------------|----------------------------------|
| `w` or `up`      | move up                          |
| `s` or `down`    | move down                        |
| `a` or `left`    | move left                        |
| `d` or `right`   | move right                       |
| `new`            | start a new game                 |
| `save <file>`    | save the current game            |
| `load <file>`    | load a saved game                |
| `back`           | return to the main menu          |

Each time the board is drawn it shows the score, the step count and the elapsed time. When you win or lose, you are asked whether to play again.

A save file is plain text. It holds:

1. the score
2. the step count
3. the elapsed time as `MM:SS`
4. the four board rows, each row as numbers separated by spaces

A field that is missing or is not a number is read as zero. When you load a file whose time is in `MM:SS` form, the clock continues from that time.

## Classic variant

```
merge2048-classic
```

This is a simpler loop that prints the board and the score after every command:

- `w`, `a`, `s`, `d` slide the tiles
- `u` takes back the last move (only one level of undo)
- `q` quits

Any other command is rejected with `Invalid move!`.

This variant has different rules:

- A new tile is a 2 or a 4 with equal chance.
- Every valid key counts as a step and places a new tile, even if no tile moved.
- The game ends when a new tile cannot be placed.

## Using the library

`merge2048.board` contains the board logic: `Board`, `Direction`, `direction_for_key`, `color_for_number`, `text_color_for_number`, `format_elapsed`, `parse_elapsed`, `save_game` and `load_game`. `load_game` returns a `LoadedGame`, which holds the board and the stored elapsed time.

```python
import random
from merge2048.board import Board, Direction

board = Board(rng=random.Random(1))
moved = board.move(Direction.LEFT)
print(board.score, board.steps, board.can_move(), board.has_won())
```

The other modules:

- `merge2048.accounts` provides `UserStore`, `login` and `register`. Failures raise `AccountError`.
- `merge2048.app` provides `GameSession`, which pairs a board with a timer. Its `handle_key` method returns an `Outcome`. The module also provides `App`, the text front end. `App` reads from and writes to any text streams you pass in.
- `merge2048.classic` provides `ClassicGame` for the rotating-board variant. It raises `InvalidMoveError` for a bad key and `UndoError` when there is nothing to undo.

## What it does not do

- There is no graphical window. The game runs only as text in a terminal.
- Keys are not read one press at a time. Each command is a typed line.
- The clock is not redrawn live. It updates only when the board is drawn again.

## Running the tests

```
pip install .[test]
pytest
```