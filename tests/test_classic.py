import copy
import io
import random
import sys

import pytest

from merge2048.classic import ClassicGame, InvalidMoveError, UndoError, main


def _game(board, seed=0):
    game = ClassicGame(rng=random.Random(seed))
    game.board = copy.deepcopy(board)
    game.score = 0
    return game


CHECKER = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
]


def _empty():
    return [[0] * 4 for _ in range(4)]


@pytest.mark.parametrize("seed", range(10))
def test_new_game_has_two_tiles(seed):
    game = ClassicGame(rng=random.Random(seed))
    tiles = [v for row in game.board for v in row if v]
    assert len(tiles) == 2
    assert set(tiles) <= {2, 4}
    assert game.score == 0
    assert game.step == 0
    assert game.is_game_over() is False


def test_size_must_be_positive():
    with pytest.raises(ValueError):
        ClassicGame(0)


def test_rotate_four_times_is_identity():
    grid = [[r * 4 + c + 1 for c in range(4)] for r in range(4)]
    game = _game(grid)
    game.rotate_board(4)
    assert game.board == grid


def test_rotate_one_then_three_is_identity():
    grid = [[r * 4 + c + 1 for c in range(4)] for r in range(4)]
    game = _game(grid)
    game.rotate_board(1)
    assert game.board != grid
    game.rotate_board(3)
    assert game.board == grid


def test_rotate_twice_is_half_turn():
    grid = [[r * 4 + c + 1 for c in range(4)] for r in range(4)]
    game = _game(grid)
    game.rotate_board(2)
    assert game.board == [row[::-1] for row in grid[::-1]]


def test_rotate_once_moves_bottom_left_to_top_left():
    grid = [[r * 4 + c + 1 for c in range(4)] for r in range(4)]
    game = _game(grid)
    game.rotate_board(1)
    assert game.board[0][0] == grid[3][0]
    assert game.board[0][3] == grid[0][0]


def test_four_equal_tiles_merge_through_both_passes():
    board = _empty()
    board[0] = [2, 2, 2, 2]
    game = _game(board)
    game.move("a")
    assert game.board[0][0] == 8
    assert game.score == 16


@pytest.mark.parametrize(
    "key, start, end",
    [
        ("d", (0, 0), (0, 3)),
        ("D", (0, 0), (0, 3)),
        ("s", (0, 0), (3, 0)),
        ("w", (3, 1), (0, 1)),
        ("a", (2, 3), (2, 0)),
    ],
)
def test_single_tile_slides_to_edge(key, start, end):
    board = _empty()
    board[start[0]][start[1]] = 2
    game = _game(board)
    game.move(key)
    assert game.board[end[0]][end[1]] == 2
    assert game.step == 1


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("key", ["w", "a", "s", "d"])
def test_move_keeps_tile_sum_plus_new_tile(seed, key):
    rng = random.Random(seed)
    game = ClassicGame(rng=rng)
    for _ in range(5):
        game.move(rng.choice("wasd"))
    before = sum(map(sum, game.board))
    full_before = all(v for row in game.board for v in row)
    game.move(key)
    after = sum(map(sum, game.board))
    if game.is_game_over():
        assert after == before
    else:
        assert after - before in (2, 4) or full_before


def test_invalid_key_raises_and_leaves_state():
    game = ClassicGame(rng=random.Random(1))
    board = copy.deepcopy(game.board)
    with pytest.raises(InvalidMoveError, match="Invalid move!"):
        game.move("x")
    assert game.board == board
    assert game.step == 0


def test_empty_key_is_invalid():
    game = ClassicGame(rng=random.Random(1))
    with pytest.raises(InvalidMoveError):
        game.move("")


def test_undo_at_start_raises():
    game = ClassicGame(rng=random.Random(2))
    with pytest.raises(UndoError, match="No previous step to undo!"):
        game.undo()


def test_undo_restores_board_and_score():
    board = _empty()
    board[1] = [4, 4, 0, 0]
    game = _game(board)
    game.move("a")
    assert game.score > 0
    game.undo()
    assert game.board == board
    assert game.score == 0
    assert game.step == 0


def test_full_board_without_merges_ends_game():
    game = _game(CHECKER)
    game.move("a")
    assert game.board == CHECKER
    assert game.is_game_over() is True
    assert game.step == 1


def test_undo_clears_game_over():
    game = _game(CHECKER)
    game.move("a")
    game.undo()
    assert game.is_game_over() is False
    assert game.step == 0
    assert game.board == CHECKER


def test_generate_on_full_board_returns_none():
    game = _game(CHECKER)
    assert game.generate_random_tile() is None
    assert game.is_game_over() is True


def test_generate_fills_an_empty_cell():
    game = _game(_empty())
    cell = game.generate_random_tile()
    assert cell is not None
    r, c = cell
    assert game.board[r][c] in (2, 4)
    assert sum(1 for row in game.board for v in row if v) == 1


def test_render_format():
    game = _game(_empty())
    assert game.render() == "0 0 0 0 \n" * 4 + "Score: 0\n"


def test_main_quits(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("q\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Enter command (w/a/s/d to move, u to undo, q to quit): " in out
    assert "Score: 0" in out


def test_main_reports_undo_error(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("u\nq\n"))
    assert main([]) == 0
    assert "No previous step to undo!" in capsys.readouterr().out


def test_main_reports_invalid_move(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("x\nQ\n"))
    assert main([]) == 0
    assert "Invalid move!" in capsys.readouterr().out


def test_main_stops_at_end_of_input(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("a\n"))
    assert main([]) == 0
    assert capsys.readouterr().out.count("Enter command") == 2