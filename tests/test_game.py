"""Unit tests for the board model and outcome evaluation."""

import pytest

from tictactoe.game import DRAW, IN_PROGRESS, WINNING_LINES, Board, evaluate


def test_new_board_is_empty_and_in_progress():
    board = Board()
    assert board.cells == [" "] * 9
    assert board.available_moves() == list(range(9))
    assert board.outcome() == IN_PROGRESS


@pytest.mark.parametrize("line", WINNING_LINES)
def test_each_line_is_detected(line):
    cells = [" "] * 9
    for idx in line:
        cells[idx] = "O"
    outcome = evaluate(cells)
    assert outcome.winner == "O"
    assert outcome.line == line
    assert outcome.finished


def test_win_with_other_marks_on_board():
    cells = ["X", "O", "O",
             "X", "X", "O",
             " ", " ", "X"]
    outcome = evaluate(cells)
    assert outcome.winner == "X"
    assert outcome.line == (0, 4, 8)


def test_win_on_full_board_beats_draw():
    cells = ["X", "O", "X",
             "O", "X", "O",
             "O", "X", "X"]
    outcome = evaluate(cells)
    assert outcome.winner == "X"
    assert not outcome.drawn


def test_full_board_without_line_is_draw():
    cells = ["X", "O", "X",
             "X", "O", "O",
             "O", "X", "X"]
    assert evaluate(cells) == DRAW
    assert evaluate(cells).finished


def test_first_line_in_order_wins_on_overfilled_board():
    cells = ["X", "X", "X",
             "O", "O", "O",
             " ", " ", " "]
    outcome = evaluate(cells)
    assert outcome.winner == "X"
    assert outcome.line == (0, 1, 2)


def test_place_rejects_occupied_cell():
    board = Board()
    board.place("X", 4)
    with pytest.raises(ValueError):
        board.place("O", 4)
    assert board.cells[4] == "X"


def test_place_rejects_bad_index_and_player():
    board = Board()
    with pytest.raises(ValueError):
        board.place("X", 9)
    with pytest.raises(ValueError):
        board.place("Z", 0)


def test_board_requires_nine_cells():
    with pytest.raises(ValueError):
        Board(cells=[" "] * 8)


def test_snapshot_is_independent():
    board = Board()
    snap = board.snapshot()
    snap[0] = "X"
    assert board.cells[0] == " "
