"""Tests for the Tic-Tac-Toe minimax AI."""

from tictactoe.ai import MinimaxAI, best_move
from tictactoe.game import Board, evaluate


def _cells(spec):
    return [" " if c == "." else c for c in spec]


def test_ai_takes_immediate_win():
    cells = _cells("XX.OO....")
    result = best_move(cells, "X", "O")
    assert result.move == 2
    assert result.score == 10


def test_ai_blocks_opponent():
    # O threatens 2-5-8 and X has no winning move of its own.
    cells = _cells("..OXXO...")
    result = best_move(cells, "X", "O")
    assert result.move == 8
    assert result.score > -10


def test_search_restores_working_board():
    cells = _cells("X...O....")
    before = list(cells)
    best_move(cells, "X", "O")
    assert cells == before


def test_search_is_deterministic():
    cells = _cells("X...O....")
    first = best_move(list(cells), "X", "O")
    second = best_move(list(cells), "X", "O")
    assert first == second


def test_reply_to_center_is_lowest_corner():
    result = best_move(_cells("....X...."), "O", "X")
    assert result.move == 0
    assert result.score == 0


def test_terminal_board_yields_no_move():
    won = best_move(_cells("XXXOO...."), "X", "O")
    assert won.move is None
    assert won.score == 10

    lost = best_move(_cells("XXXOO...."), "O", "X")
    assert lost.move is None
    assert lost.score == -10

    drawn = best_move(_cells("XOXXOOOXX"), "X", "O")
    assert drawn.move is None
    assert drawn.score == 0


def test_wins_are_not_discounted_by_depth():
    # 8 wins at once, 1 forks 1-4-7 and 0-4-8 and wins a move later.
    result = best_move(_cells("X.O.X.O.."), "X", "O")
    assert result.move == 1
    assert result.score == 10


def test_self_play_from_empty_board_is_a_draw():
    board = Board()
    player, opponent = "X", "O"
    while not board.outcome().finished:
        result = best_move(board.snapshot(), player, opponent)
        board.place(player, result.move)
        player, opponent = opponent, player
    assert board.outcome().drawn


def test_ai_as_x_never_loses_against_any_replies():
    ai = MinimaxAI(player="X")

    def explore(board):
        if board.outcome().finished:
            assert board.outcome().winner != "O"
            return
        board = Board(cells=board.snapshot())
        board.place("X", ai.choose(board).move)
        if board.outcome().finished:
            assert board.outcome().winner != "O"
            return
        for reply in board.available_moves():
            child = Board(cells=board.snapshot())
            child.place("O", reply)
            explore(child)

    explore(Board())


def test_ai_choose_leaves_board_untouched():
    board = Board()
    board.place("X", 0)
    ai = MinimaxAI(player="O")
    result = ai.choose(board)
    assert board.cells == ["X"] + [" "] * 8
    assert result.move is not None
    assert ai.last_nodes > 0
    assert evaluate(board.cells).finished is False
