"""Exhaustive minimax search over the full Tic-Tac-Toe game tree."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional
import logging
import math

from .game import EMPTY, PLAYERS, Board, Player, empty_cells, evaluate, other

logger = logging.getLogger(__name__)

WIN_SCORE = 10
LOSS_SCORE = -10
DRAW_SCORE = 0


@dataclass(frozen=True)
class SearchResult:
    move: Optional[int]
    score: int


@contextmanager
def _placed(cells: List[str], idx: int, player: Player) -> Iterator[None]:
    # Scoped write: the cell is emptied again even if the recursion raises.
    cells[idx] = player
    try:
        yield
    finally:
        cells[idx] = EMPTY


class _Search:
    def __init__(self, cells: List[str], searching: Player, opponent: Player):
        self.cells = cells
        self.searching = searching
        self.opponent = opponent
        self.nodes = 0

    def run(self, maximizing: bool) -> SearchResult:
        self.nodes += 1
        outcome = evaluate(self.cells)
        if outcome.winner == self.searching:
            return SearchResult(None, WIN_SCORE)
        if outcome.winner == self.opponent:
            return SearchResult(None, LOSS_SCORE)
        if outcome.drawn:
            return SearchResult(None, DRAW_SCORE)

        best_move: Optional[int] = None
        if maximizing:
            value = -math.inf
            for move in empty_cells(self.cells):
                with _placed(self.cells, move, self.searching):
                    score = self.run(False).score
                if score > value:
                    value, best_move = score, move
        else:
            value = math.inf
            for move in empty_cells(self.cells):
                with _placed(self.cells, move, self.opponent):
                    score = self.run(True).score
                if score < value:
                    value, best_move = score, move

        assert best_move is not None, "non-terminal board without empty cells"
        return SearchResult(best_move, int(value))


def best_move(
    cells: List[str], searching: Player, opponent: Player
) -> SearchResult:
    """Return the optimal move for ``searching`` and its game-theoretic value.

    Wins score +10 and losses -10 regardless of depth; ties between equally
    scored moves go to the lowest cell index. ``cells`` is used as the working
    board and is restored before returning, so callers should pass a copy they
    own. On an already finished board the result has ``move=None``.
    """
    assert len(cells) == 9, "board must have 9 cells"
    assert searching in PLAYERS and opponent in PLAYERS, "unknown player"
    assert searching != opponent, "searching and opponent must differ"

    search = _Search(cells, searching, opponent)
    result = search.run(True)
    logger.debug(
        "minimax for %s visited %d nodes: move=%s score=%d",
        searching,
        search.nodes,
        result.move,
        result.score,
    )
    return result


@dataclass
class MinimaxAI:
    """Unbeatable AI player bound to one side.

      - MinimaxAI(player="O")
      - choose(board) -> SearchResult(move, score)
    """

    player: Player
    last_nodes: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.player not in PLAYERS:
            raise ValueError(f"Unknown player {self.player!r}")

    @property
    def opponent(self) -> Player:
        return other(self.player)

    def choose(self, board: Board) -> SearchResult:
        # The search mutates its working copy; the caller's board is never touched.
        search = _Search(board.snapshot(), self.player, self.opponent)
        result = search.run(True)
        self.last_nodes = search.nodes
        logger.debug(
            "AI %s searched %d nodes: move=%s score=%d",
            self.player,
            search.nodes,
            result.move,
            result.score,
        )
        return result
