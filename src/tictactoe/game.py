"""Board model and outcome evaluation for classic 3x3 Tic-Tac-Toe."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Player = str  # "X" or "O"
Line = Tuple[int, int, int]

EMPTY = " "
PLAYERS: Tuple[Player, Player] = ("X", "O")

WINNING_LINES: Tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def other(player: Player) -> Player:
    return "O" if player == "X" else "X"


# ---------- Outcome ----------


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating a board: in progress, won along a line, or drawn."""

    winner: Optional[Player] = None
    line: Optional[Line] = None
    drawn: bool = False

    @property
    def finished(self) -> bool:
        return self.winner is not None or self.drawn


IN_PROGRESS = Outcome()
DRAW = Outcome(drawn=True)


def evaluate(cells: List[str]) -> Outcome:
    """Return the outcome of ``cells``; the first completed line wins."""
    for a, b, c in WINNING_LINES:
        v = cells[a]
        if v != EMPTY and v == cells[b] == cells[c]:
            return Outcome(winner=v, line=(a, b, c))
    if all(c != EMPTY for c in cells):
        return DRAW
    return IN_PROGRESS


def empty_cells(cells: List[str]) -> List[int]:
    """Indices of empty cells in ascending order."""
    return [i for i, c in enumerate(cells) if c == EMPTY]


# ---------- Board ----------


@dataclass
class Board:
    # 'X', 'O', or ' ' (space) for empty
    cells: List[str] = field(default_factory=lambda: [EMPTY] * 9)

    def __post_init__(self) -> None:
        if len(self.cells) != 9:
            raise ValueError("A board has exactly 9 cells")

    def is_empty(self, idx: int) -> bool:
        return 0 <= idx < 9 and self.cells[idx] == EMPTY

    def is_full(self) -> bool:
        return all(c != EMPTY for c in self.cells)

    def available_moves(self) -> List[int]:
        return empty_cells(self.cells)

    def place(self, player: Player, idx: int) -> None:
        if player not in PLAYERS:
            raise ValueError(f"Unknown player {player!r}")
        if not 0 <= idx < 9:
            raise ValueError("Cell index out of range")
        if self.cells[idx] != EMPTY:
            raise ValueError("Cell already occupied")
        self.cells[idx] = player

    def outcome(self) -> Outcome:
        return evaluate(self.cells)

    def snapshot(self) -> List[str]:
        """Independent copy of the cells, safe to mutate."""
        return self.cells.copy()
