"""Turn-taking state machine sequencing human and AI moves on one board."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import logging

from .ai import MinimaxAI
from .game import IN_PROGRESS, PLAYERS, Board, Outcome, Player, other

logger = logging.getLogger(__name__)

# Controller states
AWAITING_INPUT = "awaiting_input"
ENGINE_THINKING = "engine_thinking"
TERMINAL = "terminal"

MODES: Tuple[str, ...] = ("pvp", "ai")


@dataclass
class GameSession:
    """Everything belonging to one game; replaced wholesale on reset."""

    generation: int
    mode: str = "pvp"
    ai_side: Player = "O"
    board: Board = field(default_factory=Board)
    current_player: Player = "X"
    outcome: Outcome = IN_PROGRESS
    engine_busy: bool = False
    move_log: List[Dict[str, object]] = field(default_factory=list)

    @property
    def ai_to_move(self) -> bool:
        return (
            self.mode == "ai"
            and not self.outcome.finished
            and self.current_player == self.ai_side
        )


class GameController:
    """Single writer of the authoritative board.

    Human input arrives through :meth:`attempt_move`. When the turn passes to
    the AI the controller enters ``engine_thinking`` and waits for
    :meth:`engine_move`, which the presentation layer may call right away or
    after a cosmetic delay. Illegal requests are ignored and reported by a
    ``False``/``None`` return, never by an exception.
    """

    def __init__(self, mode: str = "pvp", ai_side: Player = "O") -> None:
        self._generation = 0
        self.session = self._build_session(mode, ai_side)

    # ---- inputs ----

    def new_game(
        self, mode: Optional[str] = None, ai_side: Optional[Player] = None
    ) -> GameSession:
        """Replace the session; mode and AI side only change through here."""
        self.session = self._build_session(
            mode if mode is not None else self.session.mode,
            ai_side if ai_side is not None else self.session.ai_side,
        )
        return self.session

    def set_mode(self, mode: str) -> GameSession:
        return self.new_game(mode=mode)

    def set_ai_side(self, ai_side: Player) -> GameSession:
        return self.new_game(ai_side=ai_side)

    def attempt_move(self, cell: int) -> bool:
        """Place the current player's mark at ``cell`` if the move is legal."""
        session = self.session
        if self.state != AWAITING_INPUT:
            logger.debug("Ignoring move %s in state %s", cell, self.state)
            return False
        if not session.board.is_empty(cell):
            logger.debug("Ignoring move %s: cell unavailable", cell)
            return False
        self._apply(session.current_player, cell)
        return True

    def engine_move(self, generation: Optional[int] = None) -> Optional[int]:
        """Compute and play the AI's move now.

        ``generation`` ties a deferred request to the session it was issued
        for; a request from an earlier session is dropped. Returns the cell
        played, or ``None`` when nothing was applied.
        """
        session = self.session
        if generation is not None and generation != session.generation:
            logger.info(
                "Discarding stale AI move for generation %d (current %d)",
                generation,
                session.generation,
            )
            return None
        if self.state != ENGINE_THINKING:
            return None

        result = MinimaxAI(player=session.ai_side).choose(session.board)
        if result.move is None:
            # Unreachable while the terminal guard holds; finish without mutating.
            session.engine_busy = False
            session.outcome = session.board.outcome()
            return None

        logger.info(
            "AI %s plays %d (score %d)", session.ai_side, result.move, result.score
        )
        self._apply(session.ai_side, result.move)
        return result.move

    # ---- outputs ----

    @property
    def state(self) -> str:
        if self.session.outcome.finished:
            return TERMINAL
        if self.session.engine_busy:
            return ENGINE_THINKING
        return AWAITING_INPUT

    @property
    def board(self) -> List[str]:
        return self.session.board.snapshot()

    @property
    def current_player(self) -> Player:
        return self.session.current_player

    @property
    def outcome(self) -> Outcome:
        return self.session.outcome

    @property
    def busy(self) -> bool:
        return self.session.engine_busy

    @property
    def mode(self) -> str:
        return self.session.mode

    @property
    def ai_side(self) -> Player:
        return self.session.ai_side

    @property
    def generation(self) -> int:
        return self.session.generation

    @property
    def move_log(self) -> List[Dict[str, object]]:
        return list(self.session.move_log)

    @property
    def status_text(self) -> str:
        outcome = self.session.outcome
        if outcome.winner:
            return f"Winner: {outcome.winner}"
        if outcome.drawn:
            return "It's a draw!"
        return f"Turn: {self.session.current_player}"

    # ---- helpers ----

    def _build_session(self, mode: str, ai_side: Player) -> GameSession:
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode!r}")
        if ai_side not in PLAYERS:
            raise ValueError(f"Unknown AI side {ai_side!r}")
        self._generation += 1
        session = GameSession(generation=self._generation, mode=mode, ai_side=ai_side)
        session.engine_busy = session.ai_to_move
        logger.info(
            "New game %d: mode=%s ai_side=%s", session.generation, mode, ai_side
        )
        return session

    def _apply(self, player: Player, cell: int) -> None:
        session = self.session
        session.board.place(player, cell)
        session.move_log.append({"player": player, "cellIndex": cell})
        session.outcome = session.board.outcome()
        session.current_player = other(player)
        session.engine_busy = session.ai_to_move
