"""Tic-Tac-Toe package exposing game logic, the minimax AI, and the web application."""

from .ai import MinimaxAI, best_move
from .controller import GameController
from .game import Board, Outcome, evaluate
from .ui import app

__all__ = [
    "Board",
    "GameController",
    "MinimaxAI",
    "Outcome",
    "app",
    "best_move",
    "evaluate",
]
