"""FastAPI-powered web UI for playing Tic-Tac-Toe in the browser."""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from .controller import GameController
from .game import EMPTY

logger = logging.getLogger(__name__)


@dataclass
class HostedGame:
    """A controller served over HTTP, guarded by its own lock."""

    controller: GameController
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


GAMES: Dict[str, HostedGame] = {}
app = FastAPI(title="Tic Tac Toe", description="Tic-Tac-Toe against an unbeatable AI")


AI_THINK_DELAY: Tuple[float, float] = (0.45, 0.45)


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    model_config = ConfigDict(populate_by_name=True)

    mode: Literal["pvp", "ai"] = Field(
        default="pvp", description="Player vs player or player vs AI"
    )
    ai_side: Literal["X", "O"] = Field(
        default="O", alias="aiSide", description="Symbol played by the AI"
    )


class ResetRequest(BaseModel):
    """Request payload for restarting a game, optionally switching settings."""

    model_config = ConfigDict(populate_by_name=True)

    mode: Optional[Literal["pvp", "ai"]] = None
    ai_side: Optional[Literal["X", "O"]] = Field(default=None, alias="aiSide")


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    cell_index: int = Field(alias="cellIndex", ge=0, le=8)


def _create_game(mode: str, ai_side: str) -> Tuple[str, HostedGame]:
    """Create a new game and register it for later access."""

    hosted = HostedGame(controller=GameController(mode=mode, ai_side=ai_side))
    game_id = uuid.uuid4().hex
    GAMES[game_id] = hosted
    logger.info("Created game %s (mode=%s, ai_side=%s)", game_id, mode, ai_side)
    return game_id, hosted


def _get_game(game_id: str) -> HostedGame:
    try:
        return GAMES[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _run_ai_turn(game_id: str, generation: int) -> None:
    hosted = GAMES.get(game_id)
    if not hosted:
        return

    time.sleep(max(0.0, random.uniform(*AI_THINK_DELAY)))

    with hosted.lock:
        # A reset during the delay bumps the generation; the controller drops it.
        hosted.controller.engine_move(generation)


def _schedule_ai_turn(
    game_id: str, hosted: HostedGame, background_tasks: Optional[BackgroundTasks]
) -> None:
    # Caller holds hosted.lock.
    controller = hosted.controller
    if controller.busy and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id, controller.generation)


def _serialize_game(game_id: str, hosted: HostedGame) -> Dict[str, object]:
    with hosted.lock:
        controller = hosted.controller
        outcome = controller.outcome
        move_log = controller.move_log
        state: Dict[str, object] = {
            "id": game_id,
            "generation": controller.generation,
            "mode": controller.mode,
            "aiSide": controller.ai_side,
            "state": controller.state,
            "cells": [c if c != EMPTY else "" for c in controller.board],
            "currentPlayer": controller.current_player,
            "winner": outcome.winner,
            "winningLine": list(outcome.line) if outcome.line else None,
            "drawn": outcome.drawn,
            "status": controller.status_text,
            "aiPending": controller.busy,
            "moveLog": move_log,
        }
        if move_log:
            state["lastMove"] = move_log[-1]
        return state


@app.post("/api/game")
def create_game(
    request: NewGameRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    game_id, hosted = _create_game(request.mode, request.ai_side)
    with hosted.lock:
        _schedule_ai_turn(game_id, hosted, background_tasks)
    return _serialize_game(game_id, hosted)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    hosted = _get_game(game_id)
    return _serialize_game(game_id, hosted)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    hosted = _get_game(game_id)
    with hosted.lock:
        accepted = hosted.controller.attempt_move(request.cell_index)
        if accepted:
            _schedule_ai_turn(game_id, hosted, background_tasks)
    state = _serialize_game(game_id, hosted)
    state["accepted"] = accepted
    return state


@app.post("/api/game/{game_id}/reset")
def reset_game(
    game_id: str, request: ResetRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    hosted = _get_game(game_id)
    with hosted.lock:
        hosted.controller.new_game(mode=request.mode, ai_side=request.ai_side)
        _schedule_ai_turn(game_id, hosted, background_tasks)
    return _serialize_game(game_id, hosted)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic Tac Toe</title>
    <style>
      :root {
        --primary: #2563eb;
        --amber: #f59e0b;
        --surface: #ffffff;
        --text: #111827;
      }
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        align-items: center;
        justify-content: center;
        font-family: system-ui, sans-serif;
        background: #f3f4f6;
        color: var(--text);
      }
      main {
        background: var(--surface);
        padding: 2rem;
        border-radius: 1rem;
        box-shadow: 0 10px 30px rgba(0, 0, 0, 0.08);
        text-align: center;
      }
      .controls {
        display: flex;
        gap: 0.75rem;
        justify-content: center;
        margin-bottom: 1rem;
      }
      .board {
        display: grid;
        grid-template-columns: repeat(3, 96px);
        gap: 8px;
        justify-content: center;
      }
      .cell {
        width: 96px;
        height: 96px;
        font-size: 2.5rem;
        font-weight: 700;
        border: 2px solid #e5e7eb;
        border-radius: 0.75rem;
        background: var(--surface);
        cursor: pointer;
      }
      .cell.x { color: var(--primary); }
      .cell.o { color: var(--amber); }
      .cell.win { background: #dbeafe; }
      .board.frozen .cell { cursor: wait; }
      #status { margin-top: 1rem; font-weight: 600; }
    </style>
  </head>
  <body>
    <main>
      <h1>Tic Tac Toe</h1>
      <div class=\"controls\">
        <select id=\"mode\">
          <option value=\"pvp\">Player vs Player</option>
          <option value=\"ai\">Player vs AI</option>
        </select>
        <select id=\"aiSide\">
          <option value=\"O\">AI plays O</option>
          <option value=\"X\">AI plays X</option>
        </select>
        <button id=\"newGame\">New Game</button>
      </div>
      <div class=\"board\" id=\"board\"></div>
      <p id=\"status\"></p>
    </main>
    <script>
      let gameId = null;
      let pollTimer = null;
      const boardEl = document.getElementById('board');
      const statusEl = document.getElementById('status');
      const modeEl = document.getElementById('mode');
      const sideEl = document.getElementById('aiSide');

      async function api(path, body) {
        const response = await fetch(path, {
          method: body === undefined ? 'GET' : 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        return response.json();
      }

      function render(state) {
        const line = state.winningLine || [];
        boardEl.innerHTML = '';
        boardEl.classList.toggle('frozen', state.aiPending);
        state.cells.forEach((mark, index) => {
          const cell = document.createElement('button');
          cell.className = 'cell';
          if (mark) cell.classList.add(mark.toLowerCase());
          if (line.includes(index)) cell.classList.add('win');
          cell.textContent = mark;
          cell.addEventListener('click', () => play(index));
          boardEl.appendChild(cell);
        });
        statusEl.textContent = state.aiPending ? 'AI is thinking…' : state.status;
        clearTimeout(pollTimer);
        if (state.aiPending) {
          pollTimer = setTimeout(refresh, 150);
        }
      }

      async function refresh() {
        render(await api(`/api/game/${gameId}`));
      }

      async function play(index) {
        if (!gameId) return;
        render(await api(`/api/game/${gameId}/move`, { cellIndex: index }));
      }

      async function start() {
        const body = { mode: modeEl.value, aiSide: sideEl.value };
        const state = gameId
          ? await api(`/api/game/${gameId}/reset`, body)
          : await api('/api/game', body);
        gameId = state.id;
        render(state);
      }

      document.getElementById('newGame').addEventListener('click', start);
      modeEl.addEventListener('change', start);
      sideEl.addEventListener('change', start);
      start();
    </script>
  </body>
</html>
"""
