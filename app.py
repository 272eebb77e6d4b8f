from __future__ import annotations

import logging
import os
import threading
import re
import uuid
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from memory_core.config import DEFAULT_GRID_SIZE, MAX_GAMES, REVEAL_DELAY_MS, configure_logging, env_flag
from memory_core.controller import MemoryGame
from memory_core.deck import is_valid_grid_size
from memory_core.scheduler import RevealScheduler, ThreadingScheduler
from memory_core.state import GameState

logger = logging.getLogger(__name__)

app = Flask(__name__)

# In-memory games keyed by id, least recently used first; each one carries its own reveal timers.
_GAMES: "OrderedDict[str, MemoryGame]" = OrderedDict()
_GAMES_LOCK = threading.Lock()


class ApiError(Exception):
    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status = status


@app.errorhandler(ApiError)
def _api_error(e: ApiError) -> Any:
    return jsonify({"ok": False, "error": e.message}), e.status


def make_scheduler() -> RevealScheduler:
    return ThreadingScheduler()


_INT_TEXT = re.compile(r"[+-]?\d+")


def _parse_int(raw: Any) -> Optional[int]:
    """Accepts ints and integer text only; floats and bools are not card ids or sizes."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _INT_TEXT.fullmatch(raw.strip()):
        return int(raw.strip())
    return None


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _lookup(body: Dict[str, Any]) -> Tuple[str, MemoryGame]:
    game_id = body.get("gameId")
    if not isinstance(game_id, str) or not game_id:
        raise ApiError("gameId required")
    with _GAMES_LOCK:
        game = _GAMES.get(game_id)
        if game is not None:
            _GAMES.move_to_end(game_id)
    if game is None:
        raise ApiError(f"unknown game: {game_id}", 404)
    return game_id, game


def _state_to_json(s: GameState) -> Dict[str, Any]:
    out = s.snapshot()
    out["faces"] = [s.face(c.id) for c in s.cards]
    out["pairsRemaining"] = int(s.pairs_remaining)
    return out


def _reply(game_id: str, state: GameState, **extra: Any) -> Any:
    payload: Dict[str, Any] = {"ok": True, "gameId": game_id}
    payload.update(extra)
    payload["state"] = _state_to_json(state)
    return jsonify(payload)


def _drop(game_id: str, game: MemoryGame, why: str) -> None:
    game.close()
    game.scheduler.shutdown()
    logger.info("game %s %s", game_id, why)


@app.get("/api/health")
def api_health() -> Any:
    with _GAMES_LOCK:
        count = len(_GAMES)
    return jsonify({"ok": True, "games": count})


@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    size = _parse_int(body.get("size", DEFAULT_GRID_SIZE))
    if not is_valid_grid_size(size):
        size = DEFAULT_GRID_SIZE
    seed = body.get("seed", None)
    if seed is not None:
        seed = _parse_int(seed)
        if seed is None:
            raise ApiError("seed must be an integer")
    game = MemoryGame(grid_size=size, scheduler=make_scheduler(), reveal_delay_ms=REVEAL_DELAY_MS, seed=seed)
    game_id = uuid.uuid4().hex
    evicted = []
    with _GAMES_LOCK:
        _GAMES[game_id] = game
        while len(_GAMES) > max(1, MAX_GAMES):
            evicted.append(_GAMES.popitem(last=False))
    for old_id, old in evicted:
        _drop(old_id, old, "evicted")
    logger.info("game %s created (%dx%d)", game_id, size, size)
    return _reply(game_id, game.state)


@app.post("/api/state")
def api_state() -> Any:
    game_id, game = _lookup(_body())
    return _reply(game_id, game.state)


@app.post("/api/tap")
def api_tap() -> Any:
    body = _body()
    game_id, game = _lookup(body)
    if "id" not in body:
        raise ApiError("id required")
    card_id = _parse_int(body["id"])
    if card_id is None or not game.state.has_card(card_id):
        raise ApiError(f"no such card: {body['id']!r}")
    try:
        result = game.tap(card_id)
    except ValueError as e:
        raise ApiError(str(e)) from e
    return _reply(game_id, result.state, outcome=result.outcome.value)


@app.post("/api/size")
def api_size() -> Any:
    body = _body()
    game_id, game = _lookup(body)
    fresh = game.resize(_parse_int(body.get("size")))
    if fresh is None:
        return _reply(game_id, game.state, changed=False)
    return _reply(game_id, fresh, changed=True)


@app.post("/api/reset")
def api_reset() -> Any:
    game_id, game = _lookup(_body())
    return _reply(game_id, game.request_reset())


@app.post("/api/end")
def api_end() -> Any:
    game_id, game = _lookup(_body())
    with _GAMES_LOCK:
        _GAMES.pop(game_id, None)
    _drop(game_id, game, "ended")
    return jsonify({"ok": True, "gameId": game_id})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging(env_flag("MEMORY_DEBUG"))
    debug = env_flag("FLASK_DEBUG", os.getenv("DEBUG", "0"))
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
