"""
HTTP API Routes for DrawPoker.

Each session is a DrawPokerGame kept in process memory, stepped through
wager and draw requests instead of terminal prompts.
"""

from typing import Dict, Any, Optional
from uuid import uuid4
import logging

from fastapi import APIRouter, HTTPException, Request

from drawpoker.config import GameConfig, DEFAULT_MAX_SESSIONS
from drawpoker.core.card import Card, InsufficientCardsError
from drawpoker.core.game import DrawPokerGame, InvalidInputError, RoundPhaseError
from drawpoker.core.hand import evaluate_hand, get_hand_description, HAND_RANK_LABELS
from drawpoker.server.schemas import (
    CreateSessionRequest, WagerRequest, DrawRequest, EvaluateRequest,
    SessionStateSchema, DrawResponseSchema, EvaluationSchema,
)


logger = logging.getLogger(__name__)

router = APIRouter()


class SessionStore:
    """
    In-memory sessions keyed by id. Nothing outlives the process.

    Finished sessions are kept until a client deletes them, so the store
    holds at most `max_sessions` and refuses new ones once full.
    """

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS):
        self.max_sessions = max_sessions
        self._sessions: Dict[str, DrawPokerGame] = {}

    def create(self, seed: Optional[int], starting_coins: int) -> str:
        if len(self._sessions) >= self.max_sessions:
            logger.warning(f"Session limit reached ({self.max_sessions})")
            raise HTTPException(
                status_code=429,
                detail=f"Too many sessions (limit {self.max_sessions})",
            )
        session_id = uuid4().hex
        self._sessions[session_id] = DrawPokerGame(seed=seed, starting_coins=starting_coins)
        logger.info(f"Created session {session_id}")
        return session_id

    def get(self, session_id: str) -> DrawPokerGame:
        game = self._sessions.get(session_id)
        if game is None:
            raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
        return game

    def remove(self, session_id: str) -> None:
        self.get(session_id)
        del self._sessions[session_id]
        logger.info(f"Removed session {session_id}")

    def __len__(self) -> int:
        return len(self._sessions)


def get_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_config(request: Request) -> GameConfig:
    return request.app.state.config


def _state(session_id: str, game: DrawPokerGame) -> Dict[str, Any]:
    return {"session_id": session_id, **game.get_state()}


@router.get("/health")
async def health() -> Dict[str, Any]:
    return {"status": "ok"}


@router.post("/sessions", status_code=201, response_model=SessionStateSchema)
async def create_session(req: CreateSessionRequest, request: Request) -> Dict[str, Any]:
    """
    Start a new session with a freshly shuffled deck.

    The seed and starting coins fall back to the server configuration.
    """
    config = get_config(request)
    store = get_store(request)

    seed = req.seed if req.seed is not None else config.seed
    coins = req.starting_coins or config.starting_coins
    session_id = store.create(seed=seed, starting_coins=coins)
    return _state(session_id, store.get(session_id))


@router.get("/sessions/{session_id}", response_model=SessionStateSchema)
async def get_session(session_id: str, request: Request) -> Dict[str, Any]:
    """Get the current session state."""
    return _state(session_id, get_store(request).get(session_id))


@router.post("/sessions/{session_id}/wager", response_model=SessionStateSchema)
async def place_wager(session_id: str, req: WagerRequest, request: Request) -> Dict[str, Any]:
    """
    Open a round, bet and deal five cards.

    A rejected wager leaves the round open, so the client can retry.
    """
    game = get_store(request).get(session_id)

    try:
        if not game.is_round_open():
            game.start_round()
        game.place_wager(req.amount)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RoundPhaseError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return _state(session_id, game)


@router.post("/sessions/{session_id}/draw", response_model=DrawResponseSchema)
async def draw(session_id: str, req: DrawRequest, request: Request) -> Dict[str, Any]:
    """
    Keep the lowest `remains` cards, draw the rest and settle the round.
    """
    game = get_store(request).get(session_id)

    try:
        result = game.exchange(req.remains)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RoundPhaseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InsufficientCardsError as e:
        raise HTTPException(status_code=409, detail=f"Session over: {e}")

    return {"result": result.to_dict(), "state": _state(session_id, game)}


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str, request: Request) -> Dict[str, Any]:
    """Drop a session."""
    get_store(request).remove(session_id)
    return {"success": True, "message": f"Session {session_id} removed"}


@router.post("/evaluate", response_model=EvaluationSchema)
async def evaluate(req: EvaluateRequest) -> Dict[str, Any]:
    """Classify five cards against the pay table."""
    try:
        cards = [Card.from_string(s) for s in req.cards]
        if len(set(cards)) != len(cards):
            raise ValueError("Duplicate cards in hand")
        result = evaluate_hand(cards)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "cards": [card.to_dict() for card in sorted(cards, key=lambda c: c.number)],
        "rank": result.rank.name,
        "name": result.name,
        "label": HAND_RANK_LABELS[result.rank],
        "description": get_hand_description(cards),
        "multiplier": result.multiplier,
    }
