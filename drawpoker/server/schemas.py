"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# ============= Request Schemas =============

class CreateSessionRequest(BaseModel):
    """Request to start a new session."""
    seed: Optional[int] = Field(default=None, description="Shuffle seed; wall clock if omitted")
    starting_coins: Optional[int] = Field(default=None, gt=0)


class WagerRequest(BaseModel):
    """Request to bet on a new round."""
    amount: int = Field(..., description="Coins to bet, 1..balance")


class DrawRequest(BaseModel):
    """Request to exchange cards."""
    remains: int = Field(..., description="How many of the lowest cards to keep, 0..5")


class EvaluateRequest(BaseModel):
    """Request to classify a five-card hand."""
    cards: List[str] = Field(..., min_length=5, max_length=5, description='e.g. ["10h", "Jh", "Qh", "Kh", "Ah"]')


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    suit: str
    number: int
    label: str
    text: str


class SessionStateSchema(BaseModel):
    """Session state."""
    session_id: str
    round_number: int
    rounds_played: int
    phase: Optional[str] = None
    coins: int
    wager: int
    max_wager: int
    max_remains: int
    cards_left: int
    hand: List[CardSchema] = []
    is_running: bool
    end_reason: Optional[str] = None


class RoundResultSchema(BaseModel):
    """Outcome of a resolved round."""
    round_number: int
    hand: List[CardSchema]
    rank: str
    name: str
    label: str
    description: str
    multiplier: int
    wager: int
    payout: int
    coins_before: int
    coins_after: int
    delta: int


class DrawResponseSchema(BaseModel):
    """Result of the exchange step."""
    result: RoundResultSchema
    state: SessionStateSchema


class EvaluationSchema(BaseModel):
    """Classification of a hand."""
    cards: List[CardSchema]
    rank: str
    name: str
    label: str
    description: str
    multiplier: int

