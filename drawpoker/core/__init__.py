"""
DrawPoker Core - Pure Python Five-Card Draw Game Logic

This module contains all game logic without any network dependencies.
"""

from drawpoker.core.card import Card, Deck, Rank, Suit, InsufficientCardsError
from drawpoker.core.player import Player
from drawpoker.core.hand import HandRank, HandResult, evaluate_hand
from drawpoker.core.rules import RoundPhase
from drawpoker.core.game import (
    DrawPokerGame, DrawRound, RoundResult, SessionSummary,
    InvalidInputError, RoundPhaseError,
)

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "InsufficientCardsError",
    "Player",
    "HandRank",
    "HandResult",
    "evaluate_hand",
    "RoundPhase",
    "DrawPokerGame",
    "DrawRound",
    "RoundResult",
    "SessionSummary",
    "InvalidInputError",
    "RoundPhaseError",
]
