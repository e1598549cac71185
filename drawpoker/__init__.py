"""
DrawPoker - Five-Card Draw Coin Game Engine

A single-player five-card draw poker project with:
- Pure Python game core logic (deck, hand evaluation, betting rounds)
- Terminal play through pluggable input agents
- FastAPI server exposing sessions over HTTP

Usage:
    from drawpoker.core import Card, Deck, DrawPokerGame, evaluate_hand
    from drawpoker.agents import HumanAgent, ScriptedAgent, RandomAgent
"""

__version__ = "0.1.0"

from drawpoker.core.card import Card, Deck
from drawpoker.core.player import Player
from drawpoker.core.game import DrawPokerGame, DrawRound
from drawpoker.core.hand import HandRank, evaluate_hand

__all__ = [
    "Card",
    "Deck",
    "Player",
    "DrawPokerGame",
    "DrawRound",
    "HandRank",
    "evaluate_hand",
    "__version__",
]
