"""
Player class for five-card draw.

Holds the two pieces of state a session mutates round after round:
- Coins (the balance)
- The current five-card hand
"""

from __future__ import annotations
from typing import List, Dict, Any
from dataclasses import dataclass, field

from drawpoker.core.card import Card, sort_cards
from drawpoker.core.rules import DEFAULT_STARTING_COINS


@dataclass
class Player:
    """
    The single player of a draw poker session.

    Attributes:
        coins: Current coin balance, never negative
        hand: Cards held this round, sorted ascending by number
    """
    coins: int = DEFAULT_STARTING_COINS
    hand: List[Card] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.coins < 0:
            raise ValueError(f"Coins cannot be negative, got {self.coins}")

    def take_cards(self, cards: List[Card]) -> None:
        """Replace the hand with the given cards, sorted."""
        self.hand = sort_cards(cards)

    def keep_lowest(self, remains: int, replacements: List[Card]) -> None:
        """
        Keep the `remains` lowest cards and add the replacements.

        The hand is already sorted, so the kept cards are a prefix.
        """
        self.hand = sort_cards(self.hand[:remains] + replacements)

    def clear_hand(self) -> None:
        """Discard the hand at the end of a round."""
        self.hand = []

    def settle(self, new_balance: int) -> None:
        """Apply a round's outcome to the balance."""
        if new_balance < 0:
            raise ValueError(f"Balance cannot go negative: {new_balance}")
        self.coins = new_balance

    @property
    def is_broke(self) -> bool:
        return self.coins <= 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "coins": self.coins,
            "hand": [card.to_dict() for card in self.hand],
        }

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hand) if self.hand else "--"
        return f"Player [{cards_str}] {self.coins} coins"
