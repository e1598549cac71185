"""
Card and Deck classes for five-card draw.

Cards carry their poker number directly (2-10, J=11, Q=12, K=13, A=14) so
the evaluator can work on plain integers. The Ace is always high.
"""

from __future__ import annotations
import random
import time
from dataclasses import dataclass
from typing import List, Optional
from enum import IntEnum


class Suit(IntEnum):
    """Card suits in canonical deck order. No ordering semantics."""
    HEARTS = 0    # ♥
    CLUBS = 1     # ♣
    DIAMONDS = 2  # ♦
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card numbers from 2 to Ace (14)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.HEARTS: "h",
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.SPADES: "s",
}

# Display labels; numbers 2-10 print as themselves
RANK_LABELS = {rank: str(int(rank)) for rank in Rank}
RANK_LABELS.update({
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
})

LABEL_TO_RANK = {v: k for k, v in RANK_LABELS.items()}
LABEL_TO_RANK["T"] = Rank.TEN
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}
SYMBOL_TO_SUIT["◆"] = Suit.DIAMONDS

class InsufficientCardsError(ValueError):
    """Raised when the deck cannot supply the requested number of cards."""

    def __init__(self, requested: int, remaining: int):
        super().__init__(
            f"Cannot draw {requested} cards, only {remaining} remain"
        )
        self.requested = requested
        self.remaining = remaining


@dataclass(frozen=True)
class Card:
    """
    An immutable playing card.

    Cards can be created from:
    - Suit and Rank enums: Card(Suit.SPADES, Rank.ACE)
    - Plain numbers: Card(Suit.HEARTS, 10)
    - String notation: Card.from_string("10h"), Card.from_string("♥10")
    """

    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        # Frozen dataclass: coerce through object.__setattr__
        object.__setattr__(self, "suit", Suit(self.suit))
        object.__setattr__(self, "rank", Rank(self.rank))

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts rank-first ("Ah", "10h", "Th") or suit-first with a symbol
        ("♥10", "♠A", "♥ 10").
        """
        s = s.strip().replace(" ", "")
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s!r}")

        if s[0] in SYMBOL_TO_SUIT:
            suit_part, rank_part = s[0], s[1:]
        else:
            rank_part, suit_part = s[:-1], s[-1]

        rank = LABEL_TO_RANK.get(rank_part.upper())
        if rank is None:
            raise ValueError(f"Invalid rank: {rank_part!r}")

        if suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        elif suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        else:
            raise ValueError(f"Invalid suit: {suit_part!r}")

        return cls(suit, rank)

    @property
    def number(self) -> int:
        """The card number, 2-14."""
        return int(self.rank)

    @property
    def label(self) -> str:
        """Rank label: 2-10, J, Q, K or A."""
        return RANK_LABELS[self.rank]

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self.suit]

    @property
    def display_str(self) -> str:
        """Terminal form like '♥ 10' or '♠ A'."""
        return f"{self.symbol} {self.label}"

    @property
    def short_str(self) -> str:
        """Short string like '10h', 'As'."""
        return f"{self.label}{SUIT_CHARS[self.suit]}"

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{self.symbol}{self.label}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "suit": self.symbol,
            "number": self.number,
            "label": self.label,
            "text": self.display_str,
        }


def sort_cards(cards: List[Card]) -> List[Card]:
    """Return the cards sorted ascending by number."""
    return sorted(cards, key=lambda c: c.number)


class Deck:
    """
    A standard 52-card deck that only ever shrinks.

    Usage:
        deck = Deck(shuffle=True, seed=42)
        hand = deck.draw(5)
    """

    def __init__(self, shuffle: bool = False, seed: Optional[int] = None):
        """
        Initialize a new deck in canonical order, optionally shuffled.

        Args:
            shuffle: Shuffle immediately after building
            seed: Seed for the shuffle; defaults to the wall clock
        """
        self.seed = seed if seed is not None else time.time_ns()
        self._rng = random.Random(self.seed)
        self._shuffled = False
        self._cards: List[Card] = [
            Card(suit, rank)
            for suit in Suit
            for rank in Rank
        ]
        self._drawn: List[Card] = []
        if shuffle:
            self.shuffle()

    @classmethod
    def from_cards(cls, cards: List[Card]) -> Deck:
        """
        Build a deck holding exactly the given cards, front first.

        The deck counts as already shuffled, so it keeps this order.
        """
        if len(set(cards)) != len(cards):
            raise ValueError("Deck cannot contain duplicate cards")
        deck = cls(shuffle=False, seed=0)
        deck._cards = list(cards)
        deck._shuffled = True
        return deck

    def shuffle(self) -> None:
        """
        Shuffle the deck in place.

        Raises:
            RuntimeError: If the deck was already shuffled.
        """
        if self._shuffled:
            raise RuntimeError("Deck has already been shuffled")
        self._rng.shuffle(self._cards)
        self._shuffled = True

    def draw(self, n: int = 1) -> List[Card]:
        """
        Remove and return n cards from the front of the deck.

        Raises:
            InsufficientCardsError: If not enough cards remain.
        """
        if n < 0:
            raise ValueError(f"Cannot draw a negative number of cards: {n}")
        if n > len(self._cards):
            raise InsufficientCardsError(n, len(self._cards))

        drawn = self._cards[:n]
        del self._cards[:n]
        self._drawn.extend(drawn)
        return drawn

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    @property
    def is_shuffled(self) -> bool:
        return self._shuffled

    @property
    def cards(self) -> List[Card]:
        """Copy of the cards still in the deck, front first."""
        return self._cards.copy()

    @property
    def drawn_cards(self) -> List[Card]:
        """List of cards that have been drawn."""
        return self._drawn.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse whitespace- or comma-separated cards.

    Accepts "10h Jh Qh Kh Ah", "♥2 ♥3 ♥4" or "2c,3c,4c".

    Returns:
        List of Card objects
    """
    tokens = cards_str.replace(",", " ").split()
    return [Card.from_string(token) for token in tokens]
