"""
Pytest configuration and shared fixtures for DrawPoker tests.
"""

import pytest
from drawpoker.core.card import Card, Deck, Rank, Suit, parse_cards
from drawpoker.core.player import Player


@pytest.fixture
def deck():
    """Create a fresh deck shuffled with a fixed seed."""
    return Deck(shuffle=True, seed=1234)


@pytest.fixture
def unshuffled_deck():
    """Create a fresh deck in canonical order."""
    return Deck(shuffle=False)


@pytest.fixture
def player():
    """Create a player with the default 100 coins."""
    return Player()


@pytest.fixture
def output_lines():
    """Collect everything a game writes to its output sink."""
    return []


@pytest.fixture
def royal_straight_flush():
    """Create a royal straight flush (10 to Ace of spades)."""
    return [
        Card(Suit.SPADES, Rank.TEN),
        Card(Suit.SPADES, Rank.JACK),
        Card(Suit.SPADES, Rank.QUEEN),
        Card(Suit.SPADES, Rank.KING),
        Card(Suit.SPADES, Rank.ACE),
    ]


@pytest.fixture
def straight_flush():
    """Create a king-high straight flush of clubs."""
    return parse_cards("9c 10c Jc Qc Kc")


@pytest.fixture
def no_rank_hand():
    """Create a flush-less, straight-less hand with five distinct numbers."""
    return parse_cards("2h 3c 4d 5s 10h")


@pytest.fixture
def stacked_deck():
    """
    Factory for decks whose first cards are the given ones, followed by
    the rest of a canonical deck.
    """
    def build(front: str, size: int = 52) -> Deck:
        first = parse_cards(front)
        rest = [c for c in Deck(shuffle=False).cards if c not in first]
        return Deck.from_cards((first + rest)[:size])
    return build
