"""
Hand Evaluation for Five-Card Draw.

This module classifies exactly 5 cards into a pay-table rank. There is no
kicker comparison: only one player is at the table, so the rank alone
decides the payout.

Hand Rankings (checked in this order, first match wins):
1. Royal Straight Flush: 10 J Q K A of one suit          x100
2. Straight Flush: 5 consecutive cards of one suit        x50
3. Four of a Kind: 4 cards of one number                  x20
4. Full House: only 2 distinct numbers (3 + 2)            x7
5. Flush: 5 cards of one suit                             x5
6. Straight: 5 consecutive numbers                        x4
7. Three of a Kind: 3 cards of one number                 x3
8. Two Pair: 3 distinct numbers                           x2
9. One Pair: 4 distinct numbers                           x1
10. No Rank                                               x0

Note: the Ace is high only. A-2-3-4-5 is not a straight.
"""

from __future__ import annotations
from typing import List, NamedTuple
from enum import IntEnum
from collections import Counter

from drawpoker.core.card import Card, Rank, sort_cards
from drawpoker.core.rules import HAND_SIZE, ROYAL_LOW_NUMBER


class HandRank(IntEnum):
    """Hand rankings from best (highest value) to worst (lowest value)."""
    ROYAL_STRAIGHT_FLUSH = 10
    STRAIGHT_FLUSH = 9
    FOUR_OF_A_KIND = 8
    FULL_HOUSE = 7
    FLUSH = 6
    STRAIGHT = 5
    THREE_OF_A_KIND = 4
    TWO_PAIR = 3
    ONE_PAIR = 2
    NO_RANK = 1


PAYOUT_MULTIPLIERS = {
    HandRank.ROYAL_STRAIGHT_FLUSH: 100,
    HandRank.STRAIGHT_FLUSH: 50,
    HandRank.FOUR_OF_A_KIND: 20,
    HandRank.FULL_HOUSE: 7,
    HandRank.FLUSH: 5,
    HandRank.STRAIGHT: 4,
    HandRank.THREE_OF_A_KIND: 3,
    HandRank.TWO_PAIR: 2,
    HandRank.ONE_PAIR: 1,
    HandRank.NO_RANK: 0,
}

HAND_RANK_NAMES = {
    HandRank.ROYAL_STRAIGHT_FLUSH: "Royal Straight Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.NO_RANK: "No Rank",
}

# Labels printed by the terminal game
HAND_RANK_LABELS = {
    HandRank.ROYAL_STRAIGHT_FLUSH: "ロイヤルストレートフラッシュ",
    HandRank.STRAIGHT_FLUSH: "ストレートフラッシュ",
    HandRank.FOUR_OF_A_KIND: "フォーカード",
    HandRank.FULL_HOUSE: "フルハウス",
    HandRank.FLUSH: "フラッシュ",
    HandRank.STRAIGHT: "ストレート",
    HandRank.THREE_OF_A_KIND: "スリーカード",
    HandRank.TWO_PAIR: "ツーペア",
    HandRank.ONE_PAIR: "ワンペア",
    HandRank.NO_RANK: "役無し",
}


class HandResult(NamedTuple):
    """Rank and payout multiplier of an evaluated hand."""
    rank: HandRank
    multiplier: int

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.rank]

    @property
    def label(self) -> str:
        return HAND_RANK_LABELS[self.rank]


def count_numbers(cards: List[Card]) -> Counter:
    """Map each card number to how many cards carry it."""
    return Counter(c.number for c in cards)


def evaluate_hand(cards: List[Card]) -> HandResult:
    """
    Evaluate a five-card hand.

    Args:
        cards: List of exactly 5 Card objects, in any order

    Returns:
        HandResult with the rank and its payout multiplier

    Raises:
        ValueError: If not exactly 5 cards provided
    """
    if len(cards) != HAND_SIZE:
        raise ValueError(f"Need exactly {HAND_SIZE} cards, got {len(cards)}")

    sorted_cards = sort_cards(cards)
    is_straight, is_flush = _scan_sequence(sorted_cards)

    number_counts = count_numbers(sorted_cards)
    max_same = max(number_counts.values())
    distinct = len(number_counts)

    if is_straight and is_flush:
        if sorted_cards[0].number == ROYAL_LOW_NUMBER:
            return _result(HandRank.ROYAL_STRAIGHT_FLUSH)
        return _result(HandRank.STRAIGHT_FLUSH)

    if max_same == 4:
        return _result(HandRank.FOUR_OF_A_KIND)

    # 3 + 2 is the only two-number split left once quads are ruled out
    if distinct == 2:
        return _result(HandRank.FULL_HOUSE)

    if is_flush:
        return _result(HandRank.FLUSH)

    if is_straight:
        return _result(HandRank.STRAIGHT)

    if max_same == 3:
        return _result(HandRank.THREE_OF_A_KIND)

    if distinct == 3:
        return _result(HandRank.TWO_PAIR)

    if distinct == 4:
        return _result(HandRank.ONE_PAIR)

    return _result(HandRank.NO_RANK)


def _scan_sequence(sorted_cards: List[Card]) -> tuple:
    """
    Walk the sorted hand once, comparing each card to its predecessor.

    Returns:
        Tuple of (is_straight, is_flush)
    """
    is_straight = True
    is_flush = True
    for prev, card in zip(sorted_cards, sorted_cards[1:]):
        is_straight = is_straight and card.number - prev.number == 1
        is_flush = is_flush and card.suit == prev.suit
    return is_straight, is_flush


def _result(hand_rank: HandRank) -> HandResult:
    return HandResult(hand_rank, PAYOUT_MULTIPLIERS[hand_rank])


def get_hand_description(cards: List[Card]) -> str:
    """Get a human-readable description of the hand."""
    if len(cards) != HAND_SIZE:
        return "Incomplete hand"

    result = evaluate_hand(cards)
    hand_rank = result.rank
    sorted_cards = sort_cards(cards)
    high = Rank(sorted_cards[-1].number)

    if hand_rank == HandRank.ROYAL_STRAIGHT_FLUSH:
        return "Royal Straight Flush"
    elif hand_rank in (HandRank.STRAIGHT_FLUSH, HandRank.STRAIGHT, HandRank.FLUSH):
        return f"{HAND_RANK_NAMES[hand_rank]}, {_rank_name(high)} high"
    elif hand_rank == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(_most_common(cards))}"
    elif hand_rank == HandRank.FULL_HOUSE:
        number_counts = count_numbers(cards)
        trips = max(number_counts, key=number_counts.get)
        pair = min(number_counts, key=number_counts.get)
        return f"Full House, {_plural(Rank(trips))} full of {_plural(Rank(pair))}"
    elif hand_rank == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(_most_common(cards))}"
    elif hand_rank == HandRank.TWO_PAIR:
        number_counts = count_numbers(cards)
        pairs = sorted((n for n, c in number_counts.items() if c == 2), reverse=True)
        return f"Two Pair, {_plural(Rank(pairs[0]))} and {_plural(Rank(pairs[1]))}"
    elif hand_rank == HandRank.ONE_PAIR:
        return f"Pair of {_plural(_most_common(cards))}"
    else:
        return f"No Rank, {_rank_name(high)} high"


def _most_common(cards: List[Card]) -> Rank:
    """Get the most common number in the cards."""
    number_counts = count_numbers(cards)
    return Rank(max(number_counts, key=number_counts.get))


def _rank_name(rank: Rank) -> str:
    return rank.name.capitalize()


def _plural(rank: Rank) -> str:
    name = _rank_name(rank)
    return f"{name}es" if rank == Rank.SIX else f"{name}s"
