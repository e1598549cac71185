"""
Five-Card Draw Rules and Constants.

One player, one deck per session, one exchange per round:

1. The player wagers between 1 coin and their whole balance.
2. Five cards are dealt and sorted ascending by number.
3. The player keeps the N lowest cards (0-5) and draws 5 - N replacements.
4. The final hand is paid out against the table in PAYOUT_MULTIPLIERS;
   the wager is always lost and wager * multiplier is paid back.

The session goes on while the player has coins and the deck holds more
than one hand's worth of cards.
"""

from enum import Enum, auto


class RoundPhase(Enum):
    """Phases of a single round."""
    AWAITING_WAGER = auto()  # Waiting for the player's bet
    DEALT = auto()           # Bet accepted, five cards dealt
    AWAITING_DRAW = auto()   # Waiting for how many cards to keep
    RESOLVED = auto()        # Hand evaluated and paid out


# Default game settings
DEFAULT_STARTING_COINS = 100
HAND_SIZE = 5
MIN_WAGER = 1
MIN_REMAINS = 0
MAX_REMAINS = HAND_SIZE

# Royal straight flush: lowest card of the straight
ROYAL_LOW_NUMBER = 10


# Terminal protocol text
PROMPT_MARKER = ">"
PROMPT_WAGER = "コインを何枚かけますか？（最大{max_wager}枚）"
PROMPT_REMAINS = "何枚残しますか？（最大{max_remains}枚）"
INVALID_WAGER = "正しいコイン枚数を入れてください"
INVALID_REMAINS = "{min_remains}以上{max_remains}以下です"
HAND_HEADER = "手札"
PAYOUT_LINE = "{wager} * {multiplier} = {payout}"
BALANCE_LINE = "手持ちコイン: {before} -> {after}"


def is_valid_wager(wager: int, coins: int) -> bool:
    """A wager is valid if it is positive and covered by the balance."""
    return MIN_WAGER <= wager <= coins


def is_valid_remains(remains: int) -> bool:
    """The player may keep anything from none to all five cards."""
    return MIN_REMAINS <= remains <= MAX_REMAINS


def calculate_payout(wager: int, multiplier: int) -> int:
    """Coins paid back for a resolved hand."""
    return wager * multiplier


def calculate_balance(coins: int, wager: int, payout: int) -> int:
    """
    Balance after a round.

    The wager is always taken; the payout is added on top. A multiplier of
    1 returns the stake, 0 loses it.
    """
    return coins - wager + payout


def can_continue(coins: int, cards_left: int) -> bool:
    """Check whether the session may start another round."""
    return coins > 0 and cards_left > HAND_SIZE
