"""
Five-Card Draw Game Engine - State Machine Implementation.

This module implements a single-player draw poker session. It handles:
- The per-round state machine (wager, deal, exchange, payout)
- The session loop that keeps dealing rounds from one shrinking deck
- The interactive prompt protocol over an injectable agent and output sink

A round walks AWAITING_WAGER -> DEALT -> AWAITING_DRAW -> RESOLVED. The
session ends normally when the player runs out of coins or the deck runs
out of cards.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional, Any, TYPE_CHECKING
from dataclasses import dataclass
import logging
import re

from drawpoker.core.card import Card, Deck, InsufficientCardsError
from drawpoker.core.player import Player
from drawpoker.core.hand import (
    HandRank, HAND_RANK_NAMES, HAND_RANK_LABELS,
    evaluate_hand, get_hand_description,
)
from drawpoker.core.rules import (
    RoundPhase,
    DEFAULT_STARTING_COINS, HAND_SIZE, MIN_REMAINS, MAX_REMAINS,
    PROMPT_MARKER, PROMPT_WAGER, PROMPT_REMAINS,
    INVALID_WAGER, INVALID_REMAINS, HAND_HEADER, PAYOUT_LINE, BALANCE_LINE,
    is_valid_wager, is_valid_remains, calculate_payout, calculate_balance,
    can_continue,
)

if TYPE_CHECKING:
    from drawpoker.agents.base import BaseAgent


logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """A wager or keep count outside its valid range, or not a number."""


class RoundPhaseError(RuntimeError):
    """An operation was attempted in the wrong round or session phase."""


END_OUT_OF_COINS = "out_of_coins"
END_OUT_OF_CARDS = "out_of_cards"

_INT_PATTERN = re.compile(r"^\s*-?\d+\s*$")


@dataclass
class RoundResult:
    """Outcome of a resolved round."""
    round_number: int
    hand: List[Card]
    rank: HandRank
    multiplier: int
    wager: int
    payout: int
    coins_before: int
    coins_after: int

    @property
    def delta(self) -> int:
        """Net change of the balance."""
        return self.coins_after - self.coins_before

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.rank]

    @property
    def label(self) -> str:
        return HAND_RANK_LABELS[self.rank]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "hand": [card.to_dict() for card in self.hand],
            "rank": self.rank.name,
            "name": self.name,
            "label": self.label,
            "description": get_hand_description(self.hand),
            "multiplier": self.multiplier,
            "wager": self.wager,
            "payout": self.payout,
            "coins_before": self.coins_before,
            "coins_after": self.coins_after,
            "delta": self.delta,
        }


@dataclass
class SessionSummary:
    """Where a session stood when it ended."""
    rounds_played: int
    starting_coins: int
    final_coins: int
    cards_left: int
    end_reason: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rounds_played": self.rounds_played,
            "starting_coins": self.starting_coins,
            "final_coins": self.final_coins,
            "cards_left": self.cards_left,
            "end_reason": self.end_reason,
        }


def parse_int(raw: str) -> int:
    """
    Parse one line of player input as an integer.

    Raises:
        InvalidInputError: If the line is not an integer.
    """
    if not isinstance(raw, str) or not _INT_PATTERN.match(raw):
        raise InvalidInputError(f"Not a number: {raw!r}")
    return int(raw)


class DrawRound:
    """
    One betting round: wager, deal, exchange, payout.

    Usage:
        rnd = DrawRound(deck, player)
        rnd.place_wager(10)        # deals five cards
        result = rnd.exchange(2)   # keeps the two lowest, draws three
    """

    def __init__(self, deck: Deck, player: Player, round_number: int = 1):
        self.deck = deck
        self.player = player
        self.round_number = round_number
        self.phase = RoundPhase.AWAITING_WAGER
        self.wager = 0
        self.coins_before = player.coins
        self.result: Optional[RoundResult] = None

    def _require_phase(self, phase: RoundPhase) -> None:
        if self.phase != phase:
            raise RoundPhaseError(
                f"Round {self.round_number} is {self.phase.name}, expected {phase.name}"
            )

    def place_wager(self, amount: int) -> List[Card]:
        """
        Bet coins on this round and deal the hand.

        Returns:
            The dealt hand, sorted ascending by number

        Raises:
            InvalidInputError: If amount is not in 1..coins
            RoundPhaseError: If a wager was already placed
        """
        self._require_phase(RoundPhase.AWAITING_WAGER)
        if not isinstance(amount, int) or not is_valid_wager(amount, self.player.coins):
            raise InvalidInputError(
                f"Wager must be between 1 and {self.player.coins}, got {amount}"
            )

        self.wager = amount
        self.phase = RoundPhase.DEALT
        logger.debug(f"Round {self.round_number}: wager {amount}")

        self._deal()
        return list(self.player.hand)

    def _deal(self) -> None:
        """Deal five cards from the deck."""
        self._require_phase(RoundPhase.DEALT)
        self.player.take_cards(self.deck.draw(HAND_SIZE))
        self.phase = RoundPhase.AWAITING_DRAW
        logger.debug(f"Round {self.round_number}: dealt {self.player}")

    def exchange(self, remains: int) -> RoundResult:
        """
        Keep the `remains` lowest cards, draw the rest and resolve.

        Raises:
            InvalidInputError: If remains is not in 0..5
            InsufficientCardsError: If the deck cannot refill the hand
            RoundPhaseError: If no hand has been dealt
        """
        self._require_phase(RoundPhase.AWAITING_DRAW)
        if not isinstance(remains, int) or not is_valid_remains(remains):
            raise InvalidInputError(
                f"Remains must be between {MIN_REMAINS} and {MAX_REMAINS}, got {remains}"
            )

        replacements = self.deck.draw(HAND_SIZE - remains)
        self.player.keep_lowest(remains, replacements)
        logger.debug(f"Round {self.round_number}: kept {remains}, {self.player}")
        return self._resolve()

    def _resolve(self) -> RoundResult:
        """Evaluate the final hand and settle the balance."""
        hand_result = evaluate_hand(self.player.hand)
        payout = calculate_payout(self.wager, hand_result.multiplier)
        coins_after = calculate_balance(self.player.coins, self.wager, payout)

        self.result = RoundResult(
            round_number=self.round_number,
            hand=list(self.player.hand),
            rank=hand_result.rank,
            multiplier=hand_result.multiplier,
            wager=self.wager,
            payout=payout,
            coins_before=self.player.coins,
            coins_after=coins_after,
        )
        self.player.settle(coins_after)
        self.phase = RoundPhase.RESOLVED

        logger.info(
            f"Round {self.round_number}: {hand_result.name} "
            f"{self.wager} * {hand_result.multiplier} = {payout}, "
            f"coins {self.result.coins_before} -> {coins_after}"
        )
        return self.result

    @property
    def is_resolved(self) -> bool:
        return self.phase == RoundPhase.RESOLVED


class DrawPokerGame:
    """
    A draw poker session: one deck, one player, rounds until coins or
    cards run out.

    Usage:
        game = DrawPokerGame(agent=HumanAgent(), seed=42)
        summary = game.play()

    Or step by step, without an agent:
        game = DrawPokerGame(seed=42)
        game.start_round()
        game.place_wager(10)
        result = game.exchange(3)
    """

    def __init__(
        self,
        agent: Optional[BaseAgent] = None,
        output: Callable[[str], None] = print,
        starting_coins: int = DEFAULT_STARTING_COINS,
        seed: Optional[int] = None,
        deck: Optional[Deck] = None,
    ):
        """
        Initialize a new session.

        Args:
            agent: Input source answering the prompts of play()/play_round()
            output: Sink receiving each line of terminal output
            starting_coins: Initial balance
            seed: Shuffle seed; defaults to the wall clock
            deck: Pre-built deck to play from instead of a fresh shuffle
        """
        if starting_coins <= 0:
            raise ValueError("Starting coins must be positive")

        self.agent = agent
        self.output = output
        self.starting_coins = starting_coins

        if deck is None:
            deck = Deck(shuffle=True, seed=seed)
        self.deck = deck
        self.player = Player(coins=starting_coins)

        self.round_number = 0
        self.rounds_played = 0
        self.current_round: Optional[DrawRound] = None
        self._deck_exhausted = False

        logger.info(
            f"New session: {starting_coins} coins, {len(self.deck)} cards, seed {self.deck.seed}"
        )

    @property
    def coins(self) -> int:
        return self.player.coins

    @property
    def cards_left(self) -> int:
        return len(self.deck)

    def is_running(self) -> bool:
        """Check if another round can be played."""
        return not self._deck_exhausted and can_continue(self.player.coins, len(self.deck))

    def is_round_open(self) -> bool:
        return self.current_round is not None and not self.current_round.is_resolved

    @property
    def end_reason(self) -> Optional[str]:
        """Why the session is over, or None while it is running."""
        if self.player.is_broke:
            return END_OUT_OF_COINS
        if self._deck_exhausted or not self.is_running():
            return END_OUT_OF_CARDS
        return None

    def start_round(self) -> DrawRound:
        """
        Open a new round.

        Raises:
            RoundPhaseError: If the session is over or a round is still open.
        """
        if self.is_round_open():
            raise RoundPhaseError(f"Round {self.round_number} is still in progress")
        if not self.is_running():
            raise RoundPhaseError(f"Session is over: {self.end_reason}")

        self.round_number += 1
        self.player.clear_hand()
        self.current_round = DrawRound(self.deck, self.player, self.round_number)
        logger.info(
            f"Starting round #{self.round_number} "
            f"({self.player.coins} coins, {len(self.deck)} cards left)"
        )
        return self.current_round

    def _require_round(self) -> DrawRound:
        if self.current_round is None:
            raise RoundPhaseError("No round has been started")
        return self.current_round

    def place_wager(self, amount: int) -> List[Card]:
        """Place the wager on the current round and deal."""
        return self._require_round().place_wager(amount)

    def exchange(self, remains: int) -> RoundResult:
        """
        Exchange cards on the current round and settle it.

        A deck that cannot refill the hand ends the session; the round is
        void and the balance is left untouched.
        """
        current = self._require_round()
        try:
            result = current.exchange(remains)
        except InsufficientCardsError as e:
            self._deck_exhausted = True
            self.current_round = None
            self.player.clear_hand()
            logger.info(f"Round {current.round_number} void: {e}")
            raise

        self.rounds_played += 1
        return result

    # ----- Interactive protocol -----

    def _show_hand(self) -> None:
        self.output(HAND_HEADER)
        for card in self.player.hand:
            self.output(card.display_str)

    def _ask(self, message: str, error_message: str, handler: Callable[[int], Any]) -> Any:
        """Prompt until the handler accepts the answer."""
        while True:
            self.output(message)
            self.agent.observe(self.get_state())
            raw = self.agent.read_line(PROMPT_MARKER)
            try:
                return handler(parse_int(raw))
            except InvalidInputError as e:
                logger.debug(f"Rejected input {raw!r}: {e}")
                self.output(error_message)

    def play_round(self) -> RoundResult:
        """
        Play one round interactively through the agent.

        Raises:
            InsufficientCardsError: If the deck runs out during the exchange
        """
        if self.agent is None:
            raise RuntimeError("An agent is required for interactive play")

        self.start_round()
        self.agent.on_round_start(self.round_number)

        self._ask(
            PROMPT_WAGER.format(max_wager=self.player.coins),
            INVALID_WAGER,
            self.place_wager,
        )
        self._show_hand()

        result = self._ask(
            PROMPT_REMAINS.format(max_remains=MAX_REMAINS),
            INVALID_REMAINS.format(min_remains=MIN_REMAINS, max_remains=MAX_REMAINS),
            self.exchange,
        )
        self._show_hand()

        self.output(result.label)
        self.output(PAYOUT_LINE.format(
            wager=result.wager, multiplier=result.multiplier, payout=result.payout,
        ))
        self.output(BALANCE_LINE.format(before=result.coins_before, after=result.coins_after))

        self.agent.on_round_end(result)
        return result

    def play(self) -> SessionSummary:
        """Play rounds until the player or the deck runs out."""
        while self.is_running():
            try:
                self.play_round()
            except InsufficientCardsError:
                break

        summary = self.summary()
        logger.info(
            f"Session over after {summary.rounds_played} rounds: "
            f"{summary.final_coins} coins, {summary.end_reason}"
        )
        return summary

    def summary(self) -> SessionSummary:
        return SessionSummary(
            rounds_played=self.rounds_played,
            starting_coins=self.starting_coins,
            final_coins=self.player.coins,
            cards_left=len(self.deck),
            end_reason=self.end_reason,
        )

    def get_state(self) -> Dict[str, Any]:
        """
        Get the session state as a JSON-friendly dictionary.

        Returns:
            Dictionary with the balance, deck size, round phase, hand and
            the wager of the round in progress.
        """
        current = self.current_round
        return {
            "round_number": self.round_number,
            "rounds_played": self.rounds_played,
            "phase": current.phase.name if current else None,
            **self.player.to_dict(),
            "wager": current.wager if current else 0,
            "max_wager": self.player.coins,
            "max_remains": MAX_REMAINS,
            "cards_left": len(self.deck),
            "is_running": self.is_running(),
            "end_reason": self.end_reason,
        }
