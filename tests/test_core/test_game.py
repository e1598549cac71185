"""
Tests for the draw poker round controller and session engine.
"""

import pytest
from drawpoker.agents import ScriptedAgent, RandomAgent
from drawpoker.core.card import Deck, InsufficientCardsError
from drawpoker.core.game import (
    DrawPokerGame, DrawRound, InvalidInputError, RoundPhaseError,
    parse_int, END_OUT_OF_COINS, END_OUT_OF_CARDS,
)
from drawpoker.core.hand import HandRank
from drawpoker.core.player import Player
from drawpoker.core.rules import RoundPhase


class TestDrawRound:
    """Tests for a single round's state machine."""

    def test_initial_phase(self, deck, player):
        rnd = DrawRound(deck, player)
        assert rnd.phase == RoundPhase.AWAITING_WAGER
        assert rnd.wager == 0
        assert player.hand == []

    def test_wager_deals_sorted_hand(self, deck, player):
        rnd = DrawRound(deck, player)
        hand = rnd.place_wager(10)

        assert rnd.phase == RoundPhase.AWAITING_DRAW
        assert len(hand) == 5
        assert [c.number for c in hand] == sorted(c.number for c in hand)
        assert len(deck) + len(player.hand) == 52

    @pytest.mark.parametrize("amount", [0, -1, 101])
    def test_invalid_wager(self, deck, player, amount):
        rnd = DrawRound(deck, player)
        with pytest.raises(InvalidInputError):
            rnd.place_wager(amount)
        assert rnd.phase == RoundPhase.AWAITING_WAGER
        assert len(deck) == 52

    def test_wager_whole_balance(self, deck, player):
        rnd = DrawRound(deck, player)
        rnd.place_wager(100)
        assert rnd.wager == 100

    def test_wager_twice(self, deck, player):
        rnd = DrawRound(deck, player)
        rnd.place_wager(10)
        with pytest.raises(RoundPhaseError):
            rnd.place_wager(10)

    def test_exchange_before_wager(self, deck, player):
        rnd = DrawRound(deck, player)
        with pytest.raises(RoundPhaseError):
            rnd.exchange(3)

    @pytest.mark.parametrize("remains", [-1, 6])
    def test_invalid_remains(self, deck, player, remains):
        rnd = DrawRound(deck, player)
        rnd.place_wager(10)
        with pytest.raises(InvalidInputError):
            rnd.exchange(remains)
        assert rnd.phase == RoundPhase.AWAITING_DRAW
        assert len(deck) == 47

    @pytest.mark.parametrize("remains", [0, 1, 2, 3, 4, 5])
    def test_exchange_draws_missing_cards(self, deck, player, remains):
        rnd = DrawRound(deck, player)
        rnd.place_wager(10)
        kept = player.hand[:remains]

        rnd.exchange(remains)

        assert rnd.phase == RoundPhase.RESOLVED
        assert len(player.hand) == 5
        assert len(deck) == 47 - (5 - remains)
        assert all(card in player.hand for card in kept)
        assert [c.number for c in player.hand] == sorted(c.number for c in player.hand)

    def test_exchange_after_resolve(self, deck, player):
        rnd = DrawRound(deck, player)
        rnd.place_wager(10)
        rnd.exchange(5)
        with pytest.raises(RoundPhaseError):
            rnd.exchange(5)

    def test_straight_flush_payout(self, stacked_deck, player):
        """Keeping all of 9-K of clubs pays 50 times the wager."""
        rnd = DrawRound(stacked_deck("9c 10c Jc Qc Kc"), player)
        rnd.place_wager(10)
        result = rnd.exchange(5)

        assert result.rank == HandRank.STRAIGHT_FLUSH
        assert result.multiplier == 50
        assert result.payout == 500
        assert result.coins_before == 100
        assert result.coins_after == 590
        assert player.coins == 590

    def test_flush_payout_delta(self, stacked_deck, player):
        """Wager 10 on a flush pays 50, a net gain of 40."""
        rnd = DrawRound(stacked_deck("2s 5s 8s Js Ks"), player)
        rnd.place_wager(10)
        result = rnd.exchange(5)

        assert result.rank == HandRank.FLUSH
        assert result.payout == 50
        assert result.delta == 40
        assert player.coins == 140

    def test_exchange_keeps_lowest(self, stacked_deck, player):
        """Keeping four fills the fifth slot from the deck front."""
        rnd = DrawRound(stacked_deck("5h 10h 10c 10d Ks 10s"), player)
        rnd.place_wager(10)
        result = rnd.exchange(4)

        assert [c.short_str for c in result.hand] == ["5h", "10h", "10c", "10d", "10s"]
        assert result.rank == HandRank.FOUR_OF_A_KIND
        assert player.coins == 100 - 10 + 200

    def test_losing_round(self, stacked_deck):
        player = Player(coins=1)
        rnd = DrawRound(stacked_deck("2h 3c 4d 5s 10h"), player)
        rnd.place_wager(1)
        result = rnd.exchange(5)

        assert result.rank == HandRank.NO_RANK
        assert result.payout == 0
        assert player.coins == 0

    def test_exchange_with_short_deck(self, stacked_deck, player):
        """The deck cannot refill the hand; coins are untouched."""
        rnd = DrawRound(stacked_deck("2h 3c 4d 5s 10h 7c", size=6), player)
        rnd.place_wager(10)
        with pytest.raises(InsufficientCardsError):
            rnd.exchange(3)
        assert player.coins == 100
        assert rnd.phase == RoundPhase.AWAITING_DRAW

    def test_result_to_dict(self, stacked_deck, player):
        rnd = DrawRound(stacked_deck("9c 10c Jc Qc Kc"), player)
        rnd.place_wager(2)
        data = rnd.exchange(5).to_dict()

        assert data["rank"] == "STRAIGHT_FLUSH"
        assert data["label"] == "ストレートフラッシュ"
        assert data["description"] == "Straight Flush, King high"
        assert data["delta"] == 98
        assert len(data["hand"]) == 5


class TestParseInt:
    """Tests for reading numbers from input lines."""

    def test_plain_number(self):
        assert parse_int("42") == 42
        assert parse_int("  7\n") == 7
        assert parse_int("-3") == -3

    @pytest.mark.parametrize("raw", ["", "abc", "3.5", "1 2", "1_0", "+5", "--3", None])
    def test_not_a_number(self, raw):
        with pytest.raises(InvalidInputError):
            parse_int(raw)


class TestSessionStepping:
    """Tests for driving a session without an agent."""

    def test_initial_state(self):
        game = DrawPokerGame(seed=1)
        assert game.coins == 100
        assert game.cards_left == 52
        assert game.is_running()
        assert game.end_reason is None
        assert game.deck.is_shuffled

    def test_invalid_starting_coins(self):
        with pytest.raises(ValueError):
            DrawPokerGame(starting_coins=0)

    def test_same_seed_same_session(self):
        a = DrawPokerGame(seed=99)
        b = DrawPokerGame(seed=99)
        assert a.deck.cards == b.deck.cards

    def test_step_through_round(self):
        game = DrawPokerGame(seed=5)
        game.start_round()
        game.place_wager(10)
        result = game.exchange(2)

        assert game.rounds_played == 1
        assert game.coins == result.coins_after
        assert game.cards_left == 52 - 5 - 3

    def test_wager_without_round(self):
        game = DrawPokerGame(seed=5)
        with pytest.raises(RoundPhaseError):
            game.place_wager(10)

    def test_start_round_while_open(self):
        game = DrawPokerGame(seed=5)
        game.start_round()
        with pytest.raises(RoundPhaseError):
            game.start_round()

    def test_start_round_clears_previous_hand(self):
        game = DrawPokerGame(seed=5)
        game.start_round()
        game.place_wager(1)
        game.exchange(5)
        assert len(game.player.hand) == 5

        game.start_round()
        assert game.player.hand == []
        assert game.round_number == 2

    def test_session_over_when_broke(self, stacked_deck):
        game = DrawPokerGame(starting_coins=1, deck=stacked_deck("2h 3c 4d 5s 10h"))
        game.start_round()
        game.place_wager(1)
        game.exchange(5)

        assert game.coins == 0
        assert not game.is_running()
        assert game.end_reason == END_OUT_OF_COINS
        with pytest.raises(RoundPhaseError):
            game.start_round()

    def test_short_deck_voids_round(self, stacked_deck):
        game = DrawPokerGame(deck=stacked_deck("2h 3c 4d 5s 10h 7c", size=6))
        game.start_round()
        game.place_wager(50)

        with pytest.raises(InsufficientCardsError):
            game.exchange(0)

        assert game.coins == 100
        assert game.rounds_played == 0
        assert not game.is_running()
        assert game.end_reason == END_OUT_OF_CARDS
        assert game.player.hand == []

    def test_not_running_with_five_cards(self, stacked_deck):
        game = DrawPokerGame(deck=stacked_deck("2h 3c 4d 5s 10h", size=5))
        assert not game.is_running()
        assert game.end_reason == END_OUT_OF_CARDS

    def test_get_state(self):
        game = DrawPokerGame(seed=3)
        game.start_round()
        game.place_wager(25)
        state = game.get_state()

        assert state["phase"] == "AWAITING_DRAW"
        assert state["coins"] == 100
        assert state["wager"] == 25
        assert state["max_remains"] == 5
        assert state["cards_left"] == 47
        assert len(state["hand"]) == 5
        assert state["is_running"] is True
        assert state["end_reason"] is None
        assert state["hand"] == game.player.to_dict()["hand"]

    def test_round_logs_player(self, stacked_deck, caplog):
        game = DrawPokerGame(deck=stacked_deck("2h 3c 4d 5s 10h"))
        game.start_round()
        with caplog.at_level("DEBUG", logger="drawpoker.core.game"):
            game.place_wager(10)
        assert "dealt Player [♥2 ♣3 ♦4 ♠5 ♥10] 100 coins" in caplog.text


class TestInteractiveSession:
    """Tests for the prompt protocol over scripted agents."""

    def test_full_round_output(self, stacked_deck, output_lines):
        """Invalid answers are re-prompted; the transcript matches exactly."""
        agent = ScriptedAgent(["abc", "0", "101", "10", "7", "4"])
        game = DrawPokerGame(
            agent=agent,
            output=output_lines.append,
            deck=stacked_deck("5h 10h 10c 10d Ks 10s"),
        )

        result = game.play_round()

        assert output_lines == [
            "コインを何枚かけますか？（最大100枚）",
            "正しいコイン枚数を入れてください",
            "コインを何枚かけますか？（最大100枚）",
            "正しいコイン枚数を入れてください",
            "コインを何枚かけますか？（最大100枚）",
            "正しいコイン枚数を入れてください",
            "コインを何枚かけますか？（最大100枚）",
            "手札",
            "♥ 5",
            "♥ 10",
            "♣ 10",
            "♦ 10",
            "♠ K",
            "何枚残しますか？（最大5枚）",
            "0以上5以下です",
            "何枚残しますか？（最大5枚）",
            "手札",
            "♥ 5",
            "♥ 10",
            "♣ 10",
            "♦ 10",
            "♠ 10",
            "フォーカード",
            "10 * 20 = 200",
            "手持ちコイン: 100 -> 290",
        ]
        assert agent.prompts == [">"] * 6
        assert agent.results == [result]
        assert game.coins == 290

    def test_wager_prompt_shows_balance(self, stacked_deck, output_lines):
        agent = ScriptedAgent(["10", "5", "5", "5"])
        game = DrawPokerGame(
            agent=agent,
            output=output_lines.append,
            deck=stacked_deck("2h 3c 4d 5s 10h 9c 10c Jc Qc Kc"),
        )
        game.play_round()
        output_lines.clear()
        game.play_round()

        assert output_lines[0] == "コインを何枚かけますか？（最大90枚）"
        assert output_lines[-1] == "手持ちコイン: 90 -> 335"

    def test_session_ends_when_broke(self, stacked_deck, output_lines):
        """Balance 1, wager 1, no rank: the loop stops on the next check."""
        agent = ScriptedAgent(["1", "5"])
        game = DrawPokerGame(
            agent=agent,
            output=output_lines.append,
            starting_coins=1,
            deck=stacked_deck("2h 3c 4d 5s 10h"),
        )

        summary = game.play()

        assert summary.rounds_played == 1
        assert summary.final_coins == 0
        assert summary.end_reason == END_OUT_OF_COINS
        assert output_lines[-3:] == ["役無し", "1 * 0 = 0", "手持ちコイン: 1 -> 0"]
        assert agent.remaining_answers == 0

    def test_session_ends_when_deck_runs_short(self, stacked_deck, output_lines):
        """A void round ends the session without touching the balance."""
        agent = ScriptedAgent(["10", "0", "99"])
        game = DrawPokerGame(
            agent=agent,
            output=output_lines.append,
            deck=stacked_deck("2h 3c 4d 5s 10h 7c", size=6),
        )

        summary = game.play()

        assert summary.rounds_played == 0
        assert summary.final_coins == 100
        assert summary.end_reason == END_OUT_OF_CARDS
        assert output_lines[-1] == "何枚残しますか？（最大5枚）"
        assert agent.remaining_answers == 1

    def test_session_ends_when_deck_is_used_up(self, stacked_deck, output_lines):
        agent = ScriptedAgent(["10", "4"])
        game = DrawPokerGame(
            agent=agent,
            output=output_lines.append,
            deck=stacked_deck("2h 3c 4d 5s 10h 7c", size=6),
        )

        summary = game.play()

        assert summary.rounds_played == 1
        assert summary.cards_left == 0
        assert summary.end_reason == END_OUT_OF_CARDS

    def test_exhausted_script_raises_eof(self, deck):
        game = DrawPokerGame(agent=ScriptedAgent(["10"]), output=lambda line: None, deck=deck)
        with pytest.raises(EOFError):
            game.play()

    def test_play_round_requires_agent(self):
        game = DrawPokerGame(seed=1)
        with pytest.raises(RuntimeError):
            game.play_round()

    def test_random_agent_session(self, output_lines):
        """A whole seeded session keeps the deck and balance invariants."""
        game = DrawPokerGame(
            agent=RandomAgent(seed=11),
            output=output_lines.append,
            seed=11,
        )

        summary = game.play()

        assert not game.is_running()
        assert summary.end_reason in (END_OUT_OF_COINS, END_OUT_OF_CARDS)
        assert summary.final_coins >= 0
        assert summary.rounds_played >= 1
        seen = game.deck.drawn_cards + game.deck.cards
        assert len(seen) == 52
        assert set(seen) == set(Deck().cards)

    def test_random_agent_is_reproducible(self):
        def run():
            lines = []
            DrawPokerGame(agent=RandomAgent(seed=3), output=lines.append, seed=3).play()
            return lines

        assert run() == run()
