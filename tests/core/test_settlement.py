"""Tests for hand and round settlement."""

import pytest

from bjtrainer.settlement import (
    HandResult,
    payout,
    settle_hand,
    settle_naturals,
    settle_round,
)


class TestSettleHand:
    """Tests for settling one hand against the dealer."""

    def test_bust_loses(self, bust_hand, make_hand):
        assert settle_hand(bust_hand, make_hand("10C", "6D", "KH")) == HandResult.LOSS

    def test_dealer_bust_wins(self, hard_16_hand, make_hand):
        assert settle_hand(hard_16_hand, make_hand("10C", "5D", "KH")) == HandResult.WIN

    def test_higher_total(self, make_hand):
        dealer = make_hand("10C", "8D")
        assert settle_hand(make_hand("10S", "9H"), dealer) == HandResult.WIN
        assert settle_hand(make_hand("10S", "7H"), dealer) == HandResult.LOSS
        assert settle_hand(make_hand("9S", "9H"), dealer) == HandResult.PUSH

    def test_blackjack_single_hand(self, blackjack_hand, make_hand):
        assert settle_hand(blackjack_hand, make_hand("10C", "9D")) == HandResult.BLACKJACK

    def test_two_card_21_after_split_is_a_win(self, make_hand):
        """Test a post-split A-10 pays as an ordinary win."""
        hand = make_hand("AS", "KH", split_hand=True)
        dealer = make_hand("10C", "9D")
        assert settle_hand(hand, dealer, single_hand=False) == HandResult.WIN


class TestPayout:
    """Tests for bankroll changes per result."""

    @pytest.mark.parametrize(
        "result,wager,expected",
        [
            (HandResult.WIN, 10, 10),
            (HandResult.LOSS, 10, -10),
            (HandResult.PUSH, 10, 0),
            (HandResult.BLACKJACK, 10, 15),
            (HandResult.BLACKJACK, 15, 22),
        ],
    )
    def test_payout(self, result, wager, expected):
        assert payout(result, wager, 1.5) == expected

    def test_six_to_five(self):
        assert payout(HandResult.BLACKJACK, 25, 1.2) == 30


class TestSettleRound:
    """Tests for settling all hands of a round."""

    def test_split_round(self, make_hand):
        dealer = make_hand("10C", "8D")
        hands = [make_hand("10S", "9H", split_hand=True), make_hand("10H", "7S", split_hand=True)]
        settlement = settle_round(hands, [10, 20], dealer, 1.5)
        assert settlement.results == (HandResult.WIN, HandResult.LOSS)
        assert settlement.net == -10
        assert settlement.headline == HandResult.WIN
        assert settlement.hands == 2
        assert settlement.count(HandResult.LOSS) == 1

    def test_doubled_wager(self, make_hand):
        dealer = make_hand("10C", "6D", "5H")
        settlement = settle_round([make_hand("5S", "6H", "KC")], [20], dealer, 1.5)
        assert settlement.results == (HandResult.PUSH,)
        assert settlement.net == 0


class TestSettleNaturals:
    """Tests for the initial-deal blackjack check."""

    def test_no_naturals(self, hard_16_hand, make_hand):
        assert settle_naturals(hard_16_hand, make_hand("10C", "9D"), 10, 1.5) is None

    def test_player_blackjack(self, blackjack_hand, make_hand):
        settlement = settle_naturals(blackjack_hand, make_hand("10C", "9D"), 10, 1.5)
        assert settlement.results == (HandResult.BLACKJACK,)
        assert settlement.net == 15

    def test_dealer_blackjack(self, hard_16_hand, make_hand):
        settlement = settle_naturals(hard_16_hand, make_hand("AC", "QD"), 10, 1.5)
        assert settlement.results == (HandResult.LOSS,)
        assert settlement.net == -10

    def test_both_blackjack(self, blackjack_hand, make_hand):
        settlement = settle_naturals(blackjack_hand, make_hand("AC", "QD"), 10, 1.5)
        assert settlement.results == (HandResult.PUSH,)
        assert settlement.net == 0
