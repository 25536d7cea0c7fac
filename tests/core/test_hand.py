"""Tests for Hand valuation and outcome."""

import pytest
from hypothesis import given, strategies as st

from core.cards import Card, Rank, Suit
from core.hand import Hand, Outcome, demote_aces, evaluate_hands


class TestHand:
    """Tests for the Hand class."""

    def test_empty_hand(self, empty_hand):
        """Test empty hand properties."""
        assert len(empty_hand) == 0
        assert empty_hand.total == 0
        assert not empty_hand.busted

    def test_hit_adds_card(self, empty_hand):
        empty_hand.hit(Card(Rank.TEN, Suit.SPADES))
        assert len(empty_hand) == 1
        assert empty_hand.total == 10

    def test_hard_total(self, hard_16_hand):
        assert hard_16_hand.total == 16
        assert not hard_16_hand.busted

    def test_soft_total_keeps_ace_high(self, soft_17_hand):
        assert soft_17_hand.total == 17
        assert soft_17_hand.cards[0].value == 11

    def test_bust(self, bust_hand):
        """Test bust detection."""
        assert bust_hand.busted
        assert bust_hand.total == 26

    def test_exactly_21_is_not_bust(self, make_hand):
        hand = make_hand(10, 5, 6)
        assert hand.total == 21
        assert not hand.busted

    def test_ace_demoted_on_bust(self, make_hand):
        """A-5 is 16; an 8 makes it 14, not 24."""
        hand = make_hand(11, 5)
        assert hand.total == 16

        hand.hit(Card(Rank.EIGHT, Suit.CLUBS))
        assert hand.total == 14
        assert hand.cards[0].value == 1

    def test_pair_of_aces(self, make_hand):
        """A-A is 12, one Ace stays high."""
        hand = make_hand(11, 11)
        assert hand.total == 12
        assert sorted(card.value for card in hand) == [1, 11]

    def test_multiple_aces_demoted_one_at_a_time(self, make_hand):
        hand = make_hand(11, 11, 11)
        assert hand.total == 13

        hand.hit(Card(Rank.NINE, Suit.DIAMONDS))
        assert hand.total == 12
        assert all(card.value == 1 for card in hand if card.is_ace)

    def test_busts_with_all_aces_demoted(self, make_hand):
        hand = make_hand(10, 11, 10, 5)
        assert hand.busted
        assert hand.total == 26
        assert hand.cards[1].value == 1

    def test_reset(self, make_hand):
        """After reset the hand is empty and not busted."""
        hand = make_hand(10, 6, 10)
        hand.reset()
        assert hand.total == 0
        assert not hand.busted
        assert len(hand) == 0

    def test_display_cards(self):
        hand = Hand()
        hand.hit(Card(Rank.ACE, Suit.SPADES))
        hand.hit(Card(Rank.KING, Suit.HEARTS))
        assert hand.display_cards() == "Ace of Spades, King of Hearts"
        assert str(hand) == "Ace of Spades, King of Hearts (21)"


class TestDemoteAces:
    """Tests for the ace normalisation step."""

    def test_leaves_live_hand_alone(self, make_cards):
        cards = make_cards(11, 9)
        demote_aces(cards)
        assert [card.value for card in cards] == [11, 9]

    def test_idempotent(self, make_cards):
        cards = make_cards(11, 11, 10)
        demote_aces(cards)
        once = [card.value for card in cards]
        demote_aces(cards)
        assert [card.value for card in cards] == once
        assert sum(once) == 12

    def test_stops_as_soon_as_live(self, make_cards):
        """Only one of two Aces is demoted when that is enough."""
        cards = make_cards(11, 11)
        demote_aces(cards)
        assert sum(card.value for card in cards) == 12

    @given(st.lists(st.sampled_from(list(Rank)), min_size=1, max_size=10))
    def test_busts_only_if_all_low_busts(self, ranks):
        """
        A hand over 21 ends at 21 or less exactly when counting every Ace
        as 1 would; otherwise every Ace ends up at 1.
        """
        cards = [Card(rank, Suit.SPADES) for rank in ranks]
        all_low = sum(1 if card.is_ace else card.value for card in cards)

        hand = Hand(cards=list(cards))
        hand.reevaluate_aces()

        assert hand.busted == (all_low > 21)
        if hand.busted:
            assert all(not card.is_high_ace for card in hand)

    @given(st.lists(st.sampled_from(list(Rank)), min_size=1, max_size=10))
    def test_hitting_gives_best_total(self, ranks):
        """Card-by-card demotion ends at the highest total not over 21."""
        hand = Hand()
        for rank in ranks:
            hand.hit(Card(rank, Suit.HEARTS))

        total = sum(rank.canonical_value for rank in ranks)
        aces = sum(1 for rank in ranks if rank.is_ace)
        while total > 21 and aces:
            total -= 10
            aces -= 1

        assert hand.total == total


class TestEvaluateHands:
    """Tests for outcome precedence."""

    def test_both_busted_is_tie(self, make_hand):
        """Two busted hands tie regardless of totals."""
        player = make_hand(10, 10, 5)
        dealer = make_hand(10, 6, 10)
        assert player.total != dealer.total
        assert evaluate_hands(player, dealer) == Outcome.TIE

    def test_dealer_bust_player_wins(self, make_hand):
        assert evaluate_hands(make_hand(10, 10), make_hand(10, 6, 10)) == Outcome.PLAYER_WINS

    def test_player_bust_dealer_wins(self, make_hand):
        assert evaluate_hands(make_hand(10, 6, 10), make_hand(10, 7)) == Outcome.DEALER_WINS

    def test_player_bust_loses_to_lower_dealer_total(self, make_hand):
        """Bust status beats raw totals."""
        assert evaluate_hands(make_hand(10, 10, 2), make_hand(10, 4)) == Outcome.DEALER_WINS

    def test_equal_totals_tie(self, make_hand):
        assert evaluate_hands(make_hand(10, 8), make_hand(9, 9)) == Outcome.TIE

    @pytest.mark.parametrize(
        "player, dealer, expected",
        [
            ((10, 9), (10, 10), Outcome.DEALER_WINS),
            ((10, 10), (10, 9), Outcome.PLAYER_WINS),
            ((11, 10), (10, 9, 2), Outcome.TIE),
        ],
    )
    def test_higher_total_wins(self, make_hand, player, dealer, expected):
        assert evaluate_hands(make_hand(*player), make_hand(*dealer)) == expected

    def test_outcome_str(self):
        assert str(Outcome.PLAYER_WINS) == "Player Wins"
