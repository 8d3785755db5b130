"""
Doko Tally - Outcome Distributor Tests
"""

from decimal import Decimal

import pytest
from doko.engine.distributor import OutcomeDistributor

ALL = ("p1", "p2", "p3", "p4", "p5")


class TestSoloWon:
    """One winner against the rest."""

    def test_scenario(self):
        scores = OutcomeDistributor.distribute(
            Decimal("0.5"), ["p1"], ["p2", "p3", "p4"], is_solo=True
        )
        assert scores == {
            "p1": Decimal("1.5"),
            "p2": Decimal("-0.5"),
            "p3": Decimal("-0.5"),
            "p4": Decimal("-0.5"),
        }

    @pytest.mark.parametrize("winner", ["p1", "p2", "p3", "p4"])
    def test_any_partition(self, winner):
        losers = [pid for pid in ALL[:4] if pid != winner]
        value = Decimal("0.8")
        scores = OutcomeDistributor.distribute(value, [winner], losers, is_solo=True)
        assert scores[winner] == 3 * value
        assert all(scores[pid] == -value for pid in losers)

    def test_solo_zero_sum_with_three_losers(self):
        scores = OutcomeDistributor.distribute(
            Decimal("1.2"), ["p1"], ["p2", "p3", "p4"], is_solo=True
        )
        assert sum(scores.values()) == 0


class TestSoloLost:
    """The soloist lost."""

    def test_loser_pays_triple(self):
        scores = OutcomeDistributor.distribute(
            Decimal("0.5"), ["p2", "p3", "p4"], ["p1"], is_solo=True
        )
        assert scores["p1"] == Decimal("-1.5")
        assert scores["p2"] == Decimal("0.5")

    def test_one_against_one_counts_as_won(self):
        scores = OutcomeDistributor.distribute(Decimal("0.5"), ["p1"], ["p2"], is_solo=True)
        assert scores == {"p1": Decimal("1.5"), "p2": Decimal("-0.5")}


class TestTeamGame:
    def test_plain(self):
        scores = OutcomeDistributor.distribute(
            Decimal("0.1"), ["p1", "p2"], ["p3", "p4"], is_solo=False
        )
        assert scores == {
            "p1": Decimal("0.1"),
            "p2": Decimal("0.1"),
            "p3": Decimal("-0.1"),
            "p4": Decimal("-0.1"),
        }

    def test_single_winner_without_solo_is_not_tripled(self):
        scores = OutcomeDistributor.distribute(
            Decimal("0.5"), ["p1"], ["p2", "p3", "p4"], is_solo=False
        )
        assert scores["p1"] == Decimal("0.5")

    def test_solo_with_two_winners_and_two_losers_is_team_rule(self):
        scores = OutcomeDistributor.distribute(
            Decimal("0.5"), ["p1", "p2"], ["p3", "p4"], is_solo=True
        )
        assert scores["p1"] == Decimal("0.5")
        assert scores["p3"] == Decimal("-0.5")


class TestEntries:
    def test_neutral_participants_get_zero(self):
        scores = OutcomeDistributor.distribute(
            Decimal("0.1"), ["p1", "p2"], ["p3", "p4"], is_solo=False, participants=ALL
        )
        assert set(scores) == set(ALL)
        assert scores["p5"] == Decimal("0.0")

    def test_one_decimal_precision(self):
        scores = OutcomeDistributor.distribute(
            Decimal("0.25"), ["p1"], ["p2", "p3", "p4"], is_solo=True
        )
        assert scores["p1"] == Decimal("0.8")
        assert scores["p2"] == Decimal("-0.3")
        assert scores["p1"].as_tuple().exponent == -1

    def test_zero_value_has_no_negative_zero(self):
        scores = OutcomeDistributor.distribute(Decimal(0), ["p1"], ["p2"], is_solo=False)
        assert str(scores["p2"]) == "0.0"
