"""
Doko Tally - Session Tests

End-to-end tests for recording rounds, Bock propagation, undo and totals.
"""

from decimal import Decimal

import pytest
from doko.engine.base import Configuration, GameType, PlayerStatus, RoundDeclaration
from doko.engine.bock import BockQueue
from doko.engine.rules import SHEEP_RULES
from doko.engine.session import Session


@pytest.fixture
def session(participants, config) -> Session:
    return Session(participants, config)


class TestNewSession:
    def test_new_assigns_unique_ids(self):
        session = Session.new(["Anna", " Bernd ", "", "Carla", "Dieter"])
        assert [p.name for p in session.participants] == ["Anna", "Bernd", "Carla", "Dieter"]
        assert len(set(session.participant_ids)) == 4

    def test_defaults(self):
        session = Session.new(["Anna"])
        assert session.config == Configuration()
        assert session.rounds == []
        assert len(session.queue) == 0

    def test_too_many_players(self):
        with pytest.raises(ValueError, match="must be 1-7"):
            Session.new([f"P{i}" for i in range(8)])

    def test_overlong_name_rejected(self):
        with pytest.raises(ValueError, match="at most 30 characters"):
            Session.new(["Anna", "B" * 31, "Carla", "Dieter"])


class TestRecordRound:
    """Tests for Session.record_round()."""

    def test_solo_scenario(self, session, solo_win):
        played = session.record_round(solo_win)
        assert played.result.value == Decimal("0.5")
        assert played.result.scores == {
            "p1": Decimal("1.5"),
            "p2": Decimal("-0.5"),
            "p3": Decimal("-0.5"),
            "p4": Decimal("-0.5"),
        }
        assert played.result.bock_signature == ""
        assert len(session.queue) == 1

    def test_re_kontra_scenario(self, session, re_kontra_win):
        played = session.record_round(re_kontra_win)
        assert played.result.value == Decimal("0.4")
        assert len(session.queue) == 1

    def test_re_kontra_scenario_sheep_rules(self, participants, config, re_kontra_win):
        session = Session(participants, config, SHEEP_RULES)
        played = session.record_round(re_kontra_win)
        assert played.result.value == Decimal("0.4")
        assert len(session.queue) == 2

    def test_next_round_is_bock_round(self, session, solo_win, plain_win):
        session.record_round(solo_win)
        played = session.record_round(plain_win)
        assert played.result.value == Decimal("0.2")
        assert played.result.bock_signature == "B"
        assert played.result.multiplier == 2

    def test_bock_runs_out_after_four_rounds(self, session, solo_win, plain_win):
        session.record_round(solo_win)
        values = [session.record_round(plain_win).result.value for _ in range(5)]
        assert values == [Decimal("0.2")] * 4 + [Decimal("0.1")]

    def test_options_echoed_sorted(self, session, re_kontra_win):
        played = session.record_round(re_kontra_win)
        assert played.result.options == ("Alten gewinnen", "Kontra", "Re")

    def test_rejected_round_changes_nothing(self, session, solo_win):
        session.record_round(solo_win)
        queue_before = session.queue
        with pytest.raises(ValueError):
            session.record_round(RoundDeclaration(game_type=GameType.NORMAL_WIN))
        assert len(session.rounds) == 1
        assert session.queue is queue_before

    def test_neutral_player_gets_zero(self, five_participants, config, team_statuses):
        session = Session(five_participants, config)
        declaration = RoundDeclaration(
            game_type=GameType.NORMAL_WIN,
            statuses={**team_statuses, "p5": PlayerStatus.NEUTRAL},
        )
        played = session.record_round(declaration)
        assert played.result.scores["p5"] == Decimal("0.0")
        assert len(played.result.scores) == 5


class TestPreview:
    def test_preview_does_not_mutate(self, session, solo_win):
        result = session.preview(solo_win)
        assert result.value == Decimal("0.5")
        assert session.rounds == []
        assert len(session.queue) == 0

    def test_preview_of_incomplete_declaration(self, session):
        result = session.preview(RoundDeclaration())
        assert result.value == Decimal("0.0")
        assert set(result.scores) == set(session.participant_ids)


class TestHistoryEdits:
    """Removing rounds rebuilds the queue from history."""

    def test_undo_solo_clears_bock(self, session, solo_win):
        session.record_round(solo_win)
        session.undo()
        assert session.rounds == []
        assert session.queue == BockQueue()

    def test_undo_without_rounds(self, session):
        with pytest.raises(ValueError, match="no round to undo"):
            session.undo()

    def test_remove_middle_round(self, session, solo_win, plain_win, re_kontra_win):
        session.record_round(plain_win)
        solo = session.record_round(solo_win)
        session.record_round(re_kontra_win)
        session.remove_round(solo.id)
        assert [p.declaration for p in session.rounds] == [plain_win, re_kontra_win]
        expected = BockQueue.replay(
            [plain_win.options, re_kontra_win.options], len(session.participants)
        )
        assert session.queue == expected

    def test_remove_unknown_round(self, session):
        with pytest.raises(ValueError, match="No round with id"):
            session.remove_round("round_missing")

    def test_recompute_recovers_from_desync(self, session, solo_win, plain_win):
        session.record_round(solo_win)
        session.record_round(plain_win)
        expected = session.queue
        session.queue = BockQueue()
        assert session.recompute() == expected

    def test_recompute_is_idempotent(self, session, solo_win, re_kontra_win):
        session.record_round(solo_win)
        session.record_round(re_kontra_win)
        first = session.recompute()
        assert session.recompute() == first


class TestParticipants:
    def test_remove_participant_drops_scores(self, five_participants, config, team_statuses):
        session = Session(five_participants, config)
        session.record_round(
            RoundDeclaration(game_type=GameType.NORMAL_WIN, statuses=team_statuses)
        )
        session.remove_participant("p5")
        assert "p5" not in session.participant_ids
        assert "p5" not in session.rounds[0].result.scores

    def test_remove_unknown_participant(self, session):
        with pytest.raises(ValueError, match="No participant"):
            session.remove_participant("nobody")

    def test_cannot_remove_last_participant(self, config):
        session = Session.new(["Anna"], config)
        with pytest.raises(ValueError, match="last participant"):
            session.remove_participant(session.participant_ids[0])


class TestConfig:
    def test_update_before_first_round(self, session):
        session.update_config(Configuration(value_pair="5/10"))
        assert session.config.win_value == 5

    def test_update_after_rounds_rejected(self, session, plain_win):
        session.record_round(plain_win)
        with pytest.raises(ValueError, match="cannot change"):
            session.update_config(Configuration(value_pair="5/10"))


class TestTotals:
    def test_totals_sum_rounds(self, session, solo_win, plain_win):
        session.record_round(solo_win)   # p1 +1.5, others -0.5
        session.record_round(plain_win)  # Bock: p1,p2 +0.2, p3,p4 -0.2
        assert session.totals() == {
            "p1": Decimal("1.7"),
            "p2": Decimal("-0.3"),
            "p3": Decimal("-0.7"),
            "p4": Decimal("-0.7"),
        }

    def test_totals_zero_sum_in_team_games(self, session, plain_win, re_kontra_win):
        session.record_round(plain_win)
        session.record_round(re_kontra_win)
        assert sum(session.totals().values()) == 0

    def test_empty_session(self, session):
        assert all(total == 0 for total in session.totals().values())


class TestRestore:
    def test_restore_recomputes_queue(self, session, participants, config, solo_win, plain_win):
        session.record_round(solo_win)
        session.record_round(plain_win)
        restored = Session.restore(participants, config, session.ruleset, session.rounds)
        assert restored.queue == session.queue
        assert restored.totals() == session.totals()
