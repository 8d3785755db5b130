"""
Doko Tally - Outcome Distributor

Turns a round value into signed score deltas for every participant.

Distribution Rules (first match wins):
    - Solo won (one winner, at least one loser): winner +3v, losers -v each
    - Solo lost (one loser, at least one winner): loser -3v, winners +v each
    - Team game: winners +v, losers -v
    - Everyone else: 0
"""

from decimal import Decimal
from typing import Iterable, Sequence

from doko.engine.base import quantize


class OutcomeDistributor:
    """
    Stateless distributor for round outcomes.

    Winner/loser counts are not checked here; that is the declaration
    gate's job.
    """

    SOLO_FACTOR = 3

    @classmethod
    def is_solo_won(
        cls, winners: Sequence[str], losers: Sequence[str], is_solo: bool
    ) -> bool:
        return is_solo and len(winners) == 1 and len(losers) > 0

    @classmethod
    def is_solo_lost(
        cls, winners: Sequence[str], losers: Sequence[str], is_solo: bool
    ) -> bool:
        return is_solo and len(losers) == 1 and len(winners) > 0

    @classmethod
    def distribute(
        cls,
        value: Decimal,
        winners: Sequence[str],
        losers: Sequence[str],
        is_solo: bool,
        participants: Iterable[str] = (),
    ) -> dict[str, Decimal]:
        """
        Compute every participant's delta for the round.

        Args:
            value: Exact round value in display units
            winners: Ids of the winning participants
            losers: Ids of the losing participants
            is_solo: Whether the round was a solo game
            participants: Every seated participant, so neutral players
                get an explicit zero entry

        Returns:
            Participant id -> delta, rounded to one decimal
        """
        if cls.is_solo_won(winners, losers, is_solo):
            winner_delta = value * cls.SOLO_FACTOR
            loser_delta = -value
        elif cls.is_solo_lost(winners, losers, is_solo):
            winner_delta = value
            loser_delta = -value * cls.SOLO_FACTOR
        else:
            winner_delta = value
            loser_delta = -value

        scores: dict[str, Decimal] = {pid: quantize(Decimal(0)) for pid in participants}
        for pid in winners:
            scores[pid] = quantize(winner_delta)
        for pid in losers:
            scores[pid] = quantize(loser_delta)
        return scores
