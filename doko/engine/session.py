"""
Doko Tally - Session

A session owns the seated participants, the base values, the played rounds
and the Bock queue for the next round. Each round goes through the same
pipeline: validate, evaluate under the current queue, distribute, append,
then advance the queue. Any edit to past rounds rebuilds the queue from the
remaining history.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Sequence

from doko.engine.base import (
    Configuration,
    Participant,
    RoundDeclaration,
    RoundResult,
    quantize,
)
from doko.engine.bock import BockQueue
from doko.engine.distributor import OutcomeDistributor
from doko.engine.evaluator import RuleEvaluator
from doko.engine.rules import STANDARD_RULES, Ruleset
from doko.engine.validators import (
    validate_declaration,
    validate_player_count,
    validate_player_names,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayedRound:
    """
    A committed round in the session history.

    Attributes:
        id: Round identifier
        declaration: What was declared
        result: What it scored
    """
    id: str
    declaration: RoundDeclaration
    result: RoundResult


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


class Session:
    """Single-owner scorekeeping session."""

    def __init__(
        self,
        participants: Sequence[Participant],
        config: Configuration | None = None,
        ruleset: Ruleset = STANDARD_RULES,
    ) -> None:
        validate_player_count(len(participants))
        self.participants: list[Participant] = list(participants)
        self.config = config or Configuration()
        self.ruleset = ruleset
        self.rounds: list[PlayedRound] = []
        self.queue = BockQueue()

    @classmethod
    def new(
        cls,
        names: Sequence[str],
        config: Configuration | None = None,
        ruleset: Ruleset = STANDARD_RULES,
    ) -> Session:
        """Start a session with fresh participant ids."""
        participants = [
            Participant(id=_new_id("player"), name=name)
            for name in validate_player_names(names)
        ]
        return cls(participants, config, ruleset)

    @classmethod
    def restore(
        cls,
        participants: Sequence[Participant],
        config: Configuration,
        ruleset: Ruleset,
        rounds: Sequence[PlayedRound],
    ) -> Session:
        """
        Rebuild a session from stored history.

        Args:
            participants: Seated participants
            config: Base values in effect for the stored rounds
            ruleset: Ruleset the session was played with
            rounds: Played rounds, oldest first

        Returns:
            Session with its Bock queue recomputed from the rounds
        """
        session = cls(participants, config, ruleset)
        session.rounds = list(rounds)
        session.recompute()
        return session

    @property
    def participant_ids(self) -> tuple[str, ...]:
        return tuple(p.id for p in self.participants)

    def preview(self, declaration: RoundDeclaration) -> RoundResult:
        """
        Score a declaration under the current queue without committing it.

        The declaration does not need to be complete; an empty game type
        simply scores 0.
        """
        value = RuleEvaluator.evaluate(
            declaration, self.config, len(self.queue), self.ruleset
        )
        scores = OutcomeDistributor.distribute(
            value,
            declaration.winners,
            declaration.losers,
            declaration.is_solo,
            participants=self.participant_ids,
        )
        return RoundResult(
            value=quantize(value),
            scores=scores,
            bock_signature=self.queue.signature(),
            options=tuple(sorted(declaration.options)),
            winners=declaration.winners,
            losers=declaration.losers,
        )

    def record_round(self, declaration: RoundDeclaration) -> PlayedRound:
        """
        Commit a round and advance the Bock queue.

        Raises:
            ValueError: If the declaration is rejected; nothing changes
        """
        validate_declaration(declaration, self.participant_ids, self.ruleset)

        played = PlayedRound(
            id=_new_id("round"),
            declaration=declaration,
            result=self.preview(declaration),
        )
        self.rounds.append(played)
        self.queue = self.queue.advance(
            declaration.options, len(self.participants), self.ruleset
        )
        logger.debug(
            "Recorded round %s worth %s, %d Bock records pending",
            played.id, played.result.value, len(self.queue),
        )
        return played

    def recompute(self) -> BockQueue:
        """Rebuild the Bock queue from the full history."""
        self.queue = BockQueue.replay(
            (played.declaration.options for played in self.rounds),
            len(self.participants),
            self.ruleset,
        )
        logger.info(
            "Recomputed Bock queue from %d rounds: %d records pending",
            len(self.rounds), len(self.queue),
        )
        return self.queue

    def remove_round(self, round_id: str) -> PlayedRound:
        """
        Delete a round from history.

        Raises:
            ValueError: If no round has that id
        """
        for index, played in enumerate(self.rounds):
            if played.id == round_id:
                del self.rounds[index]
                self.recompute()
                return played
        raise ValueError(f"No round with id {round_id!r}.")

    def undo(self) -> PlayedRound:
        """
        Remove the most recent round.

        Raises:
            ValueError: If there are no rounds
        """
        if not self.rounds:
            raise ValueError("There is no round to undo.")
        return self.remove_round(self.rounds[-1].id)

    def remove_participant(self, participant_id: str) -> Participant:
        """
        Unseat a participant and drop their past score entries.

        The Bock queue is left as it is.

        Raises:
            ValueError: If the participant is unknown or the last one seated
        """
        for participant in self.participants:
            if participant.id == participant_id:
                break
        else:
            raise ValueError(f"No participant with id {participant_id!r}.")

        if len(self.participants) == 1:
            raise ValueError("Cannot remove the last participant.")

        self.participants.remove(participant)
        self.rounds = [
            replace(
                played,
                result=replace(
                    played.result,
                    scores={
                        pid: score
                        for pid, score in played.result.scores.items()
                        if pid != participant_id
                    },
                ),
            )
            for played in self.rounds
        ]
        logger.info("Removed participant %s", participant.name)
        return participant

    def update_config(self, config: Configuration) -> None:
        """
        Replace the base values.

        Raises:
            ValueError: If rounds have already been played with the old values
        """
        if self.rounds:
            raise ValueError("Base values cannot change once rounds are recorded.")
        self.config = config

    def totals(self) -> dict[str, Decimal]:
        """Sum of every participant's deltas over the session."""
        totals = {pid: Decimal(0) for pid in self.participant_ids}
        for played in self.rounds:
            for pid, score in played.result.scores.items():
                if pid in totals:
                    totals[pid] += score
        return {pid: quantize(total) for pid, total in totals.items()}
