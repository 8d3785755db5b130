"""
Doko Tally - Bock Queue

Pending Bock doublings are kept as a queue of debt records. Each record is
a sequence of tokens, one per participant seat at the time it was started;
every played round removes one token from every record and drops the
records that run empty. The queue length is the number of doublings the
next round is played under.

The queue is a pure fold over the round history, so whenever history is
edited it is rebuilt with ``BockQueue.replay`` instead of being patched.
"""

from dataclasses import dataclass
from typing import Iterable

from doko.engine.base import MAX_PARTICIPANTS, BockToken
from doko.engine.rules import STANDARD_RULES, Ruleset

_TOKEN_ORDER: dict[BockToken, int] = {token: i for i, token in enumerate(BockToken)}

BockRecord = tuple[BockToken, ...]


def tokens_for(participant_count: int) -> BockRecord:
    """
    Token sequence stamped on a new record.

    Args:
        participant_count: Number of seated participants

    Returns:
        The first ``participant_count`` tokens of the alphabet

    Raises:
        ValueError: If there are more participants than tokens
    """
    if not (0 <= participant_count <= MAX_PARTICIPANTS):
        raise ValueError(
            f"Participant count must be between 0 and {MAX_PARTICIPANTS}, "
            f"got {participant_count}."
        )
    return tuple(BockToken)[:participant_count]


@dataclass(frozen=True)
class BockQueue:
    """
    Immutable queue of pending Bock records, oldest first.

    Attributes:
        records: Non-empty token sequences
    """
    records: tuple[BockRecord, ...] = ()

    def __post_init__(self) -> None:
        """Reject empty records."""
        for record in self.records:
            if not record:
                raise ValueError("Bock records must not be empty.")

    def __len__(self) -> int:
        return len(self.records)

    @property
    def multiplier(self) -> int:
        """Factor applied to a round played under this queue."""
        return 2 ** len(self.records)

    def signature(self) -> str:
        """
        Display label for a round played under this queue.

        First token of every record, in alphabet order. Cosmetic only.
        """
        heads = sorted((record[0] for record in self.records), key=_TOKEN_ORDER.__getitem__)
        return "".join(token.value for token in heads)

    def consume(self) -> "BockQueue":
        """Discharge one doubling from every record."""
        return BockQueue(
            records=tuple(record[1:] for record in self.records if len(record) > 1)
        )

    def advance(
        self,
        options: Iterable[str],
        participant_count: int,
        ruleset: Ruleset = STANDARD_RULES,
    ) -> "BockQueue":
        """
        Queue state for the round after the one just played.

        Args:
            options: Every option declared in the round just played
            participant_count: Number of seated participants
            ruleset: Bock trigger definitions

        Returns:
            The consumed queue plus one new record per satisfied trigger
        """
        consumed = self.consume()
        triggered = ruleset.count_triggers(frozenset(options))
        if not triggered or participant_count == 0:
            return consumed

        record = tokens_for(participant_count)
        return BockQueue(records=consumed.records + (record,) * triggered)

    @classmethod
    def replay(
        cls,
        history: Iterable[Iterable[str]],
        participant_count: int,
        ruleset: Ruleset = STANDARD_RULES,
    ) -> "BockQueue":
        """
        Rebuild the queue from an empty state.

        Args:
            history: Option sets of every played round, oldest first
            participant_count: Number of seated participants
            ruleset: Bock trigger definitions

        Returns:
            Queue state for the next round
        """
        queue = cls()
        for options in history:
            queue = queue.advance(options, participant_count, ruleset)
        return queue
