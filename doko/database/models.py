"""
Doko Tally - Database Models

Pydantic models that mirror the Supabase table schemas, plus conversion
to and from engine objects.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from doko.engine.base import Participant, RoundDeclaration, RoundResult
from doko.engine.session import PlayedRound
from doko.engine.validators import MAX_NAME_LENGTH


class StoredPlayer(BaseModel):
    """Participant entry of an archived session."""

    id: str
    name: str = Field(max_length=MAX_NAME_LENGTH)

    model_config = {"from_attributes": True}

    def to_participant(self) -> Participant:
        return Participant(id=self.id, name=self.name)


class StoredRound(BaseModel):
    """Round entry of an archived session."""

    id: str
    options: list[str] = Field(default_factory=list)
    statuses: dict[str, str] = Field(default_factory=dict)
    value: Decimal
    scores: dict[str, Decimal] = Field(default_factory=dict)
    bock_signature: str = ""

    model_config = {"from_attributes": True}

    @classmethod
    def from_played(cls, played: PlayedRound) -> "StoredRound":
        declaration, result = played.declaration, played.result
        return cls(
            id=played.id,
            options=list(result.options),
            statuses={pid: status.value for pid, status in declaration.statuses.items()},
            value=result.value,
            scores=dict(result.scores),
            bock_signature=result.bock_signature,
        )

    def to_played(self) -> PlayedRound:
        declaration = RoundDeclaration.from_options(self.options, self.statuses)
        return PlayedRound(
            id=self.id,
            declaration=declaration,
            result=RoundResult(
                value=self.value,
                scores=dict(self.scores),
                bock_signature=self.bock_signature,
                options=tuple(self.options),
                winners=declaration.winners,
                losers=declaration.losers,
            ),
        )


class ArchivedSession(BaseModel):
    """Mirrors the `archived_sessions` table."""

    id: UUID
    players: list[StoredPlayer] = Field(default_factory=list)
    rounds: list[StoredRound] = Field(default_factory=list)
    value_pair: str = "10/20"
    solo_value: str = "50"
    ruleset: str = "standard"
    created_at: datetime

    model_config = {"from_attributes": True}
