"""
Doko Tally - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the scoring engine. All classes are immutable (frozen dataclasses) so a round
declaration or result can be shared between the preview, the history and the
archive without defensive copies.
"""

import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

ONE_DECIMAL = Decimal("0.1")

NUMBER_PATTERN = r"[-+]?(?:\d+(?:[.,]\d*)?|[.,]\d+)(?:[eE][-+]?\d{1,3})?"

_LEADING_NUMBER = re.compile(rf"\s*({NUMBER_PATTERN})")
_WHOLE_NUMBER = re.compile(rf"\s*{NUMBER_PATTERN}\s*")


class GameType(Enum):
    """Mutually exclusive game types. The value is the option tag."""
    NONE = ""
    NORMAL_WIN = "Alten gewinnen"
    NORMAL_LOSS = "Alten verlieren"
    SOLO = "Solo"


GAME_TYPE_TAGS = frozenset(t.value for t in GameType if t is not GameType.NONE)


class PlayerStatus(Enum):
    """A participant's part in a single round."""
    WON = "won"
    LOST = "lost"
    NEUTRAL = "neutral"


class BockToken(Enum):
    """
    Ordered alphabet used to stamp Bock debt records.

    Declaration order is the sort order for display labels, and the number
    of members caps the participant count.
    """
    B = "B"
    O = "O"
    C = "C"
    K = "K"
    S = "S"
    D = "D"
    A = "A"


MAX_PARTICIPANTS = len(BockToken)


def parse_value(text: str | None) -> Decimal:
    """
    Parse a configured point value leniently.

    Reads the leading number of the text (either "." or "," as decimal
    separator, optional exponent) and ignores whatever follows it.
    Anything unparseable is 0.

    Args:
        text: Raw configured value, e.g. "10" or "12,5"

    Returns:
        The parsed value, or Decimal(0)
    """
    if not text:
        return Decimal(0)
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return Decimal(0)
    return Decimal(match.group(1).replace(",", "."))


def is_number(text: str) -> bool:
    """Whether the whole text is a number ``parse_value`` reads in full."""
    return _WHOLE_NUMBER.fullmatch(text) is not None


def quantize(value: Decimal) -> Decimal:
    """Round to one decimal place, halves away from zero. Never -0.0."""
    rounded = value.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return rounded.copy_abs() if rounded.is_zero() else rounded


@dataclass(frozen=True)
class Participant:
    """
    A player seated in the session.

    Attributes:
        id: Opaque identifier, referenced everywhere else
        name: Display name
    """
    id: str
    name: str


@dataclass(frozen=True)
class Configuration:
    """
    Base values for a session.

    Attributes:
        value_pair: Win and loss value entered together as "W/L"
        solo_value: Base value of a solo game
    """
    value_pair: str = "10/20"
    solo_value: str = "50"

    def _pair_part(self, index: int) -> Decimal:
        parts = self.value_pair.split("/")
        if index >= len(parts):
            return Decimal(0)
        return parse_value(parts[index])

    @property
    def win_value(self) -> Decimal:
        """Base value of a normal win, also the worth of a fox or sheep."""
        return self._pair_part(0)

    @property
    def loss_value(self) -> Decimal:
        """Base value of a normal loss."""
        return self._pair_part(1)

    @property
    def solo_points(self) -> Decimal:
        return parse_value(self.solo_value)


@dataclass(frozen=True)
class RoundDeclaration:
    """
    Everything declared for one round.

    Attributes:
        game_type: The single selected game type (or NONE)
        modifiers: Every other declared option tag
        statuses: Participant id -> status, in seating order (read-only
            copy; left out of the hash)
    """
    game_type: GameType = GameType.NONE
    modifiers: frozenset[str] = field(default_factory=frozenset)
    statuses: Mapping[str, PlayerStatus] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        """Game types may only be expressed through ``game_type``."""
        object.__setattr__(self, "modifiers", frozenset(self.modifiers))
        object.__setattr__(self, "statuses", MappingProxyType(dict(self.statuses)))
        clashing = self.modifiers & GAME_TYPE_TAGS
        if clashing:
            raise ValueError(
                f"Game type tags {sorted(clashing)} cannot be declared as modifiers."
            )

    @classmethod
    def from_options(
        cls,
        options: Iterable[str],
        statuses: Mapping[str, PlayerStatus | str] | None = None,
    ) -> "RoundDeclaration":
        """Build a declaration from a flat set of option tags."""
        tags = frozenset(options)
        game_tags = tags & GAME_TYPE_TAGS
        if len(game_tags) > 1:
            raise ValueError(
                f"Only one game type may be declared, got {sorted(game_tags)}."
            )
        game_type = GameType(next(iter(game_tags))) if game_tags else GameType.NONE
        return cls(
            game_type=game_type,
            modifiers=tags - game_tags,
            statuses={
                pid: PlayerStatus(status) for pid, status in (statuses or {}).items()
            },
        )

    @property
    def options(self) -> frozenset[str]:
        """All declared tags, game type included."""
        if self.game_type is GameType.NONE:
            return self.modifiers
        return self.modifiers | {self.game_type.value}

    @property
    def is_solo(self) -> bool:
        return self.game_type is GameType.SOLO

    @property
    def is_complete(self) -> bool:
        return self.game_type is not GameType.NONE

    @property
    def winners(self) -> tuple[str, ...]:
        return tuple(
            pid for pid, status in self.statuses.items() if status is PlayerStatus.WON
        )

    @property
    def losers(self) -> tuple[str, ...]:
        return tuple(
            pid for pid, status in self.statuses.items() if status is PlayerStatus.LOST
        )

    @property
    def active_count(self) -> int:
        """Number of participants who won or lost."""
        return len(self.winners) + len(self.losers)


@dataclass(frozen=True)
class RoundResult:
    """
    Complete scoring result for a round.

    Attributes:
        value: Round value in display units, one decimal
        scores: Signed delta for every participant, one decimal (read-only
            copy; left out of the hash)
        bock_signature: First token of each active Bock record ("" if none)
        options: Every declared option tag, sorted
        winners: Ids of the winning participants
        losers: Ids of the losing participants
    """
    value: Decimal
    scores: Mapping[str, Decimal] = field(hash=False)
    bock_signature: str = ""
    options: tuple[str, ...] = ()
    winners: tuple[str, ...] = ()
    losers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "scores", MappingProxyType(dict(self.scores)))
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "winners", tuple(self.winners))
        object.__setattr__(self, "losers", tuple(self.losers))

    @property
    def multiplier(self) -> int:
        """Bock factor the round was played under."""
        return 2 ** len(self.bock_signature)

    @property
    def is_bock_round(self) -> bool:
        return bool(self.bock_signature)
