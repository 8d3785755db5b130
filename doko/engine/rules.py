"""
Doko Tally - Rulesets

A ruleset describes everything that varies between the Doppelkopf tables we
keep score for: the option vocabulary, which options double the round value,
which ones add a flat bonus, what starts a Bock round and how many players
take part in a round. The engine itself is shared.

Rulesets:
    - standard: fox bonuses, Bock on solo and on Re + Kontra, exactly 4 players
    - schaf: lost-sheep penalty, Bock on solo and on every opposing call,
      at most 4 players
"""

from dataclasses import dataclass, field, replace
from typing import Callable, Mapping

from doko.engine.base import GAME_TYPE_TAGS, GameType, PlayerStatus, RoundDeclaration

RE = "Re"
KONTRA = "Kontra"
SOLO_LOST = "Solo verloren"
FOX_CAUGHT_1 = "Fuchs gefangen 1"
FOX_CAUGHT_2 = "Fuchs gefangen 2"
FOX_LOST_1 = "Fuchs verloren 1"
FOX_LOST_2 = "Fuchs verloren 2"
SHEEP_LOST = "Schaf verloren"

BockTrigger = Callable[[frozenset[str]], bool]


def is_solo_game(options: frozenset[str]) -> bool:
    return GameType.SOLO.value in options


def is_re_and_kontra(options: frozenset[str]) -> bool:
    """Both opposing calls were made."""
    return RE in options and KONTRA in options


def is_re(options: frozenset[str]) -> bool:
    return RE in options


def is_kontra(options: frozenset[str]) -> bool:
    return KONTRA in options


_ANNOUNCEMENT_GROUPS: dict[str, tuple[str, ...]] = {
    "Alten gewinnen": ("Keine 90", "Keine 60", "Keine 30", "schwarz"),
    "Alten verlieren": (
        "Keine 90 verloren",
        "Keine 60 verloren",
        "Keine 30 verloren",
        "schwarz verloren",
    ),
    "Ansagen": (RE, KONTRA),
    "Fehl-Ansagen": (
        "Keine 90 gesagt",
        "Keine 60 gesagt",
        "Keine 30 gesagt",
        "schwarz gesagt",
    ),
    "Solo": (SOLO_LOST,),
}


@dataclass(frozen=True)
class Ruleset:
    """
    Descriptor parameterizing the scoring engine.

    Attributes:
        name: Registry key
        option_groups: Group title -> option tags, in display order
        bonuses: Option tag -> +1/-1; each is worth the win value
        bock_triggers: Each satisfied predicate starts one Bock record
        player_count: Required (or maximum) number of active players
        exact_player_count: Whether exactly ``player_count`` must play
        solo_excludes: Options that cannot accompany a solo
        solo_only: Options that require a solo
        display_aliases: Slot-numbered tag -> name shown in history
    """
    name: str
    option_groups: Mapping[str, tuple[str, ...]]
    bonuses: Mapping[str, int]
    bock_triggers: tuple[BockTrigger, ...]
    player_count: int = 4
    exact_player_count: bool = True
    solo_excludes: frozenset[str] = field(default_factory=frozenset)
    solo_only: frozenset[str] = field(default_factory=frozenset)
    display_aliases: Mapping[str, str] = field(default_factory=dict)

    @property
    def modifiers(self) -> frozenset[str]:
        """Every option tag other than the game types."""
        return frozenset(
            tag for tags in self.option_groups.values() for tag in tags
        )

    @property
    def vocabulary(self) -> frozenset[str]:
        return self.modifiers | GAME_TYPE_TAGS

    @property
    def non_doubling(self) -> frozenset[str]:
        """Options that leave the round value's factor alone."""
        return GAME_TYPE_TAGS | frozenset(self.bonuses)

    def count_triggers(self, options: frozenset[str]) -> int:
        """Number of new Bock records the given round starts."""
        return sum(1 for trigger in self.bock_triggers if trigger(options))

    def accepts_player_count(self, count: int) -> bool:
        if self.exact_player_count:
            return count == self.player_count
        return 1 <= count <= self.player_count

    def display_name(self, option: str) -> str:
        return self.display_aliases.get(option, option)


STANDARD_RULES = Ruleset(
    name="standard",
    option_groups={
        **_ANNOUNCEMENT_GROUPS,
        "Fuchs gefangen": (FOX_CAUGHT_1, FOX_CAUGHT_2),
        "Fuchs verloren": (FOX_LOST_1, FOX_LOST_2),
    },
    bonuses={
        FOX_CAUGHT_1: 1,
        FOX_CAUGHT_2: 1,
        FOX_LOST_1: -1,
        FOX_LOST_2: -1,
    },
    bock_triggers=(is_solo_game, is_re_and_kontra),
    player_count=4,
    exact_player_count=True,
    solo_excludes=frozenset({FOX_CAUGHT_1, FOX_CAUGHT_2, FOX_LOST_1, FOX_LOST_2}),
    solo_only=frozenset({SOLO_LOST}),
    display_aliases={
        FOX_CAUGHT_1: "Fuchs gefangen",
        FOX_CAUGHT_2: "Fuchs gefangen",
        FOX_LOST_1: "Fuchs verloren",
        FOX_LOST_2: "Fuchs verloren",
    },
)

SHEEP_RULES = Ruleset(
    name="schaf",
    option_groups={
        **_ANNOUNCEMENT_GROUPS,
        "Schaf": (SHEEP_LOST,),
    },
    bonuses={SHEEP_LOST: -1},
    bock_triggers=(is_solo_game, is_re, is_kontra),
    player_count=4,
    exact_player_count=False,
    solo_excludes=frozenset({SHEEP_LOST}),
    solo_only=frozenset({SOLO_LOST}),
)

RULESETS: dict[str, Ruleset] = {
    STANDARD_RULES.name: STANDARD_RULES,
    SHEEP_RULES.name: SHEEP_RULES,
}


def get_ruleset(name: str) -> Ruleset:
    """
    Look up a registered ruleset.

    Raises:
        ValueError: If no ruleset is registered under ``name``
    """
    try:
        return RULESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown ruleset {name!r}. Must be one of {sorted(RULESETS)}."
        ) from None


def toggle_option(
    declaration: RoundDeclaration,
    tag: str,
    ruleset: Ruleset = STANDARD_RULES,
) -> RoundDeclaration:
    """
    Toggle one option on the declaration being entered.

    Selecting a game type replaces the current one; selecting Solo also
    drops the options a solo cannot carry. Deselecting Solo drops the
    solo-only options.

    Args:
        declaration: Declaration before the click
        tag: Option tag that was clicked
        ruleset: Vocabulary and exclusivity rules

    Returns:
        The new declaration

    Raises:
        ValueError: If the tag is not part of the ruleset's vocabulary
    """
    if tag not in ruleset.vocabulary:
        raise ValueError(f"Unknown option {tag!r} for ruleset {ruleset.name!r}.")

    if tag in GAME_TYPE_TAGS:
        game_type = GameType(tag)
        if declaration.game_type is game_type:
            modifiers = declaration.modifiers
            if game_type is GameType.SOLO:
                modifiers = modifiers - ruleset.solo_only
            return replace(declaration, game_type=GameType.NONE, modifiers=modifiers)

        modifiers = declaration.modifiers
        if game_type is GameType.SOLO:
            modifiers = modifiers - ruleset.solo_excludes
        elif declaration.is_solo:
            modifiers = modifiers - ruleset.solo_only
        return replace(declaration, game_type=game_type, modifiers=modifiers)

    if tag in declaration.modifiers:
        return replace(declaration, modifiers=declaration.modifiers - {tag})
    return replace(declaration, modifiers=declaration.modifiers | {tag})


_NEXT_STATUS = {
    PlayerStatus.NEUTRAL: PlayerStatus.WON,
    PlayerStatus.WON: PlayerStatus.LOST,
    PlayerStatus.LOST: PlayerStatus.NEUTRAL,
}


def cycle_status(declaration: RoundDeclaration, participant_id: str) -> RoundDeclaration:
    """Advance a participant neutral -> won -> lost -> neutral."""
    current = declaration.statuses.get(participant_id, PlayerStatus.NEUTRAL)
    statuses = dict(declaration.statuses)
    statuses[participant_id] = _NEXT_STATUS[current]
    return replace(declaration, statuses=statuses)
