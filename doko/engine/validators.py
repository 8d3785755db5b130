"""
Doko Tally - Input Validation Utilities

Provides validation functions for engine inputs. All validators either
return validated data or raise descriptive ValueError exceptions. The
scoring engine itself assumes its inputs already passed through here.
"""

from typing import Iterable, Sequence

from doko.engine.base import MAX_PARTICIPANTS, RoundDeclaration, is_number, parse_value
from doko.engine.rules import Ruleset

MAX_NAME_LENGTH = 30


def validate_player_count(count: int) -> int:
    """
    Validate number of seated participants.

    Args:
        count: Number of participants

    Returns:
        Validated count

    Raises:
        ValueError: If count is not 1-7
    """
    if not isinstance(count, int):
        raise ValueError(f"Player count must be an integer, got {type(count).__name__}.")

    if not (1 <= count <= MAX_PARTICIPANTS):
        raise ValueError(f"Player count must be 1-{MAX_PARTICIPANTS}, got {count}.")

    return count


def validate_player_names(names: Sequence[str]) -> tuple[str, ...]:
    """
    Strip names and drop blank entries.

    Args:
        names: Raw names as entered, blanks allowed

    Returns:
        The non-blank names, stripped

    Raises:
        ValueError: If the remaining count is out of range or a name is
            longer than MAX_NAME_LENGTH
    """
    cleaned = tuple(name.strip() for name in names if name and name.strip())
    too_long = [name for name in cleaned if len(name) > MAX_NAME_LENGTH]
    if too_long:
        raise ValueError(
            f"Player names must be at most {MAX_NAME_LENGTH} characters, got {too_long[0]!r}."
        )
    validate_player_count(len(cleaned))
    return cleaned


def validate_value_pair(value_pair: str) -> str:
    """
    Validate a "W/L" value pair as entered in the settings.

    Each entry must be a whole number in the grammar parse_value reads, so
    an accepted pair always evaluates to what was typed.

    Raises:
        ValueError: If it is not two non-negative numbers separated by "/"
    """
    parts = value_pair.split("/")
    if len(parts) != 2:
        raise ValueError(f"Value pair must look like 'W/L', got {value_pair!r}.")

    for part in parts:
        if not is_number(part) or parse_value(part) < 0:
            raise ValueError(
                f"Value pair entries must be non-negative numbers, got {value_pair!r}."
            )

    return value_pair


def validate_declaration(
    declaration: RoundDeclaration,
    participant_ids: Iterable[str],
    ruleset: Ruleset,
) -> RoundDeclaration:
    """
    Accept or reject a declaration before it is scored.

    Args:
        declaration: The round as entered
        participant_ids: Ids of everyone seated in the session
        ruleset: Vocabulary, exclusivity and player-count rules

    Returns:
        The declaration unchanged

    Raises:
        ValueError: If the declaration cannot be scored
    """
    if not declaration.is_complete:
        raise ValueError("A game type must be selected.")

    unknown = declaration.modifiers - ruleset.modifiers
    if unknown:
        raise ValueError(
            f"Unknown options for ruleset {ruleset.name!r}: {sorted(unknown)}."
        )

    if declaration.is_solo:
        excluded = declaration.modifiers & ruleset.solo_excludes
        if excluded:
            raise ValueError(f"Options {sorted(excluded)} cannot be declared in a solo.")
    else:
        solo_only = declaration.modifiers & ruleset.solo_only
        if solo_only:
            raise ValueError(f"Options {sorted(solo_only)} require a solo.")

    known = set(participant_ids)
    strangers = [pid for pid in declaration.statuses if pid not in known]
    if strangers:
        raise ValueError(f"Unknown participants in declaration: {strangers}.")

    count = declaration.active_count
    if not ruleset.accepts_player_count(count):
        if ruleset.exact_player_count:
            raise ValueError(
                f"Exactly {ruleset.player_count} players must take part, got {count}."
            )
        raise ValueError(
            f"Between 1 and {ruleset.player_count} players must take part, got {count}."
        )

    return declaration
