"""
Doko Tally - Display Formatting

Locale-aware rendering of points and the round summary shown while a round
is being entered. Arithmetic never goes through these strings.
"""

from decimal import Decimal
from typing import Mapping, Sequence

from doko.engine.base import Participant, RoundResult, quantize
from doko.engine.distributor import OutcomeDistributor
from doko.engine.rules import Ruleset


def format_points(value: Decimal, separator: str = ",", signed: bool = False) -> str:
    """
    Render points with one decimal.

    Args:
        value: Points in display units
        separator: Decimal separator of the session locale
        signed: Prefix positive values with "+"

    Returns:
        e.g. "1,5", "-0,5" or "+1,5"
    """
    rounded = quantize(value)
    text = f"{rounded:.1f}".replace(".", separator)
    if signed and rounded > 0:
        return f"+{text}"
    return text


def bock_label(multiplier: int) -> str:
    """Suffix marking a Bock round, empty for a plain round."""
    if multiplier <= 1:
        return ""
    return f"(Bockrunde x{multiplier})"


def _names(ids: Sequence[str], participants: Mapping[str, Participant]) -> str:
    return ", ".join(participants[pid].name for pid in ids if pid in participants)


def round_summary(
    result: RoundResult,
    participants: Sequence[Participant],
    is_solo: bool,
    separator: str = ",",
) -> str:
    """
    Multi-line summary of a round as shown on the entry form.

    Args:
        result: Computed round (or preview of one)
        participants: Seated participants, for names
        is_solo: Whether the round is a solo game
        separator: Decimal separator of the session locale

    Returns:
        Summary lines joined by newlines
    """
    by_id = {p.id: p for p in participants}
    winners, losers, scores = result.winners, result.losers, result.scores

    if OutcomeDistributor.is_solo_won(winners, losers, is_solo):
        lines = [
            f"Gewinner ({_names(winners, by_id)}): "
            f"{format_points(scores[winners[0]], separator, signed=True)}",
            f"Verlierer: {format_points(scores[losers[0]], separator)} p.P.",
        ]
    elif OutcomeDistributor.is_solo_lost(winners, losers, is_solo):
        lines = [
            f"Verlierer ({_names(losers, by_id)}): "
            f"{format_points(scores[losers[0]], separator)}",
            f"Gewinner: {format_points(scores[winners[0]], separator, signed=True)} p.P.",
        ]
    else:
        lines = [f"Wert: {format_points(result.value, separator)}"]
        if winners:
            lines.append(f"Gewinner: {_names(winners, by_id)}")
        if losers:
            lines.append(f"Verlierer: {_names(losers, by_id)}")

    label = bock_label(result.multiplier)
    if label:
        lines.append(label)
    return "\n".join(lines)


def display_options(result: RoundResult, ruleset: Ruleset) -> tuple[str, ...]:
    """Declared options for the history view, slot numbers collapsed."""
    return tuple(ruleset.display_name(option) for option in result.options)
