"""
Doko Tally - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import pytest

from doko.engine.base import (
    Configuration,
    GameType,
    Participant,
    PlayerStatus,
    RoundDeclaration,
)


# =============================================================================
# SESSION FIXTURES
# =============================================================================

@pytest.fixture
def config() -> Configuration:
    """The default table values: 10/20, solo 50."""
    return Configuration(value_pair="10/20", solo_value="50")


@pytest.fixture
def participants() -> list[Participant]:
    """Four seated participants."""
    return [
        Participant(id="p1", name="Anna"),
        Participant(id="p2", name="Bernd"),
        Participant(id="p3", name="Carla"),
        Participant(id="p4", name="Dieter"),
    ]


@pytest.fixture
def five_participants(participants) -> list[Participant]:
    """Five seated participants, one sits out each round."""
    return participants + [Participant(id="p5", name="Erika")]


# =============================================================================
# DECLARATION FIXTURES
# =============================================================================

@pytest.fixture
def team_statuses() -> dict[str, PlayerStatus]:
    """p1 and p2 win against p3 and p4."""
    return {
        "p1": PlayerStatus.WON,
        "p2": PlayerStatus.WON,
        "p3": PlayerStatus.LOST,
        "p4": PlayerStatus.LOST,
    }


@pytest.fixture
def solo_statuses() -> dict[str, PlayerStatus]:
    """p1 plays alone against everyone else and wins."""
    return {
        "p1": PlayerStatus.WON,
        "p2": PlayerStatus.LOST,
        "p3": PlayerStatus.LOST,
        "p4": PlayerStatus.LOST,
    }


@pytest.fixture
def plain_win(team_statuses) -> RoundDeclaration:
    return RoundDeclaration(game_type=GameType.NORMAL_WIN, statuses=team_statuses)


@pytest.fixture
def solo_win(solo_statuses) -> RoundDeclaration:
    return RoundDeclaration(game_type=GameType.SOLO, statuses=solo_statuses)


@pytest.fixture
def re_kontra_win(team_statuses) -> RoundDeclaration:
    return RoundDeclaration(
        game_type=GameType.NORMAL_WIN,
        modifiers=frozenset({"Re", "Kontra"}),
        statuses=team_statuses,
    )
