"""
Doko Tally Game Engine.

Pure Python scoring logic with zero UI/database dependencies.
Handles round values, score distribution and Bock round propagation.
"""

from doko.engine.base import (
    BockToken,
    Configuration,
    GameType,
    Participant,
    PlayerStatus,
    RoundDeclaration,
    RoundResult,
)
from doko.engine.bock import BockQueue
from doko.engine.distributor import OutcomeDistributor
from doko.engine.evaluator import RuleEvaluator
from doko.engine.rules import (
    RULESETS,
    SHEEP_RULES,
    STANDARD_RULES,
    Ruleset,
    get_ruleset,
)
from doko.engine.session import PlayedRound, Session

__all__ = [
    # Data Classes
    "Configuration",
    "Participant",
    "PlayedRound",
    "RoundDeclaration",
    "RoundResult",
    # Enums
    "BockToken",
    "GameType",
    "PlayerStatus",
    # Rulesets
    "RULESETS",
    "Ruleset",
    "SHEEP_RULES",
    "STANDARD_RULES",
    "get_ruleset",
    # Engines
    "BockQueue",
    "OutcomeDistributor",
    "RuleEvaluator",
    "Session",
]
