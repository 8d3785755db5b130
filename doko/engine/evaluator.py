"""
Doko Tally - Rule Evaluator

Computes the value of a round from its declaration, the session's base
values and the number of pending Bock doublings. All methods are stateless
class methods that operate on immutable inputs.

Scoring Rules:
    - Base: solo value, win value or loss value by game type (0 if none)
    - Every declared option outside the ruleset's non-doubling set: x 2
    - Every pending Bock record: x 2
    - Bonus options (fox, sheep): +/- win value, added after doubling
    - Result is divided by 100 for display units
"""

from decimal import Decimal

from doko.engine.base import Configuration, GameType, RoundDeclaration
from doko.engine.rules import STANDARD_RULES, Ruleset


class RuleEvaluator:
    """
    Stateless evaluator for round values.

    Values are kept as Decimal throughout; the raw score is in hundredths
    of a display point.
    """

    DISPLAY_DIVISOR = 100

    @classmethod
    def base_score(
        cls,
        declaration: RoundDeclaration,
        config: Configuration,
    ) -> Decimal:
        """
        Starting value for the declared game type.

        Args:
            declaration: The round's declaration
            config: Session base values

        Returns:
            Base score in raw units
        """
        if declaration.game_type is GameType.SOLO:
            return config.solo_points
        if declaration.game_type is GameType.NORMAL_WIN:
            return config.win_value
        if declaration.game_type is GameType.NORMAL_LOSS:
            return config.loss_value
        return Decimal(0)

    @classmethod
    def doubling_count(
        cls,
        declaration: RoundDeclaration,
        ruleset: Ruleset = STANDARD_RULES,
    ) -> int:
        """Number of declared options that double the round value."""
        return sum(
            1 for option in declaration.modifiers
            if option not in ruleset.non_doubling
        )

    @classmethod
    def bonus_points(
        cls,
        declaration: RoundDeclaration,
        config: Configuration,
        ruleset: Ruleset = STANDARD_RULES,
    ) -> Decimal:
        """Flat adjustment from bonus options, each worth the win value."""
        sign = sum(
            ruleset.bonuses[option] for option in declaration.modifiers
            if option in ruleset.bonuses
        )
        return config.win_value * sign

    @classmethod
    def raw_score(
        cls,
        declaration: RoundDeclaration,
        config: Configuration,
        pending: int = 0,
        ruleset: Ruleset = STANDARD_RULES,
    ) -> Decimal:
        """
        Round value before scaling to display units.

        Doubling from options and from pending Bock records compose into a
        single power of two; bonuses are added afterwards and never doubled.
        """
        exponent = cls.doubling_count(declaration, ruleset) + pending
        score = cls.base_score(declaration, config) * 2 ** exponent
        return score + cls.bonus_points(declaration, config, ruleset)

    @classmethod
    def evaluate(
        cls,
        declaration: RoundDeclaration,
        config: Configuration,
        pending: int = 0,
        ruleset: Ruleset = STANDARD_RULES,
    ) -> Decimal:
        """
        Compute the round value in display units.

        Args:
            declaration: Validated round declaration
            config: Session base values
            pending: Length of the Bock queue when the round was played
            ruleset: Doubling and bonus rules

        Returns:
            Exact round value (not yet rounded to one decimal)
        """
        return cls.raw_score(declaration, config, pending, ruleset) / cls.DISPLAY_DIVISOR
