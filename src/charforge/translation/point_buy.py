"""5e point-buy rules.

Every ability starts at 8; raising a score costs points from a pool of 27
at an increasing marginal rate, with 15 the highest purchasable score.
Racial bonuses are applied afterwards and are free.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from charforge.models.generation import ABILITY_NAMES

if TYPE_CHECKING:
    from collections.abc import Mapping

POINT_BUY_TOTAL = 27
POINT_BUY_MIN_SCORE = 8
POINT_BUY_MAX_SCORE = 15

POINT_BUY_COSTS: dict[int, int] = {
    8: 0,
    9: 1,
    10: 2,
    11: 3,
    12: 4,
    13: 5,
    14: 7,
    15: 9,
}


def get_point_buy_cost(score: int) -> int:
    """Return the total cost of buying ``score``.

    Raises:
        ValueError: If the score is outside the purchasable range.
    """
    if score < POINT_BUY_MIN_SCORE or score > POINT_BUY_MAX_SCORE:
        msg = (
            f"Point buy scores must be between {POINT_BUY_MIN_SCORE} and "
            f"{POINT_BUY_MAX_SCORE} (got: {score})"
        )
        raise ValueError(msg)
    return POINT_BUY_COSTS[score]


def increment_cost(score: int) -> int | None:
    """Cost of raising ``score`` by one, or None at the ceiling."""
    if score >= POINT_BUY_MAX_SCORE:
        return None
    return POINT_BUY_COSTS[score + 1] - POINT_BUY_COSTS[score]


def calculate_total_points_spent(scores: Mapping[str, int]) -> int:
    """Total points spent for a set of pre-bonus scores.

    Scores below the minimum cost nothing and scores above the maximum are
    charged at the maximum's cost.
    """
    total = 0
    for ability in ABILITY_NAMES:
        score = scores.get(ability, POINT_BUY_MIN_SCORE)
        if score < POINT_BUY_MIN_SCORE:
            continue
        total += POINT_BUY_COSTS[min(score, POINT_BUY_MAX_SCORE)]
    return total


def validate_point_buy(scores: Mapping[str, int]) -> list[str]:
    """Check pre-bonus scores against the point-buy rules.

    Returns:
        List of issues. Empty if the scores are a legal purchase.
    """
    issues: list[str] = []
    for ability in ABILITY_NAMES:
        score = scores.get(ability)
        if score is None:
            issues.append(f"Missing score for {ability}")
        elif not POINT_BUY_MIN_SCORE <= score <= POINT_BUY_MAX_SCORE:
            issues.append(
                f"{ability} score {score} outside point buy range "
                f"{POINT_BUY_MIN_SCORE}-{POINT_BUY_MAX_SCORE}"
            )

    spent = calculate_total_points_spent(scores)
    if spent > POINT_BUY_TOTAL:
        issues.append(f"Point buy overflow: {spent}/{POINT_BUY_TOTAL}")
    return issues


def ability_modifier(score: int) -> int:
    return (score - 10) // 2
