"""Ability priority allocation.

Turns an ordered list of ability priorities into a legal point-buy
purchase: walk a fixed target ladder in priority order, then spend any
leftover points greedily on the highest priority that can still afford an
increment. Racial bonuses are added last.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from charforge.models.generation import ABILITY_NAMES
from charforge.models.translation import AbilityScores, AbilityTranslation
from charforge.translation.point_buy import (
    POINT_BUY_MAX_SCORE,
    POINT_BUY_MIN_SCORE,
    POINT_BUY_TOTAL,
    calculate_total_points_spent,
    get_point_buy_cost,
    increment_cost,
    validate_point_buy,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from charforge.models.generation import AbilityName

# Target score per priority rank. The whole ladder would cost 30 points, so
# the lower ranks run out of budget before reaching their targets.
TARGET_LADDER = (15, 15, 13, 13, 10, 8)


def normalize_priorities(priorities: Iterable[str]) -> tuple[list[AbilityName], list[str]]:
    """Reduce a priority list to the six abilities, each once.

    Keeps the first occurrence of each known ability, drops anything else,
    then appends missing abilities in canonical order.

    Returns:
        Tuple of (normalized priorities, issues).
    """
    raw = list(priorities)
    seen: list[AbilityName] = []
    for name in raw:
        if name in ABILITY_NAMES and name not in seen:
            seen.append(cast("AbilityName", name))

    missing = [ability for ability in ABILITY_NAMES if ability not in seen]
    issues: list[str] = []
    if missing:
        issues.append(f"Priorities incomplete, filled with: {', '.join(missing)}")
    dropped = len(raw) - len(seen)
    if dropped > 0:
        issues.append(f"Dropped {dropped} duplicate or unknown priority entries")
    return [*seen, *missing], issues


def _raise_toward(score: int, target: int, budget: int) -> tuple[int, int]:
    """Raise ``score`` one step at a time toward ``target`` within ``budget``.

    Returns:
        Tuple of (new score, points spent).
    """
    spent = 0
    while score < target:
        step = increment_cost(score)
        if step is None or step > budget - spent:
            break
        score += 1
        spent += step
    return score, spent


def translate_ability_priorities(
    priorities: Iterable[str],
    racial_bonuses: Mapping[str, int] | None = None,
) -> AbilityTranslation:
    """Allocate point-buy scores following ability priorities.

    Args:
        priorities: Abilities ordered highest priority first. Incomplete or
            duplicated lists are normalized and reported as issues.
        racial_bonuses: Bonus per ability, applied after the purchase.

    Returns:
        AbilityTranslation with final (post-bonus) scores and the points
        spent on the purchase.
    """
    order, issues = normalize_priorities(priorities)

    base: dict[AbilityName, int] = {ability: POINT_BUY_MIN_SCORE for ability in ABILITY_NAMES}
    remaining = POINT_BUY_TOTAL

    for rank, ability in enumerate(order):
        if remaining <= 0:
            break
        target = min(TARGET_LADDER[rank], POINT_BUY_MAX_SCORE)
        needed = get_point_buy_cost(target) - get_point_buy_cost(base[ability])
        if needed <= remaining:
            if needed > 0:
                base[ability] = target
                remaining -= needed
        else:
            base[ability], spent = _raise_toward(base[ability], POINT_BUY_MAX_SCORE, remaining)
            remaining -= spent

    # Leftover points go to the highest priority that can still take one more
    while remaining > 0:
        for ability in order:
            step = increment_cost(base[ability])
            if step is not None and step <= remaining:
                base[ability] += 1
                remaining -= step
                break
        else:
            break

    points_spent = calculate_total_points_spent(base)
    purchase_issues = validate_point_buy(base)
    issues.extend(purchase_issues)

    final = dict(base)
    for ability, bonus in (racial_bonuses or {}).items():
        if bonus and ability in final:
            final[ability] += bonus  # type: ignore[index]

    return AbilityTranslation(
        success=not purchase_issues,
        scores=AbilityScores(**final),
        points_spent=points_spent,
        issues=issues,
    )
