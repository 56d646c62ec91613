"""Tests for ability priority allocation."""

from __future__ import annotations

import itertools

import pytest

from charforge.models.generation import ABILITY_NAMES
from charforge.translation.abilities import normalize_priorities, translate_ability_priorities
from charforge.translation.point_buy import calculate_total_points_spent

FIGHTER_ORDER = ["strength", "constitution", "dexterity", "wisdom", "charisma", "intelligence"]


def test_fighter_priorities_without_bonuses() -> None:
    result = translate_ability_priorities(FIGHTER_ORDER)

    assert result.success
    assert result.points_spent == 27
    assert result.scores is not None
    assert result.scores.as_dict() == {
        "strength": 15,
        "constitution": 15,
        "dexterity": 13,
        "wisdom": 12,
        "charisma": 8,
        "intelligence": 8,
    }
    assert result.issues == []


def test_racial_bonus_applied_after_purchase() -> None:
    result = translate_ability_priorities(FIGHTER_ORDER, {"dexterity": 1})

    assert result.scores is not None
    assert result.scores.dexterity == 14
    assert result.scores.strength == 15
    assert result.points_spent == 27


def test_human_bonuses_raise_every_score() -> None:
    bonuses = {ability: 1 for ability in ABILITY_NAMES}
    result = translate_ability_priorities(FIGHTER_ORDER, bonuses)

    assert result.scores is not None
    assert result.scores.strength == 16
    assert result.scores.intelligence == 9


def test_zero_bonus_ignored() -> None:
    result = translate_ability_priorities(FIGHTER_ORDER, {"strength": 0})
    assert result.scores is not None
    assert result.scores.strength == 15


@pytest.mark.parametrize("order", list(itertools.permutations(ABILITY_NAMES))[::37])
def test_budget_never_exceeded(order: tuple[str, ...]) -> None:
    result = translate_ability_priorities(order)

    assert result.success
    assert result.points_spent is not None
    assert result.points_spent <= 27
    assert result.scores is not None
    base = result.scores.as_dict()
    assert set(base) == set(ABILITY_NAMES)
    assert all(8 <= score <= 15 for score in base.values())
    assert calculate_total_points_spent(base) == result.points_spent


def test_incomplete_priorities_filled_in_canonical_order() -> None:
    result = translate_ability_priorities(["charisma", "dexterity"])

    assert result.success
    assert result.scores is not None
    assert result.scores.charisma == 15
    assert result.scores.dexterity == 15
    # strength is the first missing ability, so it takes the third rank
    assert result.scores.strength == 13
    assert any("Priorities incomplete" in issue for issue in result.issues)


def test_normalize_drops_duplicates_and_unknown_names() -> None:
    order, issues = normalize_priorities(
        ["strength", "strength", "luck", "dexterity", "constitution", "wisdom", "charisma"]
    )

    assert order == [
        "strength",
        "dexterity",
        "constitution",
        "wisdom",
        "charisma",
        "intelligence",
    ]
    assert issues == [
        "Priorities incomplete, filled with: intelligence",
        "Dropped 2 duplicate or unknown priority entries",
    ]


def test_normalize_clean_input_has_no_issues() -> None:
    order, issues = normalize_priorities(FIGHTER_ORDER)
    assert order == FIGHTER_ORDER
    assert issues == []


def test_translation_is_deterministic() -> None:
    first = translate_ability_priorities(FIGHTER_ORDER, {"wisdom": 2})
    second = translate_ability_priorities(FIGHTER_ORDER, {"wisdom": 2})
    assert first == second
