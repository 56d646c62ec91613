"""Deterministic translation of LLM preferences into character mechanics."""

from charforge.translation.abilities import normalize_priorities, translate_ability_priorities
from charforge.translation.equipment import translate_equipment_style
from charforge.translation.features import translate_feature_choices
from charforge.translation.orchestrator import translate_preferences
from charforge.translation.point_buy import (
    POINT_BUY_MAX_SCORE,
    POINT_BUY_MIN_SCORE,
    POINT_BUY_TOTAL,
    ability_modifier,
    calculate_total_points_spent,
    get_point_buy_cost,
    validate_point_buy,
)
from charforge.translation.skills import translate_skill_themes
from charforge.translation.spells import (
    compute_spell_count,
    select_spells_by_themes,
    translate_spell_themes,
)

__all__ = [
    "POINT_BUY_MAX_SCORE",
    "POINT_BUY_MIN_SCORE",
    "POINT_BUY_TOTAL",
    "ability_modifier",
    "calculate_total_points_spent",
    "compute_spell_count",
    "get_point_buy_cost",
    "normalize_priorities",
    "select_spells_by_themes",
    "translate_ability_priorities",
    "translate_equipment_style",
    "translate_feature_choices",
    "translate_preferences",
    "translate_skill_themes",
    "translate_spell_themes",
    "validate_point_buy",
]
