"""Run every translation stage for one set of preferences."""

from __future__ import annotations

from typing import TYPE_CHECKING

from charforge.models.translation import StageTranslations, TranslationResult
from charforge.translation.abilities import translate_ability_priorities
from charforge.translation.equipment import translate_equipment_style
from charforge.translation.features import translate_feature_choices
from charforge.translation.skills import translate_skill_themes
from charforge.translation.spells import translate_spell_themes

if TYPE_CHECKING:
    from charforge.models.generation import GenerationConstraints
    from charforge.models.preferences import AiPreferences


def translate_preferences(
    preferences: AiPreferences,
    constraints: GenerationConstraints,
    level: int,
) -> TranslationResult:
    """Translate LLM preferences into concrete, rule-valid choices.

    Stages run in a fixed order: abilities, skills, equipment, feature
    choices, then spells. Spells see the final ability scores so prepared
    casters can size their list. The spell stage is skipped for
    non-casters.

    Args:
        preferences: Parsed LLM preferences.
        constraints: Valid options for the character.
        level: Character level.

    Returns:
        TranslationResult that succeeds only if every applicable stage did.
        Issues from all stages are collected in stage order.
    """
    abilities = translate_ability_priorities(
        preferences.ability_priorities, constraints.race.ability_bonuses
    )
    skills = translate_skill_themes(preferences.skill_themes, constraints.skills)
    equipment = translate_equipment_style(
        preferences.equipment_style, constraints.equipment.packages
    )
    features = translate_feature_choices(preferences, constraints.feature_choices)

    spells = None
    if constraints.spellcasting is not None:
        spells = translate_spell_themes(
            preferences.cantrip_themes,
            preferences.spell_themes,
            constraints.spellcasting,
            level,
            abilities.scores,
        )

    stages = [abilities, skills, equipment, features]
    if spells is not None:
        stages.append(spells)

    issues: list[str] = []
    for stage in stages:
        issues.extend(stage.issues)

    return TranslationResult(
        success=all(stage.success for stage in stages),
        translations=StageTranslations(
            ability_scores=abilities,
            skills=skills,
            equipment=equipment,
            feature_choices=features,
            spells=spells,
        ),
        issues=issues,
    )
