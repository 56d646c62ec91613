"""Tests for local translation validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from charforge.harness.validation import validate_translation
from charforge.models.generation import SpellOption
from charforge.models.translation import (
    AbilityTranslation,
    EquipmentTranslation,
    SkillTranslation,
    SpellTranslation,
    StageTranslations,
    TranslationResult,
)
from charforge.translation.orchestrator import translate_preferences

if TYPE_CHECKING:
    from charforge.models.generation import GenerationConstraints
    from charforge.models.preferences import AiPreferences


def _translation(
    *,
    points_spent: int = 27,
    skills: list[str] | None = None,
    package_id: str = "A",
    spells: SpellTranslation | None = None,
) -> TranslationResult:
    return TranslationResult(
        success=True,
        translations=StageTranslations(
            ability_scores=AbilityTranslation(success=True, points_spent=points_spent),
            skills=SkillTranslation(
                success=True, selected=skills or ["Athletics", "Intimidation", "Perception"]
            ),
            equipment=EquipmentTranslation(success=True, package_id=package_id),
            spells=spells,
        ),
    )


def test_translated_fighter_is_valid(
    fighter_preferences: AiPreferences, fighter_constraints: GenerationConstraints
) -> None:
    translation = translate_preferences(fighter_preferences, fighter_constraints, 1)

    report = validate_translation(translation, fighter_constraints)

    assert report.is_valid
    assert report.all_issues == []
    assert report.point_buy.points_spent == 27
    assert report.spells is None


def test_translated_wizard_spells_checked(
    wizard_preferences: AiPreferences, wizard_constraints: GenerationConstraints
) -> None:
    translation = translate_preferences(wizard_preferences, wizard_constraints, 1)

    report = validate_translation(translation, wizard_constraints)

    assert report.spells is not None
    assert report.spells.valid


def test_point_buy_overflow(fighter_constraints: GenerationConstraints) -> None:
    report = validate_translation(_translation(points_spent=30), fighter_constraints)

    assert not report.is_valid
    assert not report.point_buy.valid
    assert report.point_buy.issues == ["Spent 30/27 points"]
    assert report.all_issues == ["Point buy overflow: 30/27"]


def test_missing_stages_are_invalid(fighter_constraints: GenerationConstraints) -> None:
    report = validate_translation(TranslationResult(), fighter_constraints)

    assert not report.is_valid
    assert report.all_issues == ["Point buy invalid"]
    assert not report.skills.valid
    assert not report.equipment.valid


def test_invalid_skill_and_package(fighter_constraints: GenerationConstraints) -> None:
    translation = _translation(skills=["Athletics", "Stealth"], package_id="Z")

    report = validate_translation(translation, fighter_constraints)

    assert not report.is_valid
    assert report.skills.invalid_skills == ["Stealth"]
    assert report.equipment.issues == ["Invalid package: Z"]
    assert report.all_issues == ["Invalid skills: Stealth", "Invalid package: Z"]


def test_invalid_and_overlevel_spells(wizard_constraints: GenerationConstraints) -> None:
    assert wizard_constraints.spellcasting is not None
    fireball = SpellOption(id="fireball", name="Fireball", level=3, school="Evocation")
    spellcasting = wizard_constraints.spellcasting.model_copy(
        update={
            "available_spells": [*wizard_constraints.spellcasting.available_spells, fireball]
        }
    )
    constraints = wizard_constraints.model_copy(update={"spellcasting": spellcasting})
    spells = SpellTranslation(
        success=True, cantrips=["fire-bolt", "eldritch-blast"], spells=["shield", "fireball"]
    )

    report = validate_translation(
        _translation(skills=["Arcana", "History"], spells=spells), constraints
    )

    assert not report.is_valid
    assert report.spells is not None
    assert report.spells.invalid_spells == ["eldritch-blast"]
    assert report.spells.level_violations == ["fireball"]
    assert report.all_issues == [
        "Invalid spells: eldritch-blast",
        "Spells above max level: fireball",
    ]


def test_spells_ignored_for_non_casters(fighter_constraints: GenerationConstraints) -> None:
    spells = SpellTranslation(success=True, cantrips=["nope"])

    report = validate_translation(_translation(spells=spells), fighter_constraints)

    assert report.is_valid
    assert report.spells is None
