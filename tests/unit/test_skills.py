"""Tests for skill theme translation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from charforge.models.generation import SkillConstraints
from charforge.translation.skills import translate_skill_themes

if TYPE_CHECKING:
    from charforge.models.generation import GenerationConstraints


def test_granted_matches_trigger_backfill(fighter_constraints: GenerationConstraints) -> None:
    result = translate_skill_themes(["physical prowess", "intimidation"], fighter_constraints.skills)

    assert result.success
    assert result.selected == ["Athletics", "Intimidation", "Acrobatics", "Animal Handling"]
    assert result.issues == [
        "Auto-selected Acrobatics to fill remaining slot",
        "Auto-selected Animal Handling to fill remaining slot",
    ]


def test_partial_theme_match_fills_slots(fighter_constraints: GenerationConstraints) -> None:
    result = translate_skill_themes(
        ["physical prowess", "intimidation", "battlefield awareness"],
        fighter_constraints.skills,
    )

    assert result.success
    assert result.selected == ["Athletics", "Intimidation", "Perception", "Insight"]
    assert result.issues == []
    assert result.unmatched_themes == []


def test_unmatched_theme_reported(wizard_constraints: GenerationConstraints) -> None:
    result = translate_skill_themes(
        ["arcane knowledge", "scholarly research", "keen observation"],
        wizard_constraints.skills,
    )

    assert result.success
    assert result.selected == ["Arcana", "History", "Religion", "Insight"]
    assert result.unmatched_themes == ["keen observation"]
    assert "Could not match themes: keen observation" in result.issues
    assert "Auto-selected Insight to fill remaining slot" in result.issues


def test_slot_count_invariant(fighter_constraints: GenerationConstraints) -> None:
    skills = fighter_constraints.skills
    for themes in ([], ["stealth"], ["social", "knowledge", "awareness"]):
        result = translate_skill_themes(themes, skills)
        assert len(result.selected) == len(skills.granted_by_background) + skills.choose_count
        assert len(set(result.selected)) == len(result.selected)


def test_pool_too_small_fails() -> None:
    constraints = SkillConstraints(
        granted_by_background=["Athletics"],
        class_options=["Athletics", "Survival"],
        choose_count=2,
    )
    result = translate_skill_themes(["survival"], constraints)

    assert not result.success
    assert result.selected == ["Athletics", "Survival"]
    assert "Only 1/2 class skill slots could be filled" in result.issues


def test_no_background_skills() -> None:
    constraints = SkillConstraints(class_options=["Stealth", "Perception", "Insight"], choose_count=1)
    result = translate_skill_themes(["vigilant"], constraints)

    assert result.success
    assert result.selected == ["Perception"]
