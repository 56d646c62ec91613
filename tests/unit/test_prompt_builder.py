"""Tests for prompt construction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from charforge.models.generation import EquipmentPackage, SpellOption
from charforge.prompts.builder import (
    SYSTEM_PROMPT,
    build_preference_prompt,
    format_equipment_options,
    format_feature_choices,
    format_skill_options,
    format_spell_list,
)

if TYPE_CHECKING:
    from charforge.models.generation import GenerationConstraints
    from charforge.models.harness import EvalCase


def _spells(count: int, level: int = 1) -> list[SpellOption]:
    return [
        SpellOption(id=f"s{i}", name=f"Spell {i}", level=level, school="Evocation", description="Boom")
        for i in range(count)
    ]


def test_system_prompt_rules() -> None:
    assert "D&D 5e character creation assistant" in SYSTEM_PROMPT
    assert "All abilities must be ranked in priority order (all 6, highest first)" in SYSTEM_PROMPT


def test_prompt_has_four_sections_in_order(
    fighter_case: EvalCase, fighter_constraints: GenerationConstraints
) -> None:
    prompt = build_preference_prompt(fighter_case.input, fighter_constraints)

    headers = [
        "## CHARACTER FOUNDATION (Fixed by Player)",
        "## AVAILABLE OPTIONS",
        "## OUTPUT FORMAT",
        "## CHARACTER CONCEPT",
    ]
    positions = [prompt.index(header) for header in headers]
    assert positions == sorted(positions)
    assert f'"{fighter_case.input.concept}"' in prompt


def test_foundation_section(
    fighter_case: EvalCase, fighter_constraints: GenerationConstraints
) -> None:
    prompt = build_preference_prompt(fighter_case.input, fighter_constraints)

    assert "**Class:** Fighter" in prompt
    assert "**Hit Die:** d10" in prompt
    assert "**Primary Abilities:** strength, constitution" in prompt
    assert "**Racial Bonuses:** strength +1, dexterity +1" in prompt
    assert "**Subclass:**" not in prompt


def test_racial_bonuses_omitted_when_none(
    fighter_case: EvalCase, fighter_constraints: GenerationConstraints
) -> None:
    race = fighter_constraints.race.model_copy(update={"ability_bonuses": {"strength": 0}})
    constraints = fighter_constraints.model_copy(update={"race": race})
    prompt = build_preference_prompt(fighter_case.input, constraints)
    assert "Racial Bonuses" not in prompt


def test_fighter_options_and_schema(
    fighter_case: EvalCase, fighter_constraints: GenerationConstraints
) -> None:
    prompt = build_preference_prompt(fighter_case.input, fighter_constraints)

    assert "Background grants: Athletics, Intimidation" in prompt
    assert "Choose 2 from: Acrobatics, Animal Handling" in prompt
    assert "- **A:** Chain mail, martial weapon and shield" in prompt
    assert "**Fighting Style:** Choose one:" in prompt
    assert "  - Defense: +1 bonus to AC when wearing armor" in prompt
    assert '"fightingStylePreference"' in prompt
    assert '"featureChoicePreferences"' in prompt
    assert '"cantripThemes"' not in prompt
    assert "### Spellcasting" not in prompt


def test_wizard_schema_has_spell_themes(
    fighter_case: EvalCase, wizard_constraints: GenerationConstraints
) -> None:
    prompt = build_preference_prompt(fighter_case.input, wizard_constraints)

    assert '"cantripThemes"' in prompt
    assert '"spellThemes"' in prompt
    assert '"fightingStylePreference"' not in prompt
    assert "Spells Known: 6" in prompt
    assert "- Fire Bolt (Evocation): Hurl a mote of fire at a creature" in prompt
    assert "- Shield (Level 1, Abjuration): +5 AC as a reaction" in prompt


def test_long_spell_lists_are_truncated(
    fighter_case: EvalCase, wizard_constraints: GenerationConstraints
) -> None:
    assert wizard_constraints.spellcasting is not None
    spellcasting = wizard_constraints.spellcasting.model_copy(
        update={"available_cantrips": _spells(18, level=0), "available_spells": _spells(25)}
    )
    constraints = wizard_constraints.model_copy(update={"spellcasting": spellcasting})
    prompt = build_preference_prompt(fighter_case.input, constraints)

    assert "... and 3 more" in prompt
    assert "... and 5 more" in prompt
    assert "Spell 19 (Level 1" in prompt
    assert "Spell 20 (Level 1" not in prompt


def test_format_skill_options() -> None:
    text = format_skill_options(["Stealth", "Perception"], ["Deception"], 1)
    assert text == "Background grants: Deception\nChoose 1 from class options: Stealth, Perception"


def test_format_equipment_options() -> None:
    packages = [
        EquipmentPackage(id="A", description="Rapier"),
        EquipmentPackage(id="B", description="Shortbow"),
    ]
    assert format_equipment_options(packages) == "- A: Rapier\n- B: Shortbow"


def test_format_feature_choices(fighter_constraints: GenerationConstraints) -> None:
    text = format_feature_choices(fighter_constraints.feature_choices)
    assert text.startswith("**Fighting Style:** Choose one:")
    assert "  - great-weapon (Great Weapon Fighting): Reroll 1s and 2s" in text
    assert format_feature_choices([]) == ""


def test_format_spell_list() -> None:
    text = format_spell_list(_spells(3), max_display=2)
    assert text.splitlines() == [
        "- Spell 0 (L1, Evocation): Boom",
        "- Spell 1 (L1, Evocation): Boom",
        "... and 1 more options",
    ]
