"""Pydantic models for the preferences an LLM expresses about a character.

The LLM expresses intent, not mechanics: an ordered list of ability
priorities instead of scores, descriptive skill themes instead of skill
names, an equipment style instead of item ids. The translator turns these
into valid choices.
"""

from __future__ import annotations

from pydantic import Field

from charforge.models.generation import AbilityName, WireModel


class Personality(WireModel):
    """Personality block following the 5e character sheet structure."""

    traits: list[str] = Field(default_factory=list)
    ideals: list[str] = Field(default_factory=list)
    bonds: list[str] = Field(default_factory=list)
    flaws: list[str] = Field(default_factory=list)


class CharacterFlavor(WireModel):
    """Narrative details generated alongside the mechanical preferences."""

    name: str = Field(min_length=1)
    personality: Personality = Field(default_factory=Personality)
    backstory: str = ""
    appearance: str | None = None
    age: int | None = Field(default=None, ge=0)


class OptionPreference(WireModel):
    """A preferred option id (subclass, fighting style) with reasoning."""

    id: str
    reasoning: str = ""


class FeatureChoicePreference(WireModel):
    option_id: str
    reasoning: str = ""


class AiPreferences(WireModel):
    """LLM-generated preferences for a character build.

    Attributes:
        ability_priorities: Abilities ordered highest priority first.
        ability_reasoning: Why the priorities fit the concept.
        combat_approach: How the character fights.
        skill_themes: Descriptive themes mapped to skills by the translator.
        equipment_style: Free-text equipment preference.
        subclass_preference: Preferred subclass, when the level allows one.
        fighting_style_preference: Preferred fighting style option.
        feature_choice_preferences: Preferred option per feature id.
        cantrip_themes: Themes for cantrip selection (casters only).
        spell_themes: Themes for spell selection (casters only).
        character: Name, personality and backstory.
    """

    ability_priorities: list[AbilityName]
    ability_reasoning: str = ""
    combat_approach: str = ""
    skill_themes: list[str] = Field(default_factory=list)
    equipment_style: str = ""
    subclass_preference: OptionPreference | None = None
    fighting_style_preference: OptionPreference | None = None
    feature_choice_preferences: dict[str, FeatureChoicePreference] = Field(default_factory=dict)
    cantrip_themes: list[str] = Field(default_factory=list)
    spell_themes: list[str] = Field(default_factory=list)
    character: CharacterFlavor
