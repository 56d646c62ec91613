"""Pydantic models for generation input and rule-engine constraints.

The constraints are computed by an external rule engine for a given
class/race/level/background combination. They list every valid option the
translator may choose from and are never modified during translation.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AbilityName = Literal[
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
]

# Canonical order, used for iteration and for filling incomplete priority lists
ABILITY_NAMES: tuple[AbilityName, ...] = (
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
)


class WireModel(BaseModel):
    """Base model accepting both snake_case names and camelCase wire keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerationInput(WireModel):
    """User-provided identity choices for a character.

    Attributes:
        class_id: Selected class (e.g., "fighter").
        subclass_id: Selected subclass, if the level allows one.
        race_id: Selected race (e.g., "dwarf").
        subrace_id: Selected subrace, if any.
        level: Character level, 1 to 3.
        background_id: Selected background (e.g., "soldier").
        concept: Free-text concept for the LLM to interpret.
    """

    model_config = ConfigDict(frozen=True)

    class_id: str = Field(min_length=1)
    subclass_id: str | None = None
    race_id: str = Field(min_length=1)
    subrace_id: str | None = None
    level: Literal[1, 2, 3]
    background_id: str = Field(min_length=1)
    concept: str = ""


def create_test_case_id(generation_input: GenerationInput) -> str:
    """Build the identity of a test case.

    Concept, subclass and subrace are not part of the identity.
    """
    return (
        f"{generation_input.class_id}-{generation_input.race_id}"
        f"-L{generation_input.level}-{generation_input.background_id}"
    )


class ClassInfo(WireModel):
    id: str
    name: str
    hit_die: int = Field(ge=1)
    primary_abilities: list[AbilityName] = Field(default_factory=list)


class SubclassInfo(WireModel):
    id: str
    name: str


class RaceInfo(WireModel):
    id: str
    name: str
    ability_bonuses: dict[AbilityName, int] = Field(default_factory=dict)
    traits: list[str] = Field(default_factory=list)


class BackgroundInfo(WireModel):
    id: str
    name: str
    granted_skills: list[str] = Field(default_factory=list)


class SkillConstraints(WireModel):
    """Skill selection constraints.

    Attributes:
        granted_by_background: Skills the background always grants.
        class_options: Skills the class may choose from.
        choose_count: Number of class picks.
        overlap_handling: What the rule engine does when the background
            grants a class skill.
    """

    granted_by_background: list[str] = Field(default_factory=list)
    class_options: list[str] = Field(default_factory=list)
    choose_count: int = Field(default=0, ge=0)
    overlap_handling: Literal["replace", "free-choice"] = "free-choice"


class EquipmentPackage(WireModel):
    id: str
    description: str
    items: list[str] = Field(default_factory=list)


class EquipmentConstraints(WireModel):
    packages: list[EquipmentPackage] = Field(default_factory=list)


class FeatureOption(WireModel):
    id: str
    name: str
    description: str = ""


class FeatureChoice(WireModel):
    """A class feature that requires picking exactly one option."""

    feature_id: str
    feature_name: str
    description: str = ""
    options: list[FeatureOption] = Field(min_length=1)


class SpellOption(WireModel):
    id: str
    name: str
    level: int = Field(ge=0)
    school: str
    description: str = ""


class SpellcastingConstraints(WireModel):
    """Spellcasting constraints for caster classes.

    Known casters (bard, sorcerer) carry ``spells_known``; prepared casters
    (cleric, druid) carry ``spells_prepared`` or a ``prepared_formula`` that
    derives the count from the casting ability modifier and level.
    """

    ability: AbilityName
    caster_type: Literal["known", "prepared"] | None = None
    prepared_formula: Literal["abilityModPlusLevel", "abilityModPlusHalfLevel"] | None = None
    cantrips_known: int = Field(default=0, ge=0)
    spells_known: int | None = Field(default=None, ge=0)
    spells_prepared: int | None = Field(default=None, ge=0)
    max_spell_level: int = Field(default=1, ge=0)
    available_cantrips: list[SpellOption] = Field(default_factory=list)
    available_spells: list[SpellOption] = Field(default_factory=list)


class GenerationConstraints(WireModel):
    """Every valid choice for one class/race/level/background combination."""

    class_: ClassInfo = Field(alias="class")
    subclass: SubclassInfo | None = None
    race: RaceInfo
    background: BackgroundInfo
    skills: SkillConstraints
    equipment: EquipmentConstraints = Field(default_factory=EquipmentConstraints)
    feature_choices: list[FeatureChoice] = Field(default_factory=list)
    spellcasting: SpellcastingConstraints | None = None
