"""Pydantic models for translation results.

Every stage reports its own ``success`` flag next to a best-effort payload:
a stage may fail and still hand back a fallback selection, so callers can
recover from partial failure.
"""

from __future__ import annotations

from pydantic import Field

from charforge.models.generation import ABILITY_NAMES, AbilityName, WireModel


class AbilityScores(WireModel):
    """The six ability scores of a character."""

    strength: int
    dexterity: int
    constitution: int
    intelligence: int
    wisdom: int
    charisma: int

    def get(self, ability: AbilityName) -> int:
        return int(getattr(self, ability))

    def as_dict(self) -> dict[AbilityName, int]:
        return {ability: self.get(ability) for ability in ABILITY_NAMES}


class AbilityTranslation(WireModel):
    success: bool
    scores: AbilityScores | None = None
    points_spent: int | None = None
    issues: list[str] = Field(default_factory=list)


class SkillTranslation(WireModel):
    success: bool
    selected: list[str] = Field(default_factory=list)
    unmatched_themes: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)


class EquipmentTranslation(WireModel):
    success: bool
    package_id: str | None = None
    issues: list[str] = Field(default_factory=list)


class FeatureChoiceTranslation(WireModel):
    success: bool
    choices: dict[str, str] = Field(default_factory=dict)  # feature_id -> option_id
    issues: list[str] = Field(default_factory=list)


class SpellTranslation(WireModel):
    success: bool
    cantrips: list[str] = Field(default_factory=list)
    spells: list[str] = Field(default_factory=list)
    unmatched_themes: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)


class StageTranslations(WireModel):
    ability_scores: AbilityTranslation | None = None
    skills: SkillTranslation | None = None
    equipment: EquipmentTranslation | None = None
    feature_choices: FeatureChoiceTranslation | None = None
    spells: SpellTranslation | None = None


class TranslationResult(WireModel):
    """Aggregated result of translating preferences into mechanics.

    Attributes:
        success: True when every applicable stage succeeded.
        translations: Per-stage results.
        issues: All stage issues, in stage order.
    """

    success: bool = False
    translations: StageTranslations = Field(default_factory=StageTranslations)
    issues: list[str] = Field(default_factory=list)
