"""Pydantic models for character generation.

Generation input and constraints come from the user and the external rule
engine, preferences come from the LLM, and translation results are what
CharForge produces. Harness models describe evaluation runs.
"""

from charforge.models.generation import (
    ABILITY_NAMES,
    AbilityName,
    BackgroundInfo,
    ClassInfo,
    EquipmentConstraints,
    EquipmentPackage,
    FeatureChoice,
    FeatureOption,
    GenerationConstraints,
    GenerationInput,
    RaceInfo,
    SkillConstraints,
    SpellcastingConstraints,
    SpellOption,
    SubclassInfo,
    create_test_case_id,
)
from charforge.models.harness import (
    AiGeneration,
    EvalCase,
    EvalResult,
    EvalSummary,
    FailurePattern,
    RunMetrics,
    ValidationReport,
)
from charforge.models.preferences import (
    AiPreferences,
    CharacterFlavor,
    FeatureChoicePreference,
    OptionPreference,
    Personality,
)
from charforge.models.translation import (
    AbilityScores,
    AbilityTranslation,
    EquipmentTranslation,
    FeatureChoiceTranslation,
    SkillTranslation,
    SpellTranslation,
    StageTranslations,
    TranslationResult,
)

__all__ = [
    "ABILITY_NAMES",
    "AbilityName",
    "AbilityScores",
    "AbilityTranslation",
    "AiGeneration",
    "AiPreferences",
    "BackgroundInfo",
    "CharacterFlavor",
    "ClassInfo",
    "EquipmentConstraints",
    "EquipmentPackage",
    "EquipmentTranslation",
    "EvalCase",
    "EvalResult",
    "EvalSummary",
    "FailurePattern",
    "FeatureChoice",
    "FeatureChoicePreference",
    "FeatureChoiceTranslation",
    "FeatureOption",
    "GenerationConstraints",
    "GenerationInput",
    "OptionPreference",
    "Personality",
    "RaceInfo",
    "RunMetrics",
    "SkillConstraints",
    "SkillTranslation",
    "SpellOption",
    "SpellTranslation",
    "SpellcastingConstraints",
    "StageTranslations",
    "SubclassInfo",
    "TranslationResult",
    "ValidationReport",
    "create_test_case_id",
]
