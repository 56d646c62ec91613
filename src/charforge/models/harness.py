"""Pydantic models for the evaluation harness.

An ``EvalCase`` identifies one generation input; an ``EvalResult`` records
what happened to it at each pipeline stage (AI generation, translation,
validation) together with token/latency metrics; an ``EvalSummary``
aggregates many results.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import Field

from charforge.models.generation import GenerationInput, WireModel
from charforge.models.preferences import AiPreferences  # noqa: TC001 - pydantic field
from charforge.models.translation import TranslationResult


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


class EvalCase(WireModel):
    id: str
    input: GenerationInput
    created_at: str = Field(default_factory=utc_now_iso)


class AiGeneration(WireModel):
    parse_success: bool = False
    preferences: AiPreferences | None = None
    parse_error: str | None = None
    raw_response: str = ""


class PointBuyCheck(WireModel):
    valid: bool = False
    points_spent: int = 0
    issues: list[str] = Field(default_factory=list)


class SkillsCheck(WireModel):
    valid: bool = False
    invalid_skills: list[str] = Field(default_factory=list)


class EquipmentCheck(WireModel):
    valid: bool = False
    issues: list[str] = Field(default_factory=list)


class SpellsCheck(WireModel):
    valid: bool = False
    invalid_spells: list[str] = Field(default_factory=list)
    level_violations: list[str] = Field(default_factory=list)


class BackendValidation(WireModel):
    valid: bool
    issues: list[str] = Field(default_factory=list)
    sections: dict[str, Any] | None = None


class BackendCompute(WireModel):
    success: bool
    issues: list[str] = Field(default_factory=list)
    derived_stats: dict[str, Any] | None = None
    sections: dict[str, Any] | None = None


class ValidationReport(WireModel):
    is_valid: bool = False
    point_buy: PointBuyCheck = Field(default_factory=PointBuyCheck)
    skills: SkillsCheck = Field(default_factory=SkillsCheck)
    equipment: EquipmentCheck = Field(default_factory=EquipmentCheck)
    spells: SpellsCheck | None = None
    all_issues: list[str] = Field(default_factory=list)
    backend: BackendValidation | None = None
    backend_compute: BackendCompute | None = None


class StageTimings(WireModel):
    """Per-stage wall time in milliseconds."""

    constraints_ms: float | None = None
    prompt_build_ms: float | None = None
    ai_call_ms: float | None = None
    parse_ms: float | None = None
    translate_ms: float | None = None
    validate_ms: float | None = None
    backend_validate_ms: float | None = None
    backend_compute_ms: float | None = None


class RunMetrics(WireModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    latency_ms: float = 0.0
    cost_usd: float = 0.0
    stage_ms: StageTimings = Field(default_factory=StageTimings)


class EvalResult(WireModel):
    test_case: EvalCase
    executed_at: str = Field(default_factory=utc_now_iso)
    ai_generation: AiGeneration = Field(default_factory=AiGeneration)
    translation: TranslationResult = Field(default_factory=TranslationResult)
    validation: ValidationReport = Field(default_factory=ValidationReport)
    metrics: RunMetrics = Field(default_factory=RunMetrics)

    @property
    def overall_success(self) -> bool:
        return (
            self.ai_generation.parse_success
            and self.translation.success
            and self.validation.is_valid
        )


class SuccessRates(WireModel):
    parse_success: float = 0.0
    translation_success: float = 0.0
    validation_success: float = 0.0
    overall_success: float = 0.0


class ClassBreakdown(WireModel):
    total: int = 0
    parse_success: int = 0
    translation_success: int = 0
    validation_success: int = 0


class GroupBreakdown(WireModel):
    total: int = 0
    validation_success: int = 0


class FailurePattern(WireModel):
    pattern: str
    count: int
    percentage: float
    examples: list[str] = Field(default_factory=list)


class SummaryMetrics(WireModel):
    avg_prompt_tokens: float = 0.0
    avg_completion_tokens: float = 0.0
    avg_total_tokens: float = 0.0
    avg_latency_ms: float = 0.0
    p50_latency_ms: float = 0.0
    p95_latency_ms: float = 0.0
    total_cost_usd: float = 0.0
    cost_per_success: float = 0.0


class EvalSummary(WireModel):
    total_cases: int
    generated_at: str = Field(default_factory=utc_now_iso)
    success_rates: SuccessRates = Field(default_factory=SuccessRates)
    by_class: dict[str, ClassBreakdown] = Field(default_factory=dict)
    by_race: dict[str, GroupBreakdown] = Field(default_factory=dict)
    by_level: dict[int, GroupBreakdown] = Field(default_factory=dict)
    failure_patterns: list[FailurePattern] = Field(default_factory=list)
    metrics: SummaryMetrics = Field(default_factory=SummaryMetrics)
