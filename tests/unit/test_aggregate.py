"""Tests for result aggregation."""

from __future__ import annotations

import pytest

from charforge.harness.aggregate import (
    aggregate_results,
    categorize_issue,
    identify_failure_patterns,
    percentile,
)
from charforge.harness.cases import generate_test_case
from charforge.models.harness import (
    AiGeneration,
    EvalResult,
    RunMetrics,
    ValidationReport,
)
from charforge.models.translation import TranslationResult


def make_result(
    class_id: str = "fighter",
    race_id: str = "human",
    level: int = 1,
    *,
    parsed: bool = True,
    translated: bool = True,
    valid: bool = True,
    issues: list[str] | None = None,
    validation_issues: list[str] | None = None,
    latency_ms: float = 100.0,
    cost_usd: float = 0.01,
    total_tokens: int = 1000,
) -> EvalResult:
    case = generate_test_case(class_id, race_id, level, "soldier", "A concept")
    return EvalResult(
        test_case=case,
        ai_generation=AiGeneration(parse_success=parsed),
        translation=TranslationResult(success=translated, issues=issues or []),
        validation=ValidationReport(is_valid=valid, all_issues=validation_issues or []),
        metrics=RunMetrics(
            total_tokens=total_tokens, latency_ms=latency_ms, cost_usd=cost_usd
        ),
    )


def test_percentile() -> None:
    values = [40.0, 10.0, 30.0, 20.0]
    assert percentile(values, 50) == 20.0
    assert percentile(values, 95) == 30.0
    assert percentile(values, 100) == 40.0
    assert percentile([], 50) == 0.0


@pytest.mark.parametrize(
    ("issue", "category"),
    [
        ("Point buy invalid", "Point Buy Issue"),
        ("Spent 30/27 points", "Point Buy Issue"),
        ("Invalid skills: Stealth", "Invalid Skill Selection"),
        ("Could not match skill themes", "Skill Theme Mismatch"),
        ("Invalid package: Z", "Equipment Selection Issue"),
        ("Spells above max level: fireball", "Spell Level Violation"),
        ("Only matched 2/3 cantrips", "Other Issue"),
        ("Invalid spells: fireball", "Spell Selection Issue"),
        ("Auto-selected Insight to fill remaining slot", "Auto-Selection Fallback"),
        ("something odd", "Other Issue"),
    ],
)
def test_categorize_issue(issue: str, category: str) -> None:
    assert categorize_issue(issue) == category


def test_failure_patterns_sorted_by_count() -> None:
    results = [
        make_result(parsed=False),
        make_result(
            "wizard",
            issues=["Auto-selected Insight to fill remaining slot"],
            validation_issues=["Point buy invalid"],
        ),
        make_result("rogue", validation_issues=["Point buy invalid"]),
    ]

    patterns = identify_failure_patterns(results)

    assert [p.pattern for p in patterns] == [
        "Point Buy Issue",
        "JSON Parse Failure",
        "Auto-Selection Fallback",
    ]
    assert patterns[0].count == 2
    assert patterns[0].percentage == pytest.approx(200 / 3)
    assert patterns[0].examples == [
        "wizard-human-L1-soldier: Point buy invalid",
        "rogue-human-L1-soldier: Point buy invalid",
    ]
    assert patterns[1].examples == ["fighter-human-L1-soldier"]


def test_pattern_examples_are_capped() -> None:
    results = [make_result(parsed=False) for _ in range(5)]

    (pattern,) = identify_failure_patterns(results)
    assert pattern.count == 5
    assert len(pattern.examples) == 3


def test_aggregate_results() -> None:
    results = [
        make_result("fighter", latency_ms=100.0),
        make_result("fighter", "dwarf", 2, valid=False, latency_ms=300.0),
        make_result("wizard", "elf", 3, parsed=False, translated=False, valid=False,
                    latency_ms=200.0),
        make_result("bard", latency_ms=400.0, cost_usd=0.03),
    ]  # fmt: skip

    summary = aggregate_results(results)

    assert summary.total_cases == 4
    assert summary.success_rates.parse_success == 0.75
    assert summary.success_rates.translation_success == 0.75
    assert summary.success_rates.validation_success == 0.5
    assert summary.success_rates.overall_success == 0.5

    assert list(summary.by_class) == ["fighter", "wizard", "rogue", "cleric", "bard"]
    assert summary.by_class["fighter"].total == 2
    assert summary.by_class["fighter"].validation_success == 1
    assert summary.by_class["rogue"].total == 0
    assert summary.by_race["human"].total == 2
    assert summary.by_race["half-orc"].total == 0
    assert summary.by_level[3].total == 1
    assert summary.by_level[3].validation_success == 0

    assert summary.metrics.avg_latency_ms == 250.0
    assert summary.metrics.p50_latency_ms == 200.0
    assert summary.metrics.p95_latency_ms == 300.0
    assert summary.metrics.avg_total_tokens == 1000.0
    assert summary.metrics.total_cost_usd == pytest.approx(0.06)
    assert summary.metrics.cost_per_success == pytest.approx(0.03)


def test_aggregate_empty() -> None:
    summary = aggregate_results([])

    assert summary.total_cases == 0
    assert summary.success_rates.overall_success == 0.0
    assert summary.metrics.cost_per_success == 0.0
    assert summary.failure_patterns == []
