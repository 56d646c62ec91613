"""Aggregation of evaluation results into summary statistics."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from charforge.harness.cases import TEST_CLASSES, TEST_LEVELS, TEST_RACES
from charforge.models.harness import (
    ClassBreakdown,
    EvalSummary,
    FailurePattern,
    GroupBreakdown,
    SuccessRates,
    SummaryMetrics,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from charforge.models.harness import EvalResult

MAX_PATTERN_EXAMPLES = 3

# Checked in order; the first category whose keywords all occur wins.
ISSUE_CATEGORIES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("point buy",), "Point Buy Issue"),
    (("points",), "Point Buy Issue"),
    (("skill", "match"), "Skill Theme Mismatch"),
    (("skill", "invalid"), "Invalid Skill Selection"),
    (("equipment",), "Equipment Selection Issue"),
    (("package",), "Equipment Selection Issue"),
    (("spell", "level"), "Spell Level Violation"),
    (("spell",), "Spell Selection Issue"),
    (("subclass",), "Feature Choice Issue"),
    (("fighting style",), "Feature Choice Issue"),
    (("auto-selected",), "Auto-Selection Fallback"),
)


def percentile(values: Sequence[float], p: float) -> float:
    """Nearest-rank percentile with rank ``floor(p/100 * (n-1))``.

    Returns 0 for an empty sequence.
    """
    if not values:
        return 0.0
    ordered = sorted(values)
    rank = min(len(ordered) - 1, max(0, math.floor(p / 100 * (len(ordered) - 1))))
    return ordered[rank]


def categorize_issue(issue: str) -> str:
    lowered = issue.lower()
    for keywords, category in ISSUE_CATEGORIES:
        if all(keyword in lowered for keyword in keywords):
            return category
    return "Other Issue"


def identify_failure_patterns(results: Sequence[EvalResult]) -> list[FailurePattern]:
    """Bucket parse failures and issue strings into named patterns.

    Returns:
        Patterns sorted by descending count; ties keep first-seen order.
        Percentages are relative to the number of results.
    """
    counts: dict[str, int] = {}
    examples: dict[str, list[str]] = {}

    def record(pattern: str, example: str) -> None:
        counts[pattern] = counts.get(pattern, 0) + 1
        bucket = examples.setdefault(pattern, [])
        if len(bucket) < MAX_PATTERN_EXAMPLES:
            bucket.append(example)

    for result in results:
        case_id = result.test_case.id
        if not result.ai_generation.parse_success:
            record("JSON Parse Failure", case_id)
        for issue in result.translation.issues:
            record(categorize_issue(issue), f"{case_id}: {issue}")
        for issue in result.validation.all_issues:
            record(categorize_issue(issue), f"{case_id}: {issue}")

    total = len(results)
    patterns = [
        FailurePattern(
            pattern=pattern,
            count=count,
            percentage=count / total * 100 if total else 0.0,
            examples=examples[pattern],
        )
        for pattern, count in counts.items()
    ]
    return sorted(patterns, key=lambda p: -p.count)


def _rate(count: float, total: int) -> float:
    return count / total if total else 0.0


def aggregate_results(results: Sequence[EvalResult]) -> EvalSummary:
    """Summarize a batch of results.

    Class, race and level breakdowns list every value of the test matrix,
    including ones with no results.
    """
    total = len(results)
    parse_ok = sum(1 for r in results if r.ai_generation.parse_success)
    translation_ok = sum(1 for r in results if r.translation.success)
    validation_ok = sum(1 for r in results if r.validation.is_valid)
    overall_ok = sum(1 for r in results if r.overall_success)

    by_class: dict[str, ClassBreakdown] = {}
    for class_id in TEST_CLASSES:
        subset = [r for r in results if r.test_case.input.class_id == class_id]
        by_class[class_id] = ClassBreakdown(
            total=len(subset),
            parse_success=sum(1 for r in subset if r.ai_generation.parse_success),
            translation_success=sum(1 for r in subset if r.translation.success),
            validation_success=sum(1 for r in subset if r.validation.is_valid),
        )

    by_race: dict[str, GroupBreakdown] = {}
    for race_id in TEST_RACES:
        subset = [r for r in results if r.test_case.input.race_id == race_id]
        by_race[race_id] = GroupBreakdown(
            total=len(subset),
            validation_success=sum(1 for r in subset if r.validation.is_valid),
        )

    by_level: dict[int, GroupBreakdown] = {}
    for level in TEST_LEVELS:
        subset = [r for r in results if r.test_case.input.level == level]
        by_level[level] = GroupBreakdown(
            total=len(subset),
            validation_success=sum(1 for r in subset if r.validation.is_valid),
        )

    total_cost = sum(r.metrics.cost_usd for r in results)
    latencies = [r.metrics.latency_ms for r in results if math.isfinite(r.metrics.latency_ms)]

    metrics = SummaryMetrics(
        avg_prompt_tokens=_rate(sum(r.metrics.prompt_tokens for r in results), total),
        avg_completion_tokens=_rate(sum(r.metrics.completion_tokens for r in results), total),
        avg_total_tokens=_rate(sum(r.metrics.total_tokens for r in results), total),
        avg_latency_ms=_rate(sum(r.metrics.latency_ms for r in results), total),
        p50_latency_ms=percentile(latencies, 50),
        p95_latency_ms=percentile(latencies, 95),
        total_cost_usd=total_cost,
        cost_per_success=total_cost / overall_ok if overall_ok else 0.0,
    )

    return EvalSummary(
        total_cases=total,
        success_rates=SuccessRates(
            parse_success=_rate(parse_ok, total),
            translation_success=_rate(translation_ok, total),
            validation_success=_rate(validation_ok, total),
            overall_success=_rate(overall_ok, total),
        ),
        by_class=by_class,
        by_race=by_race,
        by_level=by_level,
        failure_patterns=identify_failure_patterns(results),
        metrics=metrics,
    )
