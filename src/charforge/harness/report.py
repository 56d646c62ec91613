"""Plain-text reports for evaluation runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from charforge.models.harness import EvalCase, EvalSummary

RULE_HEAVY = "═" * 70
RULE_LIGHT = "─" * 70
TOP_PATTERNS = 5
EXAMPLES_PER_PATTERN = 2


def _pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def format_summary_report(summary: EvalSummary) -> str:
    """Render a summary as the fixed-width experiment report.

    Groups with no cases are omitted from the class and level sections, and
    the failure pattern section only appears when there are patterns.
    """
    rates = summary.success_rates
    lines = [
        RULE_HEAVY,
        " AI GENERATION EXPERIMENT RESULTS",
        f" Generated: {summary.generated_at}",
        f" Test Cases: {summary.total_cases}",
        RULE_HEAVY,
        "",
        "OVERALL SUCCESS RATES",
        RULE_LIGHT,
        f" Parse Success:       {_pct(rates.parse_success)}",
        f" Translation Success: {_pct(rates.translation_success)}",
        f" Validation Success:  {_pct(rates.validation_success)}",
        f" Overall Success:     {_pct(rates.overall_success)}",
        "",
        "BY CLASS",
        RULE_LIGHT,
    ]
    for class_id, stats in summary.by_class.items():
        if stats.total > 0:
            rate = _pct(stats.validation_success / stats.total)
            lines.append(f" {class_id.ljust(12)} {rate} ({stats.validation_success}/{stats.total})")
    lines.append("")

    lines.append("BY LEVEL")
    lines.append(RULE_LIGHT)
    for level, stats in summary.by_level.items():
        if stats.total > 0:
            rate = _pct(stats.validation_success / stats.total)
            lines.append(f" Level {level}:  {rate} ({stats.validation_success}/{stats.total})")
    lines.append("")

    if summary.failure_patterns:
        lines.append("FAILURE PATTERNS")
        lines.append(RULE_LIGHT)
        for pattern in summary.failure_patterns[:TOP_PATTERNS]:
            lines.append(f" {pattern.pattern}: {pattern.count} ({pattern.percentage:.1f}%)")
            lines.extend(f"   → {example}" for example in pattern.examples[:EXAMPLES_PER_PATTERN])
        lines.append("")

    metrics = summary.metrics
    lines.extend(
        [
            "COST ANALYSIS",
            RULE_LIGHT,
            f" Avg Tokens/Request: {metrics.avg_total_tokens:.0f}",
            f" Avg Latency:        {metrics.avg_latency_ms:.0f}ms",
            f" p50 Latency:        {metrics.p50_latency_ms:.0f}ms",
            f" p95 Latency:        {metrics.p95_latency_ms:.0f}ms",
            f" Total Cost:         ${metrics.total_cost_usd:.4f}",
            f" Cost per Success:   ${metrics.cost_per_success:.4f}",
            "",
            RULE_HEAVY,
        ]
    )
    return "\n".join(lines)


def format_test_cases(cases: Sequence[EvalCase]) -> str:
    """List cases with their inputs and a truncated concept."""
    lines = [RULE_HEAVY, " TEST CASES", RULE_HEAVY]
    for case in cases:
        data = case.input
        lines.extend(
            [
                "",
                case.id,
                f"  Class: {data.class_id}",
                f"  Race: {data.race_id}",
                f"  Level: {data.level}",
                f"  Background: {data.background_id}",
                f'  Concept: "{data.concept[:50]}..."',
            ]
        )
    lines.append("")
    lines.append(RULE_HEAVY)
    lines.append(f" Total: {len(cases)} test cases")
    return "\n".join(lines)
