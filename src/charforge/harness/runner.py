"""End-to-end execution of evaluation cases.

For each case: get constraints, build the prompt, get an LLM response,
parse it, translate it, and validate the result. Offline runs use the mock
fixtures; live runs go through the backend and can also have the backend
validate and compute the translated character.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from structlog.contextvars import bound_contextvars

from charforge.harness.backend import BackendClient, BackendError
from charforge.harness.fixtures import get_mock_constraints, get_mock_response
from charforge.harness.pool import run_worker_pool
from charforge.harness.validation import validate_translation
from charforge.models.harness import BackendCompute, BackendValidation, EvalResult
from charforge.observability.logging import get_logger
from charforge.prompts.builder import build_preference_prompt
from charforge.prompts.parser import parse_ai_response, validate_preferences
from charforge.translation.orchestrator import translate_preferences

if TYPE_CHECKING:
    from collections.abc import Sequence

    from charforge.models.generation import GenerationConstraints
    from charforge.models.harness import EvalCase
    from charforge.models.preferences import AiPreferences

log = get_logger(__name__)

MOCK_COST_PER_1K_TOKENS = 0.01
LIVE_PROMPT_COST_PER_1M = 2.50
LIVE_COMPLETION_COST_PER_1M = 10.00


@dataclass
class RunOptions:
    """How to execute a batch.

    Attributes:
        live: Use the backend for constraints and generation.
        max_retries: Extra generation attempts after a failed one.
        backend_validate: Have the backend validate successful translations.
        backend_compute: Have the backend compute derived stats.
        concurrency: Worker pool size.
    """

    live: bool = False
    max_retries: int = 0
    backend_validate: bool = False
    backend_compute: bool = False
    concurrency: int = 3


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


async def _generate_live(
    case: EvalCase,
    client: BackendClient,
    max_retries: int,
    result: EvalResult,
) -> tuple[str, AiPreferences]:
    attempts = max(0, max_retries) + 1
    last_error = "API call failed (all retries exhausted)"
    for attempt in range(1, attempts + 1):
        log.info("ai_call_attempt", attempt=attempt, attempts=attempts)
        try:
            generated = await client.generate_preferences(case.input)
        except BackendError as e:
            last_error = e.message
            log.warning("ai_call_failed", attempt=attempt, error=last_error)
            continue

        metrics = result.metrics
        metrics.prompt_tokens += generated.prompt_tokens
        metrics.completion_tokens += generated.completion_tokens
        metrics.total_tokens += generated.total_tokens
        metrics.cost_usd += (
            generated.prompt_tokens / 1_000_000 * LIVE_PROMPT_COST_PER_1M
            + generated.completion_tokens / 1_000_000 * LIVE_COMPLETION_COST_PER_1M
        )
        log.info("ai_call_complete", tokens=generated.total_tokens)
        return generated.raw_response, generated.preferences

    raise BackendError("generate-preferences", last_error)


async def _run_backend_checks(
    case: EvalCase,
    constraints: GenerationConstraints,
    result: EvalResult,
    options: RunOptions,
    client: BackendClient,
) -> None:
    timings = result.metrics.stage_ms
    translation = result.translation

    if options.backend_validate:
        start = time.perf_counter()
        try:
            backend = await client.validate(case.input, constraints, translation)
        except BackendError as e:
            backend = BackendValidation(valid=False, issues=[str(e)])
        timings.backend_validate_ms = _elapsed_ms(start)
        result.validation.backend = backend
        log.info("backend_validation", valid=backend.valid, issues=backend.issues)

    if options.backend_compute:
        start = time.perf_counter()
        try:
            computed = await client.compute(case.input, constraints, translation)
        except BackendError as e:
            computed = BackendCompute(success=False, issues=[str(e)])
        timings.backend_compute_ms = _elapsed_ms(start)
        result.validation.backend_compute = computed
        log.info("backend_compute", success=computed.success, issues=computed.issues)


async def run_test_case(
    case: EvalCase,
    options: RunOptions | None = None,
    client: BackendClient | None = None,
) -> EvalResult:
    """Run one case through the full pipeline.

    Never raises for pipeline failures: any error is stored as the case's
    ``parse_error`` and the partial result is returned. Latency is always
    recorded. The case id is bound into the structlog context for every
    event logged while the case runs.

    Args:
        case: The case to run.
        options: Run options; defaults to an offline run.
        client: Backend client, required for live runs.

    Returns:
        The populated EvalResult.

    Raises:
        ValueError: If a live run is requested without a client.
    """
    options = options or RunOptions()
    if options.live and client is None:
        raise ValueError("A backend client is required for live runs")

    with bound_contextvars(case=case.id):
        started = time.perf_counter()
        result = EvalResult(test_case=case)
        timings = result.metrics.stage_ms
        log.info(
            "test_case_started",
            class_id=case.input.class_id,
            race=case.input.race_id,
            character_level=case.input.level,
        )

        try:
            start = time.perf_counter()
            if client is not None and options.live:
                constraints = await client.fetch_constraints(case.input)
            else:
                constraints = get_mock_constraints(case.input.class_id)
            timings.constraints_ms = _elapsed_ms(start)

            start = time.perf_counter()
            prompt = build_preference_prompt(case.input, constraints)
            timings.prompt_build_ms = _elapsed_ms(start)
            log.debug("prompt_built", chars=len(prompt))

            preferences: AiPreferences | None = None
            start = time.perf_counter()
            if client is not None and options.live:
                raw_response, preferences = await _generate_live(
                    case, client, options.max_retries, result
                )
            else:
                raw_response = get_mock_response(case.input.class_id)
                metrics = result.metrics
                metrics.prompt_tokens = len(prompt) // 4
                metrics.completion_tokens = len(raw_response) // 4
                metrics.total_tokens = metrics.prompt_tokens + metrics.completion_tokens
                metrics.cost_usd = metrics.total_tokens / 1000 * MOCK_COST_PER_1K_TOKENS
            timings.ai_call_ms = _elapsed_ms(start)
            result.ai_generation.raw_response = raw_response

            if preferences is None:
                start = time.perf_counter()
                preferences = parse_ai_response(raw_response)
                timings.parse_ms = _elapsed_ms(start)

            if preferences is None:
                result.ai_generation.parse_error = "Failed to parse JSON from response"
                log.warning("parse_failed")
            else:
                result.ai_generation.parse_success = True
                result.ai_generation.preferences = preferences

                preference_issues = validate_preferences(preferences)
                if preference_issues:
                    log.warning("preference_issues", issues=preference_issues)

                start = time.perf_counter()
                translation = translate_preferences(preferences, constraints, case.input.level)
                timings.translate_ms = _elapsed_ms(start)
                result.translation = translation
                log.info(
                    "translation_complete",
                    success=translation.success,
                    issues=translation.issues,
                )

                start = time.perf_counter()
                result.validation = validate_translation(translation, constraints)
                timings.validate_ms = _elapsed_ms(start)
                log.info(
                    "validation_complete",
                    valid=result.validation.is_valid,
                    issues=result.validation.all_issues,
                )

                if client is not None and options.live and translation.success:
                    await _run_backend_checks(case, constraints, result, options, client)

        except Exception as e:
            log.error("test_case_failed", error=str(e))
            result.ai_generation.parse_error = str(e)

        result.metrics.latency_ms = _elapsed_ms(started)
        return result


async def run_batch(
    cases: Sequence[EvalCase],
    options: RunOptions | None = None,
    client: BackendClient | None = None,
) -> list[EvalResult]:
    """Run cases through the worker pool, results in case order.

    Live runs without an explicit client open one for the batch.
    """
    options = options or RunOptions()

    if options.live and client is None:
        async with BackendClient() as owned:
            return await run_batch(cases, options, owned)

    async def _run(case: EvalCase) -> EvalResult:
        return await run_test_case(case, options, client)

    return await run_worker_pool(cases, _run, options.concurrency)
