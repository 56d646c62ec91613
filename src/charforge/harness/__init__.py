"""Evaluation harness: case generation, execution and reporting."""

from charforge.harness.aggregate import (
    aggregate_results,
    categorize_issue,
    identify_failure_patterns,
    percentile,
)
from charforge.harness.backend import BackendClient, BackendConnectionError, BackendError
from charforge.harness.cases import (
    CaseFilters,
    generate_filtered_matrix,
    generate_filtered_sample,
    generate_full_matrix,
    generate_pilot_test_cases,
    generate_representative_sample,
)
from charforge.harness.fixtures import get_mock_constraints, get_mock_response
from charforge.harness.pool import run_worker_pool
from charforge.harness.report import format_summary_report, format_test_cases
from charforge.harness.runner import RunOptions, run_batch, run_test_case
from charforge.harness.validation import validate_translation

__all__ = [
    "BackendClient",
    "BackendConnectionError",
    "BackendError",
    "CaseFilters",
    "RunOptions",
    "aggregate_results",
    "categorize_issue",
    "format_summary_report",
    "format_test_cases",
    "generate_filtered_matrix",
    "generate_filtered_sample",
    "generate_full_matrix",
    "generate_pilot_test_cases",
    "generate_representative_sample",
    "get_mock_constraints",
    "get_mock_response",
    "identify_failure_patterns",
    "percentile",
    "run_batch",
    "run_test_case",
    "run_worker_pool",
    "validate_translation",
]
