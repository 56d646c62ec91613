"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from charforge.harness.fixtures import (
    create_mock_fighter_constraints,
    create_mock_wizard_constraints,
    get_mock_response,
)
from charforge.models.generation import GenerationConstraints, GenerationInput
from charforge.models.harness import EvalCase
from charforge.models.preferences import AiPreferences
from charforge.prompts.parser import parse_ai_response


@pytest.fixture
def fighter_constraints() -> GenerationConstraints:
    """Level-1 human soldier fighter constraints."""
    return create_mock_fighter_constraints()


@pytest.fixture
def wizard_constraints() -> GenerationConstraints:
    """Level-1 human sage wizard constraints."""
    return create_mock_wizard_constraints()


@pytest.fixture
def fighter_preferences() -> AiPreferences:
    preferences = parse_ai_response(get_mock_response("fighter"))
    assert preferences is not None
    return preferences


@pytest.fixture
def wizard_preferences() -> AiPreferences:
    preferences = parse_ai_response(get_mock_response("wizard"))
    assert preferences is not None
    return preferences


@pytest.fixture
def fighter_case() -> EvalCase:
    generation_input = GenerationInput(
        class_id="fighter",
        race_id="human",
        level=1,
        background_id="soldier",
        concept="A battle-hardened veteran seeking redemption after a war gone wrong",
    )
    return EvalCase(id="fighter-human-L1-soldier", input=generation_input)
