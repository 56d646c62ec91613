"""Parsing and checking of LLM preference responses."""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError

from charforge.models.generation import ABILITY_NAMES
from charforge.models.preferences import AiPreferences
from charforge.observability.logging import get_logger

log = get_logger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def extract_json_text(response: str) -> str:
    """Return the body of the first fenced code block, or the whole response."""
    match = _FENCED_JSON.search(response)
    if match:
        return match.group(1).strip()
    return response.strip()


def _normalize_priorities(raw: list[Any]) -> list[str]:
    # Duplicates are kept for validate_preferences to report
    kept = [name for name in (str(item).lower() for item in raw) if name in ABILITY_NAMES]
    missing = [ability for ability in ABILITY_NAMES if ability not in kept]
    return [*kept, *missing]


def parse_ai_response(response: str) -> AiPreferences | None:
    """Parse an LLM response into preferences.

    Accepts bare JSON or JSON inside a markdown code fence. Ability names
    are lowercased, unknown names are dropped, and missing abilities are
    appended in canonical order. Duplicates
    survive parsing; ``validate_preferences`` reports them.

    Args:
        response: Raw text returned by the LLM.

    Returns:
        Parsed preferences, or None if the response is not usable.
    """
    try:
        parsed = json.loads(extract_json_text(response))
    except json.JSONDecodeError as e:
        log.warning("ai_response_parse_failed", error=str(e), raw=response[:500])
        return None

    if not isinstance(parsed, dict):
        log.warning("ai_response_not_object", raw=response[:500])
        return None

    priorities = parsed.get("abilityPriorities")
    if not isinstance(priorities, list):
        log.warning("ai_response_missing_field", field="abilityPriorities")
        return None

    character = parsed.get("character")
    if not isinstance(character, dict) or not character.get("name"):
        log.warning("ai_response_missing_field", field="character.name")
        return None

    parsed["abilityPriorities"] = _normalize_priorities(priorities)
    if not character.get("personality"):
        character["personality"] = {}

    try:
        return AiPreferences.model_validate(parsed)
    except ValidationError as e:
        log.warning("ai_response_invalid", error=str(e), raw=response[:500])
        return None


def validate_preferences(preferences: AiPreferences) -> list[str]:
    """Check parsed preferences for gaps the translator would paper over.

    Returns:
        Issue strings; empty when the preferences are complete.
    """
    issues: list[str] = []
    priorities = preferences.ability_priorities

    if len(priorities) != len(ABILITY_NAMES):
        issues.append(f"Expected 6 ability priorities, got {len(priorities)}")
    if len(set(priorities)) != len(priorities):
        issues.append("Duplicate abilities in priority list")
    if not preferences.skill_themes:
        issues.append("No skill themes provided")
    if not preferences.equipment_style:
        issues.append("No equipment style provided")
    if not preferences.character.name:
        issues.append("No character name provided")
    if not preferences.character.backstory:
        issues.append("No backstory provided")

    return issues
