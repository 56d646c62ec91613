"""Prompt building and response parsing for preference generation."""

from charforge.prompts.builder import (
    SYSTEM_PROMPT,
    build_preference_prompt,
    format_equipment_options,
    format_feature_choices,
    format_skill_options,
    format_spell_list,
)
from charforge.prompts.parser import extract_json_text, parse_ai_response, validate_preferences

__all__ = [
    "SYSTEM_PROMPT",
    "build_preference_prompt",
    "extract_json_text",
    "format_equipment_options",
    "format_feature_choices",
    "format_skill_options",
    "format_spell_list",
    "parse_ai_response",
    "validate_preferences",
]
