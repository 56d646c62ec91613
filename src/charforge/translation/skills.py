"""Skill theme translation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from charforge.models.translation import SkillTranslation
from charforge.translation.themes import SKILL_THEMES

if TYPE_CHECKING:
    from collections.abc import Sequence

    from charforge.models.generation import SkillConstraints


def translate_skill_themes(
    themes: Sequence[str],
    constraints: SkillConstraints,
) -> SkillTranslation:
    """Select class skills matching descriptive themes.

    Background-granted skills are always part of the result and are removed
    from the class pool, since a skill already held cannot be picked again.
    Matched candidates fill the class slots in first-seen order; any slot
    still open is filled from the pool in its natural order.

    Args:
        themes: Skill themes from the LLM (e.g., "physical prowess").
        constraints: Background grants, class options and pick count.

    Returns:
        SkillTranslation whose ``selected`` lists granted skills followed by
        class picks.
    """
    issues: list[str] = []
    granted = list(dict.fromkeys(constraints.granted_by_background))
    available = [skill for skill in constraints.class_options if skill not in granted]
    slots = constraints.choose_count

    match = SKILL_THEMES.match(themes)

    picks: list[str] = []
    for candidate in match.candidates:
        if len(picks) >= slots:
            break
        if candidate in available and candidate not in picks:
            picks.append(candidate)

    for option in available:
        if len(picks) >= slots:
            break
        if option not in picks:
            picks.append(option)
            issues.append(f"Auto-selected {option} to fill remaining slot")

    selected = list(dict.fromkeys([*granted, *picks]))

    if match.unmatched:
        issues.append(f"Could not match themes: {', '.join(match.unmatched)}")
    if len(picks) < slots:
        issues.append(f"Only {len(picks)}/{slots} class skill slots could be filled")

    has_all_granted = all(skill in selected for skill in granted)
    return SkillTranslation(
        success=(
            has_all_granted and len(picks) == slots and len(selected) == len(granted) + slots
        ),
        selected=selected,
        unmatched_themes=match.unmatched,
        issues=issues,
    )
