"""Cantrip and spell theme translation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from charforge.models.translation import SpellTranslation
from charforge.translation.point_buy import ability_modifier
from charforge.translation.themes import SPELL_THEMES, normalize_theme

if TYPE_CHECKING:
    from collections.abc import Sequence

    from charforge.models.generation import SpellcastingConstraints, SpellOption
    from charforge.models.translation import AbilityScores


def compute_spell_count(
    constraints: SpellcastingConstraints,
    level: int,
    ability_scores: AbilityScores | None = None,
) -> int:
    """Number of leveled spells the character knows or prepares.

    Prepared casters with a formula derive the count from the casting
    ability modifier (a score of 10 when no scores are known); everyone
    else uses the fixed count from the constraints.
    """
    if constraints.caster_type == "prepared" and constraints.prepared_formula:
        score = ability_scores.get(constraints.ability) if ability_scores else 10
        modifier = ability_modifier(score)
        if constraints.prepared_formula == "abilityModPlusLevel":
            return max(1, modifier + level)
        if constraints.prepared_formula == "abilityModPlusHalfLevel":
            return max(1, modifier + level // 2)
    return constraints.spells_known or constraints.spells_prepared or 0


def score_spell(spell: SpellOption, themes: Sequence[str]) -> tuple[int, set[str]]:
    """Score a spell against themes.

    A theme with a table entry earns 2 when its schools include the spell's
    school and 1 when any of its tags occurs in the spell's name or
    description. A theme without an entry earns 1 for a direct substring
    match.

    Returns:
        Tuple of (score, themes that contributed to it).
    """
    name = spell.name.lower()
    description = spell.description.lower()
    school = spell.school.lower()

    score = 0
    hits: set[str] = set()
    for theme in themes:
        normalized = normalize_theme(theme)
        mapping = SPELL_THEMES.get(normalized)
        if mapping is not None:
            for tags in mapping:
                if school in tags.schools:
                    score += 2
                    hits.add(theme)
                if any(tag in name or tag in description for tag in tags.tags):
                    score += 1
                    hits.add(theme)
        elif normalized and (normalized in name or normalized in description):
            score += 1
            hits.add(theme)
    return score, hits


def select_spells_by_themes(
    themes: Sequence[str],
    available: Sequence[SpellOption],
    count: int,
    unmatched_themes: list[str] | None = None,
) -> list[str]:
    """Pick ``count`` spell ids from ``available`` ranked by theme score.

    Higher scores win; among equal scores lower-level spells come first and
    pool order breaks the remaining ties. Short selections are topped up
    from the pool in its original order.

    Args:
        themes: Themes to score against.
        available: Eligible spells.
        count: Number of spells to select.
        unmatched_themes: If given, themes that scored against no spell are
            appended to it.
    """
    scored: list[tuple[int, SpellOption]] = []
    matched: set[str] = set()
    for spell in available:
        score, hits = score_spell(spell, themes)
        scored.append((score, spell))
        matched |= hits

    if unmatched_themes is not None:
        for theme in themes:
            if theme not in matched and theme not in unmatched_themes:
                unmatched_themes.append(theme)

    ranked = sorted(scored, key=lambda item: (-item[0], item[1].level))

    selected: list[str] = []
    for _, spell in ranked:
        if len(selected) >= count:
            break
        if spell.id not in selected:
            selected.append(spell.id)

    for spell in available:
        if len(selected) >= count:
            break
        if spell.id not in selected:
            selected.append(spell.id)

    return selected


def translate_spell_themes(
    cantrip_themes: Sequence[str],
    spell_themes: Sequence[str],
    constraints: SpellcastingConstraints | None,
    level: int,
    ability_scores: AbilityScores | None = None,
) -> SpellTranslation:
    """Select cantrips and spells matching the LLM's themes.

    Non-casters get an empty, successful result. Success requires both
    selections to reach their target counts, which only fails when a pool
    is smaller than its target.
    """
    if constraints is None:
        return SpellTranslation(success=True)

    issues: list[str] = []
    unmatched: list[str] = []

    cantrip_target = constraints.cantrips_known
    cantrips = select_spells_by_themes(
        cantrip_themes, constraints.available_cantrips, cantrip_target, unmatched
    )

    spell_target = compute_spell_count(constraints, level, ability_scores)
    eligible = [s for s in constraints.available_spells if s.level <= constraints.max_spell_level]
    spells = select_spells_by_themes(spell_themes, eligible, spell_target, unmatched)

    if len(cantrips) < cantrip_target:
        issues.append(f"Only matched {len(cantrips)}/{cantrip_target} cantrips")
    if len(spells) < spell_target:
        issues.append(f"Only matched {len(spells)}/{spell_target} spells")

    return SpellTranslation(
        success=len(cantrips) == cantrip_target and len(spells) == spell_target,
        cantrips=cantrips,
        spells=spells,
        unmatched_themes=unmatched,
        issues=issues,
    )
