"""Local rule checks of a finished translation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from charforge.models.harness import (
    EquipmentCheck,
    PointBuyCheck,
    SkillsCheck,
    SpellsCheck,
    ValidationReport,
)
from charforge.translation.point_buy import POINT_BUY_TOTAL

if TYPE_CHECKING:
    from charforge.models.generation import GenerationConstraints, SpellcastingConstraints
    from charforge.models.translation import SpellTranslation, TranslationResult


def _check_spells(
    spells: SpellTranslation,
    spellcasting: SpellcastingConstraints,
) -> SpellsCheck:
    cantrip_ids = {c.id for c in spellcasting.available_cantrips}
    spells_by_id = {s.id: s for s in spellcasting.available_spells}

    invalid = [c for c in spells.cantrips if c not in cantrip_ids]
    invalid.extend(s for s in spells.spells if s not in spells_by_id)
    violations = [
        s
        for s in spells.spells
        if s in spells_by_id and spells_by_id[s].level > spellcasting.max_spell_level
    ]
    return SpellsCheck(
        valid=not invalid and not violations,
        invalid_spells=invalid,
        level_violations=violations,
    )


def validate_translation(
    translation: TranslationResult,
    constraints: GenerationConstraints,
) -> ValidationReport:
    """Re-check a translation against the constraints it was made for.

    Each stage must have succeeded, and its payload must only use options
    the constraints offer. Spells are checked only when both the
    constraints and the translation include them.

    Returns:
        ValidationReport with per-area checks and a flat issue list.
    """
    stages = translation.translations
    all_issues: list[str] = []

    abilities = stages.ability_scores
    point_buy_ok = abilities.success if abilities else False
    points_spent = (abilities.points_spent or 0) if abilities else 0
    if not point_buy_ok:
        all_issues.append("Point buy invalid")
    if points_spent > POINT_BUY_TOTAL:
        all_issues.append(f"Point buy overflow: {points_spent}/{POINT_BUY_TOTAL}")
    point_buy = PointBuyCheck(
        valid=point_buy_ok and points_spent <= POINT_BUY_TOTAL,
        points_spent=points_spent,
        issues=(
            [f"Spent {points_spent}/{POINT_BUY_TOTAL} points"]
            if points_spent > POINT_BUY_TOTAL
            else []
        ),
    )

    skills = stages.skills
    allowed_skills = {*constraints.skills.class_options, *constraints.skills.granted_by_background}
    invalid_skills = [s for s in skills.selected if s not in allowed_skills] if skills else []
    if invalid_skills:
        all_issues.append(f"Invalid skills: {', '.join(invalid_skills)}")
    skills_check = SkillsCheck(
        valid=(skills.success if skills else False) and not invalid_skills,
        invalid_skills=invalid_skills,
    )

    equipment = stages.equipment
    equipment_issues: list[str] = []
    if equipment and equipment.package_id:
        package_ids = {p.id for p in constraints.equipment.packages}
        if equipment.package_id not in package_ids:
            equipment_issues.append(f"Invalid package: {equipment.package_id}")
    all_issues.extend(equipment_issues)
    equipment_check = EquipmentCheck(
        valid=(equipment.success if equipment else False) and not equipment_issues,
        issues=equipment_issues,
    )

    spells_check = None
    if stages.spells is not None and constraints.spellcasting is not None:
        spells_check = _check_spells(stages.spells, constraints.spellcasting)
        if spells_check.invalid_spells:
            all_issues.append(f"Invalid spells: {', '.join(spells_check.invalid_spells)}")
        if spells_check.level_violations:
            all_issues.append(
                f"Spells above max level: {', '.join(spells_check.level_violations)}"
            )

    return ValidationReport(
        is_valid=(
            point_buy.valid
            and skills_check.valid
            and equipment_check.valid
            and (spells_check is None or spells_check.valid)
        ),
        point_buy=point_buy,
        skills=skills_check,
        equipment=equipment_check,
        spells=spells_check,
        all_issues=all_issues,
    )
