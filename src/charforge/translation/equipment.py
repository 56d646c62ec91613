"""Equipment style translation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from charforge.models.translation import EquipmentTranslation
from charforge.translation.themes import EQUIPMENT_KEYWORDS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from charforge.models.generation import EquipmentPackage


def style_tokens(style: str) -> list[str]:
    """Expand an equipment style into match tokens.

    Keyword phrases found in the style contribute their expansions, then
    every word of the style is added as a literal token.
    """
    normalized = style.lower()
    return [*EQUIPMENT_KEYWORDS.expand_text(normalized), *normalized.split()]


def score_package(package: EquipmentPackage, tokens: Sequence[str]) -> int:
    """Count the tokens occurring in the package description."""
    description = package.description.lower()
    return sum(1 for token in tokens if token in description)


def translate_equipment_style(
    style: str,
    packages: Sequence[EquipmentPackage],
) -> EquipmentTranslation:
    """Pick the equipment package that best fits a free-text style.

    Ties go to the earliest package. A package is always chosen when any
    exist, so this stage only fails when the package list is empty.
    """
    if not packages:
        return EquipmentTranslation(success=False, issues=["No equipment packages available"])

    if len(packages) == 1:
        return EquipmentTranslation(success=True, package_id=packages[0].id)

    tokens = style_tokens(style)

    best = packages[0]
    best_score = 0
    for package in packages:
        score = score_package(package, tokens)
        if score > best_score:
            best = package
            best_score = score

    issues: list[str] = []
    if best_score == 0:
        issues.append(f'No strong match for style "{style}", defaulting to first package')

    return EquipmentTranslation(success=True, package_id=best.id, issues=issues)
