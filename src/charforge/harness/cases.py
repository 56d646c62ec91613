"""Synthetic evaluation case generation.

Cases are drawn from a fixed cartesian product of classes, races, levels
and backgrounds. Concepts cycle through a sample pool by position, so the
same call always yields the same cases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, cast

from charforge.models.generation import GenerationInput, create_test_case_id
from charforge.models.harness import EvalCase

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

Level = Literal[1, 2, 3]

TEST_CLASSES: tuple[str, ...] = ("fighter", "wizard", "rogue", "cleric", "bard")
TEST_RACES: tuple[str, ...] = ("human", "dwarf", "elf", "halfling", "half-orc")
TEST_LEVELS: tuple[Level, ...] = (1, 2, 3)
TEST_BACKGROUNDS: tuple[str, ...] = ("soldier", "sage", "criminal", "acolyte", "folk-hero")

SAMPLE_CONCEPTS: tuple[str, ...] = (
    "A battle-hardened veteran seeking redemption after a war gone wrong",
    "A young prodigy discovering their hidden magical talents",
    "A cynical outcast with a heart of gold and a troubled past",
    "A devout believer on a holy mission to cleanse corruption",
    "A charming trickster with hidden depths and surprising loyalty",
    "A stoic guardian who speaks little but protects fiercely",
    "A curious scholar obsessed with forbidden knowledge",
    "A reformed criminal trying to make amends for past sins",
    "A wilderness survivor distrustful of civilization",
    "A noble exile seeking to reclaim their birthright",
)


@dataclass
class CaseFilters:
    """Restricts the matrix to a slice. ``None`` means no restriction."""

    classes: Sequence[str] | None = None
    races: Sequence[str] | None = None
    levels: Sequence[int] | None = None
    backgrounds: Sequence[str] | None = None


def generate_test_case(
    class_id: str,
    race_id: str,
    level: int,
    background_id: str,
    concept: str,
) -> EvalCase:
    generation_input = GenerationInput(
        class_id=class_id,
        race_id=race_id,
        level=cast("Level", level),
        background_id=background_id,
        concept=concept,
    )
    return EvalCase(id=create_test_case_id(generation_input), input=generation_input)


def generate_pilot_test_cases() -> list[EvalCase]:
    """One level-1 human soldier per class, all with the first concept."""
    return [
        generate_test_case(class_id, "human", 1, "soldier", SAMPLE_CONCEPTS[0])
        for class_id in TEST_CLASSES
    ]


def _matrix(
    classes: Iterable[str],
    races: Iterable[str],
    levels: Iterable[int],
    backgrounds: Iterable[str],
    *,
    level_first: bool,
) -> list[EvalCase]:
    classes, races, levels, backgrounds = (
        list(classes),
        list(races),
        list(levels),
        list(backgrounds),
    )
    combos: list[tuple[str, str, int, str]] = []
    if level_first:
        for level in levels:
            for class_id in classes:
                for race_id in races:
                    for background_id in backgrounds:
                        combos.append((class_id, race_id, level, background_id))
    else:
        for class_id in classes:
            for race_id in races:
                for level in levels:
                    for background_id in backgrounds:
                        combos.append((class_id, race_id, level, background_id))

    return [
        generate_test_case(*combo, SAMPLE_CONCEPTS[index % len(SAMPLE_CONCEPTS)])
        for index, combo in enumerate(combos)
    ]


def evenly_spaced(candidates: Sequence[EvalCase], count: int) -> list[EvalCase]:
    """Pick ``count`` candidates at indices ``floor(i * len / count)``.

    Returns every candidate when ``count`` is at least the candidate count.
    """
    count = max(1, int(count))
    if count >= len(candidates):
        return list(candidates)
    stride = len(candidates) / count
    return [candidates[int(i * stride)] for i in range(count)]


def generate_full_matrix() -> list[EvalCase]:
    """Every combination, iterated class, race, level, background (375 cases)."""
    return _matrix(TEST_CLASSES, TEST_RACES, TEST_LEVELS, TEST_BACKGROUNDS, level_first=False)


def generate_representative_sample(count: int = 15) -> list[EvalCase]:
    """An evenly spaced subset of the matrix, iterated level first.

    Level-first order means small samples still cover every class. Case ids
    ignore the concept, so at most 375 unique cases exist.
    """
    candidates = _matrix(TEST_CLASSES, TEST_RACES, TEST_LEVELS, TEST_BACKGROUNDS, level_first=True)
    return evenly_spaced(candidates, count)


def generate_filtered_matrix(filters: CaseFilters) -> list[EvalCase]:
    """Every combination within the filters, in representative-sample order."""

    def keep(values: Sequence, allowed: Sequence | None) -> list:
        return [v for v in values if allowed is None or v in allowed]

    return _matrix(
        keep(TEST_CLASSES, filters.classes),
        keep(TEST_RACES, filters.races),
        keep(TEST_LEVELS, filters.levels),
        keep(TEST_BACKGROUNDS, filters.backgrounds),
        level_first=True,
    )


def generate_filtered_sample(filters: CaseFilters, count: int | None = None) -> list[EvalCase]:
    """The filtered matrix, or an evenly spaced subset of it.

    A missing or non-positive ``count`` returns the whole filtered matrix.
    """
    candidates = generate_filtered_matrix(filters)
    if count is None or count <= 0:
        return candidates
    return evenly_spaced(candidates, count)
