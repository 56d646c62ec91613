"""Keyword tables mapping free-text themes to constrained options.

A ``ThemeTable`` maps normalized keys to match targets. Lookup tries the
exact key first, then scans keys in table order and takes the first one
that contains, or is contained in, the theme. First match wins, so the
order of the tables below is significant.

Three tables are defined: skill names per skill theme, description
substrings per equipment keyword, and school/tag groups per spell theme.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

T = TypeVar("T")


def normalize_theme(theme: str) -> str:
    return theme.strip().lower()


@dataclass
class ThemeMatch(Generic[T]):
    """Outcome of matching a list of themes.

    Attributes:
        candidates: Targets of every matched theme, concatenated in theme
            order. Duplicates are kept.
        unmatched: Themes (as given) that matched no key.
    """

    candidates: list[T] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)


class ThemeTable(Generic[T]):
    """Ordered lookup table from normalized theme keys to targets."""

    def __init__(self, entries: Mapping[str, list[T]]) -> None:
        self._entries: dict[str, list[T]] = {
            normalize_theme(key): list(targets) for key, targets in entries.items()
        }

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_theme(key) in self._entries

    def keys(self) -> list[str]:
        return list(self._entries)

    def get(self, theme: str) -> list[T] | None:
        """Exact lookup only."""
        return self._entries.get(normalize_theme(theme))

    def find_partial(self, theme: str) -> list[T] | None:
        """First entry whose key contains or is contained in the theme."""
        normalized = normalize_theme(theme)
        if not normalized:
            return None
        for key, targets in self._entries.items():
            if key in normalized or normalized in key:
                return targets
        return None

    def lookup(self, theme: str) -> list[T] | None:
        """Exact lookup, falling back to the partial scan."""
        exact = self.get(theme)
        if exact is not None:
            return exact
        return self.find_partial(theme)

    def match(self, themes: Iterable[str]) -> ThemeMatch[T]:
        result: ThemeMatch[T] = ThemeMatch()
        for theme in themes:
            targets = self.lookup(theme)
            if targets is None:
                result.unmatched.append(theme)
            else:
                result.candidates.extend(targets)
        return result

    def expand_text(self, text: str) -> list[T]:
        """Targets of every key that occurs inside ``text``, in table order."""
        normalized = text.lower()
        expanded: list[T] = []
        for key, targets in self._entries.items():
            if key in normalized:
                expanded.extend(targets)
        return expanded


@dataclass(frozen=True)
class SpellThemeTags:
    """Schools and name/description tags a spell theme points at."""

    schools: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()


SKILL_THEMES: ThemeTable[str] = ThemeTable(
    {
        # Physical
        "physical": ["Athletics", "Acrobatics"],
        "physical prowess": ["Athletics"],
        "strength": ["Athletics"],
        "agility": ["Acrobatics"],
        "endurance": ["Athletics"],
        # Stealth and dexterity
        "stealth": ["Stealth"],
        "sneaky": ["Stealth", "Sleight of Hand"],
        "thievery": ["Sleight of Hand", "Stealth"],
        "nimble": ["Acrobatics", "Sleight of Hand"],
        # Social
        "social": ["Persuasion", "Deception", "Intimidation"],
        "persuasion": ["Persuasion"],
        "deception": ["Deception"],
        "intimidation": ["Intimidation"],
        "intimidating": ["Intimidation"],
        "charm": ["Persuasion", "Performance"],
        "leadership": ["Persuasion", "Intimidation"],
        # Knowledge
        "knowledge": ["Arcana", "History", "Nature", "Religion"],
        "arcane": ["Arcana"],
        "scholarly": ["History", "Arcana"],
        "nature": ["Nature", "Survival"],
        "religious": ["Religion"],
        "lore": ["History", "Arcana", "Religion"],
        # Awareness
        "awareness": ["Perception", "Insight"],
        "perception": ["Perception"],
        "insight": ["Insight"],
        "observant": ["Perception", "Investigation"],
        "vigilant": ["Perception"],
        "intuition": ["Insight"],
        # Survival
        "survival": ["Survival", "Nature"],
        "wilderness": ["Survival", "Nature", "Animal Handling"],
        "tracking": ["Survival", "Perception"],
        "animals": ["Animal Handling"],
        # Investigation
        "investigation": ["Investigation"],
        "detective": ["Investigation", "Insight", "Perception"],
        "analytical": ["Investigation"],
        # Performance
        "performance": ["Performance"],
        "entertainment": ["Performance"],
        "artistic": ["Performance"],
        # Medicine
        "medical": ["Medicine"],
        "healing": ["Medicine"],
        "doctor": ["Medicine"],
    }
)

EQUIPMENT_KEYWORDS: ThemeTable[str] = ThemeTable(
    {
        # Armor
        "heavy armor": ["chain mail", "heavy", "plate"],
        "light armor": ["leather", "light", "mobile"],
        "medium armor": ["scale", "medium", "breastplate"],
        "no armor": ["unarmored", "cloth"],
        # Weapons
        "shield": ["shield"],
        "two-handed": ["two-handed", "greatsword", "greataxe", "maul"],
        "ranged": ["longbow", "shortbow", "crossbow", "ranged"],
        "dual wield": ["two weapons", "dual"],
        # Style
        "defensive": ["shield", "defense"],
        "aggressive": ["two-handed", "damage"],
        "mobile": ["light", "mobile", "ranged"],
        "balanced": ["versatile", "martial"],
    }
)

SPELL_THEMES: ThemeTable[SpellThemeTags] = ThemeTable(
    {
        "damage": [SpellThemeTags(tags=("damage", "attack"))],
        "fire": [SpellThemeTags(tags=("fire",))],
        "cold": [SpellThemeTags(tags=("cold", "ice"))],
        "lightning": [SpellThemeTags(tags=("lightning", "thunder"))],
        "healing": [SpellThemeTags(tags=("healing", "restoration"))],
        "control": [
            SpellThemeTags(schools=("enchantment", "illusion"), tags=("control", "crowd"))
        ],
        "buff": [SpellThemeTags(schools=("abjuration", "transmutation"), tags=("buff", "enhance"))],
        "utility": [SpellThemeTags(tags=("utility", "ritual"))],
        "summoning": [SpellThemeTags(schools=("conjuration",), tags=("summon",))],
        "divination": [SpellThemeTags(schools=("divination",), tags=("detection", "knowledge"))],
        "necromancy": [SpellThemeTags(schools=("necromancy",))],
        "illusion": [SpellThemeTags(schools=("illusion",))],
        "protection": [SpellThemeTags(schools=("abjuration",), tags=("protection", "defense"))],
    }
)
