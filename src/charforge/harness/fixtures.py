"""Offline stand-ins for the rule engine and the LLM.

Mock constraints cover a fighter and a wizard; every other class falls back
to the fighter. Mock responses exist for each pilot class and are returned
as fenced JSON, the way a chat model usually answers.
"""

from __future__ import annotations

import json
from typing import Any

from charforge.models.generation import (
    BackgroundInfo,
    ClassInfo,
    EquipmentConstraints,
    EquipmentPackage,
    FeatureChoice,
    FeatureOption,
    GenerationConstraints,
    RaceInfo,
    SkillConstraints,
    SpellcastingConstraints,
    SpellOption,
)


def _human() -> RaceInfo:
    return RaceInfo(
        id="human",
        name="Human",
        ability_bonuses={
            "strength": 1,
            "dexterity": 1,
            "constitution": 1,
            "intelligence": 1,
            "wisdom": 1,
            "charisma": 1,
        },
        traits=["Extra Language", "Extra Skill"],
    )


def create_mock_fighter_constraints() -> GenerationConstraints:
    return GenerationConstraints(
        class_=ClassInfo(
            id="fighter",
            name="Fighter",
            hit_die=10,
            primary_abilities=["strength", "constitution"],
        ),
        race=_human(),
        background=BackgroundInfo(
            id="soldier", name="Soldier", granted_skills=["Athletics", "Intimidation"]
        ),
        skills=SkillConstraints(
            granted_by_background=["Athletics", "Intimidation"],
            class_options=[
                "Acrobatics",
                "Animal Handling",
                "Athletics",
                "History",
                "Insight",
                "Intimidation",
                "Perception",
                "Survival",
            ],
            choose_count=2,
        ),
        equipment=EquipmentConstraints(
            packages=[
                EquipmentPackage(
                    id="A",
                    description=(
                        "Chain mail, martial weapon and shield, light crossbow with 20 bolts"
                    ),
                    items=["chain-mail", "longsword", "shield", "light-crossbow", "bolts-20"],
                ),
                EquipmentPackage(
                    id="B",
                    description="Leather armor, longbow with 20 arrows, two martial weapons",
                    items=["leather-armor", "longbow", "arrows-20", "longsword", "shortsword"],
                ),
            ]
        ),
        feature_choices=[
            FeatureChoice(
                feature_id="fighting-style",
                feature_name="Fighting Style",
                description="Choose a fighting style specialty",
                options=[
                    FeatureOption(
                        id="archery",
                        name="Archery",
                        description="+2 bonus to attack rolls with ranged weapons",
                    ),
                    FeatureOption(
                        id="defense",
                        name="Defense",
                        description="+1 bonus to AC when wearing armor",
                    ),
                    FeatureOption(
                        id="dueling",
                        name="Dueling",
                        description="+2 damage when wielding one-handed weapon",
                    ),
                    FeatureOption(
                        id="great-weapon",
                        name="Great Weapon Fighting",
                        description="Reroll 1s and 2s on damage dice with two-handed weapons",
                    ),
                    FeatureOption(
                        id="protection",
                        name="Protection",
                        description="Impose disadvantage on attacks against adjacent allies",
                    ),
                    FeatureOption(
                        id="two-weapon",
                        name="Two-Weapon Fighting",
                        description="Add ability modifier to off-hand damage",
                    ),
                ],
            )
        ],
    )


def _spell(spell_id: str, name: str, level: int, school: str, description: str) -> SpellOption:
    return SpellOption(id=spell_id, name=name, level=level, school=school, description=description)


def create_mock_wizard_constraints() -> GenerationConstraints:
    return GenerationConstraints(
        class_=ClassInfo(id="wizard", name="Wizard", hit_die=6, primary_abilities=["intelligence"]),
        race=_human(),
        background=BackgroundInfo(id="sage", name="Sage", granted_skills=["Arcana", "History"]),
        skills=SkillConstraints(
            granted_by_background=["Arcana", "History"],
            class_options=["Arcana", "History", "Insight", "Investigation", "Medicine", "Religion"],
            choose_count=2,
        ),
        equipment=EquipmentConstraints(
            packages=[
                EquipmentPackage(
                    id="A",
                    description="Quarterstaff, component pouch, scholar's pack, spellbook",
                    items=["quarterstaff", "component-pouch", "scholars-pack", "spellbook"],
                ),
                EquipmentPackage(
                    id="B",
                    description="Dagger, arcane focus, explorer's pack, spellbook",
                    items=["dagger", "arcane-focus", "explorers-pack", "spellbook"],
                ),
            ]
        ),
        spellcasting=SpellcastingConstraints(
            ability="intelligence",
            cantrips_known=3,
            spells_known=6,
            max_spell_level=1,
            available_cantrips=[
                _spell("fire-bolt", "Fire Bolt", 0, "Evocation", "Hurl a mote of fire at a creature"),
                _spell("ray-of-frost", "Ray of Frost", 0, "Evocation", "A frigid beam of blue-white light"),
                _spell("light", "Light", 0, "Evocation", "Touch an object to make it shed bright light"),
                _spell("mage-hand", "Mage Hand", 0, "Conjuration", "Create a spectral floating hand"),
                _spell("prestidigitation", "Prestidigitation", 0, "Transmutation", "Minor magical tricks"),
                _spell("minor-illusion", "Minor Illusion", 0, "Illusion", "Create a sound or image"),
                _spell("shocking-grasp", "Shocking Grasp", 0, "Evocation", "Lightning springs from your hand"),
                _spell("chill-touch", "Chill Touch", 0, "Necromancy", "Ghostly skeletal hand assails your foe"),
            ],
            available_spells=[
                _spell("magic-missile", "Magic Missile", 1, "Evocation", "Three darts of magical force"),
                _spell("shield", "Shield", 1, "Abjuration", "+5 AC as a reaction"),
                _spell("mage-armor", "Mage Armor", 1, "Abjuration", "Base AC becomes 13 + DEX"),
                _spell("sleep", "Sleep", 1, "Enchantment", "Put creatures into magical slumber"),
                _spell("charm-person", "Charm Person", 1, "Enchantment", "Charm a humanoid"),
                _spell("detect-magic", "Detect Magic", 1, "Divination", "Sense presence of magic"),
                _spell("find-familiar", "Find Familiar", 1, "Conjuration", "Summon a spirit in animal form"),
                _spell("burning-hands", "Burning Hands", 1, "Evocation", "Cone of fire damage"),
                _spell("thunderwave", "Thunderwave", 1, "Evocation", "Wave of thunder pushes creatures"),
                _spell("identify", "Identify", 1, "Divination", "Learn properties of a magic item"),
            ],
        ),
    )  # fmt: skip


def get_mock_constraints(class_id: str) -> GenerationConstraints:
    if class_id == "wizard":
        return create_mock_wizard_constraints()
    return create_mock_fighter_constraints()


_MOCK_PREFERENCES: dict[str, dict[str, Any]] = {
    "fighter": {
        "abilityPriorities": [
            "strength", "constitution", "dexterity", "wisdom", "charisma", "intelligence"
        ],
        "abilityReasoning": (
            "A battle-hardened veteran prioritizes raw power and endurance. Strength for "
            "devastating blows, constitution to survive the horrors of war."
        ),
        "combatApproach": (
            "Aggressive frontline fighter who charges into battle, drawing enemy attention "
            "away from allies. Uses intimidation and overwhelming force."
        ),
        "skillThemes": ["physical prowess", "intimidation", "battlefield awareness"],
        "equipmentStyle": (
            "Heavy armor with shield for maximum protection. "
            "Prefers reliable weapons over flashy ones."
        ),
        "fightingStylePreference": {
            "id": "defense",
            "reasoning": (
                "After losing so many comrades, survival has become paramount. "
                "Defense keeps you alive to protect others."
            ),
        },
        "character": {
            "name": "Kira Stonefist",
            "personality": {
                "traits": [
                    "I face problems head-on, no matter the odds",
                    "I sleep with my back to the wall and one hand on my weapon",
                ],
                "ideals": ["Protection - The strong must shield the weak, no matter the cost"],
                "bonds": ["I carry the insignia of my fallen unit. Their memory drives me forward."],
                "flaws": ["I blame myself for every death I witness. The guilt never fades."],
            },
            "backstory": (
                "Kira served fifteen years in the Iron Legion, rising to the rank of sergeant "
                "through blood and determination. During the Siege of Thornwall, her unit was "
                "ambushed by hobgoblin warlords. She was the only survivor.\n\n"
                "Now she wanders the roads, taking on jobs that put her between danger and the "
                "innocent. She doesn't seek glory or gold, only the chance to save lives that "
                "remind her of the soldiers she couldn't protect."
            ),
            "appearance": (
                "A weathered human woman in her late thirties with grey-streaked black hair "
                "kept in a practical braid. A jagged scar runs from her left temple to her jaw."
            ),
            "age": 38,
        },
    },
    "wizard": {
        "abilityPriorities": [
            "intelligence", "constitution", "dexterity", "wisdom", "charisma", "strength"
        ],
        "abilityReasoning": (
            "A scholar turned soldier needs sharp wits above all. Constitution keeps the frail "
            "wizard alive, dexterity helps avoid blows entirely."
        ),
        "combatApproach": (
            "Stays at range, controlling the battlefield with spells. Uses magic missile for "
            "reliable damage and shield for emergency defense."
        ),
        "skillThemes": ["arcane knowledge", "scholarly research", "keen observation"],
        "equipmentStyle": (
            "Light and practical - a quarterstaff for emergencies, "
            "component pouch for spellcasting."
        ),
        "cantripThemes": ["damage", "utility", "light"],
        "spellThemes": ["protection", "control", "reliable damage"],
        "character": {
            "name": "Aldric Thornwood",
            "personality": {
                "traits": [
                    "I use long words to sound more intelligent than I am",
                    "I'm convinced that my research will change the world",
                ],
                "ideals": [
                    "Knowledge - The path to power is through understanding, not brute force"
                ],
                "bonds": [
                    "My spellbook contains the notes of my mentor, who died before completing "
                    "their life's work"
                ],
                "flaws": ["I overlook obvious solutions in favor of complicated ones"],
            },
            "backstory": (
                "Aldric was a promising student at the Arcane Academy until the war came to its "
                "doorstep. His mentor, the great sage Mordecai, fell defending the library from "
                "raiders. With his dying breath, Mordecai pressed his spellbook into Aldric's "
                "hands.\n\nNow Aldric carries that book everywhere, trying to complete his "
                "mentor's research while learning to survive outside the academy halls."
            ),
            "appearance": (
                "A young human man with wild brown hair perpetually stained with ink. "
                "Wire-rimmed spectacles sit crookedly on his nose."
            ),
            "age": 24,
        },
    },
    "rogue": {
        "abilityPriorities": [
            "dexterity", "constitution", "charisma", "wisdom", "intelligence", "strength"
        ],
        "abilityReasoning": (
            "A survivor needs quick reflexes above all. Constitution to take a hit when "
            "stealth fails, charisma to talk out of trouble."
        ),
        "combatApproach": (
            "Strike from shadows, avoid fair fights entirely. Uses mobility and cunning rather "
            "than direct confrontation."
        ),
        "skillThemes": ["stealth and subterfuge", "quick thinking", "reading people"],
        "equipmentStyle": (
            "Light armor for mobility, concealed weapons, tools for every situation."
        ),
        "character": {
            "name": "Vex Shadowmere",
            "personality": {
                "traits": [
                    "I always have a plan for when things go wrong",
                    "The first thing I do in a new place is note exits",
                ],
                "ideals": [
                    "Freedom - Chains are meant to be broken, as are those who would forge them"
                ],
                "bonds": ["Someone saved my life on the streets. I owe them everything."],
                "flaws": [
                    "When I see something valuable, I can't think about anything but how to "
                    "steal it"
                ],
            },
            "backstory": (
                "Vex grew up in the gutters of Waterdeep, surviving by wit and quick fingers. "
                "When the guild wars erupted, she lost everything, including the old thief "
                "who'd taught her to survive.\n\nNow she takes jobs that let her strike at "
                "those in power while staying alive."
            ),
            "appearance": (
                "A lithe human woman with short-cropped dark hair and sharp green eyes that "
                "never stop moving."
            ),
            "age": 26,
        },
    },
    "cleric": {
        "abilityPriorities": [
            "wisdom", "constitution", "strength", "charisma", "dexterity", "intelligence"
        ],
        "abilityReasoning": (
            "Divine power flows through wisdom. Constitution keeps the healer standing. "
            "Strength for righteous battle when words fail."
        ),
        "combatApproach": (
            "Support and protect allies, entering melee only when necessary. Prioritizes "
            "keeping others alive over personal glory."
        ),
        "skillThemes": ["divine insight", "healing arts", "religious knowledge"],
        "equipmentStyle": (
            "Medium armor and shield - protected but not encumbered. Holy symbol always visible."
        ),
        "cantripThemes": ["light", "damage", "utility"],
        "spellThemes": ["healing", "protection", "divine wrath"],
        "character": {
            "name": "Brother Marcus Lightbringer",
            "personality": {
                "traits": [
                    "I see omens in every event and action",
                    "Nothing can shake my optimistic attitude",
                ],
                "ideals": ["Faith - I trust that my deity will guide my actions"],
                "bonds": ["I will do anything to protect the temple where I served"],
                "flaws": ["I judge others harshly, and myself even more severely"],
            },
            "backstory": (
                "Marcus was a soldier before he was a priest. When the war ended, he sought "
                "absolution in the temple of Lathander.\n\nThe Morninglord showed him a new "
                "path: not to forget his sins, but to balance them with mercy."
            ),
            "appearance": (
                "A broad-shouldered human man in his forties with a shaved head and kind eyes."
            ),
            "age": 45,
        },
    },
    "bard": {
        "abilityPriorities": [
            "charisma", "dexterity", "constitution", "intelligence", "wisdom", "strength"
        ],
        "abilityReasoning": (
            "A performer lives and dies by charm. Dexterity for dancing away from danger, "
            "constitution to keep performing despite the wounds."
        ),
        "combatApproach": (
            "Support through inspiration and magic, using wit and distraction rather than "
            "direct combat."
        ),
        "skillThemes": ["performance", "persuasion", "gathering secrets"],
        "equipmentStyle": (
            "Light and flashy - leather armor that doesn't restrict movement, a fine "
            "instrument, rapier for style."
        ),
        "cantripThemes": ["utility", "trickery"],
        "spellThemes": ["charm", "healing", "enhancement"],
        "character": {
            "name": "Lyric Silversong",
            "personality": {
                "traits": [
                    "I change my mood as quickly as I change keys in a song",
                    "I know a story about everything",
                ],
                "ideals": ["Beauty - What is beautiful points us toward what is true"],
                "bonds": [
                    "I would do anything for the common folk who sheltered me when nobles "
                    "hunted me"
                ],
                "flaws": ["I'm a sucker for a pretty face"],
            },
            "backstory": (
                "Lyric was born to nobility but found court life suffocating. When they "
                "discovered their talent for magic, they fled to join a traveling troupe of "
                "performers.\n\nWhen war came, the troupe was scattered. Now Lyric travels "
                "alone, collecting stories and songs of the conflict."
            ),
            "appearance": (
                "An androgynous half-elf with flowing silver hair and eyes that shift color "
                "with their mood."
            ),
            "age": 28,
        },
    },
}  # fmt: skip


def _fenced(payload: dict[str, Any]) -> str:
    return f"```json\n{json.dumps(payload, indent=2, ensure_ascii=False)}\n```"


MOCK_RESPONSES: dict[str, str] = {
    class_id: _fenced(payload) for class_id, payload in _MOCK_PREFERENCES.items()
}


def get_mock_response(class_id: str) -> str:
    """Canned LLM answer for a class, the fighter's for unknown classes."""
    return MOCK_RESPONSES.get(class_id, MOCK_RESPONSES["fighter"])
