"""Prompt construction for preference generation.

The prompt lists every valid option explicitly so the LLM picks from
constrained lists rather than from its own knowledge of the rules. It asks
for themes and priorities, never for exact mechanical values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from charforge.models.generation import (
        EquipmentPackage,
        FeatureChoice,
        GenerationConstraints,
        GenerationInput,
        SpellcastingConstraints,
        SpellOption,
    )

MAX_CANTRIPS_SHOWN = 15
MAX_SPELLS_SHOWN = 20

SYSTEM_PROMPT = """\
You are a D&D 5e character creation assistant. Your job is to express \
CHARACTER PREFERENCES based on a concept.

CRITICAL RULES:
1. You express PREFERENCES and THEMES, not exact mechanical values
2. All abilities must be ranked in priority order (all 6, highest first)
3. Skill themes should describe what the character is good at, not specific skill names
4. Equipment style describes the look and feel, not specific items
5. Your output must be valid JSON matching the exact schema provided

You are creative and evocative, but you work WITHIN the constraints provided."""


def build_preference_prompt(
    generation_input: GenerationInput,
    constraints: GenerationConstraints,
) -> str:
    """Build the user prompt for one character.

    Four sections separated by blank lines: the fixed foundation, the
    available options, the output schema, and the concept request.

    Args:
        generation_input: The player's choices and concept.
        constraints: Valid options for those choices.

    Returns:
        The complete user prompt.
    """
    sections = [
        _foundation_section(generation_input, constraints),
        _options_section(constraints),
        _output_schema(constraints),
        _request_section(generation_input),
    ]
    return "\n\n".join(sections)


def _foundation_section(
    generation_input: GenerationInput,
    constraints: GenerationConstraints,
) -> str:
    lines = [
        "## CHARACTER FOUNDATION (Fixed by Player)",
        "",
        f"**Class:** {constraints.class_.name}",
        f"**Race:** {constraints.race.name}",
        f"**Level:** {generation_input.level}",
        f"**Background:** {constraints.background.name}",
    ]
    if constraints.subclass is not None:
        lines.append(f"**Subclass:** {constraints.subclass.name}")

    lines.append("")
    lines.append(f"**Hit Die:** d{constraints.class_.hit_die}")
    lines.append(f"**Primary Abilities:** {', '.join(constraints.class_.primary_abilities)}")

    bonuses = ", ".join(
        f"{ability} +{bonus}"
        for ability, bonus in constraints.race.ability_bonuses.items()
        if bonus > 0
    )
    if bonuses:
        lines.append(f"**Racial Bonuses:** {bonuses}")

    return "\n".join(lines)


def _spellcasting_lines(spellcasting: SpellcastingConstraints) -> list[str]:
    lines = [
        "",
        "### Spellcasting",
        f"Spellcasting Ability: {spellcasting.ability}",
        f"Cantrips Known: {spellcasting.cantrips_known}",
    ]
    if spellcasting.spells_known:
        lines.append(f"Spells Known: {spellcasting.spells_known}")
    if spellcasting.spells_prepared:
        lines.append(f"Spells Prepared: {spellcasting.spells_prepared}")

    cantrips = spellcasting.available_cantrips
    lines.append("")
    lines.append("**Available Cantrips:**")
    for cantrip in cantrips[:MAX_CANTRIPS_SHOWN]:
        lines.append(f"- {cantrip.name} ({cantrip.school}): {cantrip.description}")
    if len(cantrips) > MAX_CANTRIPS_SHOWN:
        lines.append(f"... and {len(cantrips) - MAX_CANTRIPS_SHOWN} more")

    spells = spellcasting.available_spells
    lines.append("")
    lines.append("**Available Spells:**")
    for spell in spells[:MAX_SPELLS_SHOWN]:
        lines.append(f"- {spell.name} (Level {spell.level}, {spell.school}): {spell.description}")
    if len(spells) > MAX_SPELLS_SHOWN:
        lines.append(f"... and {len(spells) - MAX_SPELLS_SHOWN} more")

    return lines


def _options_section(constraints: GenerationConstraints) -> str:
    skills = constraints.skills
    lines = [
        "## AVAILABLE OPTIONS",
        "",
        "### Skills",
        f"Background grants: {', '.join(skills.granted_by_background)}",
        f"Choose {skills.choose_count} from: {', '.join(skills.class_options)}",
        "",
        "### Equipment Packages",
    ]
    lines.extend(f"- **{pkg.id}:** {pkg.description}" for pkg in constraints.equipment.packages)

    if constraints.feature_choices:
        lines.append("")
        lines.append("### Class Feature Choices")
        for feature in constraints.feature_choices:
            lines.append(f"**{feature.feature_name}:** Choose one:")
            lines.extend(
                f"  - {option.name}: {option.description}" for option in feature.options
            )

    if constraints.spellcasting is not None:
        lines.extend(_spellcasting_lines(constraints.spellcasting))

    return "\n".join(lines)


def _output_schema(constraints: GenerationConstraints) -> str:
    has_fighting_style = any(f.feature_id == "fighting-style" for f in constraints.feature_choices)

    schema = """\
## OUTPUT FORMAT

Respond with ONLY valid JSON matching this exact structure:

```json
{
  "abilityPriorities": ["ability1", "ability2", "ability3", "ability4", "ability5", "ability6"],
  "abilityReasoning": "Brief explanation of why these priorities fit the character concept",

  "combatApproach": "Description of how this character fights (e.g., 'Defensive tank who protects allies')",
  "skillThemes": ["theme1", "theme2", "theme3"],

  "equipmentStyle": "Description of preferred equipment (e.g., 'Heavy armor with shield for maximum protection')\""""

    if has_fighting_style:
        schema += """,

  "fightingStylePreference": {
    "id": "style-id",
    "reasoning": "Why this fighting style fits"
  }"""

    if constraints.feature_choices:
        schema += """,

  "featureChoicePreferences": {
    "feature-id": {
      "optionId": "chosen-option-id",
      "reasoning": "Why this option fits"
    }
  }"""

    if constraints.spellcasting is not None:
        schema += """,

  "cantripThemes": ["theme1", "theme2"],
  "spellThemes": ["theme1", "theme2", "theme3"]"""

    primary = ", ".join(constraints.class_.primary_abilities)
    schema += f""",

  "character": {{
    "name": "Character Name",
    "personality": {{
      "traits": ["Personality trait 1", "Personality trait 2"],
      "ideals": ["What the character believes in"],
      "bonds": ["What connects the character to the world"],
      "flaws": ["Character weakness or vice"]
    }},
    "backstory": "2-4 paragraphs of character history that connects to the concept and explains their current situation.",
    "appearance": "Physical description of the character",
    "age": 25
  }}
}}
```

### Ability Priority Rules
- List ALL SIX abilities in order from highest to lowest priority
- Valid abilities: strength, dexterity, constitution, intelligence, wisdom, charisma
- Consider the class's primary abilities: {primary}
- Consider racial bonuses when prioritizing

### Skill Theme Examples
Good themes: "physical prowess", "stealth and subterfuge", "social manipulation", "arcane knowledge", "wilderness survival", "keen observation"
Bad themes: "Athletics" (too specific), "good at stuff" (too vague)

### Equipment Style Examples
Good: "Heavy armor and shield, favoring defense over offense"
Good: "Light and mobile, preferring ranged combat"
Bad: "Chain mail" (too specific - we pick the package)"""  # noqa: E501

    return schema


def _request_section(generation_input: GenerationInput) -> str:
    return (
        "## CHARACTER CONCEPT\n\n"
        f'"{generation_input.concept}"\n\n'
        "---\n\n"
        "Based on this concept and the constraints above, generate the character "
        "preferences JSON. Be creative with the backstory and personality, but stay "
        "true to the concept. Remember: express PREFERENCES and THEMES, we will "
        "translate them to valid mechanical choices."
    )


def format_skill_options(
    class_skills: Sequence[str],
    background_skills: Sequence[str],
    choose_count: int,
) -> str:
    return (
        f"Background grants: {', '.join(background_skills)}\n"
        f"Choose {choose_count} from class options: {', '.join(class_skills)}"
    )


def format_equipment_options(packages: Sequence[EquipmentPackage]) -> str:
    return "\n".join(f"- {pkg.id}: {pkg.description}" for pkg in packages)


def format_feature_choices(choices: Sequence[FeatureChoice]) -> str:
    """List feature options with their ids, for prompts that ask for ids."""
    lines: list[str] = []
    for feature in choices:
        lines.append(f"**{feature.feature_name}:** Choose one:")
        lines.extend(
            f"  - {option.id} ({option.name}): {option.description}" for option in feature.options
        )
    return "\n".join(lines)


def format_spell_list(spells: Sequence[SpellOption], max_display: int = 20) -> str:
    lines = [
        f"- {spell.name} (L{spell.level}, {spell.school}): {spell.description}"
        for spell in spells[:max_display]
    ]
    if len(spells) > max_display:
        lines.append(f"... and {len(spells) - max_display} more options")
    return "\n".join(lines)
