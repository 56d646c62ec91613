"""Class feature choice translation (fighting style and similar)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from charforge.models.translation import FeatureChoiceTranslation

if TYPE_CHECKING:
    from collections.abc import Sequence

    from charforge.models.generation import FeatureChoice
    from charforge.models.preferences import AiPreferences


def _resolve(feature: FeatureChoice, option_id: str, label: str, issues: list[str]) -> str:
    for option in feature.options:
        if option.id == option_id:
            return option.id
    default = feature.options[0]
    issues.append(f'Invalid {label} "{option_id}", defaulting to {default.name}')
    return default.id


def translate_feature_choices(
    preferences: AiPreferences,
    feature_choices: Sequence[FeatureChoice],
) -> FeatureChoiceTranslation:
    """Resolve every required feature choice to one valid option.

    Fighting-style features use ``fighting_style_preference``; other
    features use the entry keyed by their id in
    ``feature_choice_preferences``. Unknown or missing preferences fall back
    to the first option, with an issue recorded. Every feature always
    resolves, so the issues here are an audit trail only.
    """
    issues: list[str] = []
    choices: dict[str, str] = {}

    for feature in feature_choices:
        fighting_style = preferences.fighting_style_preference
        keyed = preferences.feature_choice_preferences.get(feature.feature_id)

        if "fighting-style" in feature.feature_id and fighting_style is not None:
            choices[feature.feature_id] = _resolve(
                feature, fighting_style.id, "fighting style", issues
            )
        elif keyed is not None:
            choices[feature.feature_id] = _resolve(
                feature, keyed.option_id, f"choice for {feature.feature_name}:", issues
            )
        else:
            default = feature.options[0]
            choices[feature.feature_id] = default.id
            issues.append(f"No preference for {feature.feature_name}, defaulting to {default.name}")

    return FeatureChoiceTranslation(success=True, choices=choices, issues=issues)
