"""HTTP client for the character generator backend.

The backend hosts the rule engine (constraints, validation, derived stats)
and the live LLM call. All endpoints take and return camelCase JSON wrapped
in a ``{"success": ..., "data": ..., "error": ...}`` envelope.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from charforge.models.generation import GenerationConstraints
from charforge.models.harness import BackendCompute, BackendValidation
from charforge.models.preferences import AiPreferences
from charforge.observability.logging import get_logger

if TYPE_CHECKING:
    from charforge.models.generation import GenerationInput
    from charforge.models.translation import TranslationResult

log = get_logger(__name__)

DEFAULT_API_URL = "http://localhost:7860"
API_PREFIX = "/api/playercharactergenerator"


class BackendError(Exception):
    """Base exception for backend errors."""

    def __init__(self, endpoint: str, message: str) -> None:
        self.endpoint = endpoint
        self.message = message
        super().__init__(f"[{endpoint}] {message}")


class BackendConnectionError(BackendError):
    """Raised when the backend cannot be reached."""

    pass


@dataclass
class GeneratedPreferences:
    """Preferences produced by a live LLM call, with usage figures."""

    preferences: AiPreferences
    raw_response: str
    model: str = ""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


def input_payload(generation_input: GenerationInput) -> dict[str, Any]:
    return {
        "classId": generation_input.class_id,
        "raceId": generation_input.race_id,
        "level": generation_input.level,
        "backgroundId": generation_input.background_id,
        "concept": generation_input.concept,
    }


def choices_payload(translation: TranslationResult) -> dict[str, Any] | None:
    """Translated choices in backend form, or None if a required stage is missing."""
    stages = translation.translations
    scores = stages.ability_scores.scores if stages.ability_scores else None
    skills = stages.skills.selected if stages.skills else None
    package_id = stages.equipment.package_id if stages.equipment else None
    if scores is None or not skills or not package_id:
        return None
    return {
        "abilityScores": scores.model_dump(by_alias=True),
        "selectedSkills": skills,
        "equipmentPackageId": package_id,
        "featureChoices": stages.feature_choices.choices if stages.feature_choices else {},
        "selectedCantrips": stages.spells.cantrips if stages.spells else [],
        "selectedSpells": stages.spells.spells if stages.spells else [],
    }


class BackendClient:
    """Async client for the generator backend.

    Attributes:
        base_url: Backend root URL.
    """

    def __init__(self, base_url: str | None = None, timeout: float = 300.0) -> None:
        """Initialize the client.

        Args:
            base_url: Backend root URL. Defaults to the CHARFORGE_API_URL env
                var or http://localhost:7860.
            timeout: Request timeout in seconds.
        """
        self.base_url = (base_url or os.getenv("CHARFORGE_API_URL", DEFAULT_API_URL)).rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout)

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}{API_PREFIX}/{endpoint}"
        log.debug("backend_request", endpoint=endpoint)

        try:
            response = await self._client.post(url, json=payload)
        except httpx.TimeoutException as e:
            raise BackendConnectionError(endpoint, f"Network error: request timed out: {e}") from e
        except httpx.TransportError as e:
            raise BackendConnectionError(endpoint, f"Network error: {e}") from e

        if not response.is_success:
            raise BackendError(endpoint, f"API error: {response.status_code} - {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise BackendError(endpoint, f"Invalid JSON response: {e}") from e

        if not isinstance(data, dict):
            raise BackendError(endpoint, "Invalid JSON response: expected an object")
        return data

    async def fetch_constraints(self, generation_input: GenerationInput) -> GenerationConstraints:
        """Fetch the valid options for a generation input.

        Raises:
            BackendConnectionError: If the backend cannot be reached.
            BackendError: If the backend rejects the request.
        """
        data = await self._post("constraints", input_payload(generation_input))
        constraints = (data.get("data") or {}).get("constraints")
        if not data.get("success") or constraints is None:
            raise BackendError("constraints", data.get("error") or "Failed to fetch constraints")
        return GenerationConstraints.model_validate(constraints)

    async def generate_preferences(self, generation_input: GenerationInput) -> GeneratedPreferences:
        """Have the backend's LLM produce preferences for an input.

        Raises:
            BackendConnectionError: If the backend cannot be reached.
            BackendError: If generation fails.
        """
        data = await self._post("generate-preferences", {"input": input_payload(generation_input)})
        body = data.get("data")
        if not data.get("success") or not body:
            raise BackendError("generate-preferences", data.get("error") or "Unknown error")

        info = body.get("generationInfo") or {}
        return GeneratedPreferences(
            preferences=AiPreferences.model_validate(body["preferences"]),
            raw_response=body.get("rawResponse", ""),
            model=info.get("model", ""),
            prompt_tokens=int(info.get("promptTokens", 0)),
            completion_tokens=int(info.get("completionTokens", 0)),
            total_tokens=int(info.get("totalTokens", 0)),
        )

    async def validate(
        self,
        generation_input: GenerationInput,
        constraints: GenerationConstraints,
        translation: TranslationResult,
    ) -> BackendValidation:
        """Ask the rule engine to validate translated choices."""
        choices = choices_payload(translation)
        if choices is None:
            return BackendValidation(
                valid=False,
                issues=["Missing translated fields required for backend validation"],
            )
        data = await self._post(
            "validate",
            {
                "input": input_payload(generation_input),
                "choices": choices,
                "constraints": constraints.model_dump(by_alias=True, exclude_none=True),
            },
        )
        return BackendValidation(
            valid=bool(data.get("success")),
            issues=data.get("issues") or [],
            sections=data.get("sections"),
        )

    async def compute(
        self,
        generation_input: GenerationInput,
        constraints: GenerationConstraints,
        translation: TranslationResult,
    ) -> BackendCompute:
        """Ask the rule engine to compute derived stats for translated choices."""
        choices = choices_payload(translation)
        if choices is None:
            return BackendCompute(
                success=False,
                issues=["Missing translated fields required for backend compute"],
            )
        data = await self._post(
            "compute",
            {
                "input": input_payload(generation_input),
                "choices": choices,
                "constraints": constraints.model_dump(by_alias=True, exclude_none=True),
            },
        )
        return BackendCompute(
            success=bool(data.get("success")),
            issues=data.get("issues") or [],
            derived_stats=data.get("derivedStats"),
            sections=data.get("sections"),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> BackendClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()
