"""Tests for the generator backend client."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from charforge.harness.backend import (
    BackendClient,
    BackendConnectionError,
    BackendError,
    choices_payload,
    input_payload,
)
from charforge.harness.fixtures import get_mock_response
from charforge.models.translation import TranslationResult
from charforge.prompts.parser import extract_json_text
from charforge.translation.orchestrator import translate_preferences

if TYPE_CHECKING:
    from charforge.models.generation import GenerationConstraints
    from charforge.models.harness import EvalCase
    from charforge.models.preferences import AiPreferences


def _envelope(data: Any = None, *, success: bool = True, **extra: Any) -> httpx.Response:
    body = {"success": success, "data": data, **extra}
    return httpx.Response(200, json=body)


def test_input_payload_is_camel_case(fighter_case: EvalCase) -> None:
    assert input_payload(fighter_case.input) == {
        "classId": "fighter",
        "raceId": "human",
        "level": 1,
        "backgroundId": "soldier",
        "concept": fighter_case.input.concept,
    }


def test_choices_payload(
    fighter_preferences: AiPreferences, fighter_constraints: GenerationConstraints
) -> None:
    translation = translate_preferences(fighter_preferences, fighter_constraints, 1)

    choices = choices_payload(translation)

    assert choices is not None
    assert choices["abilityScores"]["strength"] == 16
    assert choices["equipmentPackageId"] == "A"
    assert choices["featureChoices"] == {"fighting-style": "defense"}
    assert choices["selectedCantrips"] == []
    assert choices_payload(TranslationResult()) is None


def test_base_url_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHARFORGE_API_URL", "http://backend:9000/")
    assert BackendClient().base_url == "http://backend:9000"
    assert BackendClient("http://other:1").base_url == "http://other:1"


class TestBackendClient:
    @pytest.mark.asyncio()
    async def test_fetch_constraints(
        self, fighter_case: EvalCase, fighter_constraints: GenerationConstraints
    ) -> None:
        client = BackendClient("http://localhost:7860")
        wire = fighter_constraints.model_dump(by_alias=True)
        mock_post = AsyncMock(return_value=_envelope({"constraints": wire}))

        with patch.object(client._client, "post", mock_post):
            constraints = await client.fetch_constraints(fighter_case.input)

        assert constraints == fighter_constraints
        url = mock_post.call_args.args[0]
        assert url == "http://localhost:7860/api/playercharactergenerator/constraints"
        assert mock_post.call_args.kwargs["json"]["classId"] == "fighter"

    @pytest.mark.asyncio()
    async def test_fetch_constraints_failure(self, fighter_case: EvalCase) -> None:
        client = BackendClient("http://localhost:7860")
        response = _envelope(None, success=False, error="Unknown class")

        with (
            patch.object(client._client, "post", new_callable=AsyncMock, return_value=response),
            pytest.raises(BackendError, match=r"\[constraints\] Unknown class"),
        ):
            await client.fetch_constraints(fighter_case.input)

    @pytest.mark.asyncio()
    async def test_generate_preferences(self, fighter_case: EvalCase) -> None:
        client = BackendClient("http://localhost:7860")
        raw = get_mock_response("fighter")
        body = {
            "preferences": json.loads(extract_json_text(raw)),
            "rawResponse": raw,
            "generationInfo": {
                "model": "gpt-4o",
                "promptTokens": 1500,
                "completionTokens": 600,
                "totalTokens": 2100,
            },
        }
        mock_post = AsyncMock(return_value=_envelope(body))

        with patch.object(client._client, "post", mock_post):
            generated = await client.generate_preferences(fighter_case.input)

        assert generated.preferences.character.name == "Kira Stonefist"
        assert generated.model == "gpt-4o"
        assert generated.total_tokens == 2100
        assert mock_post.call_args.kwargs["json"]["input"]["raceId"] == "human"

    @pytest.mark.asyncio()
    async def test_generate_preferences_without_error_message(
        self, fighter_case: EvalCase
    ) -> None:
        client = BackendClient("http://localhost:7860")
        response = _envelope(None, success=False)

        with (
            patch.object(client._client, "post", new_callable=AsyncMock, return_value=response),
            pytest.raises(BackendError, match="Unknown error"),
        ):
            await client.generate_preferences(fighter_case.input)

    @pytest.mark.asyncio()
    async def test_http_error_status(self, fighter_case: EvalCase) -> None:
        client = BackendClient("http://localhost:7860")
        response = httpx.Response(503, text="Service Unavailable")

        with (
            patch.object(client._client, "post", new_callable=AsyncMock, return_value=response),
            pytest.raises(BackendError, match="API error: 503 - Service Unavailable"),
        ):
            await client.fetch_constraints(fighter_case.input)

    @pytest.mark.asyncio()
    async def test_invalid_json(self, fighter_case: EvalCase) -> None:
        client = BackendClient("http://localhost:7860")
        response = httpx.Response(200, text="<html>oops</html>")

        with (
            patch.object(client._client, "post", new_callable=AsyncMock, return_value=response),
            pytest.raises(BackendError, match="Invalid JSON response"),
        ):
            await client.fetch_constraints(fighter_case.input)

    @pytest.mark.asyncio()
    async def test_connection_error(self, fighter_case: EvalCase) -> None:
        client = BackendClient("http://localhost:7860")
        error = httpx.ConnectError("Connection refused")

        with (
            patch.object(client._client, "post", new_callable=AsyncMock, side_effect=error),
            pytest.raises(BackendConnectionError, match="Network error"),
        ):
            await client.fetch_constraints(fighter_case.input)

    @pytest.mark.asyncio()
    async def test_timeout(self, fighter_case: EvalCase) -> None:
        client = BackendClient("http://localhost:7860")
        error = httpx.ReadTimeout("timed out")

        with (
            patch.object(client._client, "post", new_callable=AsyncMock, side_effect=error),
            pytest.raises(BackendConnectionError, match="request timed out"),
        ):
            await client.fetch_constraints(fighter_case.input)

    @pytest.mark.asyncio()
    async def test_validate(
        self,
        fighter_case: EvalCase,
        fighter_preferences: AiPreferences,
        fighter_constraints: GenerationConstraints,
    ) -> None:
        client = BackendClient("http://localhost:7860")
        translation = translate_preferences(fighter_preferences, fighter_constraints, 1)
        response = httpx.Response(
            200, json={"success": False, "issues": ["Armor not proficient"], "sections": {}}
        )
        mock_post = AsyncMock(return_value=response)

        with patch.object(client._client, "post", mock_post):
            result = await client.validate(fighter_case.input, fighter_constraints, translation)

        assert not result.valid
        assert result.issues == ["Armor not proficient"]
        payload = mock_post.call_args.kwargs["json"]
        assert payload["choices"]["equipmentPackageId"] == "A"
        assert payload["constraints"]["class"]["id"] == "fighter"

    @pytest.mark.asyncio()
    async def test_compute(
        self,
        fighter_case: EvalCase,
        fighter_preferences: AiPreferences,
        fighter_constraints: GenerationConstraints,
    ) -> None:
        client = BackendClient("http://localhost:7860")
        translation = translate_preferences(fighter_preferences, fighter_constraints, 1)
        response = httpx.Response(
            200, json={"success": True, "derivedStats": {"armorClass": 19, "hitPoints": 12}}
        )

        with patch.object(client._client, "post", new_callable=AsyncMock, return_value=response):
            result = await client.compute(fighter_case.input, fighter_constraints, translation)

        assert result.success
        assert result.derived_stats == {"armorClass": 19, "hitPoints": 12}

    @pytest.mark.asyncio()
    async def test_missing_fields_skip_the_request(
        self, fighter_case: EvalCase, fighter_constraints: GenerationConstraints
    ) -> None:
        client = BackendClient("http://localhost:7860")
        mock_post = AsyncMock()

        with patch.object(client._client, "post", mock_post):
            validation = await client.validate(
                fighter_case.input, fighter_constraints, TranslationResult()
            )
            compute = await client.compute(
                fighter_case.input, fighter_constraints, TranslationResult()
            )

        mock_post.assert_not_called()
        assert validation.issues == ["Missing translated fields required for backend validation"]
        assert compute.issues == ["Missing translated fields required for backend compute"]

    @pytest.mark.asyncio()
    async def test_context_manager_closes(self) -> None:
        async with BackendClient("http://localhost:7860") as client:
            pass
        assert client._client.is_closed
