"""Tests for the request-boundary service."""

from __future__ import annotations

import json
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from iconsmith.core.errors import ExternalApiError, IconGenerationError
from iconsmith.core.generation.client import IconGenerationClient
from iconsmith.core.generation.retry import RetryPolicy
from iconsmith.core.service import IconSetService


def _make_client(side_effect: list | None = None) -> MagicMock:
    client = MagicMock()
    client.generate_icon = AsyncMock(
        side_effect=side_effect or [f"https://img.test/{i}.png" for i in range(4)]
    )
    return client


class TestListStyles:
    def test_serialized_by_alias(self) -> None:
        body = IconSetService(_make_client()).list_styles()
        assert [s["id"] for s in body["styles"]] == [
            "pastels",
            "bubbles",
            "flat",
            "gradient",
            "outline",
        ]
        assert "promptModifiers" in body["styles"][0]
        json.dumps(body)


class TestGenerate:
    @pytest.mark.asyncio
    async def test_success(self) -> None:
        client = _make_client()
        service = IconSetService(client)

        response = await service.generate(
            {"prompt": "weather", "style": "gradient", "brandColors": ["#FF0000"]}
        )

        assert response.status_code == 200
        assert response.ok
        body = response.body
        assert body["success"] is True
        assert len(body["icons"]) == 4
        for icon in body["icons"]:
            assert set(icon) == {"id", "url", "prompt", "style", "generatedAt"}
            assert icon["prompt"] == "weather"
            assert icon["style"] == "gradient"
        json.dumps(body)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("payload", "message"),
        [
            (None, "Request body is required"),
            ({"style": "flat"}, "Prompt is required and cannot be empty"),
            ({"prompt": "x"}, "Style is required"),
            ({"prompt": "x", "style": "neon"}, "Invalid style"),
            ({"prompt": "x", "style": "flat", "brandColors": ["red"]}, "Invalid brand color"),
        ],
    )
    async def test_validation_fails_fast(self, payload: object, message: str) -> None:
        client = _make_client()
        response = await IconSetService(client).generate(payload)

        assert response.status_code == 400
        assert response.body["success"] is False
        assert response.body["code"] == "VALIDATION_ERROR"
        assert response.body["category"] == "validation"
        assert response.body["error"].startswith(message)
        client.generate_icon.assert_not_called()

    @pytest.mark.asyncio
    async def test_partial_failure_is_single_error(self) -> None:
        client = _make_client(
            ["u1", "u2", IconGenerationError("Failed to generate icon: boom"), "u4"]
        )
        response = await IconSetService(client).generate({"prompt": "x", "style": "flat"})

        assert response.status_code == 502
        body = response.body
        assert body["success"] is False
        assert body["code"] == "GENERATION_ERROR"
        assert body["recoverable"] is True
        assert "Generated 3 out of 4 icons" in body["error"]
        assert "icons" not in body
        assert "retryAfter" not in body

    @pytest.mark.asyncio
    async def test_unexpected_error_is_classified_and_logged(
        self, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def explode(*args: object, **kwargs: object) -> None:
            raise RuntimeError("kaboom")

        monkeypatch.setattr("iconsmith.core.service.generate_icon_set", explode)
        service = IconSetService(_make_client())

        with caplog.at_level(logging.ERROR, logger="iconsmith.core.service"):
            response = await service.generate({"prompt": "x", "style": "flat"})

        assert response.status_code == 500
        assert response.body["code"] == "INTERNAL_ERROR"
        assert response.body["error"] == "kaboom"
        assert any("Icon set generation failed" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_with_real_client_and_retries(self, sleeper) -> None:
        runner = MagicMock()
        runner.run = AsyncMock(
            side_effect=[
                ExternalApiError("busy", status_code=503),
                *([["https://img.test/a.png"]] * 4),
            ]
        )
        client = IconGenerationClient(
            runner, retry_policy=RetryPolicy(initial_delay_ms=10), sleep=sleeper
        )

        response = await IconSetService(client).generate({"prompt": "x", "style": "outline"})

        assert response.status_code == 200
        assert runner.run.await_count == 5
        assert sleeper.delays == [0.01]

    @pytest.mark.asyncio
    async def test_auth_failures_are_not_recoverable(self, sleeper) -> None:
        runner = MagicMock()
        runner.run = AsyncMock(side_effect=ExternalApiError("Unauthenticated", status_code=401))
        client = IconGenerationClient(runner, sleep=sleeper)

        response = await IconSetService(client).generate({"prompt": "x", "style": "flat"})

        assert response.status_code == 401
        assert response.body["code"] == "GENERATION_ERROR"
        assert response.body["category"] == "authentication"
        assert response.body["recoverable"] is False
        assert runner.run.await_count == 4
        assert sleeper.delays == []
