"""Unit tests for the iconsmith command-line interface."""

from __future__ import annotations

from collections.abc import Callable, Iterator
import logging
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from iconsmith.cli.main import build_arg_parser, main
from iconsmith.core.config import API_TOKEN_ENV_VAR
from iconsmith.core.generation.validator import ImageValidator


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.delenv(API_TOKEN_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return int(exc_info.value.code or 0)


def _fake_client(side_effect: list) -> MagicMock:
    client = MagicMock()
    client.generate_icon = AsyncMock(side_effect=side_effect)
    return client


class TestArgParser:
    def test_generate_collects_colors(self) -> None:
        args = build_arg_parser().parse_args(
            ["generate", "coffee", "--style", "flat", "--color", "#F00", "--color", "#00F"]
        )
        assert args.colors == ["#F00", "#00F"]
        assert args.json is False

    def test_missing_command_is_usage_error(self) -> None:
        assert _run([]) == 2

    def test_generate_requires_style(self) -> None:
        assert _run(["generate", "coffee"]) == 2


class TestStyles:
    def test_lists_presets(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["styles"]) == 0
        out = capsys.readouterr().out
        for style_id in ("pastels", "bubbles", "flat", "gradient", "outline"):
            assert style_id in out


class TestGenerate:
    def test_success(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        client = _fake_client([f"https://x.test/{i}.png" for i in range(4)])
        factory = MagicMock(return_value=client)
        monkeypatch.setattr("iconsmith.cli.main.create_generation_client", factory)

        code = _run(["generate", "coffee cup", "--style", "flat", "--color", "#FF0000"])

        assert code == 0
        assert "Generated 4 icons" in capsys.readouterr().out
        _, _, colors = client.generate_icon.call_args.args
        assert colors == ("#FF0000",)

    def test_uses_config_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_path = tmp_path / "cfg.yaml"
        config_path.write_text(
            "retry:\n  max_retries: 5\nprovider:\n  api_token: r8_cfg\n  model: owner/model\n"
        )
        factory = MagicMock(return_value=_fake_client(["u"] * 4))
        monkeypatch.setattr("iconsmith.cli.main.create_generation_client", factory)

        assert _run(["--config", str(config_path), "generate", "x", "--style", "flat"]) == 0

        args, kwargs = factory.call_args
        assert args == ("r8_cfg",)
        assert kwargs["model"] == "owner/model"
        assert kwargs["retry_policy"].max_retries == 5

    def test_failure_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        client = _fake_client(["u1", RuntimeError("boom"), "u3", "u4"])
        monkeypatch.setattr(
            "iconsmith.cli.main.create_generation_client", MagicMock(return_value=client)
        )

        code = _run(["generate", "x", "--style", "flat", "--json"])

        assert code == 1
        out = capsys.readouterr().out
        assert '"success": false' in out
        assert "GENERATION_ERROR" in out

    def test_validation_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        client = _fake_client([])
        monkeypatch.setattr(
            "iconsmith.cli.main.create_generation_client", MagicMock(return_value=client)
        )

        assert _run(["generate", "x", "--style", "neon"]) == 1
        assert "VALIDATION_ERROR" in capsys.readouterr().out
        client.generate_icon.assert_not_called()

    def test_missing_token(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["generate", "x", "--style", "flat"]) == 1
        out = capsys.readouterr().out
        assert "AUTHENTICATION_ERROR" in out
        assert API_TOKEN_ENV_VAR in out

    def test_bad_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "cfg.toml"
        path.write_text("x = 1")
        assert _run(["--config", str(path), "generate", "x", "--style", "flat"]) == 1
        assert "Could not load config" in capsys.readouterr().out


class TestValidate:
    def _patch_validator(
        self, monkeypatch: pytest.MonkeyPatch, handler: Callable[[httpx.Request], httpx.Response]
    ) -> None:
        def make(**kwargs: Any) -> ImageValidator:
            return ImageValidator(transport=httpx.MockTransport(handler), **kwargs)

        monkeypatch.setattr("iconsmith.cli.main.ImageValidator", make)

    def test_valid_png(
        self,
        monkeypatch: pytest.MonkeyPatch,
        png_factory: Callable[..., bytes],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        body = png_factory(512, 512)
        self._patch_validator(
            monkeypatch,
            lambda request: httpx.Response(
                200, content=body, headers={"content-type": "image/png"}
            ),
        )

        assert _run(["validate", "https://x.test/a.png"]) == 0
        out = capsys.readouterr().out
        assert "PNG format: ✅" in out
        assert "Dimensions 512x512: ✅" in out

    def test_wrong_size(
        self, monkeypatch: pytest.MonkeyPatch, png_factory: Callable[..., bytes]
    ) -> None:
        body = png_factory(256, 256)
        self._patch_validator(monkeypatch, lambda request: httpx.Response(200, content=body))
        assert _run(["validate", "https://x.test/a.png"]) == 1

    def test_custom_size(
        self, monkeypatch: pytest.MonkeyPatch, png_factory: Callable[..., bytes]
    ) -> None:
        body = png_factory(256, 128)
        self._patch_validator(monkeypatch, lambda request: httpx.Response(200, content=body))
        assert _run(["validate", "https://x.test/a.png", "--width", "256", "--height", "128"]) == 0

    def test_download_failure(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        self._patch_validator(monkeypatch, lambda request: httpx.Response(404))
        assert _run(["validate", "https://x.test/missing.png"]) == 1
        assert "Failed to download image" in capsys.readouterr().out
