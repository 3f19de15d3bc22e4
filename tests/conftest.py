"""Shared pytest fixtures for iconsmith tests."""

from __future__ import annotations

from collections.abc import Callable
from io import BytesIO

from PIL import Image
import pytest

from iconsmith.core.styles import StylePreset, get_style_by_id

# ============================================================================
# Image Fixtures
# ============================================================================


def make_png(width: int = 512, height: int = 512) -> bytes:
    """Encode a solid-color RGB PNG of the given size."""
    img = Image.new("RGB", (width, height), (30, 144, 255))
    buf = BytesIO()
    img.save(buf, "PNG")
    return buf.getvalue()


def make_jpeg(width: int = 64, height: int = 64) -> bytes:
    """Encode a solid-color JPEG of the given size."""
    img = Image.new("RGB", (width, height), (200, 50, 50))
    buf = BytesIO()
    img.save(buf, "JPEG")
    return buf.getvalue()


@pytest.fixture
def png_factory() -> Callable[..., bytes]:
    """Factory producing real PNG bytes."""
    return make_png


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_jpeg()


# ============================================================================
# Timing Fixtures
# ============================================================================


class RecordingSleeper:
    """Async sleeper that records requested delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleeper() -> RecordingSleeper:
    return RecordingSleeper()


# ============================================================================
# Style Fixtures
# ============================================================================


@pytest.fixture
def pastels() -> StylePreset:
    style = get_style_by_id("pastels")
    assert style is not None
    return style


@pytest.fixture
def flat() -> StylePreset:
    style = get_style_by_id("flat")
    assert style is not None
    return style
