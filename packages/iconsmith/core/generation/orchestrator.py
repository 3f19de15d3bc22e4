"""Concurrent icon-set generation with all-or-nothing aggregation.

Four generation calls are launched at once with identical inputs and
awaited to completion. A set is delivered only when every call succeeds;
otherwise all successes are discarded and a single aggregate failure is
raised listing each failed call.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Sequence
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from iconsmith.core.errors.exceptions import IconSetGenerationError
from iconsmith.core.generation.models import (
    ICON_SET_SIZE,
    GeneratedIcon,
    GenerateResponse,
    GenerationRequest,
)
from iconsmith.core.styles import StylePreset

logger = logging.getLogger(__name__)

__all__ = ["ICON_SET_SIZE", "IconGenerator", "IconSetResult", "generate_icon_set"]


class IconGenerator(Protocol):
    """Generates a single icon URL."""

    async def generate_icon(
        self,
        prompt: str,
        style: StylePreset,
        brand_colors: Sequence[str] | None = None,
    ) -> str: ...


class IconSetResult(BaseModel):
    """A complete icon set."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    icons: tuple[GeneratedIcon, ...] = Field(min_length=ICON_SET_SIZE, max_length=ICON_SET_SIZE)

    def to_response(self) -> GenerateResponse:
        return GenerateResponse(icons=self.icons)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _make_icon_id(index: int, generated_at: int) -> str:
    return f"icon-{generated_at}-{index}-{uuid.uuid4().hex[:8]}"


async def generate_icon_set(
    client: IconGenerator,
    request: GenerationRequest,
    style: StylePreset,
    *,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> IconSetResult:
    """Generate a full icon set for a validated request.

    All calls share the same prompt, style object and brand-color tuple.
    A failing call never cancels its siblings; every outcome is awaited
    before the result is assembled.

    Args:
        client: Icon generator (normally an IconGenerationClient).
        request: Validated generation request.
        style: Preset resolved from ``request.style``.
        logger: Logger for batch events (defaults to the module logger).

    Returns:
        IconSetResult with exactly ICON_SET_SIZE icons.

    Raises:
        IconSetGenerationError: If any call failed.
    """
    log = logger or logging.getLogger(__name__)
    brand_colors = request.brand_colors

    log.info(
        "Generating icon set: style=%s colors=%d calls=%d",
        style.id,
        len(brand_colors),
        ICON_SET_SIZE,
    )

    outcomes = await asyncio.gather(
        *[
            client.generate_icon(request.prompt, style, brand_colors)
            for _ in range(ICON_SET_SIZE)
        ],
        return_exceptions=True,
    )

    icons: list[GeneratedIcon] = []
    failures: list[str] = []
    errors: list[Exception] = []
    for index, outcome in enumerate(outcomes, start=1):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            failures.append(f"Icon {index}: {outcome}")
            errors.append(outcome)
            continue

        generated_at = _now_ms()
        icons.append(
            GeneratedIcon(
                id=_make_icon_id(index, generated_at),
                url=outcome,
                prompt=request.prompt,
                style=request.style,
                generated_at=generated_at,
            )
        )

    if failures:
        error = IconSetGenerationError(
            succeeded=len(icons),
            total=ICON_SET_SIZE,
            failures=failures,
            errors=errors,
        )
        log.error("%s", error)
        raise error

    log.info("Icon set generated: %d icons", len(icons))
    return IconSetResult(icons=tuple(icons))
