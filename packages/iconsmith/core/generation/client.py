"""Single-icon generation against a hosted text-to-image model.

The model call itself is behind the ``ModelRunner`` protocol so the
client can be exercised without network access. ``ReplicateRunner``
is the production runner (FLUX schnell on Replicate); it translates SDK
and transport failures into tagged error kinds at the point of origin.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

import httpx
import replicate
from replicate.exceptions import ReplicateError

from iconsmith.core.errors.exceptions import (
    ConfigurationError,
    ExternalApiError,
    IconGenerationError,
    network_error_from_httpx,
)
from iconsmith.core.generation.prompt_builder import build_icon_prompt
from iconsmith.core.generation.response import extract_image_url
from iconsmith.core.generation.retry import (
    RetryPolicy,
    Sleeper,
    execute_with_retry,
    parse_retry_after_seconds,
)
from iconsmith.core.styles import StylePreset

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "black-forest-labs/flux-schnell"

# One square PNG at top quality; 0.25 megapixels yields 512x512
FIXED_GENERATION_PARAMS: Mapping[str, Any] = {
    "num_outputs": 1,
    "aspect_ratio": "1:1",
    "output_format": "png",
    "output_quality": 100,
    "megapixels": "0.25",
}


class ModelRunner(Protocol):
    """Anything that can run the image model once."""

    async def run(self, prompt: str, params: Mapping[str, Any]) -> Any:
        """Run the model and return its raw output."""
        ...


class ReplicateRunner:
    """Runs an image model on Replicate.

    Args:
        api_token: Replicate API token.
        model: Model identifier ("owner/name" or "owner/name:version").
        client: Pre-built replicate.Client (tests); overrides ``api_token``.

    Raises:
        ConfigurationError: If neither a token nor a client is supplied.
    """

    def __init__(
        self,
        api_token: str | None = None,
        *,
        model: str = DEFAULT_MODEL,
        client: replicate.Client | None = None,
    ) -> None:
        if client is None:
            if not api_token:
                raise ConfigurationError(
                    "Replicate API token is required. Set REPLICATE_API_TOKEN."
                )
            client = replicate.Client(api_token=api_token)
        self._client = client
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def run(self, prompt: str, params: Mapping[str, Any]) -> Any:
        try:
            return await self._client.async_run(self._model, input={"prompt": prompt, **params})
        except ReplicateError as e:
            status = getattr(e, "status", None)
            if isinstance(status, int):
                raise ExternalApiError(
                    getattr(e, "detail", None) or str(e),
                    status_code=status,
                    code=getattr(e, "type", None),
                    cause=e,
                ) from e
            raise
        except httpx.HTTPStatusError as e:
            raise ExternalApiError(
                f"Replicate request failed: {e}",
                status_code=e.response.status_code,
                retry_after=parse_retry_after_seconds(e.response.headers.get("retry-after")),
                cause=e,
            ) from e
        except httpx.TransportError as e:
            raise network_error_from_httpx(e, prefix="Replicate request failed") from e


class IconGenerationClient:
    """Generates one icon per call, retrying transient failures.

    The client holds no per-request state beyond its immutable retry
    policy, so one instance can serve concurrent calls.

    Args:
        runner: Model runner.
        retry_policy: Retry policy (defaults to 3 attempts, 1000ms base delay).
        sleep: Async sleeper used between retries.
        logger: Logger for generation events (defaults to the module logger).
    """

    def __init__(
        self,
        runner: ModelRunner,
        *,
        retry_policy: RetryPolicy | None = None,
        sleep: Sleeper = asyncio.sleep,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self._runner = runner
        self._retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._logger = logger or logging.getLogger(__name__)

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    async def generate_icon(
        self,
        prompt: str,
        style: StylePreset,
        brand_colors: Sequence[str] | None = None,
    ) -> str:
        """Generate a single icon and return its URL.

        The full prompt is built once and reused across retries. The retry
        loop sees each attempt's tagged error unwrapped; only the final
        failure is wrapped in IconGenerationError.

        Args:
            prompt: User's icon description.
            style: Style preset.
            brand_colors: Optional HEX color codes.

        Returns:
            Image URL.

        Raises:
            IconGenerationError: If the call fails (after retries for
                transient failures). Carries the cause's status and code.
        """
        full_prompt = build_icon_prompt(prompt, style, brand_colors)
        self._logger.debug("Generating icon with prompt: %s", full_prompt)

        async def attempt() -> str:
            output = await self._runner.run(full_prompt, FIXED_GENERATION_PARAMS)
            return extract_image_url(output)

        try:
            url = await execute_with_retry(
                attempt,
                self._retry_policy,
                sleep=self._sleep,
                logger=self._logger,
            )
        except Exception as e:
            raise IconGenerationError(f"Failed to generate icon: {e}", cause=e) from e

        self._logger.info("Icon generated: %s", url)
        return url


def create_generation_client(
    api_token: str | None,
    *,
    model: str = DEFAULT_MODEL,
    retry_policy: RetryPolicy | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> IconGenerationClient:
    """Build a client backed by Replicate.

    Raises:
        ConfigurationError: If ``api_token`` is missing.
    """
    runner = ReplicateRunner(api_token, model=model)
    return IconGenerationClient(runner, retry_policy=retry_policy, logger=logger)
