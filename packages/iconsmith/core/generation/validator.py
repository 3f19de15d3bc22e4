"""Binary checks on generated images.

Only the PNG signature and the IHDR chunk are inspected; the image is
never decoded. Content-Type headers are advisory: a mismatch is logged
but the bytes decide.

PNG layout used here:
    0..7    signature 89 50 4E 47 0D 0A 1A 0A
    8..11   IHDR chunk length
    12..15  chunk type "IHDR"
    16..19  width (big-endian uint32)
    20..23  height (big-endian uint32)
    24..28  bit depth, color type, compression, filter, interlace
    29..32  CRC
"""

from __future__ import annotations

import logging
import struct
from types import TracebackType

import httpx

from iconsmith.core.errors.exceptions import (
    ExternalApiError,
    ImageValidationError,
    network_error_from_httpx,
)
from iconsmith.core.generation.retry import parse_retry_after_seconds

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
IHDR_CHUNK_TYPE = b"IHDR"
# Signature + IHDR length/type + 13 data bytes + CRC
MIN_PNG_HEADER_BYTES = 33

DEFAULT_EXPECTED_SIZE = 512


def has_png_signature(data: bytes) -> bool:
    """Whether ``data`` starts with the PNG signature."""
    return data[: len(PNG_SIGNATURE)] == PNG_SIGNATURE


def parse_png_dimensions(data: bytes) -> tuple[int, int] | None:
    """Read (width, height) from a PNG's IHDR chunk.

    Args:
        data: Image bytes (at least MIN_PNG_HEADER_BYTES long).

    Returns:
        (width, height), or None if the signature or IHDR chunk is missing.
    """
    if len(data) < MIN_PNG_HEADER_BYTES or not has_png_signature(data):
        return None
    if data[12:16] != IHDR_CHUNK_TYPE:
        return None
    width, height = struct.unpack(">II", data[16:24])
    return width, height


class ImageValidator:
    """Downloads an image URL and checks its PNG format and size.

    Usable as an async context manager; a client passed in by the caller
    is never closed here.

    Args:
        client: Shared httpx.AsyncClient (optional).
        transport: Transport for an internally created client (tests).
        timeout_s: Request timeout for an internally created client.
        logger: Logger for validation events (defaults to the module logger).
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout_s: float = 30.0,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            transport=transport,
            timeout=timeout_s,
            follow_redirects=True,
        )
        self._logger = logger or logging.getLogger(__name__)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> ImageValidator:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _download(self, url: str) -> httpx.Response:
        try:
            response = await self._client.get(url)
        except httpx.TransportError as e:
            raise network_error_from_httpx(e, prefix="Failed to fetch image") from e

        if not response.is_success:
            raise ExternalApiError(
                f"Failed to download image: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                retry_after=parse_retry_after_seconds(response.headers.get("retry-after")),
            )
        return response

    async def validate_format(self, url: str) -> bool:
        """Check that the resource at ``url`` is a PNG.

        Args:
            url: Image URL.

        Returns:
            True iff the body starts with the PNG signature.

        Raises:
            ExternalApiError: On a non-2xx response.
            NetworkError: If the image cannot be fetched.
        """
        response = await self._download(url)

        content_type = response.headers.get("content-type", "")
        if "image/png" not in content_type.lower():
            self._logger.warning(
                "Content-Type is not image/png (got %r) for %s", content_type or None, url
            )

        is_png = has_png_signature(response.content)
        if not is_png:
            self._logger.warning("Image at %s is not a PNG (signature mismatch)", url)
        return is_png

    async def validate_dimensions(
        self,
        url: str,
        expected_width: int = DEFAULT_EXPECTED_SIZE,
        expected_height: int = DEFAULT_EXPECTED_SIZE,
    ) -> bool:
        """Check that the PNG at ``url`` has the expected dimensions.

        Args:
            url: Image URL.
            expected_width: Expected width in pixels.
            expected_height: Expected height in pixels.

        Returns:
            True iff the IHDR width and height match exactly. False for a
            non-PNG body or a missing IHDR chunk.

        Raises:
            ImageValidationError: If fewer than MIN_PNG_HEADER_BYTES bytes
                were downloaded.
            ExternalApiError: On a non-2xx response.
            NetworkError: If the image cannot be fetched.
        """
        data = (await self._download(url)).content

        if len(data) < MIN_PNG_HEADER_BYTES:
            raise ImageValidationError(
                f"Image data too short to validate: {len(data)} bytes "
                f"(need at least {MIN_PNG_HEADER_BYTES})"
            )

        dimensions = parse_png_dimensions(data)
        if dimensions is None:
            self._logger.warning("Image at %s has no valid PNG header", url)
            return False

        width, height = dimensions
        if (width, height) != (expected_width, expected_height):
            self._logger.warning(
                "Image dimensions %dx%d do not match expected %dx%d",
                width,
                height,
                expected_width,
                expected_height,
            )
            return False
        return True
