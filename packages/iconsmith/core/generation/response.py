"""Image URL extraction from heterogeneous model outputs.

Depending on SDK version and model, a run returns a list of URL strings,
a list of file objects exposing ``url``, a bare string, or a single file
object. ``url`` may be a plain value or a zero-argument callable.

Decoders are tried in a fixed order; each returns a URL or None.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from iconsmith.core.errors.exceptions import UrlExtractionError
from iconsmith.core.errors.fields import get_field

UrlDecoder = Callable[[Any], str | None]


def _first_item(output: Any) -> Any:
    if isinstance(output, Sequence) and not isinstance(output, (str, bytes, bytearray)):
        return output[0] if output else None
    return None


def _resolve_url_field(value: Any) -> str | None:
    """Read ``url`` from an object or mapping, invoking it when callable."""
    if isinstance(value, (str, bytes, bytearray)) or value is None:
        return None
    url = get_field(value, "url")
    if url is None:
        return None
    if callable(url):
        url = url()
    return str(url)


def _from_first_string(output: Any) -> str | None:
    first = _first_item(output)
    return first if isinstance(first, str) else None


def _from_first_object(output: Any) -> str | None:
    return _resolve_url_field(_first_item(output))


def _from_string(output: Any) -> str | None:
    return output if isinstance(output, str) else None


def _from_object(output: Any) -> str | None:
    return _resolve_url_field(output)


URL_DECODERS: tuple[UrlDecoder, ...] = (
    _from_first_string,
    _from_first_object,
    _from_string,
    _from_object,
)


def extract_image_url(output: Any) -> str:
    """Extract the image URL from a raw model output.

    Args:
        output: Whatever the model runner returned

    Returns:
        Image URL

    Raises:
        UrlExtractionError: If no decoder recognises the output shape
    """
    # Iterators from streaming SDK versions are read once
    if hasattr(output, "__next__"):
        output = list(output)

    for decoder in URL_DECODERS:
        url = decoder(output)
        if url is not None:
            return url

    raise UrlExtractionError("Unable to extract image URL from model output")
