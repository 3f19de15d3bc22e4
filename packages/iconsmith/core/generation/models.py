"""Request and response models for icon-set generation.

Defines:
- GenerationRequest: validated inbound request (immutable)
- GeneratedIcon: one successfully generated icon
- GenerateResponse: success body with a complete icon set
- ErrorResponse: classified failure body
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from iconsmith.core.errors.exceptions import RequestValidationError
from iconsmith.core.styles import STYLE_IDS, is_valid_style_id

ICON_SET_SIZE = 4

HEX_COLOR_PATTERN = re.compile(r"^#([0-9A-F]{3}){1,2}$", re.IGNORECASE)

_VALUE_ERROR_PREFIX = "Value error, "


class GenerationRequest(BaseModel):
    """Validated icon-set generation request.

    Attributes:
        prompt: User's icon theme; non-blank with at least one alphanumeric.
        style: Identifier of a built-in style preset.
        brand_colors: Ordered HEX color codes (#RGB or #RRGGBB).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    prompt: str = Field(default="", validate_default=True)
    style: str = Field(default="", validate_default=True)
    brand_colors: tuple[str, ...] = Field(default=(), alias="brandColors")

    @field_validator("prompt", mode="before")
    @classmethod
    def validate_prompt(cls, v: Any) -> str:
        """Prompt must be non-blank text containing a letter or digit."""
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Prompt is required and cannot be empty")
        if not any(ch.isalnum() for ch in v):
            raise ValueError("Prompt must contain at least one alphanumeric character")
        return v

    @field_validator("style", mode="before")
    @classmethod
    def validate_style(cls, v: Any) -> str:
        """Style must name a built-in preset."""
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Style is required")
        if not is_valid_style_id(v):
            raise ValueError(f"Invalid style '{v}'. Must be one of: {', '.join(STYLE_IDS)}")
        return v

    @field_validator("brand_colors", mode="before")
    @classmethod
    def validate_brand_colors(cls, v: Any) -> tuple[str, ...]:
        """Each brand color must be a #RGB or #RRGGBB code."""
        if v is None:
            return ()
        if isinstance(v, str) or not isinstance(v, (list, tuple)):
            raise ValueError("Brand colors must be a list of HEX color codes")
        for color in v:
            if not isinstance(color, str) or not HEX_COLOR_PATTERN.match(color):
                raise ValueError(
                    f"Invalid brand color '{color}'. Must be a HEX color code like #RGB or #RRGGBB"
                )
        return tuple(v)

    @classmethod
    def from_payload(cls, payload: Any) -> GenerationRequest:
        """Validate a parsed request body.

        Args:
            payload: Parsed JSON body (expected to be a mapping).

        Returns:
            Validated request.

        Raises:
            RequestValidationError: With the first validation failure.
        """
        if not isinstance(payload, Mapping):
            raise RequestValidationError("Request body is required")

        try:
            return cls.model_validate(dict(payload))
        except ValidationError as e:
            first = e.errors()[0]
            message = str(first.get("msg", "Invalid request"))
            message = message.removeprefix(_VALUE_ERROR_PREFIX)
            loc = first.get("loc") or ()
            field = str(loc[0]) if loc else None
            raise RequestValidationError(message, field=field) from e


class GeneratedIcon(BaseModel):
    """One generated icon.

    Attributes:
        id: Unique icon identifier.
        url: Image URL returned by the model.
        prompt: The user's original prompt (not the constructed one).
        style: Style identifier.
        generated_at: Creation time in epoch milliseconds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    id: str = Field(min_length=1)
    url: str = Field(min_length=1)
    prompt: str
    style: str
    generated_at: int = Field(alias="generatedAt", ge=0)


class GenerateResponse(BaseModel):
    """Success body: a complete icon set."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    success: Literal[True] = True
    icons: tuple[GeneratedIcon, ...] = Field(
        min_length=ICON_SET_SIZE, max_length=ICON_SET_SIZE
    )


class ErrorResponse(BaseModel):
    """Failure body built from a classified error."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    success: Literal[False] = False
    error: str
    code: str
    category: str
    recoverable: bool
    retry_after: float | None = Field(default=None, alias="retryAfter")
