"""Built-in style presets for icon generation.

Each preset is a named bundle of short phrases that bias the model's
visual output. Presets are statically defined and read-only; the same
instance is shared by every concurrent generation call of a request.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StylePreset(BaseModel):
    """Named visual style for an icon set.

    Attributes:
        id: Stable identifier used in requests (e.g. 'pastels').
        name: Display name.
        description: One-line description for the style picker.
        prompt_modifiers: Ordered phrases appended to the generation prompt.
        thumbnail: Optional preview image URL.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str
    prompt_modifiers: tuple[str, ...] = Field(alias="promptModifiers", min_length=1)
    thumbnail: str | None = None


STYLE_PRESETS: tuple[StylePreset, ...] = (
    StylePreset(
        id="pastels",
        name="Pastels",
        description="Soft, muted colors with gentle gradients",
        prompt_modifiers=("pastel colors", "soft lighting", "gentle gradients", "minimalist"),
    ),
    StylePreset(
        id="bubbles",
        name="Bubbles",
        description="Glossy, bubble-like appearance with reflections",
        prompt_modifiers=("glossy", "bubble style", "reflective", "translucent", "3D"),
    ),
    StylePreset(
        id="flat",
        name="Flat",
        description="Clean, flat design with solid colors",
        prompt_modifiers=("flat design", "solid colors", "minimalist", "vector style"),
    ),
    StylePreset(
        id="gradient",
        name="Gradient",
        description="Vibrant gradients and color transitions",
        prompt_modifiers=("gradient", "vibrant colors", "color transitions", "modern"),
    ),
    StylePreset(
        id="outline",
        name="Outline",
        description="Line-based icons with minimal fill",
        prompt_modifiers=("outline style", "line art", "minimal", "stroke-based"),
    ),
)

_PRESETS_BY_ID: dict[str, StylePreset] = {preset.id: preset for preset in STYLE_PRESETS}

STYLE_IDS: tuple[str, ...] = tuple(_PRESETS_BY_ID)


def get_style_by_id(style_id: str) -> StylePreset | None:
    """Look up a preset by its identifier.

    Args:
        style_id: Preset identifier.

    Returns:
        The shared StylePreset instance, or None if unknown.
    """
    return _PRESETS_BY_ID.get(style_id)


def is_valid_style_id(style_id: str) -> bool:
    """Whether ``style_id`` names a built-in preset."""
    return style_id in _PRESETS_BY_ID


def list_styles() -> list[StylePreset]:
    """All presets in display order."""
    return list(STYLE_PRESETS)
