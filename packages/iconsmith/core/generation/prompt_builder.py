"""Deterministic prompt construction for icon generation.

Template:
    "A simple, clean icon of {user_prompt}{color_clause}, {modifiers},
     512x512 pixels, icon design, centered, white background"

When brand colors are supplied they are named (never passed as raw HEX)
and style modifiers that would contradict an explicit palette
("pastel colors", "vibrant colors", ...) are dropped.
"""

from __future__ import annotations

from collections.abc import Sequence

from iconsmith.core.generation.colors import hex_colors_to_names
from iconsmith.core.styles import StylePreset

PROMPT_PREFIX = "A simple, clean icon of "
PROMPT_SUFFIX = "512x512 pixels, icon design, centered, white background"

# Modifiers containing any of these conflict with an explicit palette
COLOR_CONFLICT_TOKENS = ("color", "vibrant", "muted", "pastel")


def filter_style_modifiers(modifiers: Sequence[str]) -> list[str]:
    """Drop modifiers that would contradict explicit brand colors.

    Args:
        modifiers: Style prompt modifiers, in order.

    Returns:
        Modifiers whose lowercase form contains none of the conflict tokens.
    """
    return [
        modifier
        for modifier in modifiers
        if not any(token in modifier.lower() for token in COLOR_CONFLICT_TOKENS)
    ]


def build_color_clause(color_names: Sequence[str]) -> str:
    """Render named colors as a clause that follows the subject.

    Examples:
        >>> build_color_clause(["red"])
        ' in red color'
        >>> build_color_clause(["red", "blue"])
        ' in red and blue colors'
        >>> build_color_clause(["red", "blue", "green"])
        ' in red, blue, and green colors'
    """
    if not color_names:
        return ""
    if len(color_names) == 1:
        return f" in {color_names[0]} color"
    if len(color_names) == 2:
        return f" in {color_names[0]} and {color_names[1]} colors"
    return f" in {', '.join(color_names[:-1])}, and {color_names[-1]} colors"


def build_icon_prompt(
    user_prompt: str,
    style: StylePreset,
    brand_colors: Sequence[str] | None = None,
) -> str:
    """Build the full prompt sent to the image model.

    Args:
        user_prompt: User's description of the icon theme (trimmed here).
        style: Style preset supplying prompt modifiers.
        brand_colors: Optional HEX color codes.

    Returns:
        Prompt string containing the user prompt, every retained modifier
        and every color name verbatim.
    """
    subject = user_prompt.strip()

    if brand_colors:
        color_clause = build_color_clause(hex_colors_to_names(brand_colors))
        modifiers = filter_style_modifiers(style.prompt_modifiers)
    else:
        color_clause = ""
        modifiers = list(style.prompt_modifiers)

    parts = [f"{PROMPT_PREFIX}{subject}{color_clause}"]
    if modifiers:
        parts.append(", ".join(modifiers))
    parts.append(PROMPT_SUFFIX)
    return ", ".join(parts)
