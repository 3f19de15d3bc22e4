"""HEX color to natural-language color names.

Text-to-image models follow "muted blue" far better than "#4A6B8A", so
brand colors are translated into a name from a small reference palette
plus optional light/dark and bright/muted modifiers.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import NamedTuple

_HEX_BODY = re.compile(r"^(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Below this RGB distance the reference name is used without modifiers
EXACT_MATCH_DISTANCE = 50.0
LIGHT_LUMA = 128.0
DARK_LUMA = 64.0
SATURATED = 0.5


class RGB(NamedTuple):
    r: int
    g: int
    b: int


REFERENCE_COLORS: tuple[tuple[str, RGB], ...] = (
    ("red", RGB(255, 0, 0)),
    ("orange", RGB(255, 128, 0)),
    ("yellow", RGB(255, 255, 0)),
    ("green", RGB(0, 255, 0)),
    ("cyan", RGB(0, 255, 255)),
    ("blue", RGB(0, 0, 255)),
    ("purple", RGB(128, 0, 255)),
    ("magenta", RGB(255, 0, 255)),
    ("pink", RGB(255, 192, 203)),
    ("brown", RGB(139, 69, 19)),
    ("gray", RGB(128, 128, 128)),
    ("black", RGB(0, 0, 0)),
    ("white", RGB(255, 255, 255)),
)


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert a HEX color code to RGB.

    Accepts 3- or 6-digit codes with or without a leading '#'.
    3-digit shorthand is expanded by doubling each nibble (#F57 -> #FF5577).

    Args:
        hex_color: HEX color code.

    Returns:
        RGB channels in 0..255.

    Raises:
        ValueError: If the code is not a valid HEX color.
    """
    body = hex_color.strip().removeprefix("#")
    if not _HEX_BODY.match(body):
        raise ValueError(f"Invalid HEX color code: {hex_color!r}")

    if len(body) == 3:
        body = "".join(ch * 2 for ch in body)

    return RGB(int(body[0:2], 16), int(body[2:4], 16), int(body[4:6], 16))


def _distance(a: RGB, b: RGB) -> float:
    return math.sqrt((a.r - b.r) ** 2 + (a.g - b.g) ** 2 + (a.b - b.b) ** 2)


def _luma(rgb: RGB) -> float:
    return 0.299 * rgb.r + 0.587 * rgb.g + 0.114 * rgb.b


def _saturation(rgb: RGB) -> float:
    high = max(rgb)
    low = min(rgb)
    return 0.0 if high == 0 else (high - low) / high


def closest_reference(rgb: RGB) -> tuple[str, float]:
    """Find the nearest reference color by Euclidean RGB distance.

    Ties keep the earlier palette entry.

    Returns:
        (reference name, distance)
    """
    best_name, best_rgb = REFERENCE_COLORS[0]
    best_distance = _distance(rgb, best_rgb)
    for name, ref in REFERENCE_COLORS[1:]:
        distance = _distance(rgb, ref)
        if distance < best_distance:
            best_name, best_distance = name, distance
    return best_name, best_distance


def hex_to_color_name(hex_color: str) -> str:
    """Convert a HEX color code to a natural-language color name.

    Examples:
        >>> hex_to_color_name("#FF0000")
        'red'
        >>> hex_to_color_name("#4040C0")
        'bright blue'

    Args:
        hex_color: HEX color code (3 or 6 digits, '#' optional).

    Returns:
        Modifiers (if any) followed by the reference color name.
    """
    rgb = hex_to_rgb(hex_color)
    base, distance = closest_reference(rgb)

    if distance < EXACT_MATCH_DISTANCE:
        return base

    modifiers: list[str] = []
    luma = _luma(rgb)
    if luma > LIGHT_LUMA and base != "white":
        modifiers.append("light")
    elif luma < DARK_LUMA and base != "black":
        modifiers.append("dark")

    saturation = _saturation(rgb)
    if saturation > SATURATED:
        if not modifiers:
            modifiers.append("bright")
    elif base not in ("gray", "brown"):
        modifiers.append("muted")

    return " ".join([*modifiers, base])


def hex_colors_to_names(hex_colors: Iterable[str]) -> list[str]:
    """Convert HEX color codes to names, preserving order."""
    return [hex_to_color_name(hex_color) for hex_color in hex_colors]
