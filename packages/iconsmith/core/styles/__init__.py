"""Style presets."""

from iconsmith.core.styles.presets import (
    STYLE_IDS,
    STYLE_PRESETS,
    StylePreset,
    get_style_by_id,
    is_valid_style_id,
    list_styles,
)

__all__ = [
    "STYLE_IDS",
    "STYLE_PRESETS",
    "StylePreset",
    "get_style_by_id",
    "is_valid_style_id",
    "list_styles",
]
