"""Tests for icon prompt construction."""

from __future__ import annotations

import re

import pytest

from iconsmith.core.generation.prompt_builder import (
    build_color_clause,
    build_icon_prompt,
    filter_style_modifiers,
)
from iconsmith.core.styles import STYLE_PRESETS, StylePreset


class TestFilterStyleModifiers:
    def test_drops_color_conflicts(self) -> None:
        modifiers = ["gradient", "vibrant colors", "Muted tones", "PASTEL", "modern", "colorful"]
        assert filter_style_modifiers(modifiers) == ["gradient", "modern"]

    def test_keeps_unrelated(self) -> None:
        assert filter_style_modifiers(["glossy", "3D"]) == ["glossy", "3D"]


class TestBuildColorClause:
    def test_empty(self) -> None:
        assert build_color_clause([]) == ""

    def test_one(self) -> None:
        assert build_color_clause(["red"]) == " in red color"

    def test_two(self) -> None:
        assert build_color_clause(["red", "light blue"]) == " in red and light blue colors"

    def test_many_uses_serial_comma(self) -> None:
        assert build_color_clause(["red", "blue", "green", "black"]) == (
            " in red, blue, green, and black colors"
        )


class TestBuildIconPrompt:
    def test_without_colors_exact(self, flat: StylePreset) -> None:
        assert build_icon_prompt("coffee cup", flat) == (
            "A simple, clean icon of coffee cup, flat design, solid colors, minimalist, "
            "vector style, 512x512 pixels, icon design, centered, white background"
        )

    def test_with_color_exact(self, pastels: StylePreset) -> None:
        assert build_icon_prompt("coffee cup", pastels, ["#FF0000"]) == (
            "A simple, clean icon of coffee cup in red color, soft lighting, "
            "gentle gradients, minimalist, 512x512 pixels, icon design, centered, "
            "white background"
        )

    def test_trims_user_prompt(self, flat: StylePreset) -> None:
        prompt = build_icon_prompt("   kitchen tools \n", flat)
        assert prompt.startswith("A simple, clean icon of kitchen tools, ")

    def test_empty_color_list_filters_nothing(self, pastels: StylePreset) -> None:
        prompt = build_icon_prompt("leaf", pastels, [])
        assert "pastel colors" in prompt
        assert " color," not in prompt

    def test_color_clause_follows_prompt(self, flat: StylePreset) -> None:
        prompt = build_icon_prompt("rocket", flat, ["#0000FF", "#FF0000"])
        assert "icon of rocket in blue and red colors, flat design" in prompt
        # "solid colors" conflicts with an explicit palette
        assert "solid colors" not in prompt

    @pytest.mark.parametrize("style", STYLE_PRESETS, ids=lambda s: s.id)
    def test_contains_prompt_and_every_modifier(self, style: StylePreset) -> None:
        prompt = build_icon_prompt("weather icons", style)
        assert "weather icons" in prompt
        for modifier in style.prompt_modifiers:
            assert modifier in prompt

    @pytest.mark.parametrize("style", STYLE_PRESETS, ids=lambda s: s.id)
    def test_colors_named_never_raw_hex(self, style: StylePreset) -> None:
        colors = ["#FF0000", "#00ff00", "#4040C0", "#abc"]
        prompt = build_icon_prompt("shopping cart", style, colors)

        assert "shopping cart" in prompt
        for name in ("red", "green", "bright blue"):
            assert name in prompt
        assert not re.search(r"#[0-9A-Fa-f]{3,6}", prompt)
        for modifier in filter_style_modifiers(style.prompt_modifiers):
            assert modifier in prompt

    def test_shared_style_is_not_mutated(self, pastels: StylePreset) -> None:
        before = pastels.prompt_modifiers
        build_icon_prompt("tree", pastels, ["#00FF00"])
        assert pastels.prompt_modifiers == before
