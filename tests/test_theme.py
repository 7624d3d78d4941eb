"""
Tests page themes — lenient loading, HSL conversion, CSS variables
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from page_builder.core.theme import PRESET_THEMES, PageTheme, hex_to_hsl, theme_css_vars, theme_style


class TestHexToHsl:
    @pytest.mark.parametrize("color,expected", [
        ("#ffffff", "0 0% 100%"),
        ("#000000", "0 0% 0%"),
        ("#ff0000", "0 100% 50%"),
        ("#f00",    "0 100% 50%"),
        ("#6366f1", "239 83.5% 66.7%"),
    ])
    def test_values(self, color, expected):
        assert hex_to_hsl(color) == expected


class TestPageTheme:
    def test_no_theme(self):
        assert PageTheme.coerce(None) is None
        assert PageTheme.coerce({}) is None
        assert PageTheme.coerce("ocean") is None

    def test_camel_case_payload(self):
        theme = PageTheme.coerce({"primaryColor": "#0ea5e9", "borderRadius": "full"})
        assert theme.primary_color == "#0ea5e9"
        assert theme.border_radius == "full"
        assert theme.to_record()["primaryColor"] == "#0ea5e9"

    def test_invalid_values_use_defaults(self):
        theme = PageTheme.coerce({
            "primaryColor": "red",
            "textColor": 12,
            "fontFamily": "Inter</style>",
            "borderRadius": "huge",
        })
        assert theme.primary_color == "#18181b"
        assert theme.text_color == "#09090b"
        assert theme.font_family == "Inter, system-ui, sans-serif"
        assert theme.border_radius == "md"

    def test_css_vars(self):
        props = theme_css_vars(PRESET_THEMES["elegant"])
        assert props["--radius"] == "0"
        assert props["--theme-background"] == "#fefce8"
        assert props["--primary-foreground"] == "0 0% 100%"
        assert props["--accent-foreground"] == props["--foreground"]

    def test_style(self):
        assert theme_style(None) == ""
        style = theme_style(PRESET_THEMES["ocean"])
        assert style.startswith("<style>:root{")
        assert "font-family:Plus Jakarta Sans, system-ui, sans-serif;" in style

    def test_presets(self):
        assert list(PRESET_THEMES) == ["default", "modern-dark", "elegant", "ocean", "forest", "minimal"]
