"""
Per-page theme — colours, font and corner radius applied to one page.

A page stores its theme as a camelCase mapping (``primaryColor``,
``borderRadius``, ...). Invalid values fall back to the default theme's, so
nothing a payload carries reaches the ``<style>`` tag unchecked.
"""
import re
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
FONT_FAMILY = re.compile(r"^[A-Za-z0-9 ,\-]+$")

RADIUS = {
    "none": "0",
    "sm":   "0.25rem",
    "md":   "0.5rem",
    "lg":   "0.75rem",
    "full": "9999px",
}

DEFAULT_FONT = "Inter, system-ui, sans-serif"


class PageTheme(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str = "default"
    name: str = "Default"
    primary_color: str = "#18181b"
    background_color: str = "#ffffff"
    text_color: str = "#09090b"
    accent_color: str = "#f4f4f5"
    font_family: str = DEFAULT_FONT
    border_radius: Literal["none", "sm", "md", "lg", "full"] = "md"

    @field_validator("primary_color", "background_color", "text_color", "accent_color", mode="before")
    @classmethod
    def _hex(cls, v, info):
        if isinstance(v, str) and HEX_COLOR.match(v.strip()):
            return v.strip()
        return cls.model_fields[info.field_name].default

    @field_validator("font_family", mode="before")
    @classmethod
    def _font(cls, v):
        if isinstance(v, str) and FONT_FAMILY.match(v.strip()):
            return v.strip()
        return DEFAULT_FONT

    @field_validator("border_radius", mode="before")
    @classmethod
    def _radius(cls, v):
        return v if v in RADIUS else "md"

    @field_validator("id", "name", mode="before")
    @classmethod
    def _label(cls, v, info):
        return str(v) if isinstance(v, (str, int)) else cls.model_fields[info.field_name].default

    @classmethod
    def coerce(cls, payload: Any) -> Optional["PageTheme"]:
        """Theme for a stored mapping, None when the page has no theme."""
        if not isinstance(payload, Mapping) or not payload:
            return None
        return cls.model_validate({k: v for k, v in payload.items() if v is not None})

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)


def hex_to_hsl(color: str) -> str:
    """``#rrggbb`` / ``#rgb`` → ``"h s% l%"`` as the CSS variables expect."""
    digits = color.lstrip("#")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    r, g, b = (int(digits[i:i + 2], 16) / 255 for i in (0, 2, 4))

    cmax, cmin = max(r, g, b), min(r, g, b)
    delta = cmax - cmin
    if delta == 0:
        h = 0.0
    elif cmax == r:
        h = ((g - b) / delta) % 6
    elif cmax == g:
        h = (b - r) / delta + 2
    else:
        h = (r - g) / delta + 4
    h = round(h * 60) % 360

    l = (cmax + cmin) / 2
    s = 0.0 if delta == 0 else delta / (1 - abs(2 * l - 1))
    return f"{h} {round(s * 100, 1):g}% {round(l * 100, 1):g}%"


def theme_css_vars(theme: PageTheme) -> Dict[str, str]:
    return {
        "--background":         hex_to_hsl(theme.background_color),
        "--foreground":         hex_to_hsl(theme.text_color),
        "--primary":            hex_to_hsl(theme.primary_color),
        "--primary-foreground": "0 0% 100%",
        "--accent":             hex_to_hsl(theme.accent_color),
        "--accent-foreground":  hex_to_hsl(theme.text_color),
        "--radius":             RADIUS[theme.border_radius],
        "--theme-primary":      theme.primary_color,
        "--theme-background":   theme.background_color,
    }


def theme_style(theme: Optional[PageTheme]) -> str:
    """``<style>`` element for a page theme, empty without one."""
    if theme is None:
        return ""
    props = "".join(f"{k}:{v};" for k, v in theme_css_vars(theme).items())
    return f"<style>:root{{{props}}}body{{font-family:{theme.font_family};}}</style>"


PRESET_THEMES: Dict[str, PageTheme] = {t.id: t for t in (
    PageTheme(),
    PageTheme(id="modern-dark", name="Modern Dark", primary_color="#6366f1", background_color="#0f0f10",
              text_color="#fafafa", accent_color="#1f1f23", border_radius="lg"),
    PageTheme(id="elegant", name="Elegant", primary_color="#ca8a04", background_color="#fefce8",
              text_color="#422006", accent_color="#fef08a", font_family="Playfair Display, Georgia, serif",
              border_radius="none"),
    PageTheme(id="ocean", name="Ocean", primary_color="#0ea5e9", background_color="#f0f9ff",
              text_color="#0c4a6e", accent_color="#e0f2fe",
              font_family="Plus Jakarta Sans, system-ui, sans-serif", border_radius="lg"),
    PageTheme(id="forest", name="Forest", primary_color="#16a34a", background_color="#f0fdf4",
              text_color="#14532d", accent_color="#dcfce7", font_family="DM Sans, system-ui, sans-serif"),
    PageTheme(id="minimal", name="Minimal", primary_color="#000000", background_color="#ffffff",
              text_color="#171717", accent_color="#f5f5f5", font_family="Helvetica Neue, Arial, sans-serif",
              border_radius="sm"),
)}
