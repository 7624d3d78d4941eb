from .context import CollectionContext, RenderContext, SiteSettings
from .layout import GridLayout, resolve_grid_layout
from .theme import PRESET_THEMES, PageTheme, theme_css_vars, theme_style

__all__ = [
    "CollectionContext", "RenderContext", "SiteSettings",
    "GridLayout", "resolve_grid_layout",
    "PRESET_THEMES", "PageTheme", "theme_css_vars", "theme_style",
]
