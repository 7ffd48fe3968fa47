"""Renderer package for the stats dashboard image."""

from .errors import RenderError
from .formatting import build_stats_text, format_bytes, format_uptime
from .models import DashboardImage, ThemeConfig
from .themes import DEFAULT_THEME_NAME, get_theme, list_themes

try:  # pragma: no cover - optional at import time for test environments
    from .dashboard import DashboardRenderer
except Exception:  # pragma: no cover
    DashboardRenderer = None  # type: ignore[assignment]

__all__ = [
    "DashboardImage",
    "DEFAULT_THEME_NAME",
    "RenderError",
    "ThemeConfig",
    "build_stats_text",
    "format_bytes",
    "format_uptime",
    "get_theme",
    "list_themes",
]

if DashboardRenderer is not None:
    __all__.append("DashboardRenderer")
