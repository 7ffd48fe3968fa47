"""Built-in dark dashboard themes."""

from __future__ import annotations

from .models import ThemeConfig

DEFAULT_THEME_NAME = "Discord Dark"

THEMES: dict[str, ThemeConfig] = {
    "Discord Dark": ThemeConfig(
        name="Discord Dark",
        background="#2C2F33",
        title="#FFFFFF",
        text_primary="#FFFFFF",
    ),
    "Neon Slate": ThemeConfig(
        name="Neon Slate",
        background="#0A0F1D",
        title="#35D9FF",
        text_primary="#F4F7FF",
    ),
    "Solar Drift": ThemeConfig(
        name="Solar Drift",
        background="#1A140E",
        title="#FFB347",
        text_primary="#FFF7E8",
    ),
}


def list_themes() -> list[str]:
    return sorted(THEMES.keys())


def get_theme(name: str | None) -> ThemeConfig:
    if not name:
        return THEMES[DEFAULT_THEME_NAME]
    return THEMES.get(name, THEMES[DEFAULT_THEME_NAME])
