"""Theme palettes used for the page background, text and field fill."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

RGB = tuple[float, float, float]


class InvalidThemeKindError(ValueError):
    """Raised when a theme id is not one of the known themes."""


class ThemeKind(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    BLUE_GRADIENT = "blue-gradient"
    GREEN_GRADIENT = "green-gradient"
    PURPLE_GRADIENT = "purple-gradient"


@dataclass(frozen=True, slots=True)
class Theme:
    background: RGB
    text: RGB
    field: RGB


# Gradient themes render as a flat colour in the PDF.
THEMES: dict[ThemeKind, Theme] = {
    ThemeKind.LIGHT: Theme(background=(1, 1, 1), text=(0, 0, 0), field=(0.98, 0.98, 0.98)),
    ThemeKind.DARK: Theme(background=(0.1, 0.1, 0.1), text=(1, 1, 1), field=(0.2, 0.2, 0.2)),
    ThemeKind.BLUE: Theme(background=(0.9, 0.95, 1), text=(0, 0, 0.6), field=(0.95, 0.97, 1)),
    ThemeKind.GREEN: Theme(background=(0.9, 1, 0.9), text=(0, 0.5, 0), field=(0.95, 1, 0.95)),
    ThemeKind.PURPLE: Theme(background=(0.98, 0.9, 1), text=(0.5, 0, 0.5), field=(0.99, 0.95, 1)),
    ThemeKind.BLUE_GRADIENT: Theme(background=(0.6, 0.8, 1), text=(1, 1, 1), field=(0.8, 0.9, 1)),
    ThemeKind.GREEN_GRADIENT: Theme(background=(0.6, 1, 0.6), text=(1, 1, 1), field=(0.8, 1, 0.8)),
    ThemeKind.PURPLE_GRADIENT: Theme(
        background=(0.8, 0.6, 1), text=(1, 1, 1), field=(0.9, 0.8, 1)
    ),
}


def theme_kind(theme_id: ThemeKind | str) -> ThemeKind:
    try:
        return ThemeKind(theme_id)
    except ValueError as exc:
        raise InvalidThemeKindError(f"Unknown theme: {theme_id!r}") from exc


def resolve_theme(theme_id: ThemeKind | str) -> Theme:
    return THEMES[theme_kind(theme_id)]
