"""Standard PDF font families selectable for a form."""

from __future__ import annotations

from enum import Enum


class InvalidFontKindError(ValueError):
    """Raised when a font id is not one of the standard fonts."""


class FontKind(str, Enum):
    HELVETICA = "helvetica"
    HELVETICA_BOLD = "helvetica-bold"
    TIMES_ROMAN = "times-roman"
    TIMES_BOLD = "times-bold"
    COURIER = "courier"
    COURIER_BOLD = "courier-bold"


STANDARD_FONTS: dict[FontKind, str] = {
    FontKind.HELVETICA: "Helvetica",
    FontKind.HELVETICA_BOLD: "Helvetica-Bold",
    FontKind.TIMES_ROMAN: "Times-Roman",
    FontKind.TIMES_BOLD: "Times-Bold",
    FontKind.COURIER: "Courier",
    FontKind.COURIER_BOLD: "Courier-Bold",
}


def font_kind(font_id: FontKind | str) -> FontKind:
    try:
        return FontKind(font_id)
    except ValueError as exc:
        raise InvalidFontKindError(f"Unknown font: {font_id!r}") from exc


def resolve_font(font_id: FontKind | str) -> str:
    return STANDARD_FONTS[font_kind(font_id)]
