"""Form document model: metadata plus the ordered element collection."""

from __future__ import annotations

from dataclasses import dataclass

from formcraft.model.element import FormElement
from formcraft.model.fonts import FontKind
from formcraft.model.theme import ThemeKind

DEFAULT_TITLE = "My Form"
DEFAULT_DESCRIPTION = "This is a sample form description."


@dataclass(slots=True)
class FormDocument:
    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    theme_id: ThemeKind = ThemeKind.LIGHT
    font_id: FontKind = FontKind.HELVETICA
    logo: bytes | None = None
    elements: tuple[FormElement, ...] = ()

    @property
    def description_lines(self) -> list[str]:
        return [line.rstrip("\r") for line in self.description.split("\n")]

    @property
    def has_logo(self) -> bool:
        return bool(self.logo)

    def find(self, element_id: int) -> FormElement | None:
        for element in self.elements:
            if element.element_id == element_id:
                return element
        return None
