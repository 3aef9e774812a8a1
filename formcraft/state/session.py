"""In-memory session state: the form document and its element collection."""

from __future__ import annotations

from dataclasses import fields, replace
import logging
from pathlib import Path
from typing import Any

from formcraft.model.document import FormDocument
from formcraft.model.element import (
    ChoiceElement,
    ElementKind,
    FormElement,
    StaticTextElement,
    clamp_font_size,
    create_element,
)
from formcraft.model.fonts import FontKind, font_kind
from formcraft.model.theme import ThemeKind, theme_kind

logger = logging.getLogger(__name__)

_IMMUTABLE_ATTRIBUTES = frozenset({"element_id", "kind"})


class LogoLoadError(RuntimeError):
    """Raised when a logo image cannot be read."""


def parse_options(text: str) -> list[str]:
    return [part.strip() for part in text.split(",")]


class FormSession:
    """Owns the form document and mints element ids.

    Element operations never raise: deleting, duplicating or updating an
    unknown id leaves the collection untouched. Every mutation installs a new
    elements tuple, so a tuple handed out earlier is never modified.
    """

    def __init__(self, document: FormDocument | None = None) -> None:
        self._document = document or FormDocument()
        highest = max((element.element_id for element in self._document.elements), default=0)
        self._next_id = highest + 1

    @property
    def document(self) -> FormDocument:
        return self._document

    @property
    def elements(self) -> tuple[FormElement, ...]:
        return self._document.elements

    @property
    def next_id(self) -> int:
        return self._next_id

    def add(self, kind: ElementKind | str) -> FormElement:
        element = create_element(kind, self._mint_id())
        self._document.elements = (*self._document.elements, element)
        logger.debug("Added %s", element.key)
        return element

    def delete(self, element_id: int) -> None:
        remaining = tuple(el for el in self._document.elements if el.element_id != element_id)
        if len(remaining) == len(self._document.elements):
            logger.debug("Delete ignored, no element %s", element_id)
            return
        self._document.elements = remaining

    def duplicate(self, element_id: int) -> FormElement | None:
        source = self._document.find(element_id)
        if source is None:
            logger.debug("Duplicate ignored, no element %s", element_id)
            return None

        changes: dict[str, Any] = {"element_id": self._mint_id()}
        if isinstance(source, ChoiceElement):
            changes["options"] = list(source.options)
        copy = replace(source, **changes)
        self._document.elements = (*self._document.elements, copy)
        return copy

    def update(self, element_id: int, /, **changes: Any) -> FormElement | None:
        source = self._document.find(element_id)
        if source is None:
            logger.debug("Update ignored, no element %s", element_id)
            return None

        accepted = self._accepted_changes(source, changes)
        if not accepted:
            return source

        updated = replace(source, **accepted)
        self._document.elements = tuple(
            updated if el.element_id == element_id else el for el in self._document.elements
        )
        return updated

    def set_title(self, title: str) -> None:
        self._document.title = title

    def set_description(self, description: str) -> None:
        self._document.description = description

    def set_theme(self, theme_id: ThemeKind | str) -> None:
        self._document.theme_id = theme_kind(theme_id)

    def set_font(self, font_id: FontKind | str) -> None:
        self._document.font_id = font_kind(font_id)

    def set_logo(self, data: bytes | None) -> None:
        self._document.logo = bytes(data) if data else None

    def load_logo(self, path: str | Path) -> None:
        source = Path(path)
        try:
            data = source.read_bytes()
        except OSError as exc:
            raise LogoLoadError(f"Failed to read logo: {source}") from exc
        if not data:
            raise LogoLoadError(f"Logo file is empty: {source}")
        self._document.logo = data

    def clear_logo(self) -> None:
        self._document.logo = None

    def _mint_id(self) -> int:
        element_id = self._next_id
        self._next_id += 1
        return element_id

    def _accepted_changes(self, source: FormElement, changes: dict[str, Any]) -> dict[str, Any]:
        known = {f.name for f in fields(source)}
        accepted: dict[str, Any] = {}
        for name, value in changes.items():
            if name in _IMMUTABLE_ATTRIBUTES or name not in known:
                logger.warning("Ignoring %r for %s (%s)", name, source.key, source.kind.value)
                continue
            if name == "font_size":
                try:
                    value = clamp_font_size(value)
                except (TypeError, ValueError):
                    logger.warning("Ignoring font size %r for %s", value, source.key)
                    continue
            elif name == "options":
                value = list(value)
                if not value:
                    logger.warning("Ignoring empty options for %s", source.key)
                    continue
            elif name == "required" and isinstance(source, StaticTextElement):
                logger.debug("%s is static text, required has no effect", source.key)
            accepted[name] = value
        return accepted
