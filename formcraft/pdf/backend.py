"""Document-generation capability consumed by the form assembler."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from formcraft.layout.engine import Rect
from formcraft.model.theme import RGB


@dataclass(frozen=True, slots=True)
class FieldStyle:
    border_color: RGB
    fill_color: RGB
    text_color: RGB
    border_width: float = 1.0


class FontHandle(Protocol):
    name: str

    def width_of_text_at_size(self, text: str, size: float) -> float: ...


class ImageHandle(Protocol):
    width: float
    height: float

    def scale(self, factor: float) -> tuple[float, float]: ...


class DocumentBackend(Protocol):
    def add_page(self, width: float, height: float) -> None: ...

    def set_metadata(self, title: str, subject: str) -> None: ...

    async def embed_font(self, name: str) -> FontHandle: ...

    async def embed_image(self, data: bytes) -> ImageHandle: ...

    def draw_rectangle(self, rect: Rect, color: RGB) -> None: ...

    def draw_text(
        self, text: str, x: float, y: float, size: float, font: FontHandle, color: RGB
    ) -> None: ...

    def draw_image(self, image: ImageHandle, rect: Rect) -> None: ...

    def add_text_field(
        self, name: str, rect: Rect, style: FieldStyle, required: bool = False
    ) -> None: ...

    def add_multiline_text_field(
        self, name: str, rect: Rect, style: FieldStyle, font_size: float, required: bool = False
    ) -> None: ...

    def add_checkbox(
        self, name: str, rect: Rect, style: FieldStyle, required: bool = False
    ) -> None: ...

    def add_radio_option(
        self, group: str, value: str, rect: Rect, style: FieldStyle, required: bool = False
    ) -> None: ...

    def add_dropdown(
        self,
        name: str,
        rect: Rect,
        options: Sequence[str],
        style: FieldStyle,
        required: bool = False,
    ) -> None: ...

    async def save(self) -> bytes: ...


BackendFactory = Callable[[], DocumentBackend]
