"""Document-generation backend using reportlab canvas drawing + acroForm widgets."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from io import BytesIO
import re

from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from formcraft.layout.engine import DEFAULT_GEOMETRY, Rect
from formcraft.model.theme import RGB
from formcraft.pdf.backend import FieldStyle

_EXPORT_VALUE_PATTERN = re.compile(r"[^A-Za-z0-9_.-]+")

# reportlab caps text fields at 100 characters unless told otherwise.
TEXT_FIELD_MAX_LENGTH = 10000


class PdfWriteError(RuntimeError):
    """Raised when output generation fails."""


@dataclass(frozen=True, slots=True)
class ReportLabFont:
    name: str

    def width_of_text_at_size(self, text: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, self.name, size)


@dataclass(frozen=True, slots=True)
class ReportLabImage:
    reader: ImageReader
    width: float
    height: float

    def scale(self, factor: float) -> tuple[float, float]:
        return self.width * factor, self.height * factor


def radio_export_value(option: str, index: int) -> str:
    """PDF name used as the on-state of one radio button."""
    cleaned = _EXPORT_VALUE_PATTERN.sub("_", option).strip("_")
    return f"{index}_{cleaned}" if cleaned else f"option_{index}"


class ReportLabBackend:
    def __init__(self) -> None:
        self._buffer = BytesIO()
        size = (DEFAULT_GEOMETRY.width, DEFAULT_GEOMETRY.height)
        self._canvas = canvas.Canvas(self._buffer, pagesize=size)
        self._saved = False

    def add_page(self, width: float, height: float) -> None:
        self._canvas.setPageSize((width, height))

    def set_metadata(self, title: str, subject: str) -> None:
        self._canvas.setTitle(title)
        self._canvas.setSubject(subject)

    async def embed_font(self, name: str) -> ReportLabFont:
        if name not in pdfmetrics.standardFonts:
            raise PdfWriteError(f"Unsupported font: {name}")
        return ReportLabFont(name=name)

    async def embed_image(self, data: bytes) -> ReportLabImage:
        return await asyncio.to_thread(_read_image, data)

    def draw_rectangle(self, rect: Rect, color: RGB) -> None:
        self._canvas.setFillColorRGB(*color)
        self._canvas.rect(rect.x, rect.y, rect.width, rect.height, stroke=0, fill=1)

    def draw_text(
        self, text: str, x: float, y: float, size: float, font: ReportLabFont, color: RGB
    ) -> None:
        self._canvas.setFillColorRGB(*color)
        self._canvas.setFont(font.name, size)
        self._canvas.drawString(x, y, text)

    def draw_image(self, image: ReportLabImage, rect: Rect) -> None:
        self._canvas.drawImage(
            image.reader,
            rect.x,
            rect.y,
            width=rect.width,
            height=rect.height,
            mask="auto",
        )

    def add_text_field(
        self, name: str, rect: Rect, style: FieldStyle, required: bool = False
    ) -> None:
        self._canvas.acroForm.textfield(
            name=name,
            tooltip=name,
            x=rect.x,
            y=rect.y,
            width=rect.width,
            height=rect.height,
            value="",
            maxlen=TEXT_FIELD_MAX_LENGTH,
            fieldFlags=_flags(required=required),
            **_widget_colors(style),
        )

    def add_multiline_text_field(
        self, name: str, rect: Rect, style: FieldStyle, font_size: float, required: bool = False
    ) -> None:
        self._canvas.acroForm.textfield(
            name=name,
            tooltip=name,
            x=rect.x,
            y=rect.y,
            width=rect.width,
            height=rect.height,
            value="",
            fontSize=font_size,
            maxlen=TEXT_FIELD_MAX_LENGTH,
            fieldFlags=_flags("multiline", required=required),
            **_widget_colors(style),
        )

    def add_checkbox(
        self, name: str, rect: Rect, style: FieldStyle, required: bool = False
    ) -> None:
        self._canvas.acroForm.checkbox(
            name=name,
            tooltip=name,
            x=rect.x,
            y=rect.y,
            size=min(rect.width, rect.height),
            checked=False,
            buttonStyle="check",
            fieldFlags=_flags(required=required),
            **_widget_colors(style),
        )

    def add_radio_option(
        self, group: str, value: str, rect: Rect, style: FieldStyle, required: bool = False
    ) -> None:
        self._canvas.acroForm.radio(
            name=group,
            tooltip=group,
            value=value,
            selected=False,
            x=rect.x,
            y=rect.y,
            size=min(rect.width, rect.height),
            buttonStyle="circle",
            fieldFlags=_flags("noToggleToOff", "radio", required=required),
            **_widget_colors(style),
        )

    def add_dropdown(
        self,
        name: str,
        rect: Rect,
        options: Sequence[str],
        style: FieldStyle,
        required: bool = False,
    ) -> None:
        values = list(options)
        self._canvas.acroForm.choice(
            name=name,
            tooltip=name,
            x=rect.x,
            y=rect.y,
            width=rect.width,
            height=rect.height,
            options=values,
            value="",
            fieldFlags=_flags("combo", required=required),
            **_widget_colors(style),
        )

    async def save(self) -> bytes:
        if self._saved:
            raise PdfWriteError("Document was already saved")
        self._saved = True
        return await asyncio.to_thread(self._finish)

    def _finish(self) -> bytes:
        self._canvas.showPage()
        self._canvas.save()
        return self._buffer.getvalue()


def _read_image(data: bytes) -> ReportLabImage:
    reader = ImageReader(BytesIO(data))
    width, height = reader.getSize()
    return ReportLabImage(reader=reader, width=float(width), height=float(height))


def _flags(*names: str, required: bool) -> str:
    flags = list(names)
    if required:
        flags.append("required")
    return " ".join(flags)


def _widget_colors(style: FieldStyle) -> dict[str, object]:
    return {
        "borderWidth": style.border_width,
        "borderColor": colors.Color(*style.border_color),
        "fillColor": colors.Color(*style.fill_color),
        "textColor": colors.Color(*style.text_color),
        "forceBorder": True,
    }
