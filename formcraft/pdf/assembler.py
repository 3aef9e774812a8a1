"""Assemble a form document into a fillable single-page PDF."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from formcraft.layout.engine import (
    DEFAULT_GEOMETRY,
    ElementLayout,
    FormLayout,
    PageGeometry,
    Rect,
    layout_form,
)
from formcraft.model.document import FormDocument
from formcraft.model.element import ChoiceElement, ElementKind
from formcraft.model.fonts import resolve_font
from formcraft.model.theme import Theme, resolve_theme
from formcraft.pdf.backend import BackendFactory, DocumentBackend, FieldStyle, FontHandle
from formcraft.pdf.writer import ReportLabBackend, radio_export_value
from formcraft.state.progress import RenderProgress

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


class FormRenderError(RuntimeError):
    """Raised when a form cannot be rendered."""


class CapabilityFailure(FormRenderError):
    """Raised when the document-generation backend fails."""


class EmptyDocumentError(FormRenderError):
    """Raised when rendering is requested for a form without elements."""


class RenderBusyError(FormRenderError):
    """Raised when a render is requested while another one is running."""


@dataclass(frozen=True, slots=True)
class RenderedForm:
    data: bytes
    content_type: str = PDF_CONTENT_TYPE

    def __len__(self) -> int:
        return len(self.data)


def describe_failure(exc: BaseException) -> str:
    detail = str(exc).strip()
    if detail:
        return f"An error occurred while generating the PDF: {detail}"
    return "An unknown error occurred while generating the PDF."


class FormAssembler:
    def __init__(
        self,
        backend_factory: BackendFactory = ReportLabBackend,
        geometry: PageGeometry = DEFAULT_GEOMETRY,
        progress: RenderProgress | None = None,
    ) -> None:
        self._backend_factory = backend_factory
        self._geometry = geometry
        self.progress = progress or RenderProgress()

    @property
    def geometry(self) -> PageGeometry:
        return self._geometry

    async def render(self, document: FormDocument) -> RenderedForm:
        if self.progress.busy:
            raise RenderBusyError("A render is already in progress")

        self.progress.begin()
        try:
            if not document.elements:
                raise EmptyDocumentError("Add at least one element before rendering")
            rendered = await self._assemble(document)
        except Exception as exc:
            message = describe_failure(exc)
            logger.error("Error generating PDF: %s", message, exc_info=exc)
            self.progress.fail(message)
            if isinstance(exc, FormRenderError):
                raise
            raise CapabilityFailure(message) from exc
        finally:
            self.progress.reset()

        self.progress.succeed(f"Generated PDF ({len(rendered)} bytes)")
        return rendered

    async def _assemble(self, document: FormDocument) -> RenderedForm:
        geometry = self._geometry
        theme = resolve_theme(document.theme_id)
        backend = self._backend_factory()
        backend.add_page(geometry.width, geometry.height)
        backend.set_metadata(document.title, document.description)

        font = await backend.embed_font(resolve_font(document.font_id))
        backend.draw_rectangle(Rect(0, 0, geometry.width, geometry.height), theme.background)

        if document.logo:
            await self._draw_logo(backend, document.logo)

        layout = layout_form(document, font.width_of_text_at_size, geometry)
        self._draw_header(backend, layout, font, theme)

        total = len(layout.elements)
        logger.info("Rendering %d element(s) for %r", total, document.title)
        style = FieldStyle(border_color=theme.text, fill_color=theme.field, text_color=theme.text)
        for index, element_layout in enumerate(layout.elements):
            self._draw_element(backend, element_layout, font, theme, style)
            self.progress.advance(index + 1, total)

        data = await backend.save()
        logger.info("Generated %d byte PDF", len(data))
        return RenderedForm(data=data)

    async def _draw_logo(self, backend: DocumentBackend, data: bytes) -> None:
        geometry = self._geometry
        image = await backend.embed_image(data)
        longest = max(image.width, image.height)
        if longest <= 0:
            raise CapabilityFailure("Logo image has no size")
        width, height = image.scale(geometry.logo_size / longest)
        backend.draw_image(
            image,
            Rect(
                geometry.logo_margin,
                geometry.height - geometry.logo_margin - height,
                width,
                height,
            ),
        )

    def _draw_header(
        self, backend: DocumentBackend, layout: FormLayout, font: FontHandle, theme: Theme
    ) -> None:
        for run in (layout.title, *layout.description):
            backend.draw_text(run.text, run.x, run.y, run.size, font, theme.text)

    def _draw_element(
        self,
        backend: DocumentBackend,
        placed: ElementLayout,
        font: FontHandle,
        theme: Theme,
        style: FieldStyle,
    ) -> None:
        element = placed.element
        label = placed.label
        backend.draw_text(label.text, label.x, label.y, label.size, font, theme.text)
        logger.debug("Drawing %s (%s) at y=%.1f", element.key, element.kind.value, placed.top)

        kind = element.kind
        if kind is ElementKind.TEXT:
            backend.add_text_field(element.field_name, placed.field, style, element.required)
        elif kind is ElementKind.TEXTAREA:
            backend.add_multiline_text_field(
                element.field_name,
                placed.field,
                style,
                self._geometry.textarea_font_size,
                element.required,
            )
        elif kind is ElementKind.DROPDOWN:
            options = element.options if isinstance(element, ChoiceElement) else []
            backend.add_dropdown(element.field_name, placed.field, options, style, element.required)
        elif kind in (ElementKind.CHECKBOX, ElementKind.RADIO):
            for slot in placed.options:
                if kind is ElementKind.CHECKBOX:
                    backend.add_checkbox(
                        f"{element.field_name}-{slot.index}", slot.box, style, element.required
                    )
                else:
                    backend.add_radio_option(
                        element.field_name,
                        radio_export_value(slot.value, slot.index),
                        slot.box,
                        style,
                        element.required,
                    )
                caption = slot.caption
                backend.draw_text(
                    caption.text, caption.x, caption.y, caption.size, font, theme.text
                )
        elif kind is ElementKind.FREETEXT:
            content = placed.content
            backend.draw_text(content.text, content.x, content.y, content.size, font, theme.text)
