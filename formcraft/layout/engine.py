"""Single-pass page layout for a form document.

The page uses PDF coordinates: the origin is the bottom-left corner and ``y``
grows upward. Layout walks the elements in collection order with one cursor
that only ever moves down the page. There is no page-break handling; a form
that runs past the bottom margin is flagged through ``FormLayout.overflows``
and drawn as-is.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import logging

from formcraft.model.document import FormDocument
from formcraft.model.element import ChoiceElement, ElementKind, FormElement, StaticTextElement

logger = logging.getLogger(__name__)

TextMeasure = Callable[[str, float], float]


@dataclass(frozen=True, slots=True)
class PageGeometry:
    width: float = 595.0
    height: float = 842.0
    margin: float = 50.0
    field_height: float = 25.0
    label_gap: float = 5.0
    option_gap: float = 5.0
    element_gap: float = 10.0
    logo_size: float = 50.0
    logo_margin: float = 20.0
    title_size: float = 18.0
    description_size: float = 12.0
    description_leading: float = 15.0
    header_gap: float = 60.0
    description_offset: float = 30.0
    textarea_font_size: float = 10.0

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def option_pitch(self) -> float:
        return self.field_height + self.option_gap


DEFAULT_GEOMETRY = PageGeometry()


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class TextRun:
    text: str
    x: float
    y: float
    size: float


@dataclass(frozen=True, slots=True)
class OptionSlot:
    index: int
    value: str
    box: Rect
    caption: TextRun


@dataclass(frozen=True, slots=True)
class ElementLayout:
    element: FormElement
    top: float
    bottom: float
    label: TextRun
    field: Rect | None = None
    options: tuple[OptionSlot, ...] = ()
    content: TextRun | None = None

    @property
    def consumed(self) -> float:
        return self.top - self.bottom


@dataclass(frozen=True, slots=True)
class FormLayout:
    geometry: PageGeometry
    title: TextRun
    description: tuple[TextRun, ...]
    elements: tuple[ElementLayout, ...]
    start: float
    end: float

    @property
    def overflows(self) -> bool:
        return self.end < self.geometry.margin


def centered_x(text: str, size: float, measure: TextMeasure, geometry: PageGeometry) -> float:
    return (geometry.width - measure(text, size)) / 2


def layout_header(
    title: str,
    description_lines: Sequence[str],
    measure: TextMeasure,
    geometry: PageGeometry = DEFAULT_GEOMETRY,
) -> tuple[TextRun, tuple[TextRun, ...], float]:
    """Place the title and description lines and return the starting cursor."""
    top = geometry.height - geometry.margin
    title_run = TextRun(
        text=title,
        x=centered_x(title, geometry.title_size, measure, geometry),
        y=top,
        size=geometry.title_size,
    )

    runs: list[TextRun] = []
    for index, line in enumerate(description_lines):
        runs.append(
            TextRun(
                text=line,
                x=centered_x(line, geometry.description_size, measure, geometry),
                y=top - geometry.description_offset - index * geometry.description_leading,
                size=geometry.description_size,
            )
        )

    extra_lines = max(len(description_lines) - 1, 0)
    cursor = top - geometry.header_gap - extra_lines * geometry.description_leading
    return title_run, tuple(runs), cursor


def layout_element(
    element: FormElement,
    cursor: float,
    geometry: PageGeometry = DEFAULT_GEOMETRY,
) -> ElementLayout:
    """Lay out one element whose label sits at ``cursor``."""
    margin = geometry.margin
    field_h = geometry.field_height
    label = TextRun(text=element.label, x=margin, y=cursor, size=element.font_size)
    y = cursor - (geometry.label_gap + field_h)

    kind = element.kind
    if kind in (ElementKind.TEXT, ElementKind.DROPDOWN):
        body = Rect(margin, y, geometry.content_width, field_h)
        bottom = y - (field_h + geometry.element_gap)
        return ElementLayout(element, cursor, bottom, label, field=body)

    if kind is ElementKind.TEXTAREA:
        body = Rect(margin, y - 2 * field_h, geometry.content_width, 3 * field_h)
        bottom = y - (3 * field_h + geometry.element_gap)
        return ElementLayout(element, cursor, bottom, label, field=body)

    if kind in (ElementKind.CHECKBOX, ElementKind.RADIO):
        options = element.options if isinstance(element, ChoiceElement) else []
        pitch = geometry.option_pitch
        slots = []
        for index, value in enumerate(options):
            box_y = y - index * pitch
            slots.append(
                OptionSlot(
                    index=index,
                    value=value,
                    box=Rect(margin, box_y, field_h, field_h),
                    caption=TextRun(
                        text=value,
                        x=margin + field_h + geometry.option_gap,
                        y=box_y + geometry.option_gap,
                        size=element.font_size,
                    ),
                )
            )
        bottom = y - (len(options) * pitch + geometry.element_gap)
        return ElementLayout(element, cursor, bottom, label, options=tuple(slots))

    if kind is ElementKind.FREETEXT:
        text = element.content if isinstance(element, StaticTextElement) else ""
        content = TextRun(text=text, x=margin, y=y, size=element.font_size)
        bottom = y - (field_h + geometry.element_gap)
        return ElementLayout(element, cursor, bottom, label, content=content)

    raise ValueError(f"Unsupported element kind: {kind}")


def layout_form(
    document: FormDocument,
    measure: TextMeasure,
    geometry: PageGeometry = DEFAULT_GEOMETRY,
) -> FormLayout:
    title, description, start = layout_header(
        document.title, document.description_lines, measure, geometry
    )

    cursor = start
    placed: list[ElementLayout] = []
    for element in document.elements:
        element_layout = layout_element(element, cursor, geometry)
        placed.append(element_layout)
        cursor = element_layout.bottom

    layout = FormLayout(
        geometry=geometry,
        title=title,
        description=description,
        elements=tuple(placed),
        start=start,
        end=cursor,
    )
    if layout.overflows:
        logger.warning(
            "Form content ends at y=%.1f, below the %.1f pt bottom margin", cursor, geometry.margin
        )
    return layout
