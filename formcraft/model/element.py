"""Form element model definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

MIN_FONT_SIZE = 8
MAX_FONT_SIZE = 24
DEFAULT_FONT_SIZE = 12

DEFAULT_OPTIONS = ("Option 1", "Option 2", "Option 3")
DEFAULT_CONTENT = "Enter your text here"


class ElementKind(str, Enum):
    TEXT = "text"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    DROPDOWN = "dropdown"
    TEXTAREA = "textarea"
    FREETEXT = "freetext"

    @property
    def has_options(self) -> bool:
        return self in CHOICE_KINDS

    @property
    def display_name(self) -> str:
        return self.value[:1].upper() + self.value[1:]


CHOICE_KINDS = frozenset({ElementKind.CHECKBOX, ElementKind.RADIO, ElementKind.DROPDOWN})


def clamp_font_size(size: int) -> int:
    return max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, int(size)))


@dataclass(slots=True)
class FormElement:
    """A single-line or multi-line text element.

    Choice and static-text kinds use the subclasses below, which carry the
    attributes only those kinds have.
    """

    element_id: int
    kind: ElementKind
    label: str
    required: bool = False
    font_size: int = DEFAULT_FONT_SIZE

    def __post_init__(self) -> None:
        self.kind = ElementKind(self.kind)
        self.font_size = clamp_font_size(self.font_size)

    @property
    def key(self) -> str:
        return f"element-{self.element_id}"

    @property
    def field_name(self) -> str:
        return f"field-{self.key}"


@dataclass(slots=True)
class ChoiceElement(FormElement):
    options: list[str] = field(default_factory=lambda: list(DEFAULT_OPTIONS))

    def __post_init__(self) -> None:
        FormElement.__post_init__(self)
        if self.kind not in CHOICE_KINDS:
            raise ValueError(f"Not a choice kind: {self.kind.value}")
        self.options = list(self.options)


@dataclass(slots=True)
class StaticTextElement(FormElement):
    content: str = DEFAULT_CONTENT

    def __post_init__(self) -> None:
        FormElement.__post_init__(self)
        if self.kind is not ElementKind.FREETEXT:
            raise ValueError(f"Not a static text kind: {self.kind.value}")


def create_element(kind: ElementKind | str, element_id: int) -> FormElement:
    kind = ElementKind(kind)
    label = f"{kind.display_name} {element_id}"
    if kind in CHOICE_KINDS:
        return ChoiceElement(element_id=element_id, kind=kind, label=label)
    if kind is ElementKind.FREETEXT:
        return StaticTextElement(element_id=element_id, kind=kind, label=label)
    return FormElement(element_id=element_id, kind=kind, label=label)
