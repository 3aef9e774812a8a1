"""Interactive field records read back from a generated PDF."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FieldType(str, Enum):
    TEXT = "text"
    MULTILINE_TEXT = "multiline_text"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    DROPDOWN = "dropdown"


@dataclass(slots=True)
class FormField:
    page_index: int
    name: str
    field_type: FieldType
    x: float
    y: float
    width: float
    height: float
    required: bool = False
    export_value: str = ""
    options: list[str] = field(default_factory=list)
    value: str = ""
    max_length: int | None = None
