"""Read AcroForm fields back from generated PDF bytes."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from pypdf import PdfReader

from formcraft.model.field import FieldType, FormField

_FLAG_REQUIRED = 1 << 1
_FLAG_MULTILINE = 1 << 12
_FLAG_RADIO = 1 << 15


class PdfImportError(RuntimeError):
    """Raised when form fields cannot be read from a PDF."""


def import_form_fields(source: bytes | str | Path) -> list[FormField]:
    """Return every widget of ``source`` in page order, then annotation order."""
    imported: list[FormField] = []

    try:
        stream = BytesIO(source) if isinstance(source, bytes) else str(source)
        reader = PdfReader(stream)
        for page_index, page in enumerate(reader.pages):
            annots = page.get("/Annots") or []
            for annot_ref in annots:
                annot = annot_ref.get_object()
                if annot.get("/Subtype") != "/Widget":
                    continue

                parent = annot.get("/Parent")
                parent_obj = parent.get_object() if parent is not None else None

                field_type = _inherited(annot, parent_obj, "/FT")
                rect = annot.get("/Rect")
                if field_type is None or rect is None:
                    continue

                llx = float(rect[0])
                lly = float(rect[1])
                urx = float(rect[2])
                ury = float(rect[3])
                flags = int(_inherited(annot, parent_obj, "/Ff") or 0)
                resolved = _field_type(str(field_type), flags)
                if resolved is None:
                    continue

                imported.append(
                    FormField(
                        page_index=page_index,
                        name=str(_inherited(annot, parent_obj, "/T") or ""),
                        field_type=resolved,
                        x=llx,
                        y=lly,
                        width=max(0.0, urx - llx),
                        height=max(0.0, ury - lly),
                        required=bool(flags & _FLAG_REQUIRED),
                        export_value=_on_state(annot) if resolved is FieldType.RADIO else "",
                        options=_choice_options(_inherited(annot, parent_obj, "/Opt")),
                        value=_text_value(_inherited(annot, parent_obj, "/V"), resolved),
                        max_length=_max_length(_inherited(annot, parent_obj, "/MaxLen")),
                    )
                )
    except Exception as exc:
        raise PdfImportError("Failed to import form fields") from exc

    return imported


def _field_type(field_type: str, flags: int) -> FieldType | None:
    if field_type == "/Tx":
        return FieldType.MULTILINE_TEXT if flags & _FLAG_MULTILINE else FieldType.TEXT
    if field_type == "/Btn":
        return FieldType.RADIO if flags & _FLAG_RADIO else FieldType.CHECKBOX
    if field_type == "/Ch":
        return FieldType.DROPDOWN
    return None


def _on_state(annot) -> str:
    appearance = annot.get("/AP")
    if appearance is None:
        return ""
    normal = appearance.get_object().get("/N")
    if normal is None:
        return ""
    for key in normal.get_object().keys():
        if key not in ("/Off", "Off"):
            return str(key).lstrip("/")
    return ""


def _choice_options(raw) -> list[str]:
    if raw is None:
        return []
    options: list[str] = []
    for entry in raw.get_object():
        entry = entry.get_object()
        if isinstance(entry, (list, tuple)):
            options.append(str(entry[-1]))
        else:
            options.append(str(entry))
    return options


def _inherited(annot, parent_obj, key: str):
    value = annot.get(key)
    if value is None and parent_obj is not None:
        value = parent_obj.get(key)
    return value


def _text_value(raw, field_type: FieldType) -> str:
    if raw is None or field_type in (FieldType.CHECKBOX, FieldType.RADIO):
        return ""
    raw = raw.get_object()
    if isinstance(raw, (list, tuple)):
        return ", ".join(str(item) for item in raw)
    return str(raw)


def _max_length(raw) -> int | None:
    if raw is None:
        return None
    return int(raw)
