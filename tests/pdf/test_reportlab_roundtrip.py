from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from formcraft.model.element import ElementKind
from formcraft.model.field import FieldType
from formcraft.pdf.assembler import CapabilityFailure, FormAssembler, RenderedForm
from formcraft.pdf.export import DEFAULT_FILENAME, save_artifact, staged_artifact
from formcraft.pdf.importer import PdfImportError, import_form_fields
from formcraft.pdf.renderer import PdfRenderError, render_preview
from formcraft.pdf.writer import TEXT_FIELD_MAX_LENGTH, ReportLabFont, radio_export_value
from formcraft.state.session import FormSession


def _render(session: FormSession) -> RenderedForm:
    return asyncio.run(FormAssembler().render(session.document))


@pytest.fixture
def full_session(session: FormSession, png_logo: bytes) -> FormSession:
    session.set_title("Membership Application")
    session.set_description("Please complete every section.\nThank you!")
    session.set_theme("blue")
    session.set_logo(png_logo)
    session.add(ElementKind.TEXT)
    session.update(1, required=True)
    session.add(ElementKind.TEXTAREA)
    session.add(ElementKind.CHECKBOX)
    session.update(3, options=["A", "B", "C"])
    session.add(ElementKind.RADIO)
    session.update(4, options=["Yes", "No"])
    session.add(ElementKind.DROPDOWN)
    session.update(5, options=["Small", "Large"])
    session.add(ElementKind.FREETEXT)
    return session


def test_generated_pdf_contains_expected_fields(full_session: FormSession) -> None:
    rendered = _render(full_session)

    assert rendered.data.startswith(b"%PDF")
    fields = import_form_fields(rendered.data)

    assert [field.field_type for field in fields] == [
        FieldType.TEXT,
        FieldType.MULTILINE_TEXT,
        FieldType.CHECKBOX,
        FieldType.CHECKBOX,
        FieldType.CHECKBOX,
        FieldType.RADIO,
        FieldType.RADIO,
        FieldType.DROPDOWN,
    ]
    assert {field.page_index for field in fields} == {0}
    assert fields[0].name == "field-element-1"
    assert fields[0].required is True
    assert fields[1].height == pytest.approx(75.0)
    assert [field.name for field in fields[2:5]] == [
        "field-element-3-0",
        "field-element-3-1",
        "field-element-3-2",
    ]
    assert {field.name for field in fields[5:7]} == {"field-element-4"}
    assert [field.export_value for field in fields[5:7]] == ["0_Yes", "1_No"]
    assert fields[7].options == ["Small", "Large"]
    assert fields[7].value == ""


def test_text_and_textarea_only(session: FormSession) -> None:
    session.add(ElementKind.TEXT)
    session.add(ElementKind.TEXTAREA)

    fields = import_form_fields(_render(session).data)

    assert [field.field_type for field in fields] == [FieldType.TEXT, FieldType.MULTILINE_TEXT]
    assert fields[0].y > fields[1].y


def test_unreadable_logo_is_a_capability_failure(session: FormSession) -> None:
    session.add(ElementKind.TEXT)
    session.set_logo(b"definitely not an image")
    assembler = FormAssembler()

    with pytest.raises(CapabilityFailure):
        asyncio.run(assembler.render(session.document))

    assert assembler.progress.outcome.succeeded is False
    assert assembler.progress.fraction == 0.0


def test_preview_is_png(full_session: FormSession) -> None:
    preview = render_preview(_render(full_session).data, zoom=0.5)

    assert preview.startswith(b"\x89PNG")


def test_preview_rejects_bad_input() -> None:
    with pytest.raises(PdfRenderError):
        render_preview(b"not a pdf")


def test_import_rejects_bad_input() -> None:
    with pytest.raises(PdfImportError):
        import_form_fields(b"not a pdf")


def test_staged_artifact_is_removed_even_on_error() -> None:
    rendered = RenderedForm(data=b"%PDF-1.4 stub")

    with pytest.raises(RuntimeError):
        with staged_artifact(rendered) as staged:
            assert staged.read_bytes() == rendered.data
            raise RuntimeError("consumer failed")

    assert not staged.exists()


def test_save_artifact_into_directory(tmp_path: Path) -> None:
    rendered = RenderedForm(data=b"%PDF-1.4 stub")

    saved = save_artifact(rendered, tmp_path)

    assert saved == tmp_path / DEFAULT_FILENAME
    assert saved.read_bytes() == rendered.data


def test_font_metrics_use_reportlab_widths() -> None:
    font = ReportLabFont("Courier")

    # Courier glyphs are 600/1000 em wide.
    assert font.width_of_text_at_size("abcd", 10) == pytest.approx(24.0)


def test_radio_export_values_are_pdf_names() -> None:
    assert radio_export_value("Option 1", 0) == "0_Option_1"
    assert radio_export_value("???", 2) == "option_2"


def test_text_fields_accept_long_input(session: FormSession) -> None:
    session.add(ElementKind.TEXT)
    session.add(ElementKind.TEXTAREA)

    fields = import_form_fields(_render(session).data)

    assert [field.max_length for field in fields] == [
        TEXT_FIELD_MAX_LENGTH,
        TEXT_FIELD_MAX_LENGTH,
    ]


def test_required_dropdown_starts_unselected(session: FormSession) -> None:
    session.add(ElementKind.DROPDOWN)
    session.update(1, required=True)

    (dropdown,) = import_form_fields(_render(session).data)

    assert dropdown.required is True
    assert dropdown.value == ""
    assert dropdown.options == ["Option 1", "Option 2", "Option 3"]
