from __future__ import annotations

from pathlib import Path

import pytest

from formcraft.model.element import ElementKind
from formcraft.model.fonts import FontKind, InvalidFontKindError
from formcraft.model.theme import InvalidThemeKindError, ThemeKind
from formcraft.state.session import FormSession, LogoLoadError, parse_options


def _ids(session: FormSession) -> list[int]:
    return [element.element_id for element in session.elements]


def test_ids_increase_across_deletes(session: FormSession) -> None:
    assigned = [session.add(ElementKind.TEXT).element_id for _ in range(3)]
    session.delete(assigned[-1])
    assigned.append(session.add(ElementKind.RADIO).element_id)
    assigned.append(session.duplicate(assigned[0]).element_id)
    session.delete(assigned[0])
    assigned.append(session.add(ElementKind.FREETEXT).element_id)

    assert assigned == [1, 2, 3, 4, 5, 6]
    assert len(set(_ids(session))) == len(session.elements)


def test_add_appends_to_the_end(session: FormSession) -> None:
    session.add(ElementKind.TEXT)
    session.add(ElementKind.DROPDOWN)

    assert [element.kind for element in session.elements] == [
        ElementKind.TEXT,
        ElementKind.DROPDOWN,
    ]


def test_duplicate_copies_everything_but_id(session: FormSession) -> None:
    source = session.add(ElementKind.CHECKBOX)
    session.add(ElementKind.TEXT)
    session.update(source.element_id, label="Pick", required=True, font_size=16, options=["A", "B"])

    copy = session.duplicate(source.element_id)

    original = session.document.find(source.element_id)
    assert session.elements[-1] is copy
    assert copy.element_id == 3
    assert (copy.kind, copy.label, copy.required, copy.font_size, copy.options) == (
        original.kind,
        original.label,
        original.required,
        original.font_size,
        original.options,
    )
    assert copy.options is not original.options


def test_duplicate_unknown_id_is_noop(session: FormSession) -> None:
    session.add(ElementKind.TEXT)
    before = session.elements

    assert session.duplicate(99) is None
    assert session.elements == before
    assert session.next_id == 2


def test_delete_preserves_order_and_ignores_unknown(session: FormSession) -> None:
    for kind in (ElementKind.TEXT, ElementKind.RADIO, ElementKind.TEXTAREA, ElementKind.FREETEXT):
        session.add(kind)

    session.delete(2)
    session.delete(42)

    assert _ids(session) == [1, 3, 4]


def test_update_merges_only_given_attributes(session: FormSession) -> None:
    session.add(ElementKind.TEXT)
    element = session.add(ElementKind.FREETEXT)
    session.add(ElementKind.DROPDOWN)

    updated = session.update(element.element_id, content="Hello there")

    assert updated.content == "Hello there"
    assert updated.label == "Freetext 2"
    assert updated.font_size == 12
    assert _ids(session) == [1, 2, 3]


def test_update_replaces_collection(session: FormSession) -> None:
    session.add(ElementKind.TEXT)
    snapshot = session.elements

    session.update(1, label="Name")

    assert snapshot[0].label == "Text 1"
    assert session.elements[0].label == "Name"


def test_update_ignores_immutable_and_foreign_attributes(session: FormSession) -> None:
    session.add(ElementKind.TEXT)

    updated = session.update(1, element_id=50, kind=ElementKind.RADIO, options=["x"])

    assert updated.element_id == 1
    assert updated.kind is ElementKind.TEXT
    assert not hasattr(updated, "options")


def test_update_applies_other_changes_alongside_an_id(session: FormSession) -> None:
    session.add(ElementKind.TEXT)

    updated = session.update(1, element_id=99, label="Full name")

    assert updated.element_id == 1
    assert updated.label == "Full name"
    assert session.next_id == 2


def test_update_drops_non_numeric_font_size(session: FormSession) -> None:
    session.add(ElementKind.TEXT)

    updated = session.update(1, font_size="big", label="Email")

    assert updated.font_size == 12
    assert updated.label == "Email"


def test_update_clamps_font_size_and_keeps_options(session: FormSession) -> None:
    session.add(ElementKind.RADIO)

    updated = session.update(1, font_size=40, options=[])

    assert updated.font_size == 24
    assert updated.options == ["Option 1", "Option 2", "Option 3"]


def test_update_unknown_id_is_noop(session: FormSession) -> None:
    session.add(ElementKind.TEXT)

    assert session.update(7, label="ghost") is None
    assert session.elements[0].label == "Text 1"


def test_parse_options_trims_each_entry() -> None:
    assert parse_options("Yes,  No , Maybe") == ["Yes", "No", "Maybe"]


def test_metadata_setters_validate_ids(session: FormSession) -> None:
    session.set_title("Intake")
    session.set_description("Line one\nLine two")
    session.set_theme("dark")
    session.set_font(FontKind.COURIER_BOLD)

    document = session.document
    assert (document.title, document.theme_id, document.font_id) == (
        "Intake",
        ThemeKind.DARK,
        FontKind.COURIER_BOLD,
    )
    with pytest.raises(InvalidThemeKindError):
        session.set_theme("sepia")
    with pytest.raises(InvalidFontKindError):
        session.set_font("papyrus")


def test_logo_loading(session: FormSession, tmp_path: Path, png_logo: bytes) -> None:
    logo_path = tmp_path / "logo.png"
    logo_path.write_bytes(png_logo)

    session.load_logo(logo_path)
    assert session.document.logo == png_logo

    session.clear_logo()
    assert session.document.logo is None

    with pytest.raises(LogoLoadError):
        session.load_logo(tmp_path / "missing.png")
