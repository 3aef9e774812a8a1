"""Preview rendering helpers using PyMuPDF."""

from __future__ import annotations

import fitz


class PdfRenderError(RuntimeError):
    """Raised when a preview cannot be rendered."""


def render_preview(data: bytes, zoom: float = 1.25, page_index: int = 0) -> bytes:
    """Rasterise one page of a generated PDF to PNG bytes."""
    try:
        document = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise PdfRenderError("Failed to open generated PDF") from exc

    try:
        if page_index < 0 or page_index >= document.page_count:
            raise PdfRenderError(f"Page index out of range: {page_index}")
        try:
            page = document.load_page(page_index)
            matrix = fitz.Matrix(zoom, zoom)
            pix = page.get_pixmap(matrix=matrix, alpha=False, annots=True)
            return pix.tobytes("png")
        except Exception as exc:  # pragma: no cover - defensive for PyMuPDF errors
            raise PdfRenderError(f"Failed to render page {page_index + 1}") from exc
    finally:
        document.close()
