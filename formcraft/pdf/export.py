"""Hand rendered forms to the filesystem."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging
import os
from pathlib import Path
import shutil
import tempfile

from formcraft.pdf.assembler import RenderedForm

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "fillable_form.pdf"


class ExportError(RuntimeError):
    """Raised when a rendered form cannot be written out."""


@contextmanager
def staged_artifact(rendered: RenderedForm) -> Iterator[Path]:
    """Write ``rendered`` to a temporary file that is removed on exit."""
    fd, temp_path = tempfile.mkstemp(prefix=".form_", suffix=".pdf")
    staged = Path(temp_path)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(rendered.data)
        yield staged
    finally:
        try:
            os.remove(staged)
        except FileNotFoundError:
            pass


def save_artifact(rendered: RenderedForm, output_path: str | Path) -> Path:
    output = Path(output_path)
    if output.is_dir():
        output = output / DEFAULT_FILENAME

    try:
        with staged_artifact(rendered) as staged:
            shutil.copy2(staged, output)
    except OSError as exc:
        raise ExportError(f"Failed to save PDF: {output}") from exc

    logger.info("Saved %s", output)
    return output
