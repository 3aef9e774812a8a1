from __future__ import annotations

from io import BytesIO

from PIL import Image
import pytest

from formcraft.layout.engine import DEFAULT_GEOMETRY, PageGeometry
from formcraft.state.session import FormSession
from tests.helpers.recording_backend import RecordingBackend


@pytest.fixture
def geometry() -> PageGeometry:
    return DEFAULT_GEOMETRY


@pytest.fixture
def session() -> FormSession:
    return FormSession()


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def png_logo() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (80, 40), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()
