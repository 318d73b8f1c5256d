"""Shared fixtures for the annotator tests.

Downloads are served by ``httpx.MockTransport`` so no network access is
needed. The typeface is the DejaVu Sans Bold file that ships with
matplotlib.
"""

from __future__ import annotations

import io
from pathlib import Path

import httpx
import matplotlib
import pytest
from PIL import Image  # type: ignore

from annotator import config

ANIMAL_SIZE = (480, 720)
BRAIN_SIZE = (640, 900)


def make_png(size, color=(40, 40, 40)) -> bytes:
    img = Image.new("RGB", size, color=color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def font_path() -> str:
    path = Path(matplotlib.get_data_path()) / "fonts" / "ttf" / "DejaVuSans-Bold.ttf"
    assert path.exists()
    return str(path)


@pytest.fixture
def font_bytes(font_path) -> bytes:
    return Path(font_path).read_bytes()


@pytest.fixture
def animal_background() -> bytes:
    return make_png(ANIMAL_SIZE)


@pytest.fixture
def brain_background() -> bytes:
    return make_png(BRAIN_SIZE)


@pytest.fixture
def font_dir(tmp_path, monkeypatch):
    """Point temporary typeface files at a sandboxed directory."""
    directory = tmp_path / "fonts"
    monkeypatch.setattr(config, "FONT_DIR", str(directory))
    return directory


@pytest.fixture
def resource_server(font_bytes, animal_background, brain_background):
    """Serve the three configured URLs and record every request made.

    Tests call ``set_status`` to make a download fail.
    """

    class Server:
        def __init__(self):
            self.requests = []
            self.statuses = {
                str(httpx.URL(config.FONT_URL)): 200,
                str(httpx.URL(config.BASE_IMAGE_ANIMALS_URL)): 200,
                str(httpx.URL(config.BASE_IMAGE_BRAIN_URL)): 200,
            }
            self.bodies = {
                str(httpx.URL(config.FONT_URL)): font_bytes,
                str(httpx.URL(config.BASE_IMAGE_ANIMALS_URL)): animal_background,
                str(httpx.URL(config.BASE_IMAGE_BRAIN_URL)): brain_background,
            }

        def set_status(self, url: str, status: int) -> None:
            self.statuses[str(httpx.URL(url))] = status

        def set_body(self, url: str, content: bytes) -> None:
            self.bodies[str(httpx.URL(url))] = content

        def handler(self, request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            self.requests.append(url)
            status = self.statuses.get(url, 404)
            content = self.bodies.get(url, b"") if status == 200 else b"not found"
            return httpx.Response(status, content=content)

        def client(self) -> httpx.AsyncClient:
            return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    return Server()
