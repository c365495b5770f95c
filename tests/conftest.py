"""
Pytest configuration and shared fixtures.
"""

import base64
import io
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict

import pytest
from PIL import Image

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def _png_bytes(color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (160, 90), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return _png_bytes()


@pytest.fixture
def png_data_uri(png_bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")


@pytest.fixture
def deck_payload(png_data_uri) -> Dict[str, Any]:
    """A three slide deck in wire format; only the middle slide has an image."""
    return {
        "title": "Strategic Roadmap 2025",
        "slides": [
            {
                "id": "s1",
                "title": "Current Landscape",
                "content": ["Edge AI is rising", "SaaS competition intensifies"],
                "speakerNotes": "Set the scene.",
                "imageDescription": "City skyline at dawn",
            },
            {
                "id": "s2",
                "title": "Core Objectives",
                "content": ["Carbon neutral by Q4", "APAC share +18%", "LLM-driven workflows"],
                "speakerNotes": "Three goals.",
                "imageDescription": "Compass on a map",
                "generatedImageUrl": png_data_uri,
            },
            {
                "id": "s3",
                "title": "Conclusion",
                "content": ["Sustainable growth"],
                "speakerNotes": "Wrap up.",
            },
        ],
    }


class FakeModels:
    """Stands in for client.aio.models of a google-genai client."""

    def __init__(self, text=None, parts=None, images=None, images_for=None, error=None):
        self.text = text
        self.parts = parts
        self.images = images
        self.images_for = images_for
        self.error = error
        self.calls = []

    async def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error:
            raise self.error
        content = SimpleNamespace(parts=self.parts) if self.parts is not None else None
        return SimpleNamespace(text=self.text, candidates=[SimpleNamespace(content=content)])

    async def generate_images(self, model, prompt, config=None):
        self.calls.append({"model": model, "prompt": prompt, "config": config})
        images = self.images_for(prompt) if self.images_for else self.images
        return SimpleNamespace(generated_images=images)


@pytest.fixture
def fake_genai():
    """Returns a factory building a fake client; the FakeModels is on client.aio.models."""
    def build(**kwargs):
        return SimpleNamespace(aio=SimpleNamespace(models=FakeModels(**kwargs)))
    return build


def generated_image(data: bytes, mime_type: str = "image/png"):
    return SimpleNamespace(image=SimpleNamespace(image_bytes=data, mime_type=mime_type))


def inline_part(data: bytes, mime_type: str = "image/png"):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def text_part(text: str):
    return SimpleNamespace(inline_data=None, text=text)
