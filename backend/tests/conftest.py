"""
Shared pytest fixtures and configuration for all tests
"""
import io
import pytest
import sys
from pathlib import Path
from types import SimpleNamespace

from PIL import Image

# Add backend to Python path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

@pytest.fixture
def client():
    """Provide FastAPI test client"""
    from fastapi.testclient import TestClient
    from main import app
    return TestClient(app)

@pytest.fixture
def png_bytes():
    """A small RGBA PNG"""
    buffer = io.BytesIO()
    Image.new("RGBA", (32, 24), (200, 40, 40, 128)).save(buffer, format="PNG")
    return buffer.getvalue()

@pytest.fixture
def jpeg_bytes():
    """A 400x200 RGB JPEG"""
    buffer = io.BytesIO()
    Image.new("RGB", (400, 200), (10, 120, 220)).save(buffer, format="JPEG")
    return buffer.getvalue()

def make_gemini_response(parts):
    """Build an object shaped like a google-genai GenerateContentResponse"""
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))]
    )

def text_part(text):
    return SimpleNamespace(text=text, inline_data=None)

def image_part(data, mime_type="image/png"):
    return SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type))

@pytest.fixture
def gemini():
    """Builders for fake Gemini responses: gemini.response(gemini.text("hi"), gemini.image(b"..."))"""
    return SimpleNamespace(
        response=lambda *parts: make_gemini_response(list(parts)),
        text=text_part,
        image=image_part
    )
