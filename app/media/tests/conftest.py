"""
Test fixtures for media app.

Provides fixtures for:
- Catalog entries (raster with variants, SVG, audio, video, malformed)
- A registry and render context built from them
- Sample image files and ZIP archives for the safety caps
"""

from __future__ import annotations

import io
import zipfile

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from media.registry import InMemoryMediaRegistry
from media.rendering import RenderContext

BASE_PATHS = {
    "image": "/uploads/images",
    "audio": "/uploads/audios",
    "video": "/uploads/videos",
}


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def media_files() -> dict:
    """Catalog mapping in the media.json shape."""
    return {
        "photo.jpg": {
            "type": "image/jpeg",
            "path": "/uploads/images/photo.jpg",
            "width": 4000,
            "height": 3000,
            "sizes": {
                "small": {
                    "path": "/uploads/images/photo-small.jpg",
                    "width": 480,
                    "height": 360,
                },
                "medium": {
                    "path": "/uploads/images/photo-medium.jpg",
                    "width": 1024,
                    "height": 768,
                },
                "large": {
                    "path": "/uploads/images/photo-large.jpg",
                    "width": 1920,
                    "height": 1440,
                },
            },
            "metadata": {"alt": "Harbour at dusk", "title": "Evening harbour"},
        },
        "plain.png": {
            "type": "image/png",
            "path": "/uploads/images/plain.png",
            "width": 640,
            "height": 480,
            "metadata": {},
        },
        "logo.svg": {
            "type": "image/svg+xml",
            "path": "/uploads/images/logo.svg",
            "width": 300,
            "height": 120,
            "sizes": {
                "large": {
                    "path": "/uploads/images/logo-large.svg",
                    "width": 900,
                    "height": 360,
                },
            },
            "metadata": {"alt": "Company logo"},
        },
        "clip.mp3": {
            "type": "audio/mpeg",
            "path": "/uploads/audios/clip.mp3",
            "metadata": {"title": "Morning song", "artist": "The Gulls"},
        },
        "trailer.mp4": {
            "type": "video/mp4",
            "path": "/uploads/videos/trailer.mp4",
            "width": 1920,
            "height": 1080,
            "thumbnail": "/uploads/images/trailer-poster.jpg",
        },
        "broken.jpg": {
            "type": "image/jpeg",
            "width": 100,
            "height": 100,
        },
    }


@pytest.fixture
def registry(media_files: dict) -> InMemoryMediaRegistry:
    """Registry built from the catalog fixture."""
    return InMemoryMediaRegistry.from_mapping(media_files)


@pytest.fixture
def render_context(registry: InMemoryMediaRegistry) -> RenderContext:
    """Render context with fixed base paths."""
    return RenderContext.from_registry(registry, BASE_PATHS)


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def sample_png() -> io.BytesIO:
    """Generate a valid PNG image file."""
    image = Image.new("RGB", (100, 80), color="red")
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    buffer.seek(0)
    buffer.name = "test_image.png"
    return buffer


@pytest.fixture
def wide_png() -> io.BytesIO:
    """A PNG wider than the default 10,000px dimension cap."""
    image = Image.new("1", (12_000, 2))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    buffer.seek(0)
    buffer.name = "wide.png"
    return buffer


@pytest.fixture
def sample_png_uploaded(sample_png: io.BytesIO) -> SimpleUploadedFile:
    """Return PNG as SimpleUploadedFile."""
    return SimpleUploadedFile(
        name="test_image.png",
        content=sample_png.read(),
        content_type="image/png",
    )


def _zip(names: list[str]) -> zipfile.ZipFile:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name in names:
            archive.writestr(name, b"x")
    buffer.seek(0)
    return zipfile.ZipFile(buffer)


@pytest.fixture
def safe_zip() -> zipfile.ZipFile:
    """Archive with a handful of ordinary entries."""
    return _zip(["theme/index.html", "theme/assets/style.css", "theme/assets/app.js"])


@pytest.fixture
def traversal_zip() -> zipfile.ZipFile:
    """Archive containing a path traversal entry."""
    return _zip(["theme/index.html", "../../etc/passwd"])
