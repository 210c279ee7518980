"""
Pytest configuration and shared fixtures for test suite.
"""

import io
import shutil
import tempfile
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from imagecatalog.catalog import reset_stores
from imagecatalog.user_config import ENV_PREFIX, get_user_config


def _blocky_image(seed: int, size: int = 128) -> Image.Image:
    """8x8 random colour blocks scaled up: low-frequency content pHash can see."""
    rng = np.random.default_rng(seed)
    blocks = rng.integers(0, 256, (8, 8, 3), dtype=np.uint8)
    return Image.fromarray(blocks).resize((size, size), Image.NEAREST)


def encode_image(img: Image.Image, fmt: str = 'PNG') -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, fmt)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def _fresh_store_registry():
    """Each test starts without shared stores."""
    reset_stores()
    yield
    reset_stores()


@pytest.fixture(autouse=True)
def _isolated_user_config(tmp_path_factory, monkeypatch):
    """Keep the real ~/.imagecatalog and IMAGECATALOG_* variables out of tests."""
    for name in ("MEDIA_DIR", "WORKERS", "THRESHOLD", "SAMPLE_LIMIT", "PORT"):
        monkeypatch.delenv(f"{ENV_PREFIX}{name}", raising=False)
    monkeypatch.setenv(f"{ENV_PREFIX}CONFIG_DIR", str(tmp_path_factory.mktemp("config")))
    config = get_user_config()
    config.reload()
    yield config
    config.reload()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def make_image_bytes():
    """
    Factory for encoded test images.

    Images with the same seed have identical pixels; different seeds give
    unrelated block patterns.
    """
    def _make(seed: int = 0, fmt: str = 'PNG') -> bytes:
        return encode_image(_blocky_image(seed), fmt)
    return _make


@pytest.fixture
def image_bytes(make_image_bytes):
    """Encoded PNG image."""
    return make_image_bytes(1)


@pytest.fixture
def other_image_bytes(make_image_bytes):
    """Encoded PNG image unrelated to ``image_bytes``."""
    return make_image_bytes(2)


@pytest.fixture
def jpeg_bytes(make_image_bytes):
    """Encoded JPEG image."""
    return make_image_bytes(3, 'JPEG')


@pytest.fixture
def media_dir(temp_dir):
    """Empty media directory inside the temp dir."""
    path = temp_dir / "media"
    path.mkdir()
    return path


@pytest.fixture
def duplicate_media_dir(media_dir, jpeg_bytes, other_image_bytes):
    """
    Media directory with:
    - abc123.jpg, xyz789.jpg (identical bytes)
    - other.png (unrelated image)
    - notes.txt (not an image)
    """
    (media_dir / "abc123.jpg").write_bytes(jpeg_bytes)
    (media_dir / "xyz789.jpg").write_bytes(jpeg_bytes)
    (media_dir / "other.png").write_bytes(other_image_bytes)
    (media_dir / "notes.txt").write_text("not an image")
    return media_dir
