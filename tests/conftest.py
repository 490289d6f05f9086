"""
Pytest configuration and fixtures for vectorizer tests
"""
import base64
import io
import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def _encode(array: np.ndarray, fmt: str = "PNG") -> str:
    buffer = io.BytesIO()
    Image.fromarray(array).save(buffer, format=fmt)
    return base64.b64encode(buffer.getvalue()).decode("ascii")


@pytest.fixture
def encode_image():
    """Encode a numpy raster as base64 in the given container format"""
    return _encode


@pytest.fixture
def blank_image():
    """40x30 all-background grayscale raster"""
    return np.zeros((30, 40), dtype=np.uint8)


@pytest.fixture
def square_image():
    """40x30 raster with one solid 10x10 foreground square at x=5..14, y=8..17"""
    img = np.zeros((30, 40), dtype=np.uint8)
    img[8:18, 5:15] = 255
    return img


@pytest.fixture
def ring_image():
    """Solid 12x12 square with a 4x4 hole in the middle"""
    img = np.zeros((30, 30), dtype=np.uint8)
    img[5:17, 5:17] = 255
    img[9:13, 9:13] = 0
    return img


@pytest.fixture
def square_b64(square_image):
    return _encode(square_image)
