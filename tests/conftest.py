import io

import pytest
from PIL import Image


def encode(image: Image.Image, format: str = "PNG") -> bytes:
    buf = io.BytesIO()
    image.save(buf, format=format)
    return buf.getvalue()


@pytest.fixture
def white_png():
    return encode(Image.new("RGB", (2, 2), (255, 255, 255)))


@pytest.fixture
def gradient_image():
    """Left half black, right half white."""
    img = Image.new("RGB", (20, 10), (0, 0, 0))
    img.paste((255, 255, 255), (10, 0, 20, 10))
    return img
