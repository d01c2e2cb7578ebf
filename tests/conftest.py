import base64
import io
import random
import struct
import zlib

import pytest
from PIL import Image

from itinerary_builder.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_image(width, height, mode="RGB", noise=False, fmt="PNG", seed=7):
    if noise:
        channels = len(mode)
        data = random.Random(seed).randbytes(width * height * channels)
        image = Image.frombytes(mode, (width, height), data)
    else:
        color = (30, 120, 200, 128) if mode == "RGBA" else (30, 120, 200)
        image = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def png_claiming_size(width, height):
    """1x1 PNG whose IHDR header advertises a different size."""

    raw = make_image(1, 1)
    header = struct.pack(">II", width, height) + raw[24:29]
    crc = struct.pack(">I", zlib.crc32(b"IHDR" + header))
    return raw[:16] + header + crc + raw[33:]


def as_data_url(raw, mime="image/png"):
    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"


@pytest.fixture
def png_bytes():
    return make_image(200, 100)


@pytest.fixture
def noisy_png_bytes():
    return make_image(640, 480, noise=True)
