"""
Shared fixtures: small images written to a temporary directory.
"""


import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def make_image(tmp_path):
    """Factory writing a solid image and returning its path."""

    def _make(name="img.png", size=(8, 6), mode="RGB", color=None):
        path = tmp_path / name
        if mode == "P":
            Image.new("RGB", size, color or (10, 20, 30)).convert("P").save(path)
            return path
        if color is None:
            color = 128 if mode == "L" else (10, 20, 30) + ((255,) if mode == "RGBA" else ())
        Image.new(mode, size, color).save(path)
        return path

    return _make


@pytest.fixture
def make_file(tmp_path):
    """Factory writing raw bytes (not necessarily a decodable image)."""

    def _make(name, data=b"\0" * 16):
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _make


class RecordingPainter:
    """Painter stand-in that records what the collection asked for."""

    instances = []

    def __init__(self, canvas):
        self.canvas = canvas
        self.ratio = None
        self.drawn = []
        RecordingPainter.instances.append(self)

    def set_ratio(self, ratio):
        self.ratio = ratio

    def draw_overlay(self, entry):
        self.drawn.append(entry)
        # mark the canvas so tests can tell the copy was painted
        self.canvas.putpixel((0, 0), (255, 0, 0) if self.canvas.mode != "L" else 255)


@pytest.fixture
def recording_painter():
    RecordingPainter.instances = []
    yield RecordingPainter
    RecordingPainter.instances = []


@pytest.fixture
def pixels_rgb():
    return np.zeros((6, 8, 3), dtype=np.uint8)
