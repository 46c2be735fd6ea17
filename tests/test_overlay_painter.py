"""
Tests for OverlayPainter.
"""

import numpy as np
import pytest
from PIL import Image

from pastie.models.image_model import ImageEntry
from pastie.services.overlay_painter import OverlayPainter


@pytest.fixture
def entry(make_file):
    return ImageEntry.from_path(make_file("shot.png"))


class TestOverlayPainter:
    """Test drawing onto the provided canvas."""

    def test_ratio_must_be_positive(self):
        painter = OverlayPainter(Image.new("RGB", (10, 10)))

        with pytest.raises(ValueError):
            painter.set_ratio(0)
        painter.set_ratio(0.5)
        assert painter.ratio == 0.5

    def test_markers_drawn_in_place(self, entry):
        canvas = Image.new("RGB", (200, 200))
        entry.add_marker(50, 50)
        painter = OverlayPainter(canvas, color=(0, 255, 0))
        painter.set_ratio(0.2)

        painter.draw_overlay(entry)

        arr = np.asarray(canvas)
        region = arr[40:61, 40:61]
        assert np.any(np.all(region == (0, 255, 0), axis=-1))

    def test_caption_at_bottom(self, entry):
        canvas = Image.new("RGB", (300, 200))
        painter = OverlayPainter(canvas, caption_color=(255, 255, 255))
        painter.set_ratio(0.3)

        painter.draw_overlay(entry)

        arr = np.asarray(canvas)
        assert arr[-40:].max() > 0
        assert arr[:100].max() == 0

    def test_grayscale_canvas(self, entry):
        canvas = Image.new("L", (100, 100))
        entry.add_marker(30, 30)
        painter = OverlayPainter(canvas)

        painter.draw_overlay(entry)

        assert np.asarray(canvas).max() > 0

    def test_rgba_canvas_keeps_mode(self, entry):
        canvas = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
        entry.add_marker(30, 30)
        OverlayPainter(canvas).draw_overlay(entry)

        assert canvas.mode == "RGBA"
        assert np.asarray(canvas)[..., 3].max() == 255
