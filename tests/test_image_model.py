"""
Tests for ImageEntry.
"""

import numpy as np
import pytest

from pastie.models.image_model import ImageEntry


class TestImageEntry:
    """Test metadata and lifecycle of a single entry."""

    def test_from_path_reads_size(self, make_file):
        entry = ImageEntry.from_path(make_file("a.png", b"\0" * 300))

        assert entry.size_bytes == 300
        assert not entry.loaded
        assert entry.channels is None
        assert entry.width is None
        assert entry.height is None

    def test_metadata_after_attach(self, make_file, pixels_rgb):
        entry = ImageEntry.from_path(make_file("a.png"))
        entry.attach_pixels(pixels_rgb)

        assert entry.loaded
        assert (entry.channels, entry.width, entry.height) == (3, 8, 6)

    def test_load_decodes_once(self, make_file, pixels_rgb):
        path = make_file("a.png")
        entry = ImageEntry.from_path(path)
        calls = []

        def decoder(p):
            calls.append(p)
            return pixels_rgb

        assert entry.load(decoder)
        assert not entry.load(decoder)
        assert calls == [path]
        assert entry.width == 8

    def test_load_after_release(self, make_file, pixels_rgb):
        entry = ImageEntry.from_path(make_file("a.png"))
        entry.release()

        with pytest.raises(RuntimeError):
            entry.load(lambda _p: pixels_rgb)

    def test_grayscale_has_one_channel(self, make_file):
        entry = ImageEntry.from_path(make_file("a.png"))
        entry.attach_pixels(np.zeros((5, 9), dtype=np.uint8))

        assert (entry.channels, entry.width, entry.height) == (1, 9, 5)

    def test_attach_rejects_bad_shape(self, make_file):
        entry = ImageEntry.from_path(make_file("a.png"))

        with pytest.raises(ValueError):
            entry.attach_pixels(np.zeros(10, dtype=np.uint8))

    def test_release_once(self, make_file, pixels_rgb):
        entry = ImageEntry.from_path(make_file("a.png"))
        entry.attach_pixels(pixels_rgb)
        entry.add_marker(1, 2)

        entry.release()

        assert entry.released
        assert not entry.loaded
        assert entry.markers == []
        with pytest.raises(RuntimeError):
            entry.release()
        with pytest.raises(RuntimeError):
            entry.attach_pixels(pixels_rgb)

    def test_names(self, make_file):
        entry = ImageEntry.from_path(make_file("holiday.2015.JPG"))

        assert entry.base_name == "holiday"
        assert entry.extension == "jpg"

    def test_markers(self, make_file):
        entry = ImageEntry.from_path(make_file("a.png"))
        entry.add_marker(3.7, 4)
        entry.add_marker(5, 6)

        assert entry.markers == [(3, 4), (5, 6)]
        assert entry.undo_marker() == (5, 6)
        entry.clear_markers()
        assert entry.undo_marker() is None

    def test_entries_compare_by_identity(self, make_file):
        path = make_file("a.png")

        assert ImageEntry.from_path(path) != ImageEntry.from_path(path)
