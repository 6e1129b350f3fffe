"""
Unit tests for inpaint_core/selection.py.

Tests cover drag normalisation, clamping, canvas object conversion and
pixel mapping.
"""

import pytest
from inpaint_core.selection import BoundingBox, display_size, latest_selection


class TestFromDrag:
    """Test suite for BoundingBox.from_drag."""

    def test_forward_drag(self):
        box = BoundingBox.from_drag((10, 20), (40, 60))
        assert box == BoundingBox(10, 20, 30, 40)

    def test_reverse_drag_is_normalised(self):
        """Dragging up-left yields the same box as dragging down-right."""
        assert BoundingBox.from_drag((40, 60), (10, 20)) == BoundingBox.from_drag((10, 20), (40, 60))

    def test_pointer_clamped_to_image(self):
        box = BoundingBox.from_drag((-15, 50), (130, 120))
        assert box.x == 0
        assert box.y == 50
        assert box.width == 100
        assert box.height == 50

    def test_zero_size_drag_is_empty(self):
        box = BoundingBox.from_drag((30, 30), (30, 30))
        assert box.is_empty


class TestClamping:
    """Boxes never extend past the image."""

    def test_width_clamped(self):
        box = BoundingBox(80, 10, 50, 10)
        assert box.x + box.width == 100

    def test_negative_origin(self):
        box = BoundingBox(-5, -5, 10, 10)
        assert (box.x, box.y) == (0, 0)


class TestCanvasConversion:
    """Test suite for canvas rect objects."""

    def test_rect_object(self):
        obj = {"type": "rect", "left": 200, "top": 100, "width": 400, "height": 200}
        box = BoundingBox.from_canvas_object(obj, 800, 400)
        assert box == BoundingBox(25, 25, 50, 50)

    def test_scaled_rect_object(self):
        """Transform handles store resizing in scaleX/scaleY."""
        obj = {"type": "rect", "left": 0, "top": 0, "width": 100, "height": 100, "scaleX": 2.0, "scaleY": 0.5}
        box = BoundingBox.from_canvas_object(obj, 400, 200)
        assert box.width == pytest.approx(50)
        assert box.height == pytest.approx(25)

    def test_invalid_display_size(self):
        with pytest.raises(ValueError, match="Invalid display size"):
            BoundingBox.from_canvas_object({"width": 1, "height": 1}, 0, 100)

    def test_latest_selection_uses_last_rect(self):
        objects = [
            {"type": "rect", "left": 0, "top": 0, "width": 10, "height": 10},
            {"type": "path", "left": 5, "top": 5},
            {"type": "rect", "left": 50, "top": 50, "width": 20, "height": 20},
        ]
        box = latest_selection(objects, 100, 100)
        assert box == BoundingBox(50, 50, 20, 20)

    def test_latest_selection_without_rect(self):
        assert latest_selection([{"type": "circle"}], 100, 100) is None
        assert latest_selection([], 100, 100) is None

    def test_latest_selection_skips_rect_without_size(self):
        objects = [
            {"type": "rect", "left": 10, "top": 10, "width": 30, "height": 30},
            {"type": "rect", "left": 50, "top": 50},
        ]
        assert latest_selection(objects, 100, 100) == BoundingBox(10, 10, 30, 30)


class TestPixelMapping:
    """Test percentage to pixel conversion."""

    def test_to_pixels(self):
        box = BoundingBox(10, 20, 30, 40)
        assert box.to_pixels(1000, 500) == pytest.approx((100, 100, 300, 200))

    def test_to_pixel_bounds(self, sample_selection):
        assert sample_selection.to_pixel_bounds(200, 100) == (50, 20, 150, 60)

    def test_area_ratio(self):
        assert BoundingBox(0, 0, 50, 50).area_ratio == pytest.approx(0.25)

    def test_dict_round_trip(self, sample_selection):
        assert BoundingBox.from_dict(sample_selection.as_dict()) == sample_selection
        assert BoundingBox.from_dict(None) is None


class TestDisplaySize:
    """Canvas size for an image shown at a maximum width."""

    def test_wide_image_scaled_down(self):
        assert display_size(1600, 900, 800) == (800, 450)

    def test_tall_image_keeps_ratio(self):
        assert display_size(1000, 3000, 800) == (800, 2400)

    def test_small_image_not_upscaled(self):
        assert display_size(300, 200, 800) == (300, 200)

    def test_thin_strip_keeps_one_row(self):
        assert display_size(4000, 1, 800) == (800, 1)
