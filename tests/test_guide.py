"""
Unit tests for inpaint_core/guide.py location guide compositing.

Tests cover the dimmed visual guide, the highlight frame, the binary mask
and input normalisation.
"""

import pytest
import numpy as np
from PIL import Image

from app_config.constants import GuideConfig
from inpaint_core.guide import (
    GuideMode,
    build_location_guide,
    create_binary_mask,
    create_visual_guide,
    frame_width,
    to_rgb_array
)
from inpaint_core.selection import BoundingBox


def dimmed(pixel):
    return np.round(np.asarray(pixel, dtype=np.uint8).astype(np.float32) * (1.0 - GuideConfig.OVERLAY_ALPHA)).astype(np.uint8)


class TestVisualGuide:
    """Test suite for create_visual_guide."""

    def test_output_matches_input_size(self, sample_image, sample_selection):
        guide = create_visual_guide(sample_image, sample_selection)
        assert isinstance(guide, Image.Image)
        assert guide.mode == "RGB"
        assert guide.size == (200, 100)

    def test_outside_selection_is_darkened(self, sample_image, sample_selection):
        guide = np.asarray(create_visual_guide(sample_image, sample_selection))
        np.testing.assert_array_equal(guide[90, 10], dimmed(sample_image[90, 10]))
        np.testing.assert_array_equal(guide[5, 190], dimmed(sample_image[5, 190]))

    def test_inside_selection_keeps_original(self, sample_image, sample_selection):
        guide = np.asarray(create_visual_guide(sample_image, sample_selection))
        np.testing.assert_array_equal(guide[40, 100], sample_image[40, 100])
        np.testing.assert_array_equal(guide[30, 60], sample_image[30, 60])

    def test_frame_drawn_on_selection_edge(self, sample_image, sample_selection):
        guide = np.asarray(create_visual_guide(sample_image, sample_selection))
        green = list(GuideConfig.FRAME_COLOR)
        assert list(guide[40, 50]) == green   # left edge
        assert list(guide[20, 100]) == green  # top edge
        assert list(guide[59, 100]) == green  # bottom edge

    def test_source_not_modified(self, sample_image, sample_selection):
        before = sample_image.copy()
        create_visual_guide(sample_image, sample_selection)
        np.testing.assert_array_equal(sample_image, before)

    def test_zero_alpha_leaves_surroundings(self, sample_image, sample_selection):
        guide = np.asarray(create_visual_guide(sample_image, sample_selection, overlay_alpha=0.0))
        np.testing.assert_array_equal(guide[90, 10], sample_image[90, 10])

    def test_invalid_alpha(self, sample_image, sample_selection):
        with pytest.raises(ValueError, match="overlay_alpha"):
            create_visual_guide(sample_image, sample_selection, overlay_alpha=1.5)

    def test_empty_selection(self, sample_image):
        with pytest.raises(ValueError, match="non-empty"):
            create_visual_guide(sample_image, BoundingBox(10, 10, 0, 20))

    def test_rgba_pil_input(self, sample_selection):
        rgba = Image.new("RGBA", (200, 100), (10, 20, 30, 128))
        guide = create_visual_guide(rgba, sample_selection)
        assert guide.mode == "RGB"


class TestFrameWidth:
    """Stroke width scales with the image but never drops below the minimum."""

    def test_minimum(self):
        assert frame_width(100) == GuideConfig.FRAME_WIDTH_MIN

    def test_scaled(self):
        assert frame_width(2000) == 10


class TestBinaryMask:
    """Test suite for create_binary_mask."""

    def test_mask_values(self, sample_image, sample_selection):
        mask = create_binary_mask(sample_image, sample_selection)
        assert mask.mode == "L"
        arr = np.asarray(mask)
        assert arr.shape == (100, 200)
        assert arr[40, 100] == 255
        assert arr[90, 10] == 0
        assert set(np.unique(arr)) == {0, 255}

    def test_mask_area(self, sample_image, sample_selection):
        arr = np.asarray(create_binary_mask(sample_image, sample_selection))
        assert int((arr == 255).sum()) == 100 * 40


class TestDispatch:
    """Test build_location_guide mode selection."""

    def test_visual_default(self, sample_image, sample_selection):
        assert build_location_guide(sample_image, sample_selection).mode == "RGB"

    def test_mask_by_value(self, sample_image, sample_selection):
        assert build_location_guide(sample_image, sample_selection, "mask").mode == "L"

    def test_unknown_mode(self, sample_image, sample_selection):
        with pytest.raises(ValueError):
            build_location_guide(sample_image, sample_selection, "sepia")


@pytest.mark.unit
class TestToRgbArray:
    def test_grayscale_expanded(self):
        arr = to_rgb_array(np.zeros((10, 10), dtype=np.uint8))
        assert arr.shape == (10, 10, 3)

    def test_rejects_other_types(self):
        with pytest.raises(ValueError, match="PIL Image or numpy array"):
            to_rgb_array([[1, 2, 3]])
