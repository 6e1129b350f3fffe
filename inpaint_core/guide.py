"""
Location guide compositing.

The guide is a second image sent alongside the source so the model knows
where to edit. Two strategies are available:

- VISUAL: the original image with everything outside the selection dimmed
  and a bright frame around the selection. The model can still see the
  background content, which helps it align pixels with the source.
- MASK: a classic binary mask, white inside the selection and black
  elsewhere.
"""

import logging
from enum import Enum
from typing import Union

import cv2
import numpy as np
from PIL import Image

from app_config.constants import GuideConfig
from inpaint_utils.logger import log_exceptions
from .selection import BoundingBox

logger = logging.getLogger(__name__)

ImageLike = Union[Image.Image, np.ndarray]


class GuideMode(Enum):
    VISUAL = "visual"
    MASK = "mask"


def to_rgb_array(image: ImageLike) -> np.ndarray:
    """Normalise a PIL image or numpy array to an (H, W, 3) uint8 RGB array."""
    if isinstance(image, Image.Image):
        if image.mode != "RGB":
            image = image.convert("RGB")
        return np.asarray(image, dtype=np.uint8).copy()

    if not isinstance(image, np.ndarray):
        raise ValueError(f"image must be a PIL Image or numpy array, got {type(image)}")

    if image.ndim == 2:
        return cv2.cvtColor(image.astype(np.uint8), cv2.COLOR_GRAY2RGB)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image.astype(np.uint8), cv2.COLOR_RGBA2RGB)
    if image.ndim == 3 and image.shape[2] == 3:
        return image.astype(np.uint8).copy()

    raise ValueError(f"image must be (H, W), (H, W, 3) or (H, W, 4), got {image.shape}")


def frame_width(image_width: int) -> int:
    """Stroke width of the highlight frame, scaled to the image."""
    return max(GuideConfig.FRAME_WIDTH_MIN, int(round(image_width * GuideConfig.FRAME_WIDTH_RATIO)))


def _selection_bounds(shape, selection: BoundingBox):
    if selection is None or selection.is_empty:
        raise ValueError("selection must be a non-empty BoundingBox")
    h, w = shape[:2]
    x1, y1, x2, y2 = selection.to_pixel_bounds(w, h)
    if x2 <= x1 or y2 <= y1:
        raise ValueError(f"selection {selection} covers no pixels of a {w}x{h} image")
    return x1, y1, x2, y2


def create_visual_guide(image: ImageLike, selection: BoundingBox,
                        overlay_alpha: float = GuideConfig.OVERLAY_ALPHA) -> Image.Image:
    """
    Build the "dim and frame" location guide.

    Args:
        image: Source image (PIL or numpy, RGB/RGBA/grayscale)
        selection: Area to edit, in percentage coordinates
        overlay_alpha: Opacity of the black overlay outside the selection

    Returns:
        PIL.Image: RGB guide, same size as the source

    Raises:
        ValueError: If the selection is empty or overlay_alpha is out of range
    """
    if not 0.0 <= overlay_alpha <= 1.0:
        raise ValueError(f"overlay_alpha must be between 0 and 1, got {overlay_alpha}")

    original = to_rgb_array(image)
    x1, y1, x2, y2 = _selection_bounds(original.shape, selection)

    # 1. Darken the whole image (black overlay composited at overlay_alpha)
    guide = np.round(original.astype(np.float32) * (1.0 - overlay_alpha)).astype(np.uint8)

    # 2. Restore the selection at full brightness
    guide[y1:y2, x1:x2] = original[y1:y2, x1:x2]

    # 3. Frame the selection, stroke centred on the rectangle edge
    thickness = frame_width(original.shape[1])
    cv2.rectangle(guide, (x1, y1), (x2 - 1, y2 - 1), GuideConfig.FRAME_COLOR, thickness)

    logger.debug(f"Visual guide built: box=({x1},{y1},{x2},{y2}) frame={thickness}px")
    return Image.fromarray(guide)


def create_binary_mask(image: ImageLike, selection: BoundingBox) -> Image.Image:
    """
    Build a binary mask the size of the image: white selection on black.

    Returns:
        PIL.Image: single channel ("L") mask
    """
    original = to_rgb_array(image)
    x1, y1, x2, y2 = _selection_bounds(original.shape, selection)

    mask = np.full(original.shape[:2], GuideConfig.MASK_BACKGROUND, dtype=np.uint8)
    mask[y1:y2, x1:x2] = GuideConfig.MASK_FOREGROUND
    return Image.fromarray(mask)


@log_exceptions
def build_location_guide(image: ImageLike, selection: BoundingBox,
                         mode: GuideMode = GuideMode.VISUAL) -> Image.Image:
    """Dispatch to the guide strategy for ``mode``."""
    mode = GuideMode(mode)
    if mode is GuideMode.MASK:
        return create_binary_mask(image, selection)
    return create_visual_guide(image, selection)
