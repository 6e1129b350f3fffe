"""
Selection geometry for the drag-to-select rectangle.

Boxes are stored as percentages (0-100) of the displayed image so that the
same selection maps onto the full resolution original.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Optional, Tuple


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(float(value), high))


@dataclass(frozen=True)
class BoundingBox:
    """Rectangle in percentage coordinates of the image."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        # Clamp into the image so x + width and y + height never exceed 100
        x = _clamp(self.x)
        y = _clamp(self.y)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "width", _clamp(self.width, 0.0, 100.0 - x))
        object.__setattr__(self, "height", _clamp(self.height, 0.0, 100.0 - y))

    @classmethod
    def from_drag(cls, start: Tuple[float, float], end: Tuple[float, float]) -> "BoundingBox":
        """
        Build a normalised box from a drag gesture.

        Args:
            start: (x, y) percentage point where the drag began
            end: (x, y) percentage point of the pointer now

        Returns:
            BoundingBox whose origin is the top-left corner regardless of
            drag direction
        """
        x0, y0 = _clamp(start[0]), _clamp(start[1])
        x1, y1 = _clamp(end[0]), _clamp(end[1])
        return cls(
            x=min(x0, x1),
            y=min(y0, y1),
            width=abs(x1 - x0),
            height=abs(y1 - y0),
        )

    @classmethod
    def from_canvas_object(cls, obj: Dict, display_width: int, display_height: int) -> Optional["BoundingBox"]:
        """
        Convert a streamlit-drawable-canvas rect object into a percentage box.

        The canvas reports left/top/width/height in display pixels, with any
        transform handle resizing stored in scaleX/scaleY.
        """
        if display_width <= 0 or display_height <= 0:
            raise ValueError(f"Invalid display size {display_width}x{display_height}")
        if "width" not in obj or "height" not in obj:
            return None

        left = float(obj.get("left", 0))
        top = float(obj.get("top", 0))
        width = float(obj["width"]) * float(obj.get("scaleX", 1.0))
        height = float(obj["height"]) * float(obj.get("scaleY", 1.0))

        start = (left / display_width * 100, top / display_height * 100)
        end = ((left + width) / display_width * 100, (top + height) / display_height * 100)
        return cls.from_drag(start, end)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> Optional["BoundingBox"]:
        if not data:
            return None
        return cls(data["x"], data["y"], data["width"], data["height"])

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def area_ratio(self) -> float:
        """Fraction of the image covered by the box (0-1)."""
        return (self.width / 100.0) * (self.height / 100.0)

    def to_pixels(self, image_width: int, image_height: int) -> Tuple[float, float, float, float]:
        """Return (x, y, w, h) in image pixels, unrounded."""
        return (
            self.x / 100.0 * image_width,
            self.y / 100.0 * image_height,
            self.width / 100.0 * image_width,
            self.height / 100.0 * image_height,
        )

    def to_pixel_bounds(self, image_width: int, image_height: int) -> Tuple[int, int, int, int]:
        """Return integer (x1, y1, x2, y2) bounds clipped to the image."""
        px, py, pw, ph = self.to_pixels(image_width, image_height)
        x1 = max(0, min(image_width, int(round(px))))
        y1 = max(0, min(image_height, int(round(py))))
        x2 = max(0, min(image_width, int(round(px + pw))))
        y2 = max(0, min(image_height, int(round(py + ph))))
        return x1, y1, x2, y2


def display_size(image_width: int, image_height: int, max_width: int) -> Tuple[int, int]:
    """Canvas size preserving aspect ratio, never upscaling small images."""
    width = min(max_width, image_width)
    height = max(1, int(round(image_height * width / image_width)))
    return width, height


def latest_selection(objects, display_width: int, display_height: int) -> Optional[BoundingBox]:
    """
    Selection from a canvas drawing: the most recently drawn rectangle.

    Only one region is edited per request, so earlier rectangles are ignored
    unless the newer ones carry no size.
    """
    for obj in reversed(objects or []):
        if obj.get("type") != "rect":
            continue
        box = BoundingBox.from_canvas_object(obj, display_width, display_height)
        if box is not None:
            return box
    return None
