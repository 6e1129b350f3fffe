"""
Core engine for TextInpaint Pro: selection geometry, location guide
compositing, prompt construction and the generative model client.
"""

from .exceptions import (
    InpaintError,
    MissingApiKeyError,
    InvalidApiKeyError,
    InvalidImageError,
    NoContentError,
    ModelTextResponseError,
    GenerationError
)
from .selection import BoundingBox, latest_selection
from .guide import GuideMode, create_visual_guide, create_binary_mask, build_location_guide
from .inpainter import TextInpainter, InpaintResult

__all__ = [
    'InpaintError',
    'MissingApiKeyError',
    'InvalidApiKeyError',
    'InvalidImageError',
    'NoContentError',
    'ModelTextResponseError',
    'GenerationError',
    'BoundingBox',
    'latest_selection',
    'GuideMode',
    'create_visual_guide',
    'create_binary_mask',
    'build_location_guide',
    'TextInpainter',
    'InpaintResult'
]
