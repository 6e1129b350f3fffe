"""
UI Components Package.

Package structure:
- canvas.py: drawable canvas wrapper with cached background encoding
"""

from .canvas import st_canvas

__all__ = [
    'st_canvas'
]
