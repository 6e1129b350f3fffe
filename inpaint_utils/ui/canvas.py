"""
Canvas wrapper module - Handles background image conversion for streamlit-drawable-canvas.

The component's own background_image handling relies on a Streamlit
internal that moved between releases, so the background is passed as a
data URL inside initial_drawing instead.
"""

import streamlit as st
from streamlit_drawable_canvas import st_canvas as raw_st_canvas

from ..encoding import cached_background_url, image_to_png_bytes

FABRIC_VERSION = "4.4.0"


def st_canvas(*args, **kwargs):
    """
    Wrapper for streamlit_drawable_canvas with cached background image handling.

    Args:
        *args: Positional arguments passed to st_canvas
        **kwargs: Keyword arguments, including:
            - background_image: PIL Image to display as background
            - width, height: Canvas size in pixels
            - drawing_mode: 'rect' for the selection tool
            - Other st_canvas parameters

    Returns:
        Canvas result object with json_data and image_data
    """
    kwargs["background_color"] = "rgba(0,0,0,0)"
    bg_img = kwargs.pop("background_image", None)

    if bg_img is not None:
        width, height = kwargs.get("width"), kwargs.get("height")

        # Keyed on the image content, never on its file name
        image_bytes = st.session_state.get("image_bytes") or image_to_png_bytes(bg_img)
        url = cached_background_url(bg_img, width, image_bytes, st.session_state)

        initial_drawing = kwargs.get("initial_drawing") or {"version": FABRIC_VERSION, "objects": []}
        initial_drawing["background"] = "rgba(0,0,0,0)"
        initial_drawing["backgroundImage"] = {
            "type": "image",
            "version": FABRIC_VERSION,
            "originX": "left",
            "originY": "top",
            "left": 0,
            "top": 0,
            "width": width,
            "height": height,
            "scaleX": 1,
            "scaleY": 1,
            "visible": True,
            "src": url
        }
        kwargs["initial_drawing"] = initial_drawing

    return raw_st_canvas(*args, **kwargs)
