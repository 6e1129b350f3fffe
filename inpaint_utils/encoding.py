import base64
import hashlib
import io

import numpy as np
import streamlit as st
from PIL import Image

from app_config.constants import UIConfig


def bytes_to_base64(data: bytes) -> str:
    """Base64 without any data URL prefix."""
    return base64.b64encode(data).decode("ascii")


def bytes_to_image(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def image_to_png_bytes(image) -> bytes:
    if isinstance(image, np.ndarray):
        image = Image.fromarray(image)
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def mime_for_image(image: Image.Image, fallback: str = "image/png") -> str:
    """Mime type matching the image's decoded format."""
    return Image.MIME.get(image.format or "", fallback)


def background_cache_key(image_bytes: bytes, width) -> str:
    """Cache key for a canvas background, derived from the image content."""
    return f"bg_{hashlib.sha1(image_bytes).hexdigest()}_{width}"


@st.cache_data(show_spinner=False, max_entries=UIConfig.IMAGE_ENCODING_CACHE_SIZE)
def _cached_image_to_url(_image, width, image_id):
    """Internal cached encoder that avoids hashing the heavy image data."""
    img = _image
    if isinstance(img, np.ndarray):
        img = Image.fromarray(img)
    if img.mode != "RGB":
        img = img.convert("RGB")

    # Resize to the canvas width to reduce payload
    if width is not None and width > 0 and width != img.size[0]:
        w_percent = (width / float(img.size[0]))
        h_size = max(1, int((float(img.size[1]) * float(w_percent))))
        img = img.resize((width, h_size), Image.LANCZOS)

    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=UIConfig.BACKGROUND_IMAGE_QUALITY)
    return f"data:image/jpeg;base64,{bytes_to_base64(buf.getvalue())}"


def image_to_url_patch(image, width=0, image_id=""):
    """Encode a canvas background as a JPEG data URL, cached per image_id.

    image_id must change whenever the image content does; see background_cache_key.
    """
    return _cached_image_to_url(image, width, image_id)


def cached_background_url(image, width, image_bytes: bytes, state) -> str:
    """
    Canvas background URL for the working image, reused within a session.

    The session keeps only the latest entry, so a new upload or edit round
    always re-encodes.
    """
    cache_key = background_cache_key(image_bytes, width)
    cached = state.get("bg_url_cache")
    if cached is not None and cached[0] == cache_key:
        return cached[1]

    url = image_to_url_patch(image, width, cache_key)
    state["bg_url_cache"] = (cache_key, url)
    return url
