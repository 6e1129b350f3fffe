import logging
import time

import streamlit as st
from PIL import UnidentifiedImageError

from app_config.constants import ModelConfig
from inpaint_core.exceptions import InpaintError, InvalidApiKeyError
from inpaint_core.guide import GuideMode
from inpaint_core.selection import BoundingBox
from .encoding import bytes_to_image, mime_for_image
from .security import sanitize_filename, validate_image_size, validate_replacement_text, validate_upload

logger = logging.getLogger(__name__)

INVALID_KEY_MESSAGE = "API Key session expired or invalid. Please reconnect."


def _state(state):
    return st.session_state if state is None else state


def initialize_session_state(state=None):
    """Initialize all session state variables without overwriting existing ones."""
    state = _state(state)
    defaults = {
        "image_bytes": None,      # Current working image, encoded as uploaded
        "image_mime": None,
        "file_name": None,
        "selection": None,        # BoundingBox in percentages
        "input_text": "",
        "is_processing": False,
        "pending_request": False, # Consumed by run_inpaint on the next rerun
        "result_bytes": None,     # Generated image awaiting a decision
        "result_mime": None,
        "show_reset_confirmation": False,
        "guide_mode": GuideMode.VISUAL.value,
        "canvas_id": 0,           # Bump to reset the selection canvas
        "uploader_id": 0,         # Bump to clear the file input
        "last_error": None,
        "api_key_invalid": False,
        "session_api_key": None,
        "edit_round": 0
    }
    for key, value in defaults.items():
        if key not in state:
            state[key] = value


def _reset_canvas(state):
    state["selection"] = None
    state["canvas_id"] = state.get("canvas_id", 0) + 1


def cb_load_image(data: bytes, mime_type=None, file_name="image.png", state=None):
    """
    Make an uploaded file the working image.

    Returns:
        tuple: (is_valid, error_message)
    """
    state = _state(state)
    file_name = sanitize_filename(file_name or "image.png")

    valid, msg = validate_upload(file_name, len(data or b""))
    if not valid:
        return False, msg

    try:
        image = bytes_to_image(data)
    except (UnidentifiedImageError, OSError) as e:
        logger.error(f"Error reading file {file_name}: {e}")
        return False, "Failed to load image."

    valid, msg = validate_image_size(*image.size)
    if not valid:
        return False, msg

    state["image_bytes"] = data
    state["image_mime"] = mime_type or mime_for_image(image)
    state["file_name"] = file_name
    state["result_bytes"] = None
    state["result_mime"] = None
    state["input_text"] = ""
    state["last_error"] = None
    state["edit_round"] = 0
    _reset_canvas(state)
    logger.info(f"Loaded image {file_name} ({image.size[0]}x{image.size[1]}, {state['image_mime']})")
    return True, None


def cb_selection_changed(box, state=None):
    state = _state(state)
    if box is not None and not isinstance(box, BoundingBox):
        box = BoundingBox.from_dict(box)
    state["selection"] = box


def is_ready_to_submit(state=None) -> bool:
    state = _state(state)
    selection = state.get("selection")
    text_ok, _ = validate_replacement_text(state.get("input_text"))
    return (
        not state.get("is_processing", False)
        and state.get("image_bytes") is not None
        and text_ok
        and selection is not None
        and not selection.is_empty
    )


def cb_submit_inpaint(state=None) -> bool:
    """
    Queue the current selection and text for generation.

    Sets is_processing straight away so the controls render disabled
    while the request runs on the following rerun.

    Returns:
        bool: True if a request was queued
    """
    state = _state(state)
    if not is_ready_to_submit(state):
        return False
    state["is_processing"] = True
    state["pending_request"] = True
    state["last_error"] = None
    return True


def run_inpaint(inpainter, state=None) -> bool:
    """
    Run the request queued by cb_submit_inpaint.

    Each submit runs at most once; is_processing is cleared when the
    request finishes either way.

    Returns:
        bool: True if a result was stored
    """
    state = _state(state)
    if not state.get("pending_request"):
        return False
    state["pending_request"] = False

    try:
        result = inpainter.inpaint_text(
            state["image_bytes"],
            state["image_mime"],
            state["selection"],
            state["input_text"].strip(),
            GuideMode(state.get("guide_mode", GuideMode.VISUAL.value)),
        )
        state["result_bytes"] = result.image_bytes
        state["result_mime"] = result.mime_type
        state["api_key_invalid"] = False
        return True
    except InvalidApiKeyError:
        logger.warning("Inpaint request rejected the API key")
        state["last_error"] = INVALID_KEY_MESSAGE
        state["api_key_invalid"] = True
        return False
    except (InpaintError, ValueError) as e:
        logger.warning(f"Inpaint request failed ({type(e).__name__})")
        state["last_error"] = f"Error: {str(e) or 'Unknown error occurred'}"
        return False
    finally:
        state["is_processing"] = False


def cb_discard_result(state=None):
    state = _state(state)
    state["result_bytes"] = None
    state["result_mime"] = None


def cb_continue_editing(state=None):
    """Adopt the generated result as the working image for the next round."""
    state = _state(state)
    if state.get("result_bytes") is None:
        return False

    state["image_bytes"] = state["result_bytes"]
    state["image_mime"] = state.get("result_mime") or ModelConfig.DEFAULT_RESULT_MIME
    state["file_name"] = f"edited_{int(time.time() * 1000)}.png"
    state["result_bytes"] = None
    state["result_mime"] = None
    state["input_text"] = ""
    state["edit_round"] = state.get("edit_round", 0) + 1
    _reset_canvas(state)
    return True


def cb_request_reset(state=None):
    _state(state)["show_reset_confirmation"] = True


def cb_cancel_reset(state=None):
    _state(state)["show_reset_confirmation"] = False


def cb_confirm_reset(state=None):
    """Discard all progress and return to the landing page."""
    state = _state(state)
    state["image_bytes"] = None
    state["image_mime"] = None
    state["file_name"] = None
    state["input_text"] = ""
    state["is_processing"] = False
    state["pending_request"] = False
    state["result_bytes"] = None
    state["result_mime"] = None
    state["last_error"] = None
    state["edit_round"] = 0
    state["show_reset_confirmation"] = False
    state["uploader_id"] = state.get("uploader_id", 0) + 1
    _reset_canvas(state)


def download_file_name() -> str:
    return f"inpaint-result-{int(time.time() * 1000)}.png"
