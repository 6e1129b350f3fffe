import logging

import streamlit as st
from streamlit_image_comparison import image_comparison

from app_config.constants import GuideConfig, UIConfig, UploadConfig
from app_config.settings import get_api_key
from inpaint_core.guide import GuideMode, build_location_guide
from inpaint_core.inpainter import TextInpainter
from inpaint_core.selection import display_size, latest_selection
from .encoding import bytes_to_image
from .state_manager import (
    cb_cancel_reset,
    cb_confirm_reset,
    cb_continue_editing,
    cb_discard_result,
    cb_load_image,
    cb_request_reset,
    cb_selection_changed,
    cb_submit_inpaint,
    download_file_name,
    is_ready_to_submit,
    run_inpaint
)
from .ui import st_canvas

logger = logging.getLogger(__name__)

GUIDE_MODE_LABELS = {
    GuideMode.VISUAL.value: "🟩 Visual Guide (dim + frame)",
    GuideMode.MASK.value: "⬛ Binary Mask"
}


# --- STYLES ---
def setup_styles():
    """Apply the dark workspace theme and step badges."""
    st.markdown(f"""
        <style>
        .landing-container {{ text-align: center; padding: 40px 0 10px 0; }}
        .landing-container h1 {{ font-size: 2.6rem; font-weight: 800; margin-bottom: 0; }}
        .landing-container h1 span {{
            background: linear-gradient(90deg, #FACC15, #F97316);
            -webkit-background-clip: text;
            -webkit-text-fill-color: transparent;
        }}
        .landing-sub p {{ color: #9CA3AF; font-size: 1.05rem; }}
        .step-badge {{
            display: inline-flex; align-items: center; justify-content: center;
            width: 24px; height: 24px; border-radius: 50%;
            background: #1F2937; color: #FACC15; font-weight: 700; font-size: 0.8rem;
            margin-right: 8px;
        }}
        .step-badge.done {{ background: {GuideConfig.FRAME_COLOR_HEX}; color: #000; }}
        .model-tag {{
            font-size: 0.7rem; padding: 2px 8px; border-radius: 999px;
            border: 1px solid #FACC15; color: #FACC15;
        }}
        .pro-tip {{ font-size: 0.8rem; color: #9CA3AF; }}
        </style>
    """, unsafe_allow_html=True)


# --- API KEY ---
def resolve_api_key():
    return st.session_state.get("session_api_key") or get_api_key()


@st.cache_resource(show_spinner=False)
def get_inpainter(api_key):
    """One client per key for the whole server process."""
    return TextInpainter(api_key=api_key)


def render_api_key_gate():
    """
    Ask for an API key when none is configured, or when the API rejected it.

    Returns:
        str or None: The key to use, or None while the gate is shown
    """
    api_key = resolve_api_key()
    if api_key and not st.session_state.get("api_key_invalid"):
        return api_key

    c1, c2, c3 = st.columns([1, 2, 1])
    with c2:
        st.markdown("### 🔑 Connect an API Key")
        if st.session_state.get("api_key_invalid"):
            st.warning("API Key session expired or invalid. Please reconnect.")
        st.markdown(
            "The high-fidelity **Gemini 3 Pro Image** model requires a key from a "
            "billing-enabled project. Set `GEMINI_API_KEY` in your environment or `.env`, "
            "or enter a key for this session."
        )
        entered = st.text_input("API Key", type="password", key="api_key_input")
        if st.button("Select API Key", type="primary", use_container_width=True, disabled=not entered):
            st.session_state["session_api_key"] = entered.strip()
            st.session_state["api_key_invalid"] = False
            logger.info("API key supplied for this session")
            st.rerun()
        st.caption("[Learn more about billing](https://ai.google.dev/gemini-api/docs/billing)")
    return None


# --- UPLOAD ---
def _on_upload(uploader_key):
    """Load the chosen file before the rerun, while widget state may still be reset."""
    uploaded_file = st.session_state.get(uploader_key)
    if uploaded_file is None:
        return
    uploaded_file.seek(0)
    ok, msg = cb_load_image(uploaded_file.read(), uploaded_file.type, uploaded_file.name)
    st.session_state["upload_error"] = None if ok else msg
    if ok:
        st.toast(f"📸 Loaded {uploaded_file.name}", icon="🔄")


def render_uploader():
    uploader_key = f"uploader_{st.session_state.get('uploader_id', 0)}"
    st.file_uploader(
        "Select Image",
        type=UploadConfig.UPLOADER_TYPES,
        label_visibility="collapsed",
        key=uploader_key,
        on_change=_on_upload,
        args=(uploader_key,)
    )
    if st.session_state.get("upload_error"):
        st.error(st.session_state["upload_error"])


def render_landing():
    c1, c2, c3 = st.columns([1, 2, 1])
    with c2:
        st.markdown("""
        <div class="landing-container">
            <h1>Seamless Text Replacement <br/><span>Reimagined.</span></h1>
        </div>
        <div class="landing-sub" style="text-align:center;">
            <p>Replace text in images while perfectly preserving background textures and lighting.
            Powered by Gemini 3 Pro Image.</p>
        </div>
        """, unsafe_allow_html=True)
        render_uploader()
        st.caption("Supported formats: JPG, PNG, WEBP")


# --- WORKSPACE ---
def render_selection_canvas(image):
    w, h = image.size
    display_w, display_h = display_size(w, h, UIConfig.DEFAULT_CANVAS_WIDTH)

    canvas_result = st_canvas(
        fill_color=UIConfig.CANVAS_FILL_COLOR,
        stroke_width=UIConfig.CANVAS_STROKE_WIDTH,
        stroke_color=UIConfig.CANVAS_STROKE_COLOR,
        background_image=image,
        update_streamlit=True,
        height=display_h,
        width=display_w,
        drawing_mode="rect",
        display_toolbar=True,
        key=f"canvas_main_{st.session_state.get('canvas_id', 0)}"
    )

    if canvas_result.json_data is not None:
        box = latest_selection(canvas_result.json_data.get("objects", []), display_w, display_h)
        if box is not None and box.is_empty:
            box = None
        if box != st.session_state.get("selection"):
            cb_selection_changed(box)
            st.rerun()


def render_result():
    result_bytes = st.session_state["result_bytes"]
    result_image = bytes_to_image(result_bytes)

    st.markdown("**Generated Result**")
    if st.toggle("Compare with original", key="show_comparison"):
        original = bytes_to_image(st.session_state["image_bytes"]).convert("RGB")
        compared = result_image.convert("RGB")
        if compared.size != original.size:
            compared = compared.resize(original.size)
        image_comparison(
            img1=original,
            img2=compared,
            label1="Original",
            label2="Edited",
            width=UIConfig.COMPARISON_WIDTH,
            starting_position=UIConfig.COMPARISON_START_POSITION,
            show_labels=True,
            make_responsive=True,
            in_memory=True
        )
    else:
        st.image(result_image, use_container_width=True)

    b1, b2, b3 = st.columns(3)
    with b1:
        st.button("Discard", on_click=cb_discard_result, use_container_width=True)
    with b2:
        st.download_button(
            label="Download",
            data=result_bytes,
            file_name=download_file_name(),
            mime=st.session_state.get("result_mime") or "image/png",
            use_container_width=True
        )
    with b3:
        st.button("Next Edit", on_click=cb_continue_editing, type="primary", use_container_width=True)


def _step_header(number, label, done=False):
    badge = "✓" if done else str(number)
    css = "step-badge done" if done else "step-badge"
    st.markdown(f"<div><span class='{css}'>{badge}</span><b>{label}</b></div>", unsafe_allow_html=True)


def render_controls(image, api_key):
    has_selection = st.session_state.get("selection") is not None
    processing = st.session_state.get("is_processing", False)

    st.markdown("<h3>Inpaint Controls <span class='model-tag'>Gemini 3 Pro Image</span></h3>",
                unsafe_allow_html=True)

    _step_header(1, "Select Area", done=has_selection)
    st.caption("Draw a box around the text you want to replace.")

    _step_header(2, "Enter Replacement Text")
    st.text_area(
        "Replacement text",
        key="input_text",
        disabled=not has_selection or processing,
        placeholder="Type new text..." if has_selection else "Select a region first...",
        max_chars=UIConfig.MAX_TEXT_LENGTH,
        label_visibility="collapsed"
    )

    st.radio(
        "Location guide",
        options=list(GUIDE_MODE_LABELS.keys()),
        format_func=GUIDE_MODE_LABELS.get,
        key="guide_mode",
        disabled=processing,
        horizontal=True
    )

    if has_selection and st.toggle("Preview location guide", key="show_guide_preview"):
        st.image(
            build_location_guide(image, st.session_state["selection"], GuideMode(st.session_state["guide_mode"])),
            caption="Sent to the model alongside the source image",
            use_container_width=True
        )

    label = "Processing..." if processing else "Generate Inpaint"
    st.button(
        label,
        type="primary",
        use_container_width=True,
        disabled=not is_ready_to_submit(),
        on_click=cb_submit_inpaint
    )

    if st.session_state.get("pending_request"):
        with st.spinner("Refining Text..."):
            run_inpaint(get_inpainter(api_key))
        st.rerun()

    if st.session_state.get("last_error"):
        st.error(st.session_state["last_error"])

    st.markdown(
        "<p class='pro-tip'><b>Pro Tip:</b> Ensure your selection box includes a small margin around "
        "the text. The Visual Guide system will help the AI align pixels perfectly.</p>",
        unsafe_allow_html=True
    )


def render_reset_confirmation():
    if not st.session_state.get("show_reset_confirmation"):
        return
    st.warning("This will discard all current progress. Are you sure?")
    c1, c2 = st.columns(2)
    with c1:
        st.button("Cancel", on_click=cb_cancel_reset, use_container_width=True)
    with c2:
        st.button("Confirm Reset", on_click=cb_confirm_reset, type="primary", use_container_width=True)


def render_header():
    c1, c2 = st.columns([0.8, 0.2], vertical_alignment="center")
    with c1:
        st.markdown("## ✍️ TextInpaint Pro")
    with c2:
        if st.session_state.get("image_bytes") is not None:
            st.button("🗑️ Start Over", on_click=cb_request_reset, use_container_width=True)


def render_workspace(api_key):
    image = bytes_to_image(st.session_state["image_bytes"])

    editor_col, controls_col = st.columns([0.68, 0.32], gap="large")
    with editor_col:
        if st.session_state.get("result_bytes") is not None:
            render_result()
        else:
            render_selection_canvas(image)
            if st.session_state.get("edit_round", 0):
                st.caption(f"Edit round {st.session_state['edit_round'] + 1}")
    with controls_col:
        render_controls(image, api_key)
        with st.expander("📂 Change Image"):
            render_uploader()
