import streamlit as st

# 🎯 CRITICAL: Must be the VERY FIRST Streamlit command
st.set_page_config(
    page_title="TextInpaint Pro",
    page_icon="✍️",
    layout="wide",
    initial_sidebar_state="collapsed"
)

import logging

from inpaint_utils.logger import level_from_env, setup_logging
from inpaint_utils.state_manager import initialize_session_state
from inpaint_utils.ui_components import (
    render_api_key_gate,
    render_header,
    render_landing,
    render_reset_confirmation,
    render_workspace,
    setup_styles
)

setup_logging(level=level_from_env())
logger = logging.getLogger(__name__)

# --- 1️⃣ SESSION INITIALIZATION (VERY TOP)
initialize_session_state()


def main():
    setup_styles()
    render_header()
    render_reset_confirmation()

    # --- 2️⃣ API KEY GATE ---
    api_key = render_api_key_gate()
    if api_key is None:
        return

    # --- 3️⃣ LANDING OR WORKSPACE ---
    if st.session_state.get("image_bytes") is None:
        render_landing()
    else:
        render_workspace(api_key)


if __name__ == "__main__":
    main()
