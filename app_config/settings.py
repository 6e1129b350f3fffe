"""
Runtime settings resolved from the environment.

The API key is looked up in a local .env file, then the process
environment, then Streamlit secrets.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .constants import ModelConfig

logger = logging.getLogger(__name__)

# Load environment variables from .env file FIRST
load_dotenv()


def _secrets_lookup(name: str) -> Optional[str]:
    """Read a value from st.secrets, tolerating a missing secrets.toml."""
    try:
        import streamlit as st
        return st.secrets.get(name)
    except (FileNotFoundError, KeyError):
        return None
    except Exception as e:
        # StreamlitSecretNotFoundError when no secrets file is present
        logger.debug(f"Secrets lookup for {name} failed: {e}")
        return None


def get_api_key() -> Optional[str]:
    """Get the Gemini API key from the environment or Streamlit secrets."""
    for name in ModelConfig.API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value

    for name in ModelConfig.API_KEY_ENV_VARS:
        value = _secrets_lookup(name)
        if value:
            return value

    return None


def get_model_name() -> str:
    """Model name, overridable with INPAINT_MODEL."""
    return os.getenv(ModelConfig.MODEL_ENV_VAR) or ModelConfig.MODEL_NAME
