"""
Pytest configuration and shared fixtures for TextInpaint Pro tests.

This module provides shared fixtures and configuration for all test modules.
"""

import io
from types import SimpleNamespace

import pytest
import numpy as np
from PIL import Image

from inpaint_core.selection import BoundingBox


@pytest.fixture
def sample_image():
    """
    Create a simple test image (RGB).

    Returns:
        np.ndarray: 100x200 (H x W) RGB image, uniform orange-brown
    """
    img = np.zeros((100, 200, 3), dtype=np.uint8)
    img[:, :] = [200, 100, 50]
    return img


@pytest.fixture
def sample_selection():
    """
    Selection covering pixels x 50-150, y 20-60 of sample_image.

    Returns:
        BoundingBox: percentage box
    """
    return BoundingBox(x=25, y=20, width=50, height=40)


@pytest.fixture
def png_bytes(sample_image):
    """sample_image encoded as PNG."""
    buf = io.BytesIO()
    Image.fromarray(sample_image).save(buf, format="PNG")
    return buf.getvalue()


def make_response(*parts):
    """Build an object shaped like a google.genai GenerateContentResponse."""
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def image_part(data=b"\x89PNG-result", mime_type="image/png"):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def text_part(text):
    return SimpleNamespace(inline_data=None, text=text)


@pytest.fixture
def mock_genai_client(mocker):
    """
    Mock genai client that returns one edited image.

    Args:
        mocker: pytest-mock mocker fixture

    Returns:
        Mock client whose models.generate_content returns an image part
    """
    client = mocker.Mock()
    client.models.generate_content.return_value = make_response(image_part())
    return client


@pytest.fixture
def editor_state():
    """Plain dict standing in for st.session_state."""
    from inpaint_utils.state_manager import initialize_session_state
    state = {}
    initialize_session_state(state)
    return state


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
