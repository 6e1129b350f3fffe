"""Streamlit-facing helpers for TextInpaint Pro."""
