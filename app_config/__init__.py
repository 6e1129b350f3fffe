"""
Configuration package for TextInpaint Pro.
Centralizes all tunable parameters and constants.
"""

from .constants import (
    GuideConfig,
    ModelConfig,
    UIConfig,
    UploadConfig
)

__all__ = [
    'GuideConfig',
    'ModelConfig',
    'UIConfig',
    'UploadConfig'
]
