"""Exceptions raised by the inpainting engine."""


class InpaintError(Exception):
    """Base class for all inpainting failures."""


class MissingApiKeyError(InpaintError):
    """No API key was configured for the generative model."""


class InvalidApiKeyError(InpaintError):
    """The API rejected the key (expired session or unknown project)."""


class InvalidImageError(InpaintError):
    """The source image could not be decoded."""


class NoContentError(InpaintError):
    """The model response carried no candidate content."""


class ModelTextResponseError(InpaintError):
    """The model answered with text instead of an image."""

    def __init__(self, text):
        self.text = text
        super().__init__(f"Model returned text: {text}")


class GenerationError(InpaintError):
    """The model response contained neither an image nor text."""
