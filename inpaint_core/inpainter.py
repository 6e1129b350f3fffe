"""
Client for the hosted multimodal image model.

Sends the replacement instruction, the untouched source image and the
location guide in one request and extracts the edited image from the
response.
"""

import base64
import io
import logging
from dataclasses import dataclass
from typing import Optional

from google import genai
from google.genai import types
from PIL import Image, UnidentifiedImageError

from app_config.constants import GuideConfig, ModelConfig
from app_config.settings import get_api_key, get_model_name
from inpaint_utils.logger import log_performance
from .exceptions import (
    GenerationError,
    InpaintError,
    InvalidApiKeyError,
    InvalidImageError,
    MissingApiKeyError,
    ModelTextResponseError,
    NoContentError
)
from .guide import GuideMode, build_location_guide
from .prompts import build_inpaint_prompt
from .selection import BoundingBox

logger = logging.getLogger(__name__)


@dataclass
class InpaintResult:
    """Edited image returned by the model."""

    image_bytes: bytes
    mime_type: str = ModelConfig.DEFAULT_RESULT_MIME

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.image_bytes).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


def _encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def extract_image(response) -> InpaintResult:
    """
    Pull the first inline image out of a generate_content response.

    Raises:
        NoContentError: No candidate parts in the response
        ModelTextResponseError: The model only talked back
        GenerationError: Neither image nor text was returned
    """
    candidates = getattr(response, "candidates", None) or []
    content = candidates[0].content if candidates else None
    parts = getattr(content, "parts", None) if content is not None else None
    if not parts:
        raise NoContentError("No content returned from API")

    for part in parts:
        inline = getattr(part, "inline_data", None)
        if inline is not None and inline.data:
            return InpaintResult(
                image_bytes=inline.data,
                mime_type=inline.mime_type or ModelConfig.DEFAULT_RESULT_MIME,
            )

    # Sometimes the model answers in prose instead of editing
    for part in parts:
        text = getattr(part, "text", None)
        if text:
            raise ModelTextResponseError(text)

    raise GenerationError("Could not generate image.")


class TextInpainter:
    """Replaces text inside a selected region using the hosted image model."""

    def __init__(self, client=None, api_key: Optional[str] = None, model_name: Optional[str] = None,
                 image_size: str = ModelConfig.IMAGE_SIZE):
        if client is None:
            api_key = api_key or get_api_key()
            if not api_key:
                raise MissingApiKeyError("No API key configured. Set GEMINI_API_KEY or enter a key in the app.")
            client = genai.Client(api_key=api_key)
            logger.info("Google GenAI client initialized")

        self.client = client
        self.model_name = model_name or get_model_name()
        self.image_size = image_size

    def _request_config(self):
        return types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            image_config=types.ImageConfig(image_size=self.image_size),
        )

    @log_performance
    def inpaint_text(self, image_bytes: bytes, mime_type: str, selection: BoundingBox,
                     new_text: str, mode: GuideMode = GuideMode.VISUAL) -> InpaintResult:
        """
        Replace the text inside ``selection`` with ``new_text``.

        Args:
            image_bytes: Encoded source image (as uploaded)
            mime_type: Mime type of image_bytes, forwarded to the model untouched
            selection: Region to edit, in percentage coordinates
            new_text: Replacement text
            mode: Location guide strategy

        Returns:
            InpaintResult with the edited image

        Raises:
            InvalidImageError: image_bytes cannot be decoded
            InvalidApiKeyError: The API no longer accepts the key
            InpaintError: Any other failure to obtain an image
        """
        try:
            source = Image.open(io.BytesIO(image_bytes))
            source.load()
        except (UnidentifiedImageError, OSError) as e:
            raise InvalidImageError(f"Could not decode source image: {e}") from e

        guide = build_location_guide(source, selection, mode)
        prompt = build_inpaint_prompt(new_text, mode)

        contents = [
            prompt,
            types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            types.Part.from_bytes(data=_encode_png(guide), mime_type=GuideConfig.GUIDE_MIME_TYPE),
        ]

        logger.info(f"Calling {self.model_name}: box={selection.as_dict()} mode={GuideMode(mode).value}")
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=self._request_config(),
            )
            return extract_image(response)
        except InpaintError:
            logger.error("Gemini inpaint error", exc_info=True)
            raise
        except Exception as e:
            logger.error(f"Gemini inpaint error: {e}", exc_info=True)
            if ModelConfig.INVALID_KEY_MARKER in str(e):
                raise InvalidApiKeyError(str(e)) from e
            raise InpaintError(str(e)) from e
