"""Instruction prompts sent with the source image and location guide."""

from .guide import GuideMode

VISUAL_GUIDE_PROMPT = """
Task: Professional Image Text Replacement.

Input Data:
1. [Source Image]: The original image to be edited.
2. [Location Guide]: A reference version of the image where the area to edit is BRIGHT and framed in GREEN, while the rest is darkened.

INSTRUCTIONS:
1. Look at the [Location Guide]. Focus ONLY on the bright area inside the GREEN frame.
2. Find the exact corresponding pixels in the [Source Image].
3. In that specific area of the [Source Image], replace the existing text with: "{text}".
4. PRESERVE the background texture, lighting, and style of the original image perfectly.
5. DO NOT touch any part of the image that is darkened in the [Location Guide].
6. Return the final clean image (without the green frame or darkening).
"""

BINARY_MASK_PROMPT = """
Task: Professional Image Text Replacement.

Input Data:
1. [Source Image]: The original image to be edited.
2. [Edit Mask]: A black and white mask the same size as the source. WHITE pixels mark the area to edit, BLACK pixels must stay untouched.

INSTRUCTIONS:
1. Look at the [Edit Mask]. Focus ONLY on the WHITE area.
2. Find the exact corresponding pixels in the [Source Image].
3. In that specific area of the [Source Image], replace the existing text with: "{text}".
4. PRESERVE the background texture, lighting, and style of the original image perfectly.
5. DO NOT modify any pixel that is BLACK in the [Edit Mask].
6. Return only the final edited image.
"""


def quote_text(text: str) -> str:
    """Strip the replacement text and escape embedded double quotes."""
    return text.strip().replace('"', '\\"')


def build_inpaint_prompt(new_text: str, mode: GuideMode = GuideMode.VISUAL) -> str:
    if not new_text or not new_text.strip():
        raise ValueError("replacement text must not be empty")

    template = BINARY_MASK_PROMPT if GuideMode(mode) is GuideMode.MASK else VISUAL_GUIDE_PROMPT
    return template.format(text=quote_text(new_text))
