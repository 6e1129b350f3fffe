# Security validation and input sanitization utilities

import re
from typing import Tuple, Optional

from app_config.constants import UIConfig, UploadConfig


def sanitize_filename(filename: str, max_length: int = 255) -> str:
    """
    Base name of an uploaded file, safe to show and reuse in downloads.

    Browsers may send a client-side path ("C:\\Users\\me\\scan.png"); only the
    last component is kept. Characters Windows rejects become underscores,
    and long names are shortened without losing the extension.

        >>> sanitize_filename("C:\\\\Users\\\\me\\\\poster.png")
        'poster.png'
        >>> sanitize_filename('menu "v2".jpg')
        'menu _v2_.jpg'
    """
    base = re.split(r"[/\\]", filename)[-1]
    base = re.sub(r'[<>:"|?*]', '_', base)

    if len(base) > max_length:
        stem, dot, ext = base.rpartition('.')
        if dot and stem:
            base = stem[:max_length - len(ext) - 1] + '.' + ext
        else:
            base = base[:max_length]

    return base or "image.png"


def validate_upload(file_name: str, size_bytes: int,
                    max_size_mb: int = UploadConfig.MAX_FILE_SIZE_MB,
                    allowed_extensions: Tuple[str, ...] = UploadConfig.ALLOWED_EXTENSIONS) -> Tuple[bool, Optional[str]]:
    """
    Validate an uploaded file's name and size.

    Returns:
        tuple: (is_valid, error_message)
    """
    if not file_name:
        return False, "No file provided"

    lowered = file_name.lower()
    if not any(lowered.endswith(ext) for ext in allowed_extensions):
        return False, f"File type not allowed. Allowed: {', '.join(allowed_extensions)}"

    file_size_mb = size_bytes / (1024 * 1024)
    if file_size_mb > max_size_mb:
        return False, f"File too large ({file_size_mb:.1f}MB). Maximum: {max_size_mb}MB"

    if size_bytes == 0:
        return False, "File is empty"

    return True, None


def validate_image_size(width: int, height: int,
                        min_dim: int = UploadConfig.MIN_IMAGE_DIMENSION) -> Tuple[bool, Optional[str]]:
    if width < min_dim or height < min_dim:
        return False, f"Image too small ({width}x{height}). Minimum: {min_dim}px per side"
    return True, None


def validate_replacement_text(text: Optional[str],
                              max_length: int = UIConfig.MAX_TEXT_LENGTH) -> Tuple[bool, Optional[str]]:
    """
    Validate the replacement text typed by the user.

    Example:
        >>> validate_replacement_text("  ")
        (False, 'Replacement text is empty')
    """
    if text is None or not text.strip():
        return False, "Replacement text is empty"

    if len(text) > max_length:
        return False, f"Replacement text too long ({len(text)} chars). Maximum: {max_length}"

    return True, None
