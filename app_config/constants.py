"""
Configuration constants for TextInpaint Pro.
All tunable parameters and magic numbers are defined here with explanations.
"""


class GuideConfig:
    """Configuration for the location guide sent alongside the source image."""

    # --- Visual Guide ---
    # Opacity of the black overlay laid over the whole image (0-1)
    # Higher = darker surroundings, the selection stays at full brightness
    OVERLAY_ALPHA = 0.85

    # Frame drawn around the selection (RGB)
    FRAME_COLOR = (0, 255, 0)
    FRAME_COLOR_HEX = "#00FF00"

    # Frame width as a fraction of image width, never thinner than the minimum
    FRAME_WIDTH_RATIO = 0.005
    FRAME_WIDTH_MIN = 2

    # --- Binary Mask ---
    MASK_FOREGROUND = 255  # Area to edit
    MASK_BACKGROUND = 0    # Area to preserve

    # Encoding used for the guide image
    GUIDE_MIME_TYPE = "image/png"


class ModelConfig:
    """Configuration for the hosted generative model."""

    # Multimodal image model that accepts two input images
    MODEL_NAME = "gemini-3-pro-image-preview"

    # Output resolution tier requested from the model
    IMAGE_SIZE = "2K"

    # Mime type assumed for returned image parts that do not declare one
    DEFAULT_RESULT_MIME = "image/png"

    # Substring the API returns when the key/project is no longer valid
    INVALID_KEY_MARKER = "Requested entity was not found"

    # Environment variables checked (in order) for the API key
    API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")

    # Environment variable that overrides MODEL_NAME
    MODEL_ENV_VAR = "INPAINT_MODEL"


class UIConfig:
    """Configuration for user interface behavior."""

    # --- Canvas ---
    # Display width for the selection canvas (pixels)
    DEFAULT_CANVAS_WIDTH = 800

    # Selection rectangle styling on the canvas
    CANVAS_STROKE_WIDTH = 2
    CANVAS_STROKE_COLOR = "#FACC15"
    CANVAS_FILL_COLOR = "rgba(250, 204, 21, 0.15)"

    # JPEG quality for the canvas background (1-100)
    BACKGROUND_IMAGE_QUALITY = 85

    # Maximum cache entries for background encoding
    IMAGE_ENCODING_CACHE_SIZE = 10

    # --- Result View ---
    COMPARISON_WIDTH = 700
    COMPARISON_START_POSITION = 50

    # --- Text Input ---
    MAX_TEXT_LENGTH = 500


class UploadConfig:
    """Configuration for image uploads."""

    ALLOWED_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.webp')
    UPLOADER_TYPES = ["jpg", "jpeg", "png", "webp"]

    # Maximum upload size in megabytes
    MAX_FILE_SIZE_MB = 20

    # Images smaller than this on either side are rejected
    MIN_IMAGE_DIMENSION = 16

