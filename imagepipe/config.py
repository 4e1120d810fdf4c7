# config.py
"""
Application configuration constants for imagepipe
"""

# Resize sampling filter used when no environment item selects one
DEFAULT_RESIZE_FILTER_NAME = "gaussian"

# Supported image formats
SUPPORTED_IMAGE_FORMATS = ['png', 'jpg', 'jpeg', 'bmp', 'webp', 'gif', 'tiff']
VALID_EXTENSIONS = {f".{fmt}" for fmt in SUPPORTED_IMAGE_FORMATS}

# Save options
QUALITY_DEFAULT = 95
PNG_COMPRESS_LEVEL = 6
WEBP_METHOD = 6

# Batch processing
MAX_BATCH_WORKERS = 4

# Logging
LOGGER_NAME = "imagepipe"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_MAX_BYTES = 1_048_576
LOG_BACKUP_COUNT = 5
