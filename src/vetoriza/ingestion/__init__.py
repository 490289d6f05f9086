# Ingestion module
# Turns encoded input into rasters ready for tracing:
# - base64 decoding
# - image loading and grayscale conversion
# - mask cleaning and binarization

from .loader import ImageLoader, InputFormat, LoadedImage
from .preprocessor import ImagePreprocessor, PreprocessingConfig, PreprocessedImage

__all__ = [
    "ImageLoader",
    "InputFormat",
    "LoadedImage",
    "ImagePreprocessor",
    "PreprocessingConfig",
    "PreprocessedImage",
]
