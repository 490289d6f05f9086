"""
Image Preprocessor - Prepares grayscale rasters for contour tracing
"""
from typing import Optional, Tuple
from dataclasses import dataclass, field
import logging

import cv2
import numpy as np

from ..config import get_settings

logger = logging.getLogger(__name__)

FOREGROUND = 255
BACKGROUND = 0


@dataclass
class PreprocessingConfig:
    """Configuration for image preprocessing"""
    threshold: int = field(default_factory=lambda: get_settings().threshold)
    clean_kernel_size: Optional[int] = field(default_factory=lambda: get_settings().clean_kernel_size)


@dataclass
class PreprocessedImage:
    """Container for preprocessed image data"""
    image: np.ndarray  # uint8, values in {BACKGROUND, FOREGROUND}
    original_size: Tuple[int, int]
    processed_size: Tuple[int, int]
    applied_transforms: list


class ImagePreprocessor:
    """
    Preprocesses grayscale masks for boundary tracing.

    Operations:
    - Morphological cleaning (closing, optional)
    - Binarization against a fixed global threshold
    """

    def __init__(self, config: Optional[PreprocessingConfig] = None):
        self.config = config or PreprocessingConfig()

    def process(self, image: np.ndarray, config: Optional[PreprocessingConfig] = None) -> PreprocessedImage:
        """Apply preprocessing pipeline to image"""
        cfg = config or self.config
        transforms = []
        original_size = (int(image.shape[1]), int(image.shape[0]))

        if cfg.clean_kernel_size:
            image = self.clean(image, cfg.clean_kernel_size)
            transforms.append(f"clean:{cfg.clean_kernel_size}")

        binary = self.binarize(image, cfg.threshold)
        transforms.append(f"threshold:{cfg.threshold}")
        logger.debug(f"Preprocessed {original_size[0]}x{original_size[1]} image: {transforms}")

        return PreprocessedImage(
            image=binary,
            original_size=original_size,
            processed_size=(int(binary.shape[1]), int(binary.shape[0])),
            applied_transforms=transforms,
        )

    def binarize(self, image: np.ndarray, threshold: Optional[int] = None) -> np.ndarray:
        """
        Convert to a two-level image.

        Pixels at or above the threshold become FOREGROUND, the rest BACKGROUND.
        THRESH_BINARY keeps values strictly greater than its argument, hence the -1.
        """
        threshold = self.config.threshold if threshold is None else threshold
        _, binary = cv2.threshold(image, threshold - 1, FOREGROUND, cv2.THRESH_BINARY)
        return binary

    def clean(self, image: np.ndarray, kernel_size: int = 5) -> np.ndarray:
        """Close small gaps in a mask: dilate then erode with a square kernel"""
        if kernel_size % 2 == 0:
            kernel_size += 1
        kernel = np.ones((kernel_size, kernel_size), np.uint8)
        dilated = cv2.dilate(image, kernel)
        return cv2.erode(dilated, kernel)
