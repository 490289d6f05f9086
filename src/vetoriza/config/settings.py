"""
Library settings and configuration
"""
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field

DEFAULT_THRESHOLD = 128
DEFAULT_MAX_IMAGE_SIZE = 8192


class Settings(BaseSettings):
    """Vectorizer configuration"""

    # Binarization
    threshold: int = Field(default=DEFAULT_THRESHOLD, ge=1, le=255)  # Intensities >= threshold are foreground

    # Loading
    max_image_size: int = Field(default=DEFAULT_MAX_IMAGE_SIZE, ge=0)  # Max dimension in pixels, 0 disables the check

    # Mask cleaning (closing kernel, disabled when None)
    clean_kernel_size: Optional[int] = Field(default=None, ge=1)

    # Georeferencing
    min_area_m2: float = 5.0
    simplify_tolerance: float = 0.000005  # Degrees
    feature_id_prefix: str = "feature"

    class Config:
        env_prefix = "VETORIZA_"
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    """Settings read from the environment on first use"""
    return Settings()
