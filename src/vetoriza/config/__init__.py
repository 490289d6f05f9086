from .settings import DEFAULT_MAX_IMAGE_SIZE, DEFAULT_THRESHOLD, Settings, get_settings

__all__ = ["Settings", "get_settings", "DEFAULT_THRESHOLD", "DEFAULT_MAX_IMAGE_SIZE"]
