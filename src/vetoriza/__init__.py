"""
vetoriza - base64 raster image to GeoJSON contour vectorizer
"""
from .config import Settings, get_settings
from .errors import (
    BASE64_ERROR_MESSAGE,
    IMAGE_ERROR_MESSAGE,
    Base64DecodeError,
    DecodeError,
    ImageLoadError,
)
from .export import FeatureCollection, GeoBounds, Georeferencer, georeference_geojson
from .pipeline import (
    Pipeline,
    PipelineConfig,
    PipelineResult,
    PipelineStage,
    convert,
    vectorize,
)

__version__ = "0.1.0"

__all__ = [
    "convert",
    "vectorize",
    "Pipeline",
    "PipelineConfig",
    "PipelineResult",
    "PipelineStage",
    "DecodeError",
    "Base64DecodeError",
    "ImageLoadError",
    "BASE64_ERROR_MESSAGE",
    "IMAGE_ERROR_MESSAGE",
    "FeatureCollection",
    "GeoBounds",
    "Georeferencer",
    "georeference_geojson",
    "Settings",
    "get_settings",
]
