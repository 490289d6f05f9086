# Vectorization module
# Converts binary rasters to vector representations:
# - Border following
# - Contour ordering

from .vectorizer import Contour, RasterToVector, VectorData

__all__ = ["Contour", "RasterToVector", "VectorData"]
