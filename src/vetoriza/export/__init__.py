# Export module
# Outputs traced contours as GeoJSON:
# - pixel-space LineString features
# - georeferenced lon/lat polygons

from .geojson import (
    Feature,
    FeatureCollection,
    LineString,
    Polygon,
    contour_to_feature,
    contours_to_collection,
)
from .georeference import GeoBounds, Georeferencer, georeference_geojson

__all__ = [
    "Feature",
    "FeatureCollection",
    "LineString",
    "Polygon",
    "contour_to_feature",
    "contours_to_collection",
    "GeoBounds",
    "Georeferencer",
    "georeference_geojson",
]
