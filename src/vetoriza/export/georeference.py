"""
Georeferencer - Places traced pixel contours on the map

Takes the pixel-space FeatureCollection produced by the converter and the
geographic bounds of the source image, and returns simplified lon/lat
polygons with their area, dropping slivers below a minimum area.
"""
from typing import List, Optional, Sequence
from dataclasses import dataclass
import logging
import math

import numpy as np
import shapely
from shapely.geometry import Polygon as ShapelyPolygon

from ..config import get_settings
from .geojson import Feature, FeatureCollection, Polygon

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6378137.0


@dataclass(frozen=True)
class GeoBounds:
    """Geographic extent of the image, in degrees"""
    west: float
    south: float
    east: float
    north: float


class Georeferencer:
    """
    Converts pixel contours to geographic polygons.

    Steps per feature:
    1. Pixel -> lon/lat by linear interpolation inside the bounds (y grows south)
    2. Close the ring
    3. Douglas-Peucker simplification
    4. Area filter (square metres)
    """

    def __init__(
        self,
        min_area_m2: Optional[float] = None,
        simplify_tolerance: Optional[float] = None,
        id_prefix: Optional[str] = None,
    ):
        settings = get_settings()
        self.min_area_m2 = settings.min_area_m2 if min_area_m2 is None else min_area_m2
        self.simplify_tolerance = (
            settings.simplify_tolerance if simplify_tolerance is None else simplify_tolerance
        )
        self.id_prefix = settings.feature_id_prefix if id_prefix is None else id_prefix

    def georeference(
        self,
        collection: FeatureCollection,
        width: int,
        height: int,
        bounds: GeoBounds,
    ) -> FeatureCollection:
        """Convert a pixel-space collection to lon/lat polygons"""
        if width <= 0 or height <= 0:
            raise ValueError(f"Image size must be positive, got {width}x{height}")

        kept: List[Feature] = []
        for feature in collection.features:
            ring = self._exterior(feature)
            if len(ring) < 3:
                continue

            coords = [self.pixel_to_lonlat(x, y, width, height, bounds) for x, y in ring]
            if coords[0] != coords[-1]:
                coords.append(coords[0])
            if len(coords) < 4:
                continue

            polygon = ShapelyPolygon(coords)
            if self.simplify_tolerance > 0:
                polygon = polygon.simplify(self.simplify_tolerance, preserve_topology=True)
            if polygon.is_empty:
                continue

            area = self.area_m2(polygon)
            if area <= self.min_area_m2:
                continue

            kept.append(Feature(
                geometry=Polygon(coordinates=[[list(p) for p in polygon.exterior.coords]]),
                properties={
                    "id": f"{self.id_prefix}_{len(kept) + 1}",
                    "area_m2": f"{area:.2f}",
                },
            ))

        logger.debug(f"Georeferenced {len(kept)} of {len(collection.features)} features")
        return FeatureCollection(features=kept)

    @staticmethod
    def pixel_to_lonlat(x: float, y: float, width: int, height: int, bounds: GeoBounds):
        lon = bounds.west + (x / width) * (bounds.east - bounds.west)
        lat = bounds.north - (y / height) * (bounds.north - bounds.south)
        return (lon, lat)

    @staticmethod
    def area_m2(polygon: ShapelyPolygon) -> float:
        """Planar area on an equirectangular projection centred on the polygon"""
        if polygon.is_empty or polygon.area == 0:
            return 0.0
        lat0 = math.radians(polygon.centroid.y)
        scale = np.array([
            math.radians(1.0) * EARTH_RADIUS_M * math.cos(lat0),
            math.radians(1.0) * EARTH_RADIUS_M,
        ])
        projected = shapely.transform(polygon, lambda xy: xy * scale)
        return float(projected.area)

    def _exterior(self, feature: Feature) -> Sequence[Sequence[float]]:
        geometry = feature.geometry
        if isinstance(geometry, Polygon):
            return geometry.coordinates[0] if geometry.coordinates else []
        return geometry.coordinates


def georeference_geojson(text: str, width: int, height: int, bounds: GeoBounds, **kwargs) -> str:
    """Georeference the GeoJSON text returned by convert()"""
    collection = FeatureCollection.from_json(text)
    return Georeferencer(**kwargs).georeference(collection, width, height, bounds).to_json()
