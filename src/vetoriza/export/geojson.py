"""
GeoJSON Exporter - Maps traced contours to GeoJSON features

Pixel coordinates are written as-is: x is the column, y the row, no
y inversion and no projection.
"""
from typing import Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..vectorization import Contour


class LineString(BaseModel):
    """GeoJSON LineString geometry"""
    type: Literal["LineString"] = "LineString"
    coordinates: List[List[float]]


class Polygon(BaseModel):
    """GeoJSON Polygon geometry (first ring is the exterior)"""
    type: Literal["Polygon"] = "Polygon"
    coordinates: List[List[List[float]]]


class Feature(BaseModel):
    """GeoJSON Feature, never carries an id or bbox"""
    type: Literal["Feature"] = "Feature"
    geometry: Union[LineString, Polygon] = Field(discriminator="type")
    properties: Optional[Dict[str, Any]] = None


class FeatureCollection(BaseModel):
    """GeoJSON FeatureCollection"""
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[Feature] = []

    def to_json(self) -> str:
        """Serialize to compact GeoJSON text"""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "FeatureCollection":
        return cls.model_validate_json(text)


def contour_to_feature(contour: Contour) -> Feature:
    """One contour becomes one LineString feature, point order preserved"""
    coordinates = [[float(x), float(y)] for x, y in contour.points]
    return Feature(geometry=LineString(coordinates=coordinates))


def contours_to_collection(contours: Iterable[Contour]) -> FeatureCollection:
    return FeatureCollection(features=[contour_to_feature(c) for c in contours])
