"""
Tests for pixel to lon/lat georeferencing
"""
import json

import numpy as np
import pytest


BOUNDS = dict(west=-52.40, south=-25.71, east=-52.39, north=-25.70)


def _square(x0, y0, x1, y1):
    return [[x0, y0], [x1, y0], [x1, y1], [x0, y1]]


def _collection(*rings):
    from vetoriza.export import Feature, FeatureCollection, LineString

    return FeatureCollection(features=[
        Feature(geometry=LineString(coordinates=ring)) for ring in rings
    ])


class TestGeoreferencer:
    """Georeferencer.georeference()"""

    def test_pixel_to_lonlat_corners(self):
        from vetoriza.export import GeoBounds, Georeferencer

        bounds = GeoBounds(**BOUNDS)

        assert Georeferencer.pixel_to_lonlat(0, 0, 100, 100, bounds) == (-52.40, -25.70)
        lon, lat = Georeferencer.pixel_to_lonlat(100, 100, 100, 100, bounds)
        assert lon == pytest.approx(-52.39)
        assert lat == pytest.approx(-25.71)

    def test_polygon_output(self):
        from vetoriza.export import GeoBounds, Georeferencer

        collection = _collection(_square(10, 10, 90, 90))
        result = Georeferencer(min_area_m2=5.0).georeference(collection, 100, 100, GeoBounds(**BOUNDS))

        assert len(result.features) == 1
        feature = result.features[0]
        assert feature.geometry.type == "Polygon"
        ring = feature.geometry.coordinates[0]
        assert ring[0] == ring[-1]
        assert len(ring) == 5
        assert feature.properties["id"] == "feature_1"

    def test_area_in_square_metres(self):
        """0.001 degree square near the equator is about 111 m a side"""
        from vetoriza.export import GeoBounds, Georeferencer

        bounds = GeoBounds(west=0.0, south=0.0, east=0.001, north=0.001)
        result = Georeferencer().georeference(_collection(_square(0, 0, 100, 100)), 100, 100, bounds)

        area = float(result.features[0].properties["area_m2"])
        assert 12000 < area < 12800
        assert result.features[0].properties["area_m2"] == f"{area:.2f}"

    def test_collinear_border_points_simplified(self):
        from vetoriza.export import GeoBounds, Georeferencer

        ring = [[x, 10] for x in range(10, 90)] + [[90, y] for y in range(10, 90)]
        ring += [[x, 90] for x in range(90, 10, -1)] + [[10, y] for y in range(90, 10, -1)]
        result = Georeferencer().georeference(_collection(ring), 100, 100, GeoBounds(**BOUNDS))

        assert len(result.features[0].geometry.coordinates[0]) == 5

    def test_small_and_degenerate_features_dropped(self):
        from vetoriza.export import GeoBounds, Georeferencer

        collection = _collection(
            [[1, 1]],                  # single pixel
            [[1, 1], [2, 1]],          # too few positions
            _square(50, 50, 51, 51),   # about 110 m2, below min area
            _square(10, 10, 40, 40),
            _square(60, 60, 95, 95),
        )
        result = Georeferencer(min_area_m2=500.0).georeference(collection, 100, 100, GeoBounds(**BOUNDS))

        assert [f.properties["id"] for f in result.features] == ["feature_1", "feature_2"]

    def test_id_prefix(self):
        from vetoriza.export import GeoBounds, Georeferencer

        result = Georeferencer(id_prefix="imovel").georeference(
            _collection(_square(10, 10, 90, 90)), 100, 100, GeoBounds(**BOUNDS)
        )

        assert result.features[0].properties["id"] == "imovel_1"

    def test_invalid_image_size(self):
        from vetoriza.export import GeoBounds, Georeferencer

        with pytest.raises(ValueError):
            Georeferencer().georeference(_collection(), 0, 100, GeoBounds(**BOUNDS))


class TestGeoreferenceGeoJSON:
    """Georeferencing the converter's text output"""

    def test_end_to_end(self, encode_image):
        from vetoriza import GeoBounds, Pipeline, convert, georeference_geojson

        img = np.zeros((100, 100), dtype=np.uint8)
        img[20:80, 20:80] = 255
        data = encode_image(img)
        width, height = Pipeline().run(data).image_size

        text = georeference_geojson(convert(data), width, height, GeoBounds(**BOUNDS))
        doc = json.loads(text)

        assert doc["type"] == "FeatureCollection"
        assert len(doc["features"]) == 1
        for lon, lat in doc["features"][0]["geometry"]["coordinates"][0]:
            assert BOUNDS["west"] <= lon <= BOUNDS["east"]
            assert BOUNDS["south"] <= lat <= BOUNDS["north"]
