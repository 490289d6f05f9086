"""
Raster to Vector Converter - Traces region boundaries in binary images
"""
from typing import List, Tuple
from dataclasses import dataclass
import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class Contour:
    """Ordered boundary of one foreground region (or of one hole in it)"""
    points: List[Tuple[int, int]]  # (x, y) pixel coordinates in tracing order
    is_hole: bool = False

    def __len__(self) -> int:
        return len(self.points)

    @property
    def start(self) -> Tuple[int, int]:
        return self.points[0]


@dataclass
class VectorData:
    """Container for all vectorized data"""
    contours: List[Contour]
    width: int
    height: int


class RasterToVector:
    """
    Converts binary masks to boundary polylines.

    Pipeline:
    1. Suzuki-Abe border following (cv2.findContours), every border pixel kept
    2. Outer borders and hole borders both collected
    3. Contours ordered by raster discovery (top-to-bottom, left-to-right)
    """

    def vectorize(self, binary: np.ndarray) -> VectorData:
        """Convert a binary raster to vector data"""
        contours = self.trace_contours(binary)
        height, width = binary.shape[:2]
        logger.debug(f"Traced {len(contours)} contours in {width}x{height} raster")
        return VectorData(contours=contours, width=int(width), height=int(height))

    def trace_contours(self, binary: np.ndarray) -> List[Contour]:
        """
        Trace the boundary of every 8-connected foreground component.

        Non-zero pixels are foreground. Returns an empty list for an
        all-background raster.
        """
        raw, hierarchy = cv2.findContours(binary, cv2.RETR_CCOMP, cv2.CHAIN_APPROX_NONE)
        if hierarchy is None:
            return []

        contours = []
        for i, contour in enumerate(raw):
            points = [(int(x), int(y)) for x, y in contour.reshape(-1, 2)]
            # RETR_CCOMP: only hole borders have a parent
            is_hole = bool(hierarchy[0][i][3] != -1)
            contours.append(Contour(points=points, is_hole=is_hole))

        return self.order_contours(contours)

    def order_contours(self, contours: List[Contour]) -> List[Contour]:
        """Sort contours by where a raster scan first meets them"""
        return sorted(contours, key=lambda c: (c.start[1], c.start[0], c.is_hole))
