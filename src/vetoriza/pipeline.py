"""
Pipeline Orchestrator - Coordinates the base64 image to GeoJSON workflow
"""
from typing import Optional, Callable, List, Tuple
from dataclasses import dataclass, field
from enum import Enum
import logging
import time

from .config import DEFAULT_MAX_IMAGE_SIZE, DEFAULT_THRESHOLD, get_settings
from .errors import DecodeError
from .export import FeatureCollection, contours_to_collection
from .ingestion import ImageLoader, ImagePreprocessor, PreprocessingConfig
from .vectorization import RasterToVector

logger = logging.getLogger(__name__)


def _require_text(data):
    if not isinstance(data, str):
        raise TypeError(f"Expected base64 text, got {type(data).__name__}")


class PipelineStage(Enum):
    DECODE = "decode"
    LOAD = "load"
    BINARIZE = "binarize"
    TRACE = "trace"
    MAP = "map"
    SERIALIZE = "serialize"


@dataclass
class PipelineConfig:
    """Configuration for pipeline execution"""
    threshold: int = field(default_factory=lambda: get_settings().threshold)
    clean_kernel_size: Optional[int] = field(default_factory=lambda: get_settings().clean_kernel_size)
    max_image_size: int = field(default_factory=lambda: get_settings().max_image_size)


@dataclass
class PipelineResult:
    """Result of pipeline execution"""
    success: bool
    stages_completed: List[PipelineStage]
    geojson: Optional[str] = None
    collection: Optional[FeatureCollection] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None  # "base64" or "image"
    image_size: Optional[Tuple[int, int]] = None  # (width, height)
    contour_count: int = 0
    timing: dict = field(default_factory=dict)

    @property
    def output(self) -> str:
        """GeoJSON on success, the fixed error message otherwise"""
        if self.success:
            return self.geojson
        return self.error


class Pipeline:
    """
    Base64 raster to GeoJSON converter.

    Pipeline stages:
    1. Decode: base64 text to bytes
    2. Load: bytes to grayscale raster
    3. Binarize: fixed threshold, optional closing beforehand
    4. Trace: boundary following on the binary raster
    5. Map: one LineString feature per contour
    6. Serialize: FeatureCollection to GeoJSON text
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        self._progress_callback: Optional[Callable] = None
        self._current_stage: Optional[PipelineStage] = None
        self._stages_completed: List[PipelineStage] = []
        self._timing: dict = {}
        self._image_size: Optional[Tuple[int, int]] = None
        self._contour_count = 0

    def set_progress_callback(self, callback: Callable[[PipelineStage, float, str], None]):
        """
        Set callback for progress updates.

        Callback signature: (stage: PipelineStage, progress: float, message: str)
        """
        self._progress_callback = callback

    def _report_progress(self, progress: float, message: str):
        """Report progress to callback if set"""
        if self._progress_callback and self._current_stage:
            self._progress_callback(self._current_stage, progress, message)

    def _enter(self, stage: PipelineStage, message: str) -> float:
        self._current_stage = stage
        self._report_progress(0.0, message)
        return time.perf_counter()

    def _leave(self, started: float):
        self._timing[self._current_stage.value] = time.perf_counter() - started
        self._stages_completed.append(self._current_stage)
        self._report_progress(1.0, f"{self._current_stage.value} complete")

    def _reset(self):
        self._current_stage = None
        self._stages_completed = []
        self._timing = {}
        self._image_size = None
        self._contour_count = 0

    def vectorize(self, data: str) -> FeatureCollection:
        """
        Run stages 1-5 and return the feature collection.

        Raises:
            Base64DecodeError, ImageLoadError
        """
        _require_text(data)
        self._reset()
        loader = ImageLoader(max_image_size=self.config.max_image_size)

        started = self._enter(PipelineStage.DECODE, "Decoding base64...")
        raw = loader.decode_base64(data)
        self._leave(started)

        started = self._enter(PipelineStage.LOAD, "Loading image...")
        loaded = loader.load_bytes(raw)
        self._image_size = (loaded.width, loaded.height)
        self._leave(started)

        started = self._enter(PipelineStage.BINARIZE, "Binarizing...")
        preprocessor = ImagePreprocessor(PreprocessingConfig(
            threshold=self.config.threshold,
            clean_kernel_size=self.config.clean_kernel_size,
        ))
        processed = preprocessor.process(loaded.image)
        self._leave(started)

        started = self._enter(PipelineStage.TRACE, "Tracing contours...")
        vector_data = RasterToVector().vectorize(processed.image)
        self._contour_count = len(vector_data.contours)
        self._leave(started)

        started = self._enter(PipelineStage.MAP, "Building features...")
        collection = contours_to_collection(vector_data.contours)
        self._leave(started)

        return collection

    def run(self, data: str) -> PipelineResult:
        """
        Execute the full pipeline.

        Returns:
            PipelineResult with the GeoJSON text, or the fixed error message
            of the failing stage
        """
        _require_text(data)
        logger.info(f"Starting vectorization of {len(data)} base64 chars")
        start_time = time.perf_counter()

        try:
            collection = self.vectorize(data)
        except DecodeError as e:
            logger.warning(f"Vectorization failed at {self._current_stage}: {e}")
            return PipelineResult(
                success=False,
                stages_completed=list(self._stages_completed),
                error=e.message,
                error_kind=e.kind,
                image_size=self._image_size,
                timing=dict(self._timing),
            )

        started = self._enter(PipelineStage.SERIALIZE, "Serializing GeoJSON...")
        geojson = collection.to_json()
        self._leave(started)

        elapsed = time.perf_counter() - start_time
        logger.info(f"Vectorization completed in {elapsed:.3f}s: {self._contour_count} contours")

        return PipelineResult(
            success=True,
            stages_completed=list(self._stages_completed),
            geojson=geojson,
            collection=collection,
            image_size=self._image_size,
            contour_count=self._contour_count,
            timing=dict(self._timing),
        )


def convert(data: str) -> str:
    """
    Convert a base64 encoded image to a GeoJSON FeatureCollection.

    Returns the GeoJSON text, or one of the fixed messages
    "Erro ao decodificar base64" / "Erro ao carregar imagem".

    Always binarizes at the default threshold without cleaning; the
    environment only affects Pipeline and vectorize().
    """
    config = PipelineConfig(
        threshold=DEFAULT_THRESHOLD,
        clean_kernel_size=None,
        max_image_size=DEFAULT_MAX_IMAGE_SIZE,
    )
    return Pipeline(config).run(data).output


def vectorize(data: str, **kwargs) -> FeatureCollection:
    """
    Strict variant of convert().

    Args:
        data: base64 encoded image
        **kwargs: PipelineConfig options

    Returns:
        FeatureCollection of LineString features

    Raises:
        Base64DecodeError, ImageLoadError
    """
    return Pipeline(PipelineConfig(**kwargs)).vectorize(data)
