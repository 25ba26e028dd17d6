"""Exhaustive template matcher.

Locates a reference image inside a frame by sliding every variant of the
reference (compare format, mask, rotation) over every valid top-left offset
and scoring each offset with a :class:`SimilarityMetric`. OpenCV's masked
``TM_SQDIFF`` narrows each band to a few candidate offsets, which are then
rescored exactly.

The scan is split into row bands that run on a fixed-size thread pool. Band
results are merged in submission order with a strict comparison, so the
outcome never depends on completion order: for identical inputs the first
best candidate in (angle, row, column) order always wins.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

import cv2
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ...config import get_settings
from ...config_exceptions import ConfigurationError
from ...logging import get_logger, get_performance_logger
from ...model.element import Frame, ReferenceImage, Region
from ...model.match import MatchConfig, MatchResult
from .similarity import CHANNEL_MAX, SimilarityMetric, SquaredDifferenceMetric
from .variants import TemplateVariant, reference_variants, to_compare_pixels

logger = get_logger(__name__)

# Error bound of the float32 TM_SQDIFF map, relative to the largest possible cost
APPROXIMATION_TOLERANCE = 1e-4

# Channel values gathered at once when rescoring candidate offsets
EXACT_CHUNK_VALUES = 1 << 22


@dataclass(frozen=True)
class _ScanUnit:
    """A band of offset rows for one variant."""

    variant: TemplateVariant
    row_start: int
    row_end: int  # exclusive


@dataclass(frozen=True)
class _BandBest:
    cost: int
    row: int
    col: int


class TemplateMatcher:
    """Deterministic, exhaustive template matcher.

    Attributes:
        max_workers: Size of the worker pool used for the offset scan
        band_rows: Offset rows per work unit
        metric: Scoring strategy (squared difference by default)
    """

    def __init__(
        self,
        max_workers: int | None = None,
        metric: SimilarityMetric | None = None,
        band_rows: int | None = None,
    ) -> None:
        """Initialize the matcher.

        Args:
            max_workers: Worker threads; defaults to ``RefmatchSettings.max_workers``
            metric: Similarity metric; defaults to SquaredDifferenceMetric
            band_rows: Rows per work unit; defaults to ``RefmatchSettings.band_rows``

        Raises:
            ValueError: If max_workers or band_rows is not positive
        """
        settings = get_settings()
        self.max_workers = max_workers if max_workers is not None else settings.max_workers
        self.band_rows = band_rows if band_rows is not None else settings.band_rows
        self.metric = metric or SquaredDifferenceMetric()

        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.band_rows < 1:
            raise ValueError(f"band_rows must be >= 1, got {self.band_rows}")

    def match(
        self, frame: Frame, reference: ReferenceImage, config: MatchConfig | None = None
    ) -> MatchResult:
        """Find the best match of ``reference`` inside ``frame``.

        Args:
            frame: Captured frame, at least as large as the reference
            reference: Decoded reference image
            config: Validated match configuration; defaults to ``MatchConfig()``

        Returns:
            Complete MatchResult for the best scoring candidate

        Raises:
            ConfigurationError: If the reference is larger than the frame, the
                mask excludes every pixel, or no rotated variant fits the frame
        """
        config = config or MatchConfig()
        start = time.perf_counter()

        if reference.width > frame.width or reference.height > frame.height:
            raise ConfigurationError(
                "reference",
                f"reference {reference.width}x{reference.height} is larger than "
                f"frame {frame.width}x{frame.height}",
                reference=reference.label,
            )

        variants = reference_variants(reference, config)
        if not variants:
            raise ConfigurationError(
                "mask", "no pixels remain to compare at any rotation", reference=reference.label
            )

        units = self._plan(variants, frame.width, frame.height)
        if not units:
            raise ConfigurationError(
                "rotation_degree_per_step",
                "no rotated reference variant fits inside the frame",
                reference=reference.label,
            )

        frame_values = np.ascontiguousarray(
            to_compare_pixels(frame.pixels, config.image_compare_format)
        )
        band_results = self._run(frame_values, units)
        result = self._merge(units, band_results, config)

        duration = time.perf_counter() - start
        get_performance_logger().log_timing("match", duration, name=config.name)
        logger.debug(
            "match_completed",
            name=config.name,
            reference=reference.label,
            found=result.found,
            score=result.score,
            x=result.x,
            y=result.y,
            angle=result.angle,
            variants=len(variants),
            work_units=len(units),
            duration=duration,
        )
        return result

    def _plan(self, variants: list[TemplateVariant], width: int, height: int) -> list[_ScanUnit]:
        """Split each fitting variant's offset rows into bands, in scan order."""
        units: list[_ScanUnit] = []
        for variant in variants:
            if variant.width > width or variant.height > height:
                logger.debug(
                    "variant_skipped",
                    angle=variant.angle,
                    width=variant.width,
                    height=variant.height,
                )
                continue
            rows = height - variant.height + 1
            for row_start in range(0, rows, self.band_rows):
                units.append(_ScanUnit(variant, row_start, min(row_start + self.band_rows, rows)))
        return units

    def _run(self, frame_values: np.ndarray[Any, Any], units: list[_ScanUnit]) -> list[_BandBest]:
        """Scan all units; results are returned in submission order."""
        workers = min(self.max_workers, len(units))
        if workers == 1:
            return [self._scan_band(frame_values, unit) for unit in units]

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self._scan_band, frame_values, unit) for unit in units]
            return [future.result() for future in futures]

    def _scan_band(self, frame_values: np.ndarray[Any, Any], unit: _ScanUnit) -> _BandBest:
        """Score every offset in one band and keep the first minimum.

        ``cv2.matchTemplate`` gives a float32 squared-difference map for the
        whole band. Offsets whose approximate cost could still hold the
        metric's minimum are rescored exactly in integers, so ties and
        pixel-exact matches are decided without rounding error.
        """
        variant = unit.variant
        band = frame_values[unit.row_start : unit.row_end + variant.height - 1]

        approx = cv2.matchTemplate(band, variant.pixels, cv2.TM_SQDIFF, mask=variant.match_mask)
        lowest = float(approx.min())
        tolerance = APPROXIMATION_TOLERANCE * variant.value_count * CHANNEL_MAX * CHANNEL_MAX
        limit = self.metric.candidate_limit(lowest + tolerance, variant.value_count) + tolerance

        # nonzero yields row-major order, so argmin keeps the first minimum
        cand_rows, cand_cols = np.nonzero(approx <= limit)
        costs = self._exact_costs(band, variant, cand_rows, cand_cols)
        best = int(np.argmin(costs))
        return _BandBest(
            cost=int(costs[best]),
            row=unit.row_start + int(cand_rows[best]),
            col=int(cand_cols[best]),
        )

    def _exact_costs(
        self,
        band: np.ndarray[Any, Any],
        variant: TemplateVariant,
        rows: np.ndarray[Any, Any],
        cols: np.ndarray[Any, Any],
    ) -> np.ndarray[Any, Any]:
        """Integer metric cost of each (row, col) offset into ``band``."""
        windows = sliding_window_view(band, (variant.height, variant.width), axis=(0, 1))
        values = variant.included_values
        chunk = max(1, EXACT_CHUNK_VALUES // variant.pixels.size)

        costs = np.empty(len(rows), dtype=np.int64)
        for start in range(0, len(rows), chunk):
            stop = start + chunk
            # C x H x W per offset, reduced to C x N included values
            picked = windows[rows[start:stop], cols[start:stop]][:, :, variant.mask]
            diff = picked.astype(np.int32) - values
            costs[start:stop] = self.metric.pixel_cost(diff).sum(axis=(1, 2), dtype=np.int64)
        return costs

    def _merge(
        self, units: list[_ScanUnit], band_results: list[_BandBest], config: MatchConfig
    ) -> MatchResult:
        scored = [
            (self.metric.score(band.cost, unit.variant.value_count), unit, band)
            for unit, band in zip(units, band_results)
        ]
        score, unit, band = scored[0]
        for candidate in scored[1:]:
            if candidate[0] > score:
                score, unit, band = candidate

        return MatchResult(
            region=Region(band.col, band.row, unit.variant.width, unit.variant.height),
            score=score,
            angle=unit.variant.angle,
            threshold=config.threshold,
            name=config.name,
        )


_default_matcher: TemplateMatcher | None = None


def match(
    frame: Frame, reference: ReferenceImage, config: MatchConfig | None = None
) -> MatchResult:
    """Match with a shared default :class:`TemplateMatcher`.

    See :meth:`TemplateMatcher.match`.
    """
    global _default_matcher
    if _default_matcher is None:
        _default_matcher = TemplateMatcher()
    return _default_matcher.match(frame, reference, config)
