"""Percentile window search over a 256-bin histogram."""

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Optional

import numpy as np

from pnm_autocontrast.core.histogram import HISTOGRAM_BINS

MIN_SAMPLE = 0
MAX_SAMPLE = HISTOGRAM_BINS - 1


@dataclass(frozen=True)
class ThresholdPair:
    """Source intensity window selected for stretching.

    Attributes:
        source_min: Lowest kept sample value (maps to 0).
        source_max: Highest kept sample value (maps to 255).
    """

    source_min: int
    source_max: int

    @property
    def is_degenerate(self) -> bool:
        """True if the window is empty or collapsed to a single value."""
        return self.source_min >= self.source_max

    def __iter__(self):
        yield self.source_min
        yield self.source_max


def clip_budget(coefficient: float, pixel_count: int) -> float:
    """Number of pixels that may be clipped at each end of the range."""
    return float(coefficient) * pixel_count


def _first_crossing(counts: np.ndarray, needed: float) -> Optional[int]:
    """Index of the first prefix sum strictly greater than needed, or None."""
    crossed = np.flatnonzero(np.cumsum(counts) > needed)
    if crossed.size == 0:
        return None
    return int(crossed[0])


def find_source_min(histogram: np.ndarray, needed: float) -> int:
    """
    Scan upward from 0 for the lower edge of the window.

    The bin whose count pushes the running sum past `needed` is kept in
    range and becomes the minimum. Values 0..254 are scanned; if the sum
    never exceeds `needed` the result clamps at 255.
    """
    index = _first_crossing(histogram[:MAX_SAMPLE], needed)
    return MAX_SAMPLE if index is None else index


def find_source_max(histogram: np.ndarray, needed: float) -> int:
    """
    Scan downward from 255 for the upper edge of the window.

    Mirror of find_source_min: values 255..1 are scanned and the result
    clamps at 0.
    """
    index = _first_crossing(histogram[:MIN_SAMPLE:-1], needed)
    return MIN_SAMPLE if index is None else MAX_SAMPLE - index


def select_thresholds(histogram: np.ndarray, pixel_count: int, coefficient: float,
                      executor: Optional[Executor] = None) -> ThresholdPair:
    """
    Select the source window for a clip coefficient.

    Args:
        histogram: 256-bin histogram of the buffer
        pixel_count: Pixel count used to scale the coefficient
        coefficient: Fraction of pixels that may be clipped at each end
        executor: If given, the two scans run on it concurrently

    Returns:
        ThresholdPair with the selected bounds
    """
    histogram = np.asarray(histogram)
    if histogram.shape != (HISTOGRAM_BINS,):
        raise ValueError(f"Histogram must have {HISTOGRAM_BINS} bins, got shape {histogram.shape}")

    needed = clip_budget(coefficient, pixel_count)

    if executor is None:
        return ThresholdPair(find_source_min(histogram, needed),
                             find_source_max(histogram, needed))

    low = executor.submit(find_source_min, histogram, needed)
    high = executor.submit(find_source_max, histogram, needed)
    return ThresholdPair(low.result(), high.result())
