"""Contrast-stretch pass over one in-memory sample buffer.

Phases run strictly one after another on a shared thread pool:
histogram build, threshold search, remap table construction, and
in-place table application. No I/O happens here.
"""

import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from pnm_autocontrast.core.applier import apply_table
from pnm_autocontrast.core.buffer import as_sample_buffer
from pnm_autocontrast.core.histogram import build_histogram
from pnm_autocontrast.core.logging_utils import StatusLogger
from pnm_autocontrast.core.remap import table_for
from pnm_autocontrast.core.thresholds import ThresholdPair, select_thresholds
from pnm_autocontrast.core.workers import resolve_workers
from pnm_autocontrast.errors import InvalidArgument


@dataclass
class ContrastResult:
    """Outcome of one contrast-stretch pass.

    Attributes:
        thresholds: Selected source window.
        histogram: 256-bin histogram of the input samples.
        table: Remap table that was applied.
        workers: Worker count the pass ran with.
        elapsed_ms: Wall-clock time of all processing phases.
        timings: Per-phase durations in milliseconds.
    """

    thresholds: ThresholdPair
    histogram: np.ndarray
    table: np.ndarray
    workers: int
    elapsed_ms: float = 0.0
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def source_min(self) -> int:
        return self.thresholds.source_min

    @property
    def source_max(self) -> int:
        return self.thresholds.source_max


def validate_coefficient(coefficient: float) -> float:
    """Return the coefficient as float, rejecting negative or non-finite values."""
    try:
        value = float(coefficient)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Invalid number: {coefficient!r}") from e
    if not math.isfinite(value) or value < 0:
        raise InvalidArgument(f"Clip coefficient must be a finite non-negative number, got {coefficient}")
    return value


def stretch_contrast(buffer, channels: int, pixel_count: int, coefficient: float,
                     workers: Optional[int] = None, verbose: bool = False,
                     logger: Optional[StatusLogger] = None) -> ContrastResult:
    """
    Stretch the contrast of a sample buffer in place.

    All channels are pooled into one histogram. The clip budget at each
    end is coefficient * pixel_count, so for multi-channel buffers the
    coefficient is scaled by the pixel count, not the sample count.

    Args:
        buffer: Writable sample buffer of channels * pixel_count bytes
        channels: Samples per pixel (1 for grayscale, 3 for RGB)
        pixel_count: Number of pixels (width * height)
        coefficient: Fraction of pixels that may be clipped at each end
        workers: Worker thread count (default: CPU count)
        verbose: Log per-phase timings and the selected window
        logger: StatusLogger to report through (optional)

    Returns:
        ContrastResult describing the pass

    Raises:
        InvalidArgument: If the parameters or the buffer are invalid
    """
    if logger is None:
        logger = StatusLogger(verbose=verbose)

    workers = resolve_workers(workers)
    coefficient = validate_coefficient(coefficient)
    if channels < 1:
        raise InvalidArgument(f"Channel count must be at least 1, got {channels}")
    if pixel_count < 0:
        raise InvalidArgument(f"Pixel count must be non-negative, got {pixel_count}")

    samples = as_sample_buffer(buffer, writable=True)
    expected = channels * pixel_count
    if samples.size != expected:
        raise InvalidArgument(
            f"Buffer holds {samples.size} samples, expected {expected} "
            f"({pixel_count} pixels x {channels} channel(s))"
        )

    timings: Dict[str, float] = {}
    with logger.timed("Processed", indent=2) as total:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            with logger.timed("Histogram", indent=2) as elapsed:
                histogram = build_histogram(samples, workers, executor=pool)
            timings['histogram'] = elapsed[0]

            with logger.timed("Thresholds", indent=2) as elapsed:
                thresholds = select_thresholds(histogram, pixel_count, coefficient, executor=pool)
            timings['thresholds'] = elapsed[0]
            logger.info(f"min, max = {thresholds.source_min} {thresholds.source_max}", indent=2)
            if thresholds.is_degenerate:
                logger.info("Degenerate window, using step mapping", indent=2)

            with logger.timed("Remap table", indent=2) as elapsed:
                table = table_for(thresholds)
            timings['remap'] = elapsed[0]

            with logger.timed("Apply", indent=2) as elapsed:
                apply_table(samples, table, workers, executor=pool)
            timings['apply'] = elapsed[0]

    return ContrastResult(
        thresholds=thresholds,
        histogram=histogram,
        table=table,
        workers=workers,
        elapsed_ms=total[0],
        timings=timings,
    )
