"""Lookup table for the linear source-window stretch."""

import numpy as np

from pnm_autocontrast.core.histogram import HISTOGRAM_BINS
from pnm_autocontrast.core.thresholds import MAX_SAMPLE, ThresholdPair


def build_remap_table(source_min: int, source_max: int) -> np.ndarray:
    """
    Build the 256-entry table mapping [source_min, source_max] onto [0, 255].

    Values below the window map to 0, values above it to 255, values inside
    scale linearly with rounding half away from zero.

    A degenerate window (source_min >= source_max) has no slope. It becomes
    a step at the midpoint of the two bounds: inputs at or below it map to
    0, inputs above it map to 255.

    Args:
        source_min: Lower window bound (0-255)
        source_max: Upper window bound (0-255)

    Returns:
        Read-only uint8 array of shape (256,)
    """
    source_min = int(source_min)
    source_max = int(source_max)
    for name, value in (('source_min', source_min), ('source_max', source_max)):
        if not 0 <= value <= MAX_SAMPLE:
            raise ValueError(f"{name} must be in [0, {MAX_SAMPLE}], got {value}")

    values = np.arange(HISTOGRAM_BINS, dtype=np.int64)

    if source_min >= source_max:
        pivot = (source_min + source_max) // 2
        table = np.where(values <= pivot, 0, MAX_SAMPLE).astype(np.uint8)
    else:
        # floor(255 * k / span + 0.5) in integers, so exact halves round up
        span = source_max - source_min
        offsets = np.maximum(0, values - source_min)
        scaled = (MAX_SAMPLE * offsets + span // 2) // span
        table = np.clip(scaled, 0, MAX_SAMPLE).astype(np.uint8)

    table.flags.writeable = False
    return table


def table_for(thresholds: ThresholdPair) -> np.ndarray:
    """Build the remap table for a ThresholdPair."""
    return build_remap_table(thresholds.source_min, thresholds.source_max)
