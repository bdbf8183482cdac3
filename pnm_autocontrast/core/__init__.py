"""Core contrast-stretch engine: histogram, thresholds, remap, apply."""

from pnm_autocontrast.core.histogram import build_histogram, HISTOGRAM_BINS
from pnm_autocontrast.core.thresholds import ThresholdPair, select_thresholds
from pnm_autocontrast.core.remap import build_remap_table
from pnm_autocontrast.core.applier import apply_table
from pnm_autocontrast.core.engine import ContrastResult, stretch_contrast

__all__ = [
    "build_histogram",
    "HISTOGRAM_BINS",
    "ThresholdPair",
    "select_thresholds",
    "build_remap_table",
    "apply_table",
    "ContrastResult",
    "stretch_contrast",
]
