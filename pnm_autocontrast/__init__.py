"""
PNM Autocontrast

Percentile-based linear contrast stretching for binary PNM images (P5/P6),
with multi-threaded histogram counting and table application.
"""

__version__ = "0.1.0"
__author__ = "PNM Autocontrast Contributors"

__all__ = [
    "stretch_contrast",
    "read_pnm",
    "write_pnm",
    "handle_image",
    "process_batch",
]


def __getattr__(name):
    """Lazy import for submodules to speed up CLI startup."""
    if name == "stretch_contrast":
        from pnm_autocontrast.core.engine import stretch_contrast
        return stretch_contrast
    elif name == "read_pnm":
        from pnm_autocontrast.io.pnm import read_pnm
        return read_pnm
    elif name == "write_pnm":
        from pnm_autocontrast.io.pnm import write_pnm
        return write_pnm
    elif name == "handle_image":
        from pnm_autocontrast.processing.pipeline import handle_image
        return handle_image
    elif name == "process_batch":
        from pnm_autocontrast.processing.pipeline import process_batch
        return process_batch
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
