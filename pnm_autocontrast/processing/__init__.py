"""Per-image and batch processing of PNM files."""

from pnm_autocontrast.processing.pipeline import (
    handle_image,
    process_batch,
    batch_jobs,
    get_image_files,
    BatchSummary,
)

__all__ = [
    "handle_image",
    "process_batch",
    "batch_jobs",
    "get_image_files",
    "BatchSummary",
]
