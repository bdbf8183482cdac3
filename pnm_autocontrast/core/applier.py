"""Parallel in-place application of a remap table."""

from concurrent.futures import Executor
from typing import Optional

import numpy as np

from pnm_autocontrast.core.buffer import as_sample_buffer
from pnm_autocontrast.core.histogram import HISTOGRAM_BINS
from pnm_autocontrast.core.workers import covering_blocks, resolve_workers, run_blocks


def apply_table(buffer, table: np.ndarray, workers: Optional[int] = None,
                executor: Optional[Executor] = None) -> None:
    """
    Replace every sample with table[sample], in place.

    The buffer is split into contiguous blocks, one per worker; every index
    belongs to exactly one block and the table is only read, so no locking
    is needed.

    Args:
        buffer: Writable sample buffer (uint8 array or bytearray)
        table: uint8 lookup table of shape (256,)
        workers: Number of blocks (default: CPU count)
        executor: Pool to run the blocks on; a private pool is used if None
    """
    samples = as_sample_buffer(buffer, writable=True)
    workers = resolve_workers(workers)

    table = np.asarray(table)
    if table.shape != (HISTOGRAM_BINS,) or table.dtype != np.uint8:
        raise ValueError(f"Remap table must be uint8 with {HISTOGRAM_BINS} entries")

    def remap_block(start: int, end: int) -> None:
        block = samples[start:end]
        block[:] = table[block]

    run_blocks(remap_block, covering_blocks(samples.size, workers), workers, executor)
