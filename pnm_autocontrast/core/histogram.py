"""Parallel 256-bin histogram of 8-bit samples.

Each worker counts one equal-sized block of the buffer into a private
table, then adds it into the shared histogram under a lock. Samples past
the last full block are counted afterwards on the calling thread.
"""

import threading
from concurrent.futures import Executor
from typing import Optional

import numpy as np

from pnm_autocontrast.core.buffer import as_sample_buffer
from pnm_autocontrast.core.workers import even_blocks, resolve_workers, run_blocks

HISTOGRAM_BINS = 256


def count_samples(samples: np.ndarray) -> np.ndarray:
    """Count a run of samples into a fresh 256-bin table."""
    return np.bincount(samples, minlength=HISTOGRAM_BINS).astype(np.int64, copy=False)


def build_histogram(buffer, workers: Optional[int] = None,
                    executor: Optional[Executor] = None) -> np.ndarray:
    """
    Build the histogram of a sample buffer using `workers` parallel blocks.

    The result does not depend on the worker count or on the order in
    which workers finish.

    Args:
        buffer: Sample buffer (uint8 array or bytes-like)
        workers: Number of blocks to count in parallel (default: CPU count)
        executor: Pool to run the blocks on; a private pool is used if None

    Returns:
        int64 array of shape (256,) whose sum equals the buffer length
    """
    samples = as_sample_buffer(buffer)
    workers = resolve_workers(workers)

    histogram = np.zeros(HISTOGRAM_BINS, dtype=np.int64)
    merge_lock = threading.Lock()
    bounds, remainder_start = even_blocks(samples.size, workers)

    def count_block(start: int, end: int) -> None:
        partial = count_samples(samples[start:end])
        with merge_lock:
            histogram[:] += partial

    run_blocks(count_block, bounds, workers, executor)

    # Tail not covered by the equal-sized blocks
    if remainder_start < samples.size:
        histogram += count_samples(samples[remainder_start:])

    return histogram
