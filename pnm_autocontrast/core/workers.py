"""Worker-count resolution and work partitioning helpers."""

import numbers
import os
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple

from pnm_autocontrast.errors import InvalidArgument


def default_workers() -> int:
    """Return the hardware concurrency, never less than 1."""
    return max(1, os.cpu_count() or 1)


def resolve_workers(workers: Optional[int] = None) -> int:
    """
    Resolve a requested worker count.

    Args:
        workers: Requested worker count, or None for hardware concurrency

    Returns:
        Worker count (>= 1)

    Raises:
        InvalidArgument: If workers is not a positive integer
    """
    if workers is None:
        return default_workers()
    if isinstance(workers, bool) or not isinstance(workers, numbers.Integral):
        raise InvalidArgument(f"Worker count must be an integer, got {workers!r}")
    if workers < 1:
        raise InvalidArgument(f"Worker count must be at least 1, got {workers}")
    return int(workers)


def even_blocks(length: int, workers: int) -> Tuple[List[Tuple[int, int]], int]:
    """
    Split [0, length) into `workers` blocks of exactly length // workers items.

    The tail that does not fit into the equal blocks is left uncovered and
    its start offset is returned so the caller can handle it separately.

    Returns:
        Tuple of (block bounds, remainder start)
    """
    block_size = length // workers
    bounds = [(block_size * i, block_size * (i + 1)) for i in range(workers)]
    return bounds, block_size * workers


def covering_blocks(length: int, workers: int) -> List[Tuple[int, int]]:
    """Split [0, length) into at most `workers` contiguous blocks covering every index."""
    if length == 0:
        return []
    count = min(workers, length)
    base, extra = divmod(length, count)
    bounds = []
    start = 0
    for i in range(count):
        end = start + base + (1 if i < extra else 0)
        bounds.append((start, end))
        start = end
    return bounds


def run_blocks(fn: Callable[[int, int], None], bounds: Sequence[Tuple[int, int]],
               workers: int, executor: Optional[Executor] = None) -> None:
    """
    Run fn(start, end) for every block and wait for all of them.

    Acts as a barrier: returns only after every block has finished.
    Exceptions raised by a block propagate to the caller.

    Args:
        fn: Block function
        bounds: Block bounds as (start, end) pairs
        workers: Pool size when no executor is given
        executor: Existing pool to reuse (optional)
    """
    if executor is None:
        with ThreadPoolExecutor(max_workers=max(1, min(workers, len(bounds)))) as pool:
            run_blocks(fn, bounds, workers, pool)
        return

    futures = [executor.submit(fn, start, end) for start, end in bounds]
    for future in futures:
        future.result()
