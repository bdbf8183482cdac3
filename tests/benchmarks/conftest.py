"""Benchmark utilities and fixtures for performance testing."""

import pytest
import time
import tracemalloc
import gc
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, List
import numpy as np


@dataclass
class BenchmarkResult:
    """Results from a benchmark run."""
    name: str
    time_ms: float
    memory_peak_mb: float
    iterations: int
    time_std_ms: float = 0.0
    all_times_ms: List[float] = field(default_factory=list)

    def __str__(self):
        return (
            f"{self.name}: "
            f"time={self.time_ms:.2f}ms (std={self.time_std_ms:.2f}ms), "
            f"memory_peak={self.memory_peak_mb:.2f}MB"
        )


class BenchmarkRunner:
    """Runner for timing and memory benchmarks."""

    def __init__(self, warmup: int = 2, iterations: int = 10):
        self.warmup = warmup
        self.iterations = iterations

    def run(self, func: Callable, name: Optional[str] = None) -> BenchmarkResult:
        """Run benchmark with timing and memory measurement.

        Args:
            func: Function to benchmark (should take no arguments)
            name: Optional name for the benchmark

        Returns:
            BenchmarkResult with timing and memory data
        """
        name = name or getattr(func, '__name__', 'benchmark')

        gc.collect()
        for _ in range(self.warmup):
            func()

        # Memory measurement (single run)
        gc.collect()
        tracemalloc.start()
        func()
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        times = []
        for _ in range(self.iterations):
            gc.collect()
            start = time.perf_counter()
            func()
            times.append((time.perf_counter() - start) * 1000)

        return BenchmarkResult(
            name=name,
            time_ms=float(np.median(times)),
            time_std_ms=float(np.std(times)),
            memory_peak_mb=peak / (1024 * 1024),
            iterations=self.iterations,
            all_times_ms=times,
        )

    def scaling(self, make_func: Callable[[int], Callable],
                worker_counts: List[int], name: str) -> Dict[int, BenchmarkResult]:
        """Run the same workload at several worker counts.

        Args:
            make_func: Called with a worker count, returns the function to time
            worker_counts: Worker counts to try
            name: Benchmark name prefix

        Returns:
            dict mapping worker count to its BenchmarkResult
        """
        return {workers: self.run(make_func(workers), f"{name}_t{workers}")
                for workers in worker_counts}


def speedup(results: Dict[int, BenchmarkResult]) -> Dict[int, float]:
    """Speedup of each worker count relative to the smallest one."""
    base = results[min(results)].time_ms
    return {workers: (base / r.time_ms if r.time_ms > 0 else float('inf'))
            for workers, r in results.items()}


@pytest.fixture
def benchmark():
    """Fixture providing a BenchmarkRunner instance."""
    return BenchmarkRunner(warmup=2, iterations=10)


@pytest.fixture
def quick_benchmark():
    """Faster benchmark runner for CI/development."""
    return BenchmarkRunner(warmup=1, iterations=5)


@pytest.fixture
def speedup_of():
    """Fixture exposing speedup() to benchmark modules."""
    return speedup


# =============================================================================
# Benchmark-specific buffer fixtures (larger sizes for realistic testing)
# =============================================================================

@pytest.fixture
def benchmark_4k_gray():
    """4096x4096 grayscale sample buffer confined to 40..200."""
    rng = np.random.default_rng(42)
    return rng.integers(40, 201, size=4096 * 4096, dtype=np.uint8)


@pytest.fixture
def benchmark_2k_rgb():
    """2048x2048 interleaved RGB sample buffer."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=2048 * 2048 * 3, dtype=np.uint8)
