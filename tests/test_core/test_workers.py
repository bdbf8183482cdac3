"""Tests for worker-count and partitioning helpers."""

import os
import pytest

from pnm_autocontrast.core.workers import (
    covering_blocks,
    default_workers,
    even_blocks,
    resolve_workers,
    run_blocks,
)
from pnm_autocontrast.errors import InvalidArgument


class TestResolveWorkers:
    """Tests for resolve_workers function."""

    def test_default_is_cpu_count(self):
        """Test that None resolves to hardware concurrency."""
        assert resolve_workers(None) == max(1, os.cpu_count() or 1)
        assert default_workers() >= 1

    def test_passes_positive_count(self):
        """Test that a positive count is returned unchanged."""
        assert resolve_workers(5) == 5

    @pytest.mark.parametrize("workers", [0, -1, 2.5, True, "4"])
    def test_rejects_invalid(self, workers):
        """Test that non-positive and non-integer counts are rejected."""
        with pytest.raises(InvalidArgument):
            resolve_workers(workers)


class TestPartitioning:
    """Tests for even_blocks and covering_blocks."""

    def test_even_blocks_leave_remainder(self):
        """Test equal blocks with the tail left uncovered."""
        bounds, remainder_start = even_blocks(10, 3)
        assert bounds == [(0, 3), (3, 6), (6, 9)]
        assert remainder_start == 9

    def test_even_blocks_more_workers_than_items(self):
        """Test that all blocks are empty when T > N."""
        bounds, remainder_start = even_blocks(2, 5)
        assert all(start == end for start, end in bounds)
        assert remainder_start == 0

    def test_covering_blocks_cover_everything(self):
        """Test that covering blocks have no gaps."""
        assert covering_blocks(10, 3) == [(0, 4), (4, 7), (7, 10)]

    def test_covering_blocks_more_workers_than_items(self):
        """Test that at most one block per item is created."""
        assert covering_blocks(2, 5) == [(0, 1), (1, 2)]

    def test_covering_blocks_empty(self):
        """Test that nothing is produced for an empty range."""
        assert covering_blocks(0, 4) == []


class TestRunBlocks:
    """Tests for run_blocks function."""

    def test_runs_every_block(self):
        """Test that each block runs once before returning."""
        seen = []
        run_blocks(lambda start, end: seen.append((start, end)), [(0, 1), (1, 2), (2, 3)], 2)
        assert sorted(seen) == [(0, 1), (1, 2), (2, 3)]

    def test_propagates_errors(self):
        """Test that a failing block raises in the caller."""
        def fail(start, end):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            run_blocks(fail, [(0, 1)], 1)
