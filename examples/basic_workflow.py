#!/usr/bin/env python3
"""
Example workflow: Single image -> In-memory buffer -> Batch

This script demonstrates how to use the pnm-autocontrast package
programmatically to stretch one file, a raw buffer, and a whole folder.
"""

from pathlib import Path

import numpy as np

from pnm_autocontrast.core.engine import stretch_contrast
from pnm_autocontrast.processing.pipeline import batch_jobs, handle_image, process_batch


def main():
    """Run complete contrast-stretch workflow."""

    # Configuration
    image_folder = Path("images")
    output_folder = Path("result")
    coefficient = 0.01
    threads = 4

    print("=" * 60)
    print("PNM Autocontrast Workflow")
    print("=" * 60)

    # Step 1: One file on disk
    print("\nStep 1: Stretching a single image...")
    print("-" * 60)
    result = handle_image(
        image_folder / "low_contrast.small.pnm",
        output_folder / "low_contrast.small.pnm",
        coefficient,
        workers=threads,
        verbose=True,
    )
    print(f"Source window: {result.source_min}..{result.source_max}")

    # Step 2: A buffer already in memory
    print("\nStep 2: Stretching an in-memory buffer...")
    print("-" * 60)
    buffer = np.array([10, 10, 250, 250], dtype=np.uint8)
    stretch_contrast(buffer, channels=1, pixel_count=4, coefficient=0.0, workers=threads)
    print(f"Stretched samples: {buffer.tolist()}")

    # Step 3: Every image in a folder
    print("\nStep 3: Stretching a folder...")
    print("-" * 60)
    summary = process_batch(
        batch_jobs(image_folder, output_folder),
        coefficient,
        workers=threads,
    )

    print("\n" + "=" * 60)
    print(f"Workflow complete! {len(summary.processed)} ok, {len(summary.failed)} failed")
    print("=" * 60)


if __name__ == "__main__":
    main()
