"""Read, stretch and write PNM images, one at a time or as a batch."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from tqdm import tqdm

from pnm_autocontrast.config import LAYOUTS
from pnm_autocontrast.core.engine import ContrastResult, stretch_contrast
from pnm_autocontrast.core.logging_utils import StatusLogger
from pnm_autocontrast.errors import AutocontrastError, InvalidArgument
from pnm_autocontrast.io.pnm import read_pnm, to_interleaved, to_planar, write_pnm

# Supported image extensions
IMAGE_EXTENSIONS = {'.pnm', '.pgm', '.ppm'}


def handle_image(input_path: Path, output_path: Path, coefficient: float,
                 workers: Optional[int] = None, layout: str = 'interleaved',
                 verbose: bool = False,
                 logger: Optional[StatusLogger] = None) -> ContrastResult:
    """
    Stretch the contrast of one PNM file and write the result.

    Args:
        input_path: Source P5/P6 image
        output_path: Destination path (parent folders are created)
        coefficient: Fraction of pixels that may be clipped at each end
        workers: Worker thread count (default: CPU count)
        layout: 'interleaved' to process samples in file order, 'planar'
            to split RGB into one plane per channel first
        verbose: Log dimensions and per-phase timings
        logger: StatusLogger to report through (optional)

    Returns:
        ContrastResult of the pass

    Raises:
        AutocontrastError: If the input cannot be read or an argument is invalid
    """
    if logger is None:
        logger = StatusLogger(verbose=verbose)
    if layout not in LAYOUTS:
        raise InvalidArgument(f"Unknown layout {layout!r}, expected one of {', '.join(LAYOUTS)}")

    logger.info(f'Handling "{input_path}"...')

    with logger.timed("Read", indent=2):
        image = read_pnm(input_path)
    logger.info(f"width: {image.width}, height: {image.height}, "
                f"size: {image.pixel_count}, channels: {image.channels}", indent=2)

    planar = layout == 'planar' and image.channels > 1
    buffer = to_planar(image.samples, image.channels) if planar else image.samples

    result = stretch_contrast(buffer, image.channels, image.pixel_count, coefficient,
                              workers=workers, verbose=verbose, logger=logger)

    if planar:
        image.samples = to_interleaved(buffer, image.channels)

    logger.result(f"Time ({result.workers} thread(s)): {result.elapsed_ms:g} ms")

    with logger.timed("Write", indent=2):
        write_pnm(image, output_path)

    return result


def get_image_files(folder: Path, extensions: Optional[Set[str]] = None) -> List[Path]:
    """
    Get all image files from folder, excluding hidden files.

    Args:
        folder: Directory to search for image files
        extensions: Set of file extensions to search for (default: IMAGE_EXTENSIONS)

    Returns:
        Sorted list of image file paths
    """
    if extensions is None:
        extensions = IMAGE_EXTENSIONS

    files = []
    for item in folder.iterdir():
        if item.name.startswith('.'):
            continue
        if item.is_file() and item.suffix.lower() in extensions:
            files.append(item)

    return sorted(files)


def batch_jobs(input_folder: Path, output_folder: Path,
               extensions: Optional[Set[str]] = None) -> List[Tuple[Path, Path]]:
    """Pair every image in input_folder with a same-named file in output_folder."""
    return [(path, Path(output_folder) / path.name)
            for path in get_image_files(Path(input_folder), extensions)]


@dataclass
class BatchSummary:
    """Outcome of a batch run.

    Attributes:
        processed: Input paths that were written successfully.
        failed: (input path, error message) pairs for images that failed.
    """

    processed: List[Path] = field(default_factory=list)
    failed: List[Tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def total(self) -> int:
        return len(self.processed) + len(self.failed)


def process_batch(jobs: Iterable[Tuple[Path, Path]], coefficient: float,
                  workers: Optional[int] = None, layout: str = 'interleaved',
                  verbose: bool = False, show_progress: bool = True,
                  logger: Optional[StatusLogger] = None) -> BatchSummary:
    """
    Process several images, continuing past images that fail.

    Each failure is logged with an [ERROR] line and recorded in the summary.

    Args:
        jobs: (input path, output path) pairs
        coefficient: Fraction of pixels that may be clipped at each end
        workers: Worker thread count (default: CPU count)
        layout: Buffer layout handed to the core ('interleaved' or 'planar')
        verbose: Log per-phase timings
        show_progress: Show a tqdm progress bar
        logger: StatusLogger to report through (optional)

    Returns:
        BatchSummary with processed and failed images
    """
    if logger is None:
        logger = StatusLogger(verbose=verbose)

    jobs = list(jobs)
    summary = BatchSummary()

    for input_path, output_path in tqdm(jobs, desc="Processing", unit="image",
                                        disable=not show_progress):
        try:
            handle_image(input_path, output_path, coefficient, workers=workers,
                         layout=layout, verbose=verbose, logger=logger)
        except AutocontrastError as e:
            logger.error(f"{input_path.name}: {e}")
            summary.failed.append((input_path, str(e)))
            continue
        summary.processed.append(input_path)

    if summary.failed:
        logger.warning(f"{len(summary.failed)} of {summary.total} image(s) failed")
    else:
        logger.success(f"Processed {summary.total} image(s)")

    return summary
