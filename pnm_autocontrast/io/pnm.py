"""Binary PNM (P5 grayscale / P6 RGB) reading and writing.

Only 8-bit images are supported. Samples are held as one flat uint8
array in file order (interleaved RGB for P6); to_planar/to_interleaved
convert between that and one plane per channel.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

import numpy as np

from pnm_autocontrast.errors import (
    AllocationFailure,
    InputNotFound,
    MalformedHeader,
    OutputNotWritable,
    TruncatedImage,
)

MAGIC_CHANNELS = {b'P5': 1, b'P6': 3}
CHANNEL_MAGIC = {channels: magic for magic, channels in MAGIC_CHANNELS.items()}
MAX_SUPPORTED_MAXVAL = 255


@dataclass
class PnmImage:
    """A decoded PNM image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        maxval: Maximum sample value from the header, written back unchanged.
        channels: 1 for P5, 3 for P6.
        samples: Flat uint8 array of width * height * channels samples.
    """

    width: int
    height: int
    maxval: int
    channels: int
    samples: np.ndarray

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def magic(self) -> bytes:
        return CHANNEL_MAGIC[self.channels]

    def header_bytes(self) -> bytes:
        """Header in the form written by write_pnm."""
        return b"%s\n%d %d\n%d\n" % (self.magic, self.width, self.height, self.maxval)


def _next_token(f: BinaryIO) -> Optional[bytes]:
    """Read the next whitespace-separated header token, skipping # comments."""
    ch = f.read(1)
    while ch:
        if ch == b"#":
            # comment runs to end of line
            while True:
                c2 = f.read(1)
                if not c2 or c2 in (b"\n", b"\r"):
                    break
        elif not ch.isspace():
            break
        ch = f.read(1)
    if not ch:
        return None

    token = bytearray(ch)
    while True:
        c = f.peek(1)[:1]
        if not c or c.isspace() or c == b"#":
            break
        token.extend(f.read(1))
    return bytes(token)


def _header_int(f: BinaryIO, name: str) -> int:
    token = _next_token(f)
    if token is None:
        raise MalformedHeader(f"PNM file not recognized: missing {name}")
    try:
        return int(token)
    except ValueError:
        raise MalformedHeader(f"PNM file not recognized: bad {name} {token!r}") from None


def read_header(f: BinaryIO) -> Tuple[int, int, int, int]:
    """
    Parse a P5/P6 header and consume the single separator byte after it.

    Args:
        f: Buffered binary file positioned at the start of the image

    Returns:
        Tuple of (channels, width, height, maxval)

    Raises:
        MalformedHeader: If the magic, a token or the separator is invalid
    """
    magic = f.read(2)
    if magic not in MAGIC_CHANNELS:
        raise MalformedHeader('PNM file not recognized: "P5" or "P6" not found')

    width = _header_int(f, "width")
    height = _header_int(f, "height")
    maxval = _header_int(f, "maximum value")

    if width <= 0 or height <= 0:
        raise MalformedHeader(f"Invalid image size {width}x{height}")
    if not 0 < maxval <= MAX_SUPPORTED_MAXVAL:
        raise MalformedHeader(f"Only 8-bit images are supported (maximum value {maxval})")

    sep = f.read(1)
    if sep == b"#":
        # a comment right after maxval ends with the separator newline
        while sep and sep not in (b"\n", b"\r"):
            sep = f.read(1)
    if not sep or not sep.isspace():
        raise MalformedHeader("Missing separator between header and sample data")

    return MAGIC_CHANNELS[magic], width, height, maxval


def allocate_samples(count: int) -> np.ndarray:
    """Allocate an uninitialized uint8 sample buffer.

    Raises:
        AllocationFailure: If the buffer is too large to allocate or to index
    """
    try:
        return np.empty(count, dtype=np.uint8)
    except (MemoryError, ValueError, OverflowError) as e:
        raise AllocationFailure(f"Can not allocate memory for {count} samples") from e


def read_pnm(path: Path) -> PnmImage:
    """
    Read a binary PNM image.

    Args:
        path: Path to a P5 or P6 file

    Returns:
        PnmImage with interleaved samples

    Raises:
        InputNotFound: If the file cannot be opened
        MalformedHeader: If the header is not a valid 8-bit P5/P6 header
        TruncatedImage: If the file holds fewer samples than announced
        AllocationFailure: If the sample buffer cannot be allocated
    """
    path = Path(path)
    try:
        f = open(path, 'rb')
    except OSError as e:
        raise InputNotFound(f"Error reading input file: {path} ({e.strerror})") from e

    with f:
        channels, width, height, maxval = read_header(f)
        samples = allocate_samples(width * height * channels)
        read = f.readinto(samples)

    if read != samples.size:
        raise TruncatedImage(f"Expected {samples.size} bytes of sample data, found {read}")

    return PnmImage(width=width, height=height, maxval=maxval,
                    channels=channels, samples=samples)


def write_pnm(image: PnmImage, path: Path) -> None:
    """
    Write a PNM image, creating parent directories as needed.

    Args:
        image: Image with interleaved samples
        path: Output file path

    Raises:
        OutputNotWritable: If the file or its folder cannot be created
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'wb') as f:
            f.write(image.header_bytes())
            f.write(np.ascontiguousarray(image.samples, dtype=np.uint8).tobytes())
    except OSError as e:
        raise OutputNotWritable(f"Error writing output file: {path} ({e.strerror})") from e


def to_planar(samples: np.ndarray, channels: int) -> np.ndarray:
    """
    Reorder interleaved samples (RGBRGB...) into planes (RR..GG..BB..).

    Returns a new flat, contiguous array.
    """
    if channels == 1:
        return np.array(samples, dtype=np.uint8, copy=True).reshape(-1)
    return np.ascontiguousarray(samples.reshape(-1, channels).T).reshape(-1)


def to_interleaved(planes: np.ndarray, channels: int) -> np.ndarray:
    """Inverse of to_planar. Returns a new flat, contiguous array."""
    if channels == 1:
        return np.array(planes, dtype=np.uint8, copy=True).reshape(-1)
    return np.ascontiguousarray(planes.reshape(channels, -1).T).reshape(-1)
