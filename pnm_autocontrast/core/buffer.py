"""Sample buffer normalization."""

import numpy as np

from pnm_autocontrast.errors import InvalidArgument


def as_sample_buffer(buffer, writable: bool = False) -> np.ndarray:
    """
    View a byte buffer as a flat uint8 array without copying.

    Accepts numpy uint8 arrays of any shape (must be C-contiguous) and
    bytes-like objects (bytearray, memoryview, bytes). Writes through the
    returned array reach the caller's buffer.

    Args:
        buffer: Sample buffer
        writable: If True, reject buffers that cannot be modified in place

    Returns:
        1-D uint8 view of the buffer

    Raises:
        InvalidArgument: If the buffer is not a contiguous run of bytes,
            or is read-only while writable is requested
    """
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise InvalidArgument(f"Sample buffer must be uint8, got {buffer.dtype}")
        if not buffer.flags.c_contiguous:
            raise InvalidArgument("Sample buffer must be C-contiguous")
        samples = buffer.reshape(-1)
    else:
        try:
            samples = np.frombuffer(buffer, dtype=np.uint8)
        except TypeError as e:
            raise InvalidArgument(f"Unsupported sample buffer type: {type(buffer).__name__}") from e

    if writable and not samples.flags.writeable:
        raise InvalidArgument("Sample buffer is read-only")
    return samples
