"""I/O utilities for binary PNM images."""

from pnm_autocontrast.io.pnm import (
    PnmImage,
    read_pnm,
    write_pnm,
    to_planar,
    to_interleaved,
)

__all__ = [
    "PnmImage",
    "read_pnm",
    "write_pnm",
    "to_planar",
    "to_interleaved",
]
