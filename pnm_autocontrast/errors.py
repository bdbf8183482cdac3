"""Exception hierarchy for image loading, argument parsing and processing."""


class AutocontrastError(Exception):
    """Base class for all errors raised by pnm_autocontrast."""


class InputNotFound(AutocontrastError, FileNotFoundError):
    """Input image cannot be opened."""


class MalformedHeader(AutocontrastError, ValueError):
    """PNM header tokens are missing or the magic bytes are not recognized."""


class TruncatedImage(MalformedHeader):
    """Fewer raw sample bytes follow the header than it announces."""


class AllocationFailure(AutocontrastError, MemoryError):
    """Sample buffer could not be allocated."""


class InvalidArgument(AutocontrastError, ValueError):
    """A numeric argument failed to parse or is out of range."""


class OutputNotWritable(AutocontrastError, OSError):
    """Output image cannot be written."""
