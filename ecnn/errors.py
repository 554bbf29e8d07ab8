"""Exception hierarchy for the convolution engine.

All errors are precondition violations raised straight to the caller; the
engine never catches or retries them.  Each kind also derives from the
builtin it refines so callers may catch ``ValueError``/``IndexError``.
"""

from __future__ import annotations


class EcnnError(Exception):
    """Base class for every engine error."""


class OutOfBoundsError(EcnnError, IndexError):
    """Grid index outside ``[0, rows) x [0, cols)``."""

    def __init__(self, r: int, c: int, rows: int, cols: int) -> None:
        super().__init__(
            f"index ({r}, {c}) out of bounds for grid of shape ({rows}, {cols})"
        )
        self.index = (r, c)
        self.shape = (rows, cols)


class SizeMismatchError(EcnnError, ValueError):
    """Raw value buffer length does not match the target storage."""


class DimensionMismatchError(EcnnError, ValueError):
    """Two grids that must share a shape do not."""


class InconsistentShapeError(EcnnError, ValueError):
    """The channels of a ChannelImage disagree in shape."""


class InvalidKernelSizeError(EcnnError, ValueError):
    """Kernel side length is not a positive odd integer."""


class KernelLargerThanInputError(EcnnError, ValueError):
    """Input grid is smaller than the kernel window."""
