"""KernelConvolutor: a square odd-sized kernel with normalised convolution.

Forward convolution is an un-flipped, unpadded cross-correlation anchored at
the top-left corner of each window, divided by the kernel sum.  It produces
``(R - n) x (C - n)`` outputs: the last valid window position in each
direction is not visited.

The "deconvolution" is not an inverse.  It expands every input cell into an
``n x n`` block holding the normalised kernel scaled by that cell, so an
``R x C`` grid becomes ``(R * n) x (C * n)``.

Neither operator guards against a zero kernel sum; the division then yields
``inf``/``nan`` values.
"""

from __future__ import annotations

import torch
import torch.nn.functional as F

from ecnn.errors import InvalidKernelSizeError, KernelLargerThanInputError
from ecnn.model.grid import Grid
from ecnn.utils import DTYPE


class KernelConvolutor:
    def __init__(self, n: int) -> None:
        if n < 1 or n % 2 == 0:
            raise InvalidKernelSizeError(f"kernel size must be a positive odd number, got {n}")
        self.matrix = Grid(n, n)

    @property
    def n(self) -> int:
        return self.matrix.rows

    def at(self, r: int, c: int) -> float:
        return self.matrix.at(r, c)

    def get_values(self) -> torch.Tensor:
        return self.matrix.get_values()

    def set_values(self, values) -> None:
        self.matrix.set_values(values)

    def modulus(self) -> float:
        return self.matrix.sum()

    def randomize(self, generator: torch.Generator | None = None) -> None:
        """Redraw every kernel entry uniformly from ``[0, 1)``."""
        self.matrix.tensor.copy_(
            torch.rand(self.n, self.n, generator=generator, dtype=DTYPE)
        )

    # ------------------------------------------------------------------
    # Forward
    # ------------------------------------------------------------------
    def convolve_one(self, grid: Grid, r: int, c: int) -> float:
        """Normalised weighted sum of the window whose top-left is ``(r, c)``."""
        n = self.n
        r, c = grid.check_bounds(r, c)
        grid.check_bounds(r + n - 1, c + n - 1)
        kernel = self.matrix.tensor
        window = grid.tensor[r:r + n, c:c + n]
        return float((kernel * window).sum() / kernel.sum())

    def convolve_2d(self, grid: Grid) -> Grid:
        n = self.n
        if grid.rows < n or grid.cols < n:
            raise KernelLargerThanInputError(
                f"{n}x{n} kernel does not fit a grid of shape {grid.shape}"
            )
        kernel = self.matrix.tensor
        out_rows, out_cols = grid.rows - n, grid.cols - n
        # conv2d is a cross-correlation: no kernel flip
        valid = F.conv2d(grid.tensor[None, None], kernel[None, None])[0, 0]
        return Grid.from_tensor(valid[:out_rows, :out_cols] / kernel.sum())

    # ------------------------------------------------------------------
    # Expansion
    # ------------------------------------------------------------------
    def deconvolve_one(self, value: float, r: int, c: int) -> float:
        r, c = self.matrix.check_bounds(r, c)
        kernel = self.matrix.tensor
        return float(kernel[r, c] * value / kernel.sum())

    def deconvolve_2d(self, grid: Grid) -> Grid:
        # Block (i, j) of the Kronecker product is grid[i, j] * kernel, i.e.
        # cell (i * n + ii, j * n + jj) = deconvolve_one(grid[i, j], ii, jj).
        kernel = self.matrix.tensor
        return Grid.from_tensor(torch.kron(grid.tensor, kernel) / kernel.sum())

    def __repr__(self) -> str:
        return f"KernelConvolutor(n={self.n})"
