"""Grid: a dense row-major 2D float matrix with bounds-checked access.

Storage is a contiguous ``(rows, cols)`` float64 tensor, so the flat view
returned by ``get_values`` is row-major with ``index = c + r * cols``.
``scale`` and ``add`` mutate in place and return ``self`` so results can be
accumulated with chaining::

    total = a.add(b).add(c).scale(k)
"""

from __future__ import annotations

import operator

import torch

from ecnn.errors import DimensionMismatchError, OutOfBoundsError, SizeMismatchError
from ecnn.utils import DTYPE, as_flat_tensor


def check_size(rows, cols) -> tuple[int, int]:
    """Normalise a ``(rows, cols)`` pair to non-negative Python ints."""
    message = f"rows and cols must be integers, got ({rows!r}, {cols!r})"
    if isinstance(rows, bool) or isinstance(cols, bool):
        raise ValueError(message)
    try:
        rows, cols = operator.index(rows), operator.index(cols)
    except TypeError:
        raise ValueError(message) from None
    if rows < 0 or cols < 0:
        raise ValueError(f"rows and cols must be non-negative, got ({rows}, {cols})")
    return rows, cols


class Grid:
    def __init__(self, rows: int, cols: int) -> None:
        self.rows, self.cols = check_size(rows, cols)
        self._data = torch.zeros(self.rows, self.cols, dtype=DTYPE)

    @classmethod
    def from_tensor(cls, data) -> Grid:
        """Copy a 2D array-like into a new Grid."""
        t = torch.as_tensor(data, dtype=DTYPE)
        if t.dim() != 2:
            raise ValueError(f"expected a 2D array, got shape {tuple(t.shape)}")
        grid = cls(int(t.shape[0]), int(t.shape[1]))
        grid._data.copy_(t)
        return grid

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def tensor(self) -> torch.Tensor:
        """The backing ``(rows, cols)`` tensor (not a copy)."""
        return self._data

    def check_bounds(self, r: int, c: int) -> tuple[int, int]:
        """Return ``(r, c)`` as ints; non-integer or outside indices raise."""
        try:
            ri, ci = operator.index(r), operator.index(c)
        except TypeError:
            raise OutOfBoundsError(r, c, self.rows, self.cols) from None
        if not (0 <= ri < self.rows and 0 <= ci < self.cols):
            raise OutOfBoundsError(r, c, self.rows, self.cols)
        return ri, ci

    def index(self, r: int, c: int) -> int:
        r, c = self.check_bounds(r, c)
        return c + r * self.cols

    def at(self, r: int, c: int) -> float:
        r, c = self.check_bounds(r, c)
        return float(self._data[r, c])

    def set(self, r: int, c: int, value: float) -> None:
        r, c = self.check_bounds(r, c)
        self._data[r, c] = value

    # ------------------------------------------------------------------
    # Raw storage
    # ------------------------------------------------------------------
    def get_values(self) -> torch.Tensor:
        """Flat row-major view onto the storage; writes go through."""
        return self._data.view(-1)

    def set_values(self, values) -> None:
        flat = as_flat_tensor(values)
        if flat.numel() != self.rows * self.cols:
            raise SizeMismatchError(
                f"got {flat.numel()} values for a grid of {self.rows * self.cols} cells"
            )
        self._data.copy_(flat.view(self.rows, self.cols))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def sum(self) -> float:
        """Sum of all entries (the kernel "modulus")."""
        return float(self._data.sum())

    def scale(self, factor: float) -> Grid:
        self._data.mul_(factor)
        return self

    def add(self, other: Grid) -> Grid:
        if self.shape != other.shape:
            raise DimensionMismatchError(
                f"cannot add grid of shape {other.shape} to grid of shape {self.shape}"
            )
        self._data.add_(other._data)
        return self

    def clone(self) -> Grid:
        return Grid.from_tensor(self._data)

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols})"
