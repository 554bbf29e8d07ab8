"""ChannelImage: an RGB picture held as three same-shaped Grids.

Pixel buffers coming from a canvas are interleaved RGBA, four samples per
pixel, laid out row by row.  Alpha is discarded on the way in and filled
with a constant on the way out.
"""

from __future__ import annotations

import numpy as np
import torch
from einops import rearrange

from ecnn.errors import DimensionMismatchError, InconsistentShapeError, SizeMismatchError
from ecnn.model.grid import Grid, check_size
from ecnn.utils import Channel, as_flat_tensor, pick

try:
    from PIL import Image
    _HAS_PIL = True
except Exception:
    _HAS_PIL = False

SAMPLES_PER_PIXEL = 4


class ChannelImage:
    def __init__(self, red: Grid, green: Grid, blue: Grid) -> None:
        if not (red.shape == green.shape == blue.shape):
            raise DimensionMismatchError(
                "picture channels must share a shape, got "
                f"red={red.shape} green={green.shape} blue={blue.shape}"
            )
        self.red = red
        self.green = green
        self.blue = blue

    @classmethod
    def from_grids(cls, red: Grid, green: Grid, blue: Grid) -> ChannelImage:
        return cls(red, green, blue)

    @classmethod
    def from_pixels(cls, pixels, rows: int, cols: int) -> ChannelImage:
        """Deinterleave a flat RGBA buffer of ``rows * cols`` pixels."""
        rows, cols = check_size(rows, cols)
        flat = as_flat_tensor(pixels)
        expected = SAMPLES_PER_PIXEL * rows * cols
        if flat.numel() != expected:
            raise SizeMismatchError(
                f"expected {expected} samples for a {rows}x{cols} RGBA image, "
                f"got {flat.numel()}"
            )
        planes = rearrange(
            flat, "(r c k) -> k r c", r=rows, c=cols, k=SAMPLES_PER_PIXEL
        )
        red, green, blue, _alpha = planes
        return cls(Grid.from_tensor(red), Grid.from_tensor(green), Grid.from_tensor(blue))

    @classmethod
    def from_pil(cls, image) -> ChannelImage:
        """Ingest a ``PIL.Image`` (any mode; converted to RGBA first)."""
        rgba = np.asarray(image.convert("RGBA"), dtype=np.float64)
        height, width = rgba.shape[:2]
        return cls.from_pixels(rgba.reshape(-1), height, width)

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        if not (self.red.rows == self.green.rows == self.blue.rows):
            raise InconsistentShapeError(
                f"mismatching rows in picture: {self.red.rows}, "
                f"{self.green.rows}, {self.blue.rows}"
            )
        return self.red.rows

    @property
    def cols(self) -> int:
        if not (self.red.cols == self.green.cols == self.blue.cols):
            raise InconsistentShapeError(
                f"mismatching columns in picture: {self.red.cols}, "
                f"{self.green.cols}, {self.blue.cols}"
            )
        return self.red.cols

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def at(self, r: int, c: int) -> list[float]:
        return [self.red.at(r, c), self.green.at(r, c), self.blue.at(r, c)]

    def channel(self, which: Channel | int) -> Grid:
        return pick(which, self.red, self.green, self.blue)

    def to_tensor(self) -> torch.Tensor:
        """Stacked copy of the channels, shape ``(3, rows, cols)``."""
        return torch.stack([self.red.tensor, self.green.tensor, self.blue.tensor])

    def to_pixels(self, alpha: int = 255) -> torch.Tensor:
        """Re-interleave into a flat ``uint8`` RGBA buffer for display.

        Channel values are rounded and clamped to ``[0, 255]``; non-finite
        values clamp to the nearest end (NaN becomes 0).
        """
        planes = torch.nan_to_num(self.to_tensor(), nan=0.0, posinf=255.0, neginf=0.0)
        planes = planes.round().clamp(0, 255)
        alpha_plane = torch.full_like(planes[:1], float(alpha))
        rgba = torch.cat([planes, alpha_plane]).to(torch.uint8)
        return rearrange(rgba, "k r c -> (r c k)")

    def to_pil(self):
        """Render as an RGBA ``PIL.Image``."""
        if not _HAS_PIL:
            raise ImportError("Pillow is required: pip install Pillow")
        rows, cols = self.shape
        pixels = self.to_pixels().numpy().reshape(rows, cols, SAMPLES_PER_PIXEL)
        return Image.fromarray(pixels)

    def __repr__(self) -> str:
        return f"ChannelImage(rows={self.red.rows}, cols={self.red.cols})"
