"""Utility helpers for ECNN."""

from __future__ import annotations

import random
from enum import IntEnum

import numpy as np
import torch

# Every Grid in the engine is stored at this precision
DTYPE = torch.float64


class Channel(IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2


ALL_CHANNELS: tuple[Channel, ...] = (Channel.RED, Channel.GREEN, Channel.BLUE)


def pick(channel: Channel | int, red, green, blue):
    """Return whichever of the three per-channel items ``channel`` selects."""
    return (red, green, blue)[Channel(channel)]


def set_seed(seed: int) -> None:
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)


def make_generator(seed: int | None) -> torch.Generator | None:
    """Build a seeded CPU generator, or None to fall back on the global RNG."""
    if seed is None:
        return None
    return torch.Generator().manual_seed(seed)


def as_flat_tensor(values) -> torch.Tensor:
    """Copy any array-like (list, ndarray, tensor) into a flat float64 tensor."""
    if isinstance(values, torch.Tensor):
        return values.detach().to(dtype=DTYPE).reshape(-1).clone()
    return torch.as_tensor(np.asarray(values, dtype=np.float64)).reshape(-1).clone()
