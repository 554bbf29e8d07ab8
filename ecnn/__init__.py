"""ECNN: per-channel convolution engine for evolutionary image filters.

A Grid is a bounds-checked 2D float matrix; a ChannelImage is three of them
(red, green, blue).  A PictureTransformer maps a ChannelImage to a new one
through nine normalised kernels and nine weights, which an external
evolutionary loop can randomise and read or write.
"""

from ecnn.config import EngineConfig
from ecnn.model.grid import Grid
from ecnn.model.picture import ChannelImage
from ecnn.model.convolutor import KernelConvolutor
from ecnn.model.combinator import ChannelCombinator
from ecnn.model.transformer import PictureTransformer
from ecnn.utils import Channel

__all__ = [
    "EngineConfig",
    "Grid",
    "ChannelImage",
    "KernelConvolutor",
    "ChannelCombinator",
    "PictureTransformer",
    "Channel",
]
