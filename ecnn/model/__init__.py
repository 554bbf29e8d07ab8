from ecnn.model.grid import Grid
from ecnn.model.picture import ChannelImage
from ecnn.model.convolutor import KernelConvolutor
from ecnn.model.combinator import ChannelCombinator
from ecnn.model.transformer import PictureTransformer

__all__ = [
    "Grid",
    "ChannelImage",
    "KernelConvolutor",
    "ChannelCombinator",
    "PictureTransformer",
]
