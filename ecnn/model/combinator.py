"""ChannelCombinator: fuses three weighted single-channel convolutions.

One combinator produces one output channel.  Each input channel (red, green,
blue) runs through its own kernel, is scaled by its weight, and the three
results are summed and scaled again by the total weight::

    out = (w_r * K_r(red) + w_g * K_g(green) + w_b * K_b(blue)) * (w_r + w_g + w_b)
"""

from __future__ import annotations

import torch

from ecnn.model.convolutor import KernelConvolutor
from ecnn.model.grid import Grid
from ecnn.model.picture import ChannelImage
from ecnn.utils import ALL_CHANNELS, DTYPE, Channel, pick


class ChannelCombinator:
    def __init__(self, n: int) -> None:
        self.from_red = KernelConvolutor(n)
        self.from_green = KernelConvolutor(n)
        self.from_blue = KernelConvolutor(n)
        self.weights: list[float] = [1.0, 1.0, 1.0]

    @property
    def n(self) -> int:
        return self.from_red.n

    def convolutor(self, input_channel: Channel | int) -> KernelConvolutor:
        return pick(input_channel, self.from_red, self.from_green, self.from_blue)

    def convolutors(self) -> tuple[KernelConvolutor, KernelConvolutor, KernelConvolutor]:
        return self.from_red, self.from_green, self.from_blue

    def randomize(
        self,
        generator: torch.Generator | None = None,
        randomize_weights: bool = True,
    ) -> None:
        for conv in self.convolutors():
            conv.randomize(generator)
        if randomize_weights:
            self.weights = torch.rand(3, generator=generator, dtype=DTYPE).tolist()

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------
    def weight(self, input_channel: Channel | int) -> float:
        return self.weights[Channel(input_channel)]

    def set_weight(self, input_channel: Channel | int, value: float) -> None:
        self.weights[Channel(input_channel)] = float(value)

    def weight_sum(self) -> float:
        return sum(self.weights)

    # ------------------------------------------------------------------
    # Forward / expansion
    # ------------------------------------------------------------------
    def convolve_partial(self, input_channel: Channel | int, image: ChannelImage) -> Grid:
        conv = self.convolutor(input_channel)
        return conv.convolve_2d(image.channel(input_channel)).scale(self.weight(input_channel))

    def convolve(self, image: ChannelImage) -> Grid:
        red, green, blue = (self.convolve_partial(ch, image) for ch in ALL_CHANNELS)
        return red.add(green).add(blue).scale(self.weight_sum())

    def deconvolve_partial(self, input_channel: Channel | int, image: ChannelImage) -> Grid:
        conv = self.convolutor(input_channel)
        return conv.deconvolve_2d(image.channel(input_channel)).scale(self.weight(input_channel))

    def deconvolve(self, image: ChannelImage) -> Grid:
        red, green, blue = (self.deconvolve_partial(ch, image) for ch in ALL_CHANNELS)
        return red.add(green).add(blue).scale(self.weight_sum())
