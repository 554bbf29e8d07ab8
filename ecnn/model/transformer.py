"""PictureTransformer: maps a whole ChannelImage through three combinators.

The transformer owns one ChannelCombinator per output channel.  Every
combinator reads all three input channels, so the transformer holds
``3 x 3`` kernels plus ``3 x 3`` weights in total.

``parameters``/``load_parameters`` expose all of them as one flat vector for
an external search loop: for each output channel (red, green, blue) the
kernels of its red, green and blue inputs in row-major order, followed by the
nine weights in the same output/input order.
"""

from __future__ import annotations

import torch

from ecnn.config import EngineConfig
from ecnn.errors import SizeMismatchError
from ecnn.model.combinator import ChannelCombinator
from ecnn.model.convolutor import KernelConvolutor
from ecnn.model.grid import Grid
from ecnn.model.picture import ChannelImage
from ecnn.utils import ALL_CHANNELS, DTYPE, Channel, as_flat_tensor, make_generator, pick


class PictureTransformer:
    def __init__(
        self,
        n: int,
        generator: torch.Generator | None = None,
        randomize_weights: bool = True,
    ) -> None:
        self.n = n
        self.generator = generator
        self.randomize_weights = randomize_weights
        self.to_red = ChannelCombinator(n)
        self.to_green = ChannelCombinator(n)
        self.to_blue = ChannelCombinator(n)

    @classmethod
    def from_config(cls, config: EngineConfig) -> PictureTransformer:
        transformer = cls(
            config.kernel_size,
            generator=make_generator(config.seed),
            randomize_weights=config.randomize_weights,
        )
        if config.randomize_on_init:
            transformer.randomize()
        return transformer

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def combinator(self, output_channel: Channel | int) -> ChannelCombinator:
        return pick(output_channel, self.to_red, self.to_green, self.to_blue)

    def combinators(self) -> tuple[ChannelCombinator, ChannelCombinator, ChannelCombinator]:
        return self.to_red, self.to_green, self.to_blue

    def convolutor(self, from_channel: Channel | int, to_channel: Channel | int) -> KernelConvolutor:
        return self.combinator(to_channel).convolutor(from_channel)

    def weights(self, to_channel: Channel | int) -> list[float]:
        return self.combinator(to_channel).weights

    def weight(self, from_channel: Channel | int, to_channel: Channel | int) -> float:
        return self.combinator(to_channel).weight(from_channel)

    def set_weight(
        self, from_channel: Channel | int, to_channel: Channel | int, value: float
    ) -> None:
        self.combinator(to_channel).set_weight(from_channel, value)

    def weight_sum(self, to_channel: Channel | int) -> float:
        return self.combinator(to_channel).weight_sum()

    # ------------------------------------------------------------------
    # Randomisation
    # ------------------------------------------------------------------
    def randomize_channel(self, output_channel: Channel | int) -> None:
        self.combinator(output_channel).randomize(
            self.generator, randomize_weights=self.randomize_weights
        )

    def randomize(self) -> None:
        for ch in ALL_CHANNELS:
            self.randomize_channel(ch)

    # ------------------------------------------------------------------
    # Flat parameter vector
    # ------------------------------------------------------------------
    @property
    def num_parameters(self) -> int:
        return 9 * self.n * self.n + 9

    def parameters(self) -> torch.Tensor:
        kernels = [
            conv.get_values()
            for comb in self.combinators()
            for conv in comb.convolutors()
        ]
        weights = torch.tensor(
            [w for comb in self.combinators() for w in comb.weights], dtype=DTYPE
        )
        return torch.cat(kernels + [weights])

    def load_parameters(self, values) -> None:
        flat = as_flat_tensor(values)
        if flat.numel() != self.num_parameters:
            raise SizeMismatchError(
                f"expected {self.num_parameters} parameters, got {flat.numel()}"
            )
        cells = self.n * self.n
        kernels, weights = flat[:9 * cells], flat[9 * cells:]
        convs = [conv for comb in self.combinators() for conv in comb.convolutors()]
        for conv, chunk in zip(convs, kernels.split(cells)):
            conv.set_values(chunk)
        for comb, chunk in zip(self.combinators(), weights.split(3)):
            comb.weights = chunk.tolist()

    # ------------------------------------------------------------------
    # Forward / expansion
    # ------------------------------------------------------------------
    def convolve_channel(self, to_channel: Channel | int, image: ChannelImage) -> Grid:
        return self.combinator(to_channel).convolve(image)

    def deconvolve_channel(self, to_channel: Channel | int, image: ChannelImage) -> Grid:
        return self.combinator(to_channel).deconvolve(image)

    def transform(self, image: ChannelImage) -> ChannelImage:
        red, green, blue = (self.convolve_channel(ch, image) for ch in ALL_CHANNELS)
        return ChannelImage(red, green, blue)

    def untransform(self, image: ChannelImage) -> ChannelImage:
        red, green, blue = (self.deconvolve_channel(ch, image) for ch in ALL_CHANNELS)
        return ChannelImage(red, green, blue)

    def __repr__(self) -> str:
        return f"PictureTransformer(n={self.n})"
