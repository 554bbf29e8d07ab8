"""Tests for ChannelCombinator: weighting rule and randomisation."""

from __future__ import annotations

import pytest
import torch

from ecnn.model.combinator import ChannelCombinator
from ecnn.model.grid import Grid
from ecnn.model.picture import ChannelImage
from ecnn.utils import ALL_CHANNELS, Channel


def _constant_image(rows: int, cols: int, red: float, green: float, blue: float) -> ChannelImage:
    return ChannelImage(
        Grid.from_tensor(torch.full((rows, cols), red)),
        Grid.from_tensor(torch.full((rows, cols), green)),
        Grid.from_tensor(torch.full((rows, cols), blue)),
    )


def _random_image(rows: int, cols: int, seed: int = 0) -> ChannelImage:
    g = torch.Generator().manual_seed(seed)
    planes = torch.rand(3, rows, cols, generator=g, dtype=torch.float64) * 255
    return ChannelImage(*(Grid.from_tensor(p) for p in planes))


@pytest.fixture
def ones_combinator() -> ChannelCombinator:
    comb = ChannelCombinator(3)
    for conv in comb.convolutors():
        conv.set_values([1.0] * 9)
    return comb


class TestConstruction:
    def test_default_weights(self) -> None:
        comb = ChannelCombinator(5)
        assert comb.weights == [1.0, 1.0, 1.0]
        assert comb.weight_sum() == 3.0
        assert comb.n == 5

    def test_convolutor_selection(self) -> None:
        comb = ChannelCombinator(3)
        assert comb.convolutor(Channel.RED) is comb.from_red
        assert comb.convolutor(Channel.GREEN) is comb.from_green
        assert comb.convolutor(Channel.BLUE) is comb.from_blue

    def test_convolutors_are_independent(self) -> None:
        comb = ChannelCombinator(3)
        comb.from_red.set_values([2.0] * 9)
        assert comb.from_green.modulus() == 0.0


class TestWeights:
    def test_set_weight(self) -> None:
        comb = ChannelCombinator(3)
        comb.set_weight(Channel.GREEN, 0.25)
        assert comb.weight(Channel.GREEN) == 0.25
        assert comb.weight_sum() == pytest.approx(2.25)


class TestRandomize:
    def test_weights_redrawn(self) -> None:
        comb = ChannelCombinator(3)
        comb.randomize(torch.Generator().manual_seed(1))
        assert comb.weights != [1.0, 1.0, 1.0]
        assert all(0.0 <= w < 1.0 for w in comb.weights)

    def test_weights_kept_when_disabled(self) -> None:
        comb = ChannelCombinator(3)
        comb.randomize(torch.Generator().manual_seed(1), randomize_weights=False)
        assert comb.weights == [1.0, 1.0, 1.0]
        assert comb.from_red.modulus() > 0.0

    def test_kernels_differ(self) -> None:
        comb = ChannelCombinator(3)
        comb.randomize(torch.Generator().manual_seed(1))
        assert not torch.equal(comb.from_red.get_values(), comb.from_green.get_values())


class TestConvolve:
    def test_partial_scaled_by_weight(self, ones_combinator: ChannelCombinator) -> None:
        ones_combinator.set_weight(Channel.BLUE, 0.5)
        image = _constant_image(4, 4, 10.0, 20.0, 30.0)
        out = ones_combinator.convolve_partial(Channel.BLUE, image)
        assert out.shape == (1, 1)
        assert out.at(0, 0) == pytest.approx(15.0)

    def test_default_weights(self, ones_combinator: ChannelCombinator) -> None:
        image = _constant_image(4, 4, 1.0, 1.0, 1.0)
        out = ones_combinator.convolve(image)
        # (1 + 1 + 1) * weight_sum 3
        assert out.at(0, 0) == pytest.approx(9.0)

    def test_double_weighting(self, ones_combinator: ChannelCombinator) -> None:
        for ch, w in zip(ALL_CHANNELS, [1.0, 2.0, 3.0]):
            ones_combinator.set_weight(ch, w)
        image = _constant_image(5, 6, 1.0, 1.0, 1.0)
        out = ones_combinator.convolve(image)
        assert out.shape == (2, 3)
        torch.testing.assert_close(out.tensor, torch.full((2, 3), 36.0, dtype=torch.float64))

    def test_matches_manual_combination(self) -> None:
        comb = ChannelCombinator(3)
        comb.randomize(torch.Generator().manual_seed(3))
        image = _random_image(7, 6)
        expected = sum(
            comb.convolutor(ch).convolve_2d(image.channel(ch)).tensor * comb.weight(ch)
            for ch in ALL_CHANNELS
        ) * comb.weight_sum()
        torch.testing.assert_close(comb.convolve(image).tensor, expected)

    def test_image_not_mutated(self, ones_combinator: ChannelCombinator) -> None:
        image = _random_image(5, 5)
        before = image.to_tensor()
        ones_combinator.convolve(image)
        ones_combinator.deconvolve(image)
        torch.testing.assert_close(image.to_tensor(), before)


class TestDeconvolve:
    def test_shape(self, ones_combinator: ChannelCombinator) -> None:
        out = ones_combinator.deconvolve(_random_image(2, 3))
        assert out.shape == (6, 9)

    def test_constant_expansion(self, ones_combinator: ChannelCombinator) -> None:
        image = _constant_image(2, 2, 9.0, 18.0, 27.0)
        out = ones_combinator.deconvolve(image)
        # each cell: (9/9 + 18/9 + 27/9) * 3
        torch.testing.assert_close(out.tensor, torch.full((6, 6), 18.0, dtype=torch.float64))

    def test_partial_scaled_by_weight(self, ones_combinator: ChannelCombinator) -> None:
        ones_combinator.set_weight(Channel.RED, 2.0)
        image = _constant_image(1, 1, 9.0, 0.0, 0.0)
        out = ones_combinator.deconvolve_partial(Channel.RED, image)
        torch.testing.assert_close(out.tensor, torch.full((3, 3), 2.0, dtype=torch.float64))
