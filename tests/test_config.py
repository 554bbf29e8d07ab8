"""Tests for EngineConfig validation and the seeding helpers."""

from __future__ import annotations

import pytest
import torch

from ecnn.config import EngineConfig
from ecnn.utils import Channel, make_generator, pick, set_seed


class TestEngineConfig:
    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.kernel_size == 3
        assert config.seed is None
        assert config.randomize_weights is True

    @pytest.mark.parametrize("n", [0, 2, 4, -3])
    def test_bad_kernel_size(self, n: int) -> None:
        with pytest.raises(ValueError, match="kernel_size"):
            EngineConfig(kernel_size=n)


class TestUtils:
    def test_make_generator_none(self) -> None:
        assert make_generator(None) is None

    def test_make_generator_seeded(self) -> None:
        a = torch.rand(4, generator=make_generator(3))
        b = torch.rand(4, generator=make_generator(3))
        assert torch.equal(a, b)

    def test_set_seed(self) -> None:
        set_seed(5)
        a = torch.rand(3)
        set_seed(5)
        b = torch.rand(3)
        assert torch.equal(a, b)

    def test_pick(self) -> None:
        assert pick(Channel.GREEN, "r", "g", "b") == "g"
        assert pick(2, "r", "g", "b") == "b"
        with pytest.raises(ValueError):
            pick(3, "r", "g", "b")
