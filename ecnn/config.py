"""Configuration for the ECNN picture transformer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EngineConfig:
    # --- Kernels ---
    kernel_size: int = 3            # side length n of every n x n kernel, must be odd

    # --- Randomisation ---
    seed: int | None = None         # None -> process-global torch RNG
    randomize_weights: bool = True  # False keeps weights untouched by randomize()
    randomize_on_init: bool = False # draw kernels right after construction

    def __post_init__(self) -> None:
        if self.kernel_size < 1 or self.kernel_size % 2 == 0:
            raise ValueError(
                f"kernel_size ({self.kernel_size}) must be a positive odd integer"
            )
