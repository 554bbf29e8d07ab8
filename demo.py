#!/usr/bin/env python3
"""ECNN demo: builds a picture transformer and runs it on one image.

This script demonstrates:
  1. Ingesting an RGBA pixel buffer (synthetic, or an image file via Pillow)
  2. Randomising a transformer from a seeded config
  3. Forward transform and the expanding untransform
  4. Reading and writing the flat parameter vector

Usage:
    python demo.py                          # 32x32 synthetic gradient, 3x3 kernels
    python demo.py --kernel 5 --seed 7
    python demo.py --image photo.png --out filtered.png
"""

from __future__ import annotations

import argparse
import time

import torch

try:
    from PIL import Image
    _HAS_PIL = True
except Exception:
    _HAS_PIL = False

from ecnn.config import EngineConfig
from ecnn.model.picture import ChannelImage
from ecnn.model.transformer import PictureTransformer
from ecnn.utils import ALL_CHANNELS, set_seed


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run an ECNN picture transformer")
    p.add_argument("--kernel", type=int, default=3, help="Kernel side length (odd)")
    p.add_argument("--size", type=int, default=32, help="Synthetic image side length")
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--image", type=str, default=None, help="Image file to transform")
    p.add_argument("--out", type=str, default=None, help="Write the transformed image here")
    return p.parse_args()


def synthetic_pixels(size: int) -> torch.Tensor:
    """Diagonal RGB gradient as a flat RGBA buffer."""
    ramp = torch.linspace(0, 255, size, dtype=torch.float64)
    red = ramp[None, :].expand(size, size)
    green = ramp[:, None].expand(size, size)
    blue = (red + green) / 2
    alpha = torch.full((size, size), 255.0, dtype=torch.float64)
    return torch.stack([red, green, blue, alpha], dim=-1).reshape(-1)


def main() -> None:
    args = parse_args()
    set_seed(args.seed)

    config = EngineConfig(kernel_size=args.kernel, seed=args.seed, randomize_on_init=True)
    transformer = PictureTransformer.from_config(config)
    print(f"Transformer: {transformer}, {transformer.num_parameters} parameters")

    if (args.image or args.out) and not _HAS_PIL:
        raise ImportError("Pillow is required for --image/--out: pip install Pillow")

    if args.image:
        image = ChannelImage.from_pil(Image.open(args.image))
    else:
        image = ChannelImage.from_pixels(synthetic_pixels(args.size), args.size, args.size)
    print(f"Input: {image.rows}x{image.cols}")
    print()

    # -------------------------------------------------------------------------
    # 1. Forward transform
    # -------------------------------------------------------------------------
    print("=== Transform ===")
    t0 = time.perf_counter()
    out = transformer.transform(image)
    dt = time.perf_counter() - t0
    print(f"  output {out.rows}x{out.cols} in {dt * 1000:.1f} ms")
    for ch in ALL_CHANNELS:
        grid = out.channel(ch)
        print(
            f"  {ch.name.lower():>5s}: mean {grid.tensor.mean().item():10.2f}  "
            f"weights {[round(w, 3) for w in transformer.weights(ch)]}"
        )
    print()

    # -------------------------------------------------------------------------
    # 2. Expansion
    # -------------------------------------------------------------------------
    print("=== Untransform ===")
    t0 = time.perf_counter()
    expanded = transformer.untransform(out)
    dt = time.perf_counter() - t0
    print(f"  output {expanded.rows}x{expanded.cols} in {dt * 1000:.1f} ms")
    print()

    # -------------------------------------------------------------------------
    # 3. Parameter round trip (what a search loop would mutate)
    # -------------------------------------------------------------------------
    print("=== Parameters ===")
    params = transformer.parameters()
    params[-9:] = 1.0
    transformer.load_parameters(params)
    print(f"  reset weights to 1.0: {transformer.weights(ALL_CHANNELS[0])}")
    print()

    if args.out:
        out.to_pil().save(args.out)
        print(f"Saved transformed image to {args.out}")

    print("Demo complete.")


if __name__ == "__main__":
    main()
