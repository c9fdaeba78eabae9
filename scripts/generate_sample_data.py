"""
generate_sample_data.py - Create a synthetic quasi-CSV dataset for the demo.

Writes a small CSV to data/samples.csv in the same shape as the real
dataset exports:

    image_vector,label
    "0,12,40,...,255",Mature

so you can run the gallery immediately without real patient data.

Usage
-----
    python scripts/generate_sample_data.py

After running, try:
    python scripts/render_gallery.py
"""

import os
import sys

import numpy as np

# Make sure repo root is on the path when run as a script
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _REPO_ROOT)

from vector_gallery.config import CONFIG  # noqa: E402  (import after path fix)

OUTPUT_PATH = os.path.join(_REPO_ROOT, CONFIG["paths"]["input_csv"])


# ---------------------------------------------------------------------------
# Synthetic sample profiles: varied so the gallery has something to show
# ---------------------------------------------------------------------------
_SAMPLE_PROFILES = [
    # (label, background, lens_brightness, side)
    ("Normal", 30, 60, 32),
    ("Normal", 35, 70, 32),
    ("Immature", 30, 140, 32),
    ("Mature", 25, 220, 32),
    ("Mature", 20, 235, 32),
    # Not a perfect square: the gallery drops the tail of this one
    ("Immature, Posterior", 40, 150, 31),
]


def _make_vector(background: int, lens: int, side: int, seed: int) -> np.ndarray:
    """
    Draw a noisy disc on a dark background and flatten it.

    The last profile appends a few extra pixels so the vector length is
    not a perfect square.
    """
    rng = np.random.default_rng(seed)
    yy, xx = np.mgrid[0:side, 0:side]
    centre = (side - 1) / 2.0
    disc = (yy - centre) ** 2 + (xx - centre) ** 2 <= (side / 3.0) ** 2

    img = np.full((side, side), background, dtype=np.float64)
    img[disc] = lens
    img += rng.normal(0, 12, size=img.shape)
    flat = img.clip(0, 255).astype(np.int64).ravel()

    if side % 2:
        flat = np.concatenate([flat, rng.integers(0, 256, size=5)])
    return flat


def generate(output_path: str = OUTPUT_PATH) -> None:
    """Write the synthetic dataset to *output_path*."""
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

    print(f"Writing {len(_SAMPLE_PROFILES)} synthetic rows to: {output_path}")
    print("-" * 60)

    with open(output_path, "w", encoding="utf-8", newline="\n") as f:
        f.write("image_vector,label\n")
        for i, (label, background, lens, side) in enumerate(_SAMPLE_PROFILES, start=1):
            vector = _make_vector(background, lens, side, seed=42 + i)
            f.write('"' + ",".join(str(v) for v in vector) + '",' + label + "\n")
            print(f"  [{i:02d}/{len(_SAMPLE_PROFILES)}] {label:<20} {vector.size} pixels")

    print("-" * 60)
    print("Done.  Render the gallery with:")
    print("  python scripts/render_gallery.py")


if __name__ == "__main__":
    generate()
