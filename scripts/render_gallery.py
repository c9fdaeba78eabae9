"""
render_gallery.py - End-to-end gallery demonstration.

Generates a synthetic dataset (if the input CSV is missing), decodes it
into gallery samples, saves each sample PNG plus a gallery figure to
reports/, and prints a final summary.

Usage
-----
    python scripts/render_gallery.py [path/to/dataset.csv] [--limit N]

To use a real export instead of generated samples, pass its path or set
paths.input_csv in config.yaml.
"""

import argparse
import logging
import os
import sys

# Ensure repo root is on sys.path regardless of launch directory
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _REPO_ROOT)

import matplotlib
matplotlib.use("Agg")  # non-interactive backend: works without a display

from vector_gallery.config import CONFIG
from vector_gallery.pipeline import build_gallery, load_text
from vector_gallery.visualization import plot_gallery, save_sample_images

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)-8s %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
INPUT_CSV = os.path.join(_REPO_ROOT, CONFIG["paths"]["input_csv"])
REPORTS_FOLDER = os.path.join(_REPO_ROOT, CONFIG["paths"]["reports_folder"])


def _ensure_sample_data(path: str) -> None:
    """Generate the synthetic dataset if *path* does not exist."""
    if os.path.exists(path):
        logger.info("Found dataset %s: skipping generation.", path)
        return

    logger.info("No dataset at %s: generating samples...", path)
    from scripts.generate_sample_data import generate  # noqa: E402  (lazy import)
    generate(path)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Render a quasi-CSV pixel dataset as a gallery.")
    parser.add_argument("csv", nargs="?", default=INPUT_CSV, help="dataset file")
    parser.add_argument("--limit", type=int, default=None, help="maximum samples to render")
    args = parser.parse_args(argv)

    os.makedirs(REPORTS_FOLDER, exist_ok=True)

    # ── Step 1: Load input ─────────────────────────────────────────────────
    print("=" * 60)
    print("STEP 1: Load dataset")
    print("=" * 60)
    if args.csv == INPUT_CSV:
        _ensure_sample_data(args.csv)
    text = load_text(args.csv)
    print(f"  Input file   : {args.csv}")
    print(f"  Size         : {len(text)} characters")
    print()

    # ── Step 2: Decode ─────────────────────────────────────────────────────
    print("=" * 60)
    print("STEP 2: Decode rows into samples")
    print("=" * 60)
    report = build_gallery(text, limit=args.limit)
    print(report.summary())
    print()

    for sample in report.samples:
        size = f"{sample.image.width}x{sample.image.height}" if sample.ok else "unavailable"
        print(f"  #{sample.id} {sample.label:<20} {size:<12} {sample.vector_preview}")
    print()

    # ── Step 3: Save outputs ───────────────────────────────────────────────
    print("=" * 60)
    print("STEP 3: Saving images to reports/")
    print("=" * 60)
    for path in save_sample_images(report.samples, REPORTS_FOLDER):
        print(f"  Saved: {path}")

    fig = plot_gallery(report.samples)
    path = os.path.join(REPORTS_FOLDER, "gallery.png")
    fig.savefig(path, dpi=100, bbox_inches="tight")
    print(f"  Saved: {path}")
    print()


if __name__ == "__main__":
    main()
