"""
visualization.py - Matplotlib gallery helpers.

All plot functions follow a consistent style and return the Figure so
callers can save or display it as needed.
"""

import logging
import os

import matplotlib.pyplot as plt

from vector_gallery.sample_assembler import Sample

logger = logging.getLogger(__name__)

# Consistent figure style across all plots
plt.rcParams.update({"figure.dpi": 100, "axes.titlesize": 11})


def plot_gallery(samples: list[Sample], columns: int = 5) -> plt.Figure:
    """
    Show each sample's raster in a grid, titled with its label.

    Samples without an image are drawn as an "image unavailable" panel.

    Parameters
    ----------
    samples : list[Sample]
        Samples from vector_gallery.pipeline.build_gallery.
    columns : int
        Number of panels per row.

    Returns
    -------
    plt.Figure
    """
    count = max(len(samples), 1)
    columns = max(1, min(columns, count))
    rows = -(-count // columns)

    fig, axes = plt.subplots(rows, columns, figsize=(3 * columns, 3.4 * rows), squeeze=False)

    for ax in axes.ravel():
        ax.axis("off")

    for ax, sample in zip(axes.ravel(), samples):
        if sample.ok:
            image = sample.image
            ax.imshow(
                image.pixels.reshape(image.height, image.width),
                cmap="gray",
                vmin=0,
                vmax=255,
                interpolation="nearest",
            )
            ax.set_title(f"#{sample.id}: {sample.label}\n({image.width}x{image.height})")
        else:
            ax.text(0.5, 0.5, "image unavailable", ha="center", va="center", color="red")
            ax.set_title(f"#{sample.id}: {sample.label}")

    if not samples:
        axes[0, 0].text(0.5, 0.5, "no samples", ha="center", va="center")

    fig.suptitle("Dataset samples", y=1.02)
    fig.tight_layout()
    return fig


def save_sample_images(samples: list[Sample], folder: str) -> list[str]:
    """
    Write each rendered sample's PNG to *folder* as sample_<id>.png.

    Returns
    -------
    list[str]
        Paths written, in sample order.
    """
    os.makedirs(folder, exist_ok=True)
    paths: list[str] = []
    for sample in samples:
        if not sample.ok:
            logger.warning("Sample %d has no image; not saved.", sample.id)
            continue
        path = os.path.join(folder, f"sample_{sample.id}.png")
        with open(path, "wb") as f:
            f.write(sample.image.encoded)
        paths.append(path)
    return paths
