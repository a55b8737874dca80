"""Matplotlib-based preview display for rendered images.

The tracer produces unclamped colors on the 0..255 scale. For display the
image is mapped to [0, 1] with the same saturating conversion used for
PNG export, so the preview matches the written file pixel for pixel.

Example:
    >>> from src.whitted.preview.display import show_preview
    >>> from src.whitted.core.render import get_image_numpy
    >>>
    >>> show_preview(get_image_numpy(), title="Spheres")
"""

import numpy as np
import numpy.typing as npt

from src.whitted.preview.export import color_to_uint8


def process_image_for_display(
    image: npt.NDArray[np.floating],
) -> npt.NDArray[np.float32]:
    """Convert a rendered image to a displayable float image.

    Args:
        image: Unclamped image array of shape (H, W, 3) on the 0..255 scale.

    Returns:
        Image in the [0, 1] range, dtype float32.

    Raises:
        ValueError: If the image is not of shape (H, W, 3).
    """
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")

    return color_to_uint8(image).astype(np.float32) / 255.0


def show_preview(
    image: npt.NDArray[np.floating],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: Unclamped image array of shape (H, W, 3) on the 0..255 scale.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(image)

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        height, width = display_image.shape[:2]
        title = f"Render Preview - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
