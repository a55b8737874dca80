"""Image export utilities for rendered images.

Rendered colors live on a 0..255 scale but are not clamped: bright
highlights can exceed 255 and the values are float64. Export applies a
saturating conversion per channel:

    NaN -> 0, values below 0 -> 0, values above 255 -> 255,
    everything else truncated toward zero.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.whitted.preview.export import save_png
    >>> save_png("spheres.png")
"""

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def color_to_uint8(image: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    """Convert unclamped colors to 8-bit channels.

    Args:
        image: Color values of any shape, conventionally (H, W, 3).

    Returns:
        Array of the same shape with dtype uint8.
    """
    values = np.asarray(image, dtype=np.float64)
    values = np.nan_to_num(values, nan=0.0, posinf=255.0, neginf=0.0)
    values = np.clip(values, 0.0, 255.0)
    return np.trunc(values).astype(np.uint8)


def save_png_from_array(image: npt.NDArray[np.floating], filepath: str) -> None:
    """Save a rendered image array as a PNG file.

    Args:
        image: Unclamped image array of shape (H, W, 3), row 0 at the top.
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the image is not of shape (H, W, 3).
    """
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")

    image_uint8 = color_to_uint8(image)

    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)


def save_png(filepath: str) -> None:
    """Save the current render target as a PNG file.

    Args:
        filepath: Output file path (should end in .png).

    Raises:
        RuntimeError: If nothing has been rendered yet.
    """
    from src.whitted.core.render import get_image_numpy

    save_png_from_array(get_image_numpy(), filepath)
