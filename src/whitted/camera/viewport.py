"""Fixed-eye viewport camera.

The eye sits at a fixed origin looking down +z. Pixel (x, y) of a
``canvas_width x canvas_height`` image is first centred:

    cx = x - canvas_width // 2
    cy = canvas_height // 2 - y          (image rows grow downward)

and then scaled onto a viewport of ``width x height`` world units placed
``distance`` units in front of the eye:

    D = (cx * width / canvas_width, cy * height / canvas_height, distance)

D is the (non-normalized) primary ray direction for that pixel.

Example:
    >>> from src.whitted.core.runtime import init
    >>> init()
    >>> from src.whitted.camera.viewport import Viewport, setup_viewport, transform_coord
    >>> setup_viewport(Viewport())
    >>> transform_coord(0, 0, 600, 600)
    (-300, 300)
"""

from dataclasses import dataclass

import taichi as ti

from src.whitted.core.vector import real, vec3


@dataclass
class Viewport:
    """Configuration for the eye and the projection plane.

    Attributes:
        origin: Eye position in world space (x, y, z).
        width: Viewport width in world units.
        height: Viewport height in world units.
        distance: Distance from the eye to the projection plane.
    """

    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    width: float = 1.0
    height: float = 1.0
    distance: float = 1.0


# =============================================================================
# Taichi Fields for Viewport State
# =============================================================================

_eye = ti.Vector.field(3, dtype=real, shape=())
_viewport_size = ti.Vector.field(3, dtype=real, shape=())  # (width, height, distance)
_viewport_initialized = ti.field(dtype=ti.i32, shape=())


def setup_viewport(viewport: Viewport) -> None:
    """Store the viewport configuration for use inside kernels.

    Raises:
        ValueError: If the viewport width, height or distance is not positive.
    """
    if viewport.width <= 0.0 or viewport.height <= 0.0 or viewport.distance <= 0.0:
        raise ValueError(
            f"Viewport dimensions must be positive, got "
            f"{viewport.width}x{viewport.height} at distance {viewport.distance}"
        )
    _eye[None] = [float(c) for c in viewport.origin]
    _viewport_size[None] = [viewport.width, viewport.height, viewport.distance]
    _viewport_initialized[None] = 1


def clear_viewport() -> None:
    """Forget the viewport configuration until setup_viewport() is called again."""
    _viewport_initialized[None] = 0


def check_viewport_initialized() -> None:
    """Raise if setup_viewport() has not been called."""
    if _viewport_initialized[None] == 0:
        raise RuntimeError("Viewport not set up. Call setup_viewport() first.")


def get_viewport_info() -> dict:
    """Get the viewport state currently stored in Taichi fields."""
    eye = _eye[None]
    size = _viewport_size[None]
    return {
        "origin": (float(eye[0]), float(eye[1]), float(eye[2])),
        "width": float(size[0]),
        "height": float(size[1]),
        "distance": float(size[2]),
    }


def transform_coord(x: int, y: int, canvas_width: int, canvas_height: int) -> tuple[int, int]:
    """Map image indices to centred canvas coordinates.

    Args:
        x: Column index, 0 = left.
        y: Row index, 0 = top.
        canvas_width: Image width in pixels.
        canvas_height: Image height in pixels.

    Returns:
        Tuple (x - canvas_width // 2, canvas_height // 2 - y).

    Raises:
        ValueError: If (x, y) lies outside the image.
    """
    if not (0 <= x < canvas_width and 0 <= y < canvas_height):
        raise ValueError(
            f"Pixel ({x}, {y}) is outside the {canvas_width}x{canvas_height} image"
        )
    return x - canvas_width // 2, canvas_height // 2 - y


def canvas_to_viewport_py(
    point: tuple[float, float],
    viewport: Viewport,
    canvas_width: float,
    canvas_height: float,
) -> tuple[float, float, float]:
    """Host-side twin of :func:`canvas_to_viewport` for a centred point."""
    return (
        point[0] * viewport.width / canvas_width,
        point[1] * viewport.height / canvas_height,
        viewport.distance,
    )


@ti.func
def canvas_to_viewport(cx: real, cy: real, canvas_width: real, canvas_height: real) -> vec3:
    """Primary ray direction through a centred canvas point.

    Args:
        cx: Centred canvas x coordinate.
        cy: Centred canvas y coordinate (up is positive).
        canvas_width: Image width in pixels.
        canvas_height: Image height in pixels.

    Returns:
        The (non-normalized) direction from the eye through the viewport.
    """
    size = _viewport_size[None]
    return vec3(cx * size.x / canvas_width, cy * size.y / canvas_height, size.z)


@ti.func
def get_eye() -> vec3:
    """The eye position (origin of every primary ray)."""
    return _eye[None]


@ti.func
def pixel_direction(i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Primary ray direction for image pixel (i, j), row 0 at the top."""
    cx = i - width // 2
    cy = height // 2 - j
    return canvas_to_viewport(
        ti.cast(cx, real),
        ti.cast(cy, real),
        ti.cast(width, real),
        ti.cast(height, real),
    )
