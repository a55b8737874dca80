"""Image rendering: one primary ray per pixel into a color buffer.

This module owns the render target and the per-pixel loop. Each pixel is
traced exactly once (no anti-aliasing) and pixels are processed in order
on a single thread. The buffer keeps the tracer's unclamped colors;
conversion to 8-bit happens in :mod:`src.whitted.preview.export`.

Example:
    >>> from src.whitted.core.runtime import init
    >>> init()
    >>> from src.whitted.camera.viewport import Viewport, setup_viewport
    >>> from src.whitted.core.render import RenderSettings, render_image, get_image_numpy
    >>> from src.whitted.scene.classic import create_classic_scene
    >>>
    >>> create_classic_scene()
    >>> setup_viewport(Viewport())
    >>> render_image(RenderSettings(width=600, height=600))
    >>> image = get_image_numpy()  # (600, 600, 3) float64
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.whitted.camera.viewport import check_viewport_initialized, get_eye, pixel_direction
from src.whitted.core.tracer import DEFAULT_DEPTH, trace_ray, validate_depth
from src.whitted.core.vector import real, vec3


@dataclass
class RenderSettings:
    """Numeric parameters of a render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        depth: Reflection budget per primary ray.
        t_min: Near bound on t for primary rays.
        t_max: Far bound on t for primary rays.
    """

    width: int = 600
    height: int = 600
    depth: int = DEFAULT_DEPTH
    t_min: float = 1.0
    t_max: float = 1000.0

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ValueError: If a dimension is not positive or exceeds the render
                target capacity, the depth is out of range, or t_min > t_max.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.width > MAX_IMAGE_WIDTH or self.height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        validate_depth(self.depth)
        if self.t_min > self.t_max:
            raise ValueError(f"t_min ({self.t_min}) must not exceed t_max ({self.t_max})")


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 1024
MAX_IMAGE_HEIGHT = 1024

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Color buffer indexed [x, y], y = 0 is the top row
_color_buffer = ti.Vector.field(3, dtype=real, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Set the active image size and clear the color buffer.

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    RenderSettings(width=width, height=height).validate()

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the color buffer to black."""
    _color_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Raise if setup_render_target() has not been called."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(width: ti.i32, height: ti.i32, depth: ti.i32, t_min: real, t_max: real):
    """Trace one primary ray per pixel, in row-major order."""
    ti.loop_config(serialize=True)
    for j, i in ti.ndrange(height, width):
        direction = pixel_direction(i, j, width, height)
        _color_buffer[i, j] = trace_ray(get_eye(), direction, t_min, t_max, depth)


@ti.kernel
def _render_pixel_kernel(
    i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32, depth: ti.i32, t_min: real, t_max: real
) -> vec3:
    return trace_ray(get_eye(), pixel_direction(i, j, width, height), t_min, t_max, depth)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image(settings: RenderSettings) -> None:
    """Render the current scene into the color buffer.

    Sets up the render target for the requested size, then traces every
    pixel. The viewport must have been configured with
    :func:`src.whitted.camera.viewport.setup_viewport`.

    Args:
        settings: Image size, depth budget and primary-ray bounds.

    Raises:
        ValueError: If the settings are invalid.
        RuntimeError: If setup_viewport() has not been called.
    """
    settings.validate()
    check_viewport_initialized()
    setup_render_target(settings.width, settings.height)
    _render_kernel(
        settings.width,
        settings.height,
        int(settings.depth),
        settings.t_min,
        settings.t_max,
    )


def render_pixel(x: int, y: int, settings: RenderSettings) -> tuple[float, float, float]:
    """Trace a single pixel without touching the color buffer.

    Args:
        x: Column index, 0 = left.
        y: Row index, 0 = top.
        settings: Image size, depth budget and primary-ray bounds.

    Returns:
        Tuple of (R, G, B), unclamped.

    Raises:
        ValueError: If the settings are invalid or (x, y) is outside the image.
        RuntimeError: If setup_viewport() has not been called.
    """
    settings.validate()
    check_viewport_initialized()
    if not (0 <= x < settings.width and 0 <= y < settings.height):
        raise ValueError(
            f"Pixel ({x}, {y}) is outside the {settings.width}x{settings.height} image"
        )
    color = _render_pixel_kernel(
        x,
        y,
        settings.width,
        settings.height,
        int(settings.depth),
        settings.t_min,
        settings.t_max,
    )
    return (float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.float64]:
    """Get the rendered image as a NumPy array.

    Returns:
        Unclamped float64 array of shape (height, width, 3), row 0 at the top.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()

    full_image = _color_buffer.to_numpy()

    # (width, height, 3) -> (height, width, 3)
    image = full_image[:width, :height, :]
    return np.ascontiguousarray(np.transpose(image, (1, 0, 2)), dtype=np.float64)
