"""Preview and output module.

Components:
    export: Saturating 8-bit conversion and PNG export via Pillow
    display: Matplotlib preview window
"""

from .display import process_image_for_display, show_preview
from .export import color_to_uint8, save_png, save_png_from_array

__all__ = [
    "color_to_uint8",
    "save_png",
    "save_png_from_array",
    "process_image_for_display",
    "show_preview",
]
