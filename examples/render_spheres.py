#!/usr/bin/env python3
"""Render the classic sphere scene, or a scene loaded from JSON.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 600)
    --height HEIGHT     Image height in pixels (default: 600)
    --depth DEPTH       Reflection depth per primary ray (default: 3)
    --scene SCENE       JSON scene file (default: the classic scene)
    --output OUTPUT     Output file path (default: spheres.png)
    --arch ARCH         Taichi backend: cpu, gpu, cuda, vulkan (default: cpu)
    --preview           Show the result in a Matplotlib window
    --quiet             Suppress progress output

A scene file has the layout produced by SceneManager.to_dict():

    {
      "spheres": [
        {"center": [0, -1, 3], "color": [255, 0, 0], "radius": 1,
         "specular": 500, "reflective": 0.2}
      ],
      "lights": [
        {"type": "ambient", "intensity": 0.2},
        {"type": "point", "intensity": 0.6, "position": [2, 1, 0]},
        {"type": "directional", "intensity": 0.2, "direction": [1, 4, 4]}
      ]
    }

Example:
    python -m examples.render_spheres --width 300 --height 300 --depth 1
"""

import argparse
import json
import sys
import time
from pathlib import Path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render spheres with a Whitted-style ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=600,
        help="Image width in pixels (default: 600)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=600,
        help="Image height in pixels (default: 600)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=3,
        help="Reflection depth per primary ray (default: 3)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: the classic scene)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument(
        "--arch",
        type=str,
        default="cpu",
        help="Taichi backend: cpu, gpu, cuda, vulkan (default: cpu)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the result in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_spheres(
    width: int = 600,
    height: int = 600,
    depth: int = 3,
    scene_path: str | None = None,
    output_path: str = "spheres.png",
    preview: bool = False,
    quiet: bool = False,
) -> Path:
    """Build the scene, render it and save a PNG.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        depth: Reflection depth per primary ray.
        scene_path: JSON scene file, or None for the classic scene.
        output_path: Output file path (PNG).
        preview: If True, show the image in a Matplotlib window.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.whitted.camera.viewport import Viewport, setup_viewport
    from src.whitted.core.render import RenderSettings, get_image_numpy, render_image
    from src.whitted.preview.display import show_preview
    from src.whitted.preview.export import save_png_from_array
    from src.whitted.scene.classic import create_classic_scene
    from src.whitted.scene.manager import SceneManager

    if scene_path is None:
        if not quiet:
            print("Creating classic scene...")
        scene = create_classic_scene()
    else:
        if not quiet:
            print(f"Loading scene from {scene_path}...")
        with open(scene_path, encoding="utf-8") as f:
            data = json.load(f)
        scene = SceneManager()
        scene.from_dict(data)

    if not quiet:
        print(
            f"  {scene.get_sphere_count()} spheres, {scene.get_light_count()} lights"
        )

    setup_viewport(Viewport())

    settings = RenderSettings(width=width, height=height, depth=depth)

    if not quiet:
        print(f"Rendering {width}x{height} at depth {depth}...")

    start_time = time.time()
    render_image(settings)
    image = get_image_numpy()
    render_time = time.time() - start_time

    output_file = Path(output_path)
    save_png_from_array(image, str(output_file))

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Render time: {render_time:.2f}s")

    if preview:
        show_preview(image)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    from src.whitted.core.runtime import arch_from_name, init

    try:
        init(arch=arch_from_name(args.arch))
        if not args.quiet:
            print(f"Using {args.arch} backend")

        render_spheres(
            width=args.width,
            height=args.height,
            depth=args.depth,
            scene_path=args.scene,
            output_path=args.output,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
