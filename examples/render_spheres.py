#!/usr/bin/env python3
"""Render the sphere row scene.

This script demonstrates end-to-end rendering of the sphere row scene: it
creates the scene and camera, renders every pixel on a worker pool and saves
the result.

Usage:
    python examples/render_spheres.py [options]

Options:
    --width WIDTH        Image width in pixels (default: 320)
    --aspect RATIO       Width divided by height (default: 1.7778)
    --samples SAMPLES    Samples per pixel (default: 64)
    --depth DEPTH        Maximum bounces per path (default: 5)
    --workers N          Concurrent pixel tasks (default: CPU count)
    --seed SEED          Render seed (default: 0)
    --defocus STRENGTH   Lens radius for depth of field (default: 0)
    --glass              Add a glass sphere in front of the row
    --skybox             Light escaped rays with a gradient sky
    --output OUTPUT      Output file path (default: spheres.jpg)
    --quiet              Suppress progress output

Example:
    python examples/render_spheres.py --width 160 --samples 32 --glass --skybox
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from pathlib import Path


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the sphere row scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=320, help="Image width in pixels (default: 320)")
    parser.add_argument(
        "--aspect",
        type=float,
        default=16.0 / 9.0,
        help="Width divided by height (default: 1.7778)",
    )
    parser.add_argument("--samples", type=int, default=64, help="Samples per pixel (default: 64)")
    parser.add_argument("--depth", type=int, default=5, help="Maximum bounces per path (default: 5)")
    parser.add_argument(
        "--workers",
        type=int,
        default=os.cpu_count() or 1,
        help="Concurrent pixel tasks (default: CPU count)",
    )
    parser.add_argument("--seed", type=int, default=0, help="Render seed (default: 0)")
    parser.add_argument(
        "--defocus",
        type=float,
        default=0.0,
        help="Lens radius for depth of field (default: 0)",
    )
    parser.add_argument("--glass", action="store_true", help="Add a glass sphere")
    parser.add_argument("--skybox", action="store_true", help="Enable the gradient sky")
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.jpg",
        help="Output file path (default: spheres.jpg)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args()


def render_spheres(args: argparse.Namespace) -> Path:
    """Render the sphere row scene and save it.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Path to the saved image file.
    """
    from pathtracer.core.scheduler import render
    from pathtracer.core.settings import RenderSettings, Skybox
    from pathtracer.preview.export import save_image
    from pathtracer.scene.spheres import SphereRowParams, create_sphere_row_scene

    settings = RenderSettings.from_aspect_ratio(
        width=args.width,
        aspect_ratio=args.aspect,
        samples_per_pixel=args.samples,
        max_depth=args.depth,
        concurrency=args.workers,
        seed=args.seed,
        skybox=Skybox() if args.skybox else None,
    )
    params = SphereRowParams(include_glass=args.glass, defocus_strength=args.defocus)
    world, camera = create_sphere_row_scene(aspect_ratio=args.aspect, params=params)

    if not args.quiet:
        print(f"Rendering {settings.width}x{settings.height}, {settings.samples_per_pixel} spp...")

    start_time = time.time()
    buffer = render(camera, world, settings)
    output_file = save_image(buffer, args.output)

    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        render_spheres(args)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
