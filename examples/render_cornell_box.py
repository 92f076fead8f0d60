#!/usr/bin/env python3
"""Render one of the reference scenes.

This script demonstrates end-to-end rendering with the lumen ray tracer. It
builds the scene, configures the tracer, renders every pixel (optionally on
several worker processes) and saves the tone-mapped result as a PNG.

Usage:
    python -m examples.render_cornell_box [options]

Options:
    --scene NAME            cornell or glass (default: cornell)
    --width WIDTH           Image width in pixels (default: 256)
    --height HEIGHT         Image height in pixels (default: 256)
    --depth DEPTH           Maximum recursion depth (default: 3)
    --shadow-samples N      Shadow rays per light per hit (default: 16)
    --gi-samples N          Indirect diffuse samples per hit (default: 0)
    --exposure EXPOSURE     Radiance mapped to full brightness (default: 1.0)
    --workers N             Worker processes (default: 1)
    --seed SEED             Random seed (default: none)
    --output OUTPUT         Output file path (default: cornell_box.png)
    --quiet                 Suppress progress output

Example:
    python -m examples.render_cornell_box --width 128 --height 128 --workers 4 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a reference scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=("cornell", "glass"),
        default="cornell",
        help="Scene to render (default: cornell)",
    )
    parser.add_argument("--width", type=int, default=256, help="Image width in pixels (default: 256)")
    parser.add_argument("--height", type=int, default=256, help="Image height in pixels (default: 256)")
    parser.add_argument("--depth", type=int, default=3, help="Maximum recursion depth (default: 3)")
    parser.add_argument(
        "--shadow-samples",
        type=int,
        default=16,
        help="Shadow rays per light per hit (default: 16)",
    )
    parser.add_argument(
        "--gi-samples",
        type=int,
        default=0,
        help="Indirect diffuse samples per hit, 0 disables (default: 0)",
    )
    parser.add_argument(
        "--exposure",
        type=float,
        default=1.0,
        help="Radiance mapped to full brightness (default: 1.0)",
    )
    parser.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: none)")
    parser.add_argument(
        "--output",
        type=str,
        default="cornell_box.png",
        help="Output file path (default: cornell_box.png)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args()


def render_scene(args: argparse.Namespace) -> Path:
    """Render the selected scene and save it to file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.lumen.core.renderer import Renderer
    from src.lumen.core.tracer import Tracer, TracerConfig
    from src.lumen.preview.export import save_png
    from src.lumen.scene.cornell_box import create_cornell_box_scene, create_glass_sphere_scene

    aspect_ratio = args.width / args.height
    if args.scene == "glass":
        scene, camera = create_glass_sphere_scene(aspect_ratio=aspect_ratio)
    else:
        scene, camera = create_cornell_box_scene(aspect_ratio=aspect_ratio)

    config = TracerConfig(
        max_depth=args.depth,
        shadow_samples=args.shadow_samples,
        gi_samples=args.gi_samples,
    )
    renderer = Renderer(
        Tracer(scene, config),
        camera,
        width=args.width,
        height=args.height,
        workers=args.workers,
        seed=args.seed,
    )

    if not args.quiet:
        print(f"Rendering {args.scene} scene ({args.width}x{args.height})...")

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not args.quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Progress: {current}/{target} columns "
                f"({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    frame = renderer.render(callback=progress_callback)

    if not args.quiet:
        print()  # Newline after progress

    output_file = Path(args.output)
    save_png(frame, output_file, exposure=args.exposure)

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

    # The frame buffer kernel is tiny; the CPU backend is always available
    ti.init(arch=ti.cpu)

    try:
        render_scene(args)
        return 0
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
