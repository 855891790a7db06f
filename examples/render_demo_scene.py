#!/usr/bin/env python3
"""Render the spinning three-panel demo scene.

This script builds the demo scene, optionally loads or saves it as JSON,
advances the spin animation for a number of frames, and renders the final
frame to a PNG and, optionally, to the terminal as 24-bit colored blocks.

Usage:
    python -m examples.render_demo_scene [options]

Options:
    --width WIDTH         Screen columns (default: 64)
    --height HEIGHT       Screen rows (default: 64)
    --cell-size SIZE      Cell edge length in world units (default: 0.25)
    --frames FRAMES       Spin steps before the final render (default: 0)
    --scale SCALE         Pixels per cell in the PNG (default: 8)
    --output OUTPUT       Output file path (default: demo_scene.png)
    --scene FILE          Load the scene from a JSON file instead
    --save-scene FILE     Write the final scene to a JSON file
    --parallel            Render with the Taichi kernel
    --terminal            Also print the frame to the terminal
    --show                Open a Matplotlib preview window
    --quiet               Suppress progress output

Example:
    python -m examples.render_demo_scene --frames 60 --parallel --terminal
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the spinning demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=64, help="Screen columns (default: 64)")
    parser.add_argument("--height", type=int, default=64, help="Screen rows (default: 64)")
    parser.add_argument(
        "--cell-size",
        type=float,
        default=0.25,
        help="Cell edge length in world units (default: 0.25)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=0,
        help="Spin steps before the final render (default: 0)",
    )
    parser.add_argument("--scale", type=int, default=8, help="Pixels per cell (default: 8)")
    parser.add_argument(
        "--output",
        type=str,
        default="demo_scene.png",
        help="Output file path (default: demo_scene.png)",
    )
    parser.add_argument("--scene", type=str, default=None, help="Load the scene from JSON")
    parser.add_argument(
        "--save-scene",
        type=str,
        default=None,
        help="Write the final scene to JSON",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Render with the Taichi kernel",
    )
    parser.add_argument(
        "--terminal",
        action="store_true",
        help="Also print the frame to the terminal",
    )
    parser.add_argument("--show", action="store_true", help="Open a Matplotlib preview window")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args()


def grid_to_ansi(image) -> str:
    """Format a shaded (H, W, 3) image as 24-bit ANSI colored block pairs."""
    lines = []
    for row in image:
        cells = "".join(f"\x1b[38;2;{r};{g};{b}m██" for r, g, b in row)
        lines.append(cells + "\x1b[0m")
    return "\n".join(lines)


def render_demo_scene(
    width: int = 64,
    height: int = 64,
    cell_size: float = 0.25,
    frames: int = 0,
    scale: int = 8,
    output_path: str = "demo_scene.png",
    scene_path: str | None = None,
    save_scene_path: str | None = None,
    parallel: bool = False,
    terminal: bool = False,
    show: bool = False,
    quiet: bool = False,
) -> Path:
    """Build, animate and render the demo scene.

    Returns:
        Path to the saved image file.
    """
    from termray.camera.camera import DEFAULT_EYE_DISTANCE, Camera
    from termray.core.vector import Point
    from termray.preview.export import save_png
    from termray.preview.shading import grid_to_image
    from termray.scene.config import SceneConfig, build_scene, scene_to_config
    from termray.scene.demo import DemoParams, create_demo_scene, spin_step

    if scene_path is not None:
        if not quiet:
            print(f"Loading scene from {scene_path}...")
        with open(scene_path) as f:
            scene = build_scene(SceneConfig.from_dict(json.load(f)))
    else:
        if not quiet:
            print(f"Creating demo scene ({width}x{height} cells)...")
        eye = Point(width * cell_size / 2.0, height * cell_size / 2.0, DEFAULT_EYE_DISTANCE)
        camera = Camera((cell_size, cell_size), (width, height), eye)
        scene = create_demo_scene(DemoParams(camera=camera))

    for _ in range(frames):
        spin_step(scene)

    renderer = None
    if parallel:
        from termray.core.parallel import ParallelRenderer

        columns, rows = scene.camera.get_screen_size()
        renderer = ParallelRenderer(columns, rows)

    grid = scene.empty_render()
    start_time = time.time()
    if renderer is not None:
        renderer.upload(scene)
        renderer.render_into(grid)
    else:
        scene.render(grid)
    elapsed = time.time() - start_time

    if not quiet:
        mode = "parallel" if parallel else "serial"
        print(f"Rendered {grid.hit_count()}/{grid.width * grid.height} hits ({mode}, {elapsed:.3f}s)")

    if terminal:
        print(grid_to_ansi(grid_to_image(grid)))

    output_file = Path(output_path)
    save_png(grid, str(output_file), scale=scale)
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")

    if save_scene_path is not None:
        with open(save_scene_path, "w") as f:
            json.dump(scene_to_config(scene).to_dict(), f, indent=2)
        if not quiet:
            print(f"Scene saved to: {save_scene_path}")

    if show:
        from termray.preview.shading import show_preview

        show_preview(grid)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    if args.parallel:
        import taichi as ti

        from termray.config import init_taichi

        # Use GPU if available, fall back to CPU
        try:
            init_taichi(arch=ti.gpu)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            init_taichi(arch=ti.cpu)
            if not args.quiet:
                print("Using CPU backend")

    try:
        render_demo_scene(
            width=args.width,
            height=args.height,
            cell_size=args.cell_size,
            frames=args.frames,
            scale=args.scale,
            output_path=args.output,
            scene_path=args.scene,
            save_scene_path=args.save_scene,
            parallel=args.parallel,
            terminal=args.terminal,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
