"""Command line interface for rendering the built-in scenes.

Usage:
    toy-raytracer [options]
    python -m toy_raytracer [options]

Options:
    -s, --scene NAME              Scene to render (default: weekend)
    -i, --image-width WIDTH       Image width in pixels (default: 1200)
    -a, --aspect-ratio RATIO      Width divided by height (default: 1.5)
    -n, --num-threads N           Worker threads, 0 for all cores (default: 0)
    -p, --samples-per-pixel N     Samples per pixel (default: 500)
    -m, --max-depth N             Maximum ray bounces (default: 50)
    -o, --output PATH             Output PNG path (default: output.png)
    --seed SEED                   Random seed (default: random)
    --rows-per-batch N            Rows per progress update (default: 16)
    -q, --quiet                   Suppress progress output

Example:
    toy-raytracer --scene hollow-glass-spheres -i 400 -p 50 -o glass.png
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path

import numpy as np
import taichi as ti

from toy_raytracer.config import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_IMAGE_WIDTH,
    DEFAULT_MAX_DEPTH,
    DEFAULT_NUM_THREADS,
    DEFAULT_OUTPUT,
    DEFAULT_ROWS_PER_BATCH,
    DEFAULT_SAMPLES_PER_PIXEL,
    DEFAULT_SCENE,
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    RenderSettings,
    SceneName,
    image_height_for,
)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer, got {value}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if not number > 0.0:
        raise argparse.ArgumentTypeError(f"must be a positive number, got {value}")
    return number


def _scene_name(value: str) -> SceneName:
    try:
        return SceneName.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="toy-raytracer",
        description="Render a built-in scene with a Monte Carlo ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-s",
        "--scene",
        type=_scene_name,
        default=SceneName(DEFAULT_SCENE),
        help=(
            "Scene to render: "
            + ", ".join(name.value for name in SceneName)
            + f" (default: {DEFAULT_SCENE})"
        ),
    )
    parser.add_argument(
        "-i",
        "--image-width",
        type=_positive_int,
        default=DEFAULT_IMAGE_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_IMAGE_WIDTH})",
    )
    parser.add_argument(
        "-a",
        "--aspect-ratio",
        type=_positive_float,
        default=DEFAULT_ASPECT_RATIO,
        help=f"Image width divided by height (default: {DEFAULT_ASPECT_RATIO})",
    )
    parser.add_argument(
        "-n",
        "--num-threads",
        type=_non_negative_int,
        default=DEFAULT_NUM_THREADS,
        help="Worker threads; 0 or more than the CPU count uses all cores (default: 0)",
    )
    parser.add_argument(
        "-p",
        "--samples-per-pixel",
        type=_positive_int,
        default=DEFAULT_SAMPLES_PER_PIXEL,
        help=f"Number of samples per pixel (default: {DEFAULT_SAMPLES_PER_PIXEL})",
    )
    parser.add_argument(
        "-m",
        "--max-depth",
        type=_non_negative_int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum number of ray bounces (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Output PNG path (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--seed",
        type=_non_negative_int,
        default=None,
        help="Random seed; renders with the same seed are identical (default: random)",
    )
    parser.add_argument(
        "--rows-per-batch",
        type=_positive_int,
        default=DEFAULT_ROWS_PER_BATCH,
        help=f"Rows rendered between progress updates (default: {DEFAULT_ROWS_PER_BATCH})",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and validate command-line arguments.

    Adds ``image_height`` to the returned namespace. Exits with status 2 on
    invalid arguments.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    args.image_height = image_height_for(args.image_width, args.aspect_ratio)
    if args.image_width < 2 or args.image_height < 2:
        parser.error(
            f"image must be at least 2x2 pixels, got {args.image_width}x{args.image_height}"
        )
    if args.image_width > MAX_IMAGE_WIDTH or args.image_height > MAX_IMAGE_HEIGHT:
        parser.error(
            f"image size {args.image_width}x{args.image_height} exceeds the maximum "
            f"{MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT}"
        )
    return args


def resolve_num_threads(requested: int) -> int | None:
    """Map the requested thread count to a Taichi setting.

    Returns:
        The thread count to pass to ti.init, or None for Taichi's default
        (one thread per core) when 0 or more than the CPU count is requested.
    """
    available = os.cpu_count() or 1
    if 0 < requested <= available:
        return requested
    return None


def init_taichi(num_threads: int | None) -> None:
    """Initialise Taichi on the CPU backend."""
    if num_threads is None:
        ti.init(arch=ti.cpu)
    else:
        ti.init(arch=ti.cpu, cpu_max_num_threads=num_threads)


def render_to_file(
    scene_name: SceneName,
    settings: RenderSettings,
    aspect_ratio: float,
    output_path: str,
    quiet: bool = False,
) -> Path:
    """Render a built-in scene and save it as PNG.

    Taichi must already be initialised.

    Args:
        scene_name: The scene to render.
        settings: Image size, sampling and seed.
        aspect_ratio: Aspect ratio for the scene's camera.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.

    Raises:
        ImageExportError: If the image cannot be written.
    """
    # Lazy imports: these modules allocate Taichi fields
    from toy_raytracer.core.render import Renderer
    from toy_raytracer.output.export import write_png
    from toy_raytracer.scene.presets import create_scene

    preset = create_scene(scene_name, aspect_ratio, seed=settings.seed)
    renderer = Renderer(settings)

    start_time = time.time()

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            progress_pct = (done / total) * 100 if total > 0 else 0
            print(
                f"\r  Progress: {done}/{total} rows ({progress_pct:.1f}%)",
                end="",
                flush=True,
            )

    pixels = renderer.render(
        preset.camera,
        preset.scene,
        preset.integrator,
        callback=progress_callback,
    )

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    write_png(output_file, settings.width, settings.height, pixels)

    if not quiet:
        elapsed = time.time() - start_time
        print(f"Rendered in {elapsed:.3f} secs, saved to {output_file}")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    num_threads = resolve_num_threads(args.num_threads)
    init_taichi(num_threads)

    seed = args.seed
    if seed is None:
        seed = int(np.random.default_rng().integers(0, 2**32))

    settings = RenderSettings(
        width=args.image_width,
        height=args.image_height,
        samples_per_pixel=args.samples_per_pixel,
        max_depth=args.max_depth,
        seed=seed,
        rows_per_batch=args.rows_per_batch,
    )

    if not args.quiet:
        threads = num_threads if num_threads is not None else (os.cpu_count() or 1)
        print(
            f"Rendering {settings.width}x{settings.height} image, "
            f"{settings.samples_per_pixel} sample(s) per pixel with {threads} threads, "
            f"max depth {settings.max_depth}"
        )
        print(f"Scene: {args.scene.value}, seed: {seed}")

    try:
        render_to_file(
            args.scene,
            settings,
            aspect_ratio=args.aspect_ratio,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
