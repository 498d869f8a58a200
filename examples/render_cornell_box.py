#!/usr/bin/env python3
"""Render the Cornell box scene.

This script renders the reference Cornell box scene with the path tracer and
writes it as a TGA, BMP or PNG image.

Usage:
    python -m examples.render_cornell_box [options]

Options:
    --width WIDTH         Image width in pixels (default: 320)
    --height HEIGHT       Image height in pixels (default: 240)
    --samples SAMPLES     Number of samples per pixel (default: 100)
    --max-depth DEPTH     Maximum path depth (default: 30)
    --output OUTPUT       Output file path (default: cornell_box.bmp)
    --format FORMAT       tga, bmp or png (default: inferred from --output)
    --seed SEED           Random seed (default: random)
    --renderer NAME       kernel (Taichi, parallel) or reference (default: kernel)
    --jitter PATTERN      single-axis or pixel-area (default: single-axis)
    --arch ARCH           Taichi backend, cpu or gpu (default: cpu)
    --log-level LEVEL     Logging level (default: WARNING)
    --quiet               Suppress progress output
    --preview             Show the image in a Matplotlib window when done

Example:
    python -m examples.render_cornell_box --width 160 --height 120 --samples 16
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from pathtracer.camera.pinhole import JitterPattern
from pathtracer.core.film import init_backend
from pathtracer.core.integrator import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_SAMPLES,
    RenderSettings,
    render_image,
)
from pathtracer.core.kernel_integrator import render_kernel_image
from pathtracer.core.sampler import NumpySampler
from pathtracer.output import ImageFormat, save_image, show_preview
from pathtracer.scene.cornell_box import CornellBoxParams, create_cornell_box_scene


RENDERERS = ["kernel", "reference"]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the Cornell box scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=320,
        help="Image width in pixels (default: 320)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=240,
        help="Image height in pixels (default: 240)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES,
        help=f"Number of samples per pixel (default: {DEFAULT_SAMPLES})",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum path depth (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="cornell_box.bmp",
        help="Output file path (default: cornell_box.bmp)",
    )
    parser.add_argument(
        "--format",
        type=ImageFormat,
        choices=list(ImageFormat),
        default=None,
        help="Output format (default: inferred from --output)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: seeded from the OS)",
    )
    parser.add_argument(
        "--renderer",
        choices=RENDERERS,
        default="kernel",
        help="kernel renders on Taichi in parallel; reference is the sampler-driven "
        "renderer, reproducible across backends (default: kernel)",
    )
    parser.add_argument(
        "--jitter",
        type=JitterPattern,
        choices=list(JitterPattern),
        default=JitterPattern.SINGLE_AXIS,
        help="Sub-pixel jitter pattern (default: single-axis)",
    )
    parser.add_argument(
        "--arch",
        choices=["cpu", "gpu"],
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a Matplotlib window",
    )
    return parser.parse_args(argv)


def render_cornell_box(
    width: int = 320,
    height: int = 240,
    num_samples: int = DEFAULT_SAMPLES,
    max_depth: int = DEFAULT_MAX_DEPTH,
    output_path: str = "cornell_box.bmp",
    image_format: ImageFormat | None = None,
    seed: int | None = None,
    jitter: JitterPattern = JitterPattern.SINGLE_AXIS,
    renderer: str = "kernel",
    quiet: bool = False,
    preview: bool = False,
) -> Path:
    """Render the Cornell box scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        num_samples: Number of samples per pixel.
        max_depth: Maximum path depth.
        output_path: Output file path.
        image_format: Output format, or None to infer it from output_path.
        seed: Seed for the reference renderer's sampler, or None for an
            OS-seeded render.
        jitter: Sub-pixel jitter pattern.
        renderer: "kernel" for the Taichi renderer, "reference" for the
            sampler-driven one. The kernel renderer takes its seed from
            init_backend(random_seed=...).
        quiet: If True, suppress progress output.
        preview: If True, show the result in a Matplotlib window.

    Returns:
        Path to the saved image file.
    """
    if not quiet:
        print(f"Creating Cornell box scene ({width}x{height})...")

    params = CornellBoxParams(width=width, height=height, jitter=jitter)
    scene, camera = create_cornell_box_scene(params)
    settings = RenderSettings(samples=num_samples, max_depth=max_depth)

    if not quiet:
        print(f"Rendering {num_samples} samples per pixel...")

    start_time = time.time()

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            print(f"\r{total - done:5d} {unit} remaining", end="", flush=True)

    if renderer == "kernel":
        unit = "passes"
        rows = render_kernel_image(camera, scene, settings, callback=progress_callback)
    elif renderer == "reference":
        unit = "lines"
        sampler = NumpySampler(seed)
        rows = render_image(camera, scene, sampler, settings, callback=progress_callback)
    else:
        raise ValueError(f"Unknown renderer {renderer!r}, expected one of {RENDERERS}")

    if not quiet:
        print()  # Newline after progress

    output_file = save_image(rows, output_path, image_format)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if preview:
        show_preview(rows, title=output_file.name)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        backend_options = {} if args.seed is None else {"random_seed": args.seed}
        init_backend(args.arch, **backend_options)
        if not args.quiet:
            print(f"Using {args.arch.upper()} backend")

        render_cornell_box(
            width=args.width,
            height=args.height,
            num_samples=args.samples,
            max_depth=args.max_depth,
            output_path=args.output,
            image_format=args.format,
            seed=args.seed,
            jitter=args.jitter,
            renderer=args.renderer,
            quiet=args.quiet,
            preview=args.preview,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
