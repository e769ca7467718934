"""Command-line renderer.

Usage:
    pathtracer [options]
    python -m pathtracer [options]

Options:
    --variant NAME      path, pinhole or orthographic (default: path)
    --width WIDTH       Image width in pixels (default: 1024, pinhole: 500)
    --height HEIGHT     Image height in pixels (default: 768, pinhole: 500)
    --samples SAMPLES   Samples per pixel for the path variant (default: 5000)
    --seed SEED         Seed for reproducible output (default: unseeded)
    --workers N         Worker pool size (default: one per CPU)
    --executor KIND     process or thread (default: process)
    --output OUTPUT     Output file path; .png writes PNG (default: image.ppm)
    --quiet             Only report warnings and errors
    --verbose           Report debug messages

Example:
    pathtracer --width 128 --height 96 --samples 64 --seed 1 --output room.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
from tqdm import tqdm

from pathtracer.config import VARIANTS, RenderConfig
from pathtracer.core.direct import render_orthographic, render_pinhole
from pathtracer.core.scheduler import EXECUTOR_KINDS, ParallelRenderer, RenderError
from pathtracer.preview.export import save_image
from pathtracer.scene.cornell_box import (
    create_cornell_box_scene,
    create_orthographic_scene,
    create_single_sphere_scene,
)

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render the built-in sphere scenes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--variant",
        choices=VARIANTS,
        default="path",
        help="Renderer to run (default: path)",
    )
    parser.add_argument("--width", type=int, help="Image width in pixels")
    parser.add_argument("--height", type=int, help="Image height in pixels")
    parser.add_argument(
        "--samples",
        type=int,
        help="Samples per pixel for the path variant (default: 5000)",
    )
    parser.add_argument("--seed", type=int, help="Seed for reproducible output")
    parser.add_argument("--workers", type=int, help="Worker pool size (default: one per CPU)")
    parser.add_argument(
        "--executor",
        choices=EXECUTOR_KINDS,
        help="Worker pool kind (default: process)",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output file path; a .png suffix writes PNG (default: image.ppm)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--quiet",
        action="store_true",
        help="Only report warnings and errors",
    )
    verbosity.add_argument(
        "--verbose",
        action="store_true",
        help="Report debug messages",
    )
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> RenderConfig:
    """Build and validate a RenderConfig from parsed arguments."""
    config = RenderConfig.for_variant(
        args.variant,
        width=args.width,
        height=args.height,
        samples=args.samples,
        seed=args.seed,
        workers=args.workers,
        executor=args.executor,
        output=args.output,
    )
    config.validate()
    return config


def render(config: RenderConfig, show_progress: bool = True) -> npt.NDArray[np.float64]:
    """Render the scene selected by ``config.variant``.

    Args:
        config: Validated render settings.
        show_progress: Show a progress bar for the path variant.

    Returns:
        Pixel buffer of shape (height, width, 3).

    Raises:
        RenderError: If a pixel task fails.
    """
    if config.variant == "pinhole":
        scene, camera = create_single_sphere_scene()
        return render_pinhole(scene, camera, config.width, config.height)

    if config.variant == "orthographic":
        return render_orthographic(create_orthographic_scene(), config.width, config.height)

    scene, camera = create_cornell_box_scene()
    renderer = ParallelRenderer(
        scene,
        camera,
        config.width,
        config.height,
        config.samples,
        workers=config.workers,
        seed=config.seed,
        executor=config.executor,
        max_depth=config.max_depth,
    )

    with tqdm(
        total=config.width * config.height,
        desc="Raytracing",
        unit="px",
        disable=not show_progress,
    ) as progress:

        def progress_callback(current: int, target: int) -> None:
            progress.update(current - progress.n)

        return renderer.render(callback=progress_callback)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    level = logging.INFO
    if args.quiet:
        level = logging.WARNING
    elif args.verbose:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = config_from_args(args)
        image = render(config, show_progress=not args.quiet)
    except (ValueError, RenderError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Writing image...")
    if not save_image(image, config.output):
        logger.warning("Render finished but %s was not written", config.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
