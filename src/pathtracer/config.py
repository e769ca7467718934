"""Render configuration.

``RenderConfig`` gathers the settings of one render. The defaults reproduce
the path traced scene: 1024x768 pixels, 5000 samples per pixel, one process
per CPU, written to ``image.ppm``.

Example:
    >>> from pathtracer.config import RenderConfig
    >>> config = RenderConfig(width=64, height=48, samples=16, seed=7)
    >>> config.validate()
    >>> RenderConfig.for_variant("pinhole").width
    500
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from pathtracer.core.integrator import MAX_DEPTH
from pathtracer.core.scheduler import EXECUTOR_KINDS

VARIANTS = ("path", "pinhole", "orthographic")

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 768
DEFAULT_SAMPLES = 5000
DEFAULT_OUTPUT = "image.ppm"

# Image sizes of the direct shading variants
_VARIANT_SIZES = {
    "path": (DEFAULT_WIDTH, DEFAULT_HEIGHT),
    "pinhole": (500, 500),
    "orthographic": (DEFAULT_WIDTH, DEFAULT_HEIGHT),
}


@dataclass
class RenderConfig:
    """Settings for a single render.

    Attributes:
        variant: "path" for the path tracer, "pinhole" or "orthographic" for
            the direct shading variants.
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Path samples per pixel (path variant only).
        seed: Base seed for reproducible output, or None.
        workers: Worker pool size, or None for one per CPU.
        executor: "process" or "thread".
        output: Output path; a ``.png`` suffix selects PNG, anything else P3.
        max_depth: Depth after which hits stop scattering.
    """

    variant: str = "path"
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    samples: int = DEFAULT_SAMPLES
    seed: int | None = None
    workers: int | None = None
    executor: str = "process"
    output: str = DEFAULT_OUTPUT
    max_depth: int = MAX_DEPTH

    @classmethod
    def for_variant(cls, variant: str, **overrides: Any) -> RenderConfig:
        """Build a config with the default image size of a variant.

        Args:
            variant: One of VARIANTS.
            **overrides: Field values replacing the defaults. None values are
                ignored so argparse namespaces can be passed through.

        Raises:
            ValueError: If the variant is unknown.
        """
        if variant not in VARIANTS:
            raise ValueError(f"Unknown variant {variant!r}, expected one of {VARIANTS}")
        width, height = _VARIANT_SIZES[variant]
        config = cls(variant=variant, width=width, height=height)
        return replace(config, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ValueError: If any setting is out of range.
        """
        if self.variant not in VARIANTS:
            raise ValueError(f"Unknown variant {self.variant!r}, expected one of {VARIANTS}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.samples <= 0:
            raise ValueError(f"Sample count must be positive, got {self.samples}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"Seed must be non-negative, got {self.seed}")
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"Worker count must be positive, got {self.workers}")
        if self.executor not in EXECUTOR_KINDS:
            raise ValueError(
                f"Unknown executor kind {self.executor!r}, expected one of {EXECUTOR_KINDS}"
            )
        if self.max_depth < 0:
            raise ValueError(f"Maximum depth must be non-negative, got {self.max_depth}")
