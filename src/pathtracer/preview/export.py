"""Image export utilities for rendered images.

This module turns a linear pixel buffer into 8-bit channels and writes it to
disk.

Supported formats:
    - PPM (ASCII "P3", the renderer's native output)
    - PNG (8-bit via Pillow)

Every channel goes through the same conversion:

    int(clamp(x) ** (1 / 2.2) * 255 + 0.5)

Write failures are logged and reported through the return value; they never
raise, so a finished render is not lost to an exception at the last step.

Example:
    >>> from pathtracer.preview.export import save_ppm
    >>> image = renderer.render()
    >>> save_ppm(image, "image.ppm")
    True
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from pathtracer.core.ray import clamp

logger = logging.getLogger(__name__)

GAMMA = 2.2
MAX_VALUE = 255


def to_int(x: float) -> int:
    """Gamma-encode a linear channel to an integer in [0, 255].

    NaN maps to 0.
    """
    c = clamp(x)
    if math.isnan(c):
        return 0
    return int(c ** (1.0 / GAMMA) * MAX_VALUE + 0.5)


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a linear image to 8-bit channels.

    Vectorized form of :func:`to_int`.

    Args:
        image: Linear image array of shape (H, W, 3).

    Returns:
        Array of the same shape with dtype uint8.
    """
    linear = np.nan_to_num(np.asarray(image, dtype=np.float64), nan=0.0)
    linear = np.clip(linear, 0.0, 1.0)
    encoded = np.floor(np.power(linear, 1.0 / GAMMA) * MAX_VALUE + 0.5)
    return np.clip(encoded, 0, MAX_VALUE).astype(np.uint8)


def encode_ppm(image: npt.NDArray[np.floating]) -> str:
    """Serialize an image as ASCII P3 text.

    The header is followed by one ``"r g b "`` triple per pixel in row-major
    order, with no line breaks between rows.

    Args:
        image: Linear image array of shape (H, W, 3).

    Returns:
        The complete file contents.
    """
    height, width = image.shape[0], image.shape[1]
    pixels = image_to_uint8(image).reshape(-1, 3)
    header = f"P3\n{width} {height}\n{MAX_VALUE}\n"
    body = "".join(f"{r} {g} {b} " for r, g, b in pixels.tolist())
    return header + body


def save_ppm(image: npt.NDArray[np.floating], filepath: str | Path) -> bool:
    """Write an image as an ASCII P3 file.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output path.

    Returns:
        True on success, False if the file could not be written.
    """
    try:
        Path(filepath).write_text(encode_ppm(image), encoding="ascii")
    except OSError as exc:
        logger.error("Could not write image to %s: %s", filepath, exc)
        return False
    logger.info("Saved image to %s", filepath)
    return True


def save_png(image: npt.NDArray[np.floating], filepath: str | Path) -> bool:
    """Write an image as an 8-bit PNG file.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output path.

    Returns:
        True on success, False if the file could not be written.
    """
    pil_image = PILImage.fromarray(image_to_uint8(image))
    try:
        pil_image.save(filepath, format="PNG")
    except OSError as exc:
        logger.error("Could not write image to %s: %s", filepath, exc)
        return False
    logger.info("Saved image to %s", filepath)
    return True


def save_image(image: npt.NDArray[np.floating], filepath: str | Path) -> bool:
    """Write an image, choosing PNG for a ``.png`` suffix and P3 otherwise."""
    if Path(filepath).suffix.lower() == ".png":
        return save_png(image, filepath)
    return save_ppm(image, filepath)
