"""Preview module for image output.

Components:
    export: Gamma encoding, P3 PPM and PNG writers
"""

from pathtracer.preview.export import (
    encode_ppm,
    image_to_uint8,
    save_image,
    save_png,
    save_ppm,
    to_int,
)

__all__ = [
    "to_int",
    "image_to_uint8",
    "encode_ppm",
    "save_ppm",
    "save_png",
    "save_image",
]
