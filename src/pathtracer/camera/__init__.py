"""Camera module for view and ray generation.

Components:
    pinhole: Pinhole (perspective) camera model

The camera basis and screen corner are computed once per render with
setup_camera(); get_ray() then maps a pixel (row, col) to a primary ray.
"""

from .pinhole import (
    Camera,
    CameraFrame,
    get_camera_info,
    get_ray,
    primary_ray,
    setup_camera,
)

__all__ = [
    "Camera",
    "CameraFrame",
    "setup_camera",
    "get_ray",
    "primary_ray",
    "get_camera_info",
]
