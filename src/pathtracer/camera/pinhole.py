"""Pinhole camera model for perspective projection ray generation.

The camera is described by an eye ray (position and viewing direction) and an
up vector. From these it builds an orthonormal basis (u, v, w):

- w: opposite the viewing direction
- u: perpendicular to ``up`` and ``w``
- v: completes the right-handed frame

A square screen spanning ``[screen_min, screen_max]`` along u and v sits at
``focal_distance`` in front of the eye. Pixel rows sweep the screen along u
and pixel columns along v.

The basis and the screen corner only depend on the camera, so they are
computed once per render by :func:`setup_camera` and reused for every pixel.

Example:
    >>> from pathtracer.core.ray import Ray, Vec3
    >>> camera = Camera(
    ...     eye=Ray(Vec3(0.0, 0.0, 1.0), Vec3(0.0, 0.0, -1.0)),
    ...     up=Vec3(0.0, 1.0, 0.0),
    ... )
    >>> frame = setup_camera(camera, focal_distance=1.0)
    >>> ray = get_ray(frame, 250, 250, 500, 500)  # Ray through image center
"""

from __future__ import annotations

from dataclasses import dataclass

from pathtracer.core.ray import ZERO, Ray, Vec3, cross, normalize

# Screen distance used by the path traced scene
DEFAULT_FOCAL_DISTANCE = 2.0

# Screen extent along u and v
SCREEN_MIN = -1.0
SCREEN_MAX = 1.0


# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        eye: Camera position (origin) and viewing direction.
        up: Up direction used to orient the image plane.
        right: Kept for reference only; ray generation derives its own
            horizontal axis from ``up`` and the view direction.
    """

    eye: Ray
    up: Vec3
    right: Vec3 = ZERO


@dataclass(frozen=True)
class CameraFrame:
    """Per-render camera geometry shared by every primary ray.

    Attributes:
        origin: Eye position.
        u: First screen axis (swept by pixel rows).
        v: Second screen axis (swept by pixel columns).
        w: Backward axis, opposite the viewing direction.
        corner: Screen corner at (screen_min, screen_min).
        across: Full screen span along u.
        up: Full screen span along v.
    """

    origin: Vec3
    u: Vec3
    v: Vec3
    w: Vec3
    corner: Vec3
    across: Vec3
    up: Vec3


# =============================================================================
# Camera Setup (called once per render)
# =============================================================================


def setup_camera(
    camera: Camera,
    focal_distance: float = DEFAULT_FOCAL_DISTANCE,
    screen_min: float = SCREEN_MIN,
    screen_max: float = SCREEN_MAX,
) -> CameraFrame:
    """Compute the camera basis and screen placement.

    Args:
        camera: Camera configuration.
        focal_distance: Distance from the eye to the screen.
        screen_min: Lower screen bound along both u and v.
        screen_max: Upper screen bound along both u and v.

    Returns:
        The frame used by :func:`get_ray`.
    """
    w = normalize(camera.eye.direction) * -1.0
    u = normalize(cross(camera.up, w))
    v = cross(w, u)

    extent = screen_max - screen_min
    across = u * extent
    up = v * extent

    origin = camera.eye.origin
    corner = origin + u * screen_min + v * screen_min - w * focal_distance

    return CameraFrame(origin=origin, u=u, v=v, w=w, corner=corner, across=across, up=up)


# =============================================================================
# Ray Generation
# =============================================================================


def get_ray(frame: CameraFrame, row: int, col: int, height: int, width: int) -> Ray:
    """Generate the primary ray through a pixel.

    The pixel maps to normalized screen coordinates ``row / height`` and
    ``col / width``, both in [0, 1).

    Args:
        frame: Camera frame from :func:`setup_camera`.
        row: Pixel row in [0, height).
        col: Pixel column in [0, width).
        height: Image height in pixels.
        width: Image width in pixels.

    Returns:
        A unit-direction Ray starting at the eye.
    """
    an = row / height
    bn = col / width
    target = frame.corner + frame.across * an + frame.up * bn
    return Ray(frame.origin, normalize(target - frame.origin))


def primary_ray(
    camera: Camera,
    row: int,
    col: int,
    height: int,
    width: int,
    focal_distance: float = DEFAULT_FOCAL_DISTANCE,
) -> Ray:
    """Generate a primary ray without keeping the frame around.

    Equivalent to ``get_ray(setup_camera(camera, focal_distance), ...)``.
    """
    return get_ray(setup_camera(camera, focal_distance), row, col, height, width)


def get_camera_info(frame: CameraFrame) -> dict[str, tuple[float, float, float]]:
    """Get the frame vectors as plain tuples for logging and debugging.

    Returns:
        Dictionary with origin, u, v, w, corner, across and up.
    """
    return {
        "origin": frame.origin.to_tuple(),
        "u": frame.u.to_tuple(),
        "v": frame.v.to_tuple(),
        "w": frame.w.to_tuple(),
        "corner": frame.corner.to_tuple(),
        "across": frame.across.to_tuple(),
        "up": frame.up.to_tuple(),
    }
