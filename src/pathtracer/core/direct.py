"""Single-bounce shading without sampling.

Two non-recursive variants that colour the nearest hit directly:

- pinhole diffuse: perspective rays, colour scaled by the cosine between the
  surface normal and a fixed light direction, dark grey background;
- orthographic flat: parallel rays cast from each pixel position straight
  down the -z axis, raw sphere colour, mid grey background.

Both render sequentially into the same (height, width, 3) buffer layout as
the path tracer, so their output goes through the same exporters.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from pathtracer.camera.pinhole import Camera, get_ray, setup_camera
from pathtracer.core.ray import Ray, Vec3, dot, normalize, ray_at
from pathtracer.scene.intersection import Scene, intersect_scene

# Fixed light used by the diffuse variant (origin + direction)
LIGHT = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0))

PINHOLE_BACKGROUND = Vec3(0.25, 0.25, 0.25)
FLAT_BACKGROUND = Vec3(0.5, 0.5, 0.5)

# The pinhole variant puts its screen one unit in front of the eye
PINHOLE_FOCAL_DISTANCE = 1.0

ORTHOGRAPHIC_DIRECTION = Vec3(0.0, 0.0, -1.0)


def shade_diffuse(ray: Ray, scene: Scene) -> Vec3:
    """Colour the nearest hit by its cosine to the fixed light direction.

    The factor is not clamped, so surfaces facing away from the light come
    out negative and are clipped to black on export.
    """
    hit = intersect_scene(ray, scene)
    if hit is None:
        return PINHOLE_BACKGROUND

    sphere = scene.spheres[hit.index]
    normal = normalize(ray_at(ray, hit.distance) - sphere.position)
    diffuse_factor = dot(normal, normalize(LIGHT.origin + LIGHT.direction))
    return sphere.color * diffuse_factor


def shade_flat(ray: Ray, scene: Scene) -> Vec3:
    """Return the colour of the nearest hit sphere, or the flat background."""
    hit = intersect_scene(ray, scene)
    if hit is None:
        return FLAT_BACKGROUND
    return scene.spheres[hit.index].color


def orthographic_ray(row: int, col: int) -> Ray:
    """Parallel ray for a pixel: starts at (row, col, 0) and looks down -z."""
    return Ray(Vec3(float(row), float(col), 0.0), ORTHOGRAPHIC_DIRECTION)


def render_pinhole(
    scene: Scene,
    camera: Camera,
    width: int,
    height: int,
    focal_distance: float = PINHOLE_FOCAL_DISTANCE,
) -> npt.NDArray[np.float64]:
    """Render the pinhole diffuse variant.

    Args:
        scene: Scene to render.
        camera: Camera to render from.
        width: Image width in pixels.
        height: Image height in pixels.
        focal_distance: Distance from the eye to the screen.

    Returns:
        Pixel buffer of shape (height, width, 3), unclamped.
    """
    frame = setup_camera(camera, focal_distance)
    image = np.zeros((height, width, 3), dtype=np.float64)
    for row in range(height):
        for col in range(width):
            ray = get_ray(frame, row, col, height, width)
            image[row, col] = shade_diffuse(ray, scene).to_tuple()
    return image


def render_orthographic(scene: Scene, width: int, height: int) -> npt.NDArray[np.float64]:
    """Render the orthographic flat variant.

    Returns:
        Pixel buffer of shape (height, width, 3).
    """
    image = np.zeros((height, width, 3), dtype=np.float64)
    for row in range(height):
        for col in range(width):
            image[row, col] = shade_flat(orthographic_ray(row, col), scene).to_tuple()
    return image
