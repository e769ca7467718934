"""Built-in scenes.

Three scene/camera pairs are provided:

- ``create_cornell_box_scene``: the path traced room. Six huge spheres
  approximate the walls, floor and ceiling, two small spheres stand on the
  floor, and a large emissive sphere poking through the ceiling lights the
  room.
- ``create_single_sphere_scene``: one sphere in front of a pinhole camera,
  used by the diffuse shading variant.
- ``create_orthographic_scene``: two spheres laid out in pixel units for the
  orthographic flat variant (no camera).

The small spheres of the room are labelled mirror and glass, but every
sphere is rendered as a diffuse reflector.

Example:
    >>> from pathtracer.scene.cornell_box import create_cornell_box_scene
    >>> scene, camera = create_cornell_box_scene()
    >>> len(scene)
    9
"""

from __future__ import annotations

from pathtracer.camera.pinhole import Camera
from pathtracer.core.ray import Ray, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.scene.intersection import Scene

# =============================================================================
# Cornell Box Constants
# =============================================================================

# Radius of the spheres standing in for planar walls
WALL_RADIUS = 1e5

WALL_ALBEDO = Vec3(0.75, 0.75, 0.75)
LEFT_WALL_ALBEDO = Vec3(0.75, 0.25, 0.25)
RIGHT_WALL_ALBEDO = Vec3(0.25, 0.25, 0.75)
FRONT_WALL_ALBEDO = Vec3(1.0, 1.0, 1.0)
SPHERE_ALBEDO = Vec3(0.999, 0.999, 0.999)

LIGHT_EMISSION = Vec3(12.0, 12.0, 12.0)

NO_EMISSION = Vec3(0.0, 0.0, 0.0)

# Index of each primitive in the scene returned by create_cornell_box_scene
LEFT, RIGHT, BACK, FRONT, BOTTOM, TOP, MIRROR, GLASS, LIGHT = range(9)


def create_cornell_box_scene() -> tuple[Scene, Camera]:
    """Create the path traced room and its camera.

    Returns:
        Tuple of (scene, camera).
    """
    spheres = [
        # Left
        Sphere(WALL_RADIUS, Vec3(WALL_RADIUS + 1.0, 40.8, 81.6), NO_EMISSION, LEFT_WALL_ALBEDO),
        # Right
        Sphere(
            WALL_RADIUS, Vec3(-WALL_RADIUS + 99.0, 40.8, 81.6), NO_EMISSION, RIGHT_WALL_ALBEDO
        ),
        # Back
        Sphere(WALL_RADIUS, Vec3(50.0, 40.8, WALL_RADIUS), NO_EMISSION, WALL_ALBEDO),
        # Front
        Sphere(
            WALL_RADIUS, Vec3(50.0, 40.8, -WALL_RADIUS + 600.0), NO_EMISSION, FRONT_WALL_ALBEDO
        ),
        # Bottom
        Sphere(WALL_RADIUS, Vec3(50.0, WALL_RADIUS, 81.6), NO_EMISSION, WALL_ALBEDO),
        # Top
        Sphere(WALL_RADIUS, Vec3(50.0, -WALL_RADIUS + 81.6, 81.6), NO_EMISSION, WALL_ALBEDO),
        # Mirror
        Sphere(16.5, Vec3(27.0, 16.5, 47.0), NO_EMISSION, SPHERE_ALBEDO),
        # Glass
        Sphere(16.5, Vec3(73.0, 16.5, 78.0), NO_EMISSION, SPHERE_ALBEDO),
        # Light
        Sphere(600.0, Vec3(50.0, 681.6 - 0.27, 81.6), LIGHT_EMISSION, Vec3(1.0, 1.0, 1.0)),
    ]

    camera = Camera(
        eye=Ray(Vec3(50.0, 52.0, 295.6), Vec3(0.0, -0.042612, -1.0)),
        up=Vec3(1.0, 0.0, 0.0),
    )
    return Scene.from_spheres(spheres), camera


def create_single_sphere_scene() -> tuple[Scene, Camera]:
    """Create one blue-ish sphere in front of a pinhole camera.

    Returns:
        Tuple of (scene, camera).
    """
    scene = Scene.from_spheres(
        [Sphere(1.41, Vec3(0.0, 0.0, -1.0), NO_EMISSION, Vec3(0.25, 0.50, 0.75))]
    )
    camera = Camera(
        eye=Ray(Vec3(0.0, 0.0, 1.0), Vec3(0.0, 0.0, -1.0)),
        up=Vec3(0.0, 1.0, 0.0),
    )
    return scene, camera


def create_orthographic_scene() -> Scene:
    """Create the two-sphere scene for the orthographic variant.

    Coordinates are in pixel units: x follows the row, y the column.
    """
    return Scene.from_spheres(
        [
            Sphere(150.0, Vec3(212.0, 384.0, -1000.0), NO_EMISSION, Vec3(0.25, 0.25, 0.75)),
            Sphere(150.0, Vec3(590.0, 884.0, -1000.0), NO_EMISSION, Vec3(0.25, 0.50, 0.75)),
        ]
    )
