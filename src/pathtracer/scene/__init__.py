"""Scene module for scene storage and ray-scene queries.

Components:
    intersection: Immutable Scene container and nearest-hit queries
    cornell_box: Built-in scenes and cameras
"""

from .cornell_box import (
    create_cornell_box_scene,
    create_orthographic_scene,
    create_single_sphere_scene,
)
from .intersection import T_MAX, Scene, SceneHit, intersect_scene

__all__ = [
    # Intersection module
    "Scene",
    "SceneHit",
    "intersect_scene",
    "T_MAX",
    # Built-in scenes
    "create_cornell_box_scene",
    "create_single_sphere_scene",
    "create_orthographic_scene",
]
