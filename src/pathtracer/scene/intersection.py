"""Scene container and nearest-hit queries.

The scene is an ordered, fixed collection of spheres. It is immutable so that
it can be shared by reference between threads or pickled once per task into
worker processes without any locking.

Example:
    >>> from pathtracer.core.ray import Ray, Vec3
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.scene.intersection import Scene, intersect_scene
    >>> scene = Scene.from_spheres([Sphere(1.0, Vec3(0.0, 0.0, -5.0))])
    >>> intersect_scene(Ray(Vec3(0, 0, 0), Vec3(0, 0, -1)), scene)
    SceneHit(distance=4.0, index=0)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import NamedTuple

from pathtracer.core.ray import Ray
from pathtracer.geometry.sphere import Sphere, intersect_sphere

# Hits at or beyond this distance count as misses
T_MAX = 1e21


class SceneHit(NamedTuple):
    """Nearest intersection of a ray with the scene.

    Attributes:
        distance: Parametric distance along the ray.
        index: Position of the hit sphere in the scene.
    """

    distance: float
    index: int


@dataclass(frozen=True)
class Scene:
    """An immutable, ordered collection of spheres.

    Attributes:
        spheres: The primitives, in intersection order.
    """

    spheres: tuple[Sphere, ...]

    @classmethod
    def from_spheres(cls, spheres: Iterable[Sphere]) -> Scene:
        """Build a scene from any iterable of spheres."""
        return cls(tuple(spheres))

    def __len__(self) -> int:
        return len(self.spheres)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self.spheres)

    def __getitem__(self, index: int) -> Sphere:
        return self.spheres[index]


def intersect_scene(ray: Ray, scene: Scene) -> SceneHit | None:
    """Test a ray against every sphere and keep the closest hit.

    This is a linear scan; the scenes rendered here hold a handful of
    primitives. On equal distances the sphere listed first wins.

    Args:
        ray: The ray to trace.
        scene: The scene to test against.

    Returns:
        The nearest SceneHit, or None if no sphere was hit.
    """
    closest_t = T_MAX
    closest_index = -1

    for index, sphere in enumerate(scene.spheres):
        t = intersect_sphere(sphere, ray)
        if t is not None and t < closest_t:
            closest_t = t
            closest_index = index

    if closest_index < 0:
        return None
    return SceneHit(closest_t, closest_index)
