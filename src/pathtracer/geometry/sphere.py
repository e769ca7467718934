"""Sphere primitive with ray-sphere intersection.

A sphere carries its geometry together with the two surface terms the path
tracer needs: the radiance it emits on its own and its diffuse reflectance.

The intersection solves

    t^2 (d.d) + 2t ((o - p).d) + (o - p).(o - p) - r^2 = 0

in the half-b form with ``op = p - o``. The direction is assumed to be unit
length, so the quadratic coefficient is dropped.

Example:
    >>> from pathtracer.core.ray import Ray, Vec3
    >>> from pathtracer.geometry.sphere import Sphere, intersect_sphere
    >>> sphere = Sphere(radius=1.0, position=Vec3(0.0, 0.0, -5.0))
    >>> intersect_sphere(sphere, Ray(Vec3(0, 0, 0), Vec3(0, 0, -1)))
    4.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pathtracer.core.ray import ZERO, Ray, Vec3, dot, normalize

# Roots at or below this distance are treated as the surface the ray left
EPSILON = 1e-4


@dataclass(frozen=True, slots=True)
class Sphere:
    """A diffuse, optionally light-emitting sphere.

    Attributes:
        radius: Sphere radius (positive).
        position: Centre of the sphere.
        emission: Radiance emitted by the surface (RGB).
        color: Diffuse reflectance (RGB, each component expected in [0, 1]).
    """

    radius: float
    position: Vec3
    emission: Vec3 = ZERO
    color: Vec3 = ZERO


def intersect_sphere(sphere: Sphere, ray: Ray) -> float | None:
    """Find the parametric distance at which a ray enters a sphere.

    The nearer root is preferred; if it lies behind (or on) the ray origin the
    farther root is tried, which is what happens when the ray starts inside
    the sphere.

    Args:
        sphere: The sphere to test.
        ray: The ray to test; its direction should be unit length.

    Returns:
        The distance along the ray to the hit, or None when the ray misses
        or both roots are within EPSILON of the origin.
    """
    op = sphere.position - ray.origin
    b = dot(op, ray.direction)
    det = b * b - dot(op, op) + sphere.radius * sphere.radius

    if det < 0.0:
        return None
    det = math.sqrt(det)

    if b - det > EPSILON:
        return b - det
    if b + det > EPSILON:
        return b + det
    return None


def sphere_normal(sphere: Sphere, point: Vec3) -> Vec3:
    """Outward unit normal of a sphere at a surface point."""
    return normalize(point - sphere.position)
