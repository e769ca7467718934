"""Ray data structure and vector utilities for CPU path tracing.

This module provides the Vec3 value type, the Ray dataclass and the vector
and sampling helpers used by the integrator. Everything here is pure Python
so that scene data and rays pickle cleanly into worker processes.

Example:
    >>> origin = Vec3(0.0, 0.0, 0.0)
    >>> direction = Vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> ray_at(ray, 5.0)
    Vec3(x=0.0, y=0.0, z=-5.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np


@dataclass(frozen=True, slots=True)
class Vec3:
    """A real-valued 3-component vector.

    Used as a position, a direction and an RGB colour. Colours are expected
    to be non-negative but nothing enforces it.

    Multiplication is componentwise when the right operand is a Vec3 and
    uniform scaling when it is a number.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain tuple."""
        return (self.x, self.y, self.z)


ZERO = Vec3(0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Camera and sampling rays
            are unit length, but this is not enforced.
    """

    origin: Vec3
    direction: Vec3


def vec3(x: float, y: float, z: float) -> Vec3:
    """Build a Vec3, coercing the components to float."""
    return Vec3(float(x), float(y), float(z))


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + ray.direction * t.
    """
    return ray.origin + ray.direction * t


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the right-handed cross product a x b."""
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector."""
    return dot(v, v)


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(dot(v, v))


def clamp(x: float) -> float:
    """Clamp a colour channel to [0, 1]. NaN is returned unchanged."""
    if x < 0.0:
        return 0.0
    if x > 1.0:
        return 1.0
    return x


def normalize(v: Vec3) -> Vec3:
    """Scale a vector to unit length.

    There is no guard for the zero vector: callers must pass a non-degenerate
    direction. A zero vector comes back with NaN components, which then
    propagate through any arithmetic that uses them.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    norm = math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)
    inv = 1.0 / norm if norm != 0.0 else math.inf
    return v * inv


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================

_X_AXIS = Vec3(1.0, 0.0, 0.0)
_Y_AXIS = Vec3(0.0, 1.0, 0.0)


def build_onb_from_normal(normal: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Build an orthonormal basis with the given normal as its w axis.

    The reference axis is world Y when the normal has a noticeable X
    component and world X otherwise, so the cross product never degenerates.

    Args:
        normal: The surface normal (unit length).

    Returns:
        A tuple (u, v, w) forming a right-handed orthonormal basis.
    """
    w = normal
    axis = _Y_AXIS if abs(w.x) > 0.1 else _X_AXIS
    u = normalize(cross(axis, w))
    v = cross(w, u)
    return u, v, w


def sample_cosine_hemisphere(normal: Vec3, rng: np.random.Generator) -> Vec3:
    """Draw a cosine-weighted direction on the hemisphere around ``normal``.

    Two uniform numbers are drawn from ``rng``: an azimuth in [0, 2*pi) and
    a squared radius in [0, 1).

    Args:
        normal: The hemisphere axis (unit length).
        rng: Random generator owned by the calling task.

    Returns:
        A unit direction with non-negative dot product against ``normal``.
    """
    r1 = 2.0 * math.pi * float(rng.random())
    r2 = float(rng.random())
    r2s = math.sqrt(r2)

    u, v, w = build_onb_from_normal(normal)
    return normalize(
        u * (math.cos(r1) * r2s) + v * (math.sin(r1) * r2s) + w * math.sqrt(1.0 - r2)
    )
