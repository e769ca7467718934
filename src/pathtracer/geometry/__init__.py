"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with emission and diffuse colour, and the
        ray-sphere intersection routine
"""

from .sphere import EPSILON, Sphere, intersect_sphere, sphere_normal

__all__ = [
    "Sphere",
    "EPSILON",
    "intersect_sphere",
    "sphere_normal",
]
