"""Core rendering module.

Components:
    ray: Vec3 and Ray value types, vector utilities and hemisphere sampling
    integrator: Recursive radiance estimator with a fixed depth cut-off
    direct: Non-recursive pinhole and orthographic shading
    scheduler: One-task-per-pixel parallel renderer

Every surface is an ideal diffuse reflector. Paths are truncated after a
fixed number of bounces, and each pixel averages many independent paths
computed in a worker pool.
"""

from .ray import (
    ZERO,
    Ray,
    Vec3,
    build_onb_from_normal,
    clamp,
    cross,
    dot,
    length,
    length_squared,
    normalize,
    ray_at,
    sample_cosine_hemisphere,
    vec3,
)

# Note: integrator, direct and scheduler are NOT imported here to avoid circular
# imports. Import directly from pathtracer.core.integrator etc. when needed.

__all__ = [
    "Vec3",
    "Ray",
    "ZERO",
    "vec3",
    "ray_at",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "clamp",
    "build_onb_from_normal",
    "sample_cosine_hemisphere",
]
