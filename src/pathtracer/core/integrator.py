"""Path tracing integrator for Monte Carlo light transport.

This module implements the recursive radiance estimator. Every surface is an
ideal diffuse reflector: a hit adds the surface's emission and continues along
one cosine-weighted direction, scaled componentwise by the surface colour.

Termination is a fixed depth cut-off. Once the recursion depth exceeds
``MAX_DEPTH`` the hit surface contributes its emission only, which truncates
the light transport series instead of terminating paths stochastically.

The estimator is ``emission + color * incoming``. It carries no cosine or
1/pi factor; the cosine-weighted sampling density is folded into the colour
term, and rendered images depend on this exact form.

Example:
    >>> import numpy as np
    >>> from pathtracer.camera.pinhole import get_ray, setup_camera
    >>> from pathtracer.core.integrator import radiance
    >>> from pathtracer.scene.cornell_box import create_cornell_box_scene
    >>>
    >>> scene, camera = create_cornell_box_scene()
    >>> frame = setup_camera(camera)
    >>> rng = np.random.default_rng(42)
    >>> color = radiance(get_ray(frame, 384, 512, 768, 1024), scene, rng)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pathtracer.core.ray import (
    ZERO,
    Ray,
    Vec3,
    dot,
    normalize,
    ray_at,
    sample_cosine_hemisphere,
)
from pathtracer.scene.intersection import Scene, intersect_scene

if TYPE_CHECKING:
    import numpy as np

# =============================================================================
# Rendering Constants
# =============================================================================

# Depth past which a hit returns its emission only
MAX_DEPTH = 5

# Radiance of rays that leave the scene
BACKGROUND_COLOR = ZERO


# =============================================================================
# Path Tracing Core
# =============================================================================


def facing_normal(normal: Vec3, direction: Vec3) -> Vec3:
    """Orient a surface normal against the incoming ray direction."""
    if dot(normal, direction) < 0.0:
        return normal
    return normal * -1.0


def radiance(
    ray: Ray,
    scene: Scene,
    rng: np.random.Generator,
    depth: int = 0,
    max_depth: int = MAX_DEPTH,
) -> Vec3:
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The ray to trace. Its direction should be unit length.
        scene: Scene to intersect against.
        rng: Random generator for hemisphere sampling, owned by the caller.
        depth: Current recursion depth; primary rays start at 0.
        max_depth: Depth after which hits stop scattering.

    Returns:
        One sample of the incoming radiance (RGB).
    """
    hit = intersect_scene(ray, scene)
    if hit is None:
        return BACKGROUND_COLOR

    sphere = scene.spheres[hit.index]
    if depth > max_depth:
        return sphere.emission

    x = ray_at(ray, hit.distance)
    n = normalize(x - sphere.position)
    nl = facing_normal(n, ray.direction)

    d = sample_cosine_hemisphere(nl, rng)
    incoming = radiance(Ray(x, d), scene, rng, depth + 1, max_depth)

    return sphere.emission + sphere.color * incoming


def estimate_pixel(
    ray: Ray,
    scene: Scene,
    rng: np.random.Generator,
    samples: int,
    max_depth: int = MAX_DEPTH,
) -> Vec3:
    """Average ``samples`` independent radiance estimates along one ray.

    Each estimate is scaled by ``1 / samples`` before it is accumulated.
    The result is not clamped.

    Args:
        ray: Primary ray through the pixel.
        scene: Scene to render.
        rng: Random generator owned by the pixel task.
        samples: Number of independent paths.
        max_depth: Depth after which hits stop scattering.

    Returns:
        The mean radiance (RGB).
    """
    weight = 1.0 / samples
    total = ZERO
    for _ in range(samples):
        total = total + radiance(ray, scene, rng, 0, max_depth) * weight
    return total
