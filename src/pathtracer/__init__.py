"""CPU path tracer for scenes made of spheres.

This package renders a fixed scene of spheres with a recursive Monte Carlo
path tracer, spreading one task per pixel over a process or thread pool.

Subpackages:
    core: Vectors and rays, the radiance integrator, direct shading and the
        parallel scheduler
    geometry: The sphere primitive and its intersection routine
    scene: Scene container, nearest-hit queries and the built-in scenes
    camera: Pinhole camera with primary ray generation
    preview: PPM and PNG export
"""

__version__ = "0.1.0"
