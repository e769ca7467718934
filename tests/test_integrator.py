"""Tests for the path tracing integrator.

Tests cover:
- Normal orientation against the incoming ray
- Background and emission-only termination
- The exact value of the truncated series inside a closed sphere
- Recursion depth bound
- Per-pixel averaging
"""

import numpy as np
import pytest

from pathtracer.core import integrator
from pathtracer.core.integrator import (
    BACKGROUND_COLOR,
    MAX_DEPTH,
    estimate_pixel,
    facing_normal,
    radiance,
)
from pathtracer.core.ray import ZERO, Ray, Vec3, normalize
from pathtracer.geometry.sphere import Sphere
from pathtracer.scene.cornell_box import LIGHT_EMISSION
from pathtracer.scene.intersection import Scene

ORIGIN_RAY = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))


def _assert_color(actual, expected, rel=1e-9):
    assert actual.to_tuple() == pytest.approx(tuple(expected), rel=rel)


class TestFacingNormal:
    """Tests for facing_normal."""

    def test_keeps_normal_facing_the_ray(self):
        """Test a normal opposing the ray direction is unchanged."""
        n = Vec3(0.0, 0.0, 1.0)
        assert facing_normal(n, Vec3(0.0, 0.0, -1.0)) == n

    def test_flips_normal_facing_away(self):
        """Test a normal along the ray direction is flipped."""
        n = Vec3(0.0, 0.0, 1.0)
        assert facing_normal(n, Vec3(0.0, 0.0, 1.0)) == Vec3(-0.0, -0.0, -1.0)

    def test_perpendicular_is_flipped(self):
        """Test that a zero dot product counts as facing away."""
        n = Vec3(1.0, 0.0, 0.0)
        assert facing_normal(n, Vec3(0.0, 1.0, 0.0)) == Vec3(-1.0, -0.0, -0.0)


class TestRadianceTermination:
    """Tests for misses and the depth cut-off."""

    def test_background_is_black(self):
        """Test the background constant."""
        assert BACKGROUND_COLOR == ZERO

    def test_miss_returns_background(self, rng):
        """Test a ray that leaves the scene."""
        scene = Scene.from_spheres([Sphere(1.0, Vec3(0.0, 0.0, 5.0), Vec3(1.0, 1.0, 1.0))])
        assert radiance(ORIGIN_RAY, scene, rng) == BACKGROUND_COLOR

    def test_past_max_depth_returns_emission_only(self, rng, enclosing_scene):
        """Test that a hit beyond the cut-off does not scatter."""
        scene = enclosing_scene(emission=(0.3, 0.2, 0.1), color=(1.0, 1.0, 1.0))
        color = radiance(ORIGIN_RAY, scene, rng, depth=MAX_DEPTH + 1)
        assert color == Vec3(0.3, 0.2, 0.1)

    def test_at_max_depth_still_scatters(self, rng, enclosing_scene):
        """Test that depth == MAX_DEPTH adds one more bounce."""
        scene = enclosing_scene(emission=(1.0, 1.0, 1.0), color=(0.5, 0.5, 0.5))
        color = radiance(ORIGIN_RAY, scene, rng, depth=MAX_DEPTH)
        _assert_color(color, (1.5, 1.5, 1.5))

    def test_light_hit_past_cut_off(self, rng, cornell_box):
        """Test that the ceiling light seen past the cut-off returns its emission."""
        scene, _ = cornell_box
        ray = Ray(Vec3(50.0, 40.0, 81.6), Vec3(0.0, 1.0, 0.0))
        assert radiance(ray, scene, rng, depth=MAX_DEPTH + 1) == LIGHT_EMISSION

    def test_light_hit_at_depth_zero(self, rng, cornell_box):
        """Test that a direct view of the light is at least its emission."""
        scene, _ = cornell_box
        ray = Ray(Vec3(50.0, 40.0, 81.6), Vec3(0.0, 1.0, 0.0))
        for _ in range(10):
            color = radiance(ray, scene, rng)
            assert all(c >= 12.0 for c in color)


class TestRadianceSeries:
    """Tests for the estimator inside a sphere every path keeps hitting."""

    def test_white_enclosure_sums_every_emission(self, rng, enclosing_scene):
        """Test that seven hits (depths 0 to 6) contribute one emission each."""
        scene = enclosing_scene(emission=(1.0, 1.0, 1.0), color=(1.0, 1.0, 1.0))
        _assert_color(radiance(ORIGIN_RAY, scene, rng), (7.0, 7.0, 7.0))

    def test_grey_enclosure_is_geometric_series(self, rng, enclosing_scene):
        """Test e * (1 + c + ... + c^6) for a constant albedo c."""
        scene = enclosing_scene(emission=(1.0, 2.0, 0.0), color=(0.5, 0.5, 0.5))
        series = sum(0.5**k for k in range(MAX_DEPTH + 2))
        _assert_color(radiance(ORIGIN_RAY, scene, rng), (series, 2.0 * series, 0.0))

    def test_color_scales_componentwise(self, rng, enclosing_scene):
        """Test that each channel follows its own albedo."""
        scene = enclosing_scene(emission=(1.0, 1.0, 1.0), color=(1.0, 0.0, 0.5))
        expected = (7.0, 1.0, sum(0.5**k for k in range(7)))
        _assert_color(radiance(ORIGIN_RAY, scene, rng), expected)

    def test_custom_max_depth(self, rng, enclosing_scene):
        """Test that max_depth=0 gives exactly one bounce."""
        scene = enclosing_scene(emission=(1.0, 1.0, 1.0), color=(0.5, 0.5, 0.5))
        _assert_color(radiance(ORIGIN_RAY, scene, rng, max_depth=0), (1.5, 1.5, 1.5))

    def test_result_does_not_depend_on_rng(self, enclosing_scene):
        """Test that the enclosure gives the same value for any seed."""
        scene = enclosing_scene(emission=(0.2, 0.2, 0.2), color=(0.9, 0.9, 0.9))
        values = {
            radiance(ORIGIN_RAY, scene, np.random.default_rng(seed)).to_tuple()
            for seed in range(5)
        }
        first = next(iter(values))
        for value in values:
            assert value == pytest.approx(first)


class TestRecursionDepth:
    """Tests for the depth bound of the recursion."""

    def test_deepest_call_is_one_past_max_depth(self, rng, enclosing_scene, monkeypatch):
        """Test that no call goes deeper than MAX_DEPTH + 1."""
        depths = []
        original = integrator.radiance

        def recording_radiance(ray, scene, rng, depth=0, max_depth=MAX_DEPTH):
            depths.append(depth)
            return original(ray, scene, rng, depth, max_depth)

        monkeypatch.setattr(integrator, "radiance", recording_radiance)
        scene = enclosing_scene()
        integrator.radiance(ORIGIN_RAY, scene, rng)

        assert depths == list(range(MAX_DEPTH + 2))

    def test_room_paths_are_bounded(self, rng, cornell_box, monkeypatch):
        """Test the depth bound on the path traced room."""
        depths = []
        original = integrator.radiance

        def recording_radiance(ray, scene, rng, depth=0, max_depth=MAX_DEPTH):
            depths.append(depth)
            return original(ray, scene, rng, depth, max_depth)

        monkeypatch.setattr(integrator, "radiance", recording_radiance)
        scene, _ = cornell_box
        ray = Ray(Vec3(50.0, 40.0, 81.6), Vec3(0.0, 0.0, -1.0))
        for _ in range(20):
            integrator.radiance(ray, scene, rng)

        assert max(depths) <= MAX_DEPTH + 1


class TestEstimatePixel:
    """Tests for estimate_pixel."""

    def test_average_of_constant_estimates(self, rng, enclosing_scene):
        """Test that averaging identical estimates returns the estimate."""
        scene = enclosing_scene(emission=(0.1, 0.1, 0.1), color=(0.5, 0.5, 0.5))
        series = 0.1 * sum(0.5**k for k in range(7))
        _assert_color(estimate_pixel(ORIGIN_RAY, scene, rng, samples=3), (series,) * 3)

    def test_result_is_not_clamped(self, rng, enclosing_scene):
        """Test that values above one survive the average."""
        scene = enclosing_scene()
        _assert_color(estimate_pixel(ORIGIN_RAY, scene, rng, samples=4), (7.0, 7.0, 7.0))

    def test_miss_averages_to_black(self, rng):
        """Test a pixel that sees nothing."""
        scene = Scene.from_spheres([])
        assert estimate_pixel(ORIGIN_RAY, scene, rng, samples=8) == ZERO

    def test_forwards_max_depth(self, rng, enclosing_scene):
        """Test that max_depth reaches radiance."""
        scene = enclosing_scene(emission=(1.0, 1.0, 1.0), color=(1.0, 1.0, 1.0))
        color = estimate_pixel(ORIGIN_RAY, scene, rng, samples=2, max_depth=1)
        _assert_color(color, (3.0, 3.0, 3.0))

    def test_same_seed_same_estimate(self, cornell_box):
        """Test that estimates are reproducible from the generator state."""
        scene, _ = cornell_box
        ray = Ray(Vec3(50.0, 40.0, 81.6), normalize(Vec3(0.3, 0.1, -1.0)))
        a = estimate_pixel(ray, scene, np.random.default_rng(5), samples=16)
        b = estimate_pixel(ray, scene, np.random.default_rng(5), samples=16)
        assert a == b
