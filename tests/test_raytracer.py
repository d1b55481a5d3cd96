"""Tests for the radiance estimate and the parallel renderer."""

import math

import numpy as np
import pytest

from pathtracer.camera.camera import Camera
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.material import Material
from pathtracer.renderer.raytracer import (
    SKY_BLUE, WHITE, Renderer, pixel_color, pixel_rng, ray_color,
)


class Absorber(Material):
    def scatter(self, ray_in, rec, rng):
        return None


def tiny_camera(**overrides):
    settings = dict(aspect_ratio=2.0, image_width=6, samples_per_pixel=2, max_depth=4)
    settings.update(overrides)
    return Camera(**settings)


class TestRayColor:

    def test_depth_zero_is_black(self, two_sphere_world, rng):
        world, _, _ = two_sphere_world
        for direction in (Vector3(0, 0, -1), Vector3(0, 1, 0), Vector3(0, -1, -1)):
            assert ray_color(Ray(Point3(0, 0, 0), direction), 0, world, rng) == Color(0, 0, 0)
        assert ray_color(Ray(Point3(0, 0, 0), Vector3(0, 1, 0)), -3, HittableList(), rng) == Color(0, 0, 0)

    def test_sky_straight_up_is_blue(self, rng):
        assert ray_color(Ray(Point3(0, 0, 0), Vector3(0, 5, 0)), 10, HittableList(), rng) == SKY_BLUE

    def test_sky_straight_down_is_white(self, rng):
        assert ray_color(Ray(Point3(0, 0, 0), Vector3(0, -1, 0)), 10, HittableList(), rng) == WHITE

    def test_sky_horizon_is_midway(self, rng):
        c = ray_color(Ray(Point3(0, 0, 0), Vector3(1, 0, 0)), 10, HittableList(), rng)
        assert c.x == pytest.approx(0.75)
        assert c.y == pytest.approx(0.85)
        assert c.z == pytest.approx(1.0)

    def test_absorbed_is_black(self, rng):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Absorber())])
        assert ray_color(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), 10, world, rng) == Color(0, 0, 0)

    def test_diffuse_bounce_scaled_by_albedo(self, gray, rng):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, gray)])
        ray = Ray(Point3(0, 0, 0), Vector3(0, 0, -1))
        for _ in range(50):
            c = ray_color(ray, 2, world, rng)
            # one bounce into the sky: albedo times a background color
            for channel in c:
                assert 0.25 - 1e-12 <= channel <= 0.5 + 1e-12

    def test_single_bounce_budget_is_black(self, gray, rng):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, gray)])
        assert ray_color(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), 1, world, rng) == Color(0, 0, 0)

    def test_glass_keeps_energy(self, rng):
        # A thin glass sphere straight ahead only bends the ray toward the sky.
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Dielectric(1.5))])
        c = ray_color(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), 10, world, rng)
        assert c.x > 0 and c.y > 0 and c.z > 0


class TestSingleSphereScene:

    def test_center_ray_hits_front(self, gray, rng):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, gray)])
        camera = Camera(aspect_ratio=1.0, image_width=2, focus_dist=1.0)
        # Viewport center lies between the four pixels.
        ray = camera.get_ray(0.5, 0.5, rng, jitter=False)
        rec = world.hit(ray, Interval(0.001, math.inf))
        assert rec is not None
        assert rec.t == pytest.approx(0.5)
        assert rec.normal.x == pytest.approx(0.0, abs=1e-9)
        assert rec.normal.y == pytest.approx(0.0, abs=1e-9)
        assert rec.normal.z == pytest.approx(1.0)


class TestPixelRng:

    def test_same_pixel_same_stream(self):
        assert pixel_rng(7, 3, 4).random() == pixel_rng(7, 3, 4).random()

    def test_streams_differ(self):
        values = {pixel_rng(7, i, j).random() for i in range(4) for j in range(4)}
        values.add(pixel_rng(8, 0, 0).random())
        assert len(values) == 17

    def test_pixel_color_averages_samples(self, rng):
        camera = tiny_camera(samples_per_pixel=5)
        c = pixel_color(camera, HittableList(), 0, 0, rng)
        # Sky only: every sample lies between white and sky blue.
        assert 0.5 <= c.x <= 1.0
        assert 0.7 <= c.y <= 1.0
        assert c.z == pytest.approx(1.0)


class TestRenderer:

    def test_rejects_bad_worker_count(self):
        with pytest.raises(ValueError):
            Renderer(workers=0)

    def test_reinitializes_camera(self, two_sphere_world):
        world, _, _ = two_sphere_world
        camera = tiny_camera()
        camera.image_width = 4
        image = Renderer(workers=1, verbose=False).render(camera, world, seed=1)
        assert image.shape == (2, 4, 3)

    def test_invalid_camera_change_is_reported(self, two_sphere_world):
        world, _, _ = two_sphere_world
        camera = tiny_camera()
        camera.samples_per_pixel = 0
        with pytest.raises(ValueError):
            Renderer(workers=1, verbose=False).render(camera, world, seed=1)

    def test_output_shape_and_range(self, two_sphere_world):
        world, _, _ = two_sphere_world
        camera = tiny_camera()
        image = Renderer(workers=1, verbose=False).render(camera, world, seed=3)
        assert image.shape == (camera.image_height, camera.image_width, 3)
        assert np.all(np.isfinite(image))
        assert np.all(image >= 0.0)
        assert np.all(image <= 1.0)

    def test_same_seed_is_bit_identical(self, two_sphere_world):
        world, _, _ = two_sphere_world
        renderer = Renderer(workers=1, verbose=False)
        first = renderer.render(tiny_camera(), world, seed=42)
        second = renderer.render(tiny_camera(), world, seed=42)
        assert np.array_equal(first, second)

    def test_different_seeds_differ(self, two_sphere_world):
        world, _, _ = two_sphere_world
        renderer = Renderer(workers=1, verbose=False)
        assert not np.array_equal(renderer.render(tiny_camera(), world, seed=1),
                                  renderer.render(tiny_camera(), world, seed=2))

    def test_unseeded_render_records_entropy(self, two_sphere_world):
        world, _, _ = two_sphere_world
        renderer = Renderer(workers=1, verbose=False)
        image = renderer.render(tiny_camera(), world)
        replay = renderer.render(tiny_camera(), world, seed=renderer.last_entropy)
        assert np.array_equal(image, replay)

    def test_process_pool_matches_serial(self, two_sphere_world):
        world, _, _ = two_sphere_world
        serial = Renderer(workers=1, verbose=False).render(tiny_camera(), world, seed=5)
        parallel = Renderer(workers=2, verbose=False).render(tiny_camera(), world, seed=5)
        assert np.array_equal(serial, parallel)

    def test_progress_on_stderr(self, two_sphere_world, capsys):
        world, _, _ = two_sphere_world
        renderer = Renderer(workers=1, verbose=True)
        renderer.render(tiny_camera(), world, seed=1)
        err = capsys.readouterr().err
        assert "Scanlines remaining: 3" in err
        assert "Done in" in err
        assert renderer.last_render_time >= 0

    def test_pool_progress_starts_with_full_count(self, two_sphere_world, capsys):
        world, _, _ = two_sphere_world
        Renderer(workers=2, verbose=True).render(tiny_camera(), world, seed=1)
        err = capsys.readouterr().err
        assert "Scanlines remaining: 3" in err
        assert "Scanlines remaining: 0" in err

    def test_quiet(self, two_sphere_world, capsys):
        world, _, _ = two_sphere_world
        Renderer(workers=1, verbose=False).render(tiny_camera(), world, seed=1)
        assert capsys.readouterr().err == ""
