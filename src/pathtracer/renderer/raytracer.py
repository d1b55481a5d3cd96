# renderer/raytracer.py
import math
import os
import random
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Optional

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import Hittable

# Lower bound on accepted hits so bounced rays don't re-hit their own surface.
SHADOW_ACNE_EPSILON = 0.001

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


def background(ray: Ray) -> Color:
    """Vertical white to sky-blue gradient."""
    unit_direction = ray.direction.normalize()
    a = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - a) + SKY_BLUE * a


def ray_color(ray: Ray, depth: int, world: Hittable, rng) -> Color:
    """
    Recursive radiance estimate along a ray.
    """
    # Light-gathering budget exhausted.
    if depth <= 0:
        return BLACK

    rec = world.hit(ray, Interval(SHADOW_ACNE_EPSILON, math.inf))
    if rec is None:
        return background(ray)

    result = rec.material.scatter(ray, rec, rng)
    if result is None:
        return BLACK
    scattered, attenuation = result
    return attenuation * ray_color(scattered, depth - 1, world, rng)


def pixel_rng(entropy: int, i: int, j: int) -> random.Random:
    """
    Independent generator for pixel (i, j). The stream only depends on the
    render entropy and the pixel coordinates, so the image does not change
    with the number of workers or the order rows finish in.
    """
    seed_seq = np.random.SeedSequence(entropy, spawn_key=(j, i))
    hi, lo = seed_seq.generate_state(2, dtype=np.uint32)
    return random.Random((int(hi) << 32) | int(lo))


def pixel_color(camera: Camera, world: Hittable, i: int, j: int, rng) -> Color:
    """Monte Carlo average of samples_per_pixel jittered rays."""
    color = Color(0.0, 0.0, 0.0)
    for _ in range(camera.samples_per_pixel):
        ray = camera.get_ray(i, j, rng)
        color = color + ray_color(ray, camera.max_depth, world, rng)
    return color * camera.pixel_sample_scale


def render_row(camera: Camera, world: Hittable, entropy: int, j: int) -> np.ndarray:
    """Renders scanline j into a (image_width, 3) array of linear colors."""
    row = np.empty((camera.image_width, 3), dtype=np.float64)
    for i in range(camera.image_width):
        c = pixel_color(camera, world, i, j, pixel_rng(entropy, i, j))
        row[i] = (c.x, c.y, c.z)
    return row


# Per-process render state, installed once by the pool initializer so the
# scene isn't pickled again for every scanline.
_worker_state = None


def _init_worker(camera: Camera, world: Hittable, entropy: int):
    global _worker_state
    _worker_state = (camera, world, entropy)


def _render_row_task(j: int):
    camera, world, entropy = _worker_state
    return j, render_row(camera, world, entropy, j)


class Renderer:
    """
    CPU path tracer. Scanlines are independent units of work handed to a
    process pool; each pixel owns its random generator, and the scene is
    read-only for the whole render.
    """
    def __init__(self, workers: Optional[int] = None, verbose: bool = True):
        if workers is None:
            workers = os.cpu_count() or 1
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers
        self.verbose = verbose
        self.last_render_time = None
        self.last_entropy = None

    def _report(self, message: str, end: str = "\n"):
        if self.verbose:
            print(message, end=end, file=sys.stderr, flush=True)

    def render(self, camera: Camera, world: Hittable, seed: Optional[int] = None) -> np.ndarray:
        """
        Renders the world and returns an (image_height, image_width, 3)
        float64 array of linear colors in row-major order. Passing the
        same seed twice gives bit-identical images.
        """
        camera.initialize()

        # A fresh SeedSequence draws its entropy from the OS.
        entropy = seed if seed is not None else np.random.SeedSequence().entropy
        self.last_entropy = entropy

        height, width = camera.image_height, camera.image_width
        image = np.zeros((height, width, 3), dtype=np.float64)

        start_time = time.perf_counter()
        self._report(f"Rendering {width}x{height}, {camera.samples_per_pixel} samples, "
                     f"depth {camera.max_depth}, {self.workers} worker(s)")

        remaining = height
        if self.workers == 1:
            for j in range(height):
                self._report(f"\rScanlines remaining: {remaining} ", end="")
                image[j] = render_row(camera, world, entropy, j)
                remaining -= 1
        else:
            with ProcessPoolExecutor(max_workers=self.workers,
                                     initializer=_init_worker,
                                     initargs=(camera, world, entropy)) as executor:
                futures = [executor.submit(_render_row_task, j) for j in range(height)]
                self._report(f"\rScanlines remaining: {remaining} ", end="")
                for future in as_completed(futures):
                    j, row = future.result()
                    image[j] = row
                    remaining -= 1
                    self._report(f"\rScanlines remaining: {remaining} ", end="")

        self.last_render_time = time.perf_counter() - start_time
        self._report(f"\rDone in {self.last_render_time:.2f}s.               ")
        return image
