import random

import pytest

from pathtracer.core.vector import Color, Point3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian


class ScriptedRNG:
    """
    Generator stand-in that replays fixed values, for forcing a particular
    sample out of the rejection samplers and the Fresnel coin flip.
    """
    def __init__(self, uniforms=(), randoms=()):
        self.uniforms = list(uniforms)
        self.randoms = list(randoms)

    def uniform(self, a, b):
        return self.uniforms.pop(0)

    def random(self):
        return self.randoms.pop(0)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def scripted_rng():
    return ScriptedRNG


@pytest.fixture
def gray():
    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def two_sphere_world():
    """Small sphere sitting on a large ground sphere."""
    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    world = HittableList()
    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, ground))
    world.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5, center))
    return world, ground, center
