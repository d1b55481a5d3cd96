# materials/presets.py
from pathtracer.core.vector import Color
from pathtracer.materials.metal import Metal
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.dielectric import Dielectric


class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Color(0.8, 0.6, 0.2), fuzz=1.0)

    @staticmethod
    def mirror() -> Metal:
        return Metal(Color(0.7, 0.6, 0.5), fuzz=0.0)


class DielectricPresets:
    """Predefined dielectric materials with common refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.50)

    @staticmethod
    def air_bubble() -> Dielectric:
        # Air inside glass: ratio of air's index over the enclosing glass.
        return Dielectric(1.00 / 1.50)


class LambertianPresets:
    """Predefined diffuse materials."""

    @staticmethod
    def ground() -> Lambertian:
        return Lambertian(Color(0.8, 0.8, 0.0))

    @staticmethod
    def gray_ground() -> Lambertian:
        return Lambertian(Color(0.5, 0.5, 0.5))

    @staticmethod
    def blue() -> Lambertian:
        return Lambertian(Color(0.1, 0.2, 0.5))

    @staticmethod
    def brown() -> Lambertian:
        return Lambertian(Color(0.4, 0.2, 0.1))
