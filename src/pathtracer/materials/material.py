# materials/material.py
from typing import Optional, Tuple
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord


class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    Materials are immutable once built and are shared between surfaces.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Color]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        rng is the caller's random generator; materials never touch global state.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")
