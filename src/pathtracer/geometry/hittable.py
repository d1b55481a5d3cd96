# geometry/hittable.py
from typing import Optional
from pathtracer.core.vector import Vector3, Point3
from pathtracer.core.ray import Ray
from pathtracer.core.interval import Interval


class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("p", "normal", "t", "front_face", "material")

    def __init__(self, p: Point3 = None, normal: Vector3 = None,
                 t: float = 0.0, front_face: bool = True, material=None):
        self.p = p                    # Intersection point
        self.normal = normal          # Unit normal, always opposing the ray
        self.t = t                    # Ray parameter at intersection
        self.front_face = front_face  # Whether the hit was on the outward side
        self.material = material

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        outward_normal is assumed to have unit length.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")
