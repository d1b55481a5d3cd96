"""Monte Carlo path tracer for sphere scenes."""
from pathtracer.core.vector import Vector3, Point3, Color
from pathtracer.core.ray import Ray
from pathtracer.core.interval import Interval
from pathtracer.camera.camera import Camera
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.dielectric import Dielectric
from pathtracer.renderer.raytracer import Renderer

__version__ = "0.1.0"

__all__ = [
    "Vector3", "Point3", "Color", "Ray", "Interval", "Camera", "Sphere",
    "HittableList", "Lambertian", "Metal", "Dielectric", "Renderer",
]
