from pathtracer.core.vector import Vector3, Point3, Color
from pathtracer.core.ray import Ray
from pathtracer.core.interval import Interval, EMPTY, UNIVERSE

__all__ = ["Vector3", "Point3", "Color", "Ray", "Interval", "EMPTY", "UNIVERSE"]
