# camera/camera.py
import math
from pathtracer.core.vector import Vector3, Point3
from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians, random_in_unit_disk


class Camera:
    """
    Thin-lens camera. The public attributes are plain configuration; call
    initialize() (the renderer does) after changing any of them to rebuild
    the viewport and lens geometry.
    """
    def __init__(self,
                 aspect_ratio: float = 1.0,
                 image_width: int = 100,
                 samples_per_pixel: int = 10,
                 max_depth: int = 10,
                 vfov: float = 90.0,
                 lookfrom: Point3 = None,
                 lookat: Point3 = None,
                 vup: Vector3 = None,
                 defocus_angle: float = 0.0,
                 focus_dist: float = 10.0):
        self.aspect_ratio = aspect_ratio            # Ratio of image width over height
        self.image_width = image_width              # Rendered image width in pixels
        self.samples_per_pixel = samples_per_pixel  # Random samples for each pixel
        self.max_depth = max_depth                  # Maximum number of ray bounces
        self.vfov = vfov                            # Vertical view angle in degrees
        self.lookfrom = lookfrom if lookfrom is not None else Point3(0, 0, 0)
        self.lookat = lookat if lookat is not None else Point3(0, 0, -1)
        self.vup = vup if vup is not None else Vector3(0, 1, 0)
        self.defocus_angle = defocus_angle          # Variation angle of rays through each pixel
        self.focus_dist = focus_dist                # Distance from lookfrom to the plane of perfect focus
        self.initialize()

    def initialize(self):
        """
        Recomputes the derived viewport, basis and defocus disk.

        Raises:
            ValueError: If aspect_ratio, image_width or samples_per_pixel is not
                positive.
        """
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.image_width < 1:
            raise ValueError(f"image_width must be at least 1, got {self.image_width}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")

        self.image_height = max(1, int(self.image_width / self.aspect_ratio))
        self.pixel_sample_scale = 1.0 / self.samples_per_pixel

        self.center = self.lookfrom

        # Determine viewport dimensions
        theta = degrees_to_radians(self.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h * self.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Orthonormal camera basis
        self.w = (self.lookfrom - self.lookat).normalize()
        self.u = self.vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Vectors across the horizontal and down the vertical viewport edges
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        # Horizontal and vertical delta vectors from pixel to pixel
        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (self.center
                               - self.w * self.focus_dist
                               - viewport_u / 2
                               - viewport_v / 2)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        # Defocus disk basis vectors
        self.defocus_radius = self.focus_dist * math.tan(degrees_to_radians(self.defocus_angle / 2))
        self.defocus_disk_u = self.u * self.defocus_radius
        self.defocus_disk_v = self.v * self.defocus_radius

    def get_ray(self, i: int, j: int, rng, jitter: bool = True) -> Ray:
        """
        Ray from the defocus disk (or the camera center) to a random point
        inside the square around pixel (i, j).
        """
        if jitter:
            offset_x = rng.random() - 0.5
            offset_y = rng.random() - 0.5
        else:
            offset_x = offset_y = 0.0

        pixel_sample = (self.pixel00_loc
                        + self.pixel_delta_u * (i + offset_x)
                        + self.pixel_delta_v * (j + offset_y))

        ray_origin = self.center if self.defocus_angle <= 0 else self.defocus_disk_sample(rng)
        ray_direction = pixel_sample - ray_origin

        return Ray(ray_origin, ray_direction)

    def defocus_disk_sample(self, rng) -> Point3:
        p = random_in_unit_disk(rng)
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y
