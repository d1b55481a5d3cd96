from pathtracer.renderer.raytracer import Renderer, ray_color, pixel_color, pixel_rng
from pathtracer.renderer.image_io import save_image, write_ppm, write_raster
from pathtracer.renderer.tone_mapping import to_bytes, linear_to_gamma

__all__ = ["Renderer", "ray_color", "pixel_color", "pixel_rng",
           "save_image", "write_ppm", "write_raster", "to_bytes", "linear_to_gamma"]
