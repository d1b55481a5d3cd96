# renderer/image_io.py
import os

import numpy as np
from PIL import Image

from pathtracer.renderer.tone_mapping import to_bytes


def write_ppm(path: str, pixels: np.ndarray, binary: bool = False):
    """
    Write an (H, W, 3) uint8 array as PPM: plain-text P3 by default,
    or raw P6 when binary is set.
    """
    height, width = pixels.shape[:2]
    if binary:
        with open(path, "wb") as f:
            f.write(f"P6\n{width} {height}\n255\n".encode("ascii"))
            f.write(np.ascontiguousarray(pixels, dtype=np.uint8).tobytes())
        return

    with open(path, "w", encoding="ascii") as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for row in pixels:
            for r, g, b in row:
                f.write(f"{r} {g} {b}\n")


def write_raster(path: str, pixels: np.ndarray):
    """Write through Pillow; the format follows the file suffix (PNG, JPEG, BMP, ...)."""
    Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(path)


def check_output_path(path: str):
    """
    Raises:
        ValueError: If the suffix is not PPM and Pillow doesn't know it.
    """
    ext = os.path.splitext(path)[1].lower()
    if ext != ".ppm" and ext not in Image.registered_extensions():
        raise ValueError(f"Unsupported image format: {path}")


def save_image(path: str, image: np.ndarray, gamma: float = 1.0, binary: bool = False) -> np.ndarray:
    """
    Convert a linear color buffer to bytes and write it, picking the format
    from the file suffix. Returns the byte array that was written.

    Raises:
        ValueError: If the suffix is not PPM and Pillow doesn't know it.
    """
    check_output_path(path)
    pixels = to_bytes(image, gamma=gamma)
    if os.path.splitext(path)[1].lower() == ".ppm":
        write_ppm(path, pixels, binary=binary)
    else:
        write_raster(path, pixels)
    return pixels
