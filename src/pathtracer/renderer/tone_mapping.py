# renderer/tone_mapping.py
import numpy as np

from pathtracer.core.interval import Interval

# Channels are clamped below 1.0 so that scaling by 256 never yields 256.
INTENSITY = Interval(0.000, 0.999)


def linear_to_gamma(linear, gamma: float = 2.0):
    """
    Apply a 1/gamma power curve to linear radiance. Negative values map to 0.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0:
        raise ValueError(f"gamma must be positive, got {gamma}")
    linear = np.maximum(np.asarray(linear, dtype=np.float64), 0.0)
    if gamma == 1.0:
        return linear
    return linear ** (1.0 / gamma)


def to_bytes(image, gamma: float = 1.0) -> np.ndarray:
    """
    Convert an (H, W, 3) array of linear colors to uint8 bytes. Each channel
    is clamped to the intensity interval and scaled by 256.
    """
    mapped = np.asarray(image, dtype=np.float64)
    if gamma != 1.0:
        mapped = linear_to_gamma(mapped, gamma)
    clamped = np.clip(mapped, INTENSITY.min, INTENSITY.max)
    return (256 * clamped).astype(np.uint8)

