"""
Temperature to palette index mapping.

A reading is clamped into [t_min, t_max] and scaled linearly onto the
palette, so the coldest color sits at index 0 and the hottest at
palette_size - 1.
"""
import math

import numpy as np

from thermcam.errors import ConfigError


def _check_range(t_min, t_max, palette_size):
    if not t_min < t_max:
        raise ConfigError(f"minimum temperature {t_min} must be below maximum {t_max}")
    if palette_size < 1:
        raise ConfigError(f"palette size must be positive, got {palette_size}")


def color_index(temp: float, t_min: float, t_max: float, palette_size: int) -> int:
    _check_range(t_min, t_max, palette_size)
    top = palette_size - 1

    # NaN compares false everywhere; treat it as the cold end
    if math.isnan(temp) or temp < t_min:
        return 0
    if temp >= t_max:
        return top
    return min(int(math.floor((temp - t_min) * top / (t_max - t_min))), top)


def color_indices(temps, t_min: float, t_max: float, palette_size: int) -> np.ndarray:
    """Vectorized color_index: same shape as ``temps``, dtype intp."""
    _check_range(t_min, t_max, palette_size)
    top = palette_size - 1

    temps = np.asarray(temps, dtype=np.float64)
    temps = np.nan_to_num(temps, nan=t_min, posinf=t_max, neginf=t_min)
    clipped = np.clip(temps, t_min, t_max)
    idx = np.floor((clipped - t_min) * top / (t_max - t_min)).astype(np.intp)
    idx = np.where(clipped >= t_max, top, idx)
    return np.clip(idx, 0, top).astype(np.intp)
