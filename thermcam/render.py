"""
Frame rendering: 8x8 temperature grid -> colorized RGBA raster -> bicubic upscale.
"""
import cv2
import numpy as np

from thermcam.errors import ConfigError, GridSizeError
from thermcam.mapping import color_indices

GRID_ROWS = 8
GRID_COLS = 8
GRID_SIZE = GRID_ROWS * GRID_COLS


def colorize(grid, palette, t_min, t_max):
    """One RGBA pixel per sensor cell, row-major, fully opaque."""
    temps = np.asarray(grid, dtype=np.float64).ravel()
    if temps.size != GRID_SIZE:
        raise GridSizeError(temps.size, GRID_SIZE)

    idx = color_indices(temps, t_min, t_max, len(palette))
    pixels = np.empty((GRID_ROWS, GRID_COLS, 4), dtype=np.uint8)
    pixels[..., :3] = np.asarray(palette)[idx].reshape(GRID_ROWS, GRID_COLS, 3)
    pixels[..., 3] = 0xFF
    return pixels


def render(grid, palette, t_min, t_max, width):
    """Render a grid to a ``(width, width, 4)`` RGBA image.

    The sensor grid is square, so the upscaled height equals the width.
    """
    if width <= 0:
        raise ConfigError(f"frame width must be positive, got {width}")

    pixels = colorize(grid, palette, t_min, t_max)
    height = width * GRID_ROWS // GRID_COLS
    return cv2.resize(pixels, (width, height), interpolation=cv2.INTER_CUBIC)
