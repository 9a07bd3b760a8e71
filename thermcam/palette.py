"""
Palette tables: an ordered run of RGB colors from cold to hot, built once at
startup and indexed by the color mapper.
"""
import cv2
import numpy as np

from thermcam.errors import ConfigError

# OpenCV colormaps usable as palettes, resampled to the requested length
_COLORMAPS = {
    "jet": cv2.COLORMAP_JET,
    "inferno": cv2.COLORMAP_INFERNO,
}

PALETTES = ("hue",) + tuple(_COLORMAPS)


def _hue_ramp(count):
    # Blue (240 deg) down to red (0 deg) at full saturation and value.
    # Float HSV in OpenCV takes hue in degrees and returns RGB in [0, 1].
    hsv = np.ones((1, count, 3), dtype=np.float32)
    hsv[0, :, 0] = np.linspace(240.0, 0.0, count, dtype=np.float32)
    rgb = cv2.cvtColor(hsv, cv2.COLOR_HSV2RGB)[0]
    return np.clip(np.rint(rgb * 255.0), 0, 255).astype(np.uint8)


def _colormap_ramp(colormap, count):
    ramp = np.arange(256, dtype=np.uint8).reshape(1, 256)
    bgr = cv2.applyColorMap(ramp, colormap)[0]
    rgb = bgr[:, ::-1].astype(np.float64)

    # Sample the 256-entry map at ``count`` evenly spaced points
    positions = np.linspace(0.0, 255.0, count)
    steps = np.arange(256)
    channels = [np.interp(positions, steps, rgb[:, c]) for c in range(3)]
    return np.rint(np.stack(channels, axis=-1)).astype(np.uint8)


def build_palette(count=1024, name="hue"):
    """Return a read-only ``(count, 3)`` uint8 array of RGB colors, coldest first."""
    if count < 2:
        raise ConfigError(f"palette needs at least 2 colors, got {count}")
    if name == "hue":
        colors = _hue_ramp(count)
    elif name in _COLORMAPS:
        colors = _colormap_ramp(_COLORMAPS[name], count)
    else:
        raise ConfigError(f"unknown palette {name!r} (choose from {', '.join(PALETTES)})")

    colors.flags.writeable = False
    return colors
