"""
Temperature samplers. Both variants return 64 readings in degrees Celsius,
row-major, as a tuple.
"""
import logging
import math

import numpy as np

from thermcam.errors import GridSizeError, SensorError
from thermcam.render import GRID_COLS, GRID_ROWS, GRID_SIZE

logger = logging.getLogger(__name__)


class Sampler:
    mode = "none"

    def sample(self) -> tuple:
        raise NotImplementedError

    def close(self):
        pass


class AMG8833Sampler(Sampler):
    """Live readings from an AMG8833 on the board's default I2C bus.

    The Adafruit driver resets the sensor, puts it in normal mode and sets
    10 FPS when constructed.
    """

    mode = "live"

    def __init__(self, address=0x69):
        try:
            import adafruit_amg88xx
            import board
            import busio

            self._i2c = busio.I2C(board.SCL, board.SDA)
            self._sensor = adafruit_amg88xx.AMG88XX(self._i2c, addr=address)
        except Exception as e:
            raise SensorError(f"cannot open AMG8833 at I2C address {address:#04x}: {e}") from e
        logger.info("Connected to AMG8833 module at %#04x", address)

    def sample(self):
        readings = tuple(float(t) for row in self._sensor.pixels for t in row)
        if len(readings) != GRID_SIZE:
            raise GridSizeError(len(readings), GRID_SIZE)
        return readings

    def close(self):
        self._i2c.deinit()


class SyntheticSampler(Sampler):
    """A warm spot circling the grid over a background at ``t_min``."""

    mode = "mock"

    def __init__(self, t_min=26.0, t_max=32.0, seed=None, noise=0.1):
        self.t_min = t_min
        self.t_max = t_max
        self.noise = noise
        self._rng = np.random.default_rng(seed)
        self._step = 0
        self._yy, self._xx = np.mgrid[0:GRID_ROWS, 0:GRID_COLS]

    def sample(self):
        t = self._step * 0.15
        self._step += 1

        # Spot centre moves on a circle inside the grid
        cx = (math.sin(t) * 0.35 + 0.5) * (GRID_COLS - 1)
        cy = (math.cos(t * 0.7) * 0.35 + 0.5) * (GRID_ROWS - 1)
        r2 = (self._xx - cx) ** 2 + (self._yy - cy) ** 2
        heat = np.exp(-r2 / (2 * 1.5 ** 2))

        span = self.t_max - self.t_min
        temps = self.t_min + heat * span * 0.9
        temps = temps + self._rng.normal(0.0, self.noise, temps.shape)
        temps = np.clip(temps, self.t_min, self.t_max)
        return tuple(float(v) for v in temps.ravel())


def open_sampler(settings) -> Sampler:
    if settings.mock:
        logger.info("Using mock data.")
        return SyntheticSampler(settings.t_min, settings.t_max)
    return AMG8833Sampler(settings.address)
