class ThermcamError(Exception):
    pass


class ConfigError(ThermcamError, ValueError):
    """Settings that cannot produce a frame (e.g. min >= max)."""


class SensorError(ThermcamError, RuntimeError):
    """The thermal sensor could not be opened or read."""


class GridSizeError(ThermcamError, ValueError):
    def __init__(self, got, expected):
        super().__init__(f"grid size mismatch: got {got} readings, expected {expected}")
        self.got = got
        self.expected = expected
