"""
Runtime settings: dataclass defaults, overridden by an optional YAML file,
overridden by command-line flags.
"""
import argparse
import math
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

import yaml

from thermcam.errors import ConfigError
from thermcam.palette import PALETTES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _coerce(name, value, kind):
    """Convert one YAML value to the type of the matching Settings field."""
    if kind is bool:
        if isinstance(value, bool):
            return value
    elif isinstance(value, bool):
        pass  # YAML true/false is never a number or a name
    elif kind is int:
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value, 0)
            except ValueError:
                pass
    elif kind is float:
        try:
            number = float(value) if isinstance(value, (int, float, str)) else None
        except ValueError:
            number = None
        # NaN would slip past the min < max check
        if number is not None and math.isfinite(number):
            return number
    elif kind is str:
        if isinstance(value, str):
            return value.upper() if name == "log_level" else value
    raise ConfigError(f"config key {name!r} expects {kind.__name__}, got {value!r}")


@dataclass(frozen=True)
class Settings:
    period_ms: int = 100  # sample/render period
    t_min: float = 26.0
    t_max: float = 32.0
    width: int = 360  # upscaled frame width in pixels
    mock: bool = False
    palette: str = "hue"
    palette_size: int = 1024
    host: str = "0.0.0.0"
    port: int = 12345
    address: int = 0x69  # AMG8833 I2C address
    log_level: str = "INFO"

    @property
    def period(self) -> float:
        return self.period_ms / 1000.0

    def validate(self) -> "Settings":
        if self.t_min >= self.t_max:
            raise ConfigError(f"minimum temperature {self.t_min} must be below maximum {self.t_max}")
        if self.period_ms <= 0:
            raise ConfigError(f"period must be positive, got {self.period_ms} ms")
        if self.width <= 0:
            raise ConfigError(f"frame width must be positive, got {self.width}")
        if self.palette_size < 2:
            raise ConfigError(f"palette needs at least 2 colors, got {self.palette_size}")
        if self.palette not in PALETTES:
            raise ConfigError(f"unknown palette {self.palette!r} (choose from {', '.join(PALETTES)})")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"unknown log level {self.log_level!r} (choose from {', '.join(LOG_LEVELS)})")
        return self

    def as_dict(self) -> dict:
        return asdict(self)


def load_config(path, base: Settings | None = None) -> Settings:
    """Apply the keys of a YAML mapping on top of ``base`` (defaults if None)."""
    base = base or Settings()
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")

    unknown = sorted(set(data) - {f.name for f in fields(Settings)})
    if unknown:
        raise ConfigError(f"unknown config keys in {path}: {', '.join(unknown)}")
    types = {f.name: f.type for f in fields(Settings)}
    values = {k: _coerce(k, v, types[k]) for k, v in data.items()}
    return replace(base, **values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="thermcam", description="AMG8833 thermal camera web server")
    parser.add_argument("-f", "--period", dest="period_ms", type=int,
                        help="milliseconds between sensor reads and rendered frames (default 100)")
    parser.add_argument("--min", dest="t_min", type=float,
                        help="temperature mapped to the coldest color (default 26)")
    parser.add_argument("--max", dest="t_max", type=float,
                        help="temperature mapped to the hottest color (default 32)")
    parser.add_argument("-s", "--size", dest="width", type=int,
                        help="frame width in pixels after upscaling (default 360)")
    parser.add_argument("--mock", action="store_true", default=None,
                        help="use synthetic readings instead of the sensor")
    parser.add_argument("--palette", choices=PALETTES, help="color palette (default hue)")
    parser.add_argument("--host", help="address to listen on (default 0.0.0.0)")
    parser.add_argument("--port", type=int, help="port to listen on (default 12345)")
    parser.add_argument("--config", type=Path, help="YAML file with settings")
    parser.add_argument("--log-level", dest="log_level",
                        choices=LOG_LEVELS)
    return parser


def parse_args(argv=None) -> Settings:
    """Resolve settings from defaults, ``--config`` and the remaining flags."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    if args.config is not None:
        settings = load_config(args.config, settings)

    overrides = {k: v for k, v in vars(args).items() if k != "config" and v is not None}
    return replace(settings, **overrides).validate()
