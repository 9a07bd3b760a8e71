"""AMG8833 thermal camera streamed over HTTP."""

__version__ = "0.1.0"
