"""
Periodic sampling and rendering.

One thread copies sensor readings into the grid slot, another renders the
current grid and publishes it. HTTP handlers only ever read the published
frame, so a slow render makes the image stale but never blocks a request.
"""
import logging
import threading

import numpy as np

from thermcam.publish import FramePublisher
from thermcam.render import render
from thermcam.state import Snapshot

logger = logging.getLogger(__name__)


class ThermalStreamer:
    def __init__(self, sampler, palette, settings):
        self.sampler = sampler
        self.palette = palette
        self.settings = settings
        self.publisher = FramePublisher()
        self.grid = Snapshot()

        self._stop = threading.Event()
        self._start_lock = threading.Lock()
        self._threads = []

    @property
    def running(self) -> bool:
        return any(t.is_alive() for t in self._threads)

    def start(self) -> bool:
        """Start the sampling and render loops once. Returns False if already started."""
        with self._start_lock:
            if self._threads:
                return False
            self._stop.clear()
            self._threads = [
                threading.Thread(target=self._loop, args=(self.step_sample,),
                                 name="thermcam-sampler", daemon=True),
                threading.Thread(target=self._loop, args=(self.step_render,),
                                 name="thermcam-render", daemon=True),
            ]
            for t in self._threads:
                t.start()
        logger.info("Streaming every %d ms (%s mode)", self.settings.period_ms, self.sampler.mode)
        return True

    def stop(self, timeout=None):
        self._stop.set()
        with self._start_lock:
            threads, self._threads = self._threads, []
        for t in threads:
            t.join(timeout)

    def _loop(self, step):
        while not self._stop.is_set():
            try:
                step()
            except Exception:
                # Keep the last good grid/frame and try again next tick
                logger.exception("%s tick failed", threading.current_thread().name)
            self._stop.wait(self.settings.period)

    def step_sample(self):
        grid = tuple(self.sampler.sample())
        self.grid.set(grid)
        return grid

    def step_render(self):
        grid = self.grid.get()
        if grid is None:
            return None
        s = self.settings
        image = render(grid, self.palette, s.t_min, s.t_max, s.width)
        return self.publisher.publish(image)

    def latest(self):
        return self.publisher.latest()

    def status(self) -> dict:
        s = self.settings
        frame = self.publisher.latest()
        grid = self.grid.get()
        status = {
            "mode": self.sampler.mode,
            "running": self.running,
            "frame": frame.sequence,
            "timestamp": frame.timestamp,
            "range": [s.t_min, s.t_max],
            "period_ms": s.period_ms,
            "min": None,
            "max": None,
            "mean": None,
        }
        if grid is not None:
            temps = np.asarray(grid, dtype=np.float64)
            temps = temps[np.isfinite(temps)]
            # Non-finite readings are left out; JSON has no NaN
            if temps.size:
                status.update(min=float(np.min(temps)), max=float(np.max(temps)),
                              mean=float(np.mean(temps)))
        return status
