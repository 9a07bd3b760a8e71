"""
Frame publishing: encode the rendered image as PNG, then base64, and hold
only the newest result for the HTTP handlers.
"""
import base64
import itertools
import logging
import time
from dataclasses import dataclass

import cv2
import numpy as np

from thermcam.state import Snapshot

logger = logging.getLogger(__name__)

PNG_MIME = "image/png"


@dataclass(frozen=True)
class Frame:
    data: str = ""  # base64 PNG
    mime: str = PNG_MIME
    sequence: int = 0
    timestamp: float | None = None

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime};base64,{self.data}"

    @property
    def empty(self) -> bool:
        return self.sequence == 0


EMPTY_FRAME = Frame()


def encode_png(image: np.ndarray) -> bytes:
    """Losslessly encode an RGB or RGBA uint8 image as PNG."""
    image = np.ascontiguousarray(image, dtype=np.uint8)
    if image.ndim == 3 and image.shape[2] == 4:
        image = cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA)
    elif image.ndim == 3 and image.shape[2] == 3:
        image = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)

    ok, buffer = cv2.imencode(".png", image)
    if not ok:
        raise ValueError(f"PNG encoding failed for image of shape {image.shape}")
    return buffer.tobytes()


class FramePublisher:
    def __init__(self):
        self._slot = Snapshot(EMPTY_FRAME)
        self._counter = itertools.count(1)

    def publish(self, image) -> Frame:
        data = base64.b64encode(encode_png(image)).decode("ascii")
        frame = Frame(data=data, sequence=next(self._counter), timestamp=time.time())
        self._slot.set(frame)
        logger.debug("Published frame %d (%d base64 bytes)", frame.sequence, len(data))
        return frame

    def latest(self) -> Frame:
        return self._slot.get()
