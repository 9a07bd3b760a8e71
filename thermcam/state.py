import threading


class Snapshot:
    """Latest-value slot shared between one writer and many readers.

    Values stored here must be immutable (tuples, bytes, frozen dataclasses);
    readers get the whole previous value or the whole new one.
    """

    def __init__(self, value=None):
        self._lock = threading.Lock()
        self._value = value

    def set(self, value):
        with self._lock:
            self._value = value

    def get(self):
        with self._lock:
            return self._value
