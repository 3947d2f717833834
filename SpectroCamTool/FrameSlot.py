import queue
import threading
from typing import Optional
from .Frame import Frame


class FrameSlot(object):
    """
    Single-slot channel between a camera callback and the processing
    thread.

    ``put()`` never blocks: a frame still waiting in the slot is replaced
    by the newer one (latest frame wins) and counted in ``dropped``.
    ``get()`` blocks the consumer until a frame is available.
    """

    def __init__(self):
        self._queue: "queue.Queue[Frame]" = queue.Queue(maxsize=1)
        self._put_lock = threading.Lock()
        self.dropped = 0

    def put(self, frame: Frame):
        with self._put_lock:
            try:
                self._queue.get_nowait()
                self.dropped += 1
            except queue.Empty:
                pass
            self._queue.put_nowait(frame)

    def get(self, timeout: Optional[float] = None) -> Optional[Frame]:
        """
        Take the pending frame, waiting up to *timeout* seconds.

        Returns ``None`` if no frame arrived in time.
        """
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def clear(self):
        try:
            self._queue.get_nowait()
        except queue.Empty:
            pass
