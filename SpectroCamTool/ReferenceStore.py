import logging
import threading
from typing import Optional
from .Spectrum import Spectrum

logger = logging.getLogger(__name__)


class ReferenceStore(object):
    """
    Single-slot holder of the current reference spectrum.

    ``capture()`` replaces the stored spectrum as a whole; there is no
    merging or averaging across captures.  Spectra are immutable, so a
    reader that obtained one from ``current()`` keeps a consistent value
    even if a new reference is captured meanwhile.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._reference: Optional[Spectrum] = None

    def capture(self, spectrum: Spectrum):
        if spectrum.mode != "absolute":
            raise ValueError("Only absolute spectra can be used as a reference")
        with self._lock:
            self._reference = spectrum
        logger.info("Reference captured (%d bins, %.1f-%.1f nm)",
                    len(spectrum), spectrum.start, spectrum.stop)

    def current(self) -> Optional[Spectrum]:
        with self._lock:
            return self._reference

    def clear(self):
        with self._lock:
            self._reference = None
