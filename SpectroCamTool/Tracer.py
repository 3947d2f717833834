### Tracer Class ###
# Date : 10/18/2026
# File : Tracer.py

import logging
import math
import threading
import time
from typing import Callable, Dict, Optional

import numpy as np

from .Spectrum import Spectrum
from .TraceSeries import TraceSeries
from .TracerConfig import TracerConfig

logger = logging.getLogger(__name__)


def intensity_at(spectrum: Spectrum, wavelength: float) -> float:
    """
    Read the intensity of *spectrum* at *wavelength*.

    Values between grid points are interpolated linearly from the two
    nearest bins; a wavelength that falls exactly on a grid point returns
    that bin's value unchanged.

    Returns
    -------
    float
        The intensity, or ``NaN`` if *wavelength* is outside the spectrum
        or touches an invalid bin.
    """
    grid = spectrum.wavelengths
    if not math.isfinite(wavelength) or wavelength < grid[0] or wavelength > grid[-1]:
        logger.debug("Wavelength %.3f nm outside spectrum %.3f-%.3f nm",
                     wavelength, grid[0], grid[-1])
        return float("nan")

    upper = int(np.searchsorted(grid, wavelength, side="left"))
    if grid[upper] == wavelength:
        if not spectrum.valid[upper]:
            return float("nan")
        return float(spectrum.intensities[upper])

    lower = upper - 1
    if not (spectrum.valid[lower] and spectrum.valid[upper]):
        return float("nan")
    w1, w2 = grid[lower], grid[upper]
    i1, i2 = spectrum.intensities[lower], spectrum.intensities[upper]
    t = (wavelength - w1) / (w2 - w1)
    return float(i1 + (i2 - i1) * t)


def sample(series: TraceSeries, spectrum: Spectrum, timestamp: float,
           wavelength: Optional[float] = None) -> TraceSeries:
    """
    Append the intensity of *spectrum* at *wavelength* to *series*.

    An out-of-range wavelength records ``NaN``; the series keeps growing.
    *wavelength* defaults to the series' own wavelength.
    """
    if wavelength is None:
        wavelength = series.wavelength
    elif wavelength != series.wavelength:
        raise ValueError(
            f"Series traces {series.wavelength} nm, asked to sample {wavelength} nm")
    return series.append(timestamp, intensity_at(spectrum, wavelength))


class Tracer(object):
    """
    Follows the intensity of several wavelengths across successive spectra.

    Every spectrum passed to ``update()`` refreshes the current reading of
    each traced wavelength.  While a session is recording, the readings
    are also appended to one ``TraceSeries`` per wavelength, timestamped
    relative to the session start.  Spectra that carry an acquisition time
    (e.g. the camera frame timestamp) are timed on that time base instead:
    the first stamped sample of a session marks time zero.

    ``take_reference()`` stores the current readings so that later
    readings can be reported relative to them (e.g. absorbance over time).

    Parameters
    ----------
    config : TracerConfig or None, optional
        Initial wavelengths and epsilon.
    clock : callable, optional
        Time source in seconds.  Default is ``time.monotonic``.
    """

    def __init__(self, config: Optional[TracerConfig] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.config = config or TracerConfig()
        self._clock = clock
        self._lock = threading.Lock()
        self._wavelengths = list(self.config.wavelengths)
        self._current: Dict[float, float] = {w: float("nan") for w in self._wavelengths}
        self._reference: Dict[float, float] = {w: float("nan") for w in self._wavelengths}
        self._series: Dict[float, TraceSeries] = {}
        self._start: Optional[float] = None
        self._stamped = False
        self.recording = False

    @property
    def wavelengths(self):
        return list(self._wavelengths)

    @property
    def series(self) -> Dict[float, TraceSeries]:
        with self._lock:
            return dict(self._series)

    def start_session(self):
        """
        Start recording.  Any previously recorded series are discarded and
        the reference is re-taken from the current readings.
        """
        with self._lock:
            self._restart()
        logger.info("Trace session started for %s nm", self._wavelengths)

    def stop_session(self):
        with self._lock:
            self.recording = False

    def add_wavelength(self, wavelength: float):
        """
        Trace another wavelength.  A running session is restarted so that
        all series share one time axis.
        """
        if wavelength <= 0:
            raise ValueError("Traced wavelengths must be > 0")
        with self._lock:
            if wavelength in self._current:
                return
            self._wavelengths = sorted(self._wavelengths + [wavelength])
            self._current[wavelength] = float("nan")
            self._reference[wavelength] = float("nan")
            if self.recording:
                self._restart()

    def remove_wavelength(self, wavelength: float):
        with self._lock:
            self._wavelengths.remove(wavelength)
            self._current.pop(wavelength, None)
            self._reference.pop(wavelength, None)
            self._series.pop(wavelength, None)

    def take_reference(self):
        with self._lock:
            self._reference = dict(self._current)

    def update(self, spectrum: Spectrum, timestamp: Optional[float] = None) -> Dict[float, float]:
        """
        Read every traced wavelength from *spectrum*.

        Parameters
        ----------
        spectrum : Spectrum
            Freshly built spectrum.
        timestamp : float or None, optional
            Acquisition time [s] on the source's own time base.  ``None``
            reads the clock.  Within one session either every update
            carries a timestamp or none does.

        Returns
        -------
        dict
            Current reading per wavelength.
        """
        stamped = timestamp is not None
        if not stamped:
            timestamp = self._clock()
        with self._lock:
            for wavelength in self._wavelengths:
                self._current[wavelength] = intensity_at(spectrum, wavelength)
            if self.recording:
                if stamped and not self._stamped:
                    self._start = timestamp
                    self._stamped = True
                elapsed = max(timestamp - self._start, 0.0)
                for wavelength in self._wavelengths:
                    self._series[wavelength].append(elapsed, self._current[wavelength])
            return dict(self._current)

    def current(self, wavelength: float) -> float:
        with self._lock:
            return self._current[wavelength]

    def current_relative(self, wavelength: float) -> float:
        with self._lock:
            return self._ratio(self._current[wavelength], self._reference[wavelength])

    def relative_series(self, wavelength: float) -> np.ndarray:
        """
        Recorded readings of *wavelength* divided by its reference.
        """
        with self._lock:
            reference = self._reference[wavelength]
            values = list(self._series[wavelength].intensities) \
                if wavelength in self._series else []
        return np.array([self._ratio(v, reference) for v in values], dtype=float)

    def _ratio(self, value, reference):
        if not (math.isfinite(reference) and reference >= self.config.epsilon):
            return float("nan")
        return value / reference

    def _restart(self):
        self._reference = dict(self._current)
        self._series = {w: TraceSeries(wavelength=w) for w in self._wavelengths}
        self._start = self._clock()
        self._stamped = False
        self.recording = True
