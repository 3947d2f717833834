from typing import List, Optional
import numpy as np
from .Spectrum import Spectrum


class SpectrumAverager(object):
    """
    Averages consecutive spectra bin by bin.

    Spectra are collected until ``count`` of them share one grid; their
    mean is then returned and collection starts over.  A spectrum on a
    different grid (e.g. after a re-calibration) discards what has been
    collected so far.

    Parameters
    ----------
    count : int
        Number of spectra per average.  ``1`` passes spectra through.
    """

    def __init__(self, count: int = 1):
        if count < 1:
            raise ValueError("count must be >= 1")
        self.count = count
        self._pending: List[Spectrum] = []

    def add(self, spectrum: Spectrum) -> Optional[Spectrum]:
        """
        Add *spectrum*; return the average once ``count`` are collected.
        """
        if self.count == 1:
            return spectrum
        if self._pending and not (self._pending[0].same_grid(spectrum)
                                  and self._pending[0].mode == spectrum.mode):
            self._pending = []
        self._pending.append(spectrum)
        if len(self._pending) < self.count:
            return None

        intensities = np.mean([s.intensities for s in self._pending], axis=0)
        valid = np.logical_and.reduce([s.valid for s in self._pending])
        first = self._pending[0]
        self._pending = []
        return Spectrum(wavelengths=first.wavelengths,
                        intensities=np.where(valid, intensities, np.nan),
                        valid=valid,
                        mode=first.mode)

    def reset(self):
        self._pending = []
