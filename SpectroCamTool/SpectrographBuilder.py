### SpectrographBuilder Class ###
# Date : 10/18/2026
# File : SpectrographBuilder.py

import logging
from typing import Optional

import numpy as np

from .CalibrationModel import CalibrationModel
from .Exceptions import MalformedFrame, MissingReference, NonMonotonicModel
from .IntensityProfile import IntensityProfile
from .Spectrum import Spectrum, SpectrumMode
from .SpectrographConfig import SpectrographConfig

logger = logging.getLogger(__name__)


class SpectrographBuilder(object):
    """
    Maps an intensity profile through a calibration model into a spectrum.

    Pixel ``p`` of the profile lands at wavelength ``f(p)``.  Because
    ``f`` is generally not linear, the ``(f(p), intensity)`` pairs are
    resampled by linear interpolation onto a regular grid spanning
    ``[f(0), f(width - 1)]`` (swapped when ``f`` decreases).

    In relative mode every bin is divided by the reference spectrum, which
    is first interpolated onto the new grid when the grids differ.  Bins
    where the reference is below ``config.epsilon`` are marked invalid
    instead of being divided.

    The build is a pure function of its inputs: the same profile, model,
    mode and reference always give an identical spectrum.

    Parameters
    ----------
    config : SpectrographConfig or None, optional
        Grid and epsilon settings.  Defaults are used when ``None``.
    """

    def __init__(self, config: Optional[SpectrographConfig] = None):
        self.config = config or SpectrographConfig()

    def build(self,
              profile: IntensityProfile,
              model: CalibrationModel,
              mode: SpectrumMode = "absolute",
              reference: Optional[Spectrum] = None) -> Spectrum:
        """
        Build a spectrum from *profile*.

        Parameters
        ----------
        profile : IntensityProfile
            Per-column intensities.
        model : CalibrationModel
            Pixel -> wavelength mapping.
        mode : {'absolute', 'relative'}, optional
            Default is ``'absolute'``.
        reference : Spectrum or None, optional
            Baseline for relative mode.

        Returns
        -------
        Spectrum

        Raises
        ------
        MissingReference
            If *mode* is ``'relative'`` and *reference* is ``None``.
        NonMonotonicModel
            If *model* is not strictly monotonic over the profile.
        MalformedFrame
            If the profile has fewer than two pixels.
        """
        if mode == "relative" and reference is None:
            raise MissingReference("Relative spectrum requested but no reference is stored")
        if mode not in ("absolute", "relative"):
            raise ValueError(f"Unsupported spectrum mode: {mode}")
        if len(profile) < 2:
            raise MalformedFrame("A profile needs at least two pixels to span a grid")

        mapped = np.asarray(model.wavelength(profile.pixels), dtype=float)
        values = profile.values
        steps = np.diff(mapped)
        if not np.all(np.isfinite(mapped)) or not (np.all(steps > 0) or np.all(steps < 0)):
            raise NonMonotonicModel(
                f"{type(model).__name__} is not strictly monotonic over "
                f"pixels 0..{len(profile) - 1}")
        if steps[0] < 0:
            mapped = mapped[::-1]
            values = values[::-1]

        grid = self.grid(mapped[0], mapped[-1], len(profile))
        absolute = Spectrum(wavelengths=grid,
                            intensities=np.interp(grid, mapped, values),
                            mode="absolute")
        if mode == "absolute":
            return absolute
        return self.relative(absolute, reference)

    def grid(self, low: float, high: float, n_pixels: int) -> np.ndarray:
        """
        Regular wavelength grid from *low* to *high*.
        """
        if self.config.grid_step is not None:
            count = int(np.floor((high - low) / self.config.grid_step + 1e-9)) + 1
            if count >= 2:
                return low + self.config.grid_step * np.arange(count)
            return np.array([low, high])
        count = self.config.n_bins if self.config.n_bins is not None else n_pixels
        return np.linspace(low, high, count)

    def relative(self, spectrum: Spectrum, reference: Optional[Spectrum]) -> Spectrum:
        """
        Divide *spectrum* by *reference* bin by bin.

        Bins where the reference is below ``epsilon``, outside the
        reference's wavelength range, or invalid in either input are
        marked invalid and hold ``NaN``.

        Raises
        ------
        MissingReference
            If *reference* is ``None``.
        """
        if reference is None:
            raise MissingReference("Relative spectrum requested but no reference is stored")
        if not spectrum.same_grid(reference):
            logger.debug("Resampling reference from %d to %d bins",
                         len(reference), len(spectrum))
            reference = reference.resample(spectrum.wavelengths)

        ref_values = reference.intensities
        usable = spectrum.valid & reference.valid
        usable &= np.nan_to_num(ref_values, nan=0.0) >= self.config.epsilon

        ratio = np.full(ref_values.shape, np.nan)
        np.divide(spectrum.intensities, ref_values, out=ratio, where=usable)
        return Spectrum(wavelengths=spectrum.wavelengths,
                        intensities=ratio,
                        valid=usable,
                        mode="relative")
