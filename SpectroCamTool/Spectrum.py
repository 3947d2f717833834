### Spectrum Class ###
# Date : 10/18/2026
# File : Spectrum.py

from pydantic import BaseModel, ConfigDict, model_validator
from typing import Literal, Optional
import numpy as np

SpectrumMode = Literal["absolute", "relative"]


class Spectrum(BaseModel):
    """
    Wavelength-indexed intensity curve produced from one frame (or from an
    average of several).

    Absolute and relative spectra share this shape.  Relative spectra may
    contain invalid bins, where the reference was too dark to divide by;
    those bins hold ``NaN`` and ``valid`` is ``False`` there.

    The arrays are copied and made read-only on construction so that a
    spectrum can be shared between threads once published.

    Attributes
    ----------
    wavelengths : np.ndarray
        Strictly increasing wavelength grid [nm].
    intensities : np.ndarray
        Intensity (absolute) or intensity ratio (relative) per bin.
    valid : np.ndarray or None
        Boolean mask of usable bins.  ``None`` on input means every bin
        with a finite intensity is valid.
    mode : {'absolute', 'relative'}
        How ``intensities`` should be read.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    wavelengths: np.ndarray
    intensities: np.ndarray
    valid: Optional[np.ndarray] = None
    mode: SpectrumMode = "absolute"

    @model_validator(mode="before")
    @classmethod
    def coerce_arrays(cls, data):
        if isinstance(data, dict):
            data = dict(data)
            wavelengths = np.array(data.get("wavelengths"), dtype=float)
            intensities = np.array(data.get("intensities"), dtype=float)
            valid = data.get("valid")
            if valid is None:
                valid = np.isfinite(intensities)
            valid = np.array(valid, dtype=bool)
            for array in (wavelengths, intensities, valid):
                array.flags.writeable = False
            data.update(wavelengths=wavelengths, intensities=intensities, valid=valid)
        return data

    @model_validator(mode="after")
    def validate_grid(self):
        w = self.wavelengths
        if w.ndim != 1 or w.size < 2:
            raise ValueError("A spectrum needs a 1-D grid of at least two wavelengths")
        if self.intensities.shape != w.shape or self.valid.shape != w.shape:
            raise ValueError(
                f"Shape mismatch: wavelengths {w.shape}, intensities "
                f"{self.intensities.shape}, valid {self.valid.shape}")
        if not np.all(np.isfinite(w)) or not np.all(np.diff(w) > 0):
            raise ValueError("Spectrum wavelengths must be finite and strictly increasing")
        if not np.all(np.isfinite(self.intensities[self.valid])):
            raise ValueError("Valid spectrum bins must hold finite intensities")
        return self

    def __eq__(self, other) -> bool:
        """
        Same mode, same grid, same valid bins, and equal intensities on
        the valid bins.  Values of invalid bins are ignored.
        """
        if not isinstance(other, Spectrum):
            return NotImplemented
        return (self.mode == other.mode
                and self.same_grid(other)
                and np.array_equal(self.valid, other.valid)
                and np.array_equal(self.intensities[self.valid],
                                   other.intensities[other.valid]))

    def __hash__(self) -> int:
        # + 0.0 folds -0.0 into 0.0 so that equal spectra hash alike
        values = np.where(self.valid, self.intensities, 0.0) + 0.0
        return hash((self.mode, (self.wavelengths + 0.0).tobytes(),
                     self.valid.tobytes(), values.tobytes()))

    def __len__(self) -> int:
        return int(self.wavelengths.size)

    @property
    def start(self) -> float:
        return float(self.wavelengths[0])

    @property
    def stop(self) -> float:
        return float(self.wavelengths[-1])

    def same_grid(self, other: "Spectrum") -> bool:
        """
        ``True`` if *other* is sampled at exactly the same wavelengths.
        """
        return (self.wavelengths.shape == other.wavelengths.shape
                and np.array_equal(self.wavelengths, other.wavelengths))

    def resample(self, wavelengths) -> "Spectrum":
        """
        Linearly interpolate this spectrum onto another grid.

        Grid points outside ``[start, stop]`` and points whose neighbouring
        bins are invalid become invalid (``NaN``).
        """
        grid = np.asarray(wavelengths, dtype=float)
        # Invalid bins may hold NaN, which np.interp would spread
        filled = np.where(self.valid, self.intensities, 0.0)
        values = np.interp(grid, self.wavelengths, filled)
        usable = np.interp(grid, self.wavelengths, self.valid.astype(float)) == 1.0
        usable &= (grid >= self.start) & (grid <= self.stop)
        values = np.where(usable, values, np.nan)
        return Spectrum(wavelengths=grid, intensities=values, valid=usable,
                        mode=self.mode)
