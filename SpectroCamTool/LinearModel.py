from .CalibrationModel import CalibrationModel
from pydantic import field_validator
from typing import Literal
import numpy as np


class LinearModel(CalibrationModel):
    """
    Straight-line dispersion, ``wavelength = slope * pixel + intercept``.

    Parameters are ``(slope, intercept)`` in nm/px and nm.

    Examples
    --------
    >>> model = LinearModel(parameters=(3.75, 362.5))
    >>> float(model.wavelength(50))
    550.0
    """
    kind: Literal["linear"] = "linear"

    @field_validator("parameters")
    @classmethod
    def validate_length(cls, v):
        if len(v) != 2:
            raise ValueError("LinearModel takes exactly (slope, intercept)")
        return v

    @property
    def slope(self) -> float:
        return self.parameters[0]

    @property
    def intercept(self) -> float:
        return self.parameters[1]

    def wavelength(self, pixels) -> np.ndarray:
        pixels = np.asarray(pixels, dtype=float)
        return self.slope * pixels + self.intercept

    def pixel(self, wavelengths) -> np.ndarray:
        wavelengths = np.asarray(wavelengths, dtype=float)
        return (wavelengths - self.intercept) / self.slope

    def jacobian(self, pixels) -> np.ndarray:
        pixels = np.atleast_1d(np.asarray(pixels, dtype=float))
        return np.column_stack([pixels, np.ones_like(pixels)])
