### GratingModel Class ###
# Date : 10/18/2026
# File : GratingModel.py

from .CalibrationModel import CalibrationModel
from pydantic import Field, field_validator
from typing import Literal
import numpy as np


class GratingModel(CalibrationModel):
    """
    Dispersion of a transmission grating imaged by a camera.

    A ray leaving the grating at diffraction angle ``theta`` satisfies
    ``sin(theta) = wavelength / d`` (first order, normal incidence), with
    ``d`` the line spacing.  The camera looks at the grating under the
    angle ``alpha`` and projects the ray onto its sensor, which sits at a
    distance ``b`` (in sensor widths) from the grating.  Solving for the
    wavelength seen at normalised sensor position ``x = pixel / W`` gives

        wavelength = (1e6 / g) * sin(alpha - arctan((x - c) / b))

    where ``g`` is the grating constant in lines per millimetre and ``c``
    the normalised position where the optical axis meets the sensor.

    The fitted parameters are ``(alpha, b, c)``; ``g`` and ``W`` are fixed
    physical attributes.  The mapping decreases with pixel position for a
    positive ``b``.

    Attributes
    ----------
    lines_per_mm : float
        Grating constant ``g`` [lines/mm].
    sensor_pixels : int
        Sensor width ``W`` along the dispersion axis [px].
    """
    kind: Literal["grating"] = "grating"

    lines_per_mm: float = Field(..., gt=0, description="Grating constant [lines/mm]")
    sensor_pixels: int = Field(..., gt=0, description="Sensor width [px]")

    @field_validator("parameters")
    @classmethod
    def validate_length(cls, v):
        if len(v) != 3:
            raise ValueError("GratingModel takes exactly (alpha, b, c)")
        return v

    @property
    def line_spacing_nm(self) -> float:
        return 1e6 / self.lines_per_mm

    def _angles(self, pixels):
        alpha, b, c = self.parameters
        u = (np.asarray(pixels, dtype=float) / self.sensor_pixels - c) / b
        return u, alpha - np.arctan(u)

    def wavelength(self, pixels) -> np.ndarray:
        _, phi = self._angles(pixels)
        return self.line_spacing_nm * np.sin(phi)

    def pixel(self, wavelengths) -> np.ndarray:
        alpha, b, c = self.parameters
        ratio = np.asarray(wavelengths, dtype=float) / self.line_spacing_nm
        u = np.tan(alpha - np.arcsin(ratio))
        return (c + b * u) * self.sensor_pixels

    def jacobian(self, pixels) -> np.ndarray:
        pixels = np.atleast_1d(np.asarray(pixels, dtype=float))
        _, b, _ = self.parameters
        u, phi = self._angles(pixels)
        k_cos = self.line_spacing_nm * np.cos(phi)
        d_arctan = 1.0 / (1.0 + u * u)

        d_alpha = k_cos
        d_b = k_cos * d_arctan * u / b
        d_c = k_cos * d_arctan / b
        return np.column_stack([d_alpha, d_b, d_c])
