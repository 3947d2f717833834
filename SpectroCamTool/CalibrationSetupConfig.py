### CalibrationSetupConfig Classes ###
# Date : 10/18/2026
# File : CalibrationSetupConfig.py

from pydantic import BaseModel, Field, model_validator
from typing import Literal

# Visible range used as the default span of a fresh calibration [nm]
SMALLEST_WAVELENGTH = 380.0
LARGEST_WAVELENGTH = 750.0


class GratingSetupConfig(BaseModel):
    """
    Physical measurements of a grating spectrometer, used to seed the
    ``GratingModel`` before gradient descent.

    Pass an instance of this class to ``CalibrationModelFactory.create()``.

    Parameters
    ----------
    angle_deg : float
        Angle between the camera axis and the grating normal [deg].
        Must be in ``[0, 90)``.  Default is ``17.5``.
    distance_to_sensor_mm : float
        Distance between grating and sensor [mm].  Must be > 0.
        Default is ``1.0``.
    sensor_width_mm : float
        Physical sensor width along the dispersion axis [mm].  Must be > 0.
        Default is ``0.5``.
    lines_per_mm : float
        Grating constant [lines/mm].  Must be > 0.  Default is ``500``.
    sensor_pixels : int
        Sensor width along the dispersion axis [px].  Must be > 0.
    axis_offset : float, optional
        Normalised sensor position of the optical axis.  Default is ``0.5``
        (sensor centre).
    """
    kind: Literal["grating"] = "grating"
    angle_deg: float = Field(default=17.5, ge=0, lt=90)
    distance_to_sensor_mm: float = Field(default=1.0, gt=0)
    sensor_width_mm: float = Field(default=0.5, gt=0)
    lines_per_mm: float = Field(default=500.0, gt=0)
    sensor_pixels: int = Field(..., gt=0)
    axis_offset: float = 0.5


class LinearSetupConfig(BaseModel):
    """
    Approximate wavelengths seen at the first and last pixel column, used
    to seed a ``LinearModel``.

    Parameters
    ----------
    sensor_pixels : int
        Sensor width along the dispersion axis [px].  Must be > 1.
    first_wavelength : float, optional
        Wavelength expected at pixel ``0`` [nm].  Default is ``380``.
    last_wavelength : float, optional
        Wavelength expected at pixel ``sensor_pixels - 1`` [nm].
        Default is ``750``.
    """
    kind: Literal["linear"] = "linear"
    sensor_pixels: int = Field(..., gt=1)
    first_wavelength: float = Field(default=SMALLEST_WAVELENGTH, gt=0)
    last_wavelength: float = Field(default=LARGEST_WAVELENGTH, gt=0)

    @model_validator(mode="after")
    def validate_span(self):
        if self.first_wavelength == self.last_wavelength:
            raise ValueError("first_wavelength and last_wavelength must differ")
        return self


class PolynomialSetupConfig(LinearSetupConfig):
    """
    Seed for a ``PolynomialModel``: the linear guess of
    ``LinearSetupConfig`` with zero higher-order terms.

    Parameters
    ----------
    degree : int, optional
        Polynomial degree.  Must be in ``[1, 5]``.  Default is ``2``.
    """
    kind: Literal["polynomial"] = "polynomial"
    degree: int = Field(default=2, ge=1, le=5)
