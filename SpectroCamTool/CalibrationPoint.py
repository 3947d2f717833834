### CalibrationPoint Class ###
# File : CalibrationPoint.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class CalibrationPoint(BaseModel):
    """
    A confirmed correspondence between a pixel column and a known
    monochromatic wavelength (e.g. a laser line or a lamp emission line).

    Attributes
    ----------
    pixel : float
        Column position of the spectral line, in pixels.  Must be >= 0.
    wavelength : float
        Known wavelength of the line in nanometres.  Must be > 0.
    physical_measurement : float or None
        Optional free-form measurement recorded alongside the point
        (e.g. a ruler reading).  Carried through snapshots untouched.
    """
    model_config = ConfigDict(frozen=True)

    pixel: float = Field(..., ge=0, description="Column position [px]")
    wavelength: float = Field(..., gt=0, description="Wavelength [nm]")
    physical_measurement: Optional[float] = None
