from pydantic import BaseModel, Field, model_validator
from typing import Optional


class SpectrographConfig(BaseModel):
    """
    Configuration for ``SpectrographBuilder`` and ``SpectrumAverager``.

    Parameters
    ----------
    grid_step : float or None, optional
        Spacing of the output wavelength grid [nm].  ``None`` uses one bin
        per profile pixel.  Default is ``None``.
    n_bins : int or None, optional
        Fixed number of output bins.  Mutually exclusive with
        *grid_step*.  Default is ``None``.
    epsilon : float, optional
        Reference intensities below this value make a relative bin
        invalid.  Must be > 0.  Default is ``1e-6``.
    average_frames : int, optional
        Number of consecutive spectra averaged into one published
        spectrum.  Default is ``1`` (no averaging).
    """
    grid_step: Optional[float] = Field(default=None, gt=0)
    n_bins: Optional[int] = Field(default=None, ge=2)
    epsilon: float = Field(default=1e-6, gt=0)
    average_frames: int = Field(default=1, ge=1, le=100)

    @model_validator(mode="after")
    def validate_grid(self):
        if self.grid_step is not None and self.n_bins is not None:
            raise ValueError("Set either grid_step or n_bins, not both")
        return self
