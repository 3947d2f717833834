from pydantic import BaseModel, Field, field_validator
from typing import List


class TracerConfig(BaseModel):
    """
    Configuration for ``Tracer``.

    Parameters
    ----------
    wavelengths : list of float, optional
        Wavelengths traced from the start [nm].  Default is ``[500.0]``.
    epsilon : float, optional
        Reference readings below this value give an invalid relative
        reading.  Must be > 0.  Default is ``1e-6``.
    """
    wavelengths: List[float] = Field(default_factory=lambda: [500.0])
    epsilon: float = Field(default=1e-6, gt=0)

    @field_validator("wavelengths")
    @classmethod
    def validate_wavelengths(cls, v):
        if any(w <= 0 for w in v):
            raise ValueError("Traced wavelengths must be > 0")
        return sorted(set(v))
