from pydantic import BaseModel, ConfigDict, field_validator
import numpy as np


class IntensityProfile(BaseModel):
    """
    Per-column intensity of one frame along the dispersion axis.

    Attributes
    ----------
    values : np.ndarray
        1-D float array, one entry per pixel column.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    values: np.ndarray

    @field_validator("values", mode="before")
    @classmethod
    def validate_values(cls, v):
        values = np.asarray(v, dtype=float)
        if values.ndim != 1 or values.size == 0:
            raise ValueError("An intensity profile must be a non-empty 1-D array")
        return values

    def __len__(self) -> int:
        return int(self.values.size)

    @property
    def pixels(self) -> np.ndarray:
        return np.arange(self.values.size, dtype=float)
