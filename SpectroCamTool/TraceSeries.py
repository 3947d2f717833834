from pydantic import BaseModel, Field
from typing import List
import numpy as np


class TraceSeries(BaseModel):
    """
    Intensity of one wavelength over time.

    The series only grows: ``append()`` adds a sample at the end and
    refuses timestamps that go back in time.  Starting a new trace session
    means creating a new series.

    Attributes
    ----------
    wavelength : float
        Traced wavelength [nm].
    timestamps : list of float
        Sample times [s], in acquisition order.
    intensities : list of float
        Sampled intensities; ``NaN`` marks an invalid sample.
    """
    wavelength: float = Field(..., gt=0)
    timestamps: List[float] = Field(default_factory=list)
    intensities: List[float] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.timestamps)

    def append(self, timestamp: float, intensity: float) -> "TraceSeries":
        if self.timestamps and timestamp < self.timestamps[-1]:
            raise ValueError(
                f"Timestamp {timestamp} precedes the last sample {self.timestamps[-1]}")
        self.timestamps.append(float(timestamp))
        self.intensities.append(float(intensity))
        return self

    def as_arrays(self):
        return (np.asarray(self.timestamps, dtype=float),
                np.asarray(self.intensities, dtype=float))
