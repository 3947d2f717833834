from .CalibrationModel import CalibrationModel
from typing import Literal
import numpy as np


class PolynomialModel(CalibrationModel):
    """
    Low-order polynomial dispersion.

    ``parameters`` are the polynomial coefficients, highest power first
    (the ``np.polyval`` convention), so ``(a, b, c)`` means
    ``a * p**2 + b * p + c``.  Monotonicity is not guaranteed by the
    formula; ``SpectrographBuilder`` checks it over the used pixel range.
    """
    kind: Literal["polynomial"] = "polynomial"

    @property
    def degree(self) -> int:
        return self.n_parameters - 1

    def wavelength(self, pixels) -> np.ndarray:
        pixels = np.asarray(pixels, dtype=float)
        return np.polyval(np.asarray(self.parameters), pixels)

    def jacobian(self, pixels) -> np.ndarray:
        pixels = np.atleast_1d(np.asarray(pixels, dtype=float))
        powers = np.arange(self.degree, -1, -1)
        return pixels[:, np.newaxis] ** powers[np.newaxis, :]
