### CalibrationModel Class ###
# Date : 10/18/2026
# File : CalibrationModel.py

from pydantic import BaseModel, ConfigDict, field_validator
from scipy.optimize import approx_fprime
from typing import Sequence, Tuple
import numpy as np


class CalibrationModel(BaseModel):
    """
    Base container for a parametric pixel -> wavelength mapping.

    Subclasses implement ``wavelength()`` for one formula and, where the
    derivative is cheap to write down, an analytic ``jacobian()``.  The base
    class provides a finite-difference Jacobian so that a new formula only
    has to describe its forward evaluation to become fittable.

    Instances are frozen.  A fit never changes a model in place; it returns
    a new instance built with ``with_parameters()``.

    Attributes
    ----------
    kind : str
        Tag identifying the formula.  Used when a model is rebuilt from a
        snapshot.
    parameters : tuple of float
        Ordered free parameters of the formula.
    """
    model_config = ConfigDict(frozen=True)

    kind: str = "base"
    parameters: Tuple[float, ...]

    @field_validator("parameters", mode="before")
    @classmethod
    def validate_parameters(cls, v):
        values = tuple(float(x) for x in np.ravel(np.asarray(v, dtype=float)))
        if len(values) == 0:
            raise ValueError("A calibration model needs at least one parameter")
        return values

    @property
    def n_parameters(self) -> int:
        return len(self.parameters)

    def with_parameters(self, parameters: Sequence[float]) -> "CalibrationModel":
        """
        Return a copy of this model carrying *parameters*.

        The copy keeps every fixed (non-fitted) attribute of the original.
        """
        values = tuple(float(x) for x in np.ravel(np.asarray(parameters, dtype=float)))
        if len(values) != self.n_parameters:
            raise ValueError(
                f"{type(self).__name__} expects {self.n_parameters} parameters, "
                f"got {len(values)}")
        return self.model_copy(update={"parameters": values})

    def wavelength(self, pixels) -> np.ndarray:
        """
        Evaluate the mapping.

        Parameters
        ----------
        pixels : float or array_like
            Pixel column positions.

        Returns
        -------
        np.ndarray
            Wavelengths in nanometres, same shape as *pixels*.
        """
        raise NotImplementedError

    def pixel(self, wavelengths) -> np.ndarray:
        """
        Evaluate the inverse mapping (wavelength -> pixel column).
        """
        raise NotImplementedError(
            f"{type(self).__name__} does not provide an inverse mapping")

    def jacobian(self, pixels) -> np.ndarray:
        """
        Derivative of ``wavelength(pixels)`` with respect to the parameters.

        Forward finite differences are used unless a subclass overrides
        this with an analytic form.

        Returns
        -------
        np.ndarray
            Array of shape ``(len(pixels), n_parameters)``.
        """
        pixels = np.atleast_1d(np.asarray(pixels, dtype=float))
        theta = np.asarray(self.parameters, dtype=float)

        def _forward(t):
            return self.with_parameters(t).wavelength(pixels)

        jac = approx_fprime(theta, _forward)
        return np.asarray(jac, dtype=float).reshape(pixels.size, theta.size)

    def is_monotonic(self, width: int) -> bool:
        """
        ``True`` if the mapping is strictly monotonic over pixels
        ``0 .. width - 1``.
        """
        if width < 2:
            return True
        values = self.wavelength(np.arange(width, dtype=float))
        if not np.all(np.isfinite(values)):
            return False
        steps = np.diff(values)
        return bool(np.all(steps > 0) or np.all(steps < 0))
