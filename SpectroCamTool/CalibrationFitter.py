### CalibrationFitter Class ###
# Date : 10/18/2026
# File : CalibrationFitter.py

import logging
import threading
from typing import Iterable, Optional, Tuple

import numpy as np

from .CalibrationFitterConfig import CalibrationFitterConfig
from .CalibrationModel import CalibrationModel
from .CalibrationPoint import CalibrationPoint
from .Exceptions import FitCancelled, InsufficientPoints, NumericalInstability
from .FitResult import FitResult

logger = logging.getLogger(__name__)

MIN_POINTS = 2


class CalibrationFitter(object):
    """
    Fits a ``CalibrationModel`` to a set of calibration points by gradient
    descent.

    The loss is the sum of squared wavelength residuals.  Each iteration
    steps along the negative gradient scaled per parameter by the
    Gauss-Newton diagonal ``sum_i (df/dtheta_j)^2``, so that a slope in
    nm/px and an intercept in nm move at comparable rates.  The step length
    is chosen by a backtracking (Armijo) line search.

    A fit is a pure function of the point set and the initial guess; it
    never touches the model currently in use.  Re-fitting after points
    change always starts over from the full point set.

    Parameters
    ----------
    config : CalibrationFitterConfig or None, optional
        Step size, iteration cap and tolerance.  Defaults are used when
        ``None``.

    Examples
    --------
    >>> points = [CalibrationPoint(pixel=10, wavelength=400),
    ...           CalibrationPoint(pixel=90, wavelength=700)]
    >>> guess = LinearModel(parameters=(1.0, 0.0))
    >>> result = CalibrationFitter().fit(points, guess)
    >>> round(float(result.model.wavelength(50)), 3)
    550.0
    """

    def __init__(self, config: Optional[CalibrationFitterConfig] = None):
        self.config = config or CalibrationFitterConfig()

    def fit(self,
            points: Iterable[CalibrationPoint],
            initial_guess: CalibrationModel,
            frame_width: Optional[int] = None,
            cancel_event: Optional[threading.Event] = None) -> FitResult:
        """
        Fit *initial_guess* to *points*.

        Parameters
        ----------
        points : iterable of CalibrationPoint
            Calibration set.  At least two points are required.
        initial_guess : CalibrationModel
            Model whose parameters seed the descent.  Its formula and fixed
            attributes are kept in the result.
        frame_width : int or None, optional
            If given, every point must lie in ``[0, frame_width)``.
        cancel_event : threading.Event or None, optional
            Checked once per iteration; when set the fit is abandoned.

        Returns
        -------
        FitResult
            Best model found, its loss, whether the tolerance was met, and
            whether the line search stalled before that.

        Raises
        ------
        InsufficientPoints
            If fewer than two points are supplied.
        ValueError
            If a point lies outside ``frame_width``.
        NumericalInstability
            If an iterate has a non-finite loss or parameter.
        FitCancelled
            If *cancel_event* was set during the fit.
        """
        pixels, wavelengths = self._unpack(points, frame_width)
        cfg = self.config

        model = initial_guess
        theta = np.asarray(model.parameters, dtype=float)
        loss = self.loss(model, pixels, wavelengths)
        self._check_finite(theta, loss, 0)

        step = cfg.step_size
        converged = False
        stalled = False
        iterations = 0

        for iterations in range(1, cfg.max_iterations + 1):
            if cancel_event is not None and cancel_event.is_set():
                raise FitCancelled(f"Fit cancelled after {iterations - 1} iterations")

            residuals = model.wavelength(pixels) - wavelengths
            jac = model.jacobian(pixels)
            gradient = 2.0 * jac.T @ residuals
            curvature = 2.0 * np.sum(jac * jac, axis=0)
            if not (np.all(np.isfinite(gradient)) and np.all(np.isfinite(curvature))):
                raise NumericalInstability(
                    f"Non-finite gradient at iteration {iterations}")

            direction = -np.divide(gradient, curvature,
                                   out=np.zeros_like(gradient),
                                   where=curvature > 0)
            descent = float(gradient @ direction)

            if iterations % cfg.log_every == 0:
                logger.debug("iteration %d: loss=%.6g step=%.3g parameters=%s",
                             iterations, loss, step, theta.tolist())

            candidate, candidate_model, candidate_loss, step_taken = \
                self._line_search(model, theta, loss, direction, descent,
                                  min(step / cfg.shrink, cfg.max_step_size),
                                  pixels, wavelengths)
            if candidate is None:
                stalled = True
                break

            improvement = loss - candidate_loss
            theta, model, loss, step = candidate, candidate_model, candidate_loss, step_taken
            self._check_finite(theta, loss, iterations)

            if improvement < cfg.tolerance:
                converged = True
                break

        if converged:
            logger.info("Calibration fit converged after %d iterations (loss %.6g)",
                        iterations, loss)
        elif stalled:
            logger.warning(
                "Calibration fit stalled at iteration %d: no step lowers the loss "
                "%.6g; returning best parameters found", iterations, loss)
        else:
            logger.warning(
                "Calibration fit did not converge within %d iterations "
                "(loss %.6g); returning best parameters found", iterations, loss)

        return FitResult(model=model,
                         residual_loss=float(loss),
                         converged=converged,
                         stalled=stalled,
                         iterations=iterations)

    @staticmethod
    def loss(model: CalibrationModel, pixels: np.ndarray,
             wavelengths: np.ndarray) -> float:
        """
        Sum of squared residuals ``sum (f(p_i) - wavelength_i)^2``.
        """
        residuals = model.wavelength(pixels) - wavelengths
        return float(np.sum(residuals * residuals))

    def _line_search(self, model, theta, loss, direction, descent, step,
                     pixels, wavelengths):
        cfg = self.config
        for _ in range(cfg.max_backtracks):
            candidate = theta + step * direction
            candidate_model = model.with_parameters(candidate)
            with np.errstate(all="ignore"):
                candidate_loss = self.loss(candidate_model, pixels, wavelengths)
            if (np.isfinite(candidate_loss)
                    and candidate_loss <= loss + cfg.armijo * step * descent):
                return candidate, candidate_model, candidate_loss, step
            step *= cfg.shrink
        return None, None, None, step

    @staticmethod
    def _unpack(points, frame_width) -> Tuple[np.ndarray, np.ndarray]:
        points = list(points)
        if len(points) < MIN_POINTS:
            raise InsufficientPoints(
                f"At least {MIN_POINTS} calibration points are needed, got {len(points)}")

        pixels = np.array([p.pixel for p in points], dtype=float)
        wavelengths = np.array([p.wavelength for p in points], dtype=float)

        if frame_width is not None and np.any(pixels >= frame_width):
            raise ValueError(
                f"Calibration point outside frame width {frame_width}: "
                f"{pixels[pixels >= frame_width].tolist()}")
        return pixels, wavelengths

    @staticmethod
    def _check_finite(theta, loss, iteration):
        if not (np.isfinite(loss) and np.all(np.isfinite(theta))):
            raise NumericalInstability(
                f"Non-finite loss or parameter at iteration {iteration}: "
                f"loss={loss}, parameters={np.asarray(theta).tolist()}")
