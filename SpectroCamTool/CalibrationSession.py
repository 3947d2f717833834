### CalibrationSession Class ###
# Date : 10/18/2026
# File : CalibrationSession.py

import logging
import threading
from typing import List, Optional

from .CalibrationFitter import CalibrationFitter
from .CalibrationModel import CalibrationModel
from .CalibrationPoint import CalibrationPoint
from .Exceptions import FitCancelled, InsufficientPoints, NumericalInstability
from .FitResult import FitResult
from .SessionSnapshot import SessionSnapshot

logger = logging.getLogger(__name__)


class CalibrationSession(object):
    """
    Owns the calibration point set and the calibration model in use.

    The presentation layer adds and removes points and asks for a fit;
    the processing pipeline reads ``model``.  A new model is published by
    replacing the attribute as a whole, and only after a fit completed
    without error, so readers never see a half-updated model.

    Fits requested with ``request_fit()`` run on their own worker thread.
    Requesting a fit while one is running cancels the running one and
    starts over from the current point set; the cancelled fit publishes
    nothing.

    Parameters
    ----------
    initial_guess : CalibrationModel
        Seed model built from physical measurements
        (see ``CalibrationModelFactory``).  Every fit starts from it.
    fitter : CalibrationFitter or None, optional
        Fitter to use.  A default-configured fitter when ``None``.
    model : CalibrationModel or None, optional
        Previously fitted model to start with, e.g. from a snapshot.
    frame_width : int or None, optional
        Sensor width; points must lie inside it.
    """

    def __init__(self,
                 initial_guess: CalibrationModel,
                 fitter: Optional[CalibrationFitter] = None,
                 model: Optional[CalibrationModel] = None,
                 frame_width: Optional[int] = None):
        self.initial_guess = initial_guess
        self.fitter = fitter or CalibrationFitter()
        self.frame_width = frame_width

        self._lock = threading.Lock()
        self._points: List[CalibrationPoint] = []
        self._model = model
        self._worker: Optional[threading.Thread] = None
        self._cancel: Optional[threading.Event] = None

        self.last_result: Optional[FitResult] = None
        self.last_error: Optional[Exception] = None

    ### POINT SET ###
    @property
    def points(self) -> List[CalibrationPoint]:
        with self._lock:
            return list(self._points)

    def add_point(self, point: CalibrationPoint):
        with self._lock:
            self._points.append(point)

    def remove_point(self, point: CalibrationPoint):
        with self._lock:
            self._points.remove(point)

    def clear_points(self):
        with self._lock:
            self._points = []

    ### MODEL ###
    @property
    def model(self) -> Optional[CalibrationModel]:
        return self._model

    def discard_model(self):
        with self._lock:
            self._model = None
            self.last_result = None

    def fit(self) -> FitResult:
        """
        Fit on the calling thread and publish the result.

        Raises
        ------
        InsufficientPoints, NumericalInstability, ValueError
            As ``CalibrationFitter.fit()``; the current model is kept.
        """
        points = self.points
        try:
            result = self.fitter.fit(points, self.initial_guess,
                                     frame_width=self.frame_width)
        except (InsufficientPoints, NumericalInstability, ValueError) as e:
            self.last_error = e
            logger.warning("Calibration fit failed, keeping previous model: %s", e)
            raise
        with self._lock:
            self._publish(result)
        return result

    def request_fit(self):
        """
        Start a fit on a worker thread, cancelling any fit in progress.
        """
        with self._lock:
            if self._cancel is not None:
                self._cancel.set()
            cancel = threading.Event()
            points = list(self._points)
            worker = threading.Thread(target=self._run_fit,
                                      args=(points, cancel),
                                      name="calibration-fit",
                                      daemon=True)
            self._cancel = cancel
            self._worker = worker
        worker.start()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the latest requested fit.  ``True`` if it has finished.
        """
        worker = self._worker
        if worker is None:
            return True
        worker.join(timeout)
        return not worker.is_alive()

    def cancel(self):
        with self._lock:
            if self._cancel is not None:
                self._cancel.set()

    def _run_fit(self, points, cancel: threading.Event):
        try:
            result = self.fitter.fit(points, self.initial_guess,
                                     frame_width=self.frame_width,
                                     cancel_event=cancel)
        except FitCancelled:
            logger.debug("Superseded calibration fit cancelled")
            return
        except (InsufficientPoints, NumericalInstability, ValueError) as e:
            with self._lock:
                if not cancel.is_set():
                    self.last_error = e
            logger.warning("Calibration fit failed, keeping previous model: %s", e)
            return

        with self._lock:
            if cancel.is_set():
                logger.debug("Discarding result of a superseded calibration fit")
                return
            self._publish(result)

    def _publish(self, result: FitResult):
        self._model = result.model
        self.last_result = result
        self.last_error = None
        logger.info("Calibration model updated: %s %s (converged=%s)",
                    result.model.kind, result.model.parameters, result.converged)

    ### SNAPSHOT ###
    def snapshot(self, reference=None) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot.capture(self._points, self.initial_guess,
                                           self._model, reference)

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot,
                      fitter: Optional[CalibrationFitter] = None,
                      frame_width: Optional[int] = None) -> "CalibrationSession":
        initial_guess = snapshot.restore_initial_guess()
        if initial_guess is None:
            raise ValueError("Snapshot carries no initial guess")
        session = cls(initial_guess, fitter=fitter,
                      model=snapshot.restore_model(), frame_width=frame_width)
        for point in snapshot.points:
            session.add_point(point)
        return session
