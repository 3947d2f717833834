### SpectrometerPipeline Class ###
# Date : 10/18/2026
# File : SpectrometerPipeline.py

import logging
import threading
from typing import Optional

from .CalibrationSession import CalibrationSession
from .Exceptions import MalformedFrame, MissingReference, NonMonotonicModel
from .Frame import Frame
from .FrameExtractor import FrameExtractor
from .FrameSlot import FrameSlot
from .ReferenceStore import ReferenceStore
from .SessionSnapshot import SessionSnapshot
from .SpectrographBuilder import SpectrographBuilder
from .Spectrum import Spectrum
from .SpectrumAverager import SpectrumAverager
from .Tracer import Tracer

logger = logging.getLogger(__name__)


class SpectrometerPipeline(object):
    """
    Turns camera frames into spectra on a dedicated processing thread.

    Frames are handed over with ``submit()``, which never blocks the
    camera: only the newest unprocessed frame is kept (see ``FrameSlot``).
    For every frame the worker extracts a profile, builds the absolute
    spectrum with the calibration model current at that moment, averages
    it if configured, derives the relative spectrum when relative display
    is on, and feeds the tracer with the frame's acquisition time.  The
    result replaces ``latest``.

    A frame that cannot be processed (malformed frame, unusable model) is
    skipped and ``latest`` keeps the previous spectrum.  When relative
    display is requested without a stored reference, the absolute
    spectrum is published instead.

    Parameters
    ----------
    calibration : CalibrationSession
        Source of the calibration model.
    extractor : FrameExtractor or None, optional
    builder : SpectrographBuilder or None, optional
    references : ReferenceStore or None, optional
    tracer : Tracer or None, optional
        Sampled once per published spectrum when given, stamped with
        ``Frame.timestamp`` (or the tracer's clock if the frame has none).
    relative : bool, optional
        Publish relative spectra.  Default is ``False``.
    """

    def __init__(self,
                 calibration: CalibrationSession,
                 extractor: Optional[FrameExtractor] = None,
                 builder: Optional[SpectrographBuilder] = None,
                 references: Optional[ReferenceStore] = None,
                 tracer: Optional[Tracer] = None,
                 relative: bool = False):
        self.calibration = calibration
        self.extractor = extractor or FrameExtractor()
        self.builder = builder or SpectrographBuilder()
        self.references = references or ReferenceStore()
        self.tracer = tracer
        self.relative = relative

        self.slot = FrameSlot()
        self.averager = SpectrumAverager(self.builder.config.average_frames)

        self._lock = threading.Lock()
        self._latest: Optional[Spectrum] = None
        self._latest_absolute: Optional[Spectrum] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self.processed = 0
        self.skipped = 0

    @property
    def latest(self) -> Optional[Spectrum]:
        """Spectrum currently on display (relative or absolute)."""
        with self._lock:
            return self._latest

    @property
    def latest_absolute(self) -> Optional[Spectrum]:
        with self._lock:
            return self._latest_absolute

    def submit(self, frame: Frame):
        self.slot.put(frame)

    def process_frame(self, frame: Frame) -> Optional[Spectrum]:
        """
        Process one frame synchronously.

        Returns
        -------
        Spectrum or None
            The published spectrum, or ``None`` if nothing was published
            (no model yet, frame skipped, or averaging still collecting).
        """
        model = self.calibration.model
        if model is None:
            logger.debug("No calibration model yet, frame %s ignored", frame.sequence)
            return None

        try:
            profile = self.extractor.extract(frame)
            absolute = self.builder.build(profile, model, "absolute")
        except (MalformedFrame, NonMonotonicModel) as e:
            self.skipped += 1
            logger.warning("Skipping frame %s: %s", frame.sequence, e)
            return None

        absolute = self.averager.add(absolute)
        if absolute is None:
            return None

        shown = absolute
        if self.relative:
            try:
                shown = self.builder.relative(absolute, self.references.current())
            except MissingReference as e:
                logger.warning("%s; showing absolute spectrum", e)

        with self._lock:
            self._latest_absolute = absolute
            self._latest = shown
        self.processed += 1

        if self.tracer is not None:
            self.tracer.update(absolute, timestamp=frame.timestamp)
        return shown

    def take_reference(self) -> bool:
        """
        Store the latest absolute spectrum as the reference.

        Returns ``False`` if no spectrum has been produced yet.
        """
        spectrum = self.latest_absolute
        if spectrum is None:
            logger.warning("No spectrum available to take as reference")
            return False
        self.references.capture(spectrum)
        return True

    def snapshot(self, keep_reference: bool = True) -> SessionSnapshot:
        """
        State to persist at shutdown: calibration points, models and,
        with *keep_reference*, the stored reference.
        """
        reference = self.references.current() if keep_reference else None
        return self.calibration.snapshot(reference=reference)

    ### WORKER THREAD ###
    def start(self):
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run,
                                        name="spectrometer-pipeline",
                                        daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
        self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self):
        logger.info("Spectrometer pipeline started")
        while not self._stop.is_set():
            frame = self.slot.get(timeout=0.1)
            if frame is not None:
                self.process_frame(frame)
        logger.info("Spectrometer pipeline stopped (%d processed, %d skipped, %d dropped)",
                    self.processed, self.skipped, self.slot.dropped)
