### SpectrometerConfig Class ###
# Date : 10/18/2026
# File : SpectrometerConfig.py

from pydantic import BaseModel, Field
from typing import Annotated, Optional, Union

from .CalibrationFitter import CalibrationFitter
from .CalibrationFitterConfig import CalibrationFitterConfig
from .CalibrationModelFactory import CalibrationModelFactory
from .CalibrationSession import CalibrationSession
from .CalibrationSetupConfig import (GratingSetupConfig, LinearSetupConfig,
                                     PolynomialSetupConfig)
from .ExtractorConfig import ExtractorConfig
from .FrameExtractor import FrameExtractor
from .ReferenceStore import ReferenceStore
from .SessionSnapshot import SessionSnapshot
from .SpectrographBuilder import SpectrographBuilder
from .SpectrographConfig import SpectrographConfig
from .SpectrometerPipeline import SpectrometerPipeline
from .Tracer import Tracer
from .TracerConfig import TracerConfig

SetupConfig = Annotated[
    Union[GratingSetupConfig, LinearSetupConfig, PolynomialSetupConfig],
    Field(discriminator="kind")]


class SpectrometerConfig(BaseModel):
    """
    Complete configuration of a camera spectrometer.

    Groups the per-component configs so that a settings collaborator can
    load everything from one dictionary, and assembles the runtime objects
    with ``create_pipeline()``.

    Parameters
    ----------
    setup : GratingSetupConfig, LinearSetupConfig or PolynomialSetupConfig
        Physical seed for calibration, selected by its ``kind`` field.
    extractor : ExtractorConfig, optional
    spectrograph : SpectrographConfig, optional
    fitter : CalibrationFitterConfig, optional
    tracer : TracerConfig or None, optional
        ``None`` disables the tracer.  Default is ``None``.
    relative : bool, optional
        Start with relative display.  Default is ``False``.

    Examples
    --------
    >>> config = SpectrometerConfig.from_dict({
    ...     "setup": {"kind": "grating", "sensor_pixels": 640},
    ...     "extractor": {"band_start": 200, "band_stop": 280},
    ... })
    >>> pipeline = config.create_pipeline()
    """
    setup: SetupConfig
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    spectrograph: SpectrographConfig = Field(default_factory=SpectrographConfig)
    fitter: CalibrationFitterConfig = Field(default_factory=CalibrationFitterConfig)
    tracer: Optional[TracerConfig] = None
    relative: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "SpectrometerConfig":
        return cls.model_validate(data)

    def create_session(self, snapshot: Optional[SessionSnapshot] = None) -> CalibrationSession:
        """
        Build a calibration session seeded from ``setup``, restoring points
        and the fitted model from *snapshot* when given.
        """
        fitter = CalibrationFitter(self.fitter)
        width = self.setup.sensor_pixels
        if snapshot is not None and snapshot.initial_guess:
            return CalibrationSession.from_snapshot(snapshot, fitter=fitter, frame_width=width)

        session = CalibrationSession(CalibrationModelFactory.create(self.setup),
                                     fitter=fitter, frame_width=width)
        if snapshot is not None:
            for point in snapshot.points:
                session.add_point(point)
        return session

    def create_pipeline(self, snapshot: Optional[SessionSnapshot] = None) -> SpectrometerPipeline:
        """
        Assemble session, extractor, builder, reference store and tracer.

        Unless ``extractor.expected_width`` is set explicitly, frames must
        be as wide as ``setup.sensor_pixels``; others are skipped.
        """
        extractor = self.extractor
        if extractor.expected_width is None:
            extractor = extractor.model_copy(
                update={"expected_width": self.setup.sensor_pixels})

        references = ReferenceStore()
        if snapshot is not None:
            reference = snapshot.restore_reference()
            if reference is not None:
                references.capture(reference)

        return SpectrometerPipeline(
            self.create_session(snapshot),
            extractor=FrameExtractor(extractor),
            builder=SpectrographBuilder(self.spectrograph),
            references=references,
            tracer=Tracer(self.tracer) if self.tracer is not None else None,
            relative=self.relative)
