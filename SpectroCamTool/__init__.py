# SpectroCamTool/__init__.py

from .CalibrationPoint import CalibrationPoint
from .CalibrationModel import CalibrationModel
from .LinearModel import LinearModel
from .PolynomialModel import PolynomialModel
from .GratingModel import GratingModel
from .CalibrationSetupConfig import (GratingSetupConfig, LinearSetupConfig,
                                     PolynomialSetupConfig)
from .CalibrationModelFactory import CalibrationModelFactory
from .CalibrationFitterConfig import CalibrationFitterConfig
from .CalibrationFitter import CalibrationFitter
from .FitResult import FitResult
from .CalibrationSession import CalibrationSession
from .SessionSnapshot import SessionSnapshot

from .Frame import Frame
from .FrameSlot import FrameSlot
from .ExtractorConfig import ExtractorConfig
from .FrameExtractor import FrameExtractor
from .IntensityProfile import IntensityProfile
from .Spectrum import Spectrum
from .SpectrographConfig import SpectrographConfig
from .SpectrographBuilder import SpectrographBuilder
from .SpectrumAverager import SpectrumAverager
from .ReferenceStore import ReferenceStore
from .TraceSeries import TraceSeries
from .TracerConfig import TracerConfig
from .Tracer import Tracer, intensity_at, sample
from .SpectrometerPipeline import SpectrometerPipeline
from .SpectrometerConfig import SpectrometerConfig

from .CameraAdvisory import camera_advisories
from .LoggingSetup import configure_logging
from .Exceptions import (SpectroCamError, InsufficientPoints, NumericalInstability,
                         FitCancelled, MalformedFrame, MissingReference,
                         NonMonotonicModel)

__all__ = [
    "CalibrationPoint", "CalibrationModel", "LinearModel", "PolynomialModel",
    "GratingModel", "GratingSetupConfig", "LinearSetupConfig",
    "PolynomialSetupConfig", "CalibrationModelFactory",
    "CalibrationFitterConfig", "CalibrationFitter", "FitResult",
    "CalibrationSession", "SessionSnapshot", "Frame", "FrameSlot",
    "ExtractorConfig", "FrameExtractor", "IntensityProfile", "Spectrum",
    "SpectrographConfig", "SpectrographBuilder", "SpectrumAverager",
    "ReferenceStore", "TraceSeries", "TracerConfig", "Tracer", "intensity_at",
    "sample", "SpectrometerPipeline", "SpectrometerConfig",
    "camera_advisories", "configure_logging", "SpectroCamError",
    "InsufficientPoints", "NumericalInstability", "FitCancelled",
    "MalformedFrame", "MissingReference", "NonMonotonicModel"
]
