from typing import Union
import math
from .CalibrationSetupConfig import (GratingSetupConfig, LinearSetupConfig,
                                     PolynomialSetupConfig)
from .CalibrationModel import CalibrationModel
from .GratingModel import GratingModel
from .LinearModel import LinearModel
from .PolynomialModel import PolynomialModel

SetupConfig = Union[GratingSetupConfig, LinearSetupConfig, PolynomialSetupConfig]


class CalibrationModelFactory(object):
    """
    Factory for creating the initial guess of a calibration model.

    Dispatches to the correct ``CalibrationModel`` subclass based on the
    type of setup config provided.  Adding a new formula only requires a
    new model class and a new ``isinstance`` branch here.

    Methods
    -------
    create(config)
        Build an unfitted model from physical measurements.
    restore(data)
        Rebuild a model from the dictionary produced by ``model_dump()``.

    Examples
    --------
    >>> config = GratingSetupConfig(sensor_pixels=640)
    >>> guess = CalibrationModelFactory.create(config)
    >>> guess.kind
    'grating'
    """

    MODEL_TYPES = {
        "linear": LinearModel,
        "polynomial": PolynomialModel,
        "grating": GratingModel,
    }

    @staticmethod
    def create(config: SetupConfig) -> CalibrationModel:
        """
        Construct an initial ``CalibrationModel`` from a setup config.

        For a grating, ``alpha`` is seeded with the full camera angle
        ``angle_deg``.  In ``GratingModel`` the ray reaching the optical
        axis (``x = c``) leaves the grating at ``alpha`` itself, so the
        seed puts ``d * sin(angle)`` at the sensor position ``c``: about
        600 nm for the default 17.5 deg and 500 lines/mm.  A half-angle
        seed would place the axis near 300 nm, outside the visible range
        the camera records.

        Parameters
        ----------
        config : GratingSetupConfig, LinearSetupConfig or PolynomialSetupConfig
            A validated setup configuration.

        Returns
        -------
        CalibrationModel
            Model seeded with the physical guess, ready for fitting.

        Raises
        ------
        ValueError
            If *config* is not a recognised configuration type.
        """
        if isinstance(config, GratingSetupConfig):
            alpha = math.radians(config.angle_deg)
            b = config.distance_to_sensor_mm / config.sensor_width_mm
            return GratingModel(parameters=(alpha, b, config.axis_offset),
                                lines_per_mm=config.lines_per_mm,
                                sensor_pixels=config.sensor_pixels)

        if isinstance(config, (LinearSetupConfig, PolynomialSetupConfig)):
            slope = ((config.last_wavelength - config.first_wavelength) /
                     (config.sensor_pixels - 1))
            intercept = config.first_wavelength
            if isinstance(config, PolynomialSetupConfig):
                higher = [0.0] * (config.degree - 1)
                return PolynomialModel(parameters=higher + [slope, intercept])
            return LinearModel(parameters=(slope, intercept))

        raise ValueError(f"Unsupported calibration setup: {type(config)}")

    @staticmethod
    def restore(data: dict) -> CalibrationModel:
        """
        Rebuild a model from its dumped form.

        Raises
        ------
        ValueError
            If ``data['kind']`` names no known model.
        """
        kind = data.get("kind")
        model_type = CalibrationModelFactory.MODEL_TYPES.get(kind)
        if model_type is None:
            raise ValueError(f"Unknown calibration model kind: {kind!r}")
        return model_type.model_validate(data)
