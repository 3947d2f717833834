### SessionSnapshot Class ###
# Date : 10/18/2026
# File : SessionSnapshot.py

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from .CalibrationModel import CalibrationModel
from .CalibrationModelFactory import CalibrationModelFactory
from .CalibrationPoint import CalibrationPoint
from .Spectrum import Spectrum


class SessionSnapshot(BaseModel):
    """
    State handed to a settings-serialisation collaborator at shutdown, and
    read back at start-up.

    Only plain data is stored: points, the dumped models (``kind``,
    ``parameters`` and fixed attributes such as the grating constant) and,
    if retained, the reference spectrum.  File format and location are the
    collaborator's business.

    Attributes
    ----------
    points : list of CalibrationPoint
        Current calibration set.
    initial_guess : dict or None
        Dumped seed model built from physical measurements.
    model : dict or None
        Dumped fitted model.
    reference : dict or None
        ``{'wavelengths': [...], 'intensities': [...]}`` of the reference
        spectrum.
    """
    points: List[CalibrationPoint] = Field(default_factory=list)
    initial_guess: Optional[Dict[str, Any]] = None
    model: Optional[Dict[str, Any]] = None
    reference: Optional[Dict[str, List[float]]] = None

    @classmethod
    def capture(cls, points, initial_guess: Optional[CalibrationModel] = None,
                model: Optional[CalibrationModel] = None,
                reference: Optional[Spectrum] = None) -> "SessionSnapshot":
        return cls(
            points=list(points),
            initial_guess=initial_guess.model_dump() if initial_guess is not None else None,
            model=model.model_dump() if model is not None else None,
            reference=None if reference is None else {
                "wavelengths": reference.wavelengths.tolist(),
                "intensities": reference.intensities.tolist(),
            })

    def restore_model(self) -> Optional[CalibrationModel]:
        return CalibrationModelFactory.restore(self.model) if self.model else None

    def restore_initial_guess(self) -> Optional[CalibrationModel]:
        if not self.initial_guess:
            return None
        return CalibrationModelFactory.restore(self.initial_guess)

    def restore_reference(self) -> Optional[Spectrum]:
        if not self.reference:
            return None
        return Spectrum(wavelengths=self.reference["wavelengths"],
                        intensities=self.reference["intensities"])

    def to_dict(self) -> dict:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict) -> "SessionSnapshot":
        return cls.model_validate(data)
