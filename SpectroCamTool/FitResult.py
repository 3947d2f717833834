from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny
from .CalibrationModel import CalibrationModel


class FitResult(BaseModel):
    """
    Outcome of one ``CalibrationFitter.fit()`` call.

    Attributes
    ----------
    model : CalibrationModel
        Fitted model.  When ``converged`` is ``False`` this is the best
        model found before the fit stopped.
    residual_loss : float
        Sum of squared wavelength residuals of ``model`` [nm^2].
    converged : bool
        ``True`` only if the loss improvement fell below the tolerance
        before the iteration cap.
    stalled : bool
        ``True`` if the line search found no step that lowers the loss
        (usually a loss at floating-point resolution, or step settings too
        coarse for the problem).  A stalled fit is not converged.
    iterations : int
        Number of descent iterations performed.
    """
    model_config = ConfigDict(frozen=True)

    model: SerializeAsAny[CalibrationModel]
    residual_loss: float = Field(..., ge=0)
    converged: bool
    stalled: bool = False
    iterations: int = Field(..., ge=0)
