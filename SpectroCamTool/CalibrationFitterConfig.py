from pydantic import BaseModel, Field


class CalibrationFitterConfig(BaseModel):
    """
    Configuration for ``CalibrationFitter``.

    Parameters
    ----------
    step_size : float, optional
        Initial step length along the preconditioned descent direction.
        Must be > 0.  Default is ``1.0``.
    max_step_size : float, optional
        Upper bound the step length may grow back to after a successful
        iteration.  Must be > 0.  Default is ``1.0``.
    shrink : float, optional
        Factor applied to the step while backtracking.  Must be in
        ``(0, 1)``.  Default is ``0.5``.
    armijo : float, optional
        Sufficient-decrease constant of the backtracking line search.
        Must be in ``(0, 1)``.  Default is ``0.5``.
    max_backtracks : int, optional
        Backtracking attempts per iteration before the fit is considered
        stalled.  Default is ``60``.
    max_iterations : int, optional
        Iteration cap.  Default is ``5000``.
    tolerance : float, optional
        The fit has converged once the loss improves by less than this
        amount in one iteration [nm^2].  Default is ``1e-12``.
    log_every : int, optional
        Emit a debug log line every this many iterations.  Default is
        ``400``.
    """
    step_size: float = Field(default=1.0, gt=0)
    max_step_size: float = Field(default=1.0, gt=0)
    shrink: float = Field(default=0.5, gt=0, lt=1)
    armijo: float = Field(default=0.5, gt=0, lt=1)
    max_backtracks: int = Field(default=60, ge=1)
    max_iterations: int = Field(default=5000, ge=1)
    tolerance: float = Field(default=1e-12, ge=0)
    log_every: int = Field(default=400, ge=1)
