### SpectroCamTool Exceptions ###
# File : Exceptions.py


class SpectroCamError(Exception):
    """
    Base class for all errors raised by ``SpectroCamTool``.
    """


class InsufficientPoints(SpectroCamError, ValueError):
    """
    A calibration fit was requested with fewer than two calibration points.
    """


class NumericalInstability(SpectroCamError, ArithmeticError):
    """
    A fit iterate produced a non-finite loss or parameter.
    """


class FitCancelled(SpectroCamError):
    """
    A running fit was cancelled before it finished.
    """


class MalformedFrame(SpectroCamError, ValueError):
    """
    A frame cannot be reduced with the configured band and orientation.
    """


class MissingReference(SpectroCamError, LookupError):
    """
    A relative spectrum was requested while no reference is stored.
    """


class NonMonotonicModel(SpectroCamError, ValueError):
    """
    The calibration model is not strictly monotonic over the used pixels.
    """
