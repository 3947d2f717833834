# tests/conftest.py
from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np
import pytest

from SpectroCamTool import CalibrationPoint, Frame, LinearModel

# ---------------------------------------------------------------------------
# Randomness
# ---------------------------------------------------------------------------

@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)

# ---------------------------------------------------------------------------
# Calibration fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def linear_model() -> LinearModel:
    """3.75 nm/px from 362.5 nm: (10, 400) and (90, 700) lie on it."""
    return LinearModel(parameters=(3.75, 362.5))


@pytest.fixture
def two_points():
    return [CalibrationPoint(pixel=10, wavelength=400),
            CalibrationPoint(pixel=90, wavelength=700)]

# ---------------------------------------------------------------------------
# Frame fixtures
# ---------------------------------------------------------------------------

def _line_profile(width: int, lines: Iterable[Tuple[float, float]],
                  sigma: float, background: float) -> np.ndarray:
    cols = np.arange(width, dtype=float)
    profile = np.full(width, background)
    for centre, amplitude in lines:
        profile += amplitude * np.exp(-((cols - centre) ** 2) / (2.0 * sigma ** 2))
    return profile


@pytest.fixture
def frame_factory():
    """
    Build frames with Gaussian emission lines painted into a row band.
    """
    def _make(width: int = 100, height: int = 40,
              lines=((30.0, 1.0), (70.0, 0.5)), sigma: float = 2.0,
              background: float = 0.05, band=(10, 30)) -> Frame:
        samples = np.zeros((height, width))
        samples[band[0]:band[1], :] = _line_profile(width, lines, sigma, background)
        return Frame(samples=samples)
    return _make


@pytest.fixture
def line_frame(frame_factory) -> Frame:
    return frame_factory()
