### FrameExtractor Class ###
# Date : 10/18/2026
# File : FrameExtractor.py

import logging
from typing import Optional

import numpy as np

from .Exceptions import MalformedFrame
from .ExtractorConfig import ExtractorConfig
from .Frame import Frame
from .IntensityProfile import IntensityProfile

logger = logging.getLogger(__name__)


class FrameExtractor(object):
    """
    Reduces a 2-D frame to a 1-D intensity profile.

    The configured orientation is applied first, so that profile index
    ``i`` always refers to the same physical position along the dispersion
    axis however the camera is mounted.  Each column is then reduced over
    the configured row band.

    Parameters
    ----------
    config : ExtractorConfig or None, optional
        Band, orientation and reducer.  Defaults are used when ``None``.

    Examples
    --------
    >>> extractor = FrameExtractor(ExtractorConfig(band_start=200, band_stop=280))
    >>> profile = extractor.extract(frame)
    >>> len(profile) == frame.width
    True
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()

    def extract(self, frame: Frame) -> IntensityProfile:
        """
        Compute the intensity profile of *frame*.

        Parameters
        ----------
        frame : Frame
            Luminance frame.

        Returns
        -------
        IntensityProfile
            One value per column of the oriented frame.

        Raises
        ------
        MalformedFrame
            If the frame is not a non-empty 2-D array of finite,
            non-negative samples, if the band lies entirely outside the
            frame, or if the oriented width differs from
            ``expected_width``.
        """
        samples = self._validate(frame.samples)
        oriented = self.orient(samples, self.config.orientation)

        rows, cols = oriented.shape
        if self.config.expected_width is not None and cols != self.config.expected_width:
            raise MalformedFrame(
                f"Frame width {cols} does not match the configured width "
                f"{self.config.expected_width}")

        start, stop = self.clamp_band(rows)
        if stop <= start:
            raise MalformedFrame(
                f"Band rows [{self.config.band_start}, {self.config.band_stop}) "
                f"lie outside a frame of {rows} rows")

        band = oriented[start:stop, :]
        if self.config.reducer == "sum":
            values = band.sum(axis=0)
        else:
            values = band.mean(axis=0)
        return IntensityProfile(values=values)

    def clamp_band(self, rows: int):
        """
        Clamp the configured band to ``[0, rows)``.

        Returns
        -------
        (start, stop) : tuple of int
            ``stop <= start`` when nothing of the band is left.
        """
        requested = rows if self.config.band_stop is None else self.config.band_stop
        start = min(self.config.band_start, rows)
        stop = min(requested, rows)
        if stop != requested:
            logger.debug("Band [%d, %d) clamped to [%d, %d)",
                         self.config.band_start, requested, start, stop)
        return start, stop

    @staticmethod
    def orient(samples: np.ndarray, orientation: str) -> np.ndarray:
        """
        Apply a rotation or flip to a 2-D array.
        """
        if orientation == "none":
            return samples
        if orientation == "rot90":
            return np.rot90(samples, 1)
        if orientation == "rot180":
            return np.rot90(samples, 2)
        if orientation == "rot270":
            return np.rot90(samples, 3)
        if orientation == "flip_h":
            return samples[:, ::-1]
        if orientation == "flip_v":
            return samples[::-1, :]
        raise ValueError(f"Unsupported orientation: {orientation}")

    @staticmethod
    def _validate(samples) -> np.ndarray:
        samples = np.asarray(samples)
        if samples.ndim != 2 or samples.size == 0:
            raise MalformedFrame(f"Expected a non-empty 2-D frame, got shape {samples.shape}")
        if not np.issubdtype(samples.dtype, np.number):
            raise MalformedFrame(f"Frame samples are not numeric: {samples.dtype}")
        samples = samples.astype(float, copy=False)
        if not np.all(np.isfinite(samples)):
            raise MalformedFrame("Frame contains non-finite samples")
        if np.any(samples < 0):
            raise MalformedFrame("Frame contains negative samples")
        return samples
