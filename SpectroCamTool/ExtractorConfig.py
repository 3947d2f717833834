from pydantic import BaseModel, Field, model_validator
from typing import Literal, Optional

Orientation = Literal["none", "rot90", "rot180", "rot270", "flip_h", "flip_v"]
Reducer = Literal["sum", "mean"]


class ExtractorConfig(BaseModel):
    """
    Configuration for ``FrameExtractor``.

    Parameters
    ----------
    band_start : int, optional
        First row of the aggregation band, counted after orientation.
        Default is ``0``.
    band_stop : int or None, optional
        Row after the last row of the band.  ``None`` extends the band to
        the bottom of the frame.  Default is ``None``.
    orientation : {'none', 'rot90', 'rot180', 'rot270', 'flip_h', 'flip_v'}
        Transform applied before aggregation so that columns run along the
        dispersion axis.  Rotations are counter-clockwise.  Default is
        ``'none'``.
    reducer : {'sum', 'mean'}, optional
        Aggregation over the rows of the band.  Default is ``'mean'``.
    expected_width : int or None, optional
        Width the oriented frame must have, usually the sensor width the
        calibration was made with.  ``None`` accepts any width.
    """
    band_start: int = Field(default=0, ge=0)
    band_stop: Optional[int] = Field(default=None, ge=1)
    orientation: Orientation = "none"
    reducer: Reducer = "mean"
    expected_width: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def validate_band(self):
        if self.band_stop is not None and self.band_stop <= self.band_start:
            raise ValueError("band_stop must be greater than band_start")
        return self
