### Frame Class ###
# Date : 10/18/2026
# File : Frame.py

from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
import numpy as np
import PIL.Image


class Frame(BaseModel):
    """
    Container for a single luminance frame handed over by the camera.

    Attributes
    ----------
    samples : np.ndarray
        2-D array of non-negative intensities, shape ``(rows, cols)``.
        Shape and values are checked by ``FrameExtractor`` so that a bad
        frame can be skipped rather than rejected at construction.
    timestamp : float or None
        Acquisition time in seconds, if the source provides one.
    sequence : int or None
        Frame counter of the source, if any.

    Examples
    --------
    >>> frame = Frame.from_array(np.zeros((480, 640, 3), dtype=np.uint8))
    >>> (frame.height, frame.width)
    (480, 640)
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    samples: np.ndarray
    timestamp: Optional[float] = None
    sequence: Optional[int] = None

    @field_validator("samples", mode="before")
    @classmethod
    def validate_samples(cls, v):
        return np.asarray(v)

    @property
    def height(self) -> int:
        return int(self.samples.shape[0]) if self.samples.ndim >= 1 else 0

    @property
    def width(self) -> int:
        return int(self.samples.shape[1]) if self.samples.ndim >= 2 else 0

    @classmethod
    def from_array(cls, array, timestamp: Optional[float] = None,
                   sequence: Optional[int] = None, normalize: bool = True):
        """
        Build a frame from a grey or colour image array.

        Colour images, shape ``(rows, cols, channels)``, are reduced to
        lightness as the mean of their first three channels (an alpha
        channel is ignored).  Integer images are scaled to ``[0, 1]`` by
        the maximum of their dtype when *normalize* is ``True``.

        Parameters
        ----------
        array : array_like
            Image data, 2-D or 3-D.
        timestamp : float or None, optional
            Acquisition time in seconds.
        sequence : int or None, optional
            Source frame counter.
        normalize : bool, optional
            Scale integer data to ``[0, 1]``.  Default is ``True``.

        Returns
        -------
        Frame
        """
        data = np.asarray(array)
        scale = 1.0
        if normalize and np.issubdtype(data.dtype, np.integer):
            scale = float(np.iinfo(data.dtype).max)

        if data.ndim == 3:
            data = data[:, :, :3].astype(float).mean(axis=2)
        samples = data.astype(float) / scale
        return cls(samples=samples, timestamp=timestamp, sequence=sequence)

    @classmethod
    def from_file(cls, filename: str, timestamp: Optional[float] = None):
        """
        Read an image file with Pillow and reduce it to a lightness frame.

        Raises
        ------
        RuntimeError
            If Pillow cannot open or decode *filename*.
        """
        try:
            with PIL.Image.open(filename) as image:
                if image.mode not in ("L", "I;16", "F", "RGB", "RGBA"):
                    image = image.convert("RGB")
                data = np.asarray(image)
        except (OSError, ValueError) as e:
            raise RuntimeError(f"Failed to decode image: {filename}") from e
        return cls.from_array(data, timestamp=timestamp)
