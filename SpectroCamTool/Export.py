### Export Helpers ###
# Date : 10/18/2026
# File : Export.py
#
# Tables handed to a CSV-writing collaborator.  Each helper returns a
# header list and a list of rows; invalid values are written as ''.

import math
from typing import List, Sequence, Tuple

import numpy as np

from .Spectrum import Spectrum
from .TraceSeries import TraceSeries
from .Tracer import Tracer

Table = Tuple[List[str], List[list]]

INVALID = ""


def _cell(value):
    value = float(value)
    return value if math.isfinite(value) else INVALID


def spectrum_table(spectrum: Spectrum) -> Table:
    """
    Rows of an absolute (``wavelength, intensity``) or relative
    (``wavelength, relative_intensity``) spectrum.
    """
    value_column = "intensity" if spectrum.mode == "absolute" else "relative_intensity"
    rows = []
    for wavelength, value, valid in zip(spectrum.wavelengths, spectrum.intensities,
                                        spectrum.valid):
        rows.append([float(wavelength), _cell(value) if valid else INVALID])
    return ["wavelength", value_column], rows


def spectrum_from_table(header: Sequence[str], rows) -> Spectrum:
    """
    Parse a table produced by ``spectrum_table()`` (e.g. read back from
    CSV, where every cell is a string).
    """
    header = [h.strip() for h in header]
    if header not in (["wavelength", "intensity"], ["wavelength", "relative_intensity"]):
        raise ValueError(f"Not a spectrum table header: {header}")
    mode = "absolute" if header[1] == "intensity" else "relative"

    wavelengths, intensities = [], []
    for row in rows:
        wavelengths.append(float(row[0]))
        cell = row[1]
        intensities.append(np.nan if cell in (INVALID, None) else float(cell))
    intensities = np.asarray(intensities, dtype=float)
    return Spectrum(wavelengths=wavelengths, intensities=intensities,
                    valid=np.isfinite(intensities), mode=mode)


def trace_table(series: TraceSeries) -> Table:
    """
    Rows of a single trace, ``timestamp, intensity``.
    """
    rows = [[float(t), _cell(v)] for t, v in zip(series.timestamps, series.intensities)]
    return ["timestamp", "intensity"], rows


def tracer_table(tracer: Tracer, relative: bool = True) -> Table:
    """
    Rows of every traced wavelength side by side,
    ``timestamp, <wavelength 1>, <wavelength 2>, ...``.

    With *relative* the readings are divided by the tracer's reference.
    """
    series = tracer.series
    wavelengths = [w for w in tracer.wavelengths if w in series]
    header = ["timestamp"] + [f"{w:g}" for w in wavelengths]
    if not wavelengths:
        return header, []

    timestamps = series[wavelengths[0]].timestamps
    columns = []
    for w in wavelengths:
        if relative:
            columns.append(tracer.relative_series(w))
        else:
            columns.append(np.asarray(series[w].intensities, dtype=float))

    # Recording may continue while the table is built
    count = min([len(timestamps)] + [len(column) for column in columns])
    rows = []
    for i, t in enumerate(timestamps[:count]):
        rows.append([float(t)] + [_cell(column[i]) for column in columns])
    return header, rows


def comment_lines(comment: str) -> List[str]:
    """
    Prefix every line of a free-text comment with ``'# '`` so it can be
    written above a table.
    """
    if not comment:
        return []
    return [f"# {line}" for line in comment.splitlines()]
