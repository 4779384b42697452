# echem_LogReporter/core/axes.py
from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from .model import DataRow, DataTable, HeaderRow

DEFAULT_X_INDEX = 0
DEFAULT_Y_INDEX = 1
MISSING = float("nan")

@dataclass(frozen=True)
class AxisSelection:
    x_index: int
    y_index: int
    x_label: str
    y_label: str
    x: np.ndarray
    y: np.ndarray
    n_dropped: int

def pick_indices(header: HeaderRow) -> tuple[int, int]:
    """
    Last match wins: the final label containing 't' becomes x,
    the final label containing 'i' becomes y. A label may hit both.
    """
    x_idx, y_idx = DEFAULT_X_INDEX, DEFAULT_Y_INDEX
    for k, label in enumerate(header):
        low = label.lower()
        if "t" in low:
            x_idx = k
        if "i" in low:
            y_idx = k
    return x_idx, y_idx

def _label(header: HeaderRow, idx: int) -> str:
    return header[idx] if idx < len(header) else f"col {idx + 1}"

def _cell(row: DataRow, idx: int) -> float:
    return row[idx] if idx < len(row) else MISSING

def select_axes(header: HeaderRow, table: DataTable) -> AxisSelection:
    x_idx, y_idx = pick_indices(header)
    xs, ys = [], []
    dropped = 0
    for row in table:
        xv, yv = _cell(row, x_idx), _cell(row, y_idx)
        # parsed values are always finite, so NaN here can only be MISSING
        if np.isnan(xv) or np.isnan(yv):
            dropped += 1
            continue
        xs.append(xv)
        ys.append(yv)
    return AxisSelection(
        x_index=x_idx,
        y_index=y_idx,
        x_label=_label(header, x_idx),
        y_label=_label(header, y_idx),
        x=np.asarray(xs, dtype=float),
        y=np.asarray(ys, dtype=float),
        n_dropped=dropped,
    )
