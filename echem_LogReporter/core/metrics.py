# echem_LogReporter/core/metrics.py
from __future__ import annotations
import numpy as np

def mean(y) -> float:
    arr = np.asarray(y, dtype=float)
    if arr.size == 0:
        raise ValueError("mean of an empty series is undefined")
    return float(np.mean(arr))

def format_sci(value: float) -> str:
    """Normalized scientific notation, 3 fractional digits (1.500e-03)."""
    return f"{value:.3e}"

def series_metrics(x, y, label: str) -> dict:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if y.size == 0:
        return {"run": label, "n_points": 0, "mean": "", "min": "", "max": "",
                "x_start": "", "x_end": ""}
    return {
        "run": label,
        "n_points": int(y.size),
        "mean": mean(y),
        "min": float(np.min(y)),
        "max": float(np.max(y)),
        "x_start": float(x[0]) if x.size else "",
        "x_end": float(x[-1]) if x.size else "",
    }
