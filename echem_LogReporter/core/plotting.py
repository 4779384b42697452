# echem_LogReporter/core/plotting.py
from __future__ import annotations
from pathlib import Path
import matplotlib.pyplot as plt

from .model import ChartSpec

def _thin_xy(x, y, max_points: int):
    """Light decimator: keep at most max_points evenly spaced points."""
    import numpy as np
    n = len(x)
    if n <= max_points or max_points <= 0:
        return x, y
    idx = np.linspace(0, n - 1, max_points).astype(int)
    return x[idx], y[idx]

class ChartRenderer:
    """
    Owns at most one figure. Rendering a new ChartSpec always discards the
    previous figure first, so a stale chart never survives a new load.
    """

    def __init__(self, max_points: int = 20000):
        self.max_points = max_points
        self.figure = None
        self.spec: ChartSpec | None = None

    def render(self, spec: ChartSpec):
        self.close()
        x, y = _thin_xy(spec.x, spec.y, self.max_points)
        fig, ax = plt.subplots(figsize=(11, 6))
        ax.plot(x, y, marker=".", markersize=3, linewidth=1)
        ax.set_xlabel(spec.x_label)
        ax.set_ylabel(spec.y_label)
        if spec.title:
            ax.set_title(spec.title)
        ax.grid(True, alpha=0.3)
        fig.tight_layout()
        self.figure = fig
        self.spec = spec
        return fig

    def save(self, out_path: Path, dpi: int = 160) -> None:
        if self.figure is None:
            return
        out_path.parent.mkdir(parents=True, exist_ok=True)
        self.figure.savefig(out_path, dpi=dpi)
        print(f"[OK] chart: {len(self.spec.x)} point(s) → {out_path}")

    def close(self) -> None:
        if self.figure is not None:
            plt.close(self.figure)
        self.figure = None
        self.spec = None
