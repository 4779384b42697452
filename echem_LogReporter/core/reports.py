# echem_LogReporter/core/reports.py
from __future__ import annotations
from pathlib import Path
from typing import Literal
import numpy as np
import pandas as pd
from scipy.io import savemat

from .knowledge import properties_for, reaction_for
from .metrics import format_sci
from .model import AnalysisResult, DataTable, ElementSymbol, Environment, ExperimentMode

ReportFormat = Literal["csv", "mat", "both"]

NO_DATA_MESSAGE = "No numerical experimental data detected."

_METHOD_TEXT = (
    "Processing method:\n"
    "The export was scanned line by line. Metadata lines were searched for technique "
    "markers, the first line with a units annotation was taken as the column header, "
    "and only lines consisting entirely of numbers were kept as measurements. "
    "The time-like column was plotted against the current-like column."
)

_CONCLUSION_TEXT = (
    "Conclusions:\n"
    "The recorded response is consistent with the electrode process listed above. "
    "Values are reported as measured; no baseline, iR or background correction was applied."
)

def _num(v: float) -> str:
    return f"{v:g}"

# ---------- sections ----------
def _general_section(mode: ExperimentMode, table: DataTable) -> str:
    return (
        "General information:\n"
        f"Experiment mode: {mode.value}\n"
        f"Data rows: {len(table)}"
    )

def _quantitative_section(result: AnalysisResult) -> str:
    lines = [
        "Quantitative characteristics:",
        f"Axes: {result.x_label} (x) vs {result.y_label} (y)",
        f"Mean {result.y_label}: {format_sci(result.mean)}",
    ]
    if result.n_dropped:
        lines.append(f"Rows without the selected columns: {result.n_dropped} (excluded)")
    return "\n".join(lines)

def _thermal_section(env: Environment) -> str:
    return f"Thermal conditions:\nTemperature: {_num(env.temperature)} °C"

def _photo_section(env: Environment) -> str:
    power = f"{_num(env.power)} mW" if env.power is not None else "not specified"
    return (
        "Photo/laser conditions:\n"
        f"Wavelength: {_num(env.wavelength)} nm\n"
        f"Power: {power}"
    )

def _chemistry_section(mode: ExperimentMode) -> str | None:
    reaction = reaction_for(mode)
    if reaction is None:
        return None
    return (
        "Chemical interpretation:\n"
        f"Molecular equation: {reaction.molecular}\n"
        f"Ionic equation: {reaction.ionic}\n"
        f"Comment: {reaction.comment}"
    )

def _element_section(symbol: ElementSymbol) -> str:
    props = properties_for(symbol)
    return (
        f"Element properties ({props.name}, {symbol.value}):\n"
        f"Photosensitive: {'yes' if props.photosensitive else 'no'}\n"
        f"Structure: {props.structure}\n"
        f"Note: {props.note}"
    )

def compose_report(mode: ExperimentMode,
                   table: DataTable,
                   result: AnalysisResult | None,
                   env: Environment | None = None) -> str:
    """
    Build the full text report. Sections, in order:
      general info, processing method, quantitative values,
      thermal (if temperature), photo (if wavelength),
      chemistry (if the mode has a reaction), silver properties, conclusions.
    An empty table (or missing result) collapses everything to NO_DATA_MESSAGE.
    """
    if not table or result is None:
        return NO_DATA_MESSAGE
    env = env or Environment()

    sections = [
        _general_section(mode, table),
        _METHOD_TEXT,
        _quantitative_section(result),
    ]
    if env.temperature is not None:
        sections.append(_thermal_section(env))
    if env.wavelength is not None:
        sections.append(_photo_section(env))
    chem = _chemistry_section(mode)
    if chem is not None:
        sections.append(chem)
    sections.append(_element_section(ElementSymbol.AG))
    sections.append(_CONCLUSION_TEXT)
    return "\n\n".join(sections)

# ---------- file outputs ----------
def write_report_text(report: str, out_path: Path, title: str) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(report + "\n", encoding="utf-8")
    print(f"[OK] wrote report: {title} → {out_path}")

def _series_frame(result: AnalysisResult) -> pd.DataFrame:
    # x and y can resolve to the same column (a label holding both 't' and 'i')
    if result.x_label == result.y_label:
        return pd.DataFrame({"x": result.x, "y": result.y})
    return pd.DataFrame({result.x_label: result.x, result.y_label: result.y})

def _write_csv(df_out: pd.DataFrame, out_csv: Path, title: str) -> None:
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    df_out.to_csv(out_csv, index=False, encoding="utf-8")
    print(f"[OK] wrote series: {title} → {out_csv}")

def _to_mat_cellstr(seq: list[str]) -> np.ndarray:
    """Make a MATLAB column cell array from a list of strings."""
    arr = np.empty((len(seq), 1), dtype=object)
    arr[:, 0] = [str(s) for s in seq]
    return arr

def _write_mat(result: AnalysisResult, out_mat: Path, varname: str, title: str) -> None:
    """
    MATLAB struct with x/y as Nx1 doubles, labels as a 2x1 cell array
    and the mean as a scalar.
    """
    out_mat.parent.mkdir(parents=True, exist_ok=True)
    mat_struct = {
        "x": np.asarray(result.x, dtype=float).reshape(-1, 1),
        "y": np.asarray(result.y, dtype=float).reshape(-1, 1),
        "labels": _to_mat_cellstr([result.x_label, result.y_label]),
        "mean": float(result.mean),
    }
    savemat(out_mat, {varname: mat_struct})
    print(f"[OK] wrote series: {title} → {out_mat}")

def write_series(result: AnalysisResult,
                 out_base: Path,
                 title: str,
                 fmt: ReportFormat = "csv",
                 mat_variable: str = "series") -> None:
    """
    Export the plotted series.
    - out_base is a *base path without extension* (e.g., .../series)
    - fmt: "csv" | "mat" | "both"
    """
    if fmt in ("csv", "both"):
        _write_csv(_series_frame(result), out_base.with_suffix(".csv"), title)
    if fmt in ("mat", "both"):
        _write_mat(result, out_base.with_suffix(".mat"), mat_variable, title)

def write_summary(rows: list[dict], out_csv: Path) -> None:
    if not rows:
        return
    cols = ["run", "mode", "n_rows", "n_points", "mean", "min", "max", "x_start", "x_end"]
    df_out = pd.DataFrame(rows, columns=cols)
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    df_out.to_csv(out_csv, index=False, encoding="utf-8")
    print(f"[OK] wrote summary: {len(rows)} run(s) → {out_csv}")
