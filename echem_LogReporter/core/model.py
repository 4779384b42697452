# echem_LogReporter/core/model.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import numpy as np

@dataclass(frozen=True)
class TextRecord:
    run: str                  # run label, usually the file stem
    text: str                 # complete raw export
    source_path: Path         # file on disk

class ExperimentMode(Enum):
    UNKNOWN = "Unknown"
    POTENTIOSTATIC = "Potentiostatic"
    CYCLIC_VOLTAMMETRY = "Cyclic voltammetry"
    CHRONOAMPEROMETRY = "Chronoamperometry"

class ElementSymbol(Enum):
    AG = "Ag"
    CL = "Cl"
    N = "N"
    O = "O"
    K = "K"

HeaderRow = tuple[str, ...]
DataRow = tuple[float, ...]
DataTable = tuple[DataRow, ...]

@dataclass(frozen=True)
class Reaction:
    molecular: str
    ionic: str
    comment: str

@dataclass(frozen=True)
class ElementProperties:
    name: str
    photosensitive: bool
    structure: str
    note: str

@dataclass(frozen=True)
class Environment:
    temperature: float | None = None   # degC
    wavelength: float | None = None    # nm
    power: float | None = None         # mW

@dataclass(frozen=True)
class AnalysisResult:
    x: np.ndarray
    y: np.ndarray
    x_label: str
    y_label: str
    x_index: int
    y_index: int
    mean: float
    n_dropped: int = 0    # rows too narrow for the selected columns

@dataclass(frozen=True)
class ChartSpec:
    x: np.ndarray
    y: np.ndarray
    x_label: str
    y_label: str
    title: str = ""

@dataclass(frozen=True)
class AnalysisContext:
    source: str                      # run label, usually the file stem
    mode: ExperimentMode
    header: HeaderRow
    table: DataTable
    result: AnalysisResult | None    # None when no numeric rows were found
    report: str
