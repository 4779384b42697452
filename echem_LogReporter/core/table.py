# echem_LogReporter/core/table.py
from __future__ import annotations
import logging
import math
import re
from enum import Enum
from typing import Iterable
import numpy as np
import pandas as pd

from .model import DataRow, DataTable, HeaderRow

_LOG = logging.getLogger(__name__)

_UNIT_RE = re.compile(r"\([^()]*\)")
_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_NUMERIC_PREFIX_RE = re.compile("^" + _NUMBER, re.ASCII)
_NUMERIC_TOKEN_RE = re.compile(_NUMBER, re.ASCII)
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

class ScanState(Enum):
    SCANNING_FOR_HEADER = "scanning_for_header"
    READING_DATA = "reading_data"

# ---------- line predicates ----------
def split_lines(text: str) -> list[str]:
    """Split on \\r\\n, \\r or \\n only (not form feeds, \\x85 or \\u2028)."""
    return _LINE_BREAK_RE.split(text)

def is_blank(line: str) -> bool:
    return not line.strip()

def is_header_line(line: str) -> bool:
    """Header = first line carrying a units annotation such as ``t(s)``."""
    return _UNIT_RE.search(line) is not None

def is_numeric_data_line(line: str) -> bool:
    return _NUMERIC_PREFIX_RE.match(line.strip()) is not None

def parse_numeric_row(line: str) -> DataRow | None:
    """
    All-or-nothing: one bad or non-finite token rejects the whole row.
    Tokens must be plain ASCII decimals; float() alone would also take
    '1_000', 'nan' or non-ASCII digits.
    """
    values = []
    for token in line.split():
        if _NUMERIC_TOKEN_RE.fullmatch(token) is None:
            return None
        try:
            v = float(token)
        except ValueError:
            return None
        if not math.isfinite(v):
            return None
        values.append(v)
    return tuple(values) if values else None

# ---------- extraction ----------
def extract_table(lines: Iterable[str]) -> tuple[HeaderRow, DataTable]:
    state = ScanState.SCANNING_FOR_HEADER
    header: HeaderRow = ()
    rows: list[DataRow] = []
    rejected = 0

    for line in lines:
        if is_blank(line):
            continue
        if state is ScanState.SCANNING_FOR_HEADER and is_header_line(line):
            header = tuple(line.split())
            state = ScanState.READING_DATA
            continue
        if not is_numeric_data_line(line):
            continue
        row = parse_numeric_row(line)
        if row is None:
            rejected += 1
            continue
        rows.append(row)

    if rejected:
        _LOG.debug("dropped %d partially numeric row(s)", rejected)
    return header, tuple(rows)

def table_to_frame(header: HeaderRow, table: DataTable) -> pd.DataFrame:
    """
    DataFrame view of a parsed table for export.
    Columns beyond the header are named ``col_<k>``; short rows are padded with NaN.
    """
    width = max((len(r) for r in table), default=len(header))
    width = max(width, len(header))
    cols = [header[k] if k < len(header) else f"col_{k + 1}" for k in range(width)]
    data = np.full((len(table), width), np.nan)
    for i, row in enumerate(table):
        data[i, :len(row)] = row
    return pd.DataFrame(data, columns=cols)
