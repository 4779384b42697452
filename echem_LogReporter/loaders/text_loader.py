# echem_LogReporter/loaders/text_loader.py
from __future__ import annotations
import logging
from pathlib import Path

from ..core.model import TextRecord

_LOG = logging.getLogger(__name__)

# instrument PCs often write cp1251 / latin-1 exports
_ENCODINGS: tuple[str, ...] = ("utf-8-sig", "cp1251")

def _decode(raw: bytes, name: str) -> str:
    for enc in _ENCODINGS:
        try:
            text = raw.decode(enc)
        except UnicodeDecodeError:
            continue
        if enc != _ENCODINGS[0]:
            _LOG.info("%s: decoded as %s", name, enc)
        return text
    _LOG.info("%s: decoded as latin-1", name)
    return raw.decode("latin-1")  # maps every byte

def infer_run_from_path(path: Path) -> str:
    """Public helper: the run label is the file stem."""
    return path.stem

def read_text(path: Path) -> str:
    return _decode(path.read_bytes(), path.name)

# ---------- public loader ----------
def load(path: Path) -> list[TextRecord]:
    """
    Accepts: a plain-text instrument export.
    Returns: one TextRecord holding the complete text blob.
    """
    return [TextRecord(run=infer_run_from_path(path), text=read_text(path), source_path=path)]
