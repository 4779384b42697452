# echem_LogReporter/utils/detect.py
from __future__ import annotations
from pathlib import Path
from dataclasses import dataclass
from typing import Literal

DetectedKind = Literal["text", "unknown"]

TEXT_SUFFIXES: tuple[str, ...] = (".txt", ".dat", ".log", ".csv", ".ocw")

@dataclass(frozen=True)
class DetectedItem:
    path: Path        # actual path on disk
    kind: DetectedKind

def detect_kind(p: Path) -> DetectedKind:
    """
    Classify a single path.
    - .txt/.dat/.log/.csv/.ocw -> 'text'
    else                       -> 'unknown'
    """
    if p.suffix.lower() in TEXT_SUFFIXES:
        return "text"
    return "unknown"

def discover_inputs(root: Path, recurse: bool = True) -> list[DetectedItem]:
    """
    If 'root' is a file -> return that one item (if known).
    If 'root' is a folder -> walk (optionally recursively) and collect text exports.
    """
    items: list[DetectedItem] = []
    if root.is_file():
        kind = detect_kind(root)
        if kind != "unknown":
            items.append(DetectedItem(root.resolve(), kind))
        return items
    if not root.is_dir():
        return items

    it = root.rglob("*") if recurse else root.glob("*")
    for p in it:
        if not p.is_file():
            continue
        kind = detect_kind(p)
        if kind != "unknown":
            items.append(DetectedItem(p.resolve(), kind))

    # deterministic ordering
    items.sort(key=lambda x: str(x.path))
    return items
