# echem_LogReporter/core/classify.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable

from .model import ExperimentMode

_LOG = logging.getLogger(__name__)

@dataclass(frozen=True)
class MarkerRule:
    mode: ExperimentMode
    marker: str
    case_sensitive: bool = True

    def matches(self, line: str) -> bool:
        if not self.marker:
            return False
        if self.case_sensitive:
            return self.marker in line
        return self.marker.lower() in line.lower()

# ----- defaults (used if rules_from_config isn't called) -----
# order matters: on a line carrying several markers the later rule wins
DEFAULT_RULES: tuple[MarkerRule, ...] = (
    MarkerRule(ExperimentMode.POTENTIOSTATIC, "ID_PotStatic", case_sensitive=True),
    MarkerRule(ExperimentMode.CYCLIC_VOLTAMMETRY, "ID_CycVolt", case_sensitive=True),
    MarkerRule(ExperimentMode.CHRONOAMPEROMETRY, "chronoamperometry", case_sensitive=False),
)

_CONFIG_KEYS = {
    ExperimentMode.POTENTIOSTATIC: "potentiostatic",
    ExperimentMode.CYCLIC_VOLTAMMETRY: "cyclic_voltammetry",
    ExperimentMode.CHRONOAMPEROMETRY: "chronoamperometry",
}

def rules_from_config(cfg: dict | None) -> tuple[MarkerRule, ...]:
    """
    Build the marker rules from the ``classification.markers`` block.
    Only the marker text can be overridden; rule order and case handling stay fixed.
    """
    cls = (cfg or {}).get("classification", {}) if cfg else {}
    markers = (cls or {}).get("markers") or {}
    rules = []
    for rule in DEFAULT_RULES:
        override = markers.get(_CONFIG_KEYS[rule.mode])
        if isinstance(override, str) and override.strip():
            rule = MarkerRule(rule.mode, override.strip(), rule.case_sensitive)
        rules.append(rule)
    return tuple(rules)

def detect_mode(lines: Iterable[str],
                rules: tuple[MarkerRule, ...] = DEFAULT_RULES) -> ExperimentMode:
    """
    Infer the technique from marker substrings.

    Every line is checked against every rule, in document order then rule order.
    Each hit replaces the previous result, so the last triggering line decides,
    even when an earlier line named a different technique.
    No hit at all leaves UNKNOWN.
    """
    mode = ExperimentMode.UNKNOWN
    for lineno, line in enumerate(lines, start=1):
        for rule in rules:
            if rule.matches(line):
                if mode is not ExperimentMode.UNKNOWN and mode is not rule.mode:
                    _LOG.debug("line %d: marker '%s' overrides %s", lineno, rule.marker, mode.value)
                mode = rule.mode
    return mode
