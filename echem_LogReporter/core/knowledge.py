# echem_LogReporter/core/knowledge.py
from __future__ import annotations
from types import MappingProxyType
from typing import Mapping

from .model import ElementProperties, ElementSymbol, ExperimentMode, Reaction

REACTIONS: Mapping[ExperimentMode, Reaction] = MappingProxyType({
    ExperimentMode.POTENTIOSTATIC: Reaction(
        molecular="2Ag + 2KCl + 2H2O -> 2AgCl + 2KOH + H2",
        ionic="Ag + Cl- -> AgCl + e-",
        comment="Anodic chloridation of the silver electrode at fixed potential; "
                "the AgCl layer grows while the current decays as the film thickens.",
    ),
    ExperimentMode.CYCLIC_VOLTAMMETRY: Reaction(
        molecular="AgNO3 + KCl <-> AgCl + KNO3",
        ionic="Ag+ + e- <-> Ag",
        comment="Reversible deposition/stripping of silver: the cathodic peak marks "
                "Ag+ reduction, the anodic peak the oxidative dissolution of the deposit.",
    ),
    ExperimentMode.CHRONOAMPEROMETRY: Reaction(
        molecular="4AgNO3 + 2H2O -> 4Ag + O2 + 4HNO3",
        ionic="Ag+ + e- -> Ag",
        comment="Potential-step electrodeposition of silver; after nucleation the "
                "current follows diffusion-limited (Cottrell) decay.",
    ),
})

ELEMENTS: Mapping[ElementSymbol, ElementProperties] = MappingProxyType({
    ElementSymbol.AG: ElementProperties(
        name="Silver",
        photosensitive=True,
        structure="face-centred cubic metal",
        note="Silver halides darken under illumination; AgCl films give the "
             "electrode a photo-electrochemical response.",
    ),
    ElementSymbol.CL: ElementProperties(
        name="Chlorine",
        photosensitive=False,
        structure="diatomic molecular gas",
        note="Present as chloride in the electrolyte; forms the sparingly soluble AgCl.",
    ),
    ElementSymbol.N: ElementProperties(
        name="Nitrogen",
        photosensitive=False,
        structure="diatomic molecular gas",
        note="Enters as the nitrate counter-ion of the silver salt.",
    ),
    ElementSymbol.O: ElementProperties(
        name="Oxygen",
        photosensitive=False,
        structure="diatomic molecular gas",
        note="Evolved at the counter electrode during aqueous electrolysis.",
    ),
    ElementSymbol.K: ElementProperties(
        name="Potassium",
        photosensitive=False,
        structure="body-centred cubic metal",
        note="Spectator cation of the supporting electrolyte.",
    ),
})

def reaction_for(mode: ExperimentMode) -> Reaction | None:
    if not isinstance(mode, ExperimentMode):
        raise TypeError(f"expected ExperimentMode, got {type(mode).__name__}")
    return REACTIONS.get(mode)

def properties_for(symbol: ElementSymbol) -> ElementProperties | None:
    if not isinstance(symbol, ElementSymbol):
        raise TypeError(f"expected ElementSymbol, got {type(symbol).__name__}")
    return ELEMENTS.get(symbol)
