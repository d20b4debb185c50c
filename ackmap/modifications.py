"""Modification profiles for peptide mass calculation.

A ModificationProfile says which residue-level mass deltas apply to a
peptide. Fixed modifications are always applied to every matching residue;
variable modifications are the per-workflow choice (light or heavy
acetyl-lysine).

Key Features
------------
- Explicit Enum members instead of boolean toggles
- Validated at construction (light and heavy acetyl cannot be combined)
- Per-residue mass deltas derived from the central constants

Examples
--------
>>> profile = ModificationProfile.from_names(fixed=["Carbamidomethyl"], variable=["Acetyl"])
>>> profile.residue_deltas()
{'C': 57.021464, 'K': 42.010565}
>>> profile == ACETYL_LIGHT
True
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable

from .constants import (
    CARBAMIDOMETHYL_MASS,
    ACETYL_MASS,
    ACETYL_HEAVY_MASS,
    BASIC_RESIDUES_TRYPTIC,
    BASIC_RESIDUES_ACETYL,
)


class FixedModification(Enum):
    """Modifications applied to every occurrence of their residue."""
    CARBAMIDOMETHYL = "Carbamidomethyl"  # C, iodoacetamide alkylation

    @property
    def residue(self) -> str:
        return _RESIDUE[self]

    @property
    def mass(self) -> float:
        return _MASS[self]


class VariableModification(Enum):
    """Workflow-dependent lysine modifications."""
    ACETYL = "Acetyl"              # K, unlabeled
    ACETYL_HEAVY = "Acetyl:2H(3)"  # K, trideuterated

    @property
    def residue(self) -> str:
        return _RESIDUE[self]

    @property
    def mass(self) -> float:
        return _MASS[self]


_RESIDUE = {
    FixedModification.CARBAMIDOMETHYL: "C",
    VariableModification.ACETYL: "K",
    VariableModification.ACETYL_HEAVY: "K",
}

_MASS = {
    FixedModification.CARBAMIDOMETHYL: CARBAMIDOMETHYL_MASS,
    VariableModification.ACETYL: ACETYL_MASS,
    VariableModification.ACETYL_HEAVY: ACETYL_HEAVY_MASS,
}


@dataclass(frozen=True)
class ModificationProfile:
    """Set of fixed and variable modifications applied to a peptide."""

    fixed: FrozenSet[FixedModification] = field(default_factory=frozenset)
    variable: FrozenSet[VariableModification] = field(default_factory=frozenset)

    def __post_init__(self):
        # Accept any iterable, store frozensets
        object.__setattr__(self, "fixed", frozenset(self.fixed))
        object.__setattr__(self, "variable", frozenset(self.variable))

        for mod in self.fixed:
            if not isinstance(mod, FixedModification):
                raise TypeError(f"Not a fixed modification: {mod!r}")
        for mod in self.variable:
            if not isinstance(mod, VariableModification):
                raise TypeError(f"Not a variable modification: {mod!r}")

        residues = [mod.residue for mod in self.variable]
        if len(residues) != len(set(residues)):
            raise ValueError(
                f"Conflicting variable modifications on the same residue: "
                f"{sorted(mod.value for mod in self.variable)}"
            )

    @classmethod
    def from_names(
        cls,
        fixed: Iterable[str] = (),
        variable: Iterable[str] = (),
    ) -> 'ModificationProfile':
        """Build a profile from Unimod-style names ("Carbamidomethyl", "Acetyl")."""
        try:
            fixed_mods = frozenset(FixedModification(name) for name in fixed)
            variable_mods = frozenset(VariableModification(name) for name in variable)
        except ValueError as e:
            raise ValueError(f"Unknown modification: {e}") from None
        return cls(fixed=fixed_mods, variable=variable_mods)

    @property
    def is_acetylated(self) -> bool:
        return any(mod.residue == "K" for mod in self.variable)

    @property
    def basic_residues(self) -> str:
        """Residues that carry a proton under this profile."""
        return BASIC_RESIDUES_ACETYL if self.is_acetylated else BASIC_RESIDUES_TRYPTIC

    def residue_deltas(self) -> Dict[str, float]:
        """Per-occurrence mass delta for each modified residue."""
        deltas = {}
        for mod in sorted(self.fixed | self.variable, key=lambda m: m.value):
            deltas[mod.residue] = deltas.get(mod.residue, 0.0) + mod.mass
        return dict(sorted(deltas.items()))

    def __str__(self) -> str:
        names = sorted(mod.value for mod in self.fixed | self.variable)
        return "+".join(names) if names else "Unmodified"


UNMODIFIED = ModificationProfile()

CARBAMIDOMETHYL = ModificationProfile(fixed={FixedModification.CARBAMIDOMETHYL})

ACETYL_LIGHT = ModificationProfile(
    fixed={FixedModification.CARBAMIDOMETHYL},
    variable={VariableModification.ACETYL},
)

ACETYL_HEAVY = ModificationProfile(
    fixed={FixedModification.CARBAMIDOMETHYL},
    variable={VariableModification.ACETYL_HEAVY},
)
