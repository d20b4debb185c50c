"""Precursor charge estimation and m/z calculation.

Charge is estimated by counting basic residues: z = 1 + (number of residues
in the basic set). Free lysine counts for tryptic peptides; acetylated
lysine does not. Only z in RETAINED_CHARGES (2, 3) is kept downstream.

This is a heuristic, not a charge-state distribution model.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import numpy as np
import numba

from .constants import PROTON_MASS, RETAINED_CHARGES, BASIC_RESIDUES_TRYPTIC
from .database.digestion import Peptide
from .mass import calculate_peptide_mass
from .modifications import ModificationProfile, UNMODIFIED

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrecursorObservation:
    """Theoretical precursor: a peptide at one charge under one profile."""

    peptide: Peptide
    profile: ModificationProfile
    monoisotopic_mass: float
    charge: int
    mz: float


def estimate_charge(sequence: str, basic_residues: str = BASIC_RESIDUES_TRYPTIC) -> int:
    """Most probable precursor charge: 1 + count of basic residues.

    Parameters
    ----------
    sequence : str
        Peptide sequence
    basic_residues : str
        Residues that carry a proton ("KRH" tryptic, "RH" acetylated)

    Examples
    --------
    >>> estimate_charge("PEPTIDEK")
    2
    >>> estimate_charge("HPEPTIDEK", "RH")
    2
    """
    return 1 + sum(1 for aa in sequence if aa in basic_residues)


@numba.jit(nopython=True, cache=True)
def calculate_precursor_mz(neutral_mass: float, charge: int) -> float:
    """Calculate precursor m/z from neutral mass.

    Parameters
    ----------
    neutral_mass : float
        Neutral peptide mass
    charge : int
        Precursor charge state

    Returns
    -------
    mz : float
        Precursor m/z value

    Examples
    --------
    >>> mz = calculate_precursor_mz(1000.0, 2)
    >>> # Returns 501.007276466
    """
    return (neutral_mass + charge * PROTON_MASS) / charge


def build_precursors(
    peptides: Iterable[Peptide],
    profile: ModificationProfile = UNMODIFIED,
    charges: Optional[Sequence[int]] = None,
) -> List[PrecursorObservation]:
    """Compute precursor observations for a set of peptides.

    Parameters
    ----------
    peptides : iterable of Peptide
    profile : ModificationProfile
        Modifications for the mass; also selects the basic residue set
    charges : sequence of int, optional
        None (default): one observation per peptide at its estimated charge.
        Otherwise one observation per listed charge. Either way only
        charges in RETAINED_CHARGES (2 and 3) are kept.

    Returns
    -------
    observations : List[PrecursorObservation]
        A peptide yields zero, one or several observations.

    Raises
    ------
    InvalidResidueError
        From the mass calculation, for non-standard residues
    """
    retained = set(RETAINED_CHARGES)
    basic_residues = profile.basic_residues

    observations = []
    n_discarded = 0
    for peptide in peptides:
        mass = calculate_peptide_mass(peptide.sequence, profile)

        if charges is None:
            peptide_charges = (estimate_charge(peptide.sequence, basic_residues),)
        else:
            peptide_charges = charges

        for charge in peptide_charges:
            if charge not in retained:
                n_discarded += 1
                continue
            mz = calculate_precursor_mz(mass, charge)
            observations.append(PrecursorObservation(peptide, profile, mass, charge, mz))

    logger.debug(
        f"Built {len(observations):,} precursors ({profile}), "
        f"discarded {n_discarded:,} outside charges {sorted(retained)}"
    )
    return observations


def precursor_mz_array(observations: Iterable[PrecursorObservation]) -> np.ndarray:
    """Extract m/z values as float64 array."""
    return np.array([obs.mz for obs in observations], dtype=np.float64)


def precursors_to_dataframe(observations: Iterable[PrecursorObservation]):
    """Tabulate observations as a pandas DataFrame.

    Columns: sequence, protein_id, start, length, profile, monoisotopic_mass,
    charge, mz.
    """
    import pandas as pd

    columns = [
        "sequence", "protein_id", "start", "length",
        "profile", "monoisotopic_mass", "charge", "mz",
    ]
    rows = [
        (
            obs.peptide.sequence,
            obs.peptide.protein_id,
            obs.peptide.start,
            obs.peptide.length,
            str(obs.profile),
            obs.monoisotopic_mass,
            obs.charge,
            obs.mz,
        )
        for obs in observations
    ]
    return pd.DataFrame(rows, columns=columns)
