"""Monoisotopic peptide mass calculation.

Numba-compiled residue summation over ord()-encoded peptides, plus a string
API that validates the sequence and adds modification deltas from a
ModificationProfile.

All masses are monoisotopic, double precision, and never rounded here.

Examples
--------
>>> mass = calculate_peptide_mass("PEPTIDE")
>>> # Returns ~799.359965
>>> mass = calculate_peptide_mass("ACDEK", CARBAMIDOMETHYL)
>>> # Returns ~621.242827 (+57.021464 on C)
"""

from typing import Iterable

import numpy as np
import numba

from .constants import AA_MASSES, H2O_MASS, STANDARD_AMINO_ACIDS
from .exceptions import InvalidResidueError, find_invalid_residues
from .modifications import ModificationProfile, UNMODIFIED


def encode_peptide_to_ord(peptide: str) -> np.ndarray:
    """Encode peptide string to ord() array for Numba processing.

    Parameters
    ----------
    peptide : str
        Peptide sequence (uppercase, standard 20 amino acids)

    Returns
    -------
    peptide_ord : np.ndarray (uint8)
        Array of ord() values for each amino acid
    """
    return np.array([ord(c) for c in peptide], dtype=np.uint8)


@numba.jit(nopython=True, cache=True)
def calculate_neutral_mass(peptide_ord: np.ndarray) -> float:
    """Calculate unmodified neutral peptide mass from ord() array.

    Parameters
    ----------
    peptide_ord : np.ndarray (uint8)
        Peptide sequence as ord() values

    Returns
    -------
    mass : float
        Neutral peptide mass including terminal H2O
    """
    total = 0.0
    for i in range(len(peptide_ord)):
        total += AA_MASSES[peptide_ord[i]]
    return total + H2O_MASS  # Add water for complete peptide


def validate_sequence(sequence: str, protein_id: str = "") -> None:
    """Raise InvalidResidueError unless `sequence` is non-empty standard residues."""
    if not sequence:
        raise InvalidResidueError(sequence, "", protein_id)
    invalid = find_invalid_residues(sequence, STANDARD_AMINO_ACIDS)
    if invalid:
        raise InvalidResidueError(sequence, invalid, protein_id)


def calculate_peptide_mass(
    sequence: str,
    profile: ModificationProfile = UNMODIFIED,
) -> float:
    """Calculate monoisotopic neutral peptide mass under a modification profile.

    mass = sum(residue masses) + H2O + sum over modified residues of
    (occurrences × per-site delta)

    Parameters
    ----------
    sequence : str
        Peptide sequence (20 standard amino acids)
    profile : ModificationProfile
        Fixed/variable modifications (default: UNMODIFIED)

    Returns
    -------
    float
        Neutral peptide mass in Daltons

    Raises
    ------
    InvalidResidueError
        If the sequence is empty or contains non-standard residues
    """
    validate_sequence(sequence)

    mass = calculate_neutral_mass(encode_peptide_to_ord(sequence))
    for residue, delta in profile.residue_deltas().items():
        mass += sequence.count(residue) * delta
    return mass


def calculate_peptide_masses(
    sequences: Iterable[str],
    profile: ModificationProfile = UNMODIFIED,
) -> np.ndarray:
    """Vectorised wrapper around calculate_peptide_mass().

    Returns
    -------
    masses : np.ndarray (float64)
    """
    return np.array(
        [calculate_peptide_mass(seq, profile) for seq in sequences],
        dtype=np.float64,
    )
