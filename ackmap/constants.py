"""Physical constants and amino acid masses for precursor calculations.

This module provides the physical constants, residue masses and modification
deltas used throughout ackmap. Values are monoisotopic and sourced from NIST
and Unimod.

Constants are provided in both dictionary and ord()-indexed array formats
for compatibility with both standard Python and Numba JIT-compiled code.

Key Features
------------
- PROTON_MASS fixed at 1.007276466 Da (proton, not hydrogen atom!)
- ord()-indexed AA_MASSES array for Numba code (20 standard residues only)
- Carbamidomethyl and light/heavy acetyl-lysine deltas
- Heavy acetyl delta derived from the light delta, never looked up

Sources
-------
- NIST physical constants: https://physics.nist.gov/cgi-bin/cuu/Value
- IUPAC amino acid masses: https://www.unimod.org/masses.html
- Unimod modification masses: https://www.unimod.org/modifications_list.php
"""

import numpy as np

# =============================================================================
# Fundamental Physical Constants (NIST values)
# =============================================================================

# Proton mass (NOT hydrogen atom mass!)
# Used for every m/z conversion in the package
PROTON_MASS = 1.007276466  # Da

# Hydrogen atom (1H) monoisotopic mass
HYDROGEN_MASS = 1.00782503207  # Da

# Deuterium (2H) monoisotopic mass
DEUTERIUM_MASS = 2.0141017778  # Da

# Water mass (H2O)
# Calculated: 2*1.007825 + 15.994915 = 18.010564684
H2O_MASS = 18.010564684  # Da

# =============================================================================
# Amino Acid Monoisotopic Masses (Da)
# =============================================================================

# Standard 20 amino acids (unmodified)
# Values are monoisotopic masses of residues (not including N/C terminals)
AA_MASSES_DICT = {
    'A': 71.037114,   # Alanine
    'R': 156.101111,  # Arginine
    'N': 114.042927,  # Asparagine
    'D': 115.026943,  # Aspartic acid
    'C': 103.009185,  # Cysteine (unmodified)
    'E': 129.042593,  # Glutamic acid
    'Q': 128.058578,  # Glutamine
    'G': 57.021464,   # Glycine
    'H': 137.058912,  # Histidine
    'I': 113.084064,  # Isoleucine
    'L': 113.084064,  # Leucine
    'K': 128.094963,  # Lysine
    'M': 131.040485,  # Methionine
    'F': 147.068414,  # Phenylalanine
    'P': 97.052764,   # Proline
    'S': 87.032028,   # Serine
    'T': 101.047679,  # Threonine
    'W': 186.079313,  # Tryptophan
    'Y': 163.063320,  # Tyrosine
    'V': 99.068414,   # Valine
}

STANDARD_AMINO_ACIDS = frozenset(AA_MASSES_DICT)

# =============================================================================
# ord()-Indexed Arrays for Numba
# =============================================================================

# Access via: AA_MASSES[ord('A')] → 71.037114
# Non-standard codes stay at 0.0; callers validate before summing.
AA_MASSES = np.zeros(256, dtype=np.float64)

for aa, mass in AA_MASSES_DICT.items():
    AA_MASSES[ord(aa)] = mass

# =============================================================================
# Modification Masses
# =============================================================================

# Carbamidomethylation of Cysteine (Unimod:4), iodoacetamide adduct
# C2H3NO: 57.021464 Da
CARBAMIDOMETHYL_MASS = 57.021464

# Acetylation of Lysine (Unimod:1), unlabeled
# C2H2O: 42.010565 Da
ACETYL_MASS = 42.010565

# Acetylation with trideuterated acetyl (Unimod:56, Acetyl:2H(3))
# Three acetyl hydrogens replaced by deuterium
ACETYL_HEAVY_MASS = ACETYL_MASS - 3 * HYDROGEN_MASS + 3 * DEUTERIUM_MASS

# Per-site mass offset between heavy and light acetyl-lysine
ACETYL_HEAVY_SHIFT = 3 * (DEUTERIUM_MASS - HYDROGEN_MASS)

# =============================================================================
# Charge Estimation
# =============================================================================

# Residues protonated in solution (free lysine counts)
BASIC_RESIDUES_TRYPTIC = "KRH"

# Acetylated lysine carries no charge
BASIC_RESIDUES_ACETYL = "RH"

# Only these precursor charges are used downstream
RETAINED_CHARGES = (2, 3)

# =============================================================================
# Default Digestion Settings
# =============================================================================

DEFAULT_MIN_PEPTIDE_LENGTH = 7
DEFAULT_MISSED_CLEAVAGES = 0


# =============================================================================
# Mass Accuracy Validation
# =============================================================================

def validate_constants():
    """Validate that constants are physically reasonable.

    Raises AssertionError if any constant is out of expected range.
    This is a sanity check to catch copy-paste errors or typos.
    """
    # Proton mass should be ~1.007276, NOT 1.007825 (hydrogen atom)
    assert 1.0072 < PROTON_MASS < 1.0073, f"PROTON_MASS is wrong: {PROTON_MASS}"

    # Water mass should be ~18.01
    assert 18.00 < H2O_MASS < 18.02, f"H2O_MASS is wrong: {H2O_MASS}"

    # Deuterium is roughly one neutron heavier than hydrogen
    assert 1.006 < DEUTERIUM_MASS - HYDROGEN_MASS < 1.007, \
        f"Deuterium shift is wrong: {DEUTERIUM_MASS - HYDROGEN_MASS}"

    # Heavy acetyl is ~3.019 Da heavier than light
    assert 3.01 < ACETYL_HEAVY_MASS - ACETYL_MASS < 3.03, \
        f"ACETYL_HEAVY_MASS is wrong: {ACETYL_HEAVY_MASS}"

    # All standard amino acids should have mass > 0
    for aa, mass in AA_MASSES_DICT.items():
        assert mass > 50.0, f"AA {aa} mass is too low: {mass}"
        assert mass < 250.0, f"AA {aa} mass is too high: {mass}"
