"""Spectral library input.

Reads a Spectronaut-style tabular spectral library and extracts precursor m/z
values of acetyl-lysine entries, so measured libraries can be tabulated by the
coverage aggregator next to the theoretical digest.
"""

import logging
import re
from pathlib import Path
from typing import Sequence, Union

import numpy as np
import pandas as pd

from .constants import RETAINED_CHARGES
from .exceptions import MalformedInputError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = (
    "PrecursorCharge",
    "PrecursorMz",
    "StrippedPeptide",
    "ModifiedPeptide",
    "LabeledPeptide",
    "ProteinGroups",
)

# K[Acetyl (K)], K[Acetyl], K(Acetyl), K[+42.0106]
ACETYL_K_PATTERN = re.compile(r"K[\[\(](?:[^\]\)]*Acetyl|\+42\.01)")


def read_spectral_library(
    library_path: Union[str, Path],
    sep: str = "\t",
) -> pd.DataFrame:
    """Read a spectral library table.

    Parameters
    ----------
    library_path : str or Path
        Path to TSV/CSV library export
    sep : str
        Column separator (default: tab)

    Returns
    -------
    df : pd.DataFrame

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    MalformedInputError
        If any required column is missing
    """
    library_path = Path(library_path)
    if not library_path.exists():
        raise FileNotFoundError(f"Spectral library not found: {library_path}")

    df = pd.read_csv(library_path, sep=sep)

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise MalformedInputError(
            f"{library_path.name} lacks required column(s): {', '.join(missing)}"
        )

    logger.info(f"✓ Loaded {len(df):,} library entries from {library_path.name}")
    return df


def is_acetylated(modified_peptide: str) -> bool:
    """True if a modified sequence carries an acetyl group on lysine.

    Examples
    --------
    >>> is_acetylated("_AK[Acetyl (K)]PEPTIDER_")
    True
    >>> is_acetylated("_[Acetyl (Protein N-term)]AKPEPTIDER_")
    False
    """
    return bool(ACETYL_K_PATTERN.search(str(modified_peptide)))


def filter_acetylated(df: pd.DataFrame) -> pd.DataFrame:
    """Keep library rows whose ModifiedPeptide has at least one acetyl-lysine."""
    mask = df["ModifiedPeptide"].map(is_acetylated).astype(bool)
    logger.info(f"  Acetyl-lysine entries: {int(mask.sum()):,} of {len(df):,}")
    return df.loc[mask].reset_index(drop=True)


def precursor_mz_values(
    df: pd.DataFrame,
    charges: Sequence[int] = RETAINED_CHARGES,
    unique: bool = True,
) -> np.ndarray:
    """Precursor m/z values at the given charges.

    Parameters
    ----------
    df : pd.DataFrame
        Library table (typically from filter_acetylated())
    charges : sequence of int
        Precursor charges to keep (default: 2 and 3)
    unique : bool
        Count each (LabeledPeptide, PrecursorCharge) once (default: True).
        Libraries list one row per fragment ion. LabeledPeptide carries the
        label, so light and heavy channels of a peptide stay separate.

    Returns
    -------
    mz : np.ndarray (float64)
    """
    selected = df[df["PrecursorCharge"].isin(list(charges))]
    if unique:
        selected = selected.drop_duplicates(subset=["LabeledPeptide", "PrecursorCharge"])
    return selected["PrecursorMz"].to_numpy(dtype=np.float64)
