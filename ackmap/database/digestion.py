"""Protein digestion for precursor map generation.

In silico digestion of protein sequences with support for:
- Trypsin specificity (cleaves after K/R, blocked by P)
- Arg-C specificity (cleaves after R only, models acetyl-blocked lysines)
- Missed cleavages
- Caller-side length and residue filtering
- Per-record failure capture for batch digestion

The engine emits every candidate peptide. Length and lysine filtering are
left to `filter_peptides()` so the cleavage rules can be tested on their own.

Performance
-----------
~1000-5000 proteins/second on modern CPU
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..constants import (
    STANDARD_AMINO_ACIDS,
    DEFAULT_MIN_PEPTIDE_LENGTH,
    DEFAULT_MISSED_CLEAVAGES,
)
from ..exceptions import InvalidResidueError, find_invalid_residues
from .fasta_reader import ProteinRecord

logger = logging.getLogger(__name__)


# =============================================================================
# Enzymes
# =============================================================================

@dataclass(frozen=True)
class Enzyme:
    """Cleavage rule: cut C-terminal to `cleave_after` unless next residue is in `blocked_by`."""

    name: str
    cleave_after: str
    blocked_by: str = ""


TRYPSIN = Enzyme("trypsin", cleave_after="KR", blocked_by="P")

# Acetylated lysines resist trypsin, so AcK peptides look like an Arg-C digest
ARG_C = Enzyme("arg-c", cleave_after="R")

ENZYMES = {enzyme.name: enzyme for enzyme in (TRYPSIN, ARG_C)}


def get_enzyme(enzyme) -> Enzyme:
    """Resolve an Enzyme or its name ('trypsin', 'arg-c')."""
    if isinstance(enzyme, Enzyme):
        return enzyme
    try:
        return ENZYMES[str(enzyme).lower()]
    except KeyError:
        raise ValueError(
            f"Unknown enzyme: {enzyme!r} (expected one of {sorted(ENZYMES)})"
        ) from None


@dataclass(frozen=True)
class Peptide:
    """Contiguous substring of a protein bounded by cleavage sites."""

    sequence: str
    protein_id: str
    start: int = 0  # 0-based offset in the protein

    @property
    def length(self) -> int:
        return len(self.sequence)


@dataclass(frozen=True)
class DigestOutcome:
    """Digestion result for one protein.

    `peptides` is None when the record failed; `error` then holds the reason.
    An empty list is a successful digest with no peptides.
    """

    protein_id: str
    peptides: Optional[List[Peptide]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.peptides is not None


# =============================================================================
# Core digestion
# =============================================================================

def find_cleavage_sites(
    sequence: str,
    enzyme: Enzyme = TRYPSIN,
    block_proline: bool = True,
) -> List[int]:
    """Return cut positions, including both sequence ends.

    A cut position `i` means the peptide boundary lies before `sequence[i]`.
    Result always starts with 0 and ends with len(sequence).

    Examples
    --------
    >>> find_cleavage_sites("PEPTIDEKRPAGELNK")
    [0, 8, 16]
    >>> find_cleavage_sites("PEPTIDEKRPAGELNK", block_proline=False)
    [0, 8, 9, 16]
    """
    blocked_by = enzyme.blocked_by if block_proline else ""

    sites = [0]
    for i, aa in enumerate(sequence[:-1]):
        if aa in enzyme.cleave_after and sequence[i + 1] not in blocked_by:
            sites.append(i + 1)
    sites.append(len(sequence))
    return sites


def digest_sequence(
    sequence: str,
    protein_id: str = "",
    enzyme=TRYPSIN,
    missed_cleavages: int = DEFAULT_MISSED_CLEAVAGES,
    block_proline: bool = True,
) -> List[Peptide]:
    """Digest a single protein sequence.

    Parameters
    ----------
    sequence : str
        Protein sequence (20 standard amino acids)
    protein_id : str
        Protein identifier stored on each peptide
    enzyme : Enzyme or str
        TRYPSIN (default) or ARG_C
    missed_cleavages : int
        Number of missed cleavages allowed (default: 0)
    block_proline : bool
        Honour the enzyme's proline block (default: True). Set False to
        cleave K/R even when followed by P.

    Returns
    -------
    peptides : List[Peptide]
        All candidate peptides, ordered by missed cleavages then position.
        No length filtering.

    Raises
    ------
    InvalidResidueError
        If the sequence contains non-standard residues

    Examples
    --------
    >>> [p.sequence for p in digest_sequence("PEPTIDEKRPAGELNK")]
    ['PEPTIDEK', 'RPAGELNK']
    """
    if missed_cleavages < 0:
        raise ValueError(f"missed_cleavages must be >= 0, got {missed_cleavages}")

    invalid = find_invalid_residues(sequence, STANDARD_AMINO_ACIDS)
    if invalid:
        raise InvalidResidueError(sequence, invalid, protein_id)

    if not sequence:
        return []

    sites = find_cleavage_sites(sequence, get_enzyme(enzyme), block_proline)

    peptides = []
    for mc in range(missed_cleavages + 1):
        for i in range(len(sites) - mc - 1):
            start = sites[i]
            end = sites[i + mc + 1]
            peptides.append(Peptide(sequence[start:end], protein_id, start))

    return peptides


def digest_protein(
    record: ProteinRecord,
    enzyme=TRYPSIN,
    missed_cleavages: int = DEFAULT_MISSED_CLEAVAGES,
    block_proline: bool = True,
) -> List[Peptide]:
    """Digest a ProteinRecord. See `digest_sequence()`."""
    return digest_sequence(
        record.sequence,
        record.protein_id,
        enzyme=enzyme,
        missed_cleavages=missed_cleavages,
        block_proline=block_proline,
    )


# =============================================================================
# Caller-side filtering
# =============================================================================

def filter_peptides(
    peptides: Iterable[Peptide],
    min_length: int = DEFAULT_MIN_PEPTIDE_LENGTH,
    max_length: Optional[int] = None,
    require_residue: Optional[str] = None,
) -> List[Peptide]:
    """Keep peptides within length bounds that contain `require_residue`.

    Parameters
    ----------
    peptides : iterable of Peptide
    min_length : int
        Minimum peptide length (default: 7)
    max_length : int, optional
        Maximum peptide length (default: no limit)
    require_residue : str, optional
        Keep only peptides containing at least one of these residues
        ("K" for the acetyl-lysine workflow)

    Returns
    -------
    peptides : List[Peptide]
    """
    kept = []
    for peptide in peptides:
        if peptide.length < min_length:
            continue
        if max_length is not None and peptide.length > max_length:
            continue
        if require_residue and not any(aa in peptide.sequence for aa in require_residue):
            continue
        kept.append(peptide)
    return kept


# =============================================================================
# Batch digestion
# =============================================================================

def digest_record(
    record: ProteinRecord,
    enzyme=TRYPSIN,
    missed_cleavages: int = DEFAULT_MISSED_CLEAVAGES,
    block_proline: bool = True,
) -> DigestOutcome:
    """Digest one protein, turning InvalidResidueError into a failed outcome.

    Returns
    -------
    outcome : DigestOutcome
        `peptides=None` and the error message when the sequence holds
        non-standard residues
    """
    try:
        peptides = digest_protein(record, enzyme, missed_cleavages, block_proline)
    except InvalidResidueError as e:
        return DigestOutcome(record.protein_id, None, str(e))
    return DigestOutcome(record.protein_id, peptides)


def digest_protein_list(
    proteins: Iterable[ProteinRecord],
    enzyme=TRYPSIN,
    missed_cleavages: int = DEFAULT_MISSED_CLEAVAGES,
    block_proline: bool = True,
) -> List[DigestOutcome]:
    """Digest proteins without peptide filtering or mass calculation.

    Standalone batch API; run_pipeline() goes through digest_record() per
    protein instead.

    Parameters
    ----------
    proteins : iterable of ProteinRecord
        Typically from read_fasta()
    enzyme : Enzyme or str
    missed_cleavages : int
    block_proline : bool

    Returns
    -------
    outcomes : List[DigestOutcome]
        One outcome per input record, in input order. Records with invalid
        residues have `peptides=None`.
    """
    enzyme = get_enzyme(enzyme)

    outcomes = []
    n_failed = 0
    total_peptides = 0

    for idx, record in enumerate(proteins):
        outcome = digest_record(record, enzyme, missed_cleavages, block_proline)
        outcomes.append(outcome)

        if not outcome.ok:
            logger.warning(f"Dropping {record.protein_id}: {outcome.error}")
            n_failed += 1
            continue

        total_peptides += len(outcome.peptides)

        if (idx + 1) % 5000 == 0:
            logger.info(f"  Digested {idx + 1:,} proteins: {total_peptides:,} peptides")

    logger.info(
        f"✓ {enzyme.name} digest: {len(outcomes) - n_failed:,} proteins, "
        f"{total_peptides:,} peptides, {n_failed:,} dropped"
    )

    return outcomes
