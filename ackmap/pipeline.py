"""End-to-end precursor map generation.

FASTA → digestion → peptide filter → mass → charge/m/z, with per-protein
failure capture. Coverage is computed separately from the resulting m/z
values (see coverage.calculate_coverage), since windows come from outside.

Examples
--------
>>> params = PipelineParams.for_workflow(Workflow.ACETYL_LIGHT)
>>> result = run_pipeline("human.fasta", params)
>>> buckets = calculate_coverage(result.mz_values(), make_sliding_windows(400, 1000, 25, 5))
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from .constants import (
    DEFAULT_MIN_PEPTIDE_LENGTH,
    DEFAULT_MISSED_CLEAVAGES,
)
from .database.digestion import (
    Enzyme,
    TRYPSIN,
    ARG_C,
    DigestOutcome,
    get_enzyme,
    digest_record,
    filter_peptides,
)
from .database.fasta_reader import ProteinRecord, read_fasta
from .modifications import (
    ModificationProfile,
    CARBAMIDOMETHYL,
    ACETYL_LIGHT,
    ACETYL_HEAVY,
)
from .precursors import PrecursorObservation, build_precursors, precursor_mz_array

logger = logging.getLogger(__name__)


class Workflow(Enum):
    """Sample preparation workflows with preset digestion parameters."""
    TRYPTIC = "tryptic"            # Trypsin, carbamidomethyl C
    ACETYL_LIGHT = "acetyl_light"  # AcK blocks trypsin → Arg-C, light acetyl
    ACETYL_HEAVY = "acetyl_heavy"  # Same, trideuterated acetyl


@dataclass
class PipelineParams:
    """Parameters for precursor map generation."""

    enzyme: Enzyme = TRYPSIN
    profile: ModificationProfile = CARBAMIDOMETHYL
    missed_cleavages: int = DEFAULT_MISSED_CLEAVAGES
    block_proline: bool = True

    # Peptide filter
    min_length: int = DEFAULT_MIN_PEPTIDE_LENGTH
    max_length: Optional[int] = None
    require_residue: Optional[str] = None

    # None: estimated charge per peptide; else enumerate these charges.
    # Either way only charges 2 and 3 are kept.
    charges: Optional[Tuple[int, ...]] = None

    # Keep only the first occurrence of each peptide sequence
    deduplicate: bool = False

    # >1 fans digestion and mass calculation out over processes
    n_workers: int = 1

    def __post_init__(self):
        self.enzyme = get_enzyme(self.enzyme)
        if self.missed_cleavages < 0:
            raise ValueError(f"missed_cleavages must be >= 0, got {self.missed_cleavages}")
        if self.min_length < 1:
            raise ValueError(f"min_length must be >= 1, got {self.min_length}")
        if self.max_length is not None and self.max_length < self.min_length:
            raise ValueError(
                f"max_length ({self.max_length}) must be >= min_length ({self.min_length})"
            )
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")

    @classmethod
    def for_workflow(cls, workflow: Workflow, **overrides) -> 'PipelineParams':
        """Create parameters for a sample preparation workflow.

        Args:
            workflow: Workflow enum
            **overrides: Any PipelineParams field

        Returns:
            PipelineParams with workflow-specific defaults
        """
        if workflow == Workflow.TRYPTIC:
            preset = dict(enzyme=TRYPSIN, profile=CARBAMIDOMETHYL, require_residue=None)
        elif workflow == Workflow.ACETYL_LIGHT:
            preset = dict(enzyme=ARG_C, profile=ACETYL_LIGHT, require_residue="K")
        elif workflow == Workflow.ACETYL_HEAVY:
            preset = dict(enzyme=ARG_C, profile=ACETYL_HEAVY, require_residue="K")
        else:
            raise ValueError(f"Unknown workflow: {workflow}")

        preset.update(overrides)
        return cls(**preset)


@dataclass
class PipelineResult:
    """Output of run_pipeline()."""

    precursors: List[PrecursorObservation] = field(default_factory=list)
    dropped_proteins: List[Tuple[str, str]] = field(default_factory=list)  # (id, reason)
    n_proteins: int = 0
    n_peptides: int = 0

    def mz_values(self) -> np.ndarray:
        return precursor_mz_array(self.precursors)

    def to_dataframe(self):
        from .precursors import precursors_to_dataframe
        return precursors_to_dataframe(self.precursors)


def process_protein(
    record: ProteinRecord,
    params: PipelineParams,
) -> Tuple[DigestOutcome, List[PrecursorObservation]]:
    """Digest, filter and measure one protein.

    A record with non-standard residues comes back with `peptides=None`
    and no precursors. Its peptides are substrings of a validated
    sequence, so the mass step cannot fail afterwards.
    """
    outcome = digest_record(
        record,
        params.enzyme,
        params.missed_cleavages,
        params.block_proline,
    )
    if not outcome.ok:
        return outcome, []

    peptides = filter_peptides(
        outcome.peptides,
        min_length=params.min_length,
        max_length=params.max_length,
        require_residue=params.require_residue,
    )
    precursors = build_precursors(peptides, params.profile, charges=params.charges)

    return DigestOutcome(record.protein_id, peptides), precursors


def _process_chunk(records: List[ProteinRecord], params: PipelineParams):
    return [process_protein(record, params) for record in records]


def _chunked(records: Iterable[ProteinRecord], size: int):
    chunk = []
    for record in records:
        chunk.append(record)
        if len(chunk) == size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


def process_proteins(
    records: Iterable[ProteinRecord],
    params: PipelineParams,
    chunk_size: int = 500,
) -> PipelineResult:
    """Run digestion through precursor calculation over protein records.

    Parameters
    ----------
    records : iterable of ProteinRecord
    params : PipelineParams
    chunk_size : int
        Proteins per worker task when params.n_workers > 1

    Returns
    -------
    result : PipelineResult
        Precursors in input protein order, identical for any n_workers
    """
    if params.n_workers > 1:
        with ProcessPoolExecutor(max_workers=params.n_workers) as executor:
            worker = partial(_process_chunk, params=params)
            per_protein = (
                item
                for chunk_result in executor.map(worker, _chunked(records, chunk_size))
                for item in chunk_result
            )
            return _collect(per_protein, params)

    return _collect((process_protein(record, params) for record in records), params)


def _collect(per_protein, params: PipelineParams) -> PipelineResult:
    result = PipelineResult()
    first_peptide = {}  # sequence -> first Peptide seen

    for idx, (outcome, precursors) in enumerate(per_protein):
        result.n_proteins += 1

        if not outcome.ok:
            logger.warning(f"Dropping {outcome.protein_id}: {outcome.error}")
            result.dropped_proteins.append((outcome.protein_id, outcome.error))
            continue

        if params.deduplicate:
            for peptide in outcome.peptides:
                if first_peptide.setdefault(peptide.sequence, peptide) == peptide:
                    result.n_peptides += 1
            precursors = [
                obs for obs in precursors
                if first_peptide[obs.peptide.sequence] == obs.peptide
            ]
        else:
            result.n_peptides += len(outcome.peptides)

        result.precursors.extend(precursors)

        if (idx + 1) % 5000 == 0:
            logger.info(
                f"  Processed {idx + 1:,} proteins: {len(result.precursors):,} precursors"
            )

    logger.info("✓ Precursor map complete:")
    logger.info(f"  Proteins: {result.n_proteins:,} ({len(result.dropped_proteins):,} dropped)")
    logger.info(f"  Peptides: {result.n_peptides:,}")
    logger.info(f"  Precursors: {len(result.precursors):,}")

    return result


def run_pipeline(
    fasta_path: Union[str, Path],
    params: Optional[PipelineParams] = None,
) -> PipelineResult:
    """Read a FASTA file and build its precursor map.

    Parameters
    ----------
    fasta_path : str or Path
        Protein database
    params : PipelineParams, optional
        Defaults to the TRYPTIC workflow

    Returns
    -------
    result : PipelineResult

    Raises
    ------
    FileNotFoundError, MalformedInputError
        The FASTA file is missing or unparsable; nothing partial is returned
    """
    if params is None:
        params = PipelineParams.for_workflow(Workflow.TRYPTIC)

    logger.info(
        f"Building precursor map: {params.enzyme.name}, {params.profile}, "
        f"{params.missed_cleavages} missed cleavage(s), min length {params.min_length}"
    )

    return process_proteins(read_fasta(fasta_path), params)
