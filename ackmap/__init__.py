"""ackmap - acetyl-lysine precursor maps from in silico digestion.

Digests a FASTA protein database (trypsin or Arg-C), computes monoisotopic
peptide masses under a modification profile (carbamidomethyl C, light or
heavy acetyl-K), estimates precursor charge, and tabulates how precursor m/z
values distribute over m/z windows.

Pipeline: read_fasta → digest → filter → mass → charge/m/z → coverage
"""

__version__ = "0.1.0"

from ackmap import constants
from ackmap import database
from ackmap import modifications
from ackmap import mass
from ackmap import precursors
from ackmap import coverage
from ackmap import spectral_library
from ackmap import pipeline

from ackmap.exceptions import MalformedInputError, InvalidResidueError
from ackmap.database import (
    ProteinRecord,
    Peptide,
    TRYPSIN,
    ARG_C,
    read_fasta,
    digest_protein,
    filter_peptides,
)
from ackmap.modifications import (
    ModificationProfile,
    UNMODIFIED,
    CARBAMIDOMETHYL,
    ACETYL_LIGHT,
    ACETYL_HEAVY,
)
from ackmap.mass import calculate_peptide_mass
from ackmap.precursors import (
    PrecursorObservation,
    estimate_charge,
    calculate_precursor_mz,
    build_precursors,
)
from ackmap.coverage import CoverageBucket, calculate_coverage, make_sliding_windows
from ackmap.pipeline import PipelineParams, PipelineResult, Workflow, run_pipeline

__all__ = [
    "constants",
    "database",
    "modifications",
    "mass",
    "precursors",
    "coverage",
    "spectral_library",
    "pipeline",
    "MalformedInputError",
    "InvalidResidueError",
    "ProteinRecord",
    "Peptide",
    "TRYPSIN",
    "ARG_C",
    "read_fasta",
    "digest_protein",
    "filter_peptides",
    "ModificationProfile",
    "UNMODIFIED",
    "CARBAMIDOMETHYL",
    "ACETYL_LIGHT",
    "ACETYL_HEAVY",
    "calculate_peptide_mass",
    "PrecursorObservation",
    "estimate_charge",
    "calculate_precursor_mz",
    "build_precursors",
    "CoverageBucket",
    "calculate_coverage",
    "make_sliding_windows",
    "PipelineParams",
    "PipelineResult",
    "Workflow",
    "run_pipeline",
]
