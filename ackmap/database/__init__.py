"""Protein database input and in silico digestion.

- FASTA file reading (lazy, UniProt-aware ID parsing)
- Trypsin and Arg-C digestion with missed cleavages
- Caller-side peptide filtering (length, required residue)
- Per-record failure capture for batch digestion
"""

from .fasta_reader import (
    ProteinRecord,
    read_fasta,
    read_multiple_fasta,
    parse_protein_id,
)

from .digestion import (
    Enzyme,
    Peptide,
    DigestOutcome,
    TRYPSIN,
    ARG_C,
    ENZYMES,
    get_enzyme,
    find_cleavage_sites,
    digest_sequence,
    digest_protein,
    filter_peptides,
    digest_record,
    digest_protein_list,
)

__all__ = [
    # FASTA reading
    'ProteinRecord',
    'read_fasta',
    'read_multiple_fasta',
    'parse_protein_id',

    # Protein digestion
    'Enzyme',
    'Peptide',
    'DigestOutcome',
    'TRYPSIN',
    'ARG_C',
    'ENZYMES',
    'get_enzyme',
    'find_cleavage_sites',
    'digest_sequence',
    'digest_protein',
    'filter_peptides',
    'digest_record',
    'digest_protein_list',
]
