"""FASTA file reading and parsing.

Lightweight FASTA parser for proteome digestion. Supports:
- UniProt and generic FASTA formats
- Multi-FASTA files
- Protein ID extraction
- Lazy, streaming iteration

Design principles:
1. Pure Python (no dependencies except pathlib)
2. Memory efficient (generator, one record in memory at a time)
3. Fail loudly on files that are not FASTA at all
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from ..exceptions import MalformedInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProteinRecord:
    """One FASTA entry."""

    protein_id: str
    sequence: str
    description: str = ""

    def __len__(self) -> int:
        return len(self.sequence)


def parse_protein_id(header: str) -> Tuple[str, str]:
    """Extract protein ID and description from FASTA header.

    Supports multiple formats:
    - UniProt: >sp|P12345|NAME_HUMAN Description...
    - UniProt: >tr|A0A123|NAME_HUMAN Description...
    - Generic: >PROTEIN_ID Description...

    Parameters
    ----------
    header : str
        FASTA header line (without leading '>')

    Returns
    -------
    protein_id : str
        Extracted protein identifier
    description : str
        Full header line

    Examples
    --------
    >>> parse_protein_id("sp|P12345|NAME_HUMAN Some protein")
    ('P12345', 'sp|P12345|NAME_HUMAN Some protein')

    >>> parse_protein_id("PROT123 Description here")
    ('PROT123', 'PROT123 Description here')
    """
    description = header.strip()
    if not description:
        raise MalformedInputError("Empty FASTA header")

    first_token = description.split()[0]
    parts = first_token.split('|')
    if len(parts) >= 2 and parts[1]:
        # Second field is accession (P12345, A0A123, etc.)
        protein_id = parts[1]
    else:
        protein_id = first_token

    return protein_id, description


def read_fasta(
    fasta_path: Union[str, Path],
    min_length: int = 0,
) -> Iterator[ProteinRecord]:
    """Lazily read a FASTA file, yielding one ProteinRecord per entry.

    The sequence of a record is the concatenation of all lines between its
    header and the next header (or end of file), with whitespace stripped.

    Parameters
    ----------
    fasta_path : str or Path
        Path to FASTA file
    min_length : int
        Minimum protein length (default: 0, no filter)

    Yields
    ------
    record : ProteinRecord

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    MalformedInputError
        If the file holds no header line, or sequence text precedes the
        first header

    Examples
    --------
    >>> for record in read_fasta("human.fasta", min_length=7):
    ...     print(f"ID: {record.protein_id}, Length: {len(record)}")
    """
    fasta_path = Path(fasta_path)

    if not fasta_path.exists():
        raise FileNotFoundError(f"FASTA file not found: {fasta_path}")

    logger.info(f"Reading FASTA file: {fasta_path.name}")

    n_records = 0
    n_headers = 0
    current_id = None
    current_description = None
    current_seq = []

    with open(fasta_path) as f:
        for line_number, line in enumerate(f, start=1):
            if line.startswith('>'):
                if current_id is not None:
                    record = _finish_record(current_id, current_seq, current_description, min_length)
                    if record is not None:
                        n_records += 1
                        yield record

                n_headers += 1
                current_id, current_description = parse_protein_id(line[1:])
                current_seq = []
            else:
                chunk = ''.join(line.split())
                if not chunk:
                    continue
                if current_id is None:
                    raise MalformedInputError(
                        f"{fasta_path.name}:{line_number}: sequence data before first header"
                    )
                current_seq.append(chunk)

    # Last protein
    if current_id is not None:
        record = _finish_record(current_id, current_seq, current_description, min_length)
        if record is not None:
            n_records += 1
            yield record

    if n_headers == 0:
        raise MalformedInputError(f"No FASTA header found in {fasta_path.name}")

    logger.info(f"✓ Read {n_records:,} proteins from {fasta_path.name}")


def _finish_record(protein_id, seq_chunks, description, min_length):
    sequence = ''.join(seq_chunks)
    if not sequence:
        logger.warning(f"Skipping {protein_id}: empty sequence")
        return None
    if len(sequence) < min_length:
        return None
    return ProteinRecord(protein_id, sequence, description)


def read_multiple_fasta(
    fasta_paths: List[Union[str, Path]],
    min_length: int = 0,
) -> Iterator[ProteinRecord]:
    """Read multiple FASTA files in order.

    Parameters
    ----------
    fasta_paths : List[str or Path]
        List of paths to FASTA files
    min_length : int
        Minimum protein length

    Yields
    ------
    record : ProteinRecord
    """
    for fasta_path in fasta_paths:
        yield from read_fasta(fasta_path, min_length=min_length)
