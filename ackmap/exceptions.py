"""Exceptions raised by the digestion pipeline."""


class MalformedInputError(ValueError):
    """Input file cannot be parsed (FASTA without headers, library without columns)."""


class InvalidResidueError(ValueError):
    """Sequence contains a character outside the 20 standard amino acids.

    Attributes
    ----------
    sequence : str
        The offending sequence
    residues : str
        Sorted, deduplicated invalid characters
    protein_id : str
        Source protein, empty when unknown
    """

    def __init__(self, sequence: str, residues: str, protein_id: str = ""):
        self.sequence = sequence
        self.residues = residues
        self.protein_id = protein_id
        where = f" in {protein_id}" if protein_id else ""
        if residues:
            super().__init__(f"Invalid residue(s) {residues!r}{where}")
        else:
            super().__init__(f"Empty sequence{where}")


def find_invalid_residues(sequence: str, alphabet) -> str:
    """Return sorted invalid characters of `sequence` ('' if none)."""
    return ''.join(sorted(set(sequence) - set(alphabet)))
