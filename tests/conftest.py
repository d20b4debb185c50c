"""Pytest configuration for ackmap tests.

Common fixtures: small FASTA files written to a temporary directory and a
few peptides with hand-computed masses.
"""

import pytest


@pytest.fixture
def simple_peptide():
    """Simple peptide for basic tests."""
    return "PEPTIDE"


@pytest.fixture
def tryptic_peptides():
    """Collection of typical tryptic peptides."""
    return [
        "PEPTIDEK",
        "ACDEK",
        "TESTPEPTIDER",
        "YGGFMTSEK",
        "LGEHNIDVLEGNEQFINAAK",
    ]


@pytest.fixture
def known_peptide_masses():
    """Unmodified neutral masses (residue sum + H2O) for validation."""
    return {
        "PEPTIDE": 799.359964684,
        "ACDEK": 564.221362684,
        "GGGGGGG": 417.160812684,
    }


@pytest.fixture
def write_fasta(tmp_path):
    """Write FASTA text to a temporary file and return its path."""
    def _write(text, name="test.fasta"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write


@pytest.fixture
def small_fasta(write_fasta):
    """Three proteins, one with a non-standard residue."""
    return write_fasta(
        ">sp|P00001|PROT1_HUMAN First protein\n"
        "MAGTEVLKAAGHWNSDERPGASTLKCVEAGR\n"
        "LLNEGTQK\n"
        ">sp|P00002|PROT2_HUMAN Second protein\n"
        "GASTEVLRPDEFGHIK\n"
        ">sp|P00003|PROT3_HUMAN Contains selenocysteine\n"
        "MAGUEVLKAAGHWNSDER\n"
    )
