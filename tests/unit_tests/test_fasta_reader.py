"""Tests for FASTA parsing."""

import tempfile
from pathlib import Path

import pytest

from ackmap.database import ProteinRecord, read_fasta, read_multiple_fasta, parse_protein_id
from ackmap.exceptions import MalformedInputError


class TestParseProteinId:
    """Test protein ID extraction from headers."""

    def test_parse_uniprot_id(self):
        """UniProt format: sp|P12345|NAME_HUMAN."""
        protein_id, desc = parse_protein_id("sp|P12345|NAME_HUMAN Some protein")
        assert protein_id == "P12345"
        assert desc == "sp|P12345|NAME_HUMAN Some protein"

    def test_parse_trembl_id(self):
        protein_id, _ = parse_protein_id("tr|A0A123|NAME_HUMAN Uncharacterized")
        assert protein_id == "A0A123"

    def test_parse_generic_id(self):
        protein_id, desc = parse_protein_id("PROT123 Description here")
        assert protein_id == "PROT123"
        assert desc == "PROT123 Description here"

    def test_pipe_in_description_ignored(self):
        """Only the first token is checked for UniProt pipes."""
        protein_id, _ = parse_protein_id("PROT123 fragment a|b")
        assert protein_id == "PROT123"

    def test_empty_header(self):
        with pytest.raises(MalformedInputError):
            parse_protein_id("   ")


class TestReadFasta:
    """Test FASTA file reading."""

    def test_read_fasta_basic(self):
        """Test basic FASTA reading with a temporary file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.fasta', delete=False) as f:
            f.write(">sp|P12345|TEST_HUMAN Test protein\n")
            f.write("PEPTIDEKRPAGELNK\n")
            f.write(">sp|Q98765|TEST2_HUMAN Another protein\n")
            f.write("SEQENCEK\n")
            fasta_path = f.name

        try:
            proteins = list(read_fasta(fasta_path))
            assert len(proteins) == 2

            assert proteins[0] == ProteinRecord(
                "P12345", "PEPTIDEKRPAGELNK", "sp|P12345|TEST_HUMAN Test protein"
            )
            assert proteins[1].protein_id == "Q98765"
            assert proteins[1].sequence == "SEQENCEK"

        finally:
            Path(fasta_path).unlink()

    def test_multiline_sequence_joined(self, write_fasta):
        """Sequence lines are concatenated, whitespace stripped."""
        path = write_fasta(">P1\nMAGT EVLK\n  AAGH\r\n\nWNSD\n")
        (record,) = read_fasta(path)
        assert record.sequence == "MAGTEVLKAAGHWNSD"
        assert len(record) == 16

    def test_lazy(self, write_fasta):
        """read_fasta returns an iterator, not a list."""
        path = write_fasta(">P1\nMAGTEVLK\n>P2\nAAGHWNSD\n")
        records = read_fasta(path)
        assert next(records).protein_id == "P1"
        assert next(records).protein_id == "P2"
        with pytest.raises(StopIteration):
            next(records)

    def test_min_length(self, write_fasta):
        path = write_fasta(">P1 Protein 1\nSHORTSEQ\n>P2 Protein 2\nSHRT\n")
        proteins = list(read_fasta(path, min_length=7))
        assert [p.protein_id for p in proteins] == ["P1"]

    def test_empty_sequence_skipped(self, write_fasta):
        path = write_fasta(">P1\n>P2\nMAGTEVLK\n")
        proteins = list(read_fasta(path))
        assert [p.protein_id for p in proteins] == ["P2"]

    def test_no_header_raises(self, write_fasta):
        path = write_fasta("MAGTEVLK\nAAGHWNSD\n")
        with pytest.raises(MalformedInputError):
            list(read_fasta(path))

    def test_empty_file_raises(self, write_fasta):
        path = write_fasta("")
        with pytest.raises(MalformedInputError):
            list(read_fasta(path))

    def test_sequence_before_header_raises(self, write_fasta):
        path = write_fasta("MAGT\n>P1\nEVLK\n")
        with pytest.raises(MalformedInputError):
            list(read_fasta(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list(read_fasta(tmp_path / "missing.fasta"))

    def test_read_multiple(self, write_fasta):
        first = write_fasta(">P1\nMAGTEVLK\n", name="a.fasta")
        second = write_fasta(">P2\nAAGHWNSD\n", name="b.fasta")
        proteins = list(read_multiple_fasta([first, second]))
        assert [p.protein_id for p in proteins] == ["P1", "P2"]
