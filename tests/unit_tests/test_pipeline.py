"""End-to-end tests for precursor map generation."""

import pytest

from ackmap.constants import ACETYL_HEAVY_SHIFT
from ackmap.coverage import calculate_coverage
from ackmap.database import TRYPSIN, ARG_C, read_fasta
from ackmap.exceptions import MalformedInputError
from ackmap.modifications import CARBAMIDOMETHYL, ACETYL_LIGHT, ACETYL_HEAVY
from ackmap.pipeline import (
    PipelineParams,
    PipelineResult,
    Workflow,
    process_protein,
    process_proteins,
    run_pipeline,
)


def summary(result):
    return [(o.peptide.protein_id, o.peptide.sequence, o.charge) for o in result.precursors]


class TestPipelineParams:
    """Test parameter presets and validation."""

    def test_tryptic_preset(self):
        params = PipelineParams.for_workflow(Workflow.TRYPTIC)
        assert params.enzyme is TRYPSIN
        assert params.profile == CARBAMIDOMETHYL
        assert params.require_residue is None
        assert params.min_length == 7
        assert params.missed_cleavages == 0

    def test_acetyl_presets(self):
        light = PipelineParams.for_workflow(Workflow.ACETYL_LIGHT)
        heavy = PipelineParams.for_workflow(Workflow.ACETYL_HEAVY)
        assert light.enzyme is ARG_C and heavy.enzyme is ARG_C
        assert light.profile == ACETYL_LIGHT
        assert heavy.profile == ACETYL_HEAVY
        assert light.require_residue == "K"

    def test_overrides(self):
        params = PipelineParams.for_workflow(Workflow.TRYPTIC, min_length=6, enzyme="arg-c")
        assert params.min_length == 6
        assert params.enzyme is ARG_C

    @pytest.mark.parametrize("kwargs", [
        dict(missed_cleavages=-1),
        dict(min_length=0),
        dict(min_length=7, max_length=5),
        dict(n_workers=0),
        dict(enzyme="pepsin"),
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            PipelineParams(**kwargs)

    def test_retained_charges_not_a_field(self):
        with pytest.raises(TypeError):
            PipelineParams(retained_charges=(1, 2, 3, 4))


class TestRunPipeline:
    """Test the full FASTA → precursor flow."""

    def test_tryptic(self, small_fasta):
        result = run_pipeline(small_fasta, PipelineParams.for_workflow(Workflow.TRYPTIC))

        assert isinstance(result, PipelineResult)
        assert result.n_proteins == 3
        assert result.n_peptides == 4
        assert summary(result) == [
            ("P00001", "MAGTEVLK", 2),
            ("P00001", "LLNEGTQK", 2),
        ]

    def test_dropped_protein_absent(self, small_fasta):
        """Records with invalid residues are listed, never zero-mass."""
        result = run_pipeline(small_fasta)
        assert [pid for pid, _ in result.dropped_proteins] == ["P00003"]
        assert "U" in result.dropped_proteins[0][1]
        assert all(o.peptide.protein_id != "P00003" for o in result.precursors)
        assert all(o.monoisotopic_mass > 0 for o in result.precursors)

    def test_without_proline_rule(self, small_fasta):
        params = PipelineParams.for_workflow(Workflow.TRYPTIC, block_proline=False)
        result = run_pipeline(small_fasta, params)
        assert ("P00002", "GASTEVLR", 2) in summary(result)
        assert ("P00002", "PDEFGHIK", 3) in summary(result)

    def test_acetyl_light(self, small_fasta):
        result = run_pipeline(small_fasta, PipelineParams.for_workflow(Workflow.ACETYL_LIGHT))
        assert summary(result) == [
            ("P00001", "MAGTEVLKAAGHWNSDER", 3),
            ("P00001", "PGASTLKCVEAGR", 2),
            ("P00002", "PDEFGHIK", 2),
        ]
        assert all("K" in o.peptide.sequence for o in result.precursors)

    def test_heavy_light_channels(self, small_fasta):
        light = run_pipeline(small_fasta, PipelineParams.for_workflow(Workflow.ACETYL_LIGHT))
        heavy = run_pipeline(small_fasta, PipelineParams.for_workflow(Workflow.ACETYL_HEAVY))

        assert summary(light) == summary(heavy)
        for lo, hi in zip(light.precursors, heavy.precursors):
            k_count = lo.peptide.sequence.count("K")
            diff = hi.monoisotopic_mass - lo.monoisotopic_mass
            assert abs(diff - k_count * ACETYL_HEAVY_SHIFT) < 1e-9

    def test_explicit_charges(self, small_fasta):
        params = PipelineParams.for_workflow(Workflow.TRYPTIC, charges=(2, 3))
        result = run_pipeline(small_fasta, params)
        # Three PROT1 peptides and one PROT2 peptide, two charges each
        assert len(result.precursors) == 8

    def test_charges_outside_two_and_three_discarded(self, write_fasta):
        path = write_fasta(">P1\nPEPTIDEAAAK\n")
        params = PipelineParams.for_workflow(Workflow.TRYPTIC, charges=(1, 2, 3, 4))
        result = run_pipeline(path, params)
        assert sorted(o.charge for o in result.precursors) == [2, 3]

    def test_deduplicate(self, write_fasta):
        path = write_fasta(">P1\nMAGTEVLKGGGGGGGR\n>P2\nMAGTEVLK\n")
        params = PipelineParams.for_workflow(Workflow.TRYPTIC, charges=(2,))

        assert len(run_pipeline(path, params).precursors) == 3

        params.deduplicate = True
        result = run_pipeline(path, params)
        assert summary(result) == [("P1", "MAGTEVLK", 2), ("P1", "GGGGGGGR", 2)]
        assert result.n_peptides == 2

    def test_malformed_fasta_aborts(self, write_fasta):
        path = write_fasta("MAGTEVLK\n")
        with pytest.raises(MalformedInputError):
            run_pipeline(path)

    def test_coverage_from_result(self, small_fasta):
        result = run_pipeline(small_fasta)
        mz = result.mz_values()
        buckets = calculate_coverage(mz, [(mz.min() - 1, mz.max() + 1)])
        assert buckets[0].fraction == 1.0

    def test_dataframe(self, small_fasta):
        df = run_pipeline(small_fasta).to_dataframe()
        assert list(df["sequence"]) == ["MAGTEVLK", "LLNEGTQK"]


class TestParallel:
    """Process fan-out gives the same output as the serial path."""

    def test_parallel_matches_serial(self, small_fasta):
        serial = process_proteins(
            read_fasta(small_fasta), PipelineParams.for_workflow(Workflow.ACETYL_LIGHT)
        )
        parallel = process_proteins(
            read_fasta(small_fasta),
            PipelineParams.for_workflow(Workflow.ACETYL_LIGHT, n_workers=2),
            chunk_size=1,
        )
        assert parallel.precursors == serial.precursors
        assert parallel.dropped_proteins == serial.dropped_proteins
        assert parallel.n_peptides == serial.n_peptides


class TestProcessProtein:
    """Test single-record processing."""

    def test_short_protein(self):
        from ackmap.database import ProteinRecord
        outcome, precursors = process_protein(ProteinRecord("P1", "PEPTK"), PipelineParams())
        assert outcome.ok
        assert outcome.peptides == []
        assert precursors == []

    def test_invalid_record(self):
        from ackmap.database import ProteinRecord
        outcome, precursors = process_protein(ProteinRecord("P2", "MAGUEVLK"), PipelineParams())
        assert not outcome.ok
        assert outcome.peptides is None
        assert "U" in outcome.error
        assert precursors == []
