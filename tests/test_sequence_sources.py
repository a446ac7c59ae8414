"""
Tests for the chromosome sequence providers.
"""
import os

import pytest
from pyfaidx import Fasta

import txseq_lite as sl
from txseq_lite import DataError
from test_utils import write_fasta


class TestSliceSequence:
    """Test 1-based inclusive slicing."""

    def test_inclusive_range(self):
        assert sl.slice_sequence("ACGTACGTAC", 2, 4) == "CGT"
        assert sl.slice_sequence("ACGTACGTAC", 1, 10) == "ACGTACGTAC"
        assert sl.slice_sequence("ACGTACGTAC", 10, 10) == "C"

    def test_empty_range(self):
        assert sl.slice_sequence("ACGT", 3, 2) == ""

    @pytest.mark.parametrize("start,end", [(0, 2), (3, 5), (4, 1), (-1, 2)])
    def test_out_of_bounds(self, start, end):
        with pytest.raises(DataError):
            sl.slice_sequence("ACGT", start, end)

    def test_fasta_record(self, tmp_path):
        path = str(tmp_path / "genome.fa")
        write_fasta(path, {"chr1": "ACGTACGTAC" * 10}, line_width=7)
        with Fasta(path) as fasta:
            assert sl.slice_sequence(fasta["chr1"], 9, 12) == "ACAC"


class TestPathSource:
    """Test the one-file-per-chromosome directory provider."""

    def test_list_available_strips_extension(self, fasta_dir):
        with open(os.path.join(fasta_dir, "notes.txt"), "w") as f:
            f.write("not a sequence\n")
        with open(os.path.join(fasta_dir, "chr3.fasta"), "w") as f:
            f.write(">chr3\nACGT\n")

        source = sl.PathSource(fasta_dir)
        assert source.list_available() == {"chr1", "chr2"}

    def test_index_files_are_ignored(self, fasta_dir):
        with Fasta(os.path.join(fasta_dir, "chr1.fa")):
            pass
        assert os.path.exists(os.path.join(fasta_dir, "chr1.fa.fai"))
        source = sl.PathSource(fasta_dir)
        assert source.list_available() == {"chr1", "chr2"}

    def test_load_does_not_write_to_directory(self, fasta_dir, genome):
        before = sorted(os.listdir(fasta_dir))
        source = sl.PathSource(fasta_dir)
        assert source.load("chr1") == genome["chr1"]
        assert sorted(os.listdir(fasta_dir)) == before

    def test_load_reuses_existing_index(self, fasta_dir, genome):
        with Fasta(os.path.join(fasta_dir, "chr2.fa")):
            pass
        source = sl.PathSource(fasta_dir)
        assert source.load("chr2") == genome["chr2"]

    def test_load(self, fasta_dir, genome):
        source = sl.PathSource(fasta_dir)
        assert source.load("chr2") == genome["chr2"]

    def test_load_uses_first_record_when_name_differs(self, tmp_path):
        write_fasta(str(tmp_path / "chr5.fa"), {"chromosome_5 assembled": "GGGCCC"})
        source = sl.PathSource(str(tmp_path))
        assert source.load("chr5") == "GGGCCC"

    def test_load_prefers_matching_record(self, tmp_path):
        write_fasta(str(tmp_path / "chr5.fa"), {"other": "AAAA", "chr5": "TTTT"})
        source = sl.PathSource(str(tmp_path))
        assert source.load("chr5") == "TTTT"

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            sl.PathSource(str(tmp_path / "absent"))

    def test_slice(self, fasta_dir, genome):
        source = sl.PathSource(fasta_dir)
        fullseq = source.load("chr1")
        assert source.slice(fullseq, 11, 20) == genome["chr1"][10:20]


class TestOtherSources:
    """Test the single-FASTA and in-memory providers."""

    def test_fasta_file_source(self, tmp_path, genome):
        path = str(tmp_path / "genome.fa")
        write_fasta(path, genome)
        with sl.FastaFileSource(path) as source:
            assert source.list_available() == {"chr1", "chr2"}
            record = source.load("chr1")
            assert source.slice(record, 5, 64) == genome["chr1"][4:64]

    def test_in_memory_source(self, genome):
        source = sl.InMemorySource(genome)
        assert source.list_available() == {"chr1", "chr2"}
        assert source.load("chr2") is genome["chr2"]


class TestLoadSequenceSource:
    """Test selection of a provider from the argument kind."""

    def test_directory(self, fasta_dir):
        assert isinstance(sl.load_sequence_source(fasta_dir), sl.PathSource)

    def test_fasta_file(self, tmp_path, genome):
        path = tmp_path / "genome.fa"
        write_fasta(str(path), genome)
        source = sl.load_sequence_source(path)
        assert isinstance(source, sl.FastaFileSource)
        source.close()

    def test_mapping(self, genome):
        assert isinstance(sl.load_sequence_source(genome), sl.InMemorySource)

    def test_pyfaidx_fasta(self, tmp_path, genome):
        path = str(tmp_path / "genome.fa")
        write_fasta(path, genome)
        with Fasta(path) as fasta:
            source = sl.load_sequence_source(fasta)
            assert isinstance(source, sl.InMemorySource)
            assert source.list_available() == {"chr1", "chr2"}

    def test_existing_source_returned(self, genome):
        source = sl.InMemorySource(genome)
        assert sl.load_sequence_source(source) is source

    def test_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            sl.load_sequence_source(str(tmp_path / "nowhere"))

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            sl.load_sequence_source(42)
