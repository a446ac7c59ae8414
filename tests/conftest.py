import os

import pytest

from test_utils import make_chromosome, write_fasta


@pytest.fixture
def genome():
    return {
        "chr1": make_chromosome(400),
        "chr2": make_chromosome(250, offset=1),
    }


@pytest.fixture
def fasta_dir(tmp_path, genome):
    """Directory with one <seqname>.fa file per chromosome."""
    seq_dir = tmp_path / "seqs"
    seq_dir.mkdir()
    for chrom, seq in genome.items():
        write_fasta(os.path.join(seq_dir, f"{chrom}.fa"), {chrom: seq})
    return str(seq_dir)
