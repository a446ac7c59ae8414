"""
Transcript sequence assembly for txseq_lite.

This module builds spliced transcript sequences from a GTF/GFF annotation and
chromosome sequences, and writes the result as FASTA.
"""

import os
import warnings
from concurrent import futures
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

from .attribute_utils import get_attribute_field
from .core import DEFAULT_ATTR_SEP, DEFAULT_ID_FIELD, MISSING
from .errors import MissingSequenceError
from .gtf_utils import check_exon_order, filter_exons, load_gtf
from .sequence_sources import SequenceSource, load_sequence_source


def _check_chromosome_coverage(chroms: List[str], source: SequenceSource) -> None:
    available = source.list_available()
    missing = [chrom for chrom in chroms if chrom not in available]
    if missing:
        raise MissingSequenceError(missing)


def _chromosome_slices(
    chrom: str,
    chrom_rows: pd.DataFrame,
    source: SequenceSource,
    idfield: str,
    attrsep: str,
) -> List[Tuple[Optional[str], str]]:
    """Slice every row of one chromosome and label it with its transcript id."""
    fullseq = source.load(chrom)
    slices = [
        source.slice(fullseq, start, end)
        for start, end in zip(chrom_rows["start"], chrom_rows["end"])
    ]
    labels = get_attribute_field(chrom_rows["attributes"], idfield, attrsep)
    return list(zip(labels, slices))


def seq_gtf(
    gtf: Union[str, os.PathLike, pd.DataFrame],
    seqs,
    exononly: bool = True,
    idfield: str = DEFAULT_ID_FIELD,
    attrsep: str = DEFAULT_ATTR_SEP,
    check_order: bool = False,
    n_workers: int = 1,
    verbose: bool = False,
) -> Dict[Optional[str], str]:
    """
    Get transcript sequences from a GTF annotation and chromosome sequences.

    Exon rows are grouped by chromosome, each exon's [start, end] range is cut
    from its chromosome, and the pieces belonging to one transcript are joined
    in the order the rows appear in the table. Rows are never sorted: canonical
    GTF lists exons in increasing genomic order, and ``check_order=True``
    verifies this instead of trusting it. Strand is ignored, so minus-strand
    transcripts are returned as genomic-strand sequence.

    Args:
        gtf: Path to a GTF/GFF file, or DataFrame with the nine GTF columns
            (text, text, text, integer, integer, text, text, text, text)
        seqs: Directory holding one FASTA file (``.fa`` extension) per
            chromosome in gtf, path to a single FASTA file, or dictionary-like
            object mapping chromosome names to sequences
        exononly: Only use rows whose feature is 'exon' (default: True). If
            False every row contributes, whatever its feature type.
        idfield: Name of the attributes field identifying transcripts
            (default: 'transcript_id')
        attrsep: Separator between fields of the attributes column
            (default: '; ')
        check_order: Raise DataError if a transcript's exons are not in
            increasing start order (default: False)
        n_workers: Number of threads used to process chromosomes. Output does
            not depend on this value (default: 1)
        verbose: Print progress information (default: False)

    Returns:
        Dictionary mapping transcript ids to sequence strings. Ids are taken
        verbatim from the attributes column, so quotes are kept. Rows without
        ``idfield`` are joined under the key None (a warning is issued).
        Callers should not rely on the order of the keys.

    Raises:
        SchemaError: if gtf does not have the canonical nine typed columns
        DataError: if a start/end value is missing, an exon falls outside its
            chromosome, or (with check_order) exons are out of order
        MissingSequenceError: if a chromosome in gtf has no sequence in seqs
        OSError: if annotation or sequence files cannot be read

    Examples:
        # Directory with chr22.fa
        transcripts = seq_gtf('annotation.gtf', 'genome_dir/')

        # Sequences already in memory
        transcripts = seq_gtf(gtf_df, {'chr22': chr22_sequence})
    """
    gtf_df = load_gtf(gtf)

    if exononly:
        gtf_df = filter_exons(gtf_df)

    if check_order:
        check_exon_order(gtf_df, idfield, attrsep)

    source = load_sequence_source(seqs)
    try:
        # makes sure all chromosomes are present before slicing anything
        chroms = list(pd.unique(gtf_df["seqname"]))
        _check_chromosome_coverage(chroms, source)

        if verbose:
            print(
                f"🧬 Assembling {len(gtf_df):,} rows across {len(chroms)} chromosomes"
            )

        chrom_groups = [(chrom, gtf_df[gtf_df["seqname"] == chrom]) for chrom in chroms]

        def process(group):
            chrom, chrom_rows = group
            labelled = _chromosome_slices(chrom, chrom_rows, source, idfield, attrsep)
            if verbose:
                print(f"   {chrom}: {len(labelled):,} slices")
            return labelled

        if n_workers > 1 and len(chrom_groups) > 1:
            with futures.ThreadPoolExecutor(max_workers=n_workers) as pool:
                # map yields in submission order, i.e. chromosome first appearance
                seqlist = list(pool.map(process, chrom_groups))
        else:
            seqlist = [process(group) for group in chrom_groups]
    finally:
        if source is not seqs:
            source.close()

    pieces: Dict[Optional[str], List[str]] = {}
    for labelled in seqlist:
        for transcript_id, piece in labelled:
            pieces.setdefault(transcript_id, []).append(piece)

    if MISSING in pieces:
        warnings.warn(
            f"{len(pieces[MISSING])} row(s) have no '{idfield}' attribute; their "
            "sequences were joined under the key None"
        )

    return {transcript_id: "".join(parts) for transcript_id, parts in pieces.items()}


def write_transcript_fasta(
    transcripts: Dict[Optional[str], str],
    path: Union[str, os.PathLike],
    line_width: Optional[int] = 60,
) -> None:
    """
    Write transcript sequences to a FASTA file.

    Args:
        transcripts: Mapping of transcript id to sequence, as returned by seq_gtf
        path: Output file path
        line_width: Number of bases per sequence line. None or 0 writes each
            sequence on a single line.
    """
    with open(path, "w") as f:
        for transcript_id, seq in transcripts.items():
            name = "NA" if transcript_id is MISSING else transcript_id
            f.write(f">{name}\n")
            if not line_width:
                f.write(f"{seq}\n")
                continue
            for i in range(0, len(seq), line_width):
                f.write(f"{seq[i:i + line_width]}\n")
