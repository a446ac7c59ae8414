"""
Core constants shared across txseq_lite.

This module defines the canonical GTF layout and the defaults used by the
attribute parser and the transcript assembler.
"""

# Canonical names of the nine GTF/GFF columns, in file order
GTF_COLUMNS = [
    "seqname",
    "source",
    "feature",
    "start",
    "end",
    "score",
    "strand",
    "frame",
    "attributes",
]

# Kind of value each column holds
GTF_COLUMN_KINDS = {
    "seqname": "text",
    "source": "text",
    "feature": "text",
    "start": "integer",
    "end": "integer",
    "score": "text",
    "strand": "text",
    "frame": "text",
    "attributes": "text",
}

INTEGER_COLUMNS = [col for col in GTF_COLUMNS if GTF_COLUMN_KINDS[col] == "integer"]

# Feature type kept when only exons are assembled
EXON_FEATURE = "exon"

# Attribute parsing defaults (Cufflinks-style "key value; key value")
DEFAULT_ID_FIELD = "transcript_id"
DEFAULT_ATTR_SEP = "; "

# Per-chromosome FASTA files are named <seqname>.fa
FASTA_EXTENSION = ".fa"

# Marker returned when an attribute field is absent from a row
MISSING = None
