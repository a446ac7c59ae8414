"""
txseq_lite: A module for building spliced transcript sequences from a GTF/GFF
annotation and chromosome sequences.

This package provides functionality for:
- Reading and validating GTF/GFF annotation tables
- Extracting fields from the GTF attributes column
- Loading chromosome sequences from FASTA files or memory
- Assembling and writing transcript sequences
"""

# Import constants
from .core import GTF_COLUMNS, MISSING

# Import error types
from .errors import TxseqError, SchemaError, DataError, MissingSequenceError

# Import attribute parsing
from .attribute_utils import get_attribute_field

# Import annotation utilities
from .gtf_utils import (
    read_gtf,
    validate_gtf,
    load_gtf,
    filter_exons,
    check_exon_order,
)

# Import sequence providers
from .sequence_sources import (
    SequenceSource,
    PathSource,
    FastaFileSource,
    InMemorySource,
    load_sequence_source,
    slice_sequence,
)

# Import transcript assembly
from .transcripts import seq_gtf, write_transcript_fasta

# Version
__version__ = "0.1.0"
# Package metadata
__description__ = (
    "A module for building spliced transcript sequences from GTF annotations"
)
