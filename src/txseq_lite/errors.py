class TxseqError(Exception):
    """Base class for errors raised by txseq_lite."""
    pass


class SchemaError(TxseqError, ValueError):
    """
    raised when an annotation table does not have the nine GTF columns or one
    of them holds the wrong kind of value
    """
    pass


class DataError(TxseqError, ValueError):
    """
    raised when annotation values cannot be used, for example a missing start
    or end coordinate, or an exon that falls outside its chromosome
    """
    pass


class MissingSequenceError(TxseqError, KeyError):
    """
    raised when chromosomes referenced by the annotation have no sequence

    Attributes:
        missing: the chromosome names that could not be found
    """

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(
            "all chromosomes in gtf must have corresponding sequences in seqs; "
            f"missing: {self.missing}"
        )

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]
