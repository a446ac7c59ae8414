"""
Chromosome sequence providers for txseq_lite.

Sequences can come from a directory holding one FASTA file per chromosome
(``<seqname>.fa``), from a single multi-record FASTA file, or from an
in-memory mapping of chromosome name to sequence (a dict of strings or a
``pyfaidx.Fasta``). All providers share the SequenceSource interface.
"""

import os
import tempfile
from typing import Mapping, Set, Union

from pyfaidx import Fasta

from .core import FASTA_EXTENSION
from .errors import DataError, MissingSequenceError


def slice_sequence(sequence, start: int, end: int) -> str:
    """
    Extract a 1-based, inclusive range from a sequence.

    Args:
        sequence: Any object supporting len() and slicing, e.g. a string or a
            pyfaidx FastaRecord
        start: First position to include (1-based)
        end: Last position to include (1-based). end == start - 1 gives an
            empty string.

    Returns:
        The subsequence as a string

    Raises:
        DataError: if the range does not fit inside the sequence
    """
    start, end = int(start), int(end)
    length = len(sequence)
    if start < 1 or end > length or end < start - 1:
        raise DataError(
            f"cannot extract positions {start}-{end} from a sequence of length {length}"
        )
    return str(sequence[start - 1 : end])


class SequenceSource:
    """
    Interface shared by all chromosome sequence providers.

    Subclasses implement list_available() and load(). Sources can be used as
    context managers so that open FASTA handles are released.
    """

    def list_available(self) -> Set[str]:
        """Return the names of all chromosomes this source can provide."""
        raise NotImplementedError

    def load(self, chrom: str):
        """Return the full sequence of one chromosome."""
        raise NotImplementedError

    def slice(self, sequence, start: int, end: int) -> str:
        return slice_sequence(sequence, start, end)

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class PathSource(SequenceSource):
    """
    Directory with one FASTA file per chromosome.

    The file for chromosome ``chr22`` must be named ``chr22.fa``. Each file is
    opened only when its chromosome is loaded and read completely into memory.
    An existing ``.fai`` index is reused; otherwise a temporary index is built
    outside the directory, which may be read-only.
    """

    def __init__(self, directory: Union[str, os.PathLike]):
        if not os.path.isdir(directory):
            raise FileNotFoundError(f"Sequence directory not found: {directory}")
        self.directory = directory

    def list_available(self) -> Set[str]:
        return {
            name[: -len(FASTA_EXTENSION)]
            for name in os.listdir(self.directory)
            if name.endswith(FASTA_EXTENSION)
        }

    def path_for(self, chrom: str) -> str:
        return os.path.join(self.directory, f"{chrom}{FASTA_EXTENSION}")

    def load(self, chrom: str) -> str:
        path = self.path_for(chrom)
        if os.path.exists(f"{path}.fai"):
            return self._read(path, chrom, None)
        # index into a scratch directory so the sequence directory is only read
        with tempfile.TemporaryDirectory() as tmpdir:
            indexname = os.path.join(tmpdir, f"{chrom}{FASTA_EXTENSION}.fai")
            return self._read(path, chrom, indexname)

    @staticmethod
    def _read(path: str, chrom: str, indexname) -> str:
        with Fasta(path, indexname=indexname) as fasta:
            names = list(fasta.keys())
            if not names:
                raise MissingSequenceError([chrom])
            # prefer a record named after the chromosome, else the file's first one
            name = chrom if chrom in fasta else names[0]
            return str(fasta[name])


class FastaFileSource(SequenceSource):
    """Single (multi-record) FASTA file, indexed with pyfaidx."""

    def __init__(self, path: Union[str, os.PathLike]):
        self.path = path
        self.fasta = Fasta(path)

    def list_available(self) -> Set[str]:
        return set(self.fasta.keys())

    def load(self, chrom: str):
        return self.fasta[chrom]

    def close(self) -> None:
        self.fasta.close()


class InMemorySource(SequenceSource):
    """Mapping from chromosome name to sequence, such as a dict of strings."""

    def __init__(self, sequences: Mapping):
        self.sequences = sequences

    def list_available(self) -> Set[str]:
        return set(self.sequences.keys())

    def load(self, chrom: str):
        return self.sequences[chrom]


def load_sequence_source(seqs) -> SequenceSource:
    """
    Pick the sequence provider matching the kind of ``seqs``.

    Args:
        seqs: One of
            - path to a directory of per-chromosome ``.fa`` files
            - path to a single FASTA file
            - dictionary-like object mapping chromosome names to sequences
              (dict of strings, pyfaidx.Fasta, ...)
            - an existing SequenceSource, returned unchanged

    Returns:
        SequenceSource for ``seqs``

    Raises:
        FileNotFoundError: if a path is given that does not exist
        TypeError: if seqs is none of the accepted kinds
    """
    if isinstance(seqs, SequenceSource):
        return seqs
    if isinstance(seqs, (str, os.PathLike)):
        if os.path.isdir(seqs):
            return PathSource(seqs)
        if os.path.isfile(seqs):
            return FastaFileSource(seqs)
        raise FileNotFoundError(f"No such sequence directory or FASTA file: {seqs}")
    if hasattr(seqs, "keys") and hasattr(seqs, "__getitem__"):
        return InMemorySource(seqs)
    raise TypeError(
        "seqs must be a directory, a FASTA file or a mapping of chromosome "
        f"names to sequences, got {type(seqs).__name__}"
    )
