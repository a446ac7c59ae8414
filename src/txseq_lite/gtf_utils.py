"""
GTF/GFF reading and validation utilities for txseq_lite.

This module provides functions for reading annotation files into pandas
DataFrames, checking that in-memory tables look like canonical GTF, and
selecting the rows used to build transcript sequences.
"""

import csv
import os
import pandas as pd
from typing import List, Union

from .attribute_utils import get_attribute_field
from .core import (
    DEFAULT_ATTR_SEP,
    DEFAULT_ID_FIELD,
    EXON_FEATURE,
    GTF_COLUMN_KINDS,
    GTF_COLUMNS,
    INTEGER_COLUMNS,
)
from .errors import DataError, SchemaError


def _empty_gtf() -> pd.DataFrame:
    return pd.DataFrame(
        {
            col: pd.Series(
                dtype="Int64" if GTF_COLUMN_KINDS[col] == "integer" else "object"
            )
            for col in GTF_COLUMNS
        }
    )


def _is_text_column(values: pd.Series) -> bool:
    if pd.api.types.is_object_dtype(values):
        return pd.api.types.infer_dtype(values, skipna=True) in ("string", "empty")
    return pd.api.types.is_string_dtype(values)


def _is_integer_column(values: pd.Series) -> bool:
    return pd.api.types.is_integer_dtype(values) and not pd.api.types.is_bool_dtype(
        values
    )


def _to_integer_column(values: pd.Series, name: str) -> pd.Series:
    """Convert a text column to nullable integers; empty fields become missing."""
    empty = values == ""
    present = values[~empty]
    bad = present[~present.str.fullmatch(r"[+-]?\d+")]
    if len(bad):
        raise SchemaError(
            f"Column '{name}' must contain integers, got {bad.iloc[0]!r}"
        )
    return pd.to_numeric(values.mask(empty)).astype("Int64")


def validate_gtf(gtf_df: pd.DataFrame) -> pd.DataFrame:
    """
    Check that a DataFrame represents a canonical GTF table.

    The table must have exactly nine columns whose values are, in order: text,
    text, text, integer, integer, text, text, text, text. Existing column names
    are ignored and replaced by the canonical ones.

    Args:
        gtf_df: DataFrame with one row per annotation record

    Returns:
        Copy of the table with columns named seqname, source, feature, start,
        end, score, strand, frame, attributes

    Raises:
        SchemaError: if the column count or a column's kind is wrong
    """
    if gtf_df.shape[1] != len(GTF_COLUMNS):
        raise SchemaError(
            f"gtf must have {len(GTF_COLUMNS)} columns, got {gtf_df.shape[1]}"
        )

    gtf_df = gtf_df.copy()
    gtf_df.columns = GTF_COLUMNS

    wrong = []
    for col in GTF_COLUMNS:
        if GTF_COLUMN_KINDS[col] == "integer":
            ok = _is_integer_column(gtf_df[col])
        else:
            ok = _is_text_column(gtf_df[col])
        if not ok:
            wrong.append(f"{col} ({gtf_df[col].dtype})")

    if wrong:
        raise SchemaError(
            f"one or more columns of gtf have the wrong class: {', '.join(wrong)}"
        )

    return gtf_df


def read_gtf(path: Union[str, os.PathLike]) -> pd.DataFrame:
    """
    Read a GTF/GFF file into a pandas DataFrame.

    Args:
        path: Path to a tab-separated annotation file without header. Text
            following '#' is ignored and fields are never quoted.

    Returns:
        DataFrame with the nine canonical GTF columns. start and end use the
        nullable Int64 dtype so that missing coordinates survive reading.

    Raises:
        FileNotFoundError: if the file does not exist
        SchemaError: if any row does not have nine fields or its coordinates
            are not integers
    """
    try:
        gtf_df = pd.read_csv(
            path,
            sep="\t",
            header=None,
            comment="#",
            quoting=csv.QUOTE_NONE,
            dtype=str,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError:
        return _empty_gtf()
    except pd.errors.ParserError as e:
        raise SchemaError(f"Could not read {path} as a GTF file: {e}") from e

    if gtf_df.shape[1] != len(GTF_COLUMNS):
        raise SchemaError(
            f"gtf must have {len(GTF_COLUMNS)} columns, got {gtf_df.shape[1]} in {path}"
        )

    # empty fields read as "", so NaN only comes from rows with too few fields
    short_rows = gtf_df.isna().any(axis=1)
    if short_rows.any():
        raise SchemaError(
            f"{int(short_rows.sum())} row(s) of {path} have fewer than "
            f"{len(GTF_COLUMNS)} fields"
        )

    gtf_df.columns = GTF_COLUMNS
    for col in INTEGER_COLUMNS:
        gtf_df[col] = _to_integer_column(gtf_df[col], col)

    return validate_gtf(gtf_df)


def load_gtf(gtf: Union[str, os.PathLike, pd.DataFrame]) -> pd.DataFrame:
    """
    Load annotation from a file or validate it if already a DataFrame.

    Raises:
        SchemaError: if the table is not canonical GTF
        DataError: if any start or end coordinate is missing
        TypeError: if gtf is neither a path nor a DataFrame
    """
    if isinstance(gtf, (str, os.PathLike)):
        gtf_df = read_gtf(gtf)
    elif isinstance(gtf, pd.DataFrame):
        gtf_df = validate_gtf(gtf)
    else:
        raise TypeError(
            f"gtf must be a file path or a data frame, got {type(gtf).__name__}"
        )

    for col in INTEGER_COLUMNS:
        n_missing = int(gtf_df[col].isna().sum())
        if n_missing:
            raise DataError(f"{n_missing} row(s) of gtf have a missing {col} value")

    return gtf_df


def filter_exons(gtf_df: pd.DataFrame) -> pd.DataFrame:
    """Keep only rows whose feature is exactly 'exon', in their original order."""
    return gtf_df[gtf_df["feature"] == EXON_FEATURE]


def check_exon_order(
    gtf_df: pd.DataFrame,
    idfield: str = DEFAULT_ID_FIELD,
    attrsep: str = DEFAULT_ATTR_SEP,
) -> None:
    """
    Verify that each transcript lists its exons in increasing genomic order.

    Transcript sequences are built by concatenating exons in table order, so a
    transcript whose rows are out of order would be assembled incorrectly.
    Rows are grouped by chromosome and transcript id; within each group the
    start coordinates must be strictly increasing.

    Raises:
        DataError: naming the transcripts whose exons are out of order
    """
    keyed = pd.DataFrame(
        {
            "seqname": gtf_df["seqname"].to_numpy(),
            "transcript": get_attribute_field(gtf_df["attributes"], idfield, attrsep),
            "start": gtf_df["start"].to_numpy(),
        }
    )

    unordered: List[str] = []
    for (chrom, transcript), group in keyed.groupby(
        ["seqname", "transcript"], sort=False, dropna=False
    ):
        starts = group["start"].tolist()
        if any(later <= earlier for earlier, later in zip(starts, starts[1:])):
            unordered.append(f"{transcript} ({chrom})")

    if unordered:
        raise DataError(
            f"exons are not in increasing order for {len(unordered)} transcript(s): "
            f"{', '.join(unordered)}"
        )
