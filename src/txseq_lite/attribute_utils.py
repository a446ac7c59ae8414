"""
Attribute column parsing for txseq_lite.

The ninth GTF column packs key/value pairs into one string, for example
``gene_id "G1"; transcript_id "TX1"``. This module pulls a single field out
of that column for every row of an annotation table.
"""

import pandas as pd
from typing import Iterable, List, Optional

from .core import DEFAULT_ATTR_SEP, MISSING


def _field_value(attributes, field: str, attrsep: str) -> Optional[str]:
    """Return the value of ``field`` in one attributes string, or MISSING."""
    if attributes is None or (not isinstance(attributes, str) and pd.isna(attributes)):
        return MISSING
    if attributes == "":
        return MISSING

    for token in attributes.split(attrsep):
        pieces = token.split(" ")
        if pieces[0] == field:
            # first positional match wins, even when it has no value
            return pieces[1] if len(pieces) > 1 else MISSING
    return MISSING


def get_attribute_field(
    attributes: Iterable, field: str, attrsep: str = DEFAULT_ATTR_SEP
) -> List[Optional[str]]:
    """
    Extract one field from the "attributes" column of a GTF/GFF table.

    Each row is split on ``attrsep`` (a literal string, not a pattern) and each
    resulting token is split on single spaces. The token whose first piece equals
    ``field`` supplies its second piece as the value. Nothing is trimmed or
    unquoted, so ``transcript_id "TX1"`` gives ``'"TX1"'``.

    Args:
        attributes: Iterable of attribute strings, e.g. a DataFrame column.
            Missing values are treated as empty strings.
        field: Name of the field to extract (exact, case-sensitive match)
        attrsep: Separator between fields. Defaults to '; ', the separator
            used in GTF files written by Cufflinks.

    Returns:
        List with one entry per input row, in input order. Rows that do not
        contain ``field`` get None.

    Examples:
        >>> get_attribute_field(['gene_id "G1"; transcript_id "TX1"'], "transcript_id")
        ['"TX1"']
        >>> get_attribute_field(['gene_id "G1"'], "transcript_id")
        [None]
    """
    return [_field_value(attrs, field, attrsep) for attrs in attributes]
