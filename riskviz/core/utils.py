"""
Column resolution, numeric coercion and row-collection helpers.

Survey uploads arrive with whatever header spellings the field team used, so
nothing downstream reads a column by its literal name.  Instead every lookup
goes through ``resolve`` with an ordered alias tuple from
``riskviz.core.config.FIELD_ALIASES``.  Missing data is never an error here:
absent fields resolve to a sentinel and malformed numbers coerce to a
fallback, so a single bad row can never break an aggregate.
"""

import logging
import math
import numbers
import re
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Sequence, Union

import numpy as np
import pandas as pd

from .config import FIELD_PHASE, get_aliases

logger = logging.getLogger(__name__)

# Leading numeric prefix, the way a lenient float parser reads "45%" or "7 pts".
_NUMERIC_PREFIX = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_PHASE_DIGITS = re.compile(r'\d+')

Row = Mapping[str, Any]
FieldSpec = Union[str, Sequence[str]]


def _is_missing(value) -> bool:
    """True for None, pandas/numpy missing markers and empty strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


def _aliases_for(field: FieldSpec) -> Sequence[str]:
    if isinstance(field, str):
        return get_aliases(field)
    return field


def resolve(row: Row, field: FieldSpec, default: Any = ""):
    """
    Return the first present, non-empty value for a field.

    Args:
        row: A single input row.
        field: A semantic field name from FIELD_ALIASES, or an explicit
            ordered sequence of candidate keys.
        default: Sentinel returned when no alias matches.

    Returns:
        The raw value stored under the first matching alias, or ``default``.
    """
    for alias in _aliases_for(field):
        if alias in row and not _is_missing(row[alias]):
            return row[alias]
    return default


def clean_label(value) -> str:
    """Normalise a categorical value to a display label.

    Whole-number floats (pandas promotes integer columns with gaps to
    float) are rendered without the trailing ``.0``.
    """
    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).replace('\xa0', ' ')
    return re.sub(r'\s+', ' ', text).strip()


def to_number(value, fallback: float = 0.0) -> float:
    """
    Coerce a resolved value to a finite float.

    Numbers pass through when finite.  Strings are read by their leading
    numeric prefix, so ``"6.999"`` -> 6.999 and ``"45%"`` -> 45.0.  Anything
    else (None, NaN, infinities, booleans, free text) yields ``fallback``.
    """
    if value is None or isinstance(value, (bool, np.bool_)):
        return fallback
    if isinstance(value, numbers.Number):
        try:
            number = float(value)
        except (TypeError, ValueError):
            return fallback
        return number if np.isfinite(number) else fallback
    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value.strip())
        if not match:
            return fallback
        number = float(match.group(0))
        return number if math.isfinite(number) else fallback
    return fallback


def to_phase(value) -> int:
    """Coerce a phase value (``2``, ``"2"``, ``"Phase 2"``) to an int, 0 if none."""
    number = to_number(value)
    if number > 0:
        return int(number)
    if isinstance(value, str) and not _NUMERIC_PREFIX.match(value.strip()):
        match = _PHASE_DIGITS.search(value)
        if match:
            return int(match.group(0))
    return 0


def resolve_text(row: Row, field: FieldSpec) -> str:
    """Resolve a categorical field to a cleaned label ("" when absent)."""
    return clean_label(resolve(row, field))


def resolve_number(row: Row, field: FieldSpec, fallback: float = 0.0) -> float:
    """Resolve a numeric field and coerce it (``fallback`` when absent or malformed)."""
    return to_number(resolve(row, field), fallback)


def resolve_phase(row: Row, field: FieldSpec = FIELD_PHASE) -> int:
    """Resolve the phase of a row (0 when absent)."""
    return to_phase(resolve(row, field))


def rows_from_dataframe(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert a DataFrame to a list of row dicts with missing cells as None."""
    cleaned = df.astype(object).where(pd.notna(df), None)
    return cleaned.to_dict(orient='records')


def ensure_rows(rows) -> List[Row]:
    """
    Validate the row collection handed to the pipeline.

    Accepts any iterable of mappings, or a DataFrame (converted to records).

    Raises:
        TypeError: If ``rows`` is not a collection of rows at all, or one of
            its items is not a mapping.  These indicate a caller bug, not bad
            survey data.
    """
    if isinstance(rows, pd.DataFrame):
        return rows_from_dataframe(rows)
    if rows is None or isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
        raise TypeError(
            f"rows must be a sequence of mappings, got {type(rows).__name__}"
        )
    materialised = list(rows)
    for index, row in enumerate(materialised):
        if not isinstance(row, Mapping):
            raise TypeError(
                f"Row {index} must be a mapping (got {type(row).__name__})"
            )
    return materialised
