"""
Grouping Engine.

Partitions a row collection by one or more resolved dimensions.  Keys keep
first-seen order (chart category order follows the order in the upload), and
rows whose key does not resolve are left out of that grouping rather than
collected under an "Unknown" bucket, so charts only show categories that
actually carry a label.

Two entry points share those rules:

- ``group_by`` returns ``key -> list of rows`` for callers that work on the
  raw rows.
- ``semantic_frame`` resolves every row once into a DataFrame with one
  column per semantic field; the aggregators and view builders then group it
  with ``groupby(..., sort=False)`` after ``present_rows`` drops absent keys.

Usage:
    >>> groups = group_by(rows, field_key('respondent_group'))
    >>> frame = semantic_frame(rows)
    >>> present_rows(frame, 'hotspot').groupby('hotspot', sort=False)['risk_score'].mean()
"""

import logging
from typing import Any, Callable, Dict, Hashable, Iterable, List, Sequence

import numpy as np
import pandas as pd

from ..core.config import (
    FIELD_AO, FIELD_DISRUPTION, FIELD_HOTSPOT, FIELD_LIKELIHOOD, FIELD_METRIC,
    FIELD_PHASE, FIELD_RESPONDENT_GROUP, FIELD_RISK_SCORE, FIELD_SEVERITY,
    FIELD_TIMELINE,
)
from ..core.utils import Row, clean_label, resolve, resolve_phase, resolve_text, to_number, to_phase

logger = logging.getLogger(__name__)

KeyFn = Callable[[Row], Hashable]

TEXT_FIELDS = (FIELD_RESPONDENT_GROUP, FIELD_HOTSPOT, FIELD_AO, FIELD_METRIC, FIELD_TIMELINE)
NUMBER_FIELDS = (FIELD_RISK_SCORE, FIELD_LIKELIHOOD, FIELD_SEVERITY, FIELD_DISRUPTION)
FRAME_COLUMNS = TEXT_FIELDS + (FIELD_PHASE,) + NUMBER_FIELDS


def _is_absent(key) -> bool:
    if isinstance(key, tuple):
        return any(_is_absent(part) for part in key)
    return key is None or key == "" or key == 0


def group_by(rows: Iterable[Row], key_fn: KeyFn) -> Dict[Hashable, List[Row]]:
    """
    Group rows by ``key_fn`` preserving first-seen key order.

    Args:
        rows: Input rows (never mutated).
        key_fn: Maps a row to a key; ``""``/``None``/``0`` (or a tuple
            containing one) means the key did not resolve.

    Returns:
        Ordered dict of key -> member rows.
    """
    groups: Dict[Hashable, List[Row]] = {}
    skipped = 0
    for row in rows:
        key = key_fn(row)
        if _is_absent(key):
            skipped += 1
            continue
        groups.setdefault(key, []).append(row)
    if skipped:
        logger.debug(f"[Grouping] {skipped} rows without a resolvable key excluded")
    return groups


def field_key(field: str, default_phase: int = 0) -> KeyFn:
    """
    Key function resolving one semantic field.

    Phase resolves to an int; ``default_phase`` stands in for rows that carry
    none (0 leaves them unresolved).
    """
    if field == FIELD_PHASE:
        return lambda row: resolve_phase(row) or default_phase
    return lambda row: resolve_text(row, field)


def compound_key(*fields: str) -> KeyFn:
    """Key function resolving several fields into a tuple key."""
    parts = [field_key(f) for f in fields]
    return lambda row: tuple(part(row) for part in parts)


def distinct_values(rows: Iterable[Row], field: str, default_phase: int = 0) -> List[Any]:
    """First-seen distinct resolved values of a field (absent values skipped)."""
    return list(group_by(rows, field_key(field, default_phase)).keys())


def filter_rows(rows: Iterable[Row], field: str, allowed: Sequence,
                default_phase: int = 0) -> List[Row]:
    """
    Keep rows whose resolved ``field`` is in ``allowed``; empty ``allowed`` keeps all.

    For the phase field, rows without a phase are matched as ``default_phase``.
    """
    rows = list(rows)
    if not allowed:
        return rows
    key_fn = field_key(field, default_phase)
    if field == FIELD_PHASE:
        wanted = {to_phase(v) for v in allowed}
    else:
        wanted = {clean_label(v) for v in allowed}
    return [row for row in rows if key_fn(row) in wanted]


# ============================================================================
# DATAFRAME VIEW
# ============================================================================

def _number_or_missing(row: Row, field: str) -> float:
    value = resolve(row, field)
    return np.nan if value == "" else to_number(value)


def semantic_frame(rows: Iterable[Row], keep_missing: Sequence[str] = ()) -> pd.DataFrame:
    """
    Resolve rows into a DataFrame with one column per semantic field.

    Text fields hold cleaned labels (``""`` when absent), ``phase`` holds an
    int (0 when absent) and numeric fields hold coerced floats.  Absent
    numbers become 0 except for the fields listed in ``keep_missing``, which
    stay NaN so callers can tell "no value" from "zero".

    Returns:
        pd.DataFrame: One row per input row, in input order.
    """
    rows = list(rows)
    data = {field: [resolve_text(row, field) for row in rows] for field in TEXT_FIELDS}
    data[FIELD_PHASE] = [resolve_phase(row) for row in rows]
    for field in NUMBER_FIELDS:
        data[field] = [_number_or_missing(row, field) for row in rows]

    frame = pd.DataFrame(data, columns=list(FRAME_COLUMNS))
    frame = frame.astype({FIELD_PHASE: 'int64', **{f: 'float64' for f in NUMBER_FIELDS}})
    filled = [f for f in NUMBER_FIELDS if f not in keep_missing]
    frame[filled] = frame[filled].fillna(0.0)
    return frame


def present_rows(frame: pd.DataFrame, *fields: str) -> pd.DataFrame:
    """Rows of ``frame`` whose ``fields`` all resolved (non-empty label, non-zero phase)."""
    mask = pd.Series(True, index=frame.index)
    for field in fields:
        absent = 0 if field == FIELD_PHASE else ""
        mask &= frame[field] != absent
    skipped = int((~mask).sum())
    if skipped:
        logger.debug(f"[Grouping] {skipped} rows without {', '.join(fields)} excluded")
    return frame[mask]
