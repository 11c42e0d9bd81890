"""
Aggregators and Summary Statistics.

Reduces groups of rows to the numbers shown on the charts.  Two rules hold
for every function in this module:

- Division is always count-guarded: an empty group averages to 0, never NaN
  and never a ZeroDivisionError.
- Rounding to two decimals happens here, at the aggregator boundary, so a
  given aggregate is identical whichever view builder consumes it.

A row whose score is missing or malformed contributes 0 to the sum but still
counts toward the denominator; callers that want such rows dropped filter
them before aggregating.
"""

import logging
from typing import Callable, Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from ..core.config import FIELD_RISK_SCORE, RISK_THRESHOLDS, SCORE_DECIMALS, SummaryConfig
from ..core.utils import Row, resolve, resolve_number, to_number
from ..models.data_models import RiskBand, RiskLevelCounts, SummaryStats
from ..scoring import to_risk_band
from .grouping import present_rows, semantic_frame

logger = logging.getLogger(__name__)

ValueFn = Callable[[Row], float]
BandFn = Callable[[Row], RiskBand]

# [-inf, 4) low, [4, 7) moderate, [7, inf) high
_BAND_BINS = [-np.inf, RISK_THRESHOLDS['moderate'], RISK_THRESHOLDS['high'], np.inf]
_BAND_LABELS = [RiskBand.LOW.value, RiskBand.MODERATE.value, RiskBand.HIGH.value]


def round_score(value: float) -> float:
    """Round a displayed score to the package-wide precision."""
    return float(np.round(float(value), SCORE_DECIMALS))


def row_score(row: Row) -> float:
    """Resolved risk score of a row (0 when missing or malformed)."""
    return resolve_number(row, FIELD_RISK_SCORE)


def row_band(row: Row) -> RiskBand:
    """Risk band of a row's resolved score."""
    return to_risk_band(row_score(row))


def is_scored(row: Row) -> bool:
    """True when the row carries a non-zero numeric score."""
    return to_number(resolve(row, FIELD_RISK_SCORE)) != 0


def average(rows: Sequence[Row], value_fn: ValueFn = row_score) -> float:
    """
    Mean of ``value_fn`` over ``rows``, rounded to two decimals.

    Returns:
        float: The rounded mean, or 0.0 for an empty group.
    """
    values = pd.Series([to_number(value_fn(row)) for row in rows], dtype='float64')
    if values.empty:
        return 0.0
    return round_score(values.mean())


def mean_scores(frame: pd.DataFrame, *keys: str, value: str = FIELD_RISK_SCORE) -> pd.Series:
    """
    Rounded mean of ``value`` per key over a semantic frame.

    Rows with an absent key are excluded.  Groups keep first-seen order; with
    several keys the result has a MultiIndex.
    """
    present = present_rows(frame, *keys)
    by = keys[0] if len(keys) == 1 else list(keys)
    return present.groupby(by, sort=False)[value].mean().round(SCORE_DECIMALS)


def _counts(value_counts: pd.Series) -> RiskLevelCounts:
    return RiskLevelCounts(**{label: int(value_counts.get(label, 0)) for label in _BAND_LABELS})


def band_counts(scores: pd.Series) -> RiskLevelCounts:
    """Histogram of a score column using the fixed risk thresholds."""
    bands = pd.cut(scores, bins=_BAND_BINS, labels=_BAND_LABELS, right=False)
    return _counts(bands.value_counts())


def histogram(rows: Iterable[Row], band_fn: BandFn = row_band) -> RiskLevelCounts:
    """Count rows per risk band; every row lands in exactly one band."""
    bands = pd.Series([band_fn(row).value for row in rows], dtype=object)
    return _counts(bands.value_counts())


def summarize(rows: Iterable[Row], config: Optional[SummaryConfig] = None) -> SummaryStats:
    """
    Global min / max / mean score and risk-band histogram.

    Args:
        rows: Input rows.
        config: Summary options.  By default unscored rows count as 0 and
            fall in the ``low`` bucket.

    Returns:
        SummaryStats: All zeros for empty input.
    """
    config = config or SummaryConfig()
    scores = semantic_frame(rows)[FIELD_RISK_SCORE]
    if not config.count_unscored_as_low:
        scores = scores[scores != 0]

    if scores.empty:
        return SummaryStats()

    stats = SummaryStats(
        min=round_score(scores.min()),
        max=round_score(scores.max()),
        avg=round_score(scores.mean()),
        histogram=band_counts(scores),
    )
    logger.debug(
        f"[Summary] {len(scores)} scores: min={stats.min} max={stats.max} avg={stats.avg} "
        f"bands={stats.histogram.to_dict()}"
    )
    return stats
