"""
View Builders.

Four independent builders turn raw rows into the record shapes consumed by
the dashboard charts:

    build_group_bar_data      -> List[GroupBarEntry]   (grouped bars per phase)
    build_scatter_data        -> List[ScatterSeries]   (likelihood x severity)
    build_combined_data       -> List[CombinedEntry]   (score + disruption)
    build_metric_wise_scores  -> List[MetricScore]     (one point per metric)

Every builder resolves its rows once into a semantic frame
(``riskviz.analysis.grouping.semantic_frame``) and aggregates it with
``groupby(..., sort=False)`` so categories keep first-seen order.  Builders
are pure, take an optional config dataclass from ``riskviz.core.config`` and
return an empty list for empty or fully unresolvable input.  Presenting a
"no data" state is the caller's job.
"""

import logging
from typing import Iterable, List, Optional

import pandas as pd

from ..analysis.aggregators import mean_scores
from ..analysis.grouping import present_rows, semantic_frame
from ..core.config import (
    FIELD_HOTSPOT, FIELD_LIKELIHOOD, FIELD_METRIC, FIELD_PHASE,
    FIELD_RESPONDENT_GROUP, FIELD_RISK_SCORE, FIELD_SEVERITY, SCORE_DECIMALS,
    CombinedConfig, GroupBarConfig, MetricWiseConfig, ScatterConfig,
)
from ..core.utils import Row, clean_label, to_phase
from ..models.data_models import (
    CombinedEntry, GroupBarEntry, MetricScore, ScatterPoint, ScatterSeries,
)

logger = logging.getLogger(__name__)

POINT_NAME = 'point_name'


# ============================================================================
# GROUPED BAR
# ============================================================================

def build_group_bar_data(rows: Iterable[Row],
                         config: Optional[GroupBarConfig] = None) -> List[GroupBarEntry]:
    """
    One record per category with an averaged score per phase.

    Categories follow first-seen order.  Phases with no rows are emitted as
    0 so every record carries the same fields.

    Example:
        rows = [{'RespondentType': 'A', 'Phase': '1', 'RiskScore': '3'},
                {'RespondentType': 'A', 'Phase': '2', 'RiskScore': '9'}]
        -> [{'name': 'A', 'phase1': 3.0, 'phase2': 9.0, 'phase3': 0.0}]
    """
    config = config or GroupBarConfig()
    frame = present_rows(semantic_frame(rows), config.category_field)
    if frame.empty:
        return []

    phases = frame[FIELD_PHASE].where(frame[FIELD_PHASE] != 0, config.default_phase)
    table = (
        frame.assign(**{FIELD_PHASE: phases})
        .groupby([config.category_field, FIELD_PHASE], sort=False)[FIELD_RISK_SCORE]
        .mean()
        .unstack(fill_value=0.0)
        .reindex(index=frame[config.category_field].unique(),
                 columns=list(config.phases), fill_value=0.0)
        .round(SCORE_DECIMALS)
    )

    entries = [
        GroupBarEntry(name=name, phase_scores={int(p): float(scores[p]) for p in config.phases})
        for name, scores in table.iterrows()
    ]
    logger.debug(f"[GroupBar] Built {len(entries)} categories")
    return entries


# ============================================================================
# SCATTER
# ============================================================================

def _scatter_points(frame: pd.DataFrame, default_name: str) -> List[ScatterPoint]:
    names = frame[POINT_NAME].replace("", default_name)
    return [
        ScatterPoint(x=float(x), y=float(y), z=float(z), name=name)
        for x, y, z, name in zip(frame[FIELD_LIKELIHOOD], frame[FIELD_SEVERITY],
                                 frame[FIELD_RISK_SCORE], names)
    ]


def build_scatter_data(rows: Iterable[Row],
                       config: Optional[ScatterConfig] = None) -> List[ScatterSeries]:
    """
    Scatter series of {x: likelihood, y: severity, z: score} points.

    Series are keyed by the first dimension in ``config.category_fields``
    (metric, then hotspot) that produces at least one non-empty series.
    When none does, all rows go into a single ``"All Points"`` series.
    Points whose three coordinates are all zero are dropped.  A point is
    named after its metric, else its respondent group, else its series.
    """
    config = config or ScatterConfig()
    frame = semantic_frame(rows)
    if config.drop_zero_points:
        coordinates = frame[[FIELD_LIKELIHOOD, FIELD_SEVERITY, FIELD_RISK_SCORE]]
        frame = frame[(coordinates != 0).any(axis=1)]
    if frame.empty:
        return []

    frame = frame.assign(**{POINT_NAME: frame[FIELD_METRIC].where(
        frame[FIELD_METRIC] != "", frame[FIELD_RESPONDENT_GROUP])})

    for category_field in config.category_fields:
        present = present_rows(frame, category_field)
        if present.empty:
            continue
        series = [
            ScatterSeries(name=name, points=_scatter_points(group, str(name)))
            for name, group in present.groupby(category_field, sort=False)
        ]
        logger.debug(f"[Scatter] {len(series)} series grouped by {category_field}")
        return series

    logger.debug(f"[Scatter] No category resolved; {len(frame)} points in '{config.fallback_label}'")
    return [ScatterSeries(name=config.fallback_label,
                          points=_scatter_points(frame, config.fallback_label))]


# ============================================================================
# COMBINED (score + disruption)
# ============================================================================

def build_combined_data(rows: Iterable[Row],
                        config: Optional[CombinedConfig] = None) -> List[CombinedEntry]:
    """
    Averaged score paired with the averaged secondary metric per category.

    Only rows that actually carry the secondary field feed its average.  A
    category with no secondary data at all reports
    ``config.missing_secondary`` (``None`` by default) instead of an
    invented value.
    """
    config = config or CombinedConfig()
    frame = present_rows(semantic_frame(rows, keep_missing=(config.secondary_field,)),
                         config.category_field)
    if frame.empty:
        return []

    # mean() skips NaN, so categories without any secondary value stay NaN
    stats = (
        frame.groupby(config.category_field, sort=False)
        .agg(risk_score=(FIELD_RISK_SCORE, 'mean'), secondary=(config.secondary_field, 'mean'))
        .round(SCORE_DECIMALS)
    )

    entries = []
    missing = []
    for name, row in stats.iterrows():
        if pd.isna(row['secondary']):
            value = config.missing_secondary
            missing.append(name)
        else:
            value = float(row['secondary'])
        entries.append(CombinedEntry(name=name, risk_score=float(row['risk_score']),
                                     disruption_percentage=value))

    if missing:
        logger.warning(
            f"[Combined] No '{config.secondary_field}' data for {len(missing)} "
            f"categories: {missing}. Reported as missing."
        )
    return entries


# ============================================================================
# METRIC-WISE
# ============================================================================

def build_metric_wise_scores(rows: Iterable[Row],
                             config: Optional[MetricWiseConfig] = None) -> List[MetricScore]:
    """
    One averaged score per metric, indexed from 1 in first-seen order.

    When ``config.selected_value`` is set, only rows whose
    ``config.filter_field`` resolves to that value contribute.
    """
    config = config or MetricWiseConfig()
    frame = semantic_frame(rows)
    if config.selected_value is not None:
        if config.filter_field == FIELD_PHASE:
            wanted = to_phase(config.selected_value)
        else:
            wanted = clean_label(config.selected_value)
        frame = frame[frame[config.filter_field] == wanted]

    metric_scores = mean_scores(frame, FIELD_METRIC)
    hotspots = (present_rows(frame, FIELD_METRIC, FIELD_HOTSPOT)
                .groupby(FIELD_METRIC, sort=False)[FIELD_HOTSPOT].first())

    scores = []
    for index, (metric, score) in enumerate(metric_scores.items()):
        color = config.colors[index % len(config.colors)] if config.colors else ""
        scores.append(MetricScore(
            metric_index=index + 1,
            metric=metric,
            score=float(score),
            color=color,
            hotspot=hotspots.get(metric),
        ))

    logger.debug(f"[MetricWise] {len(scores)} metrics (selection={config.selected_value!r})")
    return scores
