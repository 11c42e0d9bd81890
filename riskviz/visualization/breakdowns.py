"""
Breakdown views for the drill-down pages.

These complement the four core view builders with the location and group
pages' charts: the likelihood x severity matrix, per-group scores within a
hotspot, phase comparisons and the group x hotspot heatmap.  Like the core
builders they work on a semantic frame, are pure and degrade to empty or
zeroed shapes.
"""

import logging
from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..analysis.aggregators import mean_scores, round_score
from ..analysis.grouping import present_rows, semantic_frame
from ..core.config import (
    DEFAULT_DATA_RANGE_TEXT, FIELD_HOTSPOT, FIELD_LIKELIHOOD, FIELD_PHASE,
    FIELD_RESPONDENT_GROUP, FIELD_RISK_SCORE, FIELD_SEVERITY, FIELD_TIMELINE,
    MATRIX_SIZE, PHASES,
)
from ..core.utils import Row, to_phase
from ..models.data_models import (
    HeatmapRow, PhaseComparisonEntry, RespondentGroupScore, RiskMatrixCell,
)

logger = logging.getLogger(__name__)


def _scored(frame: pd.DataFrame) -> pd.DataFrame:
    return frame[frame[FIELD_RISK_SCORE] != 0]


def _matching(frame: pd.DataFrame, field: str, value: str) -> pd.Series:
    """Case-insensitive substring match of ``value`` against a text column."""
    needle = value.strip().lower()
    return frame[field].str.lower().str.contains(needle, regex=False)


def _pivot_scores(frame: pd.DataFrame, row_field: str, column_field: str,
                  index: Sequence, columns: Sequence) -> pd.DataFrame:
    """Mean score per (row, column) pair laid out on a fixed grid; empty cells are 0."""
    means = mean_scores(frame, row_field, column_field)
    if means.empty:
        return pd.DataFrame(0.0, index=pd.Index(index), columns=pd.Index(columns))
    return means.unstack(fill_value=0.0).reindex(index=index, columns=columns, fill_value=0.0)


def build_risk_matrix(rows: Iterable[Row]) -> List[List[RiskMatrixCell]]:
    """
    Likelihood x severity grid of row counts and averaged scores.

    ``matrix[l - 1][s - 1]`` holds the rows with likelihood ``l`` and
    severity ``s``.  Rows missing either value are not placed; values
    outside 1..5 are clamped onto the edge cells.
    """
    matrix = [[RiskMatrixCell() for _ in range(MATRIX_SIZE)] for _ in range(MATRIX_SIZE)]
    frame = semantic_frame(rows)
    frame = frame[(frame[FIELD_LIKELIHOOD] > 0) & (frame[FIELD_SEVERITY] > 0)]
    if frame.empty:
        return matrix

    cells = (
        frame.assign(
            likelihood_cell=np.floor(frame[FIELD_LIKELIHOOD]).clip(1, MATRIX_SIZE).astype(int),
            severity_cell=np.floor(frame[FIELD_SEVERITY]).clip(1, MATRIX_SIZE).astype(int),
        )
        .groupby(['likelihood_cell', 'severity_cell'])[FIELD_RISK_SCORE]
        .agg(['size', 'mean'])
    )
    for (likelihood, severity), cell in cells.iterrows():
        matrix[likelihood - 1][severity - 1] = RiskMatrixCell(
            count=int(cell['size']), avg_score=round_score(cell['mean']))
    return matrix


def build_respondent_group_scores(rows: Iterable[Row], hotspot: str,
                                  phase) -> List[RespondentGroupScore]:
    """
    Average score per respondent group for one hotspot in one phase.

    Only scored rows count.  Results are sorted highest score first; equal
    scores keep first-seen order.
    """
    frame = _scored(semantic_frame(rows))
    wanted_phase = to_phase(phase)
    frame = frame[(frame[FIELD_PHASE] == wanted_phase) & _matching(frame, FIELD_HOTSPOT, hotspot)]

    group_scores = mean_scores(frame, FIELD_RESPONDENT_GROUP).sort_values(
        ascending=False, kind='stable')
    logger.debug(f"[Breakdown] {len(group_scores)} groups for hotspot={hotspot!r} phase={wanted_phase}")
    return [RespondentGroupScore(group=group, score=float(score))
            for group, score in group_scores.items()]


def build_phase_comparison(rows: Iterable[Row], field: str,
                           value: str) -> List[PhaseComparisonEntry]:
    """
    Per respondent group, the averaged score of each phase.

    Args:
        rows: Input rows.
        field: Semantic field to match on (hotspot or ao).
        value: Matched case-insensitively as a substring of the field.

    Returns:
        One entry per group with ``"Phase 1"``..``"Phase 3"`` keys; phases
        without scored rows are 0.
    """
    frame = _scored(semantic_frame(rows))
    frame = present_rows(frame[_matching(frame, field, value)], FIELD_RESPONDENT_GROUP)
    if frame.empty:
        return []

    groups = frame[FIELD_RESPONDENT_GROUP].unique()
    table = _pivot_scores(frame, FIELD_RESPONDENT_GROUP, FIELD_PHASE, groups, list(PHASES))
    return [
        PhaseComparisonEntry(
            group=group,
            phase_scores={f"Phase {p}": float(scores[p]) for p in PHASES},
        )
        for group, scores in table.iterrows()
    ]


def build_hotspot_heatmap(rows: Iterable[Row],
                          phase: Optional[int] = None) -> List[HeatmapRow]:
    """Respondent group x hotspot grid of averaged scores, optionally for one phase."""
    frame = semantic_frame(rows)
    if phase is not None:
        frame = frame[frame[FIELD_PHASE] == to_phase(phase)]

    groups = present_rows(frame, FIELD_RESPONDENT_GROUP)[FIELD_RESPONDENT_GROUP].unique()
    if len(groups) == 0:
        return []
    hotspots = list(present_rows(frame, FIELD_HOTSPOT)[FIELD_HOTSPOT].unique())

    table = _pivot_scores(frame, FIELD_RESPONDENT_GROUP, FIELD_HOTSPOT, groups, hotspots)
    return [
        HeatmapRow(respondent_group=group, cells={h: float(cells[h]) for h in hotspots})
        for group, cells in table.iterrows()
    ]


def get_data_range_text(rows: Iterable[Row]) -> str:
    """Collection period caption, ``"first - last"`` over the timeline values."""
    frame = present_rows(semantic_frame(rows), FIELD_TIMELINE)
    timelines = frame[FIELD_TIMELINE].sort_values()
    if timelines.empty:
        return DEFAULT_DATA_RANGE_TEXT
    return f"{timelines.iloc[0]} - {timelines.iloc[-1]}"
