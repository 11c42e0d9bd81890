"""
Pipeline Orchestrator - the transformation boundary of RiskViz.

``build_chart_data`` is the single entry point the dashboard calls: it takes
the decoded survey rows plus the current filter selections and returns a
``ChartData`` bundle holding every named view.

Data flow
---------
::

    rows (list of mappings / DataFrame)
         |
         v
    ensure_rows() --> validated list of mappings
         |
         +--> extract_unique_values()   (unfiltered: every filter option)
         |
         v
    apply_filters() --> filtered rows
         |
         +--> build_group_bar_data()
         +--> build_scatter_data()
         +--> build_combined_data()
         +--> build_metric_wise_scores()
         +--> build_risk_matrix()
         +--> summarize()
         |
         v
    ChartData (returned by value; nothing is cached between calls)
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..analysis.aggregators import summarize
from ..analysis.grouping import distinct_values, filter_rows
from ..core.config import (
    FIELD_AO, FIELD_HOTSPOT, FIELD_METRIC, FIELD_PHASE, FIELD_RESPONDENT_GROUP,
    DEFAULT_PHASE, FIELD_TIMELINE, ChartDataConfig,
)
from ..core.utils import Row, ensure_rows
from ..models.data_models import ChartData, FilterSelection
from ..visualization.breakdowns import build_risk_matrix
from ..visualization.view_builders import (
    build_combined_data, build_group_bar_data, build_metric_wise_scores,
    build_scatter_data,
)

logger = logging.getLogger(__name__)

# Keys of ``ChartData.unique_values`` and the field each one lists.
UNIQUE_VALUE_FIELDS = {
    'AO': FIELD_AO,
    'Hotspot': FIELD_HOTSPOT,
    'RespondentGroup': FIELD_RESPONDENT_GROUP,
    'Metric': FIELD_METRIC,
    'Phase': FIELD_PHASE,
    'Timeline': FIELD_TIMELINE,
}


def apply_filters(rows: Iterable[Row], filters: Optional[FilterSelection],
                  default_phase: int = DEFAULT_PHASE) -> List[Row]:
    """
    Keep rows matching every non-empty selection.

    Rows without a phase match a phase selection as ``default_phase``, the
    same phase the grouped bar chart files them under.

    Returns:
        list: The matching rows (all rows when ``filters`` is None or empty).
    """
    rows = list(rows)
    if filters is None or filters.is_empty:
        return rows

    selections = [
        (FIELD_AO, filters.ao),
        (FIELD_HOTSPOT, filters.hotspots),
        (FIELD_PHASE, filters.phases),
        (FIELD_METRIC, filters.metrics),
        (FIELD_RESPONDENT_GROUP, filters.respondent_groups),
        (FIELD_TIMELINE, [filters.timeline] if filters.timeline else []),
    ]
    filtered = rows
    for field_name, allowed in selections:
        filtered = filter_rows(filtered, field_name, allowed, default_phase)

    logger.info(f"[Pipeline] Filters kept {len(filtered)} of {len(rows)} rows")
    return filtered


def extract_unique_values(rows: Iterable[Row],
                          default_phase: int = DEFAULT_PHASE) -> Dict[str, list]:
    """First-seen distinct values per filterable field (phases as ints, missing as ``default_phase``)."""
    rows = list(rows)
    return {key: distinct_values(rows, field_name, default_phase)
            for key, field_name in UNIQUE_VALUE_FIELDS.items()}


def build_chart_data(rows, filters: Optional[FilterSelection] = None,
                     config: Optional[ChartDataConfig] = None) -> ChartData:
    """
    Derive every chart view from one row collection.

    Args:
        rows: Sequence of row mappings, or a ``pandas.DataFrame``.
        filters: Current filter selections; ``None`` keeps every row.
        config: Per-builder options; defaults apply when omitted.

    Returns:
        ChartData: The complete bundle.  Empty input yields empty views and
        zeroed summary statistics.

    Raises:
        TypeError: If ``rows`` is not a collection of mappings.
    """
    all_rows = ensure_rows(rows)
    config = config or ChartDataConfig()

    if not all_rows:
        logger.warning("[Pipeline] No rows supplied; returning empty chart data")

    default_phase = config.group_bar.default_phase
    selected = apply_filters(all_rows, filters, default_phase)

    chart_data = ChartData(
        group_bar=build_group_bar_data(selected, config.group_bar),
        scatter=build_scatter_data(selected, config.scatter),
        combined=build_combined_data(selected, config.combined),
        metric_wise=build_metric_wise_scores(selected, config.metric_wise),
        summary=summarize(selected, config.summary),
        unique_values=extract_unique_values(all_rows, default_phase),
        risk_matrix=build_risk_matrix(selected),
        row_count=len(selected),
    )

    logger.info(
        f"[Pipeline] Built chart data from {len(selected)} rows: "
        f"{len(chart_data.group_bar)} groups, {len(chart_data.scatter)} scatter series, "
        f"{len(chart_data.combined)} hotspots, {len(chart_data.metric_wise)} metrics"
    )
    return chart_data
