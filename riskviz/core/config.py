"""
Central Configuration Module for RiskViz.

=== PURPOSE ===
This module is the single source of truth for every header alias, threshold,
phase list, palette and label used by the chart-data pipeline.  Every other
module imports from here rather than scattering literal column names or magic
numbers, so re-tuning the pipeline for a new survey export only touches this
file.

=== DATA FLOW ===
  1. FIELD_ALIASES drives the Column Resolver (riskviz.core.utils.resolve):
     for each semantic field the aliases are tried in order and the first
     non-empty value wins.
  2. RISK_THRESHOLDS drives risk-band classification (riskviz.scoring) and,
     through it, every histogram and legend count.
  3. The per-builder dataclasses (GroupBarConfig, ScatterConfig, ...) carry
     the optional tuning knobs for each view builder.  ChartDataConfig bundles
     them for the orchestrator.

=== KEY DESIGN DECISIONS ===
- Alias order is significant.  Survey exports from different field teams use
  different header spellings, sometimes more than one in the same file; the
  first alias listed wins so the same input always yields the same output.
- Thresholds are fixed constants (4 and 7 on the 1-9 scale) shared by every
  aggregator so bucket counts always agree with the rendered legends.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# ==========================================
# SEMANTIC FIELDS & HEADER ALIASES
# ==========================================
# Semantic field names used throughout the package.
FIELD_RESPONDENT_GROUP = 'respondent_group'
FIELD_HOTSPOT = 'hotspot'
FIELD_AO = 'ao'
FIELD_PHASE = 'phase'
FIELD_RISK_SCORE = 'risk_score'
FIELD_LIKELIHOOD = 'likelihood'
FIELD_SEVERITY = 'severity'
FIELD_METRIC = 'metric'
FIELD_TIMELINE = 'timeline'
FIELD_DISRUPTION = 'disruption'

# Ordered header spellings accepted for each semantic field.  The resolver
# walks each tuple left to right; keep the most specific spelling first.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    FIELD_RESPONDENT_GROUP: (
        'Respondent Group', 'Respondent Type', 'RespondentGroup',
        'RespondentType', 'Group', 'respondent_group', 'respondent_type',
        'group_name',
    ),
    FIELD_HOTSPOT: (
        'Hotspot', 'Hotspot Name', 'HotspotName', 'HS', 'hotspot_name',
        'hotspot',
    ),
    FIELD_AO: (
        'AO', 'AO Location', 'AO Name', 'AOLocation', 'Area', 'Location',
        'City', 'Region', 'ao_name', 'ao_location',
    ),
    FIELD_PHASE: (
        'Phase', 'Phase Number', 'PhaseNumber', 'phase_number', 'phase',
    ),
    FIELD_RISK_SCORE: (
        'Risk Score', 'RiskScore', 'RP Score', 'RPScore', 'Score',
        'Total Score', 'Rating', 'risk_score', 'score',
    ),
    FIELD_LIKELIHOOD: (
        'Likelihood', 'Probability', 'Frequency', 'Occurrence', 'likelihood',
    ),
    FIELD_SEVERITY: (
        'Severity', 'Impact', 'Consequence', 'Effect', 'severity',
    ),
    FIELD_METRIC: (
        'Metric', 'Metric Name', 'MetricName', 'Risk Type', 'Risk Factor',
        'Category', 'metric_name', 'metric',
    ),
    FIELD_TIMELINE: (
        'Timeline', 'Date', 'Collection Date', 'timeline', 'date',
    ),
    FIELD_DISRUPTION: (
        'Disruption', 'Disruption %', 'Disruption Percentage',
        'DisruptionPercentage', 'disruption_percentage', 'disruption',
    ),
}

# ==========================================
# RISK THRESHOLDS (1-9 perception scale)
# ==========================================
#   score <  4          -> low
#   4 <= score < 7      -> moderate
#   score >= 7          -> high
RISK_THRESHOLDS = {
    'moderate': 4.0,
    'high': 7.0,
}

# Bounds for calculated scores and for the likelihood x severity matrix.
SCORE_MIN = 1.0
SCORE_MAX = 9.0
MATRIX_SIZE = 5

# Number of decimals applied at the aggregator boundary.
SCORE_DECIMALS = 2

# ==========================================
# PHASES
# ==========================================
PHASES: Tuple[int, ...] = (1, 2, 3)

# Phase assumed for rows that carry no phase value.
DEFAULT_PHASE = 1

# ==========================================
# PALETTES & LABELS
# ==========================================
RISK_LEVEL_COLORS = {
    'low': '#90EE90',
    'moderate': '#FFB347',
    'high': '#FF6347',
    'default': '#006400',
}

# One entry per integer step of the 1-9 scale; index 0 covers scores < 2.
SCORE_COLOR_SCALE = (
    '#006400',  # < 2
    '#90EE90',  # < 3
    '#C1FFC1',  # < 4
    '#FFFFE0',  # < 5
    '#FFB347',  # < 6
    '#FFA07A',  # < 7
    '#FF6347',  # < 8
    '#8B0000',  # >= 8
)

METRIC_COLORS: Tuple[str, ...] = (
    '#4338ca', '#3b82f6', '#06b6d4', '#0ea5e9',
    '#0284c7', '#2563eb', '#1d4ed8', '#1e40af',
)

ALL_POINTS_LABEL = 'All Points'
DEFAULT_DATA_RANGE_TEXT = 'March 2025-May 2025'


# ==========================================
# BUILDER CONFIGURATION
# ==========================================

@dataclass
class GroupBarConfig:
    """
    Configuration for the grouped-bar builder.

    Attributes:
        category_field (str): Semantic field used for the bar categories.
        phases (tuple): Phases emitted as ``phase<N>`` fields, in order.
        default_phase (int): Phase assigned to rows with no resolvable phase.
            Rows without a phase column are treated as first-phase data.
    """
    category_field: str = FIELD_RESPONDENT_GROUP
    phases: Tuple[int, ...] = PHASES
    default_phase: int = DEFAULT_PHASE


@dataclass
class ScatterConfig:
    """
    Configuration for the scatter builder.

    Attributes:
        category_fields (tuple): Grouping dimensions tried in order.  The
            first one that yields at least one non-empty series wins; when
            none does, every row lands in a single ``fallback_label`` series.
        fallback_label (str): Name of the catch-all series.
        drop_zero_points (bool): Drop points whose x, y and z are all zero.
    """
    category_fields: Tuple[str, ...] = (FIELD_METRIC, FIELD_HOTSPOT)
    fallback_label: str = ALL_POINTS_LABEL
    drop_zero_points: bool = True


@dataclass
class CombinedConfig:
    """
    Configuration for the combined score/disruption builder.

    Attributes:
        category_field (str): Semantic field for the x-axis categories.
        secondary_field (str): Semantic field holding the secondary metric.
        missing_secondary (float, optional): Value reported when a category
            has no secondary data.  ``None`` marks it explicitly as missing.
    """
    category_field: str = FIELD_HOTSPOT
    secondary_field: str = FIELD_DISRUPTION
    missing_secondary: Optional[float] = None


@dataclass
class MetricWiseConfig:
    """
    Configuration for the metric-wise builder.

    Attributes:
        filter_field (str): Semantic field the selection applies to.
        selected_value (str, optional): Only rows whose ``filter_field``
            equals this value contribute.  ``None`` keeps every row.
        colors (tuple): Palette cycled over metrics in first-seen order.
    """
    filter_field: str = FIELD_HOTSPOT
    selected_value: Optional[str] = None
    colors: Tuple[str, ...] = METRIC_COLORS


@dataclass
class SummaryConfig:
    """
    Configuration for summary statistics.

    Attributes:
        count_unscored_as_low (bool): Rows whose score is missing or zero
            are counted in the ``low`` bucket (default).  When False they are
            left out of the histogram and of min/max/avg.
    """
    count_unscored_as_low: bool = True


@dataclass
class ChartDataConfig:
    """Bundle of per-builder configurations used by the orchestrator."""
    group_bar: GroupBarConfig = field(default_factory=GroupBarConfig)
    scatter: ScatterConfig = field(default_factory=ScatterConfig)
    combined: CombinedConfig = field(default_factory=CombinedConfig)
    metric_wise: MetricWiseConfig = field(default_factory=MetricWiseConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)


def get_aliases(field_name: str) -> Tuple[str, ...]:
    """Return the ordered alias tuple for a semantic field.

    Raises:
        KeyError: If ``field_name`` is not a known semantic field.
    """
    try:
        return FIELD_ALIASES[field_name]
    except KeyError:
        raise KeyError(
            f"Unknown field '{field_name}'. Known fields: {sorted(FIELD_ALIASES)}"
        ) from None
