"""
RiskViz - chart-data pipeline for risk perception survey dashboards.

This package turns loosely structured survey rows into the aggregate views
behind every dashboard chart:
- Column resolution across inconsistent header spellings
- Lenient numeric coercion and risk-band classification
- Grouped averages, scatter coordinates and metric-wise scores
- Summary statistics and risk-level histograms
- Drill-down breakdowns (risk matrix, phase comparison, heatmap)
- Rule-based risk observations
"""

__version__ = "1.0.0"
__author__ = "RiskViz Team"

# Core imports
from .core.config import *
from .core.utils import (
    resolve,
    resolve_text,
    resolve_number,
    resolve_phase,
    to_number,
    to_phase,
    ensure_rows,
    rows_from_dataframe,
)

# Models
from .models import (
    RiskBand,
    ChartData,
    FilterSelection,
    SummaryStats,
)

# Scoring
from .scoring import (
    to_risk_band,
    calculate_risk_score,
    interpret_score,
    get_risk_level_color,
)

# Analysis
from .analysis import (
    group_by,
    average,
    histogram,
    summarize,
    generate_risk_observations,
    generate_group_observations,
)

# Visualization
from .visualization import (
    build_group_bar_data,
    build_scatter_data,
    build_combined_data,
    build_metric_wise_scores,
    build_risk_matrix,
    build_respondent_group_scores,
    build_phase_comparison,
    build_hotspot_heatmap,
    get_data_range_text,
)

# Pipeline
from .pipeline import build_chart_data, apply_filters, extract_unique_values

__all__ = [
    # Core
    'resolve',
    'resolve_text',
    'resolve_number',
    'resolve_phase',
    'to_number',
    'to_phase',
    'ensure_rows',
    'rows_from_dataframe',

    # Models
    'RiskBand',
    'ChartData',
    'FilterSelection',
    'SummaryStats',

    # Scoring
    'to_risk_band',
    'calculate_risk_score',
    'interpret_score',
    'get_risk_level_color',

    # Analysis
    'group_by',
    'average',
    'histogram',
    'summarize',
    'generate_risk_observations',
    'generate_group_observations',

    # Visualization
    'build_group_bar_data',
    'build_scatter_data',
    'build_combined_data',
    'build_metric_wise_scores',
    'build_risk_matrix',
    'build_respondent_group_scores',
    'build_phase_comparison',
    'build_hotspot_heatmap',
    'get_data_range_text',

    # Pipeline
    'build_chart_data',
    'apply_filters',
    'extract_unique_values',
]
