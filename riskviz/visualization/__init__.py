"""
Chart-data builders for RiskViz.

Includes:
- Core view builders (grouped bar, scatter, combined, metric-wise)
- Drill-down breakdowns (risk matrix, group scores, phase comparison, heatmap)
"""

from .view_builders import (
    build_group_bar_data,
    build_scatter_data,
    build_combined_data,
    build_metric_wise_scores,
)

from .breakdowns import (
    build_risk_matrix,
    build_respondent_group_scores,
    build_phase_comparison,
    build_hotspot_heatmap,
    get_data_range_text,
)

__all__ = [
    # View builders
    'build_group_bar_data',
    'build_scatter_data',
    'build_combined_data',
    'build_metric_wise_scores',
    # Breakdowns
    'build_risk_matrix',
    'build_respondent_group_scores',
    'build_phase_comparison',
    'build_hotspot_heatmap',
    'get_data_range_text',
]
