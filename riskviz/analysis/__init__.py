"""
Analysis modules for RiskViz.

Includes:
- Grouping Engine
- Aggregators and Summary Statistics
- Risk Observations
"""

from .grouping import (
    group_by,
    field_key,
    compound_key,
    distinct_values,
    filter_rows,
    semantic_frame,
    present_rows,
)

from .aggregators import (
    average,
    histogram,
    summarize,
    round_score,
    row_score,
    row_band,
    is_scored,
    mean_scores,
    band_counts,
)

from .observations import (
    calculate_standard_deviation,
    generate_risk_observations,
    generate_group_observations,
)

__all__ = [
    # Grouping
    'group_by',
    'field_key',
    'compound_key',
    'distinct_values',
    'filter_rows',
    'semantic_frame',
    'present_rows',
    # Aggregators
    'average',
    'histogram',
    'summarize',
    'round_score',
    'row_score',
    'row_band',
    'is_scored',
    'mean_scores',
    'band_counts',
    # Observations
    'calculate_standard_deviation',
    'generate_risk_observations',
    'generate_group_observations',
]
