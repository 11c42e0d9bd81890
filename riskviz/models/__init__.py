"""
Data models for the chart-data pipeline.
"""

from .data_models import (
    RiskBand,
    RiskLevelCounts,
    SummaryStats,
    GroupBarEntry,
    ScatterPoint,
    ScatterSeries,
    CombinedEntry,
    MetricScore,
    RiskMatrixCell,
    RespondentGroupScore,
    PhaseComparisonEntry,
    HeatmapRow,
    Observation,
    FilterSelection,
    ChartData,
)

__all__ = [
    'RiskBand',
    'RiskLevelCounts',
    'SummaryStats',
    'GroupBarEntry',
    'ScatterPoint',
    'ScatterSeries',
    'CombinedEntry',
    'MetricScore',
    'RiskMatrixCell',
    'RespondentGroupScore',
    'PhaseComparisonEntry',
    'HeatmapRow',
    'Observation',
    'FilterSelection',
    'ChartData',
]
