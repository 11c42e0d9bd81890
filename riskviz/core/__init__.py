"""
Core module for RiskViz.

Contains configuration (alias table, thresholds, builder configs) and the
column-resolution / numeric-coercion utilities used by every other module.
"""

from riskviz.core.config import *
from riskviz.core.utils import (
    resolve,
    resolve_text,
    resolve_number,
    resolve_phase,
    clean_label,
    to_number,
    to_phase,
    rows_from_dataframe,
    ensure_rows,
)

__all__ = [
    # Config
    'FIELD_ALIASES',
    'RISK_THRESHOLDS',
    'PHASES',
    'GroupBarConfig',
    'ScatterConfig',
    'CombinedConfig',
    'MetricWiseConfig',
    'SummaryConfig',
    'ChartDataConfig',
    'get_aliases',
    # Utils
    'resolve',
    'resolve_text',
    'resolve_number',
    'resolve_phase',
    'clean_label',
    'to_number',
    'to_phase',
    'rows_from_dataframe',
    'ensure_rows',
]
