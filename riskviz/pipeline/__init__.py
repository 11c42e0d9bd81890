"""
Pipeline module for RiskViz.

Contains the transformation boundary that turns rows into a ChartData bundle.
"""

from .orchestrator import (
    build_chart_data,
    apply_filters,
    extract_unique_values,
    UNIQUE_VALUE_FIELDS,
)

__all__ = [
    'build_chart_data',
    'apply_filters',
    'extract_unique_values',
    'UNIQUE_VALUE_FIELDS',
]
