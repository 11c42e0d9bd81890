"""
Data models for the risk perception chart-data pipeline.

This module defines the **schema layer** for RiskViz.  Input rows stay plain
mappings (their headers are not standardised), but every derived shape the
pipeline hands to the rendering layer is a typed dataclass defined here.

Role in the pipeline
--------------------
1. **Documentation** -- each dataclass formally describes one chart record
   shape, so chart components never need key-existence checks.

2. **Serialisation** -- ``to_dict()`` emits the camelCase keys the charts
   consume, and ``ChartData.to_dict()`` produces the whole JSON bundle.

3. **Uniformity** -- records always carry their complete field set.  An
   empty sub-group is reported as ``0``, never omitted and never NaN.

Dataclass hierarchy
-------------------
::

    ChartData
        group_bar    -> List[GroupBarEntry]
        scatter      -> List[ScatterSeries] -> List[ScatterPoint]
        combined     -> List[CombinedEntry]
        metric_wise  -> List[MetricScore]
        summary      -> SummaryStats -> RiskLevelCounts
        unique_values-> Dict[str, list]
        risk_matrix  -> List[List[RiskMatrixCell]]
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class RiskBand(Enum):
    """
    Risk perception bands on the 1-9 scale.

    Values:
        LOW: score < 4
        MODERATE: 4 <= score < 7
        HIGH: score >= 7
    """
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


# ============================================================================
# SUMMARY STATISTICS
# ============================================================================

@dataclass
class RiskLevelCounts:
    """Histogram of rows per risk band."""
    low: int = 0
    moderate: int = 0
    high: int = 0

    def add(self, band: RiskBand) -> None:
        setattr(self, band.value, getattr(self, band.value) + 1)

    @property
    def total(self) -> int:
        return self.low + self.moderate + self.high

    def to_dict(self) -> Dict[str, int]:
        return {'low': self.low, 'moderate': self.moderate, 'high': self.high}


@dataclass
class SummaryStats:
    """
    Global score statistics over a row collection.

    Attributes:
        min (float): Lowest coerced score (0 for empty input).
        max (float): Highest coerced score (0 for empty input).
        avg (float): Mean score rounded to two decimals (0 for empty input).
        histogram (RiskLevelCounts): Row counts per risk band.
    """
    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0
    histogram: RiskLevelCounts = field(default_factory=RiskLevelCounts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'min': self.min,
            'max': self.max,
            'avg': self.avg,
            'histogram': self.histogram.to_dict(),
        }


# ============================================================================
# VIEW RECORDS
# ============================================================================

@dataclass
class GroupBarEntry:
    """
    One grouped-bar category with an averaged score per phase.

    ``phase_scores`` holds every configured phase; phases without rows are 0.
    """
    name: str
    phase_scores: Dict[int, float] = field(default_factory=dict)

    def score_for(self, phase: int) -> float:
        return self.phase_scores.get(phase, 0.0)

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {'name': self.name}
        for phase, score in self.phase_scores.items():
            record[f'phase{phase}'] = score
        return record


@dataclass
class ScatterPoint:
    """A likelihood (x) / severity (y) / score (z) point."""
    x: float
    y: float
    z: float
    name: str

    @property
    def is_empty(self) -> bool:
        return self.x == 0 and self.y == 0 and self.z == 0

    def to_dict(self) -> Dict[str, Any]:
        return {'x': self.x, 'y': self.y, 'z': self.z, 'name': self.name}


@dataclass
class ScatterSeries:
    """Scatter points sharing one category (metric, hotspot or catch-all)."""
    name: str
    points: List[ScatterPoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'data': [p.to_dict() for p in self.points]}


@dataclass
class CombinedEntry:
    """
    Averaged primary score paired with a secondary metric for one category.

    ``disruption_percentage`` is ``None`` when the input carries no
    secondary data for the category.
    """
    name: str
    risk_score: float
    disruption_percentage: Optional[float] = None

    @property
    def has_secondary(self) -> bool:
        return self.disruption_percentage is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'riskScore': self.risk_score,
            'disruptionPercentage': self.disruption_percentage,
        }


@dataclass
class MetricScore:
    """Averaged score of one metric, indexed in first-seen order (from 1)."""
    metric_index: int
    metric: str
    score: float
    color: str = ""
    hotspot: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'metricIndex': self.metric_index,
            'metric': self.metric,
            'score': self.score,
            'color': self.color,
            'hotspot': self.hotspot,
        }


@dataclass
class RiskMatrixCell:
    """Likelihood x severity cell: row count and averaged score."""
    count: int = 0
    avg_score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {'count': self.count, 'avgScore': self.avg_score}


@dataclass
class RespondentGroupScore:
    """Averaged score of one respondent group within a hotspot and phase."""
    group: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {'group': self.group, 'score': self.score}


@dataclass
class PhaseComparisonEntry:
    """Averaged score per phase label (``"Phase 1"``...) for one respondent group."""
    group: str
    phase_scores: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {'group': self.group}
        record.update(self.phase_scores)
        return record


@dataclass
class HeatmapRow:
    """One respondent group across every hotspot column."""
    respondent_group: str
    cells: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {'respondentGroup': self.respondent_group}
        record.update(self.cells)
        return record


@dataclass
class Observation:
    """
    A generated observation about a score.

    Attributes:
        text (str): Human-readable observation.
        direction (str): 'up', 'down' or 'info'.
        importance (str): 'high', 'medium' or 'low'.
    """
    text: str
    direction: str = "info"
    importance: str = "low"

    def to_dict(self) -> Dict[str, str]:
        return {'text': self.text, 'direction': self.direction, 'importance': self.importance}


# ============================================================================
# FILTERS & BUNDLE
# ============================================================================

@dataclass
class FilterSelection:
    """
    Filter selections from the dashboard controls.

    An empty list (or ``None`` timeline) means "no restriction" for that field.
    """
    ao: List[str] = field(default_factory=list)
    hotspots: List[str] = field(default_factory=list)
    phases: List[int] = field(default_factory=list)
    metrics: List[str] = field(default_factory=list)
    respondent_groups: List[str] = field(default_factory=list)
    timeline: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not (self.ao or self.hotspots or self.phases or self.metrics
                    or self.respondent_groups or self.timeline)


@dataclass
class ChartData:
    """
    The bundle of named views produced for one row collection.

    Returned by value from ``build_chart_data``; the caller owns it and
    decides how long to keep it.
    """
    group_bar: List[GroupBarEntry] = field(default_factory=list)
    scatter: List[ScatterSeries] = field(default_factory=list)
    combined: List[CombinedEntry] = field(default_factory=list)
    metric_wise: List[MetricScore] = field(default_factory=list)
    summary: SummaryStats = field(default_factory=SummaryStats)
    unique_values: Dict[str, list] = field(default_factory=dict)
    risk_matrix: List[List[RiskMatrixCell]] = field(default_factory=list)
    row_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'groupBarChartData': [e.to_dict() for e in self.group_bar],
            'scatterPlotData': [s.to_dict() for s in self.scatter],
            'combinedChartData': [e.to_dict() for e in self.combined],
            'metricWiseScores': [m.to_dict() for m in self.metric_wise],
            'summaryStats': self.summary.to_dict(),
            'uniqueValues': {k: list(v) for k, v in self.unique_values.items()},
            'riskMatrix': [[c.to_dict() for c in row] for row in self.risk_matrix],
            'rowCount': self.row_count,
        }
