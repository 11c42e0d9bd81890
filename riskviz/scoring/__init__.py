"""
Risk Perception Scoring.

=== PURPOSE ===
Everything that turns a single numeric score into a category, a color or a
sentence lives here, so the thresholds in ``core.config.RISK_THRESHOLDS`` are
applied identically by the aggregators, the summary statistics and any
caller that labels a chart legend.

=== SCALE ===
Risk perception (RP) scores run from 1 to 9:

    score <  4          -> low
    4 <= score < 7      -> moderate
    score >= 7          -> high

``calculate_risk_score`` derives an RP score from 1-5 likelihood and severity
ratings by scaling their product onto the same 1-9 range.
"""

import logging
import math
from typing import Union

from ..core.config import (
    RISK_THRESHOLDS, RISK_LEVEL_COLORS, SCORE_COLOR_SCALE,
    SCORE_MIN, SCORE_MAX, MATRIX_SIZE,
)
from ..core.utils import to_number
from ..models.data_models import RiskBand

logger = logging.getLogger(__name__)

_INTERPRETATIONS = {
    RiskBand.HIGH: 'High Risk',
    RiskBand.MODERATE: 'Moderate Risk',
    RiskBand.LOW: 'Low Risk',
}

_RECOMMENDATIONS = {
    RiskBand.HIGH: 'Immediate action required. Allocate resources to address this high-risk area.',
    RiskBand.MODERATE: 'Monitor closely and develop mitigation strategies for this moderate-risk area.',
    RiskBand.LOW: 'Continue standard monitoring for this low-risk area.',
}


def to_risk_band(score) -> RiskBand:
    """
    Classify a score into a risk band.

    Non-numeric input coerces to 0 and therefore classifies as LOW.

    Args:
        score: A number or numeric string.

    Returns:
        RiskBand: HIGH at or above 7, MODERATE at or above 4, else LOW.
    """
    value = to_number(score)
    if value >= RISK_THRESHOLDS['high']:
        return RiskBand.HIGH
    if value >= RISK_THRESHOLDS['moderate']:
        return RiskBand.MODERATE
    return RiskBand.LOW


def calculate_risk_score(likelihood, severity) -> float:
    """
    Derive a 1-9 RP score from likelihood and severity ratings.

    Both inputs are clamped to 1-5, multiplied, scaled by 9/25 and rounded
    to one decimal (half up).  The result is clamped to 1-9.
    """
    lik = min(float(MATRIX_SIZE), max(1.0, to_number(likelihood)))
    sev = min(float(MATRIX_SIZE), max(1.0, to_number(severity)))
    score = lik * sev / (MATRIX_SIZE ** 2 / SCORE_MAX)
    score = math.floor(score * 10 + 0.5) / 10
    return min(SCORE_MAX, max(SCORE_MIN, score))


def interpret_score(score) -> str:
    """Return 'High Risk', 'Moderate Risk' or 'Low Risk'."""
    return _INTERPRETATIONS[to_risk_band(score)]


def generate_recommendation(score) -> str:
    """Return the recommended action for a score's risk band."""
    return _RECOMMENDATIONS[to_risk_band(score)]


def get_risk_level_color(score_or_level: Union[float, str]) -> str:
    """
    Return the hex color for a score or a risk level name.

    Level names match loosely ('Moderate Risk', 'medium' -> moderate).
    Numeric scores use a nine-step scale with one color per integer band.
    """
    if isinstance(score_or_level, str) and to_number(score_or_level, fallback=-1.0) < 0:
        level = score_or_level.lower()
        if 'low' in level:
            return RISK_LEVEL_COLORS['low']
        if 'moderate' in level or 'medium' in level:
            return RISK_LEVEL_COLORS['moderate']
        if 'high' in level:
            return RISK_LEVEL_COLORS['high']
        return RISK_LEVEL_COLORS['default']

    score = to_number(score_or_level)
    index = int(math.floor(score)) - 1
    index = min(len(SCORE_COLOR_SCALE) - 1, max(0, index))
    return SCORE_COLOR_SCALE[index]


def generate_hotspot_observation(hotspot: str, score, phase: int) -> str:
    """One-line observation, e.g. 'HS1 shows high risk perception (7.25) in Phase 2.'"""
    value = to_number(score)
    level = to_risk_band(value).value
    return f"{hotspot} shows {level} risk perception ({value:.2f}) in Phase {phase}."


__all__ = [
    'RiskBand',
    'to_risk_band',
    'calculate_risk_score',
    'interpret_score',
    'generate_recommendation',
    'get_risk_level_color',
    'generate_hotspot_observation',
]
