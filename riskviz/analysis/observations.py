"""
Risk Observations.

Turns a score and its context (the previous phase's score, the overall
average and spread) into short, ranked observations for the dashboard's
insight panels.

Rules (applied independently, so one score can trigger several):
    - score > 7                         -> high perception, reinforce
    - score < 3                         -> low perception, attention required
    - drop of more than 1.0 vs previous -> declining
    - rise of more than 0.5 vs previous -> improving
    - more than std/2 below the average -> below average
    - more than std/2 above the average -> above average
    - more than 2*std from the average  -> outlier
If nothing fires a single "within expected range" observation is returned.

``generate_group_observations`` applies the rules per respondent group using
the group's two most recent phases; previous scores always come from real
rows, never from estimates.
"""

import logging
from typing import Dict, Iterable, List, Sequence

import numpy as np

from ..core.config import FIELD_RESPONDENT_GROUP, FIELD_PHASE
from ..core.utils import Row, to_number
from ..models.data_models import Observation
from .aggregators import mean_scores
from .grouping import semantic_frame

logger = logging.getLogger(__name__)


def calculate_standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation; 0 for fewer than two values."""
    numbers = [to_number(v) for v in values if v is not None]
    if len(numbers) <= 1:
        return 0.0
    return float(np.std(numbers))


def generate_risk_observations(score, previous_score, overall_average,
                               standard_deviation) -> List[Observation]:
    """
    Build observations for one score.

    Args:
        score: Current RP score.
        previous_score: Score from the previous phase (same value as
            ``score`` when there is none).
        overall_average: Mean across the comparison set.
        standard_deviation: Spread across the comparison set.

    Returns:
        list[Observation]: At least one observation.
    """
    current = to_number(score)
    previous = to_number(previous_score)
    mean = to_number(overall_average)
    std = to_number(standard_deviation)
    observations: List[Observation] = []

    if current > 7:
        observations.append(Observation(
            "High risk perception: Reinforce strategies in this group/location",
            direction="up", importance="high"))
    if current < 3.0:
        observations.append(Observation(
            "Low risk perception: Immediate attention required",
            direction="down", importance="high"))
    if current < previous - 1.0:
        observations.append(Observation(
            "Declining risk perception: Investigate potential causes and adjust "
            f"strategies ({previous - current:.1f} point drop)",
            direction="down", importance="medium"))
    if current > previous + 0.5:
        observations.append(Observation(
            "Improving risk perception: Reinforce successful interventions "
            f"(+{current - previous:.1f} points)",
            direction="up", importance="medium"))
    if current < mean - std / 2:
        observations.append(Observation(
            f"Below average RP: Risk perception is {mean - current:.1f} points below average",
            direction="down", importance="low"))
    if current > mean + std / 2:
        observations.append(Observation(
            "Above average RP: Explore best practices contributing to stronger "
            f"risk perception (+{current - mean:.1f} points)",
            direction="up", importance="low"))
    if abs(current - mean) > 2 * std:
        observations.append(Observation(
            f"Outlier detected: Score deviates significantly ({abs(current - mean):.1f} points) "
            "from average",
            direction="info", importance="high"))

    if not observations:
        observations.append(Observation(
            f"Risk perception within expected range ({current:.1f} near average of "
            f"{mean:.1f}), continue monitoring"))
    return observations


def generate_group_observations(rows: Iterable[Row],
                                field: str = FIELD_RESPONDENT_GROUP
                                ) -> Dict[str, List[Observation]]:
    """
    Observations per group based on its latest and previous phase averages.

    Args:
        rows: Input rows.
        field: Semantic field defining the groups.

    Returns:
        Ordered dict of group label -> observations.  Groups without any
        phased rows are omitted.
    """
    phase_means = mean_scores(semantic_frame(rows), field, FIELD_PHASE)
    if phase_means.empty:
        return {}

    mean = float(phase_means.mean())
    std = calculate_standard_deviation(phase_means.tolist())

    results: Dict[str, List[Observation]] = {}
    for group, scores in phase_means.groupby(level=0, sort=False):
        by_phase = scores.droplevel(0).sort_index()
        current = float(by_phase.iloc[-1])
        previous = float(by_phase.iloc[-2]) if len(by_phase) > 1 else current
        results[group] = generate_risk_observations(current, previous, mean, std)

    logger.info(f"[Observations] Generated observations for {len(results)} groups")
    return results
