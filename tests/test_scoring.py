"""
Unit tests for riskviz.scoring
"""

import unittest

from riskviz.core.config import RISK_LEVEL_COLORS, SCORE_COLOR_SCALE
from riskviz.models import RiskBand
from riskviz.scoring import (
    calculate_risk_score,
    generate_hotspot_observation,
    generate_recommendation,
    get_risk_level_color,
    interpret_score,
    to_risk_band,
)


class TestRiskBand(unittest.TestCase):
    """Test suite for risk-band classification."""

    def test_band_boundaries(self):
        """Low/moderate split at 4 and moderate/high split at 7, high side inclusive."""
        self.assertEqual(to_risk_band(3.99), RiskBand.LOW)
        self.assertEqual(to_risk_band(4), RiskBand.MODERATE)
        self.assertEqual(to_risk_band('6.999'), RiskBand.MODERATE)
        self.assertEqual(to_risk_band('7'), RiskBand.HIGH)
        self.assertEqual(to_risk_band(9), RiskBand.HIGH)

    def test_unscored_is_low(self):
        self.assertEqual(to_risk_band(None), RiskBand.LOW)
        self.assertEqual(to_risk_band('n/a'), RiskBand.LOW)

    def test_interpretation_and_recommendation(self):
        self.assertEqual(interpret_score(8), 'High Risk')
        self.assertEqual(interpret_score(5), 'Moderate Risk')
        self.assertEqual(interpret_score(1), 'Low Risk')
        self.assertIn('Immediate action', generate_recommendation(7))
        self.assertIn('standard monitoring', generate_recommendation(2))


class TestCalculateRiskScore(unittest.TestCase):
    """Test suite for likelihood x severity scoring."""

    def test_maximum(self):
        self.assertEqual(calculate_risk_score(5, 5), 9.0)

    def test_rounded_to_one_decimal(self):
        self.assertEqual(calculate_risk_score(3, 3), 3.2)
        self.assertEqual(calculate_risk_score('2', '3'), 2.2)

    def test_clamped_to_scale(self):
        self.assertEqual(calculate_risk_score(1, 1), 1.0)
        self.assertEqual(calculate_risk_score(10, 10), 9.0)
        self.assertEqual(calculate_risk_score(None, 'x'), 1.0)


class TestRiskColors(unittest.TestCase):
    """Test suite for color lookups."""

    def test_level_names(self):
        self.assertEqual(get_risk_level_color('High Risk'), RISK_LEVEL_COLORS['high'])
        self.assertEqual(get_risk_level_color('medium'), RISK_LEVEL_COLORS['moderate'])
        self.assertEqual(get_risk_level_color('low'), RISK_LEVEL_COLORS['low'])
        self.assertEqual(get_risk_level_color('unknown'), RISK_LEVEL_COLORS['default'])

    def test_numeric_scale(self):
        self.assertEqual(get_risk_level_color(0), SCORE_COLOR_SCALE[0])
        self.assertEqual(get_risk_level_color(7.5), SCORE_COLOR_SCALE[6])
        self.assertEqual(get_risk_level_color(9), SCORE_COLOR_SCALE[-1])
        self.assertEqual(get_risk_level_color('4.2'), SCORE_COLOR_SCALE[3])


class TestHotspotObservation(unittest.TestCase):

    def test_text(self):
        self.assertEqual(
            generate_hotspot_observation('HS1', 7.25, 2),
            'HS1 shows high risk perception (7.25) in Phase 2.',
        )


if __name__ == '__main__':
    unittest.main()
