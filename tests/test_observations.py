"""
Unit tests for riskviz.analysis.observations
"""

import unittest

from riskviz.analysis.observations import (
    calculate_standard_deviation,
    generate_group_observations,
    generate_risk_observations,
)
from tests.fixtures.sample_data import create_sample_survey_rows


class TestStandardDeviation(unittest.TestCase):

    def test_population_std(self):
        self.assertAlmostEqual(calculate_standard_deviation([2, 4, 4, 4, 5, 5, 7, 9]), 2.0)

    def test_too_few_values(self):
        self.assertEqual(calculate_standard_deviation([]), 0.0)
        self.assertEqual(calculate_standard_deviation([5]), 0.0)


class TestRiskObservations(unittest.TestCase):
    """Test suite for rule-based observations."""

    def test_within_expected_range(self):
        observations = generate_risk_observations(5, 5, 5, 1)
        self.assertEqual(len(observations), 1)
        self.assertIn('within expected range', observations[0].text)

    def test_low_declining_outlier(self):
        observations = generate_risk_observations(2, 4, 5, 1)
        texts = [o.text for o in observations]
        self.assertEqual(len(texts), 4)
        self.assertTrue(texts[0].startswith('Low risk perception'))
        self.assertIn('2.0 point drop', texts[1])
        self.assertIn('3.0 points below average', texts[2])
        self.assertTrue(texts[3].startswith('Outlier detected'))
        self.assertEqual(observations[0].importance, 'high')

    def test_high_and_improving(self):
        observations = generate_risk_observations(8, 6, 8, 1)
        self.assertEqual([o.direction for o in observations], ['up', 'up'])
        self.assertIn('+2.0 points', observations[1].text)

    def test_accepts_numeric_strings(self):
        observations = generate_risk_observations('8', '6', '8', '1')
        self.assertEqual(len(observations), 2)


class TestGroupObservations(unittest.TestCase):
    """Test suite for per-group observations."""

    def test_sample_rows(self):
        results = generate_group_observations(create_sample_survey_rows())
        self.assertEqual(list(results), ['Youth', 'Elders'])
        for group, observations in results.items():
            texts = ' '.join(o.text for o in observations)
            self.assertIn('Improving risk perception', texts, group)
            self.assertIn('High risk perception', texts, group)

    def test_single_phase_has_no_trend(self):
        rows = [{'Group': 'A', 'Phase': 1, 'Score': 5}]
        observations = generate_group_observations(rows)['A']
        self.assertFalse(any('Improving' in o.text or 'Declining' in o.text
                             for o in observations))

    def test_empty(self):
        self.assertEqual(generate_group_observations([]), {})


if __name__ == '__main__':
    unittest.main()
