"""
Unit tests for riskviz.analysis.aggregators
"""

import unittest

import pandas as pd

from riskviz.analysis.aggregators import (
    average,
    band_counts,
    histogram,
    is_scored,
    mean_scores,
    summarize,
)
from riskviz.analysis.grouping import semantic_frame
from riskviz.core.config import SummaryConfig
from riskviz.core.utils import resolve_number
from riskviz.models import RiskBand
from tests.fixtures.sample_data import create_sample_survey_rows


class TestAverage(unittest.TestCase):
    """Test suite for guarded averaging."""

    def test_empty_is_zero(self):
        self.assertEqual(average([]), 0.0)

    def test_rounded_to_two_decimals(self):
        rows = [{'Risk Score': '3'}, {'Risk Score': '7.5'}, {'Risk Score': '2'}]
        self.assertEqual(average(rows), 4.17)

    def test_malformed_counts_as_zero(self):
        """Malformed scores add 0 but still count toward the denominator."""
        rows = [{'Risk Score': '6'}, {'Risk Score': 'n/a'}]
        self.assertEqual(average(rows), 3.0)

    def test_custom_value_fn(self):
        rows = [{'Disruption': '45%'}, {'Disruption': '15%'}]
        self.assertEqual(average(rows, lambda r: resolve_number(r, 'disruption')), 30.0)


class TestHistogram(unittest.TestCase):
    """Test suite for risk-band histograms."""

    def test_counts_sum_to_rows(self):
        rows = create_sample_survey_rows() + [{'Risk Score': ''}, {}]
        counts = histogram(rows)
        self.assertEqual(counts.total, len(rows))

    def test_boundaries(self):
        rows = [{'RiskScore': '6.999'}, {'RiskScore': '7'}, {'RiskScore': '4'}, {'RiskScore': '3.9'}]
        counts = histogram(rows)
        self.assertEqual(counts.to_dict(), {'low': 1, 'moderate': 2, 'high': 1})

    def test_custom_band_fn(self):
        counts = histogram([{}, {}], band_fn=lambda r: RiskBand.HIGH)
        self.assertEqual(counts.high, 2)


class TestSummarize(unittest.TestCase):
    """Test suite for summary statistics."""

    def test_empty_input(self):
        stats = summarize([])
        self.assertEqual(stats.to_dict(), {
            'min': 0.0, 'max': 0.0, 'avg': 0.0,
            'histogram': {'low': 0, 'moderate': 0, 'high': 0},
        })

    def test_sample_rows(self):
        stats = summarize(create_sample_survey_rows())
        self.assertEqual(stats.min, 2.0)
        self.assertEqual(stats.max, 9.0)
        self.assertEqual(stats.avg, 5.3)
        self.assertEqual(stats.histogram.to_dict(), {'low': 2, 'moderate': 1, 'high': 2})

    def test_idempotent(self):
        rows = create_sample_survey_rows()
        self.assertEqual(summarize(rows), summarize(rows))

    def test_unscored_rows_count_as_low_by_default(self):
        rows = [{'Risk Score': '8'}, {'Risk Score': ''}]
        stats = summarize(rows)
        self.assertEqual(stats.histogram.low, 1)
        self.assertEqual(stats.min, 0.0)
        self.assertEqual(stats.avg, 4.0)

    def test_unscored_rows_can_be_excluded(self):
        rows = [{'Risk Score': '8'}, {'Risk Score': ''}, {'Risk Score': 'bad'}]
        stats = summarize(rows, SummaryConfig(count_unscored_as_low=False))
        self.assertEqual(stats.histogram.to_dict(), {'low': 0, 'moderate': 0, 'high': 1})
        self.assertEqual(stats.min, 8.0)
        self.assertEqual(stats.avg, 8.0)

    def test_is_scored(self):
        self.assertTrue(is_scored({'Score': '2'}))
        self.assertFalse(is_scored({'Score': '0'}))
        self.assertFalse(is_scored({}))


class TestFrameAggregation(unittest.TestCase):
    """Test suite for the DataFrame aggregators."""

    def setUp(self):
        self.frame = semantic_frame(create_sample_survey_rows())

    def test_mean_scores_first_seen_order(self):
        means = mean_scores(self.frame, 'respondent_group')
        self.assertEqual(list(means.index), ['Youth', 'Elders'])
        self.assertEqual(list(means), [5.25, 5.33])

    def test_mean_scores_multiple_keys(self):
        means = mean_scores(self.frame, 'hotspot', 'phase')
        self.assertEqual(means[('Hotspot 2', 1)], 5.0)
        self.assertEqual(len(means), 4)

    def test_mean_scores_skips_absent_keys(self):
        frame = semantic_frame([{'Metric': 'Crime', 'Risk Score': '4'},
                                {'Risk Score': '9'}])
        self.assertEqual(mean_scores(frame, 'metric').to_dict(), {'Crime': 4.0})

    def test_band_counts_boundaries(self):
        """Thresholds are inclusive on the lower edge of each band."""
        counts = band_counts(pd.Series([0.0, 3.99, 4.0, 6.999, 7.0, 9.0]))
        self.assertEqual((counts.low, counts.moderate, counts.high), (2, 2, 2))

    def test_band_counts_empty(self):
        self.assertEqual(band_counts(pd.Series([], dtype='float64')).total, 0)


if __name__ == '__main__':
    unittest.main()
