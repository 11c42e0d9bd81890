"""
Unit tests for riskviz.pipeline (the build_chart_data boundary)
"""

import json
import unittest

from riskviz import build_chart_data
from riskviz.core.config import (
    ChartDataConfig, GroupBarConfig, MetricWiseConfig, SummaryConfig,
)
from riskviz.models import ChartData, FilterSelection
from riskviz.pipeline import apply_filters, extract_unique_values
from tests.fixtures.sample_data import (
    create_sample_dataframe,
    create_sample_survey_rows,
)


class TestBuildChartData(unittest.TestCase):
    """Test suite for the full chart-data bundle."""

    def setUp(self):
        self.rows = create_sample_survey_rows()

    def test_bundle_keys(self):
        bundle = build_chart_data(self.rows).to_dict()
        self.assertEqual(set(bundle), {
            'groupBarChartData', 'scatterPlotData', 'combinedChartData',
            'metricWiseScores', 'summaryStats', 'uniqueValues', 'riskMatrix',
            'rowCount',
        })

    def test_bundle_is_json_serialisable(self):
        text = json.dumps(build_chart_data(self.rows).to_dict())
        self.assertIn('groupBarChartData', text)

    def test_views_from_sample_rows(self):
        chart_data = build_chart_data(self.rows)
        self.assertEqual(chart_data.row_count, 5)
        self.assertEqual(len(chart_data.group_bar), 2)
        self.assertEqual(len(chart_data.scatter), 3)
        self.assertEqual(len(chart_data.combined), 2)
        self.assertEqual(len(chart_data.metric_wise), 3)
        self.assertEqual(chart_data.summary.avg, 5.3)

    def test_empty_rows(self):
        chart_data = build_chart_data([])
        bundle = chart_data.to_dict()
        self.assertEqual(bundle['groupBarChartData'], [])
        self.assertEqual(bundle['scatterPlotData'], [])
        self.assertEqual(bundle['combinedChartData'], [])
        self.assertEqual(bundle['metricWiseScores'], [])
        self.assertEqual(bundle['summaryStats']['histogram'], {'low': 0, 'moderate': 0, 'high': 0})
        self.assertEqual(bundle['rowCount'], 0)

    def test_input_not_mutated(self):
        before = create_sample_survey_rows()
        build_chart_data(self.rows)
        self.assertEqual(self.rows, before)

    def test_repeatable(self):
        """No state is kept between calls."""
        self.assertEqual(build_chart_data(self.rows), build_chart_data(self.rows))
        build_chart_data([])
        self.assertEqual(build_chart_data(self.rows).row_count, 5)

    def test_accepts_dataframe(self):
        chart_data = build_chart_data(create_sample_dataframe())
        self.assertIsInstance(chart_data, ChartData)
        self.assertEqual(chart_data.summary.max, 9.0)
        self.assertIsNone(chart_data.combined[1].disruption_percentage)

    def test_rejects_bad_input(self):
        with self.assertRaises(TypeError):
            build_chart_data('not rows')
        with self.assertRaises(TypeError):
            build_chart_data([1, 2, 3])

    def test_config_passed_to_builders(self):
        config = ChartDataConfig(
            metric_wise=MetricWiseConfig(selected_value='Hotspot 2'),
            summary=SummaryConfig(count_unscored_as_low=False),
        )
        rows = self.rows + [{'Hotspot': 'Hotspot 1', 'Metric': 'Crime'}]
        chart_data = build_chart_data(rows, config=config)
        self.assertEqual([m.metric for m in chart_data.metric_wise], ['Crime', 'Fire'])
        self.assertEqual(chart_data.summary.histogram.total, 5)


class TestFilters(unittest.TestCase):
    """Test suite for filter selections."""

    def setUp(self):
        self.rows = create_sample_survey_rows()

    def test_no_filters(self):
        self.assertEqual(len(apply_filters(self.rows, None)), 5)
        self.assertEqual(len(apply_filters(self.rows, FilterSelection())), 5)

    def test_combined_selections(self):
        filters = FilterSelection(ao=['North'], phases=[1])
        kept = apply_filters(self.rows, filters)
        self.assertEqual(len(kept), 2)

    def test_timeline(self):
        kept = apply_filters(self.rows, FilterSelection(timeline='April 2025'))
        self.assertEqual(len(kept), 2)

    def test_views_use_filtered_rows(self):
        chart_data = build_chart_data(self.rows, FilterSelection(hotspots=['Hotspot 2']))
        self.assertEqual(chart_data.row_count, 2)
        self.assertEqual([e.name for e in chart_data.combined], ['Hotspot 2'])
        self.assertEqual(chart_data.summary.avg, 7.0)

    def test_unique_values_ignore_filters(self):
        chart_data = build_chart_data(self.rows, FilterSelection(hotspots=['Hotspot 2']))
        self.assertEqual(chart_data.unique_values['Hotspot'], ['Hotspot 1', 'Hotspot 2'])

    def test_unique_values(self):
        values = extract_unique_values(self.rows)
        self.assertEqual(values, {
            'AO': ['North', 'South'],
            'Hotspot': ['Hotspot 1', 'Hotspot 2'],
            'RespondentGroup': ['Youth', 'Elders'],
            'Metric': ['Crime', 'Flooding', 'Fire'],
            'Phase': [1, 2, 3],
            'Timeline': ['March 2025', 'April 2025', 'May 2025'],
        })


class TestMissingPhase(unittest.TestCase):
    """Rows without a phase are treated as the default phase everywhere."""

    def setUp(self):
        self.rows = [{'Group': 'A', 'Score': '5'}]

    def test_unique_phase_lists_default(self):
        chart_data = build_chart_data(self.rows)
        self.assertEqual(chart_data.unique_values['Phase'], [1])
        self.assertEqual(chart_data.group_bar[0].phase_scores, {1: 5.0, 2: 0.0, 3: 0.0})

    def test_phase_filter_keeps_unphased_rows(self):
        chart_data = build_chart_data(self.rows, FilterSelection(phases=[1]))
        self.assertEqual(chart_data.row_count, 1)
        self.assertEqual(chart_data.group_bar[0].phase_scores[1], 5.0)
        self.assertEqual(chart_data.summary.avg, 5.0)

    def test_other_phase_filter_drops_unphased_rows(self):
        chart_data = build_chart_data(self.rows, FilterSelection(phases=[2]))
        self.assertEqual(chart_data.row_count, 0)
        self.assertEqual(chart_data.group_bar, [])

    def test_configured_default_phase(self):
        config = ChartDataConfig(group_bar=GroupBarConfig(default_phase=3))
        chart_data = build_chart_data(self.rows, FilterSelection(phases=[3]), config)
        self.assertEqual(chart_data.unique_values['Phase'], [3])
        self.assertEqual(chart_data.group_bar[0].phase_scores[3], 5.0)


if __name__ == '__main__':
    unittest.main()
