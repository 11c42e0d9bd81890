"""
RiskViz Test Suite

This package contains unit tests and fixtures for the RiskViz chart-data
pipeline.

Run tests with:
    pytest tests/
    pytest tests/test_view_builders.py -v
    pytest tests/test_view_builders.py::TestGroupBarData -v
"""

__version__ = "1.0.0"
