#!/usr/bin/env python3
"""
RiskViz - Command-Line Entry Point
==================================

Loads survey rows from a CSV or JSON file, runs them through the chart-data
pipeline and writes the resulting ChartData bundle as JSON.

    rows file (CSV / JSON)
         |
         v
    load_rows()          -- pandas for CSV, json for JSON row lists
         |
         v
    build_chart_data()   -- filters from the CLI flags applied here
         |
         v
    JSON bundle          -- stdout, or --output file

Usage:
    python run.py --file survey.csv
    python run.py --file survey.csv --output charts.json
    python run.py --file survey.json --hotspot "Hotspot 1" --phase 2
    python run.py --file survey.csv --verbose

Or with the package installed:
    riskviz --file survey.csv
"""

import argparse
import json
import logging
import os
import re
import sys
import time
from pathlib import Path

import pandas as pd

from riskviz import __version__
from riskviz.core.utils import rows_from_dataframe
from riskviz.models import FilterSelection
from riskviz.pipeline import build_chart_data
from riskviz.visualization import get_data_range_text

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = ('.csv', '.json')


# ==========================================
# PATH VALIDATION
# ==========================================
# User-supplied paths must resolve inside the working directory, the
# checkout holding this script, or the user's home directory.

DEFAULT_OUTPUT_NAME = 'chart_data.json'


def allowed_roots() -> list:
    """Directories a CLI path may resolve into."""
    return [
        Path.cwd().resolve(),
        Path(__file__).parent.resolve(),
        Path.home().resolve(),
    ]


def validate_file_path(path: str, must_exist: bool = False) -> Path:
    """
    Resolve a CLI path and check it lies under one of ``allowed_roots()``.

    Args:
        path: Raw file path string from a CLI argument.
        must_exist: When True the file must already exist (input files).

    Returns:
        The resolved Path.

    Raises:
        ValueError: If the path cannot be resolved, falls outside every
                    allowed root, or is missing when must_exist is True.
    """
    try:
        resolved = Path(path).resolve()
    except (OSError, RuntimeError) as e:
        raise ValueError(f"Invalid file path '{path}': {e}") from e

    if must_exist and not resolved.exists():
        raise ValueError(f"Invalid file path '{path}': File not found")

    if not any(resolved.is_relative_to(root) for root in allowed_roots()):
        raise ValueError(f"Invalid file path '{path}': outside allowed directories")

    return resolved


def output_filename(name: str) -> str:
    """
    Safe file name for the JSON bundle.

    Drops any directory part and characters other than word characters,
    spaces, hyphens and dots, forces a ``.json`` suffix and falls back to
    ``chart_data.json`` when nothing usable is left.
    """
    stem = re.sub(r'[^\w\s\-\.]', '', os.path.basename(name)).strip(' .')
    if not stem:
        return DEFAULT_OUTPUT_NAME
    if not stem.lower().endswith('.json'):
        stem = f"{stem}.json"
    if len(stem) > 255:
        stem = stem[:250] + '.json'
    return stem


# ==========================================
# LOGGING CONFIGURATION
# ==========================================
# Dual output: a timestamped DEBUG log file under logs/ and a quieter console
# handler (WARNING by default, INFO with --verbose).

def setup_logging(verbose: bool = False) -> Path:
    """
    Configure the root logger with file and console handlers.

    Args:
        verbose: Lower the console handler to INFO.

    Returns:
        Path: The newly created log file.
    """
    log_dir = Path(__file__).parent / "logs"
    log_dir.mkdir(exist_ok=True)

    timestamp = time.strftime('%Y%m%d_%H%M%S')
    log_file = log_dir / f"riskviz_{timestamp}.log"

    file_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    # stderr so JSON written to stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(f"Logging to: {log_file}")
    return log_file


# ==========================================
# INPUT LOADING
# ==========================================

def load_rows(path: Path) -> list:
    """
    Read survey rows from a CSV or JSON file.

    CSV is read with pandas (every cell kept as text, blanks as None).  JSON
    must hold a list of row objects, or an object with a ``rows`` or
    ``data`` list.

    Raises:
        ValueError: If the file type is unsupported or the JSON has no row list.
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported file type '{suffix}'. Expected one of {SUPPORTED_SUFFIXES}"
        )

    if suffix == '.csv':
        df = pd.read_csv(path, dtype=str, skipinitialspace=True)
        logger.info(f"[Loader] Read {len(df)} rows x {len(df.columns)} columns from {path.name}")
        return rows_from_dataframe(df)

    with open(path, 'r', encoding='utf-8') as f:
        payload = json.load(f)
    if isinstance(payload, dict):
        payload = payload.get('rows', payload.get('data'))
    if not isinstance(payload, list):
        raise ValueError(f"{path.name} does not contain a list of rows")
    logger.info(f"[Loader] Read {len(payload)} rows from {path.name}")
    return payload


def build_filters(args) -> FilterSelection:
    """Map the CLI filter flags onto a FilterSelection."""
    return FilterSelection(
        ao=args.ao or [],
        hotspots=args.hotspot or [],
        phases=args.phase or [],
        metrics=args.metric or [],
        respondent_groups=args.respondent_group or [],
        timeline=args.timeline,
    )


def parse_args(argv=None):
    """
    Parse and return command-line arguments.

    Returns:
        argparse.Namespace with the parsed flags.
    """
    parser = argparse.ArgumentParser(
        description='RiskViz - risk perception chart-data pipeline',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py --file survey.csv                       Print chart data
  python run.py --file survey.csv --output charts.json  Write chart data
  python run.py --file survey.csv --hotspot "Hotspot 1" --phase 2
        """
    )

    parser.add_argument(
        '--file', '-f',
        type=str,
        required=True,
        help='Input CSV or JSON file with survey rows'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output JSON file (default: stdout)'
    )

    # Filters (repeat a flag to allow several values)
    parser.add_argument('--ao', action='append', help='Keep rows from this AO')
    parser.add_argument('--hotspot', action='append', help='Keep rows from this hotspot')
    parser.add_argument('--phase', action='append', type=int, help='Keep rows from this phase')
    parser.add_argument('--metric', action='append', help='Keep rows for this metric')
    parser.add_argument(
        '--respondent-group',
        action='append',
        dest='respondent_group',
        help='Keep rows from this respondent group'
    )
    parser.add_argument('--timeline', type=str, help='Keep rows from this timeline value')

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed logging output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(argv)


def run(args) -> dict:
    """Load the input, build the chart data and return the JSON document."""
    input_path = validate_file_path(args.file, must_exist=True)
    rows = load_rows(input_path)

    chart_data = build_chart_data(rows, filters=build_filters(args))
    document = chart_data.to_dict()
    document['dataRangeText'] = get_data_range_text(rows)
    return document


def main(argv=None) -> int:
    """
    Top-level entry point.

    Returns:
        int: 0 on success, 1 when the input or output could not be handled.
    """
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        document = run(args)
        text = json.dumps(document, indent=2)

        if args.output:
            output_path = validate_file_path(args.output)
            output_path = output_path.with_name(output_filename(output_path.name))
            output_path.write_text(text, encoding='utf-8')
            logger.info(f"Chart data written to {output_path}")
        else:
            print(text)

    except (ValueError, TypeError, OSError) as e:
        logger.error(f"RiskViz failed: {e}", exc_info=True)
        return 1
    except KeyboardInterrupt:
        print("\nCancelled by user.", file=sys.stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
