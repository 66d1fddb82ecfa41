# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to the advisor.
#
# COMMANDS:
# ---------
# 1. List / search employees in a dataset:
#    python -m retention_advisor.cli list data.csv
#    python -m retention_advisor.cli list data.csv --search sales
#
# 2. Analyze one employee (prints the analysis JSON):
#    python -m retention_advisor.cli analyze data.csv --index 12
#
# 3. Analyze, then generate retention strategies with Gemini:
#    python -m retention_advisor.cli advise data.csv --index 12
#
# Exit codes: 0 success, 1 invalid input / load failure,
#             2 configuration or generation failure.
#
# ==============================================

import argparse
import json
import sys
from typing import List, Optional

from retention_advisor.analysis import search_employees
from retention_advisor.analyze_and_advise import RetentionAdvisor
from retention_advisor.errors import (
    ConfigurationError,
    DatasetLoadError,
    GenerationError,
    InvalidRequestError,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retention-advisor",
        description="Employee attrition analysis and retention strategies"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List or search employees")
    list_parser.add_argument("dataset", help="Path to the CSV dataset")
    list_parser.add_argument("--search", default=None, help="Label substring or exact index")

    for name, help_text in (
        ("analyze", "Print statistics and similar employees"),
        ("advise", "Analyze and generate retention strategies"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("dataset", help="Path to the CSV dataset")
        sub.add_argument("--index", type=int, required=True, help="Row index of the employee")

    return parser


def _print_listing(dataset, term: Optional[str]) -> None:
    options = search_employees(dataset, term)
    if not options:
        print("No employees match your search.")
        return
    for option in options:
        print(option.label)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        advisor = RetentionAdvisor()
        dataset = advisor.load_dataset(args.dataset)

        if args.command == "list":
            _print_listing(dataset, args.search)
            return 0

        analysis = advisor.analyze(dataset, args.index)
        print(f"✓ Analysis ready for employee #{args.index}")

        if args.command == "analyze":
            print(json.dumps(analysis.to_dict(), indent=2))
            return 0

        result = advisor.generate_strategies(analysis.employee, analysis)
        print(f"\nRetention strategies ({result.model}):\n")
        print(result.strategy)
        return 0

    except (DatasetLoadError, InvalidRequestError) as e:
        print(f"✗ {e}")
        return 1
    except GenerationError as e:
        print(f"✗ {e.message}")
        for attempt in e.attempts:
            print(f"   → {attempt.model}: {attempt.message}")
        return 2
    except ConfigurationError as e:
        print(f"✗ {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
