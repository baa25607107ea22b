#!/usr/bin/env python3
"""
CLI entry point for batch churn predictions.

Usage:
    # Run one or more YAML run configs
    python -m runs.run configs/default.yaml

    # One-off prediction for a CSV file
    python -m runs.run --predict customers.csv --model ann --output scored.csv

    # List past runs
    python -m runs.run --list

    # Model performance report
    python -m runs.run --models

    # Print the bulk prediction CSV template
    python -m runs.run --template
"""

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from scoring import DEFAULT_REGISTRY
from scoring.templates import template_csv

from .config import RunConfig
from .runner import BatchRunner


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Churn risk batch prediction pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m runs.run configs/default.yaml
  python -m runs.run --predict customers.csv --model rules_baseline
  python -m runs.run --list
  python -m runs.run --models
        """,
    )

    parser.add_argument(
        "configs",
        nargs="*",
        help="Path(s) to YAML run config file(s)",
    )
    parser.add_argument(
        "--predict",
        metavar="CSV",
        help="Score a single CSV file without a config",
    )
    parser.add_argument(
        "--model",
        default=None,
        help=f"Model id for --predict (default: {DEFAULT_REGISTRY.default.id})",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Output path for --predict (default: outputs/<run_id>.csv)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible scores",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List all past runs",
    )
    parser.add_argument(
        "--models",
        action="store_true",
        help="Show the model performance report",
    )
    parser.add_argument(
        "--template",
        action="store_true",
        help="Print the bulk prediction CSV template",
    )
    parser.add_argument(
        "--stop-on-failure",
        action="store_true",
        help="Stop batch run if any config errors",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable INFO logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.template:
        print(template_csv(), end="")
        return 0

    if args.models:
        report = DEFAULT_REGISTRY.report()
        with pd.option_context("display.width", 200, "display.max_columns", None):
            print(report.to_string())
        print(f"\nBest model (ROC-AUC): {DEFAULT_REGISTRY.best_model().name}")
        return 0

    runner = BatchRunner()

    # List runs
    if args.list:
        df = runner.list_runs()
        if df.empty:
            print("No runs found.")
        else:
            print(df.to_string(index=False))
        return 0

    if args.predict:
        config = RunConfig(
            name="adhoc",
            description=f"Ad hoc prediction for {args.predict}",
            model_id=args.model,
            seed=args.seed,
            input_path=str(Path(args.predict).resolve()),
            output_path=str(Path(args.output).resolve()) if args.output else None,
        )
        try:
            result = runner.run(config)
        except Exception as e:
            print(f"ERROR: {e}")
            return 1
        print(result.summary_text())
        print(f"\nPredictions saved to: {result.output_path}")
        return 0

    # Run configs
    if not args.configs:
        parser.print_help()
        return 1

    # Resolve config paths relative to runs/ directory
    runs_dir = Path(__file__).parent

    results = []
    for config_path in args.configs:
        path = Path(config_path)

        # Try resolving path relative to runs directory first
        if not path.is_absolute():
            runs_relative = runs_dir / path
            if runs_relative.exists():
                path = runs_relative
            elif path.exists():
                path = path.resolve()

        if not path.exists():
            print(f"Config not found: {config_path}")
            if args.stop_on_failure:
                return 1
            continue

        try:
            print(f"\n{'=' * 60}")
            print(f"Running: {path.name}")
            print("=" * 60)

            result = runner.run_from_yaml(path)
            results.append(result)

            print(result.summary_text())
            print(f"\nPredictions saved to: {result.output_path}")

        except Exception as e:
            print(f"ERROR: {e}")
            if args.stop_on_failure:
                return 1

    # Summary
    if len(results) > 1:
        print(f"\n{'=' * 60}")
        print("BATCH SUMMARY")
        print("=" * 60)
        total = sum(r.summary.total_count for r in results)
        print(f"Runs: {len(results)}, Customers scored: {total}")

        print("\nResults:")
        for r in results:
            print(f"  [{r.model_id}] {r.config.name}: "
                  f"{r.summary.high_count} high / {r.summary.total_count} total")

    return 0


if __name__ == "__main__":
    sys.exit(main())
