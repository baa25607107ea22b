"""
Batch run pipeline for churn predictions.

Usage:
    from runs import BatchRunner, RunConfig

    # Run from YAML
    runner = BatchRunner()
    result = runner.run_from_yaml("configs/default.yaml")
    print(result.summary_text())

    # Run programmatically
    config = RunConfig(
        name="adhoc",
        input_path="data/customers.csv",
        model_id="rules_baseline",
    )
    result = runner.run(config)

CLI:
    python -m runs.run configs/default.yaml
    python -m runs.run --predict customers.csv --model ann
    python -m runs.run --list
"""

from .config import RunConfig
from .runner import BatchRunner, RunResult
from .logger import RunLogger

__all__ = [
    "RunConfig",
    "BatchRunner",
    "RunResult",
    "RunLogger",
]
