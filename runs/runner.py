"""
Batch runner for churn predictions.

Single entry point for scoring CSV files from run configurations.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional
import uuid

import pandas as pd

from scoring import BatchExecutor, BatchSummary, ChurnScorer, ModelRegistry, parse_csv
from scoring.config import DEFAULT_REGISTRY

from .config import RunConfig
from .logger import RunLogger

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Container for batch run results."""

    run_id: str
    config: RunConfig
    model_id: str
    summary: BatchSummary
    output_path: Path
    timestamp: datetime
    duration_seconds: float

    def summary_text(self) -> str:
        """Human-readable summary."""
        s = self.summary
        return (
            f"[{self.run_id}] {self.config.name} - {self.model_id}\n"
            f"  Customers: {s.total_count}\n"
            f"  High:      {s.high_count}\n"
            f"  Medium:    {s.medium_count}\n"
            f"  Low:       {s.low_count}\n"
            f"  Avg churn: {s.avg_churn_probability:.1%}"
        )


class BatchRunner:
    """
    Single entry point for batch runs.

    Usage:
        runner = BatchRunner()

        # From YAML config
        result = runner.run_from_yaml("configs/default.yaml")

        # From RunConfig object
        config = RunConfig(name="adhoc", input_path="/tmp/customers.csv")
        result = runner.run(config)

        # Batch of configs
        results = runner.run_batch(["configs/a.yaml", "configs/b.yaml"])
    """

    def __init__(
        self,
        base_path: Optional[Path] = None,
        logs_dir: str = "logs",
        outputs_dir: str = "outputs",
    ):
        """
        Initialize runner.

        Args:
            base_path: Base path for runs (default: this file's parent)
            logs_dir: Subdirectory for JSON run logs
            outputs_dir: Subdirectory for scored CSV files
        """
        self.base_path = Path(base_path) if base_path else Path(__file__).parent
        self.logs_dir = self.base_path / logs_dir
        self.outputs_dir = self.base_path / outputs_dir

        self.logger = RunLogger(self.logs_dir)

    def generate_run_id(self) -> str:
        """Generate unique run ID: run_YYYYMMDD_XXXX"""
        date_str = datetime.now().strftime("%Y%m%d")
        short_uuid = uuid.uuid4().hex[:4]
        return f"run_{date_str}_{short_uuid}"

    def _resolve(self, path: str) -> Path:
        return self.base_path / Path(path)

    def _build_scorer(self, config: RunConfig) -> ChurnScorer:
        registry = DEFAULT_REGISTRY
        if config.registry_path:
            registry = ModelRegistry.from_yaml(self._resolve(config.registry_path))
        return ChurnScorer(registry=registry, seed=config.seed)

    def run(self, config: RunConfig) -> RunResult:
        """
        Run a single batch prediction.

        The output CSV is only written once every row has been scored.

        Args:
            config: RunConfig to run

        Returns:
            RunResult with summary and output location
        """
        run_id = self.generate_run_id()
        start_time = datetime.now()

        try:
            input_path = self._resolve(config.input_path)
            csv_text = input_path.read_text()

            scorer = self._build_scorer(config)
            batch = BatchExecutor(scorer).run(parse_csv(csv_text), config.model_id)

            if config.output_path:
                output_path = self._resolve(config.output_path)
            else:
                output_path = self.outputs_dir / f"{run_id}.csv"
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(batch.to_csv())

            duration = (datetime.now() - start_time).total_seconds()

            result = RunResult(
                run_id=run_id,
                config=config,
                model_id=batch.results[0].model_id,
                summary=batch.summary,
                output_path=output_path,
                timestamp=start_time,
                duration_seconds=duration,
            )

            # Always log
            self.logger.log_run(result)
            logger.info("[RUN] %s scored %d customers", run_id, batch.summary.total_count)

            return result

        except Exception as e:
            # Log failure
            self.logger.log_failure(run_id, config, str(e))
            logger.exception("[RUN] %s failed", run_id)
            raise

    def run_from_yaml(self, config_path: str | Path) -> RunResult:
        """
        Load config from YAML and run.

        Args:
            config_path: Path to YAML config (relative to base_path or absolute)

        Returns:
            RunResult
        """
        path = Path(config_path)
        if not path.is_absolute():
            path = self.base_path / path
        config = RunConfig.from_yaml(path)
        return self.run(config)

    def run_batch(
        self,
        config_paths: list[str | Path],
        stop_on_failure: bool = False,
    ) -> list[RunResult]:
        """
        Run multiple configs in sequence.

        Args:
            config_paths: List of paths to YAML configs
            stop_on_failure: Whether to stop if a run errors

        Returns:
            List of RunResults for the runs that completed
        """
        results = []
        for path in config_paths:
            try:
                result = self.run_from_yaml(path)
                results.append(result)
                print(result.summary_text())
                print()
            except Exception as e:
                print(f"ERROR: {path} - {e}")
                if stop_on_failure:
                    raise
        return results

    def list_runs(self) -> pd.DataFrame:
        """
        Get summary of all past runs.

        Returns:
            DataFrame with run history
        """
        return self.logger.get_summary_dataframe()
