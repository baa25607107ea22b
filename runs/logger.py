"""
Run logging for batch predictions.

Writes JSON logs for all runs (completed or errored).
"""

import json
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from .runner import RunResult
    from .config import RunConfig


class RunLogger:
    """Structured JSON logging for batch runs."""

    def __init__(self, logs_dir: Path):
        """
        Initialize logger.

        Args:
            logs_dir: Directory to write log files
        """
        self.logs_dir = logs_dir
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def log_run(self, result: "RunResult") -> Path:
        """
        Log a completed run to a JSON file.

        Args:
            result: RunResult from runner

        Returns:
            Path to log file
        """
        log_entry = {
            "run_id": result.run_id,
            "timestamp": result.timestamp.isoformat(),
            "duration_seconds": result.duration_seconds,
            "config": result.config.to_dict(),
            "model_id": result.model_id,
            "output_path": str(result.output_path),
            "summary": result.summary.to_dict(),
            "status": "OK",
        }

        log_path = self.logs_dir / f"{result.run_id}.json"
        with open(log_path, "w") as f:
            json.dump(log_entry, f, indent=2, default=str)

        return log_path

    def log_failure(
        self,
        run_id: str,
        config: "RunConfig",
        error: str,
    ) -> Path:
        """
        Log a failed run.

        Args:
            run_id: Unique run ID
            config: RunConfig used
            error: Error message

        Returns:
            Path to log file
        """
        log_entry = {
            "run_id": run_id,
            "timestamp": datetime.now().isoformat(),
            "config": {
                "name": config.name,
                "description": config.description,
                "input_path": config.input_path,
            },
            "status": "ERROR",
            "error": error,
        }

        log_path = self.logs_dir / f"{run_id}.json"
        with open(log_path, "w") as f:
            json.dump(log_entry, f, indent=2)

        return log_path

    def get_all_logs(self) -> list[dict]:
        """
        Load all run logs.

        Returns:
            List of log dictionaries, sorted by file name
        """
        logs = []
        for log_file in sorted(self.logs_dir.glob("run_*.json")):
            with open(log_file) as f:
                logs.append(json.load(f))
        return logs

    def get_failed_runs(self) -> list[dict]:
        """Get only errored runs."""
        return [log for log in self.get_all_logs() if log.get("status") == "ERROR"]

    def get_summary_dataframe(self) -> pd.DataFrame:
        """
        Get summary of all runs as DataFrame.

        Returns:
            DataFrame with run summaries, newest first
        """
        logs = self.get_all_logs()
        if not logs:
            return pd.DataFrame()

        summary = []
        for log in logs:
            entry = {
                "run_id": log["run_id"],
                "name": log["config"]["name"],
                "timestamp": log["timestamp"],
                "status": log["status"],
                "model_id": log.get("model_id"),
            }

            # Add batch figures if available
            if "summary" in log:
                for key in ["total_count", "high_count", "medium_count", "low_count",
                            "avg_churn_probability"]:
                    entry[key] = log["summary"].get(key)

            summary.append(entry)

        df = pd.DataFrame(summary)
        return df.sort_values("timestamp", ascending=False)
